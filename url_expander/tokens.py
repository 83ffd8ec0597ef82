"""Token generation for expanded URLs."""

import random
import string
from typing import Optional


class TokenGenerator:
    """Generate random tokens for expanded URLs."""

    # Base62 characters (alphanumeric, case-sensitive)
    ALPHABET = string.ascii_letters + string.digits  # a-zA-Z0-9

    def __init__(self, rng: Optional[random.Random] = None):
        """Initialize token generator.

        Args:
            rng: Random source (OS entropy by default); pass a seeded ``random.Random`` for
                reproducible tokens
        """
        self.rng = rng or random.SystemRandom()

    def generate(self, length: int) -> str:
        """Generate a random token.

        Not a security token: it only has to be hard to guess casually.

        Args:
            length: Number of characters in the token

        Returns:
            Random alphanumeric token of exactly ``length`` characters

        Raises:
            ValueError: If length is not a positive integer
        """
        if isinstance(length, bool) or not isinstance(length, int) or length < 1:
            raise ValueError(f"Token length must be a positive integer, got {length!r}")
        return ''.join(self.rng.choices(self.ALPHABET, k=length))

    @staticmethod
    def is_valid_format(token: str) -> bool:
        """Check if token has valid format (alphanumeric only).

        Args:
            token: Token to validate

        Returns:
            True if valid format
        """
        if not token or not isinstance(token, str):
            return False
        return all(c in TokenGenerator.ALPHABET for c in token)
