"""Error taxonomy for URL expander."""


class ExpanderError(Exception):
    """Base class for all URL expander errors."""


class InvalidInput(ExpanderError, ValueError):
    """Malformed original URL or token length out of range."""


class GenerationExhausted(ExpanderError):
    """Every generation attempt collided with an expanded URL already in use."""

    def __init__(self, attempts: int):
        super().__init__(
            f"Unable to generate a unique expanded URL after {attempts} attempts"
        )
        self.attempts = attempts


class NotFound(ExpanderError, LookupError):
    """No link matches the requested token."""

    def __init__(self, token: str):
        super().__init__(f"Expanded URL '{token}' not found")
        self.token = token


class StoreUnavailable(ExpanderError):
    """The link store cannot be reached or written."""


class ExpandedUrlCollision(ExpanderError):
    """The expanded URL is already owned by a different link."""

    def __init__(self, expanded_url: str):
        super().__init__(f"Expanded URL already in use: {expanded_url}")
        self.expanded_url = expanded_url
