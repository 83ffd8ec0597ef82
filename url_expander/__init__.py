"""Core business logic for URL expander."""

from .tokens import TokenGenerator
from .service import ExpandService
from .resolver import RedirectResolver
from .errors import (
    ExpanderError,
    InvalidInput,
    GenerationExhausted,
    NotFound,
    StoreUnavailable,
    ExpandedUrlCollision,
)

__version__ = "1.0.0"

__all__ = [
    "TokenGenerator",
    "ExpandService",
    "RedirectResolver",
    "ExpanderError",
    "InvalidInput",
    "GenerationExhausted",
    "NotFound",
    "StoreUnavailable",
    "ExpandedUrlCollision",
]
