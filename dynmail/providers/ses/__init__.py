"""Amazon SES transport."""

from .faults import SESError, SESErrorKind, classify_ses_error, parse_ses_error
from .provider import SESProvider

__all__ = [
    "SESProvider",
    "SESError",
    "SESErrorKind",
    "classify_ses_error",
    "parse_ses_error",
]
