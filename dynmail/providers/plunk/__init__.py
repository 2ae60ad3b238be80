"""Plunk transport."""

from .faults import MAX_ATTACHMENTS, PlunkError, PlunkErrorKind, classify_plunk_error
from .provider import PLUNK_BASE_URL, PlunkProvider

__all__ = [
    "PlunkProvider",
    "PlunkError",
    "PlunkErrorKind",
    "classify_plunk_error",
    "MAX_ATTACHMENTS",
    "PLUNK_BASE_URL",
]
