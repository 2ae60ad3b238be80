"""Resend transport."""

from .faults import ResendError, ResendErrorKind, classify_resend_error
from .provider import RESEND_API_URL, ResendProvider

__all__ = [
    "ResendProvider",
    "ResendError",
    "ResendErrorKind",
    "classify_resend_error",
    "RESEND_API_URL",
]
