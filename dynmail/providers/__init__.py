"""
Dynmail Providers - the pluggable transports behind ``Dynmail.send``.

Built-in providers:
- ``ResendProvider``  - Resend HTTP API
- ``PlunkProvider``   - Plunk HTTP API (hosted or self-hosted)
- ``SESProvider``     - Amazon SES SendRawEmail
- ``ConsoleProvider`` - prints instead of sending (development)

Custom transports wrap a coroutine function with ``Provider(send=...)``.
"""

from .base import USER_AGENT, HTTPProvider, Provider, ProviderOptions, SendFunction
from .console import ConsoleProvider
from .plunk import PlunkError, PlunkErrorKind, PlunkProvider, classify_plunk_error
from .resend import ResendError, ResendErrorKind, ResendProvider, classify_resend_error
from .ses import SESError, SESErrorKind, SESProvider, classify_ses_error, parse_ses_error

__all__ = [
    "Provider",
    "ProviderOptions",
    "HTTPProvider",
    "SendFunction",
    "USER_AGENT",
    "ConsoleProvider",
    "ResendProvider",
    "ResendError",
    "ResendErrorKind",
    "classify_resend_error",
    "PlunkProvider",
    "PlunkError",
    "PlunkErrorKind",
    "classify_plunk_error",
    "SESProvider",
    "SESError",
    "SESErrorKind",
    "classify_ses_error",
    "parse_ses_error",
]
