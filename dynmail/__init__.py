"""
Dynmail - Provider-agnostic async email sending for Python

Complete integration of:
- Registry: id-based routing of each send to a provider and a sender
- Result: Success / Failure envelopes with safe and throwing dispatch modes
- Providers: Resend, Plunk, Amazon SES and a development console provider
- Faults: Typed, value-comparable error taxonomies per transport
- Config: Environment / .env backed credentials, resolved lazily
"""

__version__ = "1.0.0"

# ============================================================================
# Registry
# ============================================================================

from .registry import Dynmail, dynmail, resolve_provider, resolve_sender

# ============================================================================
# Value Objects
# ============================================================================

from .sender import DEFAULT_ID, Sender
from .message import Attachment, SendMailParams
from .result import AsyncResult, Failure, Result, Success, failure, success

# ============================================================================
# Configuration
# ============================================================================

from .config import EnvConfig
from .credentials import LazyValue, ValueSource

# ============================================================================
# Providers
# ============================================================================

from .providers import (
    Provider,
    ProviderOptions,
    HTTPProvider,
    ConsoleProvider,
    ResendProvider,
    ResendError,
    ResendErrorKind,
    classify_resend_error,
    PlunkProvider,
    PlunkError,
    PlunkErrorKind,
    classify_plunk_error,
    SESProvider,
    SESError,
    SESErrorKind,
    classify_ses_error,
    parse_ses_error,
)

# ============================================================================
# Faults
# ============================================================================

from .faults import (
    Fault,
    FaultDomain,
    Severity,
    DynmailFault,
    RoutingError,
    ProviderNotFoundError,
    SenderNotFoundError,
    AttachmentsNotSupportedError,
    ConfigurationError,
    RegistryConfigError,
    EmptyRegistryError,
    DuplicateIdError,
    MissingApiKeyConfigError,
    MissingCredentialsConfigError,
    TransportError,
)

__all__ = [
    "__version__",
    # Registry
    "Dynmail",
    "dynmail",
    "resolve_provider",
    "resolve_sender",
    # Value objects
    "DEFAULT_ID",
    "Sender",
    "Attachment",
    "SendMailParams",
    "Result",
    "AsyncResult",
    "Success",
    "Failure",
    "success",
    "failure",
    # Configuration
    "EnvConfig",
    "LazyValue",
    "ValueSource",
    # Providers
    "Provider",
    "ProviderOptions",
    "HTTPProvider",
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
    # Faults
    "Fault",
    "FaultDomain",
    "Severity",
    "DynmailFault",
    "RoutingError",
    "ProviderNotFoundError",
    "SenderNotFoundError",
    "AttachmentsNotSupportedError",
    "ConfigurationError",
    "RegistryConfigError",
    "EmptyRegistryError",
    "DuplicateIdError",
    "MissingApiKeyConfigError",
    "MissingCredentialsConfigError",
    "TransportError",
]
