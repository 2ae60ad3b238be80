"""
Dynmail Faults - typed fault signals for the mail facade.

Every failure the library produces is a ``Fault``: a value with a stable
code, a message, a domain and retry semantics. Whether a fault is raised or
returned inside a ``Failure`` result is decided by the ``safe`` flag of the
``Dynmail`` instance that dispatched the send.

Core exports:
- Fault, FaultDomain, Severity: base types
- DynmailFault: base of everything dynmail raises
- Routing faults: ProviderNotFoundError, SenderNotFoundError,
  AttachmentsNotSupportedError
- Config faults: RegistryConfigError, EmptyRegistryError, DuplicateIdError,
  MissingApiKeyConfigError, MissingCredentialsConfigError
- TransportError: base for the per-transport taxonomies
"""

from .core import Fault, FaultDomain, Severity

from .domains import (
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
    ErrorSpec,
    TransportError,
    NETWORK_ERROR_MESSAGE,
    NETWORK_ERROR_SUGGESTION,
)

__all__ = [
    # Core types
    "Fault",
    "FaultDomain",
    "Severity",

    # Routing
    "DynmailFault",
    "RoutingError",
    "ProviderNotFoundError",
    "SenderNotFoundError",
    "AttachmentsNotSupportedError",

    # Configuration
    "ConfigurationError",
    "RegistryConfigError",
    "EmptyRegistryError",
    "DuplicateIdError",
    "MissingApiKeyConfigError",
    "MissingCredentialsConfigError",

    # Transport
    "ErrorSpec",
    "TransportError",
    "NETWORK_ERROR_MESSAGE",
    "NETWORK_ERROR_SUGGESTION",
]
