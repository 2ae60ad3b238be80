"""
Dynmail Faults - Domain-specific fault types.

Provides concrete fault classes for each domain:
- ROUTING faults (raised by the dispatch engine, never by a transport)
- CONFIG faults (registry validation, missing credentials)
- TRANSPORT / NETWORK faults (base class for per-transport taxonomies)
"""

from __future__ import annotations

from enum import Enum
from typing import Any, ClassVar, Mapping, NamedTuple, Optional

from .core import Fault, FaultDomain, Severity


class DynmailFault(Fault):
    """Base class for every fault raised or returned by dynmail."""


# ============================================================================
# ROUTING Faults
# ============================================================================

class RoutingError(DynmailFault):
    """Base class for provider/sender resolution faults."""

    def __init__(self, code: str, message: str, *, metadata: Optional[dict[str, Any]] = None):
        super().__init__(
            code=code,
            message=message,
            domain=FaultDomain.ROUTING,
            metadata=metadata,
        )


class ProviderNotFoundError(RoutingError):
    """No provider could be resolved for the requested id."""

    def __init__(self, provider_id: str):
        self.provider_id = provider_id
        super().__init__(
            "provider_not_found",
            f"Provider '{provider_id}' not found.",
            metadata={"provider_id": provider_id},
        )


class SenderNotFoundError(RoutingError):
    """No sender could be resolved for the requested id."""

    def __init__(self, sender_id: str):
        self.sender_id = sender_id
        super().__init__(
            "sender_not_found",
            f"Sender '{sender_id}' not found.",
            metadata={"sender_id": sender_id},
        )


class AttachmentsNotSupportedError(RoutingError):
    """Attachments were passed to a provider that cannot carry them."""

    def __init__(self, provider_id: str):
        self.provider_id = provider_id
        super().__init__(
            "attachments_not_supported",
            f"Provider '{provider_id}' does not support attachments.",
            metadata={"provider_id": provider_id},
        )


# ============================================================================
# CONFIG Faults
# ============================================================================

class ConfigurationError(DynmailFault):
    """
    Base class for configuration faults.

    Configuration faults are raised synchronously while a registry or a
    provider is being constructed. They are never part of a send result.
    """

    def __init__(
        self,
        code: str,
        message: str,
        *,
        suggestion: str = "",
        status_code: int = 500,
        metadata: Optional[dict[str, Any]] = None,
    ):
        self.status_code = status_code
        self.suggestion = suggestion
        super().__init__(
            code=code,
            message=message,
            domain=FaultDomain.CONFIG,
            severity=Severity.FATAL,
            retryable=False,
            metadata=metadata,
        )


class RegistryConfigError(ConfigurationError):
    """A ``Dynmail`` registry was constructed with an invalid provider/sender list."""


class EmptyRegistryError(RegistryConfigError):
    def __init__(self, entry_kind: str):
        self.entry_kind = entry_kind
        super().__init__(
            f"empty_{entry_kind}s",
            f"You must provide at least one {entry_kind}.",
            suggestion=f"Register at least one {entry_kind} when creating the client.",
            metadata={"entry_kind": entry_kind},
        )


class DuplicateIdError(RegistryConfigError):
    def __init__(self, entry_kind: str, duplicate_id: str):
        self.entry_kind = entry_kind
        self.duplicate_id = duplicate_id
        super().__init__(
            f"duplicate_{entry_kind}_id",
            f"Duplicate {entry_kind} ID found: {duplicate_id}",
            suggestion=f"Give every {entry_kind} a unique `id`.",
            metadata={"entry_kind": entry_kind, "id": duplicate_id},
        )


class MissingApiKeyConfigError(ConfigurationError):
    """No API key resolvable from the ``api_key`` parameter or the environment."""

    def __init__(self, provider: str):
        self.provider = provider
        env_var = f"{provider.upper()}_API_KEY"
        super().__init__(
            "missing_api_key_config",
            (
                f"Missing API key for {provider} provider. Please provide an API key "
                f"via the `api_key` parameter or set the `{env_var}` environment variable."
            ),
            suggestion=(
                f"Provide an API key via the `api_key` parameter or set the "
                f"`{env_var}` environment variable."
            ),
            metadata={"provider": provider, "env_var": env_var},
        )


class MissingCredentialsConfigError(ConfigurationError):
    """AWS credentials or region could not be resolved for the SES provider."""

    def __init__(self, missing: Optional[list[str]] = None):
        self.missing = list(missing or [])
        super().__init__(
            "missing_credentials_config",
            (
                "Missing AWS credentials. Please provide access_key_id, secret_access_key, "
                "and region via the configuration options or set the AWS_ACCESS_KEY_ID, "
                "AWS_SECRET_ACCESS_KEY, and AWS_REGION environment variables."
            ),
            suggestion=(
                "Provide AWS credentials via the configuration options or set the "
                "appropriate environment variables."
            ),
            metadata={"provider": "ses", "missing": self.missing},
        )


# ============================================================================
# TRANSPORT Faults
# ============================================================================

class ErrorSpec(NamedTuple):
    """Catalog entry describing one transport error kind."""

    status_code: int
    message: str
    suggestion: str
    passthrough: bool = False  # remote message replaces the default one
    retryable: bool = False


NETWORK_ERROR_MESSAGE = (
    "An error occurred while sending the email. "
    "Please check your network connection and try again."
)
NETWORK_ERROR_SUGGESTION = "Check your network connection and try again."


class TransportError(DynmailFault):
    """
    Base class for classified transport failures.

    Each transport subclasses this once and pairs it with a closed
    ``Enum`` of kinds plus a catalog mapping every kind to an
    ``ErrorSpec``. Instances are plain values: two errors built from the
    same raw signal compare equal.

    Attributes:
        kind: Member of the transport's kind enum
        status_code: HTTP-equivalent status class
        code: Wire-level error code (or the raw code for unknown errors)
        suggestion: Remediation hint
    """

    provider: ClassVar[str] = "none"
    unknown_suggestion: ClassVar[str] = "Please check the provider documentation for more information."
    _catalog: ClassVar[Mapping[Enum, ErrorSpec]] = {}
    _unknown_kind: ClassVar[Optional[Enum]] = None

    def __init__(
        self,
        kind: Enum,
        message: str,
        *,
        status_code: int,
        code: str,
        suggestion: str,
        retryable: bool = False,
    ):
        self.kind = kind
        self.status_code = status_code
        self.suggestion = suggestion
        is_network = code == "network_error"
        super().__init__(
            code=code,
            message=message,
            domain=FaultDomain.NETWORK if is_network else FaultDomain.TRANSPORT,
            severity=Severity.WARN if retryable else Severity.ERROR,
            retryable=retryable,
            metadata={"provider": self.provider, "status_code": status_code},
        )

    @classmethod
    def from_kind(cls, kind: Enum, message: Optional[str] = None) -> "TransportError":
        """Build the catalogued error for ``kind``."""
        spec = cls._catalog[kind]
        return cls(
            kind,
            (message or spec.message) if spec.passthrough else spec.message,
            status_code=spec.status_code,
            code=kind.value,
            suggestion=spec.suggestion,
            retryable=spec.retryable,
        )

    @classmethod
    def unknown(
        cls,
        code: str,
        message: Optional[str] = None,
        status_code: Optional[int] = None,
    ) -> "TransportError":
        """Catch-all variant preserving the raw code/message/status."""
        status = status_code or 500
        return cls(
            cls._unknown_kind,
            message or "Unknown error occurred",
            status_code=status,
            code=code,
            suggestion=cls.unknown_suggestion,
            retryable=status == 429 or status >= 500,
        )

    def _identity(self) -> tuple:
        return (self.kind, self.code, self.status_code, self.message, self.suggestion)

    def __eq__(self, other: object) -> bool:
        if type(self) is not type(other):
            return NotImplemented
        return self._identity() == other._identity()

    def __hash__(self) -> int:
        return hash((type(self), self._identity()))

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(kind={self.kind.name}, code={self.code!r}, "
            f"status_code={self.status_code})"
        )

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["kind"] = self.kind.value
        data["status_code"] = self.status_code
        data["suggestion"] = self.suggestion
        return data
