"""
Faults System (dynmail/faults/)

Tests Fault, FaultDomain, Severity, the routing/config faults and the
shared TransportError behaviour.
"""

import pytest

from dynmail.faults import (
    AttachmentsNotSupportedError,
    ConfigurationError,
    DuplicateIdError,
    DynmailFault,
    EmptyRegistryError,
    MissingApiKeyConfigError,
    MissingCredentialsConfigError,
    ProviderNotFoundError,
    RegistryConfigError,
    RoutingError,
    SenderNotFoundError,
)
from dynmail.faults.core import DOMAIN_DEFAULTS, Fault, FaultDomain, Severity
from dynmail.providers.plunk import PlunkErrorKind, classify_plunk_error
from dynmail.providers.resend import ResendError, ResendErrorKind, classify_resend_error


# ============================================================================
# Severity & FaultDomain
# ============================================================================

class TestSeverity:

    def test_values(self):
        assert Severity.INFO == "info"
        assert Severity.WARN == "warn"
        assert Severity.ERROR == "error"
        assert Severity.FATAL == "fatal"


class TestFaultDomain:

    def test_standard_domains(self):
        assert FaultDomain.CONFIG.value == "config"
        assert FaultDomain.ROUTING.value == "routing"
        assert FaultDomain.TRANSPORT.value == "transport"
        assert FaultDomain.NETWORK.value == "network"

    def test_domain_lookup(self):
        assert FaultDomain("network") is FaultDomain.NETWORK
        assert FaultDomain.CONFIG == "config"
        with pytest.raises(ValueError):
            FaultDomain("templates")

    def test_every_domain_has_defaults(self):
        assert set(DOMAIN_DEFAULTS) == set(FaultDomain)

    def test_network_defaults_retryable(self):
        assert DOMAIN_DEFAULTS[FaultDomain.NETWORK]["retryable"] is True
        assert DOMAIN_DEFAULTS[FaultDomain.CONFIG]["severity"] is Severity.FATAL


# ============================================================================
# Fault
# ============================================================================

class TestFault:

    def test_basic(self):
        f = Fault(code="boom", message="Boom", domain=FaultDomain.ROUTING)
        assert f.code == "boom"
        assert str(f) == "Boom"
        assert f.severity is Severity.ERROR
        assert f.retryable is False
        assert f.metadata == {}

    def test_missing_fields_rejected(self):
        with pytest.raises(TypeError):
            Fault(code="x", message="y")

    def test_to_dict(self):
        f = Fault(
            code="boom", message="Boom", domain=FaultDomain.NETWORK,
            metadata={"provider": "resend"},
        )
        d = f.to_dict()
        assert d == {
            "code": "boom",
            "message": "Boom",
            "domain": "network",
            "severity": "warn",
            "retryable": True,
            "metadata": {"provider": "resend"},
        }

    def test_repr(self):
        f = Fault(code="boom", message="Boom", domain=FaultDomain.ROUTING)
        assert "boom" in repr(f)
        assert "routing" in repr(f)


# ============================================================================
# Routing faults
# ============================================================================

class TestRoutingFaults:

    def test_provider_not_found(self):
        e = ProviderNotFoundError("marketing")
        assert isinstance(e, RoutingError)
        assert isinstance(e, DynmailFault)
        assert str(e) == "Provider 'marketing' not found."
        assert e.code == "provider_not_found"
        assert e.provider_id == "marketing"
        assert e.domain == FaultDomain.ROUTING

    def test_sender_not_found(self):
        e = SenderNotFoundError("support")
        assert str(e) == "Sender 'support' not found."
        assert e.code == "sender_not_found"
        assert e.metadata == {"sender_id": "support"}

    def test_attachments_not_supported(self):
        e = AttachmentsNotSupportedError("internal")
        assert e.code == "attachments_not_supported"
        assert "internal" in str(e)


# ============================================================================
# Configuration faults
# ============================================================================

class TestConfigurationFaults:

    def test_empty_registry(self):
        e = EmptyRegistryError("provider")
        assert isinstance(e, RegistryConfigError)
        assert isinstance(e, ConfigurationError)
        assert str(e) == "You must provide at least one provider."
        assert e.code == "empty_providers"
        assert e.severity is Severity.FATAL

    def test_duplicate_id(self):
        e = DuplicateIdError("sender", "support")
        assert str(e) == "Duplicate sender ID found: support"
        assert e.code == "duplicate_sender_id"
        assert e.duplicate_id == "support"

    def test_missing_api_key(self):
        e = MissingApiKeyConfigError("resend")
        assert e.code == "missing_api_key_config"
        assert e.status_code == 500
        assert "RESEND_API_KEY" in str(e)
        assert e.retryable is False

    def test_missing_credentials(self):
        e = MissingCredentialsConfigError(["region"])
        assert e.code == "missing_credentials_config"
        assert e.missing == ["region"]
        assert "AWS_REGION" in str(e)


# ============================================================================
# TransportError
# ============================================================================

class TestTransportError:

    def test_classification_is_value_equal(self):
        a = classify_resend_error("rate_limit_exceeded")
        b = classify_resend_error("rate_limit_exceeded")
        assert a is not b
        assert a == b
        assert hash(a) == hash(b)

    def test_different_kinds_not_equal(self):
        assert classify_resend_error("not_found") != classify_resend_error("invalid_api_key")

    def test_different_transports_not_equal(self):
        resend = classify_resend_error("network_error")
        plunk = classify_plunk_error(429, "Rate limit exceeded")
        assert resend != plunk

    def test_network_error_domain(self):
        e = classify_resend_error("network_error")
        assert e.domain == FaultDomain.NETWORK
        assert e.retryable is True

    def test_server_error_domain(self):
        e = classify_resend_error("validation_error", "bad to")
        assert e.domain == FaultDomain.TRANSPORT
        assert e.retryable is False
        assert e.severity is Severity.ERROR

    def test_rate_limit_is_retryable(self):
        e = classify_plunk_error(429, "Rate limit exceeded")
        assert e.kind is PlunkErrorKind.RATE_LIMIT_EXCEEDED
        assert e.retryable is True
        assert e.severity is Severity.WARN

    def test_to_dict(self):
        d = classify_resend_error("invalid_api_key").to_dict()
        assert d["kind"] == "invalid_api_key"
        assert d["status_code"] == 403
        assert d["suggestion"].startswith("Make sure the API key")
        assert d["metadata"]["provider"] == "resend"

    def test_raisable(self):
        with pytest.raises(ResendError) as exc:
            raise classify_resend_error("missing_api_key")
        assert exc.value.kind is ResendErrorKind.MISSING_API_KEY
        assert exc.value.status_code == 401

    def test_repr(self):
        r = repr(classify_resend_error("not_found"))
        assert "ResendError" in r
        assert "NOT_FOUND" in r
        assert "404" in r
