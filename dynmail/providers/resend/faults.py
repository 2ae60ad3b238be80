"""
Resend error taxonomy.

Resend answers failed requests with ``{"name"|"code": ..., "message": ...}``;
classification is keyed purely on the machine-readable code.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from ...faults import (
    NETWORK_ERROR_MESSAGE,
    NETWORK_ERROR_SUGGESTION,
    ErrorSpec,
    TransportError,
)


class ResendErrorKind(str, Enum):
    INVALID_IDEMPOTENCY_KEY = "invalid_idempotency_key"
    VALIDATION_ERROR = "validation_error"
    MISSING_API_KEY = "missing_api_key"
    RESTRICTED_API_KEY = "restricted_api_key"
    INVALID_API_KEY = "invalid_api_key"
    NOT_FOUND = "not_found"
    METHOD_NOT_ALLOWED = "method_not_allowed"
    INVALID_IDEMPOTENT_REQUEST = "invalid_idempotent_request"
    CONCURRENT_IDEMPOTENT_REQUESTS = "concurrent_idempotent_requests"
    INVALID_ATTACHMENT = "invalid_attachment"
    INVALID_FROM_ADDRESS = "invalid_from_address"
    INVALID_ACCESS = "invalid_access"
    INVALID_PARAMETER = "invalid_parameter"
    INVALID_REGION = "invalid_region"
    MISSING_REQUIRED_FIELD = "missing_required_field"
    DAILY_QUOTA_EXCEEDED = "daily_quota_exceeded"
    RATE_LIMIT_EXCEEDED = "rate_limit_exceeded"
    SECURITY_ERROR = "security_error"
    APPLICATION_ERROR = "application_error"
    INTERNAL_SERVER_ERROR = "internal_server_error"
    NETWORK_ERROR = "network_error"
    UNKNOWN = "unknown"


_RETRY_LATER = (
    "Try the request again later. If the error does not resolve, "
    "check our status page for service updates."
)

_CATALOG: dict[ResendErrorKind, ErrorSpec] = {
    ResendErrorKind.INVALID_IDEMPOTENCY_KEY: ErrorSpec(
        400,
        "The key must be between 1-256 chars.",
        "Retry with a valid idempotency key.",
    ),
    ResendErrorKind.VALIDATION_ERROR: ErrorSpec(
        400,
        "We found an error with one or more fields in the request.",
        "The message will contain more details about what field and error were found.",
        passthrough=True,
    ),
    ResendErrorKind.MISSING_API_KEY: ErrorSpec(
        401,
        "Missing API key in the authorization header.",
        "Include the following header in the request: `Authorization: Bearer YOUR_API_KEY`.",
    ),
    ResendErrorKind.RESTRICTED_API_KEY: ErrorSpec(
        401,
        "This API key is restricted to only send emails.",
        "Make sure the API key has `Full access` to perform actions other than sending emails.",
    ),
    ResendErrorKind.INVALID_API_KEY: ErrorSpec(
        403,
        "API key is invalid.",
        "Make sure the API key is correct or generate a new API key in the dashboard.",
    ),
    ResendErrorKind.NOT_FOUND: ErrorSpec(
        404,
        "The requested endpoint does not exist.",
        "Change your request URL to match a valid API endpoint.",
    ),
    ResendErrorKind.METHOD_NOT_ALLOWED: ErrorSpec(
        405,
        "Method is not allowed for the requested path.",
        "Change your API endpoint to use a valid method.",
    ),
    ResendErrorKind.INVALID_IDEMPOTENT_REQUEST: ErrorSpec(
        409,
        "Same idempotency key used with a different request payload.",
        "Change your idempotency key or payload.",
    ),
    ResendErrorKind.CONCURRENT_IDEMPOTENT_REQUESTS: ErrorSpec(
        409,
        "Same idempotency key used while original request is still in progress.",
        "Try the request again later.",
        retryable=True,
    ),
    ResendErrorKind.INVALID_ATTACHMENT: ErrorSpec(
        422,
        "Attachment must have either a `content` or `path`.",
        "Attachments must either have a `content` (strings, bytes, or stream contents) "
        "or `path` to a remote resource (better for larger attachments).",
    ),
    ResendErrorKind.INVALID_FROM_ADDRESS: ErrorSpec(
        422,
        "Invalid `from` field.",
        "Make sure the `from` field is valid. The email address needs to follow the "
        "`email@example.com` or `Name <email@example.com>` format.",
    ),
    ResendErrorKind.INVALID_ACCESS: ErrorSpec(
        422,
        'Access must be "full_access" | "sending_access".',
        "Make sure the API key has necessary permissions.",
    ),
    ResendErrorKind.INVALID_PARAMETER: ErrorSpec(
        422,
        "The parameter must be a valid UUID.",
        "Check the value and make sure it's valid.",
    ),
    ResendErrorKind.INVALID_REGION: ErrorSpec(
        422,
        'Region must be "us-east-1" | "eu-west-1" | "sa-east-1".',
        "Make sure the correct region is selected.",
    ),
    ResendErrorKind.MISSING_REQUIRED_FIELD: ErrorSpec(
        422,
        "The request body is missing one or more required fields.",
        "Check the error message to see the list of missing fields.",
    ),
    ResendErrorKind.DAILY_QUOTA_EXCEEDED: ErrorSpec(
        429,
        "You have reached your daily email sending quota.",
        "Upgrade your plan to remove the daily quota limit or wait until 24 hours "
        "have passed to continue sending.",
        retryable=True,
    ),
    ResendErrorKind.RATE_LIMIT_EXCEEDED: ErrorSpec(
        429,
        "Too many requests. Please limit the number of requests per second. "
        "Or contact support to increase rate limit.",
        "You should read the response headers and reduce the rate at which you request "
        "the API. This can be done by introducing a queue mechanism or reducing the "
        "number of concurrent requests per second. If you have specific requirements, "
        "contact support to request a rate increase.",
        retryable=True,
    ),
    ResendErrorKind.SECURITY_ERROR: ErrorSpec(
        451,
        "We may have found a security issue with the request.",
        "The message will contain more details. Contact support for more information.",
        passthrough=True,
    ),
    ResendErrorKind.APPLICATION_ERROR: ErrorSpec(
        500, "An unexpected error occurred.", _RETRY_LATER, retryable=True,
    ),
    ResendErrorKind.INTERNAL_SERVER_ERROR: ErrorSpec(
        500, "An unexpected error occurred.", _RETRY_LATER, retryable=True,
    ),
    ResendErrorKind.NETWORK_ERROR: ErrorSpec(
        500, NETWORK_ERROR_MESSAGE, NETWORK_ERROR_SUGGESTION, retryable=True,
    ),
}


class ResendError(TransportError):
    """A classified Resend failure."""

    provider = "resend"
    unknown_suggestion = "Please check the Resend documentation for more information."
    _catalog = _CATALOG
    _unknown_kind = ResendErrorKind.UNKNOWN


def classify_resend_error(
    code: str,
    message: Optional[str] = None,
    status_code: Optional[int] = None,
) -> ResendError:
    """
    Map a Resend error code to a ``ResendError``.

    Unknown codes produce the ``UNKNOWN`` kind carrying the raw code,
    message and status (500 when no status is known).
    """
    try:
        kind = ResendErrorKind(code)
    except ValueError:
        kind = ResendErrorKind.UNKNOWN

    if kind is ResendErrorKind.UNKNOWN:
        return ResendError.unknown(code, message, status_code)
    return ResendError.from_kind(kind, message)
