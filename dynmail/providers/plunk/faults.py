"""
Plunk error taxonomy.

Plunk only returns an HTTP status and a free-text ``message``, so
classification dispatches on the status first and then, for 401/404/422,
on substrings of the message. Substring checks are case-insensitive and
ordered: the first match wins.
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

MAX_ATTACHMENTS = 5


class PlunkErrorKind(str, Enum):
    VALIDATION_ERROR = "validation_error"
    MISSING_AUTHORIZATION_HEADER = "missing_authorization_header"
    MALFORMED_AUTHORIZATION_HEADER = "malformed_authorization_header"
    INVALID_API_KEY_FORMAT = "invalid_api_key_format"
    INVALID_SECRET_KEY = "invalid_secret_key"
    INVALID_PUBLIC_KEY = "invalid_public_key"
    INCORRECT_BEARER_TOKEN = "incorrect_bearer_token"
    DOMAIN_NOT_VERIFIED = "domain_not_verified"
    INVALID_FROM_DOMAIN = "invalid_from_domain"
    UNAUTHORIZED = "unauthorized"
    FORBIDDEN = "forbidden"
    PROJECT_NOT_FOUND = "project_not_found"
    NOT_FOUND = "not_found"
    UNPROCESSABLE_ENTITY = "unprocessable_entity"
    TOO_MANY_ATTACHMENTS = "too_many_attachments"
    RATE_LIMIT_EXCEEDED = "rate_limit_exceeded"
    INTERNAL_SERVER_ERROR = "internal_server_error"
    NETWORK_ERROR = "network_error"
    UNKNOWN = "unknown"


_CATALOG: dict[PlunkErrorKind, ErrorSpec] = {
    PlunkErrorKind.VALIDATION_ERROR: ErrorSpec(
        400,
        "The request data is invalid.",
        "Please check your request data and ensure all required fields are correctly formatted.",
        passthrough=True,
    ),
    PlunkErrorKind.MISSING_AUTHORIZATION_HEADER: ErrorSpec(
        401,
        "No authorization header passed",
        'Include the Authorization header: "Authorization: Bearer sk_your_secret_key"',
    ),
    PlunkErrorKind.MALFORMED_AUTHORIZATION_HEADER: ErrorSpec(
        401,
        "Malformed authorization header",
        'Ensure your authorization header follows the format: "Bearer sk_your_secret_key"',
        passthrough=True,
    ),
    PlunkErrorKind.INVALID_API_KEY_FORMAT: ErrorSpec(
        401,
        "API key could not be parsed",
        'API keys must start with "sk_" for secret keys or "pk_" for public keys',
        passthrough=True,
    ),
    PlunkErrorKind.INVALID_SECRET_KEY: ErrorSpec(
        401,
        "Invalid secret key",
        'Secret keys must start with "sk_" and be passed as Bearer sk_your_secret_key',
        passthrough=True,
    ),
    PlunkErrorKind.INVALID_PUBLIC_KEY: ErrorSpec(
        401,
        "Invalid public key",
        'Public keys must start with "pk_" and be passed as Bearer pk_your_public_key',
        passthrough=True,
    ),
    PlunkErrorKind.INCORRECT_BEARER_TOKEN: ErrorSpec(
        401,
        "Incorrect Bearer token specified",
        "Verify your API key is correct and has not been regenerated",
    ),
    PlunkErrorKind.DOMAIN_NOT_VERIFIED: ErrorSpec(
        401,
        "Verify your domain before you start sending",
        "Complete domain verification in your Plunk dashboard before sending emails",
    ),
    PlunkErrorKind.INVALID_FROM_DOMAIN: ErrorSpec(
        401,
        "Custom from address must be from a verified domain",
        "The from address must use the same domain as verified in your project settings",
    ),
    PlunkErrorKind.UNAUTHORIZED: ErrorSpec(
        401,
        "Unauthorized",
        "Check your authentication credentials and permissions",
        passthrough=True,
    ),
    PlunkErrorKind.FORBIDDEN: ErrorSpec(
        403,
        "Forbidden",
        "You do not have permission to perform this action",
        passthrough=True,
    ),
    PlunkErrorKind.PROJECT_NOT_FOUND: ErrorSpec(
        404,
        "That project was not found",
        "Ensure the project exists and you have access to it",
    ),
    PlunkErrorKind.NOT_FOUND: ErrorSpec(
        404,
        "Not found",
        "The requested resource could not be found",
        passthrough=True,
    ),
    PlunkErrorKind.UNPROCESSABLE_ENTITY: ErrorSpec(
        422,
        "Unprocessable entity",
        "Review the request data format and field requirements",
        passthrough=True,
    ),
    PlunkErrorKind.TOO_MANY_ATTACHMENTS: ErrorSpec(
        422,
        f"Too many attachments. Maximum of {MAX_ATTACHMENTS} attachments allowed.",
        f"Reduce the number of attachments to {MAX_ATTACHMENTS} or fewer",
    ),
    PlunkErrorKind.RATE_LIMIT_EXCEEDED: ErrorSpec(
        429,
        "Rate limit exceeded",
        "Reduce your request frequency or contact support to increase your rate limit",
        retryable=True,
    ),
    PlunkErrorKind.INTERNAL_SERVER_ERROR: ErrorSpec(
        500,
        "An unexpected error occurred",
        "Try the request again later. If the error persists, contact support",
        retryable=True,
    ),
    PlunkErrorKind.NETWORK_ERROR: ErrorSpec(
        500, NETWORK_ERROR_MESSAGE, NETWORK_ERROR_SUGGESTION, retryable=True,
    ),
}

# 401 disambiguation, in precedence order
_UNAUTHORIZED_RULES: tuple[tuple[str, PlunkErrorKind], ...] = (
    ("no authorization header", PlunkErrorKind.MISSING_AUTHORIZATION_HEADER),
    ("incorrect bearer token", PlunkErrorKind.INCORRECT_BEARER_TOKEN),
    ("bearer", PlunkErrorKind.MALFORMED_AUTHORIZATION_HEADER),
    ("could not be parsed", PlunkErrorKind.INVALID_API_KEY_FORMAT),
    ("secret key", PlunkErrorKind.INVALID_SECRET_KEY),
    ("public key", PlunkErrorKind.INVALID_PUBLIC_KEY),
    ("verify your domain", PlunkErrorKind.DOMAIN_NOT_VERIFIED),
    ("custom from address", PlunkErrorKind.INVALID_FROM_DOMAIN),
)


class PlunkError(TransportError):
    """A classified Plunk failure."""

    provider = "plunk"
    unknown_suggestion = "Please check the Plunk documentation for more information."
    _catalog = _CATALOG
    _unknown_kind = PlunkErrorKind.UNKNOWN


def _match(message: str, rules: tuple[tuple[str, PlunkErrorKind], ...]) -> Optional[PlunkErrorKind]:
    lowered = message.lower()
    for needle, kind in rules:
        if needle in lowered:
            return kind
    return None


def classify_plunk_error(status_code: int, message: str) -> PlunkError:
    """
    Map a Plunk HTTP status + message to a ``PlunkError``.

    The 401 and 404/422 substring checks ignore case, so "bearer" and
    "Bearer" both select ``MALFORMED_AUTHORIZATION_HEADER``. Plunk's own
    client compares case-sensitively and would report a lowercase
    "bearer" as plain ``UNAUTHORIZED``.
    """
    kind: Optional[PlunkErrorKind]

    if status_code == 400:
        kind = PlunkErrorKind.VALIDATION_ERROR
    elif status_code == 401:
        kind = _match(message, _UNAUTHORIZED_RULES) or PlunkErrorKind.UNAUTHORIZED
    elif status_code == 403:
        kind = PlunkErrorKind.FORBIDDEN
    elif status_code == 404:
        kind = _match(message, (("project", PlunkErrorKind.PROJECT_NOT_FOUND),)) or PlunkErrorKind.NOT_FOUND
    elif status_code == 422:
        kind = (
            _match(message, (("attachment", PlunkErrorKind.TOO_MANY_ATTACHMENTS),))
            or PlunkErrorKind.UNPROCESSABLE_ENTITY
        )
    elif status_code == 429:
        kind = PlunkErrorKind.RATE_LIMIT_EXCEEDED
    elif status_code == 500:
        kind = PlunkErrorKind.INTERNAL_SERVER_ERROR
    else:
        return PlunkError.unknown("unknown_error", message, status_code)

    return PlunkError.from_kind(kind, message)


def network_error() -> PlunkError:
    """The request never produced a response."""
    return PlunkError.from_kind(PlunkErrorKind.NETWORK_ERROR)
