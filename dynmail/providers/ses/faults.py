"""
Amazon SES error taxonomy.

SES replies to failed Query API calls with an XML ``ErrorResponse``;
``parse_ses_error`` extracts ``<Code>``/``<Message>`` and
``classify_ses_error`` maps the code to an ``SESErrorKind``.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import NamedTuple, Optional

from ...faults import (
    NETWORK_ERROR_MESSAGE,
    NETWORK_ERROR_SUGGESTION,
    ErrorSpec,
    TransportError,
)


class SESErrorKind(str, Enum):
    ACCOUNT_SENDING_PAUSED = "AccountSendingPausedException"
    CONFIGURATION_SET_DOES_NOT_EXIST = "ConfigurationSetDoesNotExist"
    CONFIGURATION_SET_SENDING_PAUSED = "ConfigurationSetSendingPausedException"
    MAIL_FROM_DOMAIN_NOT_VERIFIED = "MailFromDomainNotVerifiedException"
    MESSAGE_REJECTED = "MessageRejected"
    INVALID_PARAMETER_VALUE = "InvalidParameterValue"
    MISSING_REQUIRED_PARAMETER = "MissingRequiredParameter"
    SIGNATURE_DOES_NOT_MATCH = "SignatureDoesNotMatch"
    ACCESS_DENIED = "AccessDenied"
    INVALID_CLIENT_TOKEN_ID = "InvalidClientTokenId"
    INCOMPLETE_SIGNATURE = "IncompleteSignature"
    THROTTLING = "Throttling"
    SERVICE_UNAVAILABLE = "ServiceUnavailable"
    INTERNAL_FAILURE = "InternalFailure"
    INVALID_ATTACHMENT = "invalid_attachment"
    INVALID_MESSAGE = "invalid_message"
    NETWORK_ERROR = "network_error"
    UNKNOWN = "unknown"


_CATALOG: dict[SESErrorKind, ErrorSpec] = {
    SESErrorKind.ACCOUNT_SENDING_PAUSED: ErrorSpec(
        400,
        "Email sending is disabled for your entire Amazon SES account.",
        "Enable email sending for your Amazon SES account using UpdateAccountSendingEnabled.",
    ),
    SESErrorKind.CONFIGURATION_SET_DOES_NOT_EXIST: ErrorSpec(
        400,
        "The configuration set does not exist.",
        "Verify that the configuration set name is correct or create a new configuration set.",
        passthrough=True,
    ),
    SESErrorKind.CONFIGURATION_SET_SENDING_PAUSED: ErrorSpec(
        400,
        "Email sending is disabled for the configuration set.",
        "Enable email sending for the configuration set using UpdateConfigurationSetSendingEnabled.",
        passthrough=True,
    ),
    SESErrorKind.MAIL_FROM_DOMAIN_NOT_VERIFIED: ErrorSpec(
        400,
        "The message could not be sent because Amazon SES could not read the MX record "
        "required to use the specified MAIL FROM domain.",
        "Verify your MAIL FROM domain settings in the Amazon SES console.",
    ),
    SESErrorKind.MESSAGE_REJECTED: ErrorSpec(
        400,
        "The action failed, and the message could not be sent.",
        "Check the error details for more information about what caused the error.",
        passthrough=True,
    ),
    SESErrorKind.INVALID_PARAMETER_VALUE: ErrorSpec(
        400,
        "An invalid or out-of-range value was supplied for the input parameter.",
        "Check the parameter value and ensure it is within the valid range.",
        passthrough=True,
    ),
    SESErrorKind.MISSING_REQUIRED_PARAMETER: ErrorSpec(
        400,
        "A required parameter for the specified action is not supplied.",
        "Provide all required parameters for the action.",
        passthrough=True,
    ),
    SESErrorKind.SIGNATURE_DOES_NOT_MATCH: ErrorSpec(
        403,
        "The request signature we calculated does not match the signature you provided.",
        "Check your AWS Secret Access Key and signing method.",
    ),
    SESErrorKind.ACCESS_DENIED: ErrorSpec(
        403,
        "You do not have permission to perform this action.",
        "Check your IAM policy and ensure you have the necessary permissions.",
        passthrough=True,
    ),
    SESErrorKind.INVALID_CLIENT_TOKEN_ID: ErrorSpec(
        403,
        "The security token included in the request is invalid.",
        "Check your AWS Access Key ID and ensure it is correct.",
    ),
    SESErrorKind.INCOMPLETE_SIGNATURE: ErrorSpec(
        403,
        "The request signature does not conform to AWS standards.",
        "Check your signature calculation and ensure all required headers are included.",
    ),
    SESErrorKind.THROTTLING: ErrorSpec(
        429,
        "Rate exceeded. Please slow down your request rate.",
        "Reduce your request rate or implement exponential backoff.",
        retryable=True,
    ),
    SESErrorKind.SERVICE_UNAVAILABLE: ErrorSpec(
        503,
        "The service is temporarily unavailable.",
        "Retry the request after a short delay.",
        retryable=True,
    ),
    SESErrorKind.INTERNAL_FAILURE: ErrorSpec(
        500,
        "An internal error occurred.",
        "Retry the request. If the problem persists, contact AWS Support.",
        retryable=True,
    ),
    # raised locally, before any request is made
    SESErrorKind.INVALID_ATTACHMENT: ErrorSpec(
        400,
        "An attachment could not be read.",
        "Check that every attachment path exists and is readable.",
        passthrough=True,
    ),
    SESErrorKind.INVALID_MESSAGE: ErrorSpec(
        400,
        "The message could not be encoded as MIME.",
        "Check the subject, addresses and custom headers for invalid characters.",
        passthrough=True,
    ),
    SESErrorKind.NETWORK_ERROR: ErrorSpec(
        500, NETWORK_ERROR_MESSAGE, NETWORK_ERROR_SUGGESTION,
        passthrough=True, retryable=True,
    ),
}

# wire codes that are aliases of a catalogued kind
_ALIASES: dict[str, SESErrorKind] = {
    "AccessDeniedException": SESErrorKind.ACCESS_DENIED,
}

_CODE_RE = re.compile(r"<Code>([^<]+)</Code>")
_MESSAGE_RE = re.compile(r"<Message>([^<]+)</Message>")


class SESError(TransportError):
    """A classified Amazon SES failure."""

    provider = "ses"
    unknown_suggestion = "Please check the AWS SES documentation for more information."
    _catalog = _CATALOG
    _unknown_kind = SESErrorKind.UNKNOWN


class ParsedSESError(NamedTuple):
    code: Optional[str]
    message: Optional[str]


def parse_ses_error(body: str) -> ParsedSESError:
    """Pull ``<Code>`` and ``<Message>`` out of an SES XML error body."""
    code = _CODE_RE.search(body)
    message = _MESSAGE_RE.search(body)
    return ParsedSESError(
        code.group(1) if code else None,
        message.group(1) if message else None,
    )


def classify_ses_error(
    code: str,
    message: Optional[str] = None,
    status_code: Optional[int] = None,
) -> SESError:
    """Map an SES error code to an ``SESError``."""
    kind = _ALIASES.get(code)
    if kind is None:
        try:
            kind = SESErrorKind(code)
        except ValueError:
            kind = SESErrorKind.UNKNOWN

    if kind is SESErrorKind.UNKNOWN:
        return SESError.unknown(code, message, status_code)
    return SESError.from_kind(kind, message)
