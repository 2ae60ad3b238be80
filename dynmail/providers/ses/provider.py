"""
SES Provider - Amazon SES delivery via the SendRawEmail Query API.

Features:
- Raw MIME messages (attachments, custom headers, Cc/Bcc)
- Request signing with botocore's SigV4 signer
- Transport over httpx, so no blocking AWS SDK client is involved
- Lazily resolved credentials (string, function or coroutine function)

Usage::

    provider = SESProvider(
        id="ses",
        access_key_id="AKIA...",
        secret_access_key="...",
        region="us-east-1",
        configuration_set_name="transactional",
    )
"""

from __future__ import annotations

import asyncio
import base64
import logging
from email import encoders
from email.header import Header
from email.mime.base import MIMEBase
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import formatdate, make_msgid
from pathlib import Path
from typing import List, Optional
from urllib.parse import urlencode

import httpx
from botocore.auth import SigV4Auth
from botocore.awsrequest import AWSRequest
from botocore.credentials import Credentials

from ...config import EnvConfig
from ...credentials import LazyValue, ValueSource
from ...faults import MissingCredentialsConfigError, NETWORK_ERROR_MESSAGE
from ...message import Attachment, SendMailParams, as_list
from ...result import Failure, Result, Success
from ...sender import DEFAULT_ID
from ..base import USER_AGENT, HTTPProvider, ProviderOptions
from .faults import SESError, classify_ses_error, parse_ses_error

logger = logging.getLogger("dynmail.providers.ses")

SES_API_VERSION = "2010-12-01"
SES_SERVICE = "ses"


class SESProvider(HTTPProvider):
    """
    Amazon SES mail provider.

    Credentials default to ``AWS_ACCESS_KEY_ID``, ``AWS_SECRET_ACCESS_KEY``,
    ``AWS_REGION`` and (optionally) ``AWS_SESSION_TOKEN``.
    """

    provider_name = "ses"

    def __init__(
        self,
        *,
        id: str = DEFAULT_ID,
        access_key_id: Optional[ValueSource] = None,
        secret_access_key: Optional[ValueSource] = None,
        region: Optional[ValueSource] = None,
        session_token: Optional[ValueSource] = None,
        configuration_set_name: Optional[str] = None,
        config: Optional[EnvConfig] = None,
        client: Optional[httpx.AsyncClient] = None,
        timeout: Optional[float] = None,
    ):
        super().__init__(
            id=id,
            client=client,
            timeout=timeout,
            options=ProviderOptions(supports_attachments=True),
        )
        config = config or EnvConfig()
        sources = {
            "access_key_id": access_key_id or config.get("AWS_ACCESS_KEY_ID"),
            "secret_access_key": secret_access_key or config.get("AWS_SECRET_ACCESS_KEY"),
            "region": region or config.get("AWS_REGION"),
        }
        missing = [name for name, source in sources.items() if not source]
        if missing:
            raise MissingCredentialsConfigError(missing)

        self._access_key_id = LazyValue(sources["access_key_id"])
        self._secret_access_key = LazyValue(sources["secret_access_key"])
        self._region = LazyValue(sources["region"])

        token = session_token or config.get("AWS_SESSION_TOKEN")
        self._session_token = LazyValue(token) if token else None
        self.configuration_set_name = configuration_set_name

    # ── MIME Construction ───────────────────────────────────────────

    def _build_raw_message(self, params: SendMailParams, payloads: list[bytes]) -> bytes:
        """
        Build the raw MIME message handed to SendRawEmail.

        ``payloads`` holds the bytes of each attachment, in order.
        """
        content = self._build_content(params)

        if params.attachments:
            msg = MIMEMultipart("mixed")
            msg.attach(content)
            for attachment, payload in zip(params.attachments, payloads):
                msg.attach(self._build_attachment(attachment, payload))
        else:
            msg = content

        msg["From"] = str(params.sender)
        msg["To"] = ", ".join(as_list(params.to))
        if params.cc:
            msg["Cc"] = ", ".join(as_list(params.cc))
        if params.bcc:
            msg["Bcc"] = ", ".join(as_list(params.bcc))
        msg["Subject"] = Header(params.subject, "utf-8")
        msg["Date"] = formatdate(localtime=True)
        msg["Message-ID"] = make_msgid(domain=params.sender.domain or "localhost")
        if params.reply_to:
            msg["Reply-To"] = ", ".join(as_list(params.reply_to))

        for key, value in (params.headers or {}).items():
            msg[key] = value

        return msg.as_bytes()

    @staticmethod
    def _build_content(params: SendMailParams):
        if params.text and params.html:
            alt = MIMEMultipart("alternative")
            alt.attach(MIMEText(params.text, "plain", "utf-8"))
            alt.attach(MIMEText(params.html, "html", "utf-8"))
            return alt
        if params.text and not params.html:
            return MIMEText(params.text, "plain", "utf-8")
        return MIMEText(params.html, "html", "utf-8")

    @staticmethod
    async def _read_attachments(attachments: List[Attachment]) -> list[bytes]:
        payloads = []
        for attachment in attachments:
            if attachment.content is None and attachment.path:
                payloads.append(await asyncio.to_thread(Path(attachment.path).read_bytes))
            else:
                payloads.append(attachment.content_bytes())
        return payloads

    @staticmethod
    def _build_attachment(attachment: Attachment, payload: bytes) -> MIMEBase:
        maintype, _, subtype = (attachment.content_type or "").partition("/")
        if not (maintype and subtype):
            maintype, subtype = "application", "octet-stream"
        part = MIMEBase(maintype, subtype, name=attachment.filename)
        part.set_payload(payload)
        encoders.encode_base64(part)
        part.add_header(
            "Content-Disposition", "attachment", filename=attachment.filename,
        )
        return part

    # ── SES API Helpers ─────────────────────────────────────────────

    def _build_request_body(self, raw_message: bytes) -> bytes:
        form = {
            "Action": "SendRawEmail",
            "Version": SES_API_VERSION,
            "RawMessage.Data": base64.b64encode(raw_message).decode("ascii"),
        }
        if self.configuration_set_name:
            form["ConfigurationSetName"] = self.configuration_set_name
        return urlencode(form).encode("ascii")

    async def _sign(self, endpoint: str, body: bytes, region: str) -> dict[str, str]:
        """Return SigV4-signed headers for a POST of ``body`` to ``endpoint``."""
        credentials = Credentials(
            await self._access_key_id.resolve(),
            await self._secret_access_key.resolve(),
            await self._session_token.resolve() if self._session_token else None,
        )
        request = AWSRequest(
            method="POST",
            url=endpoint,
            data=body,
            headers={
                "Content-Type": "application/x-www-form-urlencoded",
                "User-Agent": USER_AGENT,
            },
        )
        SigV4Auth(credentials, SES_SERVICE, region).add_auth(request)
        return dict(request.headers.items())

    # ── Send ────────────────────────────────────────────────────────

    async def send(self, params: SendMailParams) -> Result[None, SESError]:
        """Send a single message via SES SendRawEmail."""
        try:
            payloads = await self._read_attachments(params.attachments)
        except OSError as e:
            return self._local_failure("invalid_attachment", f"Could not read attachment: {e}")
        try:
            raw_message = self._build_raw_message(params, payloads)
        except ValueError as e:
            return self._local_failure("invalid_message", f"Could not build message: {e}")

        region = await self._region.resolve()
        endpoint = f"https://email.{region}.amazonaws.com/"
        body = self._build_request_body(raw_message)
        headers = await self._sign(endpoint, body, region)

        try:
            response = await self._get_client().post(
                endpoint, content=body, headers=headers,
            )
        except httpx.HTTPError as e:
            self._total_errors += 1
            logger.warning(f"SES request via '{self.id}' failed: {e!r}")
            return Failure(classify_ses_error("network_error", NETWORK_ERROR_MESSAGE, 500))

        if response.is_success:
            self._total_sent += 1
            logger.info(
                f"SES sent via '{self.id}' (region={region}, status={response.status_code})"
            )
            return Success()

        return Failure(self._handle_error_response(response))

    def _local_failure(self, code: str, message: str) -> Failure[SESError]:
        self._total_errors += 1
        logger.warning(f"SES message via '{self.id}' not sent: {message}")
        return Failure(classify_ses_error(code, message, 400))

    def _handle_error_response(self, response: httpx.Response) -> SESError:
        """Classify a non-2xx SES response from its XML body."""
        self._total_errors += 1

        parsed = parse_ses_error(response.text)
        error = classify_ses_error(
            parsed.code or "unknown_error", parsed.message, response.status_code,
        )
        logger.warning(
            f"SES error via '{self.id}': HTTP {response.status_code} "
            f"-> {error.kind.name} ({error.code})"
        )
        return error

    def __repr__(self) -> str:
        return f"SESProvider(id={self.id!r})"
