"""SMTP transport built on aiosmtplib.

Provides :class:`SMTPTransport`, the production implementation of the
``Transport`` port. It assembles the MIME message, assigns the Message-ID
reported back to callers, and re-raises every library failure as a
:class:`~maildrop.domain.errors.TransportError` carrying a stable code.
"""

from __future__ import annotations

import logging
from email.message import EmailMessage
from email.utils import formatdate, make_msgid, parseaddr
from typing import Any

import aiosmtplib

from maildrop.domain.errors import TransportError
from maildrop.domain.messages import Credentials, OutboundMessage, SentMessageInfo
from maildrop.domain.providers import SMTPConfig, extract_domain

logger = logging.getLogger(__name__)

#: Seconds to wait on connect and on each SMTP command.
DEFAULT_TIMEOUT = 30.0

_ENVELOPE_ERRORS = (
    aiosmtplib.SMTPSenderRefused,
    aiosmtplib.SMTPRecipientRefused,
    aiosmtplib.SMTPRecipientsRefused,
)
_CONNECTION_ERRORS = (
    aiosmtplib.SMTPConnectError,
    aiosmtplib.SMTPServerDisconnected,
    OSError,
)
_TRANSLATED_ERRORS = (aiosmtplib.SMTPException, OSError, TimeoutError, ValueError)


def classify_error(exc: BaseException) -> str:
    """Return the symbolic code for a transport-level failure.

    Example:
        >>> classify_error(aiosmtplib.SMTPAuthenticationError(535, "bad credentials"))
        'EAUTH'
        >>> classify_error(ConnectionRefusedError("refused"))
        'ECONNECTION'
        >>> classify_error(ValueError("No recipients"))
        'EMESSAGE'
    """
    if isinstance(exc, aiosmtplib.SMTPAuthenticationError):
        return "EAUTH"
    if isinstance(exc, _ENVELOPE_ERRORS):
        return "EENVELOPE"
    # SMTPConnectTimeoutError is both a timeout and a connect error.
    if isinstance(exc, (TimeoutError, aiosmtplib.SMTPTimeoutError)):
        return "ETIMEDOUT"
    if isinstance(exc, _CONNECTION_ERRORS):
        return "ECONNECTION"
    if isinstance(exc, aiosmtplib.SMTPResponseException):
        return "EPROTOCOL"
    if isinstance(exc, aiosmtplib.SMTPException):
        return "ESMTP"
    return "EMESSAGE"


def _translate(exc: BaseException) -> TransportError:
    smtp_code = exc.code if isinstance(exc, aiosmtplib.SMTPResponseException) else None
    return TransportError(str(exc), code=classify_error(exc), smtp_code=smtp_code)


def _message_id_domain(*addresses: str) -> str | None:
    """Return the first non-empty domain among ``addresses``."""
    for address in addresses:
        domain = extract_domain(parseaddr(address)[1])
        if domain:
            return domain
    return None


class SMTPTransport:
    """aiosmtplib-backed transport bound to one account.

    Each send opens its own connection; nothing is pooled between calls.
    ``secure=True`` connects with implicit TLS, otherwise the connection is
    upgraded with STARTTLS when the server offers it.

    Example:
        >>> transport = SMTPTransport(
        ...     config=SMTPConfig("smtp.gmail.com", 587),
        ...     credentials=Credentials("me@gmail.com", "app-password"),
        ... )
        >>> transport.config.host
        'smtp.gmail.com'
    """

    def __init__(self, *, config: SMTPConfig, credentials: Credentials, timeout: float = DEFAULT_TIMEOUT) -> None:
        if timeout <= 0:
            raise ValueError(f"timeout must be positive, got {timeout}")
        self.config = config
        self.timeout = timeout
        self._credentials = credentials

    def __repr__(self) -> str:
        return f"SMTPTransport(config={self.config!r}, user={self._credentials.email!r}, timeout={self.timeout!r})"

    def _connection_kwargs(self) -> dict[str, Any]:
        return {
            "hostname": self.config.host,
            "port": self.config.port,
            "use_tls": self.config.secure,
            "start_tls": False if self.config.secure else None,
            "timeout": self.timeout,
        }

    def build_message(self, outbound: OutboundMessage) -> EmailMessage:
        """Assemble the MIME message for ``outbound``.

        A Bcc header is set so aiosmtplib can collect those recipients; the
        library strips it before the message goes on the wire.
        """
        message = EmailMessage()
        message["From"] = outbound.from_address
        message["To"] = outbound.to
        if outbound.cc:
            message["Cc"] = outbound.cc
        if outbound.bcc:
            message["Bcc"] = outbound.bcc
        if outbound.reply_to:
            message["Reply-To"] = outbound.reply_to
        message["Subject"] = outbound.subject
        message["Date"] = formatdate(localtime=True)
        message["Message-ID"] = make_msgid(domain=_message_id_domain(outbound.from_address, self._credentials.email))

        if outbound.text is not None and outbound.html is not None:
            message.set_content(outbound.text)
            message.add_alternative(outbound.html, subtype="html")
        elif outbound.html is not None:
            message.set_content(outbound.html, subtype="html")
        else:
            message.set_content(outbound.text or "")
        return message

    async def send_mail(self, message: OutboundMessage) -> SentMessageInfo:
        """Send ``message`` and return the assigned Message-ID.

        Raises:
            TransportError: Connection, authentication, envelope or message
                construction failure.
        """
        try:
            mime = self.build_message(message)
            _errors, response = await aiosmtplib.send(
                mime,
                username=self._credentials.email,
                password=self._credentials.password,
                **self._connection_kwargs(),
            )
        except _TRANSLATED_ERRORS as exc:
            logger.debug("SMTP send failed", exc_info=True)
            raise _translate(exc) from exc

        message_id = str(mime["Message-ID"])
        logger.info(
            "SMTP server accepted message",
            extra={"host": self.config.host, "port": self.config.port, "message_id": message_id},
        )
        return SentMessageInfo(message_id=message_id, response=response)

    async def verify(self) -> None:
        """Connect, authenticate and disconnect.

        Raises:
            TransportError: The server is unreachable or rejects the login.
        """
        client = aiosmtplib.SMTP(**self._connection_kwargs())
        try:
            async with client:
                await client.login(self._credentials.email, self._credentials.password)
        except _TRANSLATED_ERRORS as exc:
            logger.debug("SMTP verification failed", exc_info=True)
            raise _translate(exc) from exc
        logger.info("SMTP credentials verified", extra={"host": self.config.host, "port": self.config.port})


__all__ = [
    "DEFAULT_TIMEOUT",
    "SMTPTransport",
    "classify_error",
]
