"""Send facade and one-shot entry points.

:class:`MailDrop` binds one account to one transport and turns every send
outcome into a :class:`~maildrop.domain.messages.SendEmailResponse`.
:func:`drop` and :func:`quick_drop` build a fresh facade per call, taking
credentials from the environment or from the caller.

Contents:
    * :class:`MailDrop` - account-bound send/verify facade.
    * :func:`drop` - send with credentials from ``MAILDROP_*`` variables.
    * :func:`quick_drop` - send with explicitly supplied credentials.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from maildrop.application.ports import Transport, TransportFactory
from maildrop.domain.errors import DEFAULT_SEND_ERROR_MESSAGE, MISSING_CREDENTIALS
from maildrop.domain.messages import (
    Credentials,
    ErrorCode,
    SendEmailError,
    SendEmailOptions,
    SendEmailResponse,
    VerifyResult,
)
from maildrop.domain.providers import SMTPConfig, resolve_smtp_config

from .credentials import ENV_EMAIL, ENV_PASSWORD, load_credentials_from_env
from .transport import DEFAULT_TIMEOUT, SMTPTransport

logger = logging.getLogger(__name__)

MISSING_CREDENTIALS_MESSAGE = f"{ENV_EMAIL} and {ENV_PASSWORD} environment variables are required"

#: Prepared options, or a mapping with the keys :meth:`SendEmailOptions.from_fields` accepts.
SendEmailRequest = SendEmailOptions | Mapping[str, Any]

_SENSITIVE_KEYWORDS = frozenset(
    {
        "password",
        "passwd",
        "credential",
        "secret",
        "token",
        "auth",
    }
)


def _sanitize_exception_message(exc: BaseException) -> str:
    """Return the exception text unless it looks like it carries secrets.

    Only used for log records; callers still receive the raw message.

    Example:
        >>> _sanitize_exception_message(OSError("Connection refused"))
        'Connection refused'
        >>> _sanitize_exception_message(OSError("bad password for me@x.com"))
        'Delivery failed. Check SMTP configuration.'
    """
    message = str(exc)
    if any(keyword in message.lower() for keyword in _SENSITIVE_KEYWORDS):
        return "Delivery failed. Check SMTP configuration."
    return message


def _error_code(exc: BaseException) -> ErrorCode:
    return getattr(exc, "code", None)


def _to_error(exc: BaseException) -> SendEmailError:
    return SendEmailError(message=str(exc) or DEFAULT_SEND_ERROR_MESSAGE, code=_error_code(exc))


class MailDrop:
    """Send facade bound to one account and one transport.

    The SMTP settings come from ``smtp`` when given, otherwise from the
    provider table keyed by ``email``'s domain. The transport is created
    once here; construction errors propagate to the caller.

    Example:
        >>> from maildrop.adapters.memory import TransportSpy
        >>> spy = TransportSpy()
        >>> mailer = MailDrop("me@outlook.com", "pw", transport_factory=spy.create_transport)
        >>> mailer.smtp_config.host
        'smtp-mail.outlook.com'
    """

    def __init__(
        self,
        email: str,
        password: str,
        smtp: SMTPConfig | None = None,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        strict: bool = False,
        transport_factory: TransportFactory | None = None,
    ) -> None:
        self._credentials = Credentials(email=email, password=password)
        self._smtp_config = smtp if smtp is not None else resolve_smtp_config(email, strict=strict)
        factory: TransportFactory = transport_factory if transport_factory is not None else SMTPTransport
        self._transport: Transport = factory(config=self._smtp_config, credentials=self._credentials, timeout=timeout)

    def __repr__(self) -> str:
        return f"MailDrop(email={self.email!r}, smtp={self._smtp_config!r})"

    @property
    def email(self) -> str:
        return self._credentials.email

    @property
    def smtp_config(self) -> SMTPConfig:
        return self._smtp_config

    async def send(self, options: SendEmailRequest | None = None, **fields: Any) -> SendEmailResponse:
        """Send one email and report the outcome as an envelope.

        Args:
            options: Prepared options or a plain mapping such as
                ``{"to": [...], "subject": ..., "from": ...}``.
            **fields: Keyword form of :class:`SendEmailOptions`; merged over
                ``options`` when both are given. ``from`` and ``replyTo``
                are accepted as aliases.

        Returns:
            ``data`` with the Message-ID on success, ``error`` otherwise.
            This coroutine does not raise.
        """
        try:
            request = SendEmailOptions.build(options, fields)
            outbound = request.with_default_sender(self.email).to_outbound()
            info = await self._transport.send_mail(outbound)
        except Exception as exc:
            logger.warning(
                "Send failed",
                extra={
                    "host": self._smtp_config.host,
                    "error": _sanitize_exception_message(exc),
                    "code": _error_code(exc),
                },
            )
            return SendEmailResponse.failure(str(exc), _error_code(exc))

        logger.info("Message sent", extra={"host": self._smtp_config.host, "message_id": info.message_id})
        return SendEmailResponse.success(info.message_id)

    async def verify(self) -> bool:
        """Return True when the server accepts a connection and login."""
        return bool(await self.verify_detailed())

    async def verify_detailed(self) -> VerifyResult:
        """Like :meth:`verify`, keeping the failure message and code."""
        try:
            await self._transport.verify()
        except Exception as exc:
            logger.warning(
                "Verification failed",
                extra={"host": self._smtp_config.host, "error": _sanitize_exception_message(exc)},
            )
            return VerifyResult(ok=False, error=_to_error(exc))
        return VerifyResult(ok=True)


async def quick_drop(
    email: str,
    password: str,
    options: SendEmailRequest | None = None,
    *,
    transport_factory: TransportFactory | None = None,
    **fields: Any,
) -> SendEmailResponse:
    """Send one email with the given account; the sender defaults to ``email``.

    Example:
        >>> import asyncio
        >>> from maildrop.adapters.memory import TransportSpy
        >>> spy = TransportSpy()
        >>> result = asyncio.run(
        ...     quick_drop("me@gmail.com", "pw", to="you@x.com", subject="Hi", html="<p>hi</p>",
        ...                transport_factory=spy.create_transport)
        ... )
        >>> result.ok, spy.sent[0].from_address
        (True, 'me@gmail.com')
    """
    mailer = MailDrop(email, password, transport_factory=transport_factory)
    return await mailer.send(options, **fields)


async def drop(
    options: SendEmailRequest | None = None,
    *,
    credentials: Credentials | None = None,
    environ: Mapping[str, str] | None = None,
    transport_factory: TransportFactory | None = None,
    **fields: Any,
) -> SendEmailResponse:
    """Send one email using credentials from the environment.

    Args:
        options: Prepared options or a mapping; ``fields`` are merged over it.
        credentials: Injected credentials; skips the environment lookup.
        environ: Mapping consulted instead of :data:`os.environ`.
        transport_factory: Transport constructor, SMTP by default.
        **fields: Keyword form of :class:`SendEmailOptions`.

    Returns:
        The send envelope, or ``MISSING_CREDENTIALS`` without contacting any
        server when either variable is unset.
    """
    if credentials is None:
        credentials = load_credentials_from_env(environ)
    if credentials is None:
        logger.warning("Credentials missing", extra={"variables": [ENV_EMAIL, ENV_PASSWORD]})
        return SendEmailResponse.failure(MISSING_CREDENTIALS_MESSAGE, MISSING_CREDENTIALS)
    return await quick_drop(
        credentials.email,
        credentials.password,
        options,
        transport_factory=transport_factory,
        **fields,
    )


__all__ = [
    "MISSING_CREDENTIALS_MESSAGE",
    "MailDrop",
    "SendEmailRequest",
    "drop",
    "quick_drop",
]
