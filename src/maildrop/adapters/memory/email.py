"""In-memory email adapters for testing.

Provides a transport factory that satisfies the same Protocols as the SMTP
adapter but never opens a socket.

Contents:
    * :class:`TransportSpy` - Records created transports and sent messages.
    * :func:`credentials_loader_in_memory` - Credentials from a fixed mapping.
    * :func:`load_maildrop_config_from_dict_in_memory` - In-memory config loader.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from ...domain.messages import Credentials, OutboundMessage, SentMessageInfo
from ...domain.providers import SMTPConfig
from ..email.config import MailDropConfig, load_maildrop_config_from_dict
from ..email.credentials import load_credentials_from_env

if TYPE_CHECKING:
    from ...application.ports import LoadCredentialsFromEnv


@dataclass
class SpyTransport:
    """Transport handed out by :class:`TransportSpy`; delegates all state to it."""

    spy: TransportSpy
    config: SMTPConfig
    credentials: Credentials
    timeout: float

    async def send_mail(self, message: OutboundMessage) -> SentMessageInfo:
        self.spy.sent.append(message)
        if self.spy.send_exception is not None:
            raise self.spy.send_exception
        return SentMessageInfo(message_id=self.spy.message_id, response="250 OK queued")

    async def verify(self) -> None:
        self.spy.verify_calls += 1
        if self.spy.verify_exception is not None:
            raise self.spy.verify_exception


@dataclass
class TransportSpy:
    """Captures transport operations for test assertions.

    Each test should create its own TransportSpy to avoid cross-test
    pollution. Pass :meth:`create_transport` wherever a transport factory is
    expected.

    Attributes:
        message_id: Message-ID reported for every accepted message.
        send_exception: When set, ``send_mail`` raises it after recording.
        verify_exception: When set, ``verify`` raises it.
        created: One entry per constructed transport.
        sent: Messages handed to ``send_mail``, in order.
        verify_calls: Number of ``verify`` invocations.

    Example:
        >>> spy = TransportSpy()
        >>> transport = spy.create_transport(
        ...     config=SMTPConfig("smtp.gmail.com", 587), credentials=Credentials("me@gmail.com", "pw"), timeout=5.0
        ... )
        >>> len(spy.created)
        1
    """

    message_id: str = "<spy@maildrop.test>"
    send_exception: Exception | None = None
    verify_exception: Exception | None = None
    created: list[dict[str, Any]] = field(default_factory=list)
    sent: list[OutboundMessage] = field(default_factory=list)
    verify_calls: int = 0

    def clear(self) -> None:
        """Reset captured data for next test."""
        self.created.clear()
        self.sent.clear()
        self.verify_calls = 0
        self.send_exception = None
        self.verify_exception = None

    def create_transport(self, *, config: SMTPConfig, credentials: Credentials, timeout: float) -> SpyTransport:
        """Record the construction and return a transport bound to this spy."""
        self.created.append({"config": config, "credentials": credentials, "timeout": timeout})
        return SpyTransport(spy=self, config=config, credentials=credentials, timeout=timeout)


def credentials_loader_in_memory(environ: Mapping[str, str] | None = None) -> LoadCredentialsFromEnv:
    """Return a credentials loader that reads ``environ`` instead of the process.

    Example:
        >>> load = credentials_loader_in_memory({"MAILDROP_EMAIL": "me@gmail.com", "MAILDROP_PASSWORD": "pw"})
        >>> load().email
        'me@gmail.com'
        >>> credentials_loader_in_memory()() is None
        True
    """
    fixed = dict(environ or {})

    def load(environ: Mapping[str, str] | None = None) -> Credentials | None:
        return load_credentials_from_env(fixed if environ is None else environ)

    return load


def load_maildrop_config_from_dict_in_memory(config_dict: Mapping[str, Any]) -> MailDropConfig:
    """Parse the ``[maildrop]`` section of an in-memory dict; never touches files."""
    return load_maildrop_config_from_dict(config_dict)


__all__ = [
    "SpyTransport",
    "TransportSpy",
    "credentials_loader_in_memory",
    "load_maildrop_config_from_dict_in_memory",
]
