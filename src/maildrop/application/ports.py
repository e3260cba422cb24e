"""Application ports: Protocol definitions for adapters.

The transport ports describe the external SMTP collaborator: a factory that
binds settings and credentials, and the transport object with its send and
verify primitives. The remaining ports are callable Protocols whose
signatures match the module-level adapter functions, so those functions
satisfy them structurally (PEP 544).

System Role:
    Sits between domain and adapters. Infrastructure types (``Config``,
    ``MailDropConfig``) are imported under ``TYPE_CHECKING`` only.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import TYPE_CHECKING, Any, Protocol

from ..domain.enums import DeployTarget, OutputFormat
from ..domain.messages import Credentials, OutboundMessage, SentMessageInfo
from ..domain.providers import SMTPConfig

if TYPE_CHECKING:
    from lib_layered_config import Config

    from ..adapters.email.config import MailDropConfig


class Transport(Protocol):
    """Connected-on-demand SMTP client bound to one account."""

    async def send_mail(self, message: OutboundMessage) -> SentMessageInfo:
        """Deliver ``message``; raise on any failure."""
        ...

    async def verify(self) -> None:
        """Check connectivity and credentials; raise on any failure."""
        ...


class TransportFactory(Protocol):
    """Create a transport bound to SMTP settings and credentials."""

    def __call__(self, *, config: SMTPConfig, credentials: Credentials, timeout: float) -> Transport: ...


class LoadCredentialsFromEnv(Protocol):
    """Read account credentials from process environment variables."""

    def __call__(self, environ: Mapping[str, str] | None = ...) -> Credentials | None: ...


class LoadMailDropConfigFromDict(Protocol):
    """Load MailDropConfig from a configuration dictionary."""

    def __call__(self, config_dict: Mapping[str, Any]) -> MailDropConfig: ...


class GetConfig(Protocol):
    """Load layered configuration with application defaults."""

    def __call__(self, *, profile: str | None = ..., start_dir: str | None = ...) -> Config: ...


class GetDefaultConfigPath(Protocol):
    """Return the path to the bundled default configuration file."""

    def __call__(self) -> Path: ...


class DeployConfiguration(Protocol):
    """Deploy default configuration to specified target layers."""

    def __call__(
        self,
        *,
        targets: Sequence[DeployTarget],
        force: bool = ...,
        profile: str | None = ...,
        set_permissions: bool = ...,
    ) -> list[Path]: ...


class DisplayConfig(Protocol):
    """Display the provided configuration in the requested format."""

    def __call__(
        self, config: Config, *, output_format: OutputFormat = ..., section: str | None = ..., profile: str | None = ...
    ) -> None: ...


class InitLogging(Protocol):
    """Initialize lib_log_rich runtime with the provided configuration."""

    def __call__(self, config: Config) -> None: ...


__all__ = [
    "DeployConfiguration",
    "DisplayConfig",
    "GetConfig",
    "GetDefaultConfigPath",
    "InitLogging",
    "LoadCredentialsFromEnv",
    "LoadMailDropConfigFromDict",
    "Transport",
    "TransportFactory",
]
