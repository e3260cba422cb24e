"""Domain layer - provider table, message types and errors.

Pure code with no I/O or framework dependencies.

Contents:
    * :mod:`.providers` - Provider rules and SMTP settings resolution
    * :mod:`.messages` - Send options, recipients and result envelopes
    * :mod:`.enums` - Domain enumerations (OutputFormat, DeployTarget)
    * :mod:`.errors` - Domain exception types and error codes
"""

from __future__ import annotations

from .enums import DeployTarget, OutputFormat
from .errors import (
    DEFAULT_SEND_ERROR_MESSAGE,
    MISSING_CREDENTIALS,
    ConfigurationError,
    MissingCredentialsError,
    TransportError,
    UnknownProviderError,
)
from .messages import (
    Credentials,
    OutboundMessage,
    Recipients,
    SendEmailData,
    SendEmailError,
    SendEmailOptions,
    SendEmailResponse,
    SentMessageInfo,
    VerifyResult,
)
from .providers import (
    DEFAULT_SMTP_CONFIG,
    PROVIDER_RULES,
    ProviderRule,
    SMTPConfig,
    extract_domain,
    find_provider,
    resolve_smtp_config,
)

__all__ = [
    # Providers
    "DEFAULT_SMTP_CONFIG",
    "PROVIDER_RULES",
    "ProviderRule",
    "SMTPConfig",
    "extract_domain",
    "find_provider",
    "resolve_smtp_config",
    # Messages
    "Credentials",
    "OutboundMessage",
    "Recipients",
    "SendEmailData",
    "SendEmailError",
    "SendEmailOptions",
    "SendEmailResponse",
    "SentMessageInfo",
    "VerifyResult",
    # Enums
    "DeployTarget",
    "OutputFormat",
    # Errors
    "DEFAULT_SEND_ERROR_MESSAGE",
    "MISSING_CREDENTIALS",
    "ConfigurationError",
    "MissingCredentialsError",
    "TransportError",
    "UnknownProviderError",
]
