"""Send email through well-known SMTP providers with a single call.

Example:
    >>> from maildrop import resolve_smtp_config
    >>> resolve_smtp_config("someone@hotmail.com").host
    'smtp-mail.outlook.com'

Library entry points:
    * :class:`MailDrop` - account-bound send/verify facade
    * :func:`drop` - send with ``MAILDROP_EMAIL``/``MAILDROP_PASSWORD``
    * :func:`quick_drop` - send with explicit credentials
    * :func:`resolve_smtp_config` - provider table lookup
"""

from __future__ import annotations

from .__init__conf__ import print_info
from .adapters.email.mailer import MailDrop, drop, quick_drop
from .composition import get_config
from .domain.errors import (
    MISSING_CREDENTIALS,
    ConfigurationError,
    MissingCredentialsError,
    TransportError,
    UnknownProviderError,
)
from .domain.messages import (
    SendEmailData,
    SendEmailError,
    SendEmailOptions,
    SendEmailResponse,
    VerifyResult,
)
from .domain.providers import DEFAULT_SMTP_CONFIG, PROVIDER_RULES, SMTPConfig, resolve_smtp_config

__all__ = [
    "DEFAULT_SMTP_CONFIG",
    "MISSING_CREDENTIALS",
    "PROVIDER_RULES",
    "ConfigurationError",
    "MailDrop",
    "MissingCredentialsError",
    "SMTPConfig",
    "SendEmailData",
    "SendEmailError",
    "SendEmailOptions",
    "SendEmailResponse",
    "TransportError",
    "UnknownProviderError",
    "VerifyResult",
    "drop",
    "get_config",
    "print_info",
    "quick_drop",
    "resolve_smtp_config",
]
