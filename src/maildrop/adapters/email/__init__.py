"""Email adapter - SMTP delivery and the send facade.

Structure:
    * :mod:`.transport` - aiosmtplib transport and error classification
    * :mod:`.mailer` - MailDrop facade, drop and quick_drop
    * :mod:`.credentials` - MAILDROP_* environment lookup
    * :mod:`.config` - MailDropConfig model and loader
"""

from __future__ import annotations

from .config import MailDropConfig, load_maildrop_config_from_dict
from .credentials import ENV_EMAIL, ENV_PASSWORD, load_credentials_from_env
from .mailer import MISSING_CREDENTIALS_MESSAGE, MailDrop, drop, quick_drop
from .transport import DEFAULT_TIMEOUT, SMTPTransport, classify_error

__all__ = [
    "DEFAULT_TIMEOUT",
    "ENV_EMAIL",
    "ENV_PASSWORD",
    "MISSING_CREDENTIALS_MESSAGE",
    "MailDrop",
    "MailDropConfig",
    "SMTPTransport",
    "classify_error",
    "drop",
    "load_credentials_from_env",
    "load_maildrop_config_from_dict",
    "quick_drop",
]
