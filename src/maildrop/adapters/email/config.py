"""MailDrop configuration model and loader.

Provides the MailDropConfig Pydantic model holding the account and optional
explicit SMTP settings, and the loader that builds it from the ``[maildrop]``
section of the layered configuration.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, cast

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from maildrop.domain.messages import Credentials
from maildrop.domain.providers import SMTPConfig

from .transport import DEFAULT_TIMEOUT

#: Port assumed when only an explicit host is configured.
DEFAULT_SUBMISSION_PORT = 587


class MailDropConfig(BaseModel):
    """Validated, immutable account configuration.

    Example:
        >>> config = MailDropConfig(email="me@gmail.com", password="app-password")
        >>> config.custom_smtp() is None
        True
        >>> config.credentials().email
        'me@gmail.com'
    """

    model_config = ConfigDict(frozen=True)

    email: str | None = None
    password: str | None = None
    smtp_host: str | None = None
    smtp_port: int | None = Field(default=None, ge=1, le=65535)
    smtp_secure: bool = False
    timeout: float = DEFAULT_TIMEOUT
    strict_provider_lookup: bool = False

    @field_validator("email", "password", "smtp_host", mode="before")
    @classmethod
    def _coerce_empty_string_to_none(cls, v: Any) -> Any:
        """Treat empty or whitespace-only strings from config files as unset."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("smtp_port", mode="before")
    @classmethod
    def _coerce_port_zero_to_none(cls, v: Any) -> Any:
        """Port 0 in the defaults file means "not configured"."""
        if v == 0:
            return None
        return v

    @model_validator(mode="after")
    def _validate_config(self) -> MailDropConfig:
        """Reject values that would only fail later inside the transport.

        Example:
            >>> MailDropConfig(timeout=0)  # doctest: +IGNORE_EXCEPTION_DETAIL
            Traceback (most recent call last):
            ...
            ValidationError: ...
        """
        if self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}")
        if self.email is not None and "@" not in self.email:
            raise ValueError(f"invalid email address: {self.email}")
        if self.smtp_port is not None and self.smtp_host is None:
            raise ValueError("smtp.port is set but smtp.host is missing")
        return self

    def __repr__(self) -> str:
        """Return string representation with the password redacted.

        Example:
            >>> "hunter2" in repr(MailDropConfig(password="hunter2"))
            False
        """
        fields: list[str] = []
        for name, value in self:
            if name == "password" and value is not None:
                fields.append(f"{name}='[REDACTED]'")
            else:
                fields.append(f"{name}={value!r}")
        return f"MailDropConfig({', '.join(fields)})"

    def custom_smtp(self) -> SMTPConfig | None:
        """Return explicit SMTP settings, or None to use the provider table.

        Example:
            >>> MailDropConfig(smtp_host="mail.example.org").custom_smtp()
            SMTPConfig(host='mail.example.org', port=587, secure=False)
        """
        if self.smtp_host is None:
            return None
        port = self.smtp_port if self.smtp_port is not None else DEFAULT_SUBMISSION_PORT
        return SMTPConfig(host=self.smtp_host, port=port, secure=self.smtp_secure)

    def credentials(self) -> Credentials | None:
        """Return credentials when both email and password are configured."""
        if self.email is None or self.password is None:
            return None
        return Credentials(email=self.email, password=self.password)


def load_maildrop_config_from_dict(config_dict: Mapping[str, Any]) -> MailDropConfig:
    """Load MailDropConfig from a configuration dictionary.

    Bridges lib_layered_config's dictionary output with the typed model.
    The nested ``[maildrop.smtp]`` table is flattened with an ``smtp_``
    prefix to match MailDropConfig field names.

    Args:
        config_dict: Configuration dictionary typically from lib_layered_config.

    Returns:
        Account configuration with defaults for missing values.

    Example:
        >>> config = load_maildrop_config_from_dict(
        ...     {"maildrop": {"email": "me@zoho.com", "smtp": {"host": "smtp.zoho.eu", "port": 465, "secure": True}}}
        ... )
        >>> config.custom_smtp()
        SMTPConfig(host='smtp.zoho.eu', port=465, secure=True)
    """
    section: Any = config_dict.get("maildrop", {})

    if not isinstance(section, Mapping):
        return MailDropConfig.model_validate(section)

    raw: dict[str, Any] = dict(cast(Mapping[str, Any], section))
    smtp_raw: Any = raw.pop("smtp", {})
    if isinstance(smtp_raw, Mapping):
        for key, value in cast(Mapping[str, Any], smtp_raw).items():
            raw[f"smtp_{key}"] = value

    return MailDropConfig.model_validate(raw)


__all__ = [
    "DEFAULT_SUBMISSION_PORT",
    "MailDropConfig",
    "load_maildrop_config_from_dict",
]
