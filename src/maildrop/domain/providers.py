"""Static provider table mapping address domains to SMTP settings.

The table is ordered and its groups are mutually exclusive, so the first
matching rule is the only matching rule. Everything here is pure apart from
the warning emitted when an address falls through to the default settings.

Contents:
    * :class:`SMTPConfig` - host/port/TLS triple handed to the transport.
    * :class:`ProviderRule` - one domain group and its settings.
    * :data:`PROVIDER_RULES` - the ordered lookup table.
    * :func:`resolve_smtp_config` - address to settings lookup.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .errors import UnknownProviderError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SMTPConfig:
    """Host, port and implicit-TLS flag of an SMTP submission endpoint.

    ``secure=True`` means TLS from the first byte (port 465 style);
    ``secure=False`` means plain connect with STARTTLS when offered.

    Example:
        >>> SMTPConfig(host="smtp.example.com", port=587, secure=False)
        SMTPConfig(host='smtp.example.com', port=587, secure=False)
        >>> SMTPConfig(host="", port=587, secure=False)  # doctest: +IGNORE_EXCEPTION_DETAIL
        Traceback (most recent call last):
        ...
        ValueError: SMTP host must not be empty
    """

    host: str
    port: int
    secure: bool = False

    def __post_init__(self) -> None:
        if not self.host.strip():
            raise ValueError("SMTP host must not be empty")
        if not 1 <= self.port <= 65535:
            raise ValueError(f"SMTP port must be 1-65535, got {self.port}")


@dataclass(frozen=True, slots=True)
class ProviderRule:
    """A domain group and the SMTP settings shared by its members.

    Attributes:
        name: Short provider identifier shown by the CLI.
        domains: Exact lower-case domains belonging to the provider.
        suffixes: Domain suffixes (with leading dot) matching subdomains.
        config: Settings returned for matching addresses.
        note: Optional remark displayed next to the rule.
    """

    name: str
    domains: frozenset[str]
    config: SMTPConfig
    suffixes: tuple[str, ...] = ()
    note: str = ""

    def matches(self, domain: str) -> bool:
        """Return True when ``domain`` belongs to this provider.

        Example:
            >>> ZOHO.matches("eu.zoho.com")
            True
            >>> ZOHO.matches("notzoho.com")
            False
        """
        return domain in self.domains or any(domain.endswith(suffix) for suffix in self.suffixes)


GMAIL = ProviderRule(
    name="gmail",
    domains=frozenset({"gmail.com", "googlemail.com"}),
    config=SMTPConfig(host="smtp.gmail.com", port=587, secure=False),
    note="requires an app password",
)

OUTLOOK = ProviderRule(
    name="outlook",
    domains=frozenset({"outlook.com", "hotmail.com", "live.com", "msn.com"}),
    config=SMTPConfig(host="smtp-mail.outlook.com", port=587, secure=False),
)

YAHOO = ProviderRule(
    name="yahoo",
    domains=frozenset({"yahoo.com", "yahoo.co.uk", "ymail.com"}),
    config=SMTPConfig(host="smtp.mail.yahoo.com", port=587, secure=False),
)

ZOHO = ProviderRule(
    name="zoho",
    domains=frozenset({"zoho.com"}),
    suffixes=(".zoho.com",),
    config=SMTPConfig(host="smtp.zoho.com", port=587, secure=False),
)

# ProtonMail has no public SMTP endpoint; mail leaves through the local Bridge.
PROTONMAIL = ProviderRule(
    name="protonmail",
    domains=frozenset({"protonmail.com", "proton.me"}),
    config=SMTPConfig(host="127.0.0.1", port=1025, secure=False),
    note="requires a running Proton Mail Bridge",
)

#: Ordered lookup table; first match wins.
PROVIDER_RULES: tuple[ProviderRule, ...] = (GMAIL, OUTLOOK, YAHOO, ZOHO, PROTONMAIL)

#: Settings used when no rule matches and strict lookup is off.
DEFAULT_SMTP_CONFIG = SMTPConfig(host="smtp.gmail.com", port=587, secure=False)


def extract_domain(email: str) -> str:
    """Return the lower-cased part after the first ``@``, or ``""``.

    Example:
        >>> extract_domain("Someone@GMail.COM")
        'gmail.com'
        >>> extract_domain("no-at-sign")
        ''
    """
    _, sep, domain = email.partition("@")
    if not sep:
        return ""
    return domain.split("@", 1)[0].lower()


def find_provider(email: str) -> ProviderRule | None:
    """Return the provider rule matching ``email``'s domain, if any.

    Example:
        >>> find_provider("user@hotmail.com").name
        'outlook'
        >>> find_provider("user@example.org") is None
        True
    """
    domain = extract_domain(email)
    for rule in PROVIDER_RULES:
        if rule.matches(domain):
            return rule
    return None


def resolve_smtp_config(email: str, *, strict: bool = False) -> SMTPConfig:
    """Resolve the SMTP settings for an account address.

    Args:
        email: Account address; malformed input degrades to an empty domain.
        strict: Raise instead of falling back when no rule matches.

    Returns:
        Settings of the first matching provider, or
        :data:`DEFAULT_SMTP_CONFIG` when nothing matches.

    Raises:
        UnknownProviderError: No rule matches and ``strict`` is True.

    Example:
        >>> resolve_smtp_config("me@yahoo.co.uk").host
        'smtp.mail.yahoo.com'
        >>> resolve_smtp_config("me@example.org") == DEFAULT_SMTP_CONFIG
        True
    """
    rule = find_provider(email)
    if rule is not None:
        return rule.config

    domain = extract_domain(email)
    if strict:
        raise UnknownProviderError(domain)
    logger.warning(
        "No SMTP provider rule matches domain, using default settings",
        extra={"domain": domain, "host": DEFAULT_SMTP_CONFIG.host, "port": DEFAULT_SMTP_CONFIG.port},
    )
    return DEFAULT_SMTP_CONFIG


__all__ = [
    "DEFAULT_SMTP_CONFIG",
    "GMAIL",
    "OUTLOOK",
    "PROTONMAIL",
    "PROVIDER_RULES",
    "ProviderRule",
    "SMTPConfig",
    "YAHOO",
    "ZOHO",
    "extract_domain",
    "find_provider",
    "resolve_smtp_config",
]
