"""Domain-specific exceptions for typed error handling at boundaries."""

from __future__ import annotations

#: Error code reported when ``drop`` finds no credentials in the environment.
MISSING_CREDENTIALS = "MISSING_CREDENTIALS"

#: Message substituted when a transport failure carries no text.
DEFAULT_SEND_ERROR_MESSAGE = "Failed to send email"


class ConfigurationError(Exception):
    """Missing, invalid, or incomplete configuration.

    Typically caught at CLI boundaries to provide user-friendly messages.

    Example:
        >>> from maildrop.domain.errors import ConfigurationError
        >>> str(ConfigurationError("No account email configured"))
        'No account email configured'
    """


class MissingCredentialsError(ConfigurationError):
    """Account email or password is absent.

    Library entry points report this condition through the result envelope
    with :data:`MISSING_CREDENTIALS`; the CLI raises it before sending.

    Example:
        >>> err = MissingCredentialsError("MAILDROP_PASSWORD is not set")
        >>> err.code
        'MISSING_CREDENTIALS'
    """

    code = MISSING_CREDENTIALS


class UnknownProviderError(ConfigurationError):
    """No provider rule matches the address domain and strict lookup is on.

    Example:
        >>> err = UnknownProviderError("example.org")
        >>> err.domain
        'example.org'
        >>> "explicit SMTP configuration" in str(err)
        True
    """

    def __init__(self, domain: str) -> None:
        self.domain = domain
        shown = domain or "<empty>"
        super().__init__(f"No SMTP provider known for domain {shown!r}; supply an explicit SMTP configuration")


class TransportError(Exception):
    """SMTP transport failure with a stable error code.

    Raised by transport adapters so the send facade can pass ``code``
    through to callers unchanged.

    Attributes:
        code: Short symbolic code such as ``EAUTH`` or ``ECONNECTION``.
        smtp_code: Numeric SMTP reply code when the server sent one.

    Example:
        >>> err = TransportError("535 authentication failed", code="EAUTH", smtp_code=535)
        >>> (str(err), err.code, err.smtp_code)
        ('535 authentication failed', 'EAUTH', 535)
    """

    def __init__(self, message: str, *, code: str | None = None, smtp_code: int | None = None) -> None:
        super().__init__(message)
        self.code = code
        self.smtp_code = smtp_code


__all__ = [
    "DEFAULT_SEND_ERROR_MESSAGE",
    "MISSING_CREDENTIALS",
    "ConfigurationError",
    "MissingCredentialsError",
    "TransportError",
    "UnknownProviderError",
]
