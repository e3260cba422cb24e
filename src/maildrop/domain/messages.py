"""Request, wire and result types for a single send.

Recipient fields accept either one address or an ordered sequence of
addresses; :class:`Recipients` is the only place that inspects which one it
got. Results use a mutually exclusive envelope: a response carries either
``data`` or ``error``, never both.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field, replace
from typing import Any

from .errors import DEFAULT_SEND_ERROR_MESSAGE

_FIELD_ALIASES = {"from": "from_address", "replyTo": "reply_to"}

#: Error codes travel unchanged, so numeric SMTP replies stay integers.
ErrorCode = str | int | None


def normalize_fields(fields: Mapping[str, Any]) -> dict[str, Any]:
    """Map the ``from`` and ``replyTo`` aliases onto option field names.

    Example:
        >>> normalize_fields({"from": "me@x.com", "subject": "Hi"})
        {'from_address': 'me@x.com', 'subject': 'Hi'}

    Raises:
        TypeError: When an alias and its field name are both present.
    """
    normalized: dict[str, Any] = {}
    for name, value in fields.items():
        target = _FIELD_ALIASES.get(name, name)
        if target in normalized:
            raise TypeError(f"Field {target!r} given more than once")
        normalized[target] = value
    return normalized


@dataclass(frozen=True, slots=True)
class Recipients:
    """Ordered recipient addresses normalized from a string or a sequence.

    Example:
        >>> Recipients.coerce(["a@x.com", "b@y.com"]).joined()
        'a@x.com, b@y.com'
        >>> Recipients.coerce("a@x.com").addresses
        ('a@x.com',)
        >>> Recipients.coerce(None).joined() is None
        True
    """

    addresses: tuple[str, ...] = ()

    @classmethod
    def coerce(cls, value: str | Sequence[str] | Recipients | None) -> Recipients:
        """Build a :class:`Recipients` from any accepted recipient shape.

        Raises:
            TypeError: When a sequence member is not a string.
        """
        if value is None:
            return cls()
        if isinstance(value, Recipients):
            return value
        if isinstance(value, str):
            return cls((value,) if value else ())
        addresses = tuple(value)
        for address in addresses:
            if not isinstance(address, str):
                raise TypeError(f"Recipient addresses must be strings, got {type(address).__name__}")
        return cls(tuple(address for address in addresses if address))

    def joined(self) -> str | None:
        """Return the comma-and-space joined form, or None when empty."""
        if not self.addresses:
            return None
        return ", ".join(self.addresses)

    def __bool__(self) -> bool:
        return bool(self.addresses)

    def __len__(self) -> int:
        return len(self.addresses)


@dataclass(frozen=True, slots=True)
class OutboundMessage:
    """Message in the shape the transport expects: recipient fields pre-joined."""

    from_address: str
    to: str
    subject: str
    html: str | None = None
    text: str | None = None
    cc: str | None = None
    bcc: str | None = None
    reply_to: str | None = None


@dataclass(frozen=True, slots=True)
class SendEmailOptions:
    """Caller-facing description of one email.

    ``to``, ``cc`` and ``bcc`` accept a single address or a sequence and are
    stored as :class:`Recipients`.

    Example:
        >>> opts = SendEmailOptions(to=["a@x.com", "b@y.com"], subject="Hi", html="<b>hi</b>")
        >>> opts.to.joined()
        'a@x.com, b@y.com'
        >>> opts.with_default_sender("me@gmail.com").from_address
        'me@gmail.com'
    """

    to: Recipients
    subject: str
    from_address: str | None = None
    html: str | None = None
    text: str | None = None
    cc: Recipients = field(default_factory=Recipients)
    bcc: Recipients = field(default_factory=Recipients)
    reply_to: str | None = None

    def __post_init__(self) -> None:
        for name in ("to", "cc", "bcc"):
            object.__setattr__(self, name, Recipients.coerce(getattr(self, name)))

    @classmethod
    def from_fields(cls, **fields: Any) -> SendEmailOptions:
        """Build options from keyword fields, accepting ``from`` as an alias.

        Example:
            >>> SendEmailOptions.from_fields(to="a@x.com", subject="Hi", **{"from": "me@x.com"}).from_address
            'me@x.com'
        """
        return cls(**normalize_fields(fields))

    @classmethod
    def build(
        cls,
        options: SendEmailOptions | Mapping[str, Any] | None,
        fields: Mapping[str, Any],
    ) -> SendEmailOptions:
        """Combine a prepared request with keyword fields; the fields win.

        ``options`` may be an instance, a plain mapping using the same keys as
        :meth:`from_fields`, or None.

        Example:
            >>> base = SendEmailOptions(to="a@x.com", subject="Hi")
            >>> SendEmailOptions.build(base, {"cc": ["c@x.com"]}).cc.joined()
            'c@x.com'
            >>> SendEmailOptions.build({"to": "a@x.com", "subject": "Hi", "from": "me@x.com"}, {}).from_address
            'me@x.com'
        """
        if options is None:
            return cls.from_fields(**fields)
        if isinstance(options, Mapping):
            return cls.from_fields(**{**normalize_fields(options), **normalize_fields(fields)})
        if not isinstance(options, cls):
            raise TypeError(f"Expected SendEmailOptions or a mapping, got {type(options).__name__}")
        if not fields:
            return options
        return replace(options, **normalize_fields(fields))

    def with_default_sender(self, address: str) -> SendEmailOptions:
        """Return options whose sender falls back to ``address`` when omitted."""
        if self.from_address:
            return self
        return replace(self, from_address=address)

    def to_outbound(self) -> OutboundMessage:
        """Flatten into the transport's wire shape."""
        return OutboundMessage(
            from_address=self.from_address or "",
            to=self.to.joined() or "",
            subject=self.subject,
            html=self.html,
            text=self.text,
            cc=self.cc.joined(),
            bcc=self.bcc.joined(),
            reply_to=self.reply_to,
        )


@dataclass(frozen=True, slots=True)
class SentMessageInfo:
    """What a transport reports after accepting a message."""

    message_id: str
    response: str | None = None


@dataclass(frozen=True, slots=True)
class SendEmailData:
    """Success payload; ``id`` and ``message_id`` carry the same value."""

    id: str
    message_id: str


@dataclass(frozen=True, slots=True)
class SendEmailError:
    """Failure payload; ``code`` is whatever the transport attached."""

    message: str
    code: ErrorCode = None


@dataclass(frozen=True, slots=True)
class SendEmailResponse:
    """Result envelope holding exactly one of ``data`` or ``error``.

    Example:
        >>> ok = SendEmailResponse.success("<1@x.com>")
        >>> ok.data.id == ok.data.message_id, ok.error
        (True, None)
        >>> bad = SendEmailResponse.failure("", code="EAUTH")
        >>> bad.error.message, bad.error.code, bad.data
        ('Failed to send email', 'EAUTH', None)
    """

    data: SendEmailData | None = None
    error: SendEmailError | None = None

    def __post_init__(self) -> None:
        if (self.data is None) == (self.error is None):
            raise ValueError("SendEmailResponse requires exactly one of data or error")

    @classmethod
    def success(cls, message_id: str) -> SendEmailResponse:
        return cls(data=SendEmailData(id=message_id, message_id=message_id))

    @classmethod
    def failure(cls, message: str | None, code: ErrorCode = None) -> SendEmailResponse:
        return cls(error=SendEmailError(message=message or DEFAULT_SEND_ERROR_MESSAGE, code=code))

    @property
    def ok(self) -> bool:
        return self.data is not None

    def to_dict(self) -> dict[str, dict[str, str | int]]:
        """Render the populated half of the envelope as plain dictionaries.

        Example:
            >>> SendEmailResponse.failure("boom").to_dict()
            {'error': {'message': 'boom'}}
        """
        if self.data is not None:
            return {"data": {"id": self.data.id, "message_id": self.data.message_id}}
        error: dict[str, str | int] = {}
        if self.error is not None:
            error["message"] = self.error.message
            if self.error.code is not None:
                error["code"] = self.error.code
        return {"error": error}


@dataclass(frozen=True, slots=True)
class VerifyResult:
    """Outcome of a connectivity and credential check with failure detail.

    Example:
        >>> bool(VerifyResult(ok=True))
        True
        >>> VerifyResult(ok=False, error=SendEmailError("refused", "ECONNECTION")).error.code
        'ECONNECTION'
    """

    ok: bool
    error: SendEmailError | None = None

    def __bool__(self) -> bool:
        return self.ok


@dataclass(frozen=True, slots=True)
class Credentials:
    """Account address and password used to authenticate with the server.

    Example:
        >>> creds = Credentials("me@gmail.com", "app-password")
        >>> "app-password" in repr(creds)
        False
    """

    email: str
    password: str = field(repr=False)

    def __repr__(self) -> str:
        return f"Credentials(email={self.email!r}, password='[REDACTED]')"


__all__ = [
    "Credentials",
    "ErrorCode",
    "OutboundMessage",
    "Recipients",
    "SendEmailData",
    "SendEmailError",
    "SendEmailOptions",
    "SendEmailResponse",
    "SentMessageInfo",
    "VerifyResult",
    "normalize_fields",
]
