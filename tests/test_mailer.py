"""MailDrop facade: settings resolution, send envelopes and verification."""

from __future__ import annotations

import aiosmtplib
import pytest

from maildrop.adapters.email.mailer import MailDrop
from maildrop.adapters.email.transport import SMTPTransport
from maildrop.adapters.memory import TransportSpy
from maildrop.domain.errors import TransportError, UnknownProviderError
from maildrop.domain.messages import Credentials, SendEmailOptions
from maildrop.domain.providers import SMTPConfig

# ======================== Construction ========================


@pytest.mark.os_agnostic
def test_facade_builds_one_transport_from_the_provider_table(transport_spy: TransportSpy) -> None:
    mailer = MailDrop("me@hotmail.com", "pw", timeout=12.5, transport_factory=transport_spy.create_transport)

    assert mailer.smtp_config == SMTPConfig("smtp-mail.outlook.com", 587, False)
    assert transport_spy.created == [
        {
            "config": SMTPConfig("smtp-mail.outlook.com", 587, False),
            "credentials": Credentials("me@hotmail.com", "pw"),
            "timeout": 12.5,
        }
    ]


@pytest.mark.os_agnostic
def test_explicit_smtp_config_wins_over_the_table(transport_spy: TransportSpy) -> None:
    custom = SMTPConfig("mail.example.org", 465, True)

    mailer = MailDrop("me@gmail.com", "pw", custom, transport_factory=transport_spy.create_transport)

    assert mailer.smtp_config is custom
    assert transport_spy.created[0]["config"] is custom


@pytest.mark.os_agnostic
def test_strict_facade_refuses_unknown_domains(transport_spy: TransportSpy) -> None:
    with pytest.raises(UnknownProviderError):
        MailDrop("me@example.org", "pw", strict=True, transport_factory=transport_spy.create_transport)

    assert transport_spy.created == []


@pytest.mark.os_agnostic
def test_transport_construction_errors_propagate() -> None:
    def broken_factory(**_kwargs: object) -> SMTPTransport:
        raise RuntimeError("cannot build transport")

    with pytest.raises(RuntimeError, match="cannot build transport"):
        MailDrop("me@gmail.com", "pw", transport_factory=broken_factory)  # type: ignore[arg-type]


@pytest.mark.os_agnostic
def test_default_factory_is_the_smtp_transport() -> None:
    mailer = MailDrop("me@gmail.com", "pw")

    assert isinstance(mailer._transport, SMTPTransport)  # pyright: ignore[reportPrivateUsage]


@pytest.mark.os_agnostic
def test_repr_hides_password(transport_spy: TransportSpy) -> None:
    mailer = MailDrop("me@gmail.com", "hunter2", transport_factory=transport_spy.create_transport)

    assert "hunter2" not in repr(mailer)


# ======================== send ========================


@pytest.mark.os_agnostic
@pytest.mark.asyncio
async def test_send_success_returns_matching_ids(transport_spy: TransportSpy) -> None:
    transport_spy.message_id = "<42@gmail.com>"
    mailer = MailDrop("me@gmail.com", "pw", transport_factory=transport_spy.create_transport)

    response = await mailer.send(to="you@x.com", subject="Hi", html="<p>hi</p>")

    assert response.error is None
    assert response.data is not None
    assert response.data.id == response.data.message_id == "<42@gmail.com>"


@pytest.mark.os_agnostic
@pytest.mark.asyncio
async def test_send_joins_recipient_lists(transport_spy: TransportSpy) -> None:
    mailer = MailDrop("me@gmail.com", "pw", transport_factory=transport_spy.create_transport)

    await mailer.send(to=["a@x.com", "b@y.com"], subject="Hi", cc=["c@z.com"], bcc="d@w.com")

    sent = transport_spy.sent[0]
    assert sent.to == "a@x.com, b@y.com"
    assert sent.cc == "c@z.com"
    assert sent.bcc == "d@w.com"


@pytest.mark.os_agnostic
@pytest.mark.asyncio
async def test_send_defaults_sender_to_account(transport_spy: TransportSpy) -> None:
    mailer = MailDrop("me@gmail.com", "pw", transport_factory=transport_spy.create_transport)

    await mailer.send(to="you@x.com", subject="Hi", text="hello")

    assert transport_spy.sent[0].from_address == "me@gmail.com"


@pytest.mark.os_agnostic
@pytest.mark.asyncio
async def test_send_keeps_explicit_sender_and_reply_to(transport_spy: TransportSpy) -> None:
    mailer = MailDrop("me@gmail.com", "pw", transport_factory=transport_spy.create_transport)
    options = SendEmailOptions(to="you@x.com", subject="Hi", from_address="Team <team@x.com>", reply_to="r@x.com")

    await mailer.send(options)

    assert transport_spy.sent[0].from_address == "Team <team@x.com>"
    assert transport_spy.sent[0].reply_to == "r@x.com"


@pytest.mark.os_agnostic
@pytest.mark.asyncio
async def test_send_merges_keyword_fields_over_prepared_options(transport_spy: TransportSpy) -> None:
    mailer = MailDrop("me@gmail.com", "pw", transport_factory=transport_spy.create_transport)
    options = SendEmailOptions(to="a@x.com", subject="Hi", text="hello")

    response = await mailer.send(options, cc=["c@x.com", "d@x.com"], subject="Updated", **{"from": "team@x.com"})

    assert response.ok
    sent = transport_spy.sent[0]
    assert sent.to == "a@x.com"
    assert sent.cc == "c@x.com, d@x.com"
    assert sent.subject == "Updated"
    assert sent.text == "hello"
    assert sent.from_address == "team@x.com"


@pytest.mark.os_agnostic
@pytest.mark.asyncio
async def test_send_accepts_a_plain_mapping_request(transport_spy: TransportSpy) -> None:
    mailer = MailDrop("me@gmail.com", "pw", transport_factory=transport_spy.create_transport)
    request = {
        "to": ["a@x.com", "b@y.com"],
        "subject": "Hi",
        "from": "Team <team@x.com>",
        "replyTo": "r@x.com",
        "html": "<p>hi</p>",
    }

    response = await mailer.send(request)

    assert response.ok
    sent = transport_spy.sent[0]
    assert sent.to == "a@x.com, b@y.com"
    assert sent.from_address == "Team <team@x.com>"
    assert sent.reply_to == "r@x.com"
    assert sent.html == "<p>hi</p>"


@pytest.mark.os_agnostic
@pytest.mark.asyncio
async def test_send_mapping_request_takes_keyword_overrides(transport_spy: TransportSpy) -> None:
    mailer = MailDrop("me@gmail.com", "pw", transport_factory=transport_spy.create_transport)

    await mailer.send({"to": "a@x.com", "subject": "Hi"}, bcc="hidden@x.com")

    assert transport_spy.sent[0].bcc == "hidden@x.com"
    assert transport_spy.sent[0].from_address == "me@gmail.com"


@pytest.mark.os_agnostic
@pytest.mark.asyncio
async def test_send_rejects_an_unknown_merge_field_as_an_envelope(transport_spy: TransportSpy) -> None:
    mailer = MailDrop("me@gmail.com", "pw", transport_factory=transport_spy.create_transport)

    response = await mailer.send(SendEmailOptions(to="a@x.com", subject="Hi"), attachments=["f.txt"])

    assert response.error is not None
    assert transport_spy.sent == []


@pytest.mark.os_agnostic
@pytest.mark.asyncio
async def test_send_rejects_an_unsupported_request_type(transport_spy: TransportSpy) -> None:
    mailer = MailDrop("me@gmail.com", "pw", transport_factory=transport_spy.create_transport)

    response = await mailer.send("a@x.com")  # type: ignore[arg-type]

    assert response.error is not None
    assert "Expected SendEmailOptions or a mapping" in response.error.message
    assert transport_spy.sent == []


@pytest.mark.os_agnostic
@pytest.mark.asyncio
async def test_send_failure_keeps_a_numeric_code_unchanged(transport_spy: TransportSpy) -> None:
    transport_spy.send_exception = aiosmtplib.SMTPAuthenticationError(535, "Authentication failed")
    mailer = MailDrop("me@gmail.com", "pw", transport_factory=transport_spy.create_transport)

    response = await mailer.send(to="you@x.com", subject="Hi")

    assert response.error is not None
    assert response.error.code == 535
    assert response.to_dict()["error"]["code"] == 535


@pytest.mark.os_agnostic
@pytest.mark.asyncio
async def test_send_failure_passes_message_and_code_through(transport_spy: TransportSpy) -> None:
    transport_spy.send_exception = TransportError("535 Authentication failed", code="EAUTH", smtp_code=535)
    mailer = MailDrop("me@gmail.com", "pw", transport_factory=transport_spy.create_transport)

    response = await mailer.send(to="you@x.com", subject="Hi")

    assert response.data is None
    assert response.error is not None
    assert response.error.message == "535 Authentication failed"
    assert response.error.code == "EAUTH"


@pytest.mark.os_agnostic
@pytest.mark.asyncio
async def test_send_failure_without_text_uses_default_message(transport_spy: TransportSpy) -> None:
    transport_spy.send_exception = RuntimeError()
    mailer = MailDrop("me@gmail.com", "pw", transport_factory=transport_spy.create_transport)

    response = await mailer.send(to="you@x.com", subject="Hi")

    assert response.error is not None
    assert response.error.message == "Failed to send email"
    assert response.error.code is None


@pytest.mark.os_agnostic
@pytest.mark.asyncio
async def test_send_never_raises_for_invalid_fields(transport_spy: TransportSpy) -> None:
    mailer = MailDrop("me@gmail.com", "pw", transport_factory=transport_spy.create_transport)

    response = await mailer.send(to=["a@x.com", 7], subject="Hi")

    assert response.error is not None
    assert "must be strings" in response.error.message
    assert transport_spy.sent == []


@pytest.mark.os_agnostic
@pytest.mark.asyncio
async def test_failed_send_logs_without_password(transport_spy: TransportSpy, caplog: pytest.LogCaptureFixture) -> None:
    transport_spy.send_exception = TransportError("bad password hunter2", code="EAUTH")
    mailer = MailDrop("me@gmail.com", "hunter2", transport_factory=transport_spy.create_transport)

    await mailer.send(to="you@x.com", subject="Hi")

    assert all("hunter2" not in str(getattr(r, "error", "")) for r in caplog.records)


# ======================== verify ========================


@pytest.mark.os_agnostic
@pytest.mark.asyncio
async def test_verify_is_true_when_transport_verifies(transport_spy: TransportSpy) -> None:
    mailer = MailDrop("me@gmail.com", "pw", transport_factory=transport_spy.create_transport)

    assert await mailer.verify() is True
    assert transport_spy.verify_calls == 1


@pytest.mark.os_agnostic
@pytest.mark.asyncio
async def test_verify_is_false_when_transport_raises(transport_spy: TransportSpy) -> None:
    transport_spy.verify_exception = TransportError("refused", code="ECONNECTION")
    mailer = MailDrop("me@gmail.com", "pw", transport_factory=transport_spy.create_transport)

    assert await mailer.verify() is False


@pytest.mark.os_agnostic
@pytest.mark.asyncio
async def test_verify_detailed_keeps_failure_detail(transport_spy: TransportSpy) -> None:
    transport_spy.verify_exception = TransportError("refused", code="ECONNECTION")
    mailer = MailDrop("me@gmail.com", "pw", transport_factory=transport_spy.create_transport)

    result = await mailer.verify_detailed()

    assert not result.ok
    assert result.error is not None
    assert (result.error.message, result.error.code) == ("refused", "ECONNECTION")
