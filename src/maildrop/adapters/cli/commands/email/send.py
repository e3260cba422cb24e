"""``send`` command: deliver one message through the resolved account."""

from __future__ import annotations

import asyncio
import logging

import lib_log_rich.runtime
import rich_click as click

from maildrop.domain.messages import SendEmailOptions

from ...constants import CLICK_CONTEXT_SETTINGS
from ...context import get_cli_context
from ...exit_codes import ExitCode
from ._common import account_options, build_mailer, echo_json, filter_sentinels

logger = logging.getLogger(__name__)


@click.command("send", context_settings=CLICK_CONTEXT_SETTINGS)
@click.option("--to", "to", multiple=True, required=True, help="Recipient address (repeatable)")
@click.option("--cc", multiple=True, help="Carbon-copy address (repeatable)")
@click.option("--bcc", multiple=True, help="Blind-copy address (repeatable)")
@click.option("--subject", required=True, help="Subject line")
@click.option("--text", default=None, help="Plain-text body")
@click.option("--html", default=None, help="HTML body (sent as multipart/alternative together with --text)")
@click.option("--from", "from_address", default=None, help="Sender address (default: the account address)")
@click.option("--reply-to", default=None, help="Reply-To address")
@click.option("--json", "as_json", is_flag=True, default=False, help="Print the result envelope as JSON")
@account_options
@click.pass_context
def cli_send(
    ctx: click.Context,
    to: tuple[str, ...],
    cc: tuple[str, ...],
    bcc: tuple[str, ...],
    subject: str,
    text: str | None,
    html: str | None,
    from_address: str | None,
    reply_to: str | None,
    as_json: bool,
    email: str | None,
    password: str | None,
    smtp_host: str | None,
    smtp_port: int | None,
    smtp_secure: bool | None,
    timeout: float | None,
    strict_provider_lookup: bool | None,
) -> None:
    """Send an email.

    \b
    Exit codes: 0 sent, 69 rejected by or unable to reach the server,
    78 no account or no usable SMTP settings.
    """
    cli_ctx = get_cli_context(ctx)
    extra = {"command": "send", "recipients": len(to) + len(cc) + len(bcc), "subject": subject}

    with lib_log_rich.runtime.bind(job_id="cli-send", extra=extra):
        mailer = build_mailer(
            cli_ctx,
            filter_sentinels(
                email=email,
                password=password,
                smtp_host=smtp_host,
                smtp_port=smtp_port,
                smtp_secure=smtp_secure,
                timeout=timeout,
                strict_provider_lookup=strict_provider_lookup,
            ),
        )
        options = SendEmailOptions(
            to=to,
            subject=subject,
            from_address=from_address,
            html=html,
            text=text,
            cc=cc,
            bcc=bcc,
            reply_to=reply_to,
        )
        logger.info("Sending email", extra={"host": mailer.smtp_config.host, "has_html": html is not None})
        response = asyncio.run(mailer.send(options))

        if as_json:
            echo_json(response.to_dict())
        if response.error is not None:
            if not as_json:
                code = f" [{response.error.code}]" if response.error.code else ""
                click.echo(f"\nError: Failed to send email{code} - {response.error.message}", err=True)
            raise SystemExit(ExitCode.SMTP_FAILURE)
        if not as_json and response.data is not None:
            click.echo(f"\nEmail sent successfully! Message-ID: {response.data.message_id}")


__all__ = ["cli_send"]
