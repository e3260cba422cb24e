"""``verify`` command: check connectivity and credentials without sending."""

from __future__ import annotations

import asyncio
import logging

import lib_log_rich.runtime
import rich_click as click

from ...constants import CLICK_CONTEXT_SETTINGS
from ...context import get_cli_context
from ...exit_codes import ExitCode
from ._common import account_options, build_mailer, echo_json, filter_sentinels

logger = logging.getLogger(__name__)


@click.command("verify", context_settings=CLICK_CONTEXT_SETTINGS)
@click.option("--json", "as_json", is_flag=True, default=False, help="Print the result as JSON")
@account_options
@click.pass_context
def cli_verify(
    ctx: click.Context,
    as_json: bool,
    email: str | None,
    password: str | None,
    smtp_host: str | None,
    smtp_port: int | None,
    smtp_secure: bool | None,
    timeout: float | None,
    strict_provider_lookup: bool | None,
) -> None:
    """Connect and log in to the account's SMTP server, then disconnect."""
    cli_ctx = get_cli_context(ctx)
    with lib_log_rich.runtime.bind(job_id="cli-verify", extra={"command": "verify"}):
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
        smtp = mailer.smtp_config
        result = asyncio.run(mailer.verify_detailed())

        if as_json:
            payload: dict[str, object] = {"ok": result.ok, "host": smtp.host, "port": smtp.port}
            if result.error is not None:
                payload["error"] = {"message": result.error.message, "code": result.error.code}
            echo_json(payload)
        elif result:
            click.echo(f"\nSMTP login to {smtp.host}:{smtp.port} succeeded.")
        else:
            reason = result.error.message if result.error is not None else "login rejected"
            click.echo(f"\nError: SMTP login to {smtp.host}:{smtp.port} failed - {reason}", err=True)

        if not result:
            raise SystemExit(ExitCode.SMTP_FAILURE)


__all__ = ["cli_verify"]
