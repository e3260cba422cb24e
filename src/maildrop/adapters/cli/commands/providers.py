"""``providers`` and ``resolve`` commands: inspect the provider table."""

from __future__ import annotations

import logging

import lib_log_rich.runtime
import orjson
import rich_click as click
from rich.console import Console
from rich.table import Table

from maildrop.domain.enums import OutputFormat
from maildrop.domain.errors import UnknownProviderError
from maildrop.domain.providers import PROVIDER_RULES, SMTPConfig, extract_domain, find_provider, resolve_smtp_config

from ..constants import CLICK_CONTEXT_SETTINGS
from ..context import get_cli_context
from ..exit_codes import ExitCode

logger = logging.getLogger(__name__)

_FORMAT_OPTION = click.option(
    "--format",
    "output_format",
    type=click.Choice([f.value for f in OutputFormat], case_sensitive=False),
    default=OutputFormat.HUMAN.value,
    help="Output format (human-readable or JSON)",
)


def _config_dict(config: SMTPConfig) -> dict[str, object]:
    return {"host": config.host, "port": config.port, "secure": config.secure}


@click.command("providers", context_settings=CLICK_CONTEXT_SETTINGS)
@_FORMAT_OPTION
def cli_providers(output_format: str) -> None:
    """List the built-in provider table in lookup order."""
    fmt = OutputFormat(output_format.lower())
    with lib_log_rich.runtime.bind(job_id="cli-providers", extra={"command": "providers", "format": fmt.value}):
        if fmt is OutputFormat.JSON:
            rows = [
                {
                    "name": rule.name,
                    "domains": sorted(rule.domains),
                    "suffixes": list(rule.suffixes),
                    **_config_dict(rule.config),
                    "note": rule.note,
                }
                for rule in PROVIDER_RULES
            ]
            click.echo(orjson.dumps(rows, option=orjson.OPT_INDENT_2).decode())
            return

        table = Table(title="SMTP providers")
        table.add_column("Provider")
        table.add_column("Domains")
        table.add_column("Host")
        table.add_column("Port", justify="right")
        table.add_column("TLS")
        table.add_column("Note")
        for rule in PROVIDER_RULES:
            domains = ", ".join([*sorted(rule.domains), *(f"*{suffix}" for suffix in rule.suffixes)])
            tls = "implicit" if rule.config.secure else "STARTTLS"
            table.add_row(rule.name, domains, rule.config.host, str(rule.config.port), tls, rule.note)
        Console(width=160).print(table)


@click.command("resolve", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("email")
@click.option(
    "--strict/--no-strict",
    default=None,
    help="Fail for unknown domains instead of using the default (default: maildrop.strict_provider_lookup)",
)
@_FORMAT_OPTION
@click.pass_context
def cli_resolve(ctx: click.Context, email: str, strict: bool | None, output_format: str) -> None:
    """Show the SMTP settings an account address resolves to."""
    cli_ctx = get_cli_context(ctx)
    fmt = OutputFormat(output_format.lower())
    if strict is None:
        strict = cli_ctx.services.load_maildrop_config_from_dict(cli_ctx.config.as_dict()).strict_provider_lookup

    extra = {"command": "resolve", "domain": extract_domain(email), "strict": strict}
    with lib_log_rich.runtime.bind(job_id="cli-resolve", extra=extra):
        try:
            config = resolve_smtp_config(email, strict=strict)
        except UnknownProviderError as exc:
            logger.error("Provider lookup failed", extra={"domain": exc.domain})
            click.echo(f"\nError: {exc}", err=True)
            raise SystemExit(ExitCode.CONFIG_ERROR) from exc

        rule = find_provider(email)
        provider = rule.name if rule is not None else None
        if fmt is OutputFormat.JSON:
            click.echo(orjson.dumps({"provider": provider, **_config_dict(config)}).decode())
            return
        click.echo(f"provider = {provider or '(default)'}")
        click.echo(f"host     = {config.host}")
        click.echo(f"port     = {config.port}")
        click.echo(f"secure   = {str(config.secure).lower()}")


__all__ = ["cli_providers", "cli_resolve"]
