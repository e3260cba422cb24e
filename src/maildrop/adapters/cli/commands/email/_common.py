"""Account resolution and error handling shared by ``send`` and ``verify``."""

from __future__ import annotations

import functools
import logging
from collections.abc import Callable
from typing import Any, NoReturn

import orjson
import rich_click as click
from pydantic import ValidationError

from maildrop import __init__conf__
from maildrop.adapters.email.config import MailDropConfig
from maildrop.adapters.email.mailer import MailDrop
from maildrop.domain.errors import ConfigurationError, MissingCredentialsError
from maildrop.domain.messages import Credentials

from ...context import CLIContext
from ...exit_codes import ExitCode

logger = logging.getLogger(__name__)


def filter_sentinels(**kwargs: Any) -> dict[str, Any]:
    """Drop options the user did not pass (None).

    Example:
        >>> filter_sentinels(smtp_host="h", smtp_port=None)
        {'smtp_host': 'h'}
    """
    return {key: value for key, value in kwargs.items() if value is not None}


def apply_validated_overrides(base: MailDropConfig, overrides: dict[str, Any]) -> MailDropConfig:
    """Merge CLI overrides and re-run every validator.

    Raises:
        ValidationError: An override is out of range or inconsistent.
    """
    if not overrides:
        return base
    return MailDropConfig.model_validate({**base.model_dump(), **overrides})


def account_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Add the per-invocation account and SMTP overrides to a command."""
    options = [
        click.option("--email", default=None, help="Account address (default: maildrop.email or MAILDROP_EMAIL)"),
        click.option(
            "--password",
            default=None,
            help="Account password (default: maildrop.password or MAILDROP_PASSWORD)",
        ),
        click.option("--smtp-host", default=None, help="Explicit SMTP host instead of the provider table"),
        click.option("--smtp-port", type=int, default=None, help="Explicit SMTP port (default 587 with --smtp-host)"),
        click.option("--secure/--starttls", "smtp_secure", default=None, help="Implicit TLS or STARTTLS"),
        click.option("--timeout", type=float, default=None, help="Seconds to wait per SMTP step"),
        click.option(
            "--strict/--no-strict",
            "strict_provider_lookup",
            default=None,
            help="Fail for domains missing from the provider table",
        ),
    ]
    return functools.reduce(lambda f, opt: opt(f), reversed(options), func)


def resolve_credentials(cli_ctx: CLIContext, config: MailDropConfig) -> Credentials:
    """Combine configured account values with the ``MAILDROP_*`` pair.

    Values from configuration or command options win field by field; the
    environment fills whatever is still missing.

    Raises:
        MissingCredentialsError: No source provides an email and a password.
    """
    configured = config.credentials()
    if configured is not None:
        return configured
    from_env = cli_ctx.services.load_credentials_from_env()
    email = config.email or (from_env.email if from_env else None)
    password = config.password or (from_env.password if from_env else None)
    if not email or not password:
        raise MissingCredentialsError(
            "No account configured. Set maildrop.email and maildrop.password, "
            "or MAILDROP_EMAIL and MAILDROP_PASSWORD."
        )
    return Credentials(email=email, password=password)


def build_mailer(cli_ctx: CLIContext, overrides: dict[str, Any]) -> MailDrop:
    """Build the :class:`MailDrop` facade for one command invocation.

    Exits with ``INVALID_ARGUMENT`` for rejected option values and
    ``CONFIG_ERROR`` for missing credentials or an unknown provider under
    strict lookup.
    """
    try:
        config = cli_ctx.services.load_maildrop_config_from_dict(cli_ctx.config.as_dict())
        config = apply_validated_overrides(config, overrides)
    except ValidationError as exc:
        fail(exc, "Invalid account configuration", "Invalid option value", exit_code=ExitCode.INVALID_ARGUMENT)

    try:
        credentials = resolve_credentials(cli_ctx, config)
        mailer = MailDrop(
            credentials.email,
            credentials.password,
            config.custom_smtp(),
            timeout=config.timeout,
            strict=config.strict_provider_lookup,
            transport_factory=cli_ctx.services.transport_factory,
        )
    except ConfigurationError as exc:
        logger.error("Account configuration error", extra={"error": str(exc), "error_type": type(exc).__name__})
        click.echo(f"\nError: {exc}", err=True)
        click.echo(f"See: {__init__conf__.shell_command} config-deploy --target user", err=True)
        raise SystemExit(ExitCode.CONFIG_ERROR) from exc

    logger.debug("Account resolved", extra={"email": mailer.email, "host": mailer.smtp_config.host})
    return mailer


def echo_json(payload: dict[str, Any], *, err: bool = False) -> None:
    click.echo(orjson.dumps(payload).decode(), err=err)


def fail(
    exc: Exception,
    log_message: str,
    user_message: str,
    *,
    exit_code: ExitCode = ExitCode.GENERAL_ERROR,
) -> NoReturn:
    """Log ``exc``, print ``user_message`` and exit with ``exit_code``."""
    logger.error(log_message, extra={"error": str(exc), "error_type": type(exc).__name__})
    click.echo(f"\nError: {user_message} - {exc}", err=True)
    raise SystemExit(exit_code) from exc


__all__ = [
    "account_options",
    "apply_validated_overrides",
    "build_mailer",
    "echo_json",
    "fail",
    "filter_sentinels",
    "resolve_credentials",
]
