"""``config`` and ``config-deploy`` commands."""

from __future__ import annotations

import logging
from pathlib import Path

import lib_log_rich.runtime
import rich_click as click
from lib_layered_config import Config

from maildrop import __init__conf__
from maildrop.adapters.config.overrides import apply_overrides
from maildrop.domain.enums import DeployTarget, OutputFormat

from ..constants import CLICK_CONTEXT_SETTINGS
from ..context import CLIContext, get_cli_context
from ..exit_codes import ExitCode

logger = logging.getLogger(__name__)

_PROFILE_HELP = "Override profile from root command (e.g., 'work', 'test')"


def _resolve_config(cli_ctx: CLIContext, profile: str | None) -> tuple[Config, str | None]:
    """Return the config to show and the profile it belongs to.

    A subcommand ``--profile`` reloads configuration and reapplies the root
    ``--set`` overrides; otherwise the root's config is reused.
    """
    if not profile:
        return cli_ctx.config, cli_ctx.profile
    config = cli_ctx.services.get_config(profile=profile)
    return apply_overrides(config, cli_ctx.set_overrides), profile


@click.command("config", context_settings=CLICK_CONTEXT_SETTINGS)
@click.option(
    "--format",
    "output_format",
    type=click.Choice([f.value for f in OutputFormat], case_sensitive=False),
    default=OutputFormat.HUMAN.value,
    help="Output format (human-readable or JSON)",
)
@click.option(
    "--section",
    type=str,
    default=None,
    help="Show only one configuration section (e.g., 'maildrop' or 'lib_log_rich')",
)
@click.option("--profile", type=str, default=None, help=_PROFILE_HELP)
@click.pass_context
def cli_config(ctx: click.Context, output_format: str, section: str | None, profile: str | None) -> None:
    """Display the merged configuration.

    Precedence: defaults -> app -> host -> user -> dotenv -> env
    """
    cli_ctx = get_cli_context(ctx)
    config, effective_profile = _resolve_config(cli_ctx, profile)
    fmt = OutputFormat(output_format.lower())

    extra = {"command": "config", "format": fmt.value, "profile": effective_profile}
    with lib_log_rich.runtime.bind(job_id="cli-config", extra=extra):
        logger.info("Displaying configuration", extra={"section": section})
        click.echo()
        try:
            cli_ctx.services.display_config(config, output_format=fmt, section=section, profile=effective_profile)
        except ValueError as exc:
            click.echo(f"\nError: {exc}", err=True)
            raise SystemExit(ExitCode.INVALID_ARGUMENT) from exc


@click.command("config-deploy", context_settings=CLICK_CONTEXT_SETTINGS)
@click.option(
    "--target",
    "targets",
    type=click.Choice([t.value for t in DeployTarget], case_sensitive=False),
    multiple=True,
    required=True,
    help="Configuration layer(s) to write (repeatable)",
)
@click.option("--force", is_flag=True, default=False, help="Overwrite existing configuration files")
@click.option("--profile", type=str, default=None, help=_PROFILE_HELP)
@click.option(
    "--permissions/--no-permissions",
    "set_permissions",
    default=True,
    help="Set Unix permissions (755/644 for app/host, 700/600 for user).",
)
@click.pass_context
def cli_config_deploy(
    ctx: click.Context,
    targets: tuple[str, ...],
    force: bool,
    profile: str | None,
    set_permissions: bool,
) -> None:
    r"""Write the default configuration to system or user directories.

    \b
    - app:  system-wide application config (requires privileges)
    - host: per-host config (requires privileges)
    - user: your own config (~/.config/maildrop on Linux)

    Existing files are kept unless --force is given.
    """
    cli_ctx = get_cli_context(ctx)
    effective_profile = profile or cli_ctx.profile
    deploy_targets = tuple(DeployTarget(t.lower()) for t in targets)
    target_values = [t.value for t in deploy_targets]

    extra = {"command": "config-deploy", "targets": target_values, "force": force, "profile": effective_profile}
    with lib_log_rich.runtime.bind(job_id="cli-config-deploy", extra=extra):
        logger.info("Deploying configuration")
        try:
            paths = cli_ctx.services.deploy_configuration(
                targets=deploy_targets,
                force=force,
                profile=effective_profile,
                set_permissions=set_permissions,
            )
        except PermissionError as exc:
            logger.error("Permission denied when deploying configuration", extra={"error": str(exc)})
            click.echo(f"\nError: Permission denied. {exc}", err=True)
            click.echo("Hint: --target app/host usually needs sudo.", err=True)
            raise SystemExit(ExitCode.PERMISSION_DENIED) from exc
        except ValueError as exc:
            click.echo(f"\nError: {exc}", err=True)
            raise SystemExit(ExitCode.INVALID_ARGUMENT) from exc
        _report_deployment(paths, effective_profile)


def _report_deployment(paths: list[Path], profile: str | None) -> None:
    if not paths:
        click.echo("\nNo files were created (all target files already exist).")
        click.echo("Use --force to overwrite existing configuration files.")
        return
    suffix = f" (profile: {profile})" if profile else ""
    click.echo(f"\nConfiguration deployed{suffix}:")
    for path in paths:
        click.echo(f"  {path}")
    click.echo(f"\nEdit [maildrop] and check it with: {__init__conf__.shell_command} verify")


__all__ = ["cli_config", "cli_config_deploy"]
