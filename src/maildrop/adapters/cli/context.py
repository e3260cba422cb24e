"""Typed state shared between the root group and its subcommands."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import lib_cli_exit_tools
import rich_click as click
from lib_layered_config import Config

if TYPE_CHECKING:
    from maildrop.composition import AppServices

TracebackState = tuple[bool, bool]
"""``(traceback, traceback_force_color)`` as stored in lib_cli_exit_tools."""


@dataclass(slots=True)
class CLIContext:
    """What the root group leaves in ``ctx.obj`` for subcommands."""

    traceback: bool
    config: Config
    services: AppServices
    profile: str | None = None
    set_overrides: tuple[str, ...] = ()


def store_cli_context(
    ctx: click.Context,
    *,
    traceback: bool,
    config: Config,
    services: AppServices,
    profile: str | None = None,
    set_overrides: tuple[str, ...] = (),
) -> None:
    """Replace the services factory in ``ctx.obj`` with a :class:`CLIContext`.

    ``set_overrides`` is kept so commands reloading another profile can
    reapply them.
    """
    ctx.obj = CLIContext(
        traceback=traceback,
        config=config,
        services=services,
        profile=profile,
        set_overrides=set_overrides,
    )


def get_cli_context(ctx: click.Context) -> CLIContext:
    """Return the :class:`CLIContext` stored by the root group.

    Raises:
        RuntimeError: The command was invoked without the root group.
    """
    if not isinstance(ctx.obj, CLIContext):
        raise RuntimeError("CLI context not initialized. Call store_cli_context first.")
    return ctx.obj


def apply_traceback_preferences(enabled: bool) -> None:
    """Mirror ``--traceback`` into lib_cli_exit_tools.

    Example:
        >>> apply_traceback_preferences(False)
        >>> lib_cli_exit_tools.config.traceback
        False
    """
    lib_cli_exit_tools.config.traceback = bool(enabled)
    lib_cli_exit_tools.config.traceback_force_color = bool(enabled)


def snapshot_traceback_state() -> TracebackState:
    """Capture the current lib_cli_exit_tools traceback flags."""
    config = lib_cli_exit_tools.config
    return (
        bool(getattr(config, "traceback", False)),
        bool(getattr(config, "traceback_force_color", False)),
    )


def restore_traceback_state(state: TracebackState) -> None:
    """Put back flags captured by :func:`snapshot_traceback_state`."""
    lib_cli_exit_tools.config.traceback, lib_cli_exit_tools.config.traceback_force_color = state


__all__ = [
    "CLIContext",
    "TracebackState",
    "apply_traceback_preferences",
    "get_cli_context",
    "restore_traceback_state",
    "snapshot_traceback_state",
    "store_cli_context",
]
