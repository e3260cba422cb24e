"""Process entry point shared by the console script and ``python -m maildrop``."""

from __future__ import annotations

import sys
import threading
from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING

import click
import lib_cli_exit_tools

from maildrop import __init__conf__
from maildrop.adapters.logging import shutdown_logging

from .constants import TRACEBACK_SUMMARY_LIMIT, TRACEBACK_VERBOSE_LIMIT
from .context import apply_traceback_preferences, restore_traceback_state, snapshot_traceback_state

if TYPE_CHECKING:
    from maildrop.composition import AppServices


def _run_cli(argv: Sequence[str] | None, *, services_factory: Callable[[], AppServices]) -> int:
    from .root import cli

    args = list(argv) if argv is not None else sys.argv[1:]
    try:
        cli.main(
            args=args,
            prog_name=__init__conf__.shell_command,
            obj=services_factory,
            standalone_mode=False,
        )
    except click.exceptions.Exit as exc:
        return exc.exit_code
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except BaseException as exc:
        # SystemExit from commands and KeyboardInterrupt go through the same formatter.
        verbose = bool(getattr(lib_cli_exit_tools.config, "traceback", False))
        apply_traceback_preferences(verbose)
        lib_cli_exit_tools.print_exception_message(
            trace_back=verbose,
            length_limit=TRACEBACK_VERBOSE_LIMIT if verbose else TRACEBACK_SUMMARY_LIMIT,
        )
        return lib_cli_exit_tools.get_system_exit_code(exc)
    return 0


def main(
    argv: Sequence[str] | None = None,
    *,
    restore_traceback: bool = True,
    services_factory: Callable[[], AppServices] | None = None,
) -> int:
    """Run ``maildrop`` and return its exit code.

    Args:
        argv: Arguments without the program name; None reads ``sys.argv``.
        restore_traceback: Reset lib_cli_exit_tools traceback flags afterwards.
        services_factory: Builds the :class:`AppServices`; the composition
            layer passes ``build_production``.

    Raises:
        ValueError: ``services_factory`` is missing.
    """
    if services_factory is None:
        raise ValueError("services_factory is required. Pass build_production from composition layer.")

    previous_state = snapshot_traceback_state()
    try:
        return _run_cli(argv, services_factory=services_factory)
    finally:
        if restore_traceback:
            restore_traceback_state(previous_state)
        # Worker threads must not tear down the shared runtime.
        if threading.current_thread() is threading.main_thread():
            shutdown_logging()


__all__ = ["main"]
