"""Command-line interface for maildrop.

Contents:
    * :func:`.main.main` - process entry point
    * :data:`.root.cli` - root command group
    * :mod:`.commands` - subcommands
    * :mod:`.context` - typed Click context and traceback state helpers
"""

from __future__ import annotations

from .commands import (
    cli_config,
    cli_config_deploy,
    cli_info,
    cli_providers,
    cli_resolve,
    cli_send,
    cli_verify,
)
from .constants import CLICK_CONTEXT_SETTINGS, TRACEBACK_SUMMARY_LIMIT, TRACEBACK_VERBOSE_LIMIT
from .context import (
    CLIContext,
    TracebackState,
    apply_traceback_preferences,
    get_cli_context,
    restore_traceback_state,
    snapshot_traceback_state,
    store_cli_context,
)
from .exit_codes import ExitCode
from .main import main
from .root import cli

__all__ = [
    "CLICK_CONTEXT_SETTINGS",
    "CLIContext",
    "ExitCode",
    "TRACEBACK_SUMMARY_LIMIT",
    "TRACEBACK_VERBOSE_LIMIT",
    "TracebackState",
    "apply_traceback_preferences",
    "cli",
    "cli_config",
    "cli_config_deploy",
    "cli_info",
    "cli_providers",
    "cli_resolve",
    "cli_send",
    "cli_verify",
    "get_cli_context",
    "main",
    "restore_traceback_state",
    "snapshot_traceback_state",
    "store_cli_context",
]
