"""Values shared by the CLI modules."""

from __future__ import annotations

from typing import Final

#: Context flags applied to every command so ``-h`` works everywhere.
CLICK_CONTEXT_SETTINGS: Final[dict[str, list[str]]] = {"help_option_names": ["-h", "--help"]}

#: Characters of traceback text printed without ``--traceback``.
TRACEBACK_SUMMARY_LIMIT: Final[int] = 500

#: Characters of traceback text printed with ``--traceback``.
TRACEBACK_VERBOSE_LIMIT: Final[int] = 10_000

__all__ = [
    "CLICK_CONTEXT_SETTINGS",
    "TRACEBACK_SUMMARY_LIMIT",
    "TRACEBACK_VERBOSE_LIMIT",
]
