"""In-memory configuration adapters for testing.

Satisfy the same Protocols as the lib_layered_config adapters without
touching the filesystem.
"""

from __future__ import annotations

import tempfile
from collections.abc import Sequence
from pathlib import Path

from lib_layered_config import Config

from ...domain.enums import DeployTarget, OutputFormat


def get_config_in_memory(
    *,
    profile: str | None = None,
    start_dir: str | None = None,
) -> Config:
    """Return an empty in-memory Config."""
    return Config({}, {})


def get_default_config_path_in_memory() -> Path:
    """Return a synthetic path that is never created."""
    return Path(tempfile.gettempdir()) / "maildrop" / "defaultconfig.toml"


def deploy_configuration_in_memory(
    *,
    targets: Sequence[DeployTarget],
    force: bool = False,
    profile: str | None = None,
    set_permissions: bool = True,
) -> list[Path]:
    """Pretend to deploy; nothing is written and nothing is reported."""
    return []


def display_config_in_memory(
    config: Config,
    *,
    output_format: OutputFormat = OutputFormat.HUMAN,
    section: str | None = None,
    profile: str | None = None,
) -> None:
    """No-op display."""


__all__ = [
    "deploy_configuration_in_memory",
    "display_config_in_memory",
    "get_config_in_memory",
    "get_default_config_path_in_memory",
]
