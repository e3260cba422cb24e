"""CLI command implementations registered on the root group.

Contents:
    * :mod:`.info` - ``info``
    * :mod:`.config` - ``config`` and ``config-deploy``
    * :mod:`.providers` - ``providers`` and ``resolve``
    * :mod:`.email` - ``send`` and ``verify``
"""

from __future__ import annotations

from .config import cli_config, cli_config_deploy
from .email import cli_send, cli_verify
from .info import cli_info
from .providers import cli_providers, cli_resolve

__all__ = [
    "cli_config",
    "cli_config_deploy",
    "cli_info",
    "cli_providers",
    "cli_resolve",
    "cli_send",
    "cli_verify",
]
