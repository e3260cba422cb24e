"""Application layer - port definitions.

Contains the Protocols that adapters implement and the composition root
wires together.

Contents:
    * :mod:`.ports` - Transport and callable Protocol definitions
"""

from __future__ import annotations

from .ports import (
    DeployConfiguration,
    DisplayConfig,
    GetConfig,
    GetDefaultConfigPath,
    InitLogging,
    LoadCredentialsFromEnv,
    LoadMailDropConfigFromDict,
    Transport,
    TransportFactory,
)

__all__ = [
    "DeployConfiguration",
    "DisplayConfig",
    "GetConfig",
    "GetDefaultConfigPath",
    "InitLogging",
    "LoadCredentialsFromEnv",
    "LoadMailDropConfigFromDict",
    "Transport",
    "TransportFactory",
]
