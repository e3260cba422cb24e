"""Enumerations shared by the configuration commands."""

from __future__ import annotations

from enum import Enum


class OutputFormat(str, Enum):
    """How the ``config`` command renders the merged configuration.

    Example:
        >>> OutputFormat("json") is OutputFormat.JSON
        True
    """

    HUMAN = "human"
    JSON = "json"


class DeployTarget(str, Enum):
    """Configuration layer that ``config-deploy`` writes the defaults into.

    ``app`` and ``host`` are system-wide and usually need elevated rights;
    ``user`` lands in the invoking user's configuration directory.

    Example:
        >>> [target.value for target in DeployTarget]
        ['app', 'host', 'user']
    """

    APP = "app"
    HOST = "host"
    USER = "user"


__all__ = [
    "DeployTarget",
    "OutputFormat",
]
