"""In-memory adapter implementations for testing.

Lightweight implementations of the application ports that never touch the
network, the filesystem or the lib_log_rich runtime.

Contents:
    * :mod:`.config` - In-memory configuration adapters
    * :mod:`.email` - Transport spy and config loader
    * :mod:`.logging` - No-op logging initializer
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .config import (
    deploy_configuration_in_memory,
    display_config_in_memory,
    get_config_in_memory,
    get_default_config_path_in_memory,
)
from .email import (
    SpyTransport,
    TransportSpy,
    credentials_loader_in_memory,
    load_maildrop_config_from_dict_in_memory,
)
from .logging import init_logging_in_memory

# Static conformance assertions
if TYPE_CHECKING:
    from maildrop.application.ports import (
        DeployConfiguration,
        DisplayConfig,
        GetConfig,
        GetDefaultConfigPath,
        InitLogging,
        LoadCredentialsFromEnv,
        LoadMailDropConfigFromDict,
        TransportFactory,
    )

    _assert_get_config: GetConfig = get_config_in_memory
    _assert_get_default_config_path: GetDefaultConfigPath = get_default_config_path_in_memory
    _assert_deploy: DeployConfiguration = deploy_configuration_in_memory
    _assert_display: DisplayConfig = display_config_in_memory
    _assert_load_config: LoadMailDropConfigFromDict = load_maildrop_config_from_dict_in_memory
    _assert_init_logging: InitLogging = init_logging_in_memory
    _assert_transport_factory: TransportFactory = TransportSpy().create_transport
    _assert_load_credentials: LoadCredentialsFromEnv = credentials_loader_in_memory()

__all__ = [
    "SpyTransport",
    "TransportSpy",
    "credentials_loader_in_memory",
    "deploy_configuration_in_memory",
    "display_config_in_memory",
    "get_config_in_memory",
    "get_default_config_path_in_memory",
    "init_logging_in_memory",
    "load_maildrop_config_from_dict_in_memory",
]
