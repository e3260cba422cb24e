"""Composition root wiring adapters to application ports."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..adapters.config.deploy import deploy_configuration
from ..adapters.config.display import display_config
from ..adapters.config.loader import get_config, get_default_config_path
from ..adapters.email.config import load_maildrop_config_from_dict
from ..adapters.email.credentials import load_credentials_from_env
from ..adapters.email.transport import SMTPTransport
from ..adapters.logging.setup import init_logging

# Checked by the type checker only: each adapter must satisfy its port.
if TYPE_CHECKING:
    from ..adapters.memory.email import TransportSpy
    from ..application.ports import (
        DeployConfiguration,
        DisplayConfig,
        GetConfig,
        GetDefaultConfigPath,
        InitLogging,
        LoadCredentialsFromEnv,
        LoadMailDropConfigFromDict,
        TransportFactory,
    )

    _assert_get_config: GetConfig = get_config
    _assert_get_default_config_path: GetDefaultConfigPath = get_default_config_path
    _assert_deploy_configuration: DeployConfiguration = deploy_configuration
    _assert_display_config: DisplayConfig = display_config
    _assert_load_maildrop_config_from_dict: LoadMailDropConfigFromDict = load_maildrop_config_from_dict
    _assert_load_credentials_from_env: LoadCredentialsFromEnv = load_credentials_from_env
    _assert_transport_factory: TransportFactory = SMTPTransport
    _assert_init_logging: InitLogging = init_logging


@dataclass(frozen=True, slots=True)
class AppServices:
    """Frozen container holding all application port implementations."""

    get_config: GetConfig
    get_default_config_path: GetDefaultConfigPath
    deploy_configuration: DeployConfiguration
    display_config: DisplayConfig
    load_maildrop_config_from_dict: LoadMailDropConfigFromDict
    load_credentials_from_env: LoadCredentialsFromEnv
    transport_factory: TransportFactory
    init_logging: InitLogging


def build_production() -> AppServices:
    """Wire lib_layered_config, lib_log_rich and the aiosmtplib transport."""
    return AppServices(
        get_config=get_config,
        get_default_config_path=get_default_config_path,
        deploy_configuration=deploy_configuration,
        display_config=display_config,
        load_maildrop_config_from_dict=load_maildrop_config_from_dict,
        load_credentials_from_env=load_credentials_from_env,
        transport_factory=SMTPTransport,
        init_logging=init_logging,
    )


def build_testing(*, spy: TransportSpy | None = None, environ: Mapping[str, str] | None = None) -> AppServices:
    """Wire in-memory adapters into an AppServices container.

    Configuration starts empty and the process environment is never read.

    Args:
        spy: TransportSpy to record transports on; a fresh one when None.
        environ: Stand-in for the ``MAILDROP_*`` variables.
    """
    from ..adapters.memory import (
        TransportSpy,
        credentials_loader_in_memory,
        deploy_configuration_in_memory,
        display_config_in_memory,
        get_config_in_memory,
        get_default_config_path_in_memory,
        init_logging_in_memory,
        load_maildrop_config_from_dict_in_memory,
    )

    transport_spy = spy if spy is not None else TransportSpy()

    return AppServices(
        get_config=get_config_in_memory,
        get_default_config_path=get_default_config_path_in_memory,
        deploy_configuration=deploy_configuration_in_memory,
        display_config=display_config_in_memory,
        load_maildrop_config_from_dict=load_maildrop_config_from_dict_in_memory,
        load_credentials_from_env=credentials_loader_in_memory(environ),
        transport_factory=transport_spy.create_transport,
        init_logging=init_logging_in_memory,
    )


__all__ = [
    "AppServices",
    "build_production",
    "build_testing",
    "deploy_configuration",
    "display_config",
    "get_config",
    "get_default_config_path",
    "init_logging",
    "load_credentials_from_env",
    "load_maildrop_config_from_dict",
]
