"""Shared pytest fixtures for maildrop tests.

CLI tests run against in-memory adapters: configuration is injected as a
plain ``Config``, the environment is a dict, and SMTP is a ``TransportSpy``.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterator
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import TYPE_CHECKING, Any

import lib_cli_exit_tools
import pytest
from click.testing import CliRunner
from lib_layered_config import Config

if TYPE_CHECKING:
    from maildrop.adapters.memory.email import TransportSpy
    from maildrop.composition import AppServices


def _load_dotenv() -> None:
    """Load a project ``.env`` when present, e.g. for manual SMTP smoke tests."""
    from dotenv import load_dotenv

    env_file = Path(__file__).parent.parent / ".env"
    if env_file.exists():
        load_dotenv(env_file)


_load_dotenv()

ANSI_ESCAPE_PATTERN = re.compile(r"\x1B\[[0-?]*[ -/]*[@-~]")
CONFIG_FIELDS: tuple[str, ...] = tuple(field.name for field in fields(type(lib_cli_exit_tools.config)))


def _snapshot_cli_config() -> dict[str, object]:
    return {name: getattr(lib_cli_exit_tools.config, name) for name in CONFIG_FIELDS}


def _restore_cli_config(snapshot: dict[str, object]) -> None:
    for name, value in snapshot.items():
        setattr(lib_cli_exit_tools.config, name, value)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a fresh CliRunner per test."""
    return CliRunner()


@pytest.fixture
def strip_ansi() -> Callable[[str], str]:
    """Return a helper that strips ANSI escape sequences from a string."""

    def _strip(value: str) -> str:
        return ANSI_ESCAPE_PATTERN.sub("", value)

    return _strip


@pytest.fixture
def managed_traceback_state() -> Iterator[None]:
    """Reset lib_cli_exit_tools traceback flags and restore them afterwards."""
    lib_cli_exit_tools.reset_config()
    lib_cli_exit_tools.config.traceback = False
    lib_cli_exit_tools.config.traceback_force_color = False
    snapshot = _snapshot_cli_config()
    try:
        yield
    finally:
        _restore_cli_config(snapshot)


@pytest.fixture
def clear_config_cache() -> Iterator[None]:
    """Clear the get_config cache before the test."""
    from maildrop.adapters.config import loader

    loader.get_config.cache_clear()
    yield


@pytest.fixture
def config_factory() -> Callable[[dict[str, Any]], Config]:
    """Create real Config instances from plain dicts, without file I/O."""

    def _factory(data: dict[str, Any]) -> Config:
        return Config(data, {})

    return _factory


@pytest.fixture
def testing_factory() -> Callable[[], AppServices]:
    """In-memory services started with the real lib_log_rich initializer.

    Commands bind log context through the runtime, so CLI tests initialise it.
    """
    from maildrop.adapters.logging import init_logging
    from maildrop.composition import build_testing

    services = replace(build_testing(), init_logging=init_logging)
    return lambda: services


@pytest.fixture
def transport_spy() -> TransportSpy:
    """Provide a fresh TransportSpy."""
    from maildrop.adapters.memory import TransportSpy

    return TransportSpy()


@pytest.fixture
def account_env() -> dict[str, str]:
    """Environment mapping holding a complete Gmail account."""
    return {"MAILDROP_EMAIL": "sender@gmail.com", "MAILDROP_PASSWORD": "app-password"}


@dataclass
class MailCliContext:
    """Services factory plus the spy it sends through."""

    factory: Callable[[], AppServices]
    spy: TransportSpy


@pytest.fixture
def mail_cli_context(
    clear_config_cache: None,
) -> Callable[..., MailCliContext]:
    """Build CLI services from a ``[maildrop]`` section and an environment dict.

    Example:
        def test_send(cli_runner, mail_cli_context):
            ctx = mail_cli_context({"email": "me@gmail.com", "password": "pw"})
            result = cli_runner.invoke(cli, ["send", "--to", "a@x.com", "--subject", "Hi"], obj=ctx.factory)
            assert ctx.spy.sent[0].to == "a@x.com"
    """
    from maildrop.adapters.logging import init_logging
    from maildrop.adapters.memory import TransportSpy as TransportSpyImpl
    from maildrop.composition import build_testing

    def _create(section: dict[str, Any] | None = None, environ: dict[str, str] | None = None) -> MailCliContext:
        spy = TransportSpyImpl()
        config = Config({"maildrop": section or {}}, {})

        def _fake_get_config(**_kwargs: Any) -> Config:
            return config

        services = replace(
            build_testing(spy=spy, environ=environ),
            get_config=_fake_get_config,
            init_logging=init_logging,
        )
        return MailCliContext(factory=lambda: services, spy=spy)

    return _create


@pytest.fixture
def config_cli_context(
    clear_config_cache: None,
) -> Callable[[dict[str, Any]], Callable[[], AppServices]]:
    """Return a factory producing services whose config is ``config_data``.

    Display goes through the real lib_layered_config renderer.
    """
    from maildrop.adapters.config.display import display_config
    from maildrop.adapters.logging import init_logging
    from maildrop.composition import build_testing

    def _create(config_data: dict[str, Any]) -> Callable[[], AppServices]:
        config = Config(config_data, {})

        def _fake_get_config(**_kwargs: Any) -> Config:
            return config

        services = replace(
            build_testing(),
            get_config=_fake_get_config,
            display_config=display_config,
            init_logging=init_logging,
        )
        return lambda: services

    return _create
