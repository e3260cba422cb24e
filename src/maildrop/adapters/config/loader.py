"""Layered configuration loading for maildrop.

Precedence, lowest first: bundled defaults, app, host, user, ``.env``,
environment variables (``MAILDROP___<SECTION>__<KEY>``).
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Protocol, cast

from lib_layered_config import (
    DEFAULT_MAX_PROFILE_LENGTH,
    Config,
    read_config,
    validate_profile_name,
)

from maildrop import __init__conf__

_DEFAULT_CONFIG_FILE = "defaultconfig.toml"


class ConfigLoaderProtocol(Protocol):
    """Cached loader that exposes ``cache_clear``."""

    def __call__(self, *, profile: str | None = None, start_dir: str | None = None) -> Config: ...
    def cache_clear(self) -> None: ...


def validate_profile(profile: str) -> None:
    """Reject profile names that are unsafe as a path component.

    Raises:
        ValueError: Empty, too long, reserved, or containing path separators.

    Examples:
        >>> validate_profile("staging")

        >>> validate_profile("../secrets")  # doctest: +IGNORE_EXCEPTION_DETAIL
        Traceback (most recent call last):
        ...
        ValueError: profile contains invalid characters: ../secrets
    """
    validate_profile_name(profile, max_length=DEFAULT_MAX_PROFILE_LENGTH)


@lru_cache(maxsize=1)
def get_default_config_path() -> Path:
    """Return the bundled ``defaultconfig.toml`` next to this module.

    Example:
        >>> get_default_config_path().name
        'defaultconfig.toml'
    """
    return Path(__file__).with_name(_DEFAULT_CONFIG_FILE)


# One CLI invocation reads each (profile, start_dir) pair once.
@lru_cache(maxsize=4)
def _read_cached(*, profile: str | None, start_dir: str | None) -> Config:
    return read_config(
        vendor=__init__conf__.LAYEREDCONF_VENDOR,
        app=__init__conf__.LAYEREDCONF_APP,
        slug=__init__conf__.LAYEREDCONF_SLUG,
        profile=profile,
        default_file=get_default_config_path(),
        start_dir=start_dir,
    )


def _get_config(*, profile: str | None = None, start_dir: str | None = None) -> Config:
    """Load the merged maildrop configuration.

    Args:
        profile: Optional profile name; inserts ``profile/<name>/`` into
            every layer path.
        start_dir: Directory where ``.env`` discovery starts; defaults to
            the working directory.

    Returns:
        Immutable Config with provenance for each key.

    Example:
        >>> get_config().get("maildrop", default={}).get("timeout")
        30.0
    """
    if profile is not None:
        validate_profile(profile)
    return _read_cached(profile=profile, start_dir=start_dir)


_get_config.cache_clear = _read_cached.cache_clear  # type: ignore[attr-defined]
get_config: ConfigLoaderProtocol = cast(ConfigLoaderProtocol, _get_config)


__all__ = [
    "get_config",
    "get_default_config_path",
    "validate_profile",
]
