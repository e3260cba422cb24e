"""``--set SECTION.KEY=VALUE`` overrides applied on top of the loaded Config.

Typical uses: ``--set maildrop.timeout=5``, ``--set maildrop.smtp.host=mail.example.org``
or ``--set lib_log_rich.console_level=DEBUG``.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import cast

import orjson
from lib_layered_config import Config

OverrideValue = str | int | float | bool | None | list[object] | dict[str, object]
"""Values :func:`coerce_value` can produce."""


@dataclass(frozen=True, slots=True)
class ConfigOverride:
    """One parsed ``--set`` entry: a dotted path and its typed value."""

    section: str
    key_path: tuple[str, ...]
    value: OverrideValue

    @property
    def dotted(self) -> str:
        return ".".join((self.section, *self.key_path))


def coerce_value(raw: str) -> OverrideValue:
    """Interpret ``raw`` as JSON when possible, else keep the string.

    Examples:
        >>> coerce_value("465"), coerce_value("true"), coerce_value("mail.example.org")
        (465, True, 'mail.example.org')
        >>> coerce_value("") == ""
        True
    """
    if not raw:
        return raw
    try:
        return orjson.loads(raw)
    except orjson.JSONDecodeError:
        return raw


def parse_override(raw: str) -> ConfigOverride:
    """Parse ``SECTION.KEY[.SUBKEY...]=VALUE``.

    Only the first ``=`` splits path from value, so values may contain ``=``.

    Raises:
        ValueError: No ``=``, no dot in the path, or an empty path component.

    Examples:
        >>> parse_override("maildrop.smtp.port=465")
        ConfigOverride(section='maildrop', key_path=('smtp', 'port'), value=465)
    """
    path, sep, value = raw.partition("=")
    if not sep:
        raise ValueError(f"Invalid override {raw!r}: expected SECTION.KEY=VALUE")

    section, *keys = path.strip().split(".")
    if not keys:
        raise ValueError(f"Invalid override {raw!r}: key must contain at least one dot (SECTION.KEY)")
    if not section or not all(keys):
        raise ValueError(f"Invalid override {raw!r}: empty section or key component")

    return ConfigOverride(section=section, key_path=tuple(keys), value=coerce_value(value))


def build_override_tree(overrides: Iterable[ConfigOverride]) -> dict[str, dict[str, object]]:
    """Fold parsed overrides into the nested mapping ``Config.with_overrides`` merges.

    Later entries win over earlier ones for the same path.

    Raises:
        TypeError: A path runs through a key already set to a scalar.

    Example:
        >>> build_override_tree([parse_override("maildrop.smtp.host=h"), parse_override("maildrop.timeout=5")])
        {'maildrop': {'smtp': {'host': 'h'}, 'timeout': 5}}
    """
    tree: dict[str, dict[str, object]] = {}
    for override in overrides:
        node: dict[str, object] = tree.setdefault(override.section, {})
        for key in override.key_path[:-1]:
            child = node.setdefault(key, {})
            if not isinstance(child, dict):
                raise TypeError(f"Cannot set {override.dotted}: {key!r} already holds {type(child).__name__}")
            node = cast("dict[str, object]", child)
        node[override.key_path[-1]] = override.value
    return tree


def apply_overrides(config: Config, raw_overrides: tuple[str, ...]) -> Config:
    """Return ``config`` with every ``--set`` entry deep-merged in.

    Example:
        >>> cfg = Config({"maildrop": {"timeout": 30.0}}, {})
        >>> apply_overrides(cfg, ("maildrop.timeout=5",))["maildrop"]["timeout"]
        5
        >>> apply_overrides(cfg, ()) is cfg
        True
    """
    if not raw_overrides:
        return config
    return config.with_overrides(build_override_tree(parse_override(raw) for raw in raw_overrides))


__all__ = [
    "ConfigOverride",
    "OverrideValue",
    "apply_overrides",
    "build_override_tree",
    "coerce_value",
    "parse_override",
]
