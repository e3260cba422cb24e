"""Unit tests for CLI configuration overrides (--set SECTION.KEY=VALUE).

Tests cover parsing, value coercion, tree building, and full
apply_overrides integration with the Config class.
"""

from __future__ import annotations

import pytest
from lib_layered_config import Config

from maildrop.adapters.config.overrides import (
    ConfigOverride,
    apply_overrides,
    build_override_tree,
    coerce_value,
    parse_override,
)

# ======================== parse_override tests ========================


@pytest.mark.os_agnostic
def test_parse_override_simple_key() -> None:
    result = parse_override("lib_log_rich.console_level=DEBUG")

    assert result == ConfigOverride(section="lib_log_rich", key_path=("console_level",), value="DEBUG")


@pytest.mark.os_agnostic
def test_parse_override_nested_key() -> None:
    result = parse_override("maildrop.smtp.port=465")

    assert result.section == "maildrop"
    assert result.key_path == ("smtp", "port")
    assert result.value == 465
    assert result.dotted == "maildrop.smtp.port"


@pytest.mark.os_agnostic
def test_parse_override_value_containing_equals() -> None:
    """Only the first '=' separates path from value."""
    result = parse_override("maildrop.password=a=b=c")

    assert result.value == "a=b=c"


@pytest.mark.os_agnostic
def test_parse_override_empty_value() -> None:
    assert parse_override("maildrop.email=").value == ""


@pytest.mark.os_agnostic
def test_parse_override_strips_whitespace_around_path() -> None:
    assert parse_override("  maildrop.timeout =5").key_path == ("timeout",)


@pytest.mark.os_agnostic
def test_parse_override_rejects_missing_equals() -> None:
    with pytest.raises(ValueError, match="expected SECTION.KEY=VALUE"):
        parse_override("maildrop.timeout")


@pytest.mark.os_agnostic
def test_parse_override_rejects_no_dot_in_key() -> None:
    with pytest.raises(ValueError, match="at least one dot"):
        parse_override("maildrop=value")


@pytest.mark.os_agnostic
@pytest.mark.parametrize("raw", [".timeout=5", "maildrop..host=x", "maildrop.smtp.=x"])
def test_parse_override_rejects_empty_components(raw: str) -> None:
    with pytest.raises(ValueError, match="empty section or key component"):
        parse_override(raw)


# ======================== coerce_value tests ========================


@pytest.mark.os_agnostic
@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("465", 465),
        ("2.5", 2.5),
        ("true", True),
        ("false", False),
        ("null", None),
        ('["a@x.com", "b@y.com"]', ["a@x.com", "b@y.com"]),
        ('{"host": "h"}', {"host": "h"}),
        ('"quoted"', "quoted"),
    ],
)
def test_coerce_value_parses_json(raw: str, expected: object) -> None:
    assert coerce_value(raw) == expected


@pytest.mark.os_agnostic
@pytest.mark.parametrize("raw", ["smtp.gmail.com", "DEBUG", "me@gmail.com", "{not json"])
def test_coerce_value_keeps_plain_strings(raw: str) -> None:
    assert coerce_value(raw) == raw


# ======================== build_override_tree tests ========================


@pytest.mark.os_agnostic
def test_build_override_tree_merges_siblings() -> None:
    tree = build_override_tree(
        [
            parse_override("maildrop.smtp.host=mail.example.org"),
            parse_override("maildrop.smtp.port=2525"),
            parse_override("lib_log_rich.console_level=DEBUG"),
        ]
    )

    assert tree == {
        "maildrop": {"smtp": {"host": "mail.example.org", "port": 2525}},
        "lib_log_rich": {"console_level": "DEBUG"},
    }


@pytest.mark.os_agnostic
def test_build_override_tree_last_entry_wins() -> None:
    tree = build_override_tree([parse_override("maildrop.timeout=5"), parse_override("maildrop.timeout=9")])

    assert tree == {"maildrop": {"timeout": 9}}


@pytest.mark.os_agnostic
def test_build_override_tree_rejects_path_through_scalar() -> None:
    with pytest.raises(TypeError, match="maildrop.smtp.host"):
        build_override_tree([parse_override("maildrop.smtp=plain"), parse_override("maildrop.smtp.host=h")])


# ======================== apply_overrides integration ========================


@pytest.mark.os_agnostic
def test_apply_overrides_without_entries_returns_same_config() -> None:
    config = Config({"maildrop": {"timeout": 30.0}}, {})

    assert apply_overrides(config, ()) is config


@pytest.mark.os_agnostic
def test_apply_overrides_deep_merges_into_existing_section() -> None:
    config = Config(
        {"maildrop": {"email": "me@gmail.com", "timeout": 30.0, "smtp": {"host": "", "port": 0}}},
        {},
    )

    result = apply_overrides(config, ("maildrop.timeout=5", "maildrop.smtp.host=mail.example.org"))

    assert result["maildrop"]["email"] == "me@gmail.com"
    assert result["maildrop"]["timeout"] == 5
    assert result["maildrop"]["smtp"]["host"] == "mail.example.org"
    assert result["maildrop"]["smtp"]["port"] == 0


@pytest.mark.os_agnostic
def test_apply_overrides_leaves_original_untouched() -> None:
    config = Config({"maildrop": {"timeout": 30.0}}, {})

    apply_overrides(config, ("maildrop.timeout=5",))

    assert config["maildrop"]["timeout"] == 30.0


@pytest.mark.os_agnostic
def test_apply_overrides_can_add_new_section() -> None:
    config = Config({"maildrop": {}}, {})

    result = apply_overrides(config, ("lib_log_rich.console_level=DEBUG",))

    assert result["lib_log_rich"]["console_level"] == "DEBUG"


@pytest.mark.os_agnostic
def test_apply_overrides_propagates_parse_errors() -> None:
    with pytest.raises(ValueError):
        apply_overrides(Config({}, {}), ("broken",))
