"""Domain enum tests: member values and string equality."""

from __future__ import annotations

import pytest

from maildrop.domain.enums import DeployTarget, OutputFormat


@pytest.mark.os_agnostic
@pytest.mark.parametrize(("member", "value"), [(OutputFormat.HUMAN, "human"), (OutputFormat.JSON, "json")])
def test_output_format_values(member: OutputFormat, value: str) -> None:
    assert member.value == value
    assert member == value


@pytest.mark.os_agnostic
@pytest.mark.parametrize(
    ("member", "value"),
    [(DeployTarget.APP, "app"), (DeployTarget.HOST, "host"), (DeployTarget.USER, "user")],
)
def test_deploy_target_values(member: DeployTarget, value: str) -> None:
    assert member.value == value
    assert DeployTarget(value) is member


@pytest.mark.os_agnostic
def test_enums_are_exhaustive() -> None:
    assert len(OutputFormat) == 2
    assert len(DeployTarget) == 3
