"""Copy the bundled defaults into the app, host or user configuration layer."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from lib_layered_config import deploy_config
from lib_layered_config.examples.deploy import DeployAction

from maildrop import __init__conf__
from maildrop.adapters.config.loader import get_default_config_path, validate_profile
from maildrop.domain.enums import DeployTarget

_WRITTEN = frozenset({DeployAction.CREATED, DeployAction.OVERWRITTEN})


def deploy_configuration(
    *,
    targets: Sequence[DeployTarget],
    force: bool = False,
    profile: str | None = None,
    set_permissions: bool = True,
) -> list[Path]:
    """Deploy ``defaultconfig.toml`` to each requested layer.

    The user layer holds the account password, so with ``set_permissions``
    lib_layered_config creates it private (700/600); app and host layers
    stay world-readable (755/644).

    Args:
        targets: Layers to write.
        force: Overwrite files that already exist.
        profile: Deploy into ``profile/<name>/`` below each layer.
        set_permissions: Apply the layer's default modes instead of the umask.

    Returns:
        Paths that were created or overwritten; existing files skipped
        without ``force`` are not listed.

    Raises:
        PermissionError: Writing a system-wide layer without privileges.
        ValueError: Invalid profile name.
    """
    if profile is not None:
        validate_profile(profile)

    results = deploy_config(
        source=get_default_config_path(),
        vendor=__init__conf__.LAYEREDCONF_VENDOR,
        app=__init__conf__.LAYEREDCONF_APP,
        slug=__init__conf__.LAYEREDCONF_SLUG,
        profile=profile,
        targets=[target.value for target in targets],
        force=force,
        set_permissions=set_permissions,
    )

    written: list[Path] = []
    for result in results:
        if result.action in _WRITTEN:
            written.append(result.destination)
        written.extend(extra.destination for extra in result.dot_d_results if extra.action in _WRITTEN)
    return written


__all__ = ["deploy_configuration"]
