"""Static package metadata surfaced to CLI commands and documentation.

Kept in sync with ``pyproject.toml``; the layered-configuration identifiers
decide where ``config-deploy`` writes files and which environment prefix
``lib_layered_config`` honours.
"""

from __future__ import annotations

from typing import Final

name: Final[str] = "maildrop"
title: Final[str] = "Drop emails through pre-configured SMTP providers"
version: Final[str] = "1.0.0"
homepage: Final[str] = "https://github.com/maildrop/maildrop"
author: Final[str] = "maildrop contributors"
author_email: Final[str] = "maintainers@maildrop.dev"
shell_command: Final[str] = "maildrop"

#: Vendor, application and slug identifiers for lib_layered_config paths.
LAYEREDCONF_VENDOR: Final[str] = "maildrop"
LAYEREDCONF_APP: Final[str] = "maildrop"
LAYEREDCONF_SLUG: Final[str] = "maildrop"


def print_info() -> None:
    """Print the summarised metadata block used by the ``info`` command.

    Example:
        >>> print_info()  # doctest: +ELLIPSIS
        Info for maildrop:
        ...
    """
    fields = (
        ("name", name),
        ("title", title),
        ("version", version),
        ("homepage", homepage),
        ("author", author),
        ("author_email", author_email),
        ("shell_command", shell_command),
    )
    pad = max(len(label) for label, _ in fields)
    lines = [f"Info for {name}:", ""]
    lines.extend(f"    {label.ljust(pad)} = {value}" for label, value in fields)
    print("\n".join(lines))
