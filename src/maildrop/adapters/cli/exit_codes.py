"""Process exit codes returned by ``maildrop`` commands."""

from __future__ import annotations

from enum import IntEnum


class ExitCode(IntEnum):
    """Exit codes following errno and sysexits.h conventions.

    * ``PERMISSION_DENIED`` (13, EACCES): ``config-deploy`` could not write.
    * ``INVALID_ARGUMENT`` (22, EINVAL): rejected option or config value.
    * ``SMTP_FAILURE`` (69, EX_UNAVAILABLE): the server refused or was unreachable.
    * ``CONFIG_ERROR`` (78, EX_CONFIG): no credentials or no usable SMTP settings.

    Example:
        >>> int(ExitCode.CONFIG_ERROR)
        78
    """

    SUCCESS = 0
    GENERAL_ERROR = 1
    PERMISSION_DENIED = 13
    INVALID_ARGUMENT = 22
    SMTP_FAILURE = 69
    CONFIG_ERROR = 78


__all__ = ["ExitCode"]
