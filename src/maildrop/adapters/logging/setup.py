"""lib_log_rich runtime setup shared by every entry point.

Contents:
    * :class:`LoggingConfigModel` - ``[lib_log_rich]`` section model.
    * :func:`init_logging` - idempotent runtime initialization.
    * :func:`shutdown_logging` - flush and stop the runtime if running.
"""

from __future__ import annotations

from typing import Any, cast

import lib_log_rich.config
import lib_log_rich.runtime
from lib_layered_config import Config
from pydantic import BaseModel, ConfigDict

from maildrop import __init__conf__


class LoggingConfigModel(BaseModel):
    """``[lib_log_rich]`` section; unknown keys go to RuntimeConfig untouched.

    Example:
        >>> LoggingConfigModel().environment
        'prod'
        >>> LoggingConfigModel(console_level="DEBUG").model_dump()["console_level"]
        'DEBUG'
    """

    model_config = ConfigDict(extra="allow")

    service: str | None = None
    environment: str = "prod"


def build_runtime_config(config: Config) -> lib_log_rich.runtime.RuntimeConfig:
    """Map the ``[lib_log_rich]`` section onto a RuntimeConfig.

    ``service`` falls back to the package name when unset or empty.
    """
    section: Any = config.get("lib_log_rich", default={})
    parsed = LoggingConfigModel.model_validate(cast("dict[str, Any]", section) if section else {})
    passthrough = parsed.model_dump(exclude={"service", "environment"}, exclude_none=True)
    return lib_log_rich.runtime.RuntimeConfig(
        service=parsed.service or __init__conf__.name,
        environment=parsed.environment,
        **passthrough,
    )


def init_logging(config: Config) -> None:
    """Start lib_log_rich once and route std ``logging`` records into it.

    Later calls return immediately. ``.env`` files are loaded first so
    ``LOG_*`` variables defined there take effect.

    Example:
        >>> init_logging(Config({"lib_log_rich": {"environment": "test"}}, {}))  # doctest: +SKIP
    """
    if lib_log_rich.runtime.is_initialised():
        return
    lib_log_rich.config.enable_dotenv()
    lib_log_rich.runtime.init(build_runtime_config(config))
    lib_log_rich.runtime.attach_std_logging()


def shutdown_logging() -> None:
    """Flush pending records and stop the runtime when it is running."""
    if lib_log_rich.runtime.is_initialised():
        lib_log_rich.runtime.shutdown()


__all__ = [
    "LoggingConfigModel",
    "build_runtime_config",
    "init_logging",
    "shutdown_logging",
]
