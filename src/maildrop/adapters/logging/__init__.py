"""Logging adapter - lib_log_rich setup.

Contents:
    * :func:`.setup.init_logging` - Idempotent logging initialization
    * :func:`.setup.shutdown_logging` - Runtime teardown
"""

from __future__ import annotations

from .setup import init_logging, shutdown_logging

__all__ = ["init_logging", "shutdown_logging"]
