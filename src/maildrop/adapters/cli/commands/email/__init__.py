"""Email CLI commands.

Contents:
    * :func:`.send.cli_send` - Send one message.
    * :func:`.verify.cli_verify` - Check connectivity and login.
"""

from __future__ import annotations

from .send import cli_send
from .verify import cli_verify

__all__ = ["cli_send", "cli_verify"]
