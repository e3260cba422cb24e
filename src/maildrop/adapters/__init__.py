"""Adapters layer - infrastructure integrations.

Contents:
    * :mod:`.email` - aiosmtplib transport, MailDrop facade, credentials
    * :mod:`.config` - lib_layered_config loading, deployment and display
    * :mod:`.logging` - lib_log_rich setup
    * :mod:`.cli` - rich-click command line
    * :mod:`.memory` - in-memory stand-ins for tests
"""

from __future__ import annotations

__all__: list[str] = []
