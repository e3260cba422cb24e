"""Account credentials from the process environment.

This is the only module that reads ``MAILDROP_EMAIL`` and
``MAILDROP_PASSWORD``; everything downstream receives a
:class:`~maildrop.domain.messages.Credentials` value.
"""

from __future__ import annotations

import os
from collections.abc import Mapping

from maildrop.domain.messages import Credentials

ENV_EMAIL = "MAILDROP_EMAIL"
ENV_PASSWORD = "MAILDROP_PASSWORD"


def load_credentials_from_env(environ: Mapping[str, str] | None = None) -> Credentials | None:
    """Return credentials when both variables are set and non-empty.

    Args:
        environ: Mapping to read from; defaults to :data:`os.environ`.

    Example:
        >>> load_credentials_from_env({"MAILDROP_EMAIL": "me@gmail.com", "MAILDROP_PASSWORD": "pw"}).email
        'me@gmail.com'
        >>> load_credentials_from_env({"MAILDROP_EMAIL": "me@gmail.com"}) is None
        True
    """
    source = os.environ if environ is None else environ
    email = source.get(ENV_EMAIL, "")
    password = source.get(ENV_PASSWORD, "")
    if not email or not password:
        return None
    return Credentials(email=email, password=password)


__all__ = [
    "ENV_EMAIL",
    "ENV_PASSWORD",
    "load_credentials_from_env",
]
