"""
L3 Detection — Invoking user.

The installer runs as root through ``sudo``, but Archy and the shell
profiles belong to the user who invoked it. This resolves that user
and their home directory.
"""

from __future__ import annotations

import getpass
import logging
import os
import pwd
from collections.abc import Callable, Mapping

from genesys_toolkit.core.models.action import Receipt
from genesys_toolkit.core.models.platform import OSName, Platform

logger = logging.getLogger(__name__)


def _lookup_home(user: str) -> str:
    try:
        return pwd.getpwnam(user).pw_dir
    except KeyError:
        return ""


def resolve_invoking_user(
    platform: Platform,
    environ: Mapping[str, str] | None = None,
    lookup_home: Callable[[str], str] = _lookup_home,
) -> Receipt:
    """Resolve the invoking user's name and home directory.

    The user is ``SUDO_USER`` when set, otherwise the current login.
    On Linux ``sudo`` keeps root's ``HOME``, so the home directory
    comes from the password database; on macOS ``HOME`` already points
    at the invoking user's home.

    Returns:
        Success receipt with ``metadata["user"]`` and
        ``metadata["home"]``, or a failure when no home is found.
    """
    env = os.environ if environ is None else environ

    user = env.get("SUDO_USER") or env.get("USER") or ""
    if not user:
        try:
            user = getpass.getuser()
        except (KeyError, OSError):
            user = ""

    if platform.os == OSName.LINUX:
        home = lookup_home(user) if user else ""
    else:
        home = env.get("HOME", "")

    if not user or not home:
        error = "Could not determine the home directory of the invoking user."
        logger.error(error)
        return Receipt.failure(source="user", action="resolve", error=error)

    logger.debug("Invoking user: %s (home=%s)", user, home)
    return Receipt.success(
        source="user",
        action="resolve",
        output=user,
        metadata={"user": user, "home": home},
    )
