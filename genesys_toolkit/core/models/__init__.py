"""
Domain models — Pydantic types for the installer.

All models are re-exported here for convenient access:

    from genesys_toolkit.core.models import InstallationLedger, Platform, Receipt
"""

from genesys_toolkit.core.models.action import Receipt
from genesys_toolkit.core.models.ledger import (
    MANAGED_TOOLS,
    InstallationLedger,
    ToolRecord,
    UndoRecord,
)
from genesys_toolkit.core.models.platform import Arch, OSName, Platform

__all__ = [
    # action.py
    "Receipt",
    # ledger.py
    "MANAGED_TOOLS",
    "InstallationLedger",
    "ToolRecord",
    "UndoRecord",
    # platform.py
    "Arch",
    "OSName",
    "Platform",
]
