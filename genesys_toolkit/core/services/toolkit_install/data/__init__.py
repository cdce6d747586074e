"""
L0 Data — ``__init__.py`` re-exports all data constants.
"""

from genesys_toolkit.core.services.toolkit_install.data.tools import (  # noqa: F401
    ARCHY_ARTIFACTS,
    ARTIFACT_TEMPLATES,
    INSTALL_ORDER,
    TOOL_LABELS,
)
