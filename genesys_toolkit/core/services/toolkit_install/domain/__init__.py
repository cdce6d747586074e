"""
L1 Domain — ``__init__.py`` re-exports all pure domain functions.

These functions have NO subprocess calls, NO filesystem access,
NO network calls. Pure input→output.
"""

from genesys_toolkit.core.services.toolkit_install.domain.artifacts import (  # noqa: F401
    Artifact,
    resolve_artifact,
)
from genesys_toolkit.core.services.toolkit_install.domain.rollback import (  # noqa: F401
    plan_rollback,
    plan_success_cleanup,
)
