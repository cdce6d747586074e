"""
L5 Orchestration — ``__init__.py`` re-exports top-level coordinators.

These are the entry points that external code calls.
"""

from genesys_toolkit.core.services.toolkit_install.orchestration.orchestrator import (  # noqa: F401
    INSTALL_STEPS,
    cleanup,
    run_install,
)
