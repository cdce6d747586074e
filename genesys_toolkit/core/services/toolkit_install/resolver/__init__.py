"""
L2 Resolver — ``__init__.py`` re-exports plan resolution.
"""

from genesys_toolkit.core.services.toolkit_install.resolver.plan_resolution import (  # noqa: F401
    resolve_install_plan,
)
