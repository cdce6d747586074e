"""
L3 Detection — ``__init__.py`` re-exports the read-only gates.

Nothing in this layer changes the host.
"""

from genesys_toolkit.core.services.toolkit_install.detection.invoking_user import (  # noqa: F401
    resolve_invoking_user,
)
from genesys_toolkit.core.services.toolkit_install.detection.platform_gate import (  # noqa: F401
    check_platform,
    detect_platform,
)
from genesys_toolkit.core.services.toolkit_install.detection.prerequisites import (  # noqa: F401
    check_prerequisites,
)
