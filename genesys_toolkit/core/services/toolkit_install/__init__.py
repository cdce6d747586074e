"""
Toolkit installation service — package re-exports.

Modules are layered (data → domain → resolver → detection →
execution → orchestration); each layer only imports from the ones
before it::

    from genesys_toolkit.core.services.toolkit_install import run_install
"""

# ── L0: Data ──
from genesys_toolkit.core.services.toolkit_install.data.tools import (  # noqa: F401
    INSTALL_ORDER,
    TOOL_LABELS,
)

# ── L1: Domain ──
from genesys_toolkit.core.services.toolkit_install.domain.artifacts import (  # noqa: F401
    Artifact,
    resolve_artifact,
)
from genesys_toolkit.core.services.toolkit_install.domain.rollback import (  # noqa: F401
    plan_rollback,
    plan_success_cleanup,
)

# ── L2: Resolver ──
from genesys_toolkit.core.services.toolkit_install.resolver.plan_resolution import (  # noqa: F401
    resolve_install_plan,
)

# ── L3: Detection ──
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

# ── L4: Execution ──
from genesys_toolkit.core.services.toolkit_install.execution.context import (  # noqa: F401
    StepContext,
)
from genesys_toolkit.core.services.toolkit_install.execution.scratch import (  # noqa: F401
    create_scratch_dir,
)
from genesys_toolkit.core.services.toolkit_install.execution.steps import (  # noqa: F401
    install_archy,
    install_cli,
    install_go,
    install_terraform,
)
from genesys_toolkit.core.services.toolkit_install.execution.undo import (  # noqa: F401
    RollbackReport,
    execute_rollback,
)

# ── L5: Orchestration ──
from genesys_toolkit.core.services.toolkit_install.orchestration.orchestrator import (  # noqa: F401
    cleanup,
    run_install,
)
