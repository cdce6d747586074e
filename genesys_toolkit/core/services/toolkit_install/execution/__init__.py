"""
L4 Execution — ``__init__.py`` re-exports everything that touches the host.
"""

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
    apply_undo,
    execute_rollback,
)
