from genesys_toolkit.core.config.settings import (  # noqa: F401
    ConfigError,
    Timeouts,
    ToolkitConfig,
    load_config,
)
