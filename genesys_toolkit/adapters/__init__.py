"""
Adapters — the installer's only path to external programs and the filesystem.
"""

from genesys_toolkit.adapters.base import Adapter, CommandAdapter  # noqa: F401
from genesys_toolkit.adapters.shell.command import ShellCommandAdapter  # noqa: F401
from genesys_toolkit.adapters.shell.filesystem import FilesystemAdapter  # noqa: F401
