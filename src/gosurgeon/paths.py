"""
gosurgeon path configuration.

Every gosurgeon data file lives under one directory per project, plus a
global one in the user's home.

Directory Structure:
.gosurgeon/
├── config.json          # Project config (overrides the global one)
└── logs/
    └── gosurgeon.log    # Opt-in file log
"""

from pathlib import Path
from typing import Optional, Union


class GoSurgeonPaths:
    """
    Path layout for one project root.

    Paths are resolved lazily; the default root is the current working
    directory at the time of access, and the global directory follows HOME.
    """

    DATA_DIR = ".gosurgeon"
    CONFIG_NAME = "config.json"
    LOGS_DIR = "logs"
    LOG_NAME = "gosurgeon.log"

    def __init__(self, project_root: Optional[Union[str, Path]] = None):
        self._project_root = Path(project_root) if project_root is not None else None

    @property
    def project_root(self) -> Path:
        if self._project_root is None:
            return Path.cwd()
        return self._project_root

    @property
    def data_dir(self) -> Path:
        return self.project_root / self.DATA_DIR

    @property
    def global_dir(self) -> Path:
        return Path.home() / self.DATA_DIR

    @property
    def config_file(self) -> Path:
        """Project-local config file."""
        return self.data_dir / self.CONFIG_NAME

    @property
    def global_config_file(self) -> Path:
        return self.global_dir / self.CONFIG_NAME

    @property
    def logs_dir(self) -> Path:
        return self.data_dir / self.LOGS_DIR

    @property
    def log_file(self) -> Path:
        return self.logs_dir / self.LOG_NAME


def get_paths(project_root: Optional[Union[str, Path]] = None) -> GoSurgeonPaths:
    """Path layout for project_root (default: the current working directory)."""
    return GoSurgeonPaths(project_root)
