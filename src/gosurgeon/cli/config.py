"""
CLI Configuration

Centralized configuration for the gosurgeon CLI subsystem.
"""

import os
from typing import Optional


class CLIConfig:
    """Configuration for CLI commands"""

    # Project root for commands that resolve names without a file
    DEFAULT_ROOT = "."

    # Machine mode (JSON output, the default)
    _machine_mode: Optional[bool] = None

    @classmethod
    def set_machine_mode(cls, enabled: bool) -> None:
        """Set machine mode (pure JSON output, no presentation)"""
        cls._machine_mode = enabled

    @classmethod
    def is_machine_mode(cls) -> bool:
        """
        Check if machine mode is active.

        Machine mode is the default; GOSURGEON_HUMAN_MODE=1 or --human turns it off.
        """
        if cls._machine_mode is not None:
            return cls._machine_mode
        if os.getenv("GOSURGEON_HUMAN_MODE", "").lower() in ("1", "true", "yes"):
            return False
        return True

    @classmethod
    def reset(cls) -> None:
        cls._machine_mode = None
