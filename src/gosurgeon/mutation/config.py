"""
Configuration for span-addressed mutation.

Contains formatter commands, formatter chains and the layout used when
appending declarations to a file.
"""

from pathlib import Path
from typing import Any, Dict, Optional

from gosurgeon.user_config import DEFAULT_CONFIG, UserConfig


FORMATTERS = {
    "gofmt": {
        "command": "gofmt",
        "args": [],  # reads stdin, writes stdout
    },
    "goimports": {
        "command": "goimports",
        "args": [],
    },
}

# Text placed before and after code appended to a file
APPEND_SEPARATOR = "\n\n"
APPEND_TERMINATOR = "\n"

# Line-break bytes a delete consumes after the removed span
TRAILING_BREAK_BYTES = (b"\n", b"\r")

DEFAULT_MUTATION_CONFIG = {
    "format_enabled": DEFAULT_CONFIG["formatting"]["enabled"],
    "format_timeout": DEFAULT_CONFIG["formatting"]["timeout"],
    "format_chains": {
        "source": list(DEFAULT_CONFIG["formatting"]["source_chain"]),
        "imports": list(DEFAULT_CONFIG["formatting"]["imports_chain"]),
    },
}


def get_mutation_config(project_root: Optional[Path] = None) -> Dict[str, Any]:
    """
    Get mutation configuration from the hierarchical user config.

    Resolved at call time so a project's .gosurgeon/config.json is honoured.
    """
    formatting = UserConfig(project_root).get("formatting", {})
    return {
        "format_enabled": bool(formatting.get("enabled", True)),
        "format_timeout": formatting.get("timeout", DEFAULT_MUTATION_CONFIG["format_timeout"]),
        "format_chains": {
            "source": list(formatting.get("source_chain", DEFAULT_MUTATION_CONFIG["format_chains"]["source"])),
            "imports": list(formatting.get("imports_chain", DEFAULT_MUTATION_CONFIG["format_chains"]["imports"])),
        },
    }
