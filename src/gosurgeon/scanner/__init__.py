"""
This facade exposes the public API for the scanner module.
Other parts of the application should only import from here,
not from internal modules.
"""
from .facade import iter_go_files, iter_package_dirs, list_package_files

__all__ = ["iter_go_files", "iter_package_dirs", "list_package_files"]
