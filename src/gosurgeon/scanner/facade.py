import os
from pathlib import Path
from typing import Iterator, List, Union

from gosurgeon.logging_config import logger
from gosurgeon.parser.config import GO_EXTENSION, TEST_FILE_SUFFIX, is_excluded_dir


def iter_go_files(root: Union[str, Path]) -> Iterator[str]:
    """
    Walks a source tree depth-first and yields absolute paths of Go files.

    Args:
        root: A directory to walk, or a single file.

    Yields:
        Absolute file paths, directories and files visited in sorted order.
        Hidden, vendor and testdata directories below the root are pruned;
        the root itself is always walked. A missing root yields nothing.
    """
    root_path = os.path.abspath(str(root))

    if os.path.isfile(root_path):
        if root_path.endswith(GO_EXTENSION):
            yield root_path
        return

    if not os.path.isdir(root_path):
        logger.debug(f"Scan root '{root_path}' does not exist, nothing to walk")
        return

    for current, dirs, files in os.walk(root_path):
        # Modifying 'dirs' in-place keeps os.walk out of pruned directories
        kept = []
        for d in sorted(dirs):
            if is_excluded_dir(d):
                logger.debug(f"Pruning directory '{os.path.join(current, d)}'")
            else:
                kept.append(d)
        dirs[:] = kept

        for file_name in sorted(files):
            if file_name.endswith(GO_EXTENSION):
                yield os.path.join(current, file_name)


def list_package_files(directory: Union[str, Path], include_tests: bool = False) -> List[str]:
    """Direct (non-recursive) Go files of one package directory, sorted."""
    dir_path = os.path.abspath(str(directory))
    if not os.path.isdir(dir_path):
        return []

    found = []
    for file_name in sorted(os.listdir(dir_path)):
        path = os.path.join(dir_path, file_name)
        if not file_name.endswith(GO_EXTENSION) or not os.path.isfile(path):
            continue
        if not include_tests and file_name.endswith(TEST_FILE_SUFFIX):
            continue
        found.append(path)
    return found


def iter_package_dirs(root: Union[str, Path]) -> Iterator[str]:
    """Yield every directory under root (root first) that holds at least one non-test Go file."""
    root_path = os.path.abspath(str(root))
    if not os.path.isdir(root_path):
        return

    for current, dirs, files in os.walk(root_path):
        dirs[:] = [d for d in sorted(dirs) if not is_excluded_dir(d)]
        if any(f.endswith(GO_EXTENSION) and not f.endswith(TEST_FILE_SUFFIX) for f in files):
            yield current
