"""
Path helpers for package extraction.
Every write goes through safe_join so nothing lands outside the output root.
"""
import os
from typing import Set
from ..errors import PathEscapeError
from ..utils.logger import logger


def as_root(directory: str) -> str:
    """Absolute form of a directory with a trailing separator."""
    root = os.path.abspath(directory)
    if not root.endswith(os.sep):
        root += os.sep
    return root


def safe_join(root: str, relative_path: str) -> str:
    """
    Join relative_path onto root and check the result stays inside it.

    Args:
        root: output root directory
        relative_path: path read from the archive, e.g. Assets/Sounds/foo.wav

    Returns:
        absolute, normalised path under root

    Raises:
        PathEscapeError: '..' segments or an absolute path would leave root
    """
    root = as_root(root)
    result = os.path.abspath(os.path.join(root, relative_path))
    if not result.startswith(root):
        raise PathEscapeError(f"Invalid path '{result}'; it should start with '{root}'.")
    return result


class DirectoryCache:
    """Parent directories created during one extraction run."""

    def __init__(self):
        self._created: Set[str] = set()

    def __contains__(self, directory: str) -> bool:
        return directory in self._created

    def __len__(self) -> int:
        return len(self._created)

    def ensure_parent(self, file_path: str):
        """Create the parent directory of file_path if it isn't there yet"""
        directory = os.path.dirname(file_path)
        if not directory:
            return

        if directory in self._created:
            return

        if not os.path.isdir(directory):
            os.makedirs(directory, exist_ok=True)
            logger.debug(f"   Created {directory}")

        self._created.add(directory)


__all__ = ["as_root", "safe_join", "DirectoryCache"]
