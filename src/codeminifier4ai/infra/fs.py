from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Provides the OS-specific application data directory, path normalization
and the file resolution collaborator used by the batch minifier. The core
engines never touch the disk themselves; every read goes through a
FileResolver implementation defined here.
"""

import logging
import os
from typing import List, Optional, Protocol, runtime_checkable

from codeminifier4ai.domain.models import SourceFile

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# GLOBAL CONSTANTS
# -----------------------------------------------------------------------------

APP_DIR_NAME = "CodeMinifier4AI"
UNIX_APP_DIR_NAME = ".codeminifier4ai"

_IGNORED_DIR_NAMES = {"__pycache__", "node_modules", ".git", ".idea", ".vscode"}

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def get_user_data_dir() -> str:
    """
    Resolve the directory used for persistent application data.

    Standards:
    - Windows: %LOCALAPPDATA%/CodeMinifier4AI
    - Linux/Mac: ~/.codeminifier4ai

    The directory is created if it does not exist.

    Returns:
        str: Absolute path to the application data directory.
    """
    path = ""

    if os.name == "nt":
        base = os.environ.get("LOCALAPPDATA") or os.environ.get("APPDATA")
        if base:
            path = os.path.join(base, APP_DIR_NAME)

    if not path:
        path = os.path.join(os.path.expanduser("~"), UNIX_APP_DIR_NAME)

    try:
        os.makedirs(path, exist_ok=True)
    except OSError as e:
        logger.debug(f"Could not create data directory '{path}': {e}")

    return os.path.abspath(path)


def normalize_path(path: Optional[str], fallback: str) -> str:
    """
    Normalize a user supplied path into an absolute path.

    Expands environment variables and ``~``. Empty input resolves to
    ``fallback``.

    Args:
        path: Raw path string.
        fallback: Path used when ``path`` is empty.

    Returns:
        str: Absolute path.
    """
    p = (path or "").strip() or fallback
    return os.path.abspath(os.path.expandvars(os.path.expanduser(p)))


def to_relative_posix(path: str) -> str:
    """Convert a relative path to forward-slash form without a leading './'."""
    p = path.replace("\\", "/")
    while p.startswith("./"):
        p = p[2:]
    return p


def list_relative_files(base_dir: str) -> List[str]:
    """
    Walk ``base_dir`` and return every regular file as a relative path.

    Hidden files and directories (dot-prefixed) as well as common tool
    directories are skipped. Paths are slash-normalized and sorted.

    Args:
        base_dir: Root directory to scan.

    Returns:
        List[str]: Relative file paths.
    """
    found: List[str] = []
    for root, dirs, files in os.walk(base_dir):
        dirs[:] = [d for d in dirs if not d.startswith(".") and d not in _IGNORED_DIR_NAMES]
        for name in files:
            if name.startswith("."):
                continue
            rel = os.path.relpath(os.path.join(root, name), base_dir)
            found.append(to_relative_posix(rel))
    return sorted(found)

# -----------------------------------------------------------------------------
# FILE RESOLUTION COLLABORATOR
# -----------------------------------------------------------------------------

@runtime_checkable
class FileResolver(Protocol):
    """
    Supplies the text of a file identified by its relative path.

    Implementations raise OSError (or UnicodeDecodeError) when the file
    cannot be read; callers treat that as a per-file failure.
    """

    def read_text(self, path: str) -> str:
        ...


class DirectoryResolver:
    """Resolve relative paths against a base directory on the local disk."""

    def __init__(self, base_dir: str) -> None:
        self.base_dir = os.path.abspath(base_dir)

    def read_text(self, path: str) -> str:
        """
        Read a file below ``base_dir`` as UTF-8.

        Undecodable byte sequences are replaced rather than raised, so a
        stray non-UTF-8 byte never aborts a batch.

        Args:
            path: Path relative to ``base_dir``.

        Returns:
            str: File content.

        Raises:
            FileNotFoundError: If the path does not exist.
            IsADirectoryError: If the path is not a regular file.
        """
        full_path = os.path.join(self.base_dir, path)
        if not os.path.exists(full_path):
            raise FileNotFoundError(f"No such file: {full_path}")
        if not os.path.isfile(full_path):
            raise IsADirectoryError(f"Not a file: {full_path}")

        with open(full_path, "r", encoding="utf-8", errors="replace") as f:
            return f.read()

    def load(self, path: str) -> SourceFile:
        """Read ``path`` into a SourceFile carrying its on-disk size."""
        rel = to_relative_posix(path)
        content = self.read_text(rel)
        size = os.path.getsize(os.path.join(self.base_dir, rel))
        return SourceFile(path=rel, content=content, size_bytes=size)
