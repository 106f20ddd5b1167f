from __future__ import annotations

"""
Logging Handler Factories.

Builds the concrete handlers used by the logging bootstrap and tags them,
so reconfiguration only ever detaches handlers this package installed.
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional

_HANDLER_TAG_ATTR: str = "_codeminifier4ai_handler"


def _tag_handler(handler: logging.Handler) -> None:
    """Mark a handler as owned by this package."""
    setattr(handler, _HANDLER_TAG_ATTR, True)


def _is_our_handler(handler: logging.Handler) -> bool:
    """Return True when the handler carries our ownership tag."""
    return bool(getattr(handler, _HANDLER_TAG_ATTR, False))


def _create_rotating_file_handler(
        log_file: str,
        level_int: int,
        formatter: logging.Formatter,
        max_bytes: int,
        backup_count: int,
) -> Optional[RotatingFileHandler]:
    """
    Create a size-rotated UTF-8 file handler.

    Args:
        log_file: Destination path; parent directories are created.
        level_int: Numeric severity threshold.
        formatter: Formatter applied to every record.
        max_bytes: Rollover threshold in bytes.
        backup_count: Number of rotated files to keep.

    Returns:
        Optional[RotatingFileHandler]: The handler, or None when the file
        cannot be opened (a warning is written to stderr instead).
    """
    try:
        parent = os.path.dirname(os.path.abspath(log_file))
        if parent:
            os.makedirs(parent, exist_ok=True)
        fh = RotatingFileHandler(
            log_file,
            maxBytes=int(max_bytes),
            backupCount=int(backup_count),
            encoding="utf-8",
        )
    except OSError as e:
        sys.stderr.write(f"WARNING: Cannot open log file '{log_file}': {e}\n")
        return None

    fh.setLevel(level_int)
    fh.setFormatter(formatter)
    _tag_handler(fh)
    return fh
