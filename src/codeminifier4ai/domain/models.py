from __future__ import annotations

"""
Minification and Chunking Domain Models.

Defines the immutable value objects exchanged between the processing
engines and their callers, together with the factory functions used to
build batch results.
"""

from dataclasses import dataclass, field
from typing import List, Optional

# -----------------------------------------------------------------------------
# INPUT / OUTPUT UNITS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class SourceFile:
    """
    A text file supplied by the extraction or upload layer.

    Attributes:
        path: Relative, slash-normalized path.
        content: Decoded UTF-8 text.
        size_bytes: Size of the file on disk.
    """
    path: str
    content: str
    size_bytes: int


@dataclass(frozen=True)
class MinifiedFile:
    """
    Result of minifying a single file.

    Sizes are character counts of the original and minified text.
    """
    path: str
    content: str
    original_size: int
    minified_size: int


@dataclass(frozen=True)
class CodeChunk:
    """
    A line-bounded segment of one file, ready for embedding.

    Attributes:
        id: ``"<file_path>::<chunk_index>"``.
        content: Trimmed chunk text.
        file_path: Source file path.
        start_line: First covered line (0-based, inclusive).
        end_line: Last covered line (inclusive).
        chunk_index: Position of the chunk within its file.
    """
    id: str
    content: str
    file_path: str
    start_line: int
    end_line: int
    chunk_index: int

# -----------------------------------------------------------------------------
# BATCH REPORTING
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class FileStats:
    """Per-file size accounting of a batch run."""
    path: str
    original_size: int
    minified_size: int


@dataclass(frozen=True)
class FileFailure:
    """A supported file that could not be resolved or read."""
    path: str
    error: str


@dataclass(frozen=True)
class MinifyBatchResult:
    """
    Unified outcome of a batch minification.

    Attributes:
        ok: False when no file could be minified at all.
        error: Human readable reason when ``ok`` is False.
        content: Banner-delimited unified minified text.
        original_size: Sum of original sizes of minified files.
        minified_size: Sum of minified sizes.
        files: Per-file statistics, in processing order.
        skipped: Paths rejected as unsupported.
        failed: Supported paths that failed to resolve.
    """
    ok: bool
    error: str
    content: str = ""
    original_size: int = 0
    minified_size: int = 0
    files: List[FileStats] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)
    failed: List[FileFailure] = field(default_factory=list)

    @property
    def skipped_count(self) -> int:
        return len(self.skipped)

    @property
    def reduction_percentage(self) -> Optional[float]:
        """Relative size reduction in percent, None when nothing was measured."""
        if self.original_size == 0:
            return None
        return (self.original_size - self.minified_size) / self.original_size * 100

# -----------------------------------------------------------------------------
# FACTORY FUNCTIONS
# -----------------------------------------------------------------------------

def create_batch_error_result(
        error: str,
        skipped: Optional[List[str]] = None,
        failed: Optional[List[FileFailure]] = None,
) -> MinifyBatchResult:
    """
    Build a failed batch result.

    Args:
        error: Description of the failure.
        skipped: Unsupported paths encountered.
        failed: Read failures encountered.

    Returns:
        MinifyBatchResult: Result with ``ok=False`` and empty content.
    """
    return MinifyBatchResult(
        ok=False,
        error=error,
        skipped=skipped or [],
        failed=failed or [],
    )


def create_batch_success_result(
        content: str,
        files: List[FileStats],
        skipped: Optional[List[str]] = None,
        failed: Optional[List[FileFailure]] = None,
) -> MinifyBatchResult:
    """
    Build a successful batch result, deriving the size totals from ``files``.

    Args:
        content: Unified minified text.
        files: Statistics of every minified file.
        skipped: Unsupported paths encountered.
        failed: Read failures encountered.

    Returns:
        MinifyBatchResult: Result with ``ok=True``.
    """
    return MinifyBatchResult(
        ok=True,
        error="",
        content=content,
        original_size=sum(f.original_size for f in files),
        minified_size=sum(f.minified_size for f in files),
        files=list(files),
        skipped=skipped or [],
        failed=failed or [],
    )
