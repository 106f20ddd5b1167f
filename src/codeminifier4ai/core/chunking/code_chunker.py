from __future__ import annotations

"""
Line-Oriented Code Chunker.

Splits the text of one file into bounded chunks for embedding. Lines are
accumulated into a buffer; once the buffer would outgrow the character
budget, the chunk is closed in front of the next logical breakpoint
(declaration, import/export, closing brace, blank line). A hard cap closes
the chunk regardless of alignment so dense or minified code cannot grow a
chunk without bound.

The breakpoint detection is a structural heuristic over curly-brace style
syntax, not a parser.
"""

import logging
import re
from typing import Final, List, Tuple

from codeminifier4ai.domain.constants import DEFAULT_MAX_CHUNK_CHARS
from codeminifier4ai.domain.models import CodeChunk

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# BREAKPOINT PATTERNS
# -----------------------------------------------------------------------------

# Matched at the start of a line, in order
BREAKPOINT_PATTERNS: Final[Tuple[re.Pattern, ...]] = (
    re.compile(r"function\s+\w+"),
    re.compile(r"class\s+\w+"),
    re.compile(r"const\s+\w+\s*=\s*function"),
    re.compile(r"const\s+\w+\s*=\s*\(.*?\)\s*=>"),
    re.compile(r"//\s*-----"),
    re.compile(r"import\s+"),
    re.compile(r"export\s+"),
    re.compile(r"}\s*$"),
    re.compile(r"\s*$"),
)


def is_logical_breakpoint(line: str) -> bool:
    """Return True when ``line`` is a good place to start a new chunk."""
    return any(pattern.match(line) for pattern in BREAKPOINT_PATTERNS)

# -----------------------------------------------------------------------------
# CHUNKING ENGINE
# -----------------------------------------------------------------------------

class _ChunkBuffer:
    """Accumulates text and line cursors for the chunk being built."""

    def __init__(self, file_path: str) -> None:
        self.file_path = file_path
        self.text = ""
        self.start_line = 0
        self.chunks: List[CodeChunk] = []

    def flush(self, end_line: int, next_start_line: int) -> None:
        """
        Emit the buffer as a chunk covering ``start_line..end_line``.

        A whitespace-only buffer is kept (not emitted) so its lines stay
        attached to the next chunk.
        """
        content = self.text.strip()
        if not content:
            return

        chunk_index = len(self.chunks)
        self.chunks.append(CodeChunk(
            id=f"{self.file_path}::{chunk_index}",
            content=content,
            file_path=self.file_path,
            start_line=self.start_line,
            end_line=end_line,
            chunk_index=chunk_index,
        ))
        self.text = ""
        self.start_line = next_start_line


def chunk_file(
        file_path: str,
        content: str,
        max_chars: int = DEFAULT_MAX_CHUNK_CHARS,
) -> List[CodeChunk]:
    """
    Split a file into ordered, line-bounded chunks.

    Lines longer than ``max_chars`` are cut into ``max_chars`` sized
    segments first; every segment of such a line reports the same line
    number.

    Args:
        file_path: Path of the file, used for chunk ids and metadata.
        content: Text of the file.
        max_chars: Character budget per chunk.

    Returns:
        List[CodeChunk]: Chunks with ``chunk_index`` 0..n-1.

    Raises:
        ValueError: If ``max_chars`` is not positive.
    """
    if max_chars <= 0:
        raise ValueError("max_chars must be positive")

    buffer = _ChunkBuffer(file_path)
    lines = (content or "").split("\n")

    for line_index, line in enumerate(lines):
        segments = _segment_line(line, max_chars)
        last_segment = len(segments) - 1

        for seg_index, segment in enumerate(segments):
            is_line_end = seg_index == last_segment

            if (
                seg_index == 0
                and buffer.text
                and len(buffer.text) + len(line) > max_chars
                and is_logical_breakpoint(line)
            ):
                buffer.flush(end_line=line_index - 1, next_start_line=line_index)

            buffer.text += segment + ("\n" if is_line_end else "")

            # Hard cap
            if len(buffer.text) >= max_chars:
                next_start = line_index + 1 if is_line_end else line_index
                buffer.flush(end_line=line_index, next_start_line=next_start)

    buffer.flush(end_line=len(lines) - 1, next_start_line=len(lines))

    logger.debug(f"Chunked {file_path} into {len(buffer.chunks)} parts")
    return buffer.chunks


def _segment_line(line: str, max_chars: int) -> List[str]:
    if len(line) <= max_chars:
        return [line]
    return [line[i:i + max_chars] for i in range(0, len(line), max_chars)]
