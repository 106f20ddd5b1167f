from __future__ import annotations

"""
Context-Window Splitter.

Cuts an arbitrary text blob (typically the unified minified output of many
files) into overlapping windows sized for a model's context budget. Cuts
are moved back to the most legible nearby boundary (file banner,
documentation comment, function or class start, blank line, newline), and
each window repeats the tail of the previous one so no local context is
lost at a cut.
"""

import logging
from typing import Final, List, Sequence, Tuple

from codeminifier4ai.domain.constants import (
    DEFAULT_CONTEXT_CHUNK_SIZE,
    DEFAULT_CONTEXT_OVERLAP,
    MIN_CONTEXT_ADVANCE,
)

logger = logging.getLogger(__name__)

# Most specific first
BREAK_MARKERS: Final[Tuple[str, ...]] = (
    "\n\n// -----",
    "\n\n/**",
    "\n\nfunction ",
    "\n\nclass ",
    "\n\n",
    "\n",
)


def find_break_point(
        text: str,
        start: int,
        end: int,
        markers: Sequence[str] = BREAK_MARKERS,
) -> int:
    """
    Find where to cut the window ``[start, end)``.

    Markers are tried in priority order. For each marker the last
    occurrence beginning at or before ``end`` is taken; the first marker
    whose occurrence lies strictly after ``start`` wins.

    Args:
        text: Full text.
        start: Window start.
        end: Tentative window end.
        markers: Ordered break markers.

    Returns:
        int: Index of the chosen marker, or ``end`` when none qualifies.
    """
    for marker in markers:
        index = text.rfind(marker, 0, end + len(marker))
        if index > start:
            return index
    return end


def split_for_context(
        text: str,
        max_chunk_size: int = DEFAULT_CONTEXT_CHUNK_SIZE,
        overlap_size: int = DEFAULT_CONTEXT_OVERLAP,
        markers: Sequence[str] = BREAK_MARKERS,
) -> List[str]:
    """
    Split ``text`` into overlapping chunks of at most ``max_chunk_size``.

    After each chunk the cursor moves to ``break_point - overlap_size``,
    but at least ``max(max_chunk_size // 3, 100)`` characters forward and
    never past the break point, so the chunks always cover the whole input
    and the loop always terminates.

    Args:
        text: Text to split.
        max_chunk_size: Maximum characters per chunk.
        overlap_size: Characters repeated between consecutive chunks.
        markers: Ordered break markers.

    Returns:
        List[str]: Chunks in order; a single element when the text fits.

    Raises:
        ValueError: If ``max_chunk_size`` is not positive or
            ``overlap_size`` is negative.
    """
    if max_chunk_size <= 0:
        raise ValueError("max_chunk_size must be positive")
    if overlap_size < 0:
        raise ValueError("overlap_size must be non-negative")

    text = text or ""
    if len(text) <= max_chunk_size:
        return [text]

    total = len(text)
    min_advance = max(max_chunk_size // 3, MIN_CONTEXT_ADVANCE)
    chunks: List[str] = []
    current = 0

    while current < total:
        end = min(current + max_chunk_size, total)
        if end < total:
            end = find_break_point(text, current, end, markers)

        chunks.append(text[current:end])
        if end >= total:
            break

        current = min(end, max(end - overlap_size, current + min_advance))

    logger.debug(
        f"Split {total} chars into {len(chunks)} context chunks "
        f"(size={max_chunk_size}, overlap={overlap_size})"
    )
    return chunks
