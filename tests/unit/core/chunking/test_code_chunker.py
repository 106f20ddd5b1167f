from __future__ import annotations

"""
Unit tests for the Line-Oriented Code Chunker.

Verifies:
1. Chunk ordering, identifiers and line ranges.
2. Alignment of cuts on logical breakpoints.
3. Hard cap on dense content and very long lines.
4. Argument validation.
"""

from typing import List

import pytest

from codeminifier4ai.core.chunking.code_chunker import chunk_file, is_logical_breakpoint
from codeminifier4ai.domain.models import CodeChunk


def _non_blank_lines(text: str) -> List[str]:
    return [line.strip() for line in text.split("\n") if line.strip()]


@pytest.fixture
def js_source() -> str:
    """A file of many small functions separated by blank lines."""
    blocks = []
    for i in range(40):
        blocks.append(
            f"function handler{i}(event) {{\n"
            f"  const value = event.payload[{i}];\n"
            f"  return value * {i};\n"
            f"}}\n"
        )
    return "\n".join(blocks)

# -----------------------------------------------------------------------------
# BREAKPOINT DETECTION
# -----------------------------------------------------------------------------

@pytest.mark.parametrize("line", [
    "function run() {",
    "class Service {",
    "const build = function () {",
    "const build = (a, b) => {",
    "// ----- src/app.js -----",
    "import x from 'y';",
    "export default app;",
    "}",
    "",
    "   ",
])
def test_breakpoint_lines(line: str) -> None:
    assert is_logical_breakpoint(line)


@pytest.mark.parametrize("line", [
    "  return value;",
    "let x = 1;",
    "  function nested() {",
    "x = classify(y);",
])
def test_non_breakpoint_lines(line: str) -> None:
    assert not is_logical_breakpoint(line)

# -----------------------------------------------------------------------------
# CHUNKING
# -----------------------------------------------------------------------------

def test_short_file_is_single_chunk() -> None:
    chunks = chunk_file("src/a.js", "const a = 1;\nconst b = 2;\n")

    assert len(chunks) == 1
    chunk = chunks[0]
    assert chunk.id == "src/a.js::0"
    assert chunk.file_path == "src/a.js"
    assert chunk.content == "const a = 1;\nconst b = 2;"
    assert chunk.start_line == 0
    assert chunk.end_line == 2
    assert chunk.chunk_index == 0


def test_empty_and_blank_files_have_no_chunks() -> None:
    assert chunk_file("empty.js", "") == []
    assert chunk_file("blank.js", "\n\n   \n") == []


def test_chunks_are_indexed_in_order(js_source: str) -> None:
    chunks = chunk_file("src/handlers.js", js_source, max_chars=300)

    assert len(chunks) > 1
    assert [c.chunk_index for c in chunks] == list(range(len(chunks)))
    assert [c.id for c in chunks] == [f"src/handlers.js::{i}" for i in range(len(chunks))]


def test_chunks_preserve_every_non_blank_line(js_source: str) -> None:
    chunks = chunk_file("src/handlers.js", js_source, max_chars=300)

    rebuilt = "\n".join(c.content for c in chunks)
    assert _non_blank_lines(rebuilt) == _non_blank_lines(js_source)


def test_line_ranges_are_contiguous(js_source: str) -> None:
    chunks = chunk_file("src/handlers.js", js_source, max_chars=300)

    lines = js_source.split("\n")
    last_code_line = max(i for i, line in enumerate(lines) if line.strip())

    assert chunks[0].start_line == 0
    assert last_code_line <= chunks[-1].end_line <= len(lines) - 1
    for prev, nxt in zip(chunks, chunks[1:]):
        assert prev.start_line <= prev.end_line
        assert nxt.start_line == prev.end_line + 1


def test_chunk_content_matches_line_range(js_source: str) -> None:
    lines = js_source.split("\n")
    for chunk in chunk_file("src/handlers.js", js_source, max_chars=300):
        expected = "\n".join(lines[chunk.start_line:chunk.end_line + 1]).strip()
        assert chunk.content == expected


def test_cut_happens_before_breakpoint() -> None:
    content = "let a = 1;\nlet b = 2;\nlet c = 3;\nfunction d() {}\n"
    chunks = chunk_file("f.js", content, max_chars=40)

    assert [c.content for c in chunks] == [
        "let a = 1;\nlet b = 2;\nlet c = 3;",
        "function d() {}",
    ]
    assert (chunks[0].start_line, chunks[0].end_line) == (0, 2)
    assert (chunks[1].start_line, chunks[1].end_line) == (3, 4)


def test_hard_cap_without_breakpoint() -> None:
    content = "let a = 1111111111;\nlet b = 2222222222;\nfunction c() {}\n"
    chunks = chunk_file("f.js", content, max_chars=30)

    assert len(chunks) == 2
    assert chunks[0].content == "let a = 1111111111;\nlet b = 2222222222;"
    assert (chunks[0].start_line, chunks[0].end_line) == (0, 1)
    assert chunks[1].content == "function c() {}"
    assert (chunks[1].start_line, chunks[1].end_line) == (2, 3)


def test_long_single_line_is_split() -> None:
    chunks = chunk_file("bundle.min.js", "x" * 5000)

    assert len(chunks) >= 3
    assert all(len(c.content) <= 2000 for c in chunks)
    assert "".join(c.content for c in chunks) == "x" * 5000
    assert all(c.start_line == c.end_line == 0 for c in chunks)


def test_chunks_stay_under_budget_for_dense_code() -> None:
    dense = "\n".join(f"x{i} = compute({i}) + offset;" for i in range(500))
    chunks: List[CodeChunk] = chunk_file("dense.js", dense, max_chars=256)

    # One line may overflow the budget before the hard cap closes the chunk
    longest_line = max(len(line) for line in dense.split("\n"))
    assert all(len(c.content) <= 256 + longest_line for c in chunks)


@pytest.mark.parametrize("max_chars", [0, -5])
def test_invalid_budget_raises(max_chars: int) -> None:
    with pytest.raises(ValueError):
        chunk_file("f.js", "a", max_chars=max_chars)
