from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Shared fixtures for configuration dictionaries and sample projects.
"""

import os
import sys
from pathlib import Path
from typing import Any, Dict

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def mock_config_dict() -> Dict[str, Any]:
    """
    Return a valid, complete configuration dictionary for testing.

    Reflects the structure defined in 'codeminifier4ai.domain.config'.

    Returns:
        Dict[str, Any]: A sample configuration dictionary.
    """
    return {
        # IO
        "input_path": "/tmp/test_input",
        "output_path": "",
        "session_id": "test-session",

        # Code Chunker
        "max_chunk_chars": 2000,

        # Context-Window Splitter
        "context_chunk_size": 16000,
        "context_overlap": 1000,

        # Reporting
        "target_model": "- Default Model -",
    }


@pytest.fixture
def sample_project(tmp_path: Path) -> Path:
    """
    Create a small mixed-language project on disk.

    Structure:
    /project
      /src
        app.js
        util.py
      /assets
        logo.png
      data.json
      README.md
      .env
    """
    root = tmp_path / "project"
    (root / "src").mkdir(parents=True)
    (root / "assets").mkdir()

    (root / "src" / "app.js").write_text(
        "import x from 'y';\n"
        "// entry point\n"
        "function main() {\n"
        "  /* run */\n"
        "  return x;\n"
        "}\n",
        encoding="utf-8",
    )
    (root / "src" / "util.py").write_text(
        '"""Helpers."""\n'
        "import os\n"
        "\n"
        "\n"
        "def helper():  # noqa\n"
        "    return os.sep\n",
        encoding="utf-8",
    )
    (root / "assets" / "logo.png").write_bytes(b"\x89PNG\r\n\x1a\n\x00\x00")
    (root / "data.json").write_text('{\n  "name": "demo",\n  "tags": [1, 2]\n}\n', encoding="utf-8")
    (root / "README.md").write_text("\n\n# Demo\n\nSample project.\n", encoding="utf-8")
    (root / ".env").write_text("SECRET=1\n", encoding="utf-8")

    return root
