from __future__ import annotations

"""
Domain Constants and Static Data Structures.

Centralizes the extension to language-family table, the binary extension
denylist, the unified output banner and the default sizing parameters of
the chunking engines.
"""

from typing import Dict, FrozenSet

CURRENT_CONFIG_VERSION = "1.0.0"
DEFAULT_MODEL_KEY = "- Default Model -"

# -----------------------------------------------------------------------------
# LANGUAGE FAMILIES
# -----------------------------------------------------------------------------

FAMILY_JS = "js"
FAMILY_JAVA = "java"
FAMILY_PYTHON = "python"
FAMILY_MARKUP = "markup"
FAMILY_STYLESHEET = "stylesheet"
FAMILY_PLAIN = "plain"

EXTENSION_FAMILIES: Dict[str, str] = {
    ".js": FAMILY_JS,
    ".jsx": FAMILY_JS,
    ".ts": FAMILY_JS,
    ".tsx": FAMILY_JS,
    ".py": FAMILY_PYTHON,
    ".java": FAMILY_JAVA,
    ".cs": FAMILY_JAVA,
    ".html": FAMILY_MARKUP,
    ".htm": FAMILY_MARKUP,
    ".xhtml": FAMILY_MARKUP,
    ".css": FAMILY_STYLESHEET,
    ".md": FAMILY_PLAIN,
    ".txt": FAMILY_PLAIN,
    ".json": FAMILY_PLAIN,
}

BINARY_EXTENSIONS: FrozenSet[str] = frozenset({
    # Images
    ".jpg", ".jpeg", ".png", ".gif", ".bmp", ".webp", ".ico", ".svg",
    # Audio / Video
    ".mp3", ".mp4", ".wav", ".ogg", ".avi", ".mov",
    # Office documents
    ".pdf", ".doc", ".docx", ".xls", ".xlsx", ".ppt", ".pptx",
    # Archives
    ".zip", ".rar", ".tar", ".gz", ".7z",
    # Executables / libraries
    ".exe", ".dll", ".so", ".dylib",
    # Data / compiled
    ".bin", ".dat", ".db", ".sqlite", ".class",
})

# -----------------------------------------------------------------------------
# OUTPUT FORMAT
# -----------------------------------------------------------------------------

# Downstream display relies on this exact shape
FILE_BANNER_TEMPLATE = "// ----- {path} -----"

CONTEXT_PART_TEMPLATE = "[CODE CONTEXT - PART {index}/{total}]"

# -----------------------------------------------------------------------------
# CHUNKING DEFAULTS
# -----------------------------------------------------------------------------

DEFAULT_MAX_CHUNK_CHARS = 2000
DEFAULT_CONTEXT_CHUNK_SIZE = 16000
DEFAULT_CONTEXT_OVERLAP = 1000
MIN_CONTEXT_ADVANCE = 100
