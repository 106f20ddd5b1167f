from __future__ import annotations

"""
Code Minification Engine.

Strips noise from source text according to the language family of the
file: comments, documentation strings and import/package declarations are
removed over the raw text, then a family-specific whitespace pass collapses
what is left. JSON is reparsed and reserialized compactly instead.

The transformation is lossy and meant for display and LLM context
compaction, not for producing runnable code. In particular the Python pass
collapses indentation.
"""

import json
import logging
import os
import re
from dataclasses import dataclass
from typing import Dict, Final, Iterable, Optional, Tuple

from codeminifier4ai.domain.constants import (
    BINARY_EXTENSIONS,
    EXTENSION_FAMILIES,
    FAMILY_JAVA,
    FAMILY_JS,
    FAMILY_MARKUP,
    FAMILY_PLAIN,
    FAMILY_PYTHON,
    FAMILY_STYLESHEET,
)
from codeminifier4ai.domain.models import MinifiedFile

logger = logging.getLogger(__name__)

Rule = Tuple[re.Pattern, str]

# -----------------------------------------------------------------------------
# LANGUAGE FAMILY MODEL
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class LanguageFamily:
    """
    Ordered minification rules for one family of languages.

    Attributes:
        name: Family identifier.
        strip_rules: Removal rules applied first, in order.
        collapse_rules: Whitespace rules applied after removal, in order.
        trim: Strip surrounding whitespace from the final result.
    """
    name: str
    strip_rules: Tuple[Rule, ...] = ()
    collapse_rules: Tuple[Rule, ...] = ()
    trim: bool = True

    def apply(self, text: str) -> str:
        result = text
        for pattern, replacement in self.strip_rules + self.collapse_rules:
            result = pattern.sub(replacement, result)
        return result.strip() if self.trim else result


def _rules(*pairs: Tuple[str, str], flags: int = 0) -> Tuple[Rule, ...]:
    return tuple((re.compile(p, flags), r) for p, r in pairs)

# -----------------------------------------------------------------------------
# MINIFICATION PATTERNS
# -----------------------------------------------------------------------------

_LINE_COMMENT_C: Final = (r"//.*?$", "")
_BLOCK_COMMENT_C: Final = (r"/\*[\s\S]*?\*/", "")
_DOC_COMMENT_C: Final = (r"/\*\*[\s\S]*?\*/", "")
_IMPORT_STATEMENT_C: Final = (r"^\s*import\s+.*?;\s*$", "")
_PACKAGE_STATEMENT_C: Final = (r"^\s*package\s+.*?;\s*$", "")

_BRACE_COLLAPSE: Final[Tuple[Rule, ...]] = _rules(
    (r"\s+", " "),
    (r"\s*\n\s*", "\n"),
    (r"\n+", "\n"),
)

_MARKUP_COLLAPSE: Final[Tuple[Rule, ...]] = _rules(
    (r"\s+", " "),
    (r">\s+<", "><"),
)

_STYLESHEET_COLLAPSE: Final[Tuple[Rule, ...]] = _MARKUP_COLLAPSE + _rules(
    (r"\s*:\s*", ":"),
    (r"\s*;\s*", ";"),
    (r"\s*{\s*", "{"),
    (r"\s*}\s*", "}"),
)

_BLANK_LINES: Final = (r"^\s*\n", "")

_FAMILIES: Dict[str, LanguageFamily] = {
    FAMILY_JS: LanguageFamily(
        name=FAMILY_JS,
        strip_rules=_rules(
            _LINE_COMMENT_C, _BLOCK_COMMENT_C, _IMPORT_STATEMENT_C, flags=re.MULTILINE
        ),
        collapse_rules=_BRACE_COLLAPSE,
    ),
    FAMILY_JAVA: LanguageFamily(
        name=FAMILY_JAVA,
        strip_rules=_rules(
            _LINE_COMMENT_C, _BLOCK_COMMENT_C, _DOC_COMMENT_C,
            _PACKAGE_STATEMENT_C, _IMPORT_STATEMENT_C,
            flags=re.MULTILINE,
        ),
        collapse_rules=_BRACE_COLLAPSE,
    ),
    FAMILY_PYTHON: LanguageFamily(
        name=FAMILY_PYTHON,
        strip_rules=_rules(
            (r"#.*?$", ""),
            (r"'''[\s\S]*?'''", ""),
            (r'"""[\s\S]*?"""', ""),
            (r"^\s*from\s+.*?import.*?$", ""),
            (r"^\s*import\s+.*?$", ""),
            flags=re.MULTILINE,
        ),
        collapse_rules=_rules(
            (r"[ \t]+", " "),
            (r"\n\n+", "\n\n"),
        ),
    ),
    FAMILY_MARKUP: LanguageFamily(
        name=FAMILY_MARKUP,
        strip_rules=_rules((r"<!--[\s\S]*?-->", ""), _BLANK_LINES, flags=re.MULTILINE),
        collapse_rules=_MARKUP_COLLAPSE,
    ),
    FAMILY_STYLESHEET: LanguageFamily(
        name=FAMILY_STYLESHEET,
        strip_rules=_rules(_BLOCK_COMMENT_C, _BLANK_LINES, flags=re.MULTILINE),
        collapse_rules=_STYLESHEET_COLLAPSE,
    ),
    FAMILY_PLAIN: LanguageFamily(
        name=FAMILY_PLAIN,
        strip_rules=_rules((r"\A(?:[ \t\r\f\v]*\n)+", "")),
        trim=False,
    ),
}

_EXTENSION_MAP: Dict[str, str] = dict(EXTENSION_FAMILIES)

# -----------------------------------------------------------------------------
# REGISTRY API
# -----------------------------------------------------------------------------

def register_family(family: LanguageFamily, extensions: Iterable[str]) -> None:
    """
    Register (or replace) a language family and map extensions to it.

    The registry is process-wide; undo with ``unregister_family``.

    Args:
        family: Rule set to register under ``family.name``.
        extensions: Dot-prefixed extensions handled by the family.
    """
    _FAMILIES[family.name] = family
    for ext in extensions:
        _EXTENSION_MAP[ext.lower()] = family.name


def unregister_family(name: str) -> None:
    """Remove a language family and every extension mapped to it."""
    _FAMILIES.pop(name, None)
    for ext in [e for e, fam in _EXTENSION_MAP.items() if fam == name]:
        del _EXTENSION_MAP[ext]


def get_language_family(file_path: str) -> Optional[str]:
    """
    Resolve the language family of a path from its extension.

    Returns:
        Optional[str]: Family name, or None for binary or unknown extensions.
    """
    ext = _extension_of(file_path)
    if ext in BINARY_EXTENSIONS:
        return None
    return _EXTENSION_MAP.get(ext)


def is_file_supported(file_path: str) -> bool:
    """Check whether a path can be minified (known extension, not binary)."""
    return get_language_family(file_path) is not None

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def minify_content(content: str, extension: str) -> str:
    """
    Minify text according to the family associated with ``extension``.

    Unknown extensions and invalid JSON are returned unchanged.

    Args:
        content: Raw text.
        extension: Dot-prefixed file extension (case-insensitive).

    Returns:
        str: Minified text.
    """
    if not content:
        return ""

    ext = (extension or "").lower()
    if ext == ".json":
        return _minify_json(content)

    family_name = _EXTENSION_MAP.get(ext)
    if family_name is None or ext in BINARY_EXTENSIONS:
        return content

    return _FAMILIES[family_name].apply(content)


def minify_file(file_path: str, content: str) -> Optional[MinifiedFile]:
    """
    Minify the already loaded content of one file.

    Args:
        file_path: Relative path of the file, used for family detection.
        content: UTF-8 text of the file.

    Returns:
        Optional[MinifiedFile]: The minified file, or None if the path is
        unsupported.
    """
    if not is_file_supported(file_path):
        logger.debug(f"Skipping unsupported file: {file_path}")
        return None

    ext = _extension_of(file_path)
    minified = minify_content(content or "", ext)

    original_len = len(content or "")
    minified_len = len(minified)
    if original_len > 0:
        reduction = 100 - (minified_len * 100 / original_len)
        logger.debug(
            f"Minified {file_path}: {original_len} -> {minified_len} chars "
            f"({reduction:.1f}% reduction)"
        )

    return MinifiedFile(
        path=file_path,
        content=minified,
        original_size=original_len,
        minified_size=minified_len,
    )

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _extension_of(file_path: str) -> str:
    return os.path.splitext(file_path or "")[1].lower()


def _reject_constant(name: str) -> None:
    raise ValueError(f"Non-standard JSON constant: {name}")


def _minify_json(content: str) -> str:
    """
    Reserialize JSON without insignificant whitespace; pass invalid JSON through.

    NaN and Infinity literals, and numbers overflowing to infinity, count as
    invalid. Floats are written in Python repr form: ``1.0`` stays ``1.0``
    and ``1e5`` becomes ``100000.0``.
    """
    try:
        parsed = json.loads(content, parse_constant=_reject_constant)
        return json.dumps(parsed, separators=(",", ":"), ensure_ascii=False, allow_nan=False)
    except (ValueError, RecursionError):
        logger.debug("Invalid JSON content, leaving it unchanged.")
        return content
