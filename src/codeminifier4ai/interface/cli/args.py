from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line schema (one sub-command per engine) and
translates parsed namespaces into configuration overrides.
"""

import argparse
from typing import Any, Dict

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the CodeMinifier4AI CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help="Print the result as JSON.",
    )
    common.add_argument(
        "--use-defaults",
        action="store_true",
        help="Ignore the persisted configuration file.",
    )
    common.add_argument(
        "--dump-config",
        action="store_true",
        help="Print the effective configuration and exit.",
    )
    common.add_argument(
        "--save-config",
        action="store_true",
        help="Persist the effective configuration for later runs.",
    )
    common.add_argument(
        "--debug",
        action="store_true",
        help="Elevate logging verbosity to DEBUG.",
    )
    common.add_argument(
        "--log-file",
        nargs="?",
        const="",
        default=None,
        help="Also log to a rotating file (default location when no path is given).",
    )

    p = argparse.ArgumentParser(
        prog="codeminifier4ai",
        description="Minify and chunk source code for LLM consumption.",
    )
    sub = p.add_subparsers(dest="command", required=True)

    # --- Batch minification ---
    p_min = sub.add_parser(
        "minify",
        parents=[common],
        help="Minify files of a directory into one unified text.",
    )
    p_min.add_argument("-i", "--input", dest="input_path", default=None,
                       help="Project directory (default: configured input path).")
    p_min.add_argument("-o", "--output", dest="output_path", default=None,
                       help="Write the unified minified text to this file.")
    p_min.add_argument("files", nargs="*",
                       help="Relative paths to minify (default: every file in the directory).")

    # --- Code chunking ---
    p_chunk = sub.add_parser(
        "chunk",
        parents=[common],
        help="Split files into line-bounded chunks for vector indexing.",
    )
    p_chunk.add_argument("-i", "--input", dest="input_path", default=None,
                         help="Project directory (default: configured input path).")
    p_chunk.add_argument("--max-chars", dest="max_chunk_chars", type=int, default=None,
                         help="Maximum characters per chunk.")
    p_chunk.add_argument("--session", dest="session_id", default=None,
                         help="Session identifier used in index record ids.")
    p_chunk.add_argument("files", nargs="*",
                         help="Relative paths to chunk (default: every file in the directory).")

    # --- Context-window splitting ---
    p_split = sub.add_parser(
        "split",
        parents=[common],
        help="Split a text file into overlapping context-window chunks.",
    )
    p_split.add_argument("file", help="Text file to split (e.g. a unified minified output).")
    p_split.add_argument("--size", dest="context_chunk_size", type=int, default=None,
                         help="Maximum characters per chunk.")
    p_split.add_argument("--overlap", dest="context_overlap", type=int, default=None,
                         help="Characters shared by consecutive chunks.")

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

_OVERRIDE_KEYS = (
    "input_path",
    "output_path",
    "max_chunk_chars",
    "session_id",
    "context_chunk_size",
    "context_overlap",
)


def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into configuration overrides.

    Only options that exist on the selected sub-command and were given
    explicitly are returned.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Configuration overrides subset.
    """
    overrides: Dict[str, Any] = {}
    for key in _OVERRIDE_KEYS:
        value = getattr(args, key, None)
        if value is not None:
            overrides[key] = value
    return overrides
