from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: logging bootstrap, configuration
resolution (defaults, persisted file, command-line overrides), dispatch to
the selected engine and rendering of the result as a human summary or JSON.
"""

import json
import os
import sys
from dataclasses import asdict
from typing import Any, Dict, List, Optional, Tuple

from codeminifier4ai.core.chunking.code_chunker import chunk_file
from codeminifier4ai.core.chunking.context_splitter import split_for_context
from codeminifier4ai.core.pipeline.batch_minifier import minify_files
from codeminifier4ai.core.pipeline.validator import validate_config
from codeminifier4ai.core.processing.minifier import is_file_supported
from codeminifier4ai.core.processing.tokenizer import count_tokens
from codeminifier4ai.core.services.context_builder import (
    build_context_messages,
    build_index_records,
    estimate_message_tokens,
)
from codeminifier4ai.domain.config import get_default_config, load_config, save_config
from codeminifier4ai.domain.models import CodeChunk, MinifyBatchResult
from codeminifier4ai.infra.fs import DirectoryResolver, list_relative_files, normalize_path
from codeminifier4ai.infra.logging import (
    LoggingConfig,
    configure_logging,
    get_default_log_path,
    get_logger,
)
from codeminifier4ai.interface.cli import args as cli_args

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_BAD_INPUT = 2
EXIT_INTERRUPTED = 130

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the CLI workflow.

    Args:
        argv: Command line arguments. Defaults to sys.argv.

    Returns:
        int: Process exit code.
    """
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    log_level = "DEBUG" if args.debug else "INFO"
    log_file = None
    if args.log_file is not None:
        log_file = args.log_file or get_default_log_path()
    configure_logging(LoggingConfig(level=log_level, console=True, log_file=log_file))

    base_conf = get_default_config() if args.use_defaults else load_config()
    raw_conf = dict(base_conf)
    raw_conf.update(cli_args.args_to_overrides(args))

    conf, warnings = validate_config(raw_conf, strict=False)
    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")
    conf["input_path"] = normalize_path(conf["input_path"], os.getcwd())

    if args.save_config:
        save_config(conf)
        logger.info("Configuration saved.")

    if args.dump_config:
        print(json.dumps(conf, ensure_ascii=False, indent=2))
        return EXIT_OK

    handlers = {
        "minify": _run_minify,
        "chunk": _run_chunk,
        "split": _run_split,
    }

    try:
        return handlers[args.command](args, conf)
    except KeyboardInterrupt:
        logger.warning("Operation interrupted by user.")
        return EXIT_INTERRUPTED
    except Exception as e:
        logger.critical(f"Command '{args.command}' failed: {e}", exc_info=True)
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_FAILURE

# -----------------------------------------------------------------------------
# COMMAND HANDLERS
# -----------------------------------------------------------------------------

def _run_minify(args: Any, conf: Dict[str, Any]) -> int:
    input_path = conf["input_path"]
    if not os.path.isdir(input_path):
        logger.error(f"Input directory does not exist: {input_path}")
        return EXIT_BAD_INPUT

    paths = args.files or list_relative_files(input_path)
    result = minify_files(paths, DirectoryResolver(input_path))
    token_count = count_tokens(result.content, conf["target_model"]) if result.ok else 0

    output_path = conf["output_path"]
    if result.ok and output_path:
        with open(output_path, "w", encoding="utf-8") as f:
            f.write(result.content)
        logger.info(f"Unified output written to {output_path}")

    if args.json_output:
        payload = asdict(result)
        payload["skipped_count"] = result.skipped_count
        payload["reduction_percentage"] = result.reduction_percentage
        payload["token_count"] = token_count
        print(json.dumps(payload, ensure_ascii=False, indent=2))
    else:
        _print_minify_summary(result, token_count)

    return EXIT_OK if result.ok else EXIT_FAILURE


def _run_chunk(args: Any, conf: Dict[str, Any]) -> int:
    input_path = conf["input_path"]
    if not os.path.isdir(input_path):
        logger.error(f"Input directory does not exist: {input_path}")
        return EXIT_BAD_INPUT

    paths = [p for p in (args.files or list_relative_files(input_path)) if is_file_supported(p)]
    chunks, failed = _chunk_paths(paths, DirectoryResolver(input_path), conf["max_chunk_chars"])

    if args.json_output:
        print(json.dumps(build_index_records(chunks, conf["session_id"]), ensure_ascii=False, indent=2))
    else:
        per_file: Dict[str, int] = {}
        for chunk in chunks:
            per_file[chunk.file_path] = per_file.get(chunk.file_path, 0) + 1
        for path, count in per_file.items():
            print(f"{path}: {count} chunks")
        print(f"Total: {len(chunks)} chunks from {len(per_file)} files ({failed} failed)")

    return EXIT_FAILURE if not paths or failed == len(paths) else EXIT_OK


def _run_split(args: Any, conf: Dict[str, Any]) -> int:
    file_path = os.path.abspath(args.file)
    if not os.path.isfile(file_path):
        logger.error(f"Input file does not exist: {file_path}")
        return EXIT_BAD_INPUT

    source = DirectoryResolver(os.path.dirname(file_path)).load(os.path.basename(file_path))
    logger.info(f"Splitting {source.path} ({source.size_bytes} bytes)")
    chunks = split_for_context(source.content, conf["context_chunk_size"], conf["context_overlap"])
    messages = build_context_messages(chunks)

    if args.json_output:
        print(json.dumps(messages, ensure_ascii=False, indent=2))
    else:
        for i, chunk in enumerate(chunks, start=1):
            print(f"Part {i}/{len(chunks)}: {len(chunk)} chars")
        print(f"Estimated tokens: {estimate_message_tokens(messages, conf['target_model'])}")

    return EXIT_OK

# -----------------------------------------------------------------------------
# HELPERS
# -----------------------------------------------------------------------------

def _chunk_paths(
        paths: List[str],
        resolver: DirectoryResolver,
        max_chars: int,
) -> Tuple[List[CodeChunk], int]:
    """Chunk every path, skipping (and counting) files that cannot be read."""
    chunks: List[CodeChunk] = []
    failed = 0
    for path in paths:
        try:
            source = resolver.load(path)
        except OSError as e:
            logger.error(f"Error reading {path}: {e}")
            failed += 1
            continue
        chunks.extend(chunk_file(source.path, source.content, max_chars))
    return chunks, failed


def _print_minify_summary(result: MinifyBatchResult, token_count: int) -> None:
    """Render a short human readable report of a batch run."""
    if not result.ok:
        print(f"ERROR: {result.error}", file=sys.stderr)
        print(f"Skipped (unsupported): {result.skipped_count}")
        return

    print("-" * 60)
    print(f"Files minified       : {len(result.files)}")
    print(f"Skipped (unsupported): {result.skipped_count}")
    print(f"Failed to read       : {len(result.failed)}")
    print(f"Original size        : {result.original_size} chars")
    print(f"Minified size        : {result.minified_size} chars")
    if result.reduction_percentage is not None:
        print(f"Reduction            : {result.reduction_percentage:.2f}%")
    print(f"Estimated tokens     : {token_count}")
    print("-" * 60)
