from __future__ import annotations

"""
Batch Minification Orchestrator.

Applies the minifier to a selection of files, concatenating every result
into one banner-delimited text buffer and aggregating size statistics.
File access is delegated to a FileResolver; a file that cannot be read is
reported and skipped without aborting the batch.
"""

import logging
from typing import Iterable, List

from codeminifier4ai.core.processing.minifier import is_file_supported, minify_file
from codeminifier4ai.domain.constants import FILE_BANNER_TEMPLATE
from codeminifier4ai.domain.models import (
    FileFailure,
    FileStats,
    MinifyBatchResult,
    create_batch_error_result,
    create_batch_success_result,
)
from codeminifier4ai.infra.fs import FileResolver, to_relative_posix

logger = logging.getLogger(__name__)


# ==============================================================================
# PUBLIC API
# ==============================================================================

def minify_files(paths: Iterable[str], resolver: FileResolver) -> MinifyBatchResult:
    """
    Minify a set of files into a single unified text.

    Each minified file contributes ``"// ----- <path> -----\\n<content>\\n\\n"``
    to the buffer; the final buffer is stripped. Unsupported paths are
    listed in ``skipped``; resolver failures are listed in ``failed``.

    Args:
        paths: Relative file paths selected by the user.
        resolver: Collaborator that loads the text of a path.

    Returns:
        MinifyBatchResult: Successful result, or a failed one when no file
        could be minified.
    """
    all_paths = [to_relative_posix(p) for p in paths]
    supported = [p for p in all_paths if is_file_supported(p)]
    skipped = [p for p in all_paths if not is_file_supported(p)]

    logger.info(f"Processing {len(supported)} supported files out of {len(all_paths)} total files")
    for p in skipped:
        logger.debug(f"Skipping unsupported file: {p}")

    if not supported:
        return create_batch_error_result(
            "No supported files were selected for minification.",
            skipped=skipped,
        )

    sections: List[str] = []
    stats: List[FileStats] = []
    failures: List[FileFailure] = []

    for path in supported:
        try:
            content = resolver.read_text(path)
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Error processing {path}: {e}")
            failures.append(FileFailure(path=path, error=str(e)))
            continue

        res = minify_file(path, content)
        if res is None:
            continue

        sections.append(f"{FILE_BANNER_TEMPLATE.format(path=res.path)}\n{res.content}\n\n")
        stats.append(FileStats(
            path=res.path,
            original_size=res.original_size,
            minified_size=res.minified_size,
        ))

    if not stats:
        return create_batch_error_result(
            "None of the selected files could be read.",
            skipped=skipped,
            failed=failures,
        )

    result = create_batch_success_result(
        content="".join(sections).strip(),
        files=stats,
        skipped=skipped,
        failed=failures,
    )
    logger.info(
        f"Minification finished. Files: {len(stats)}, skipped: {len(skipped)}, "
        f"failed: {len(failures)}. Size: {result.original_size} -> {result.minified_size} chars"
    )
    return result
