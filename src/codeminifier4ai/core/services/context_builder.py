from __future__ import annotations

"""
LLM Context Builder.

Shapes engine output into the payloads consumed by external collaborators:
chat messages for streaming a code corpus into a model turn by turn,
vector-store records for chunk indexing, and the context block used when
answering a question from retrieved chunks.
"""

import logging
from typing import Any, Dict, List, Mapping, Sequence

from codeminifier4ai.core.processing.tokenizer import count_tokens
from codeminifier4ai.domain.constants import CONTEXT_PART_TEMPLATE, DEFAULT_MODEL_KEY
from codeminifier4ai.domain.models import CodeChunk

logger = logging.getLogger(__name__)

ANNOUNCEMENT_TEMPLATE = (
    "I am going to send {total} chunks of my source code for analysis. "
    "Please wait until all of the code has been sent before answering with a detailed analysis."
)


# -----------------------------------------------------------------------------
# CHAT MESSAGES
# -----------------------------------------------------------------------------

def build_context_messages(chunks: Sequence[str]) -> List[Dict[str, str]]:
    """
    Turn context chunks into user messages, one chunk per message.

    With more than one chunk, an announcement message is prepended and
    every chunk is prefixed with a ``[CODE CONTEXT - PART i/n]`` marker.

    Args:
        chunks: Output of the context-window splitter.

    Returns:
        List[Dict[str, str]]: Messages with ``role`` and ``content`` keys.
    """
    total = len(chunks)
    if total == 0:
        return []
    if total == 1:
        return [{"role": "user", "content": chunks[0]}]

    messages = [{"role": "user", "content": ANNOUNCEMENT_TEMPLATE.format(total=total)}]
    for i, chunk in enumerate(chunks, start=1):
        marker = CONTEXT_PART_TEMPLATE.format(index=i, total=total)
        messages.append({"role": "user", "content": f"{marker}\n\n{chunk}"})
    return messages


def estimate_message_tokens(messages: Sequence[Mapping[str, str]], model: str = DEFAULT_MODEL_KEY) -> int:
    """Sum the token estimate of every message body."""
    return sum(count_tokens(m.get("content", ""), model) for m in messages)


# -----------------------------------------------------------------------------
# VECTOR STORE RECORDS
# -----------------------------------------------------------------------------

def build_index_records(chunks: Sequence[CodeChunk], session_id: str) -> List[Dict[str, Any]]:
    """
    Build vector-store records for code chunks of one session.

    Embedding values are left to the indexing collaborator; each record
    carries the chunk text and position metadata.

    Args:
        chunks: Chunks produced by the code chunker.
        session_id: Opaque identifier scoping the records.

    Returns:
        List[Dict[str, Any]]: Records with ``id`` and ``metadata`` keys.
    """
    return [
        {
            "id": f"{session_id}::{chunk.id}",
            "metadata": {
                "sessionId": session_id,
                "filePath": chunk.file_path,
                "startLine": chunk.start_line,
                "endLine": chunk.end_line,
                "chunkIndex": chunk.chunk_index,
                "text": chunk.content,
            },
        }
        for chunk in chunks
    ]


# -----------------------------------------------------------------------------
# QUESTION ANSWERING CONTEXT
# -----------------------------------------------------------------------------

def format_retrieved_context(matches: Sequence[Mapping[str, Any]]) -> str:
    """
    Render retrieved chunks as the code context block of a QA prompt.

    Each match needs ``filePath``, ``startLine``, ``endLine`` and ``text``
    (the metadata shape written by ``build_index_records``).

    Args:
        matches: Retrieved chunk metadata, most relevant first.

    Returns:
        str: Blocks separated by a blank line; empty when nothing matched.
    """
    blocks = []
    for match in matches:
        blocks.append(
            f"-- file: {match.get('filePath', '')} "
            f"(lines {match.get('startLine', '?')}-{match.get('endLine', '?')}) --\n"
            f"```\n{match.get('text', '')}\n```"
        )
    if not blocks:
        logger.debug("No retrieved chunks to format.")
    return "\n\n".join(blocks)
