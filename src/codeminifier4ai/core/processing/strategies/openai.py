from __future__ import annotations

"""
OpenAI Tokenization Strategy.

Local BPE counting through tiktoken. Modern models use ``o200k_base``;
legacy GPT-4/GPT-3.5 identifiers use ``cl100k_base``.
"""

import logging
from typing import Dict

import tiktoken

from codeminifier4ai.core.processing.strategies.base import TokenizerStrategy

logger = logging.getLogger(__name__)

_LEGACY_MARKERS = ("gpt-4-", "gpt-3.5", "legacy")


class TiktokenStrategy(TokenizerStrategy):
    """OpenAI-compatible encoder backed by tiktoken."""

    def __init__(self) -> None:
        self._encodings: Dict[str, "tiktoken.Encoding"] = {}

    def count(self, text: str, model_id: str) -> int:
        """
        Encode ``text`` and return the number of tokens.

        Args:
            text: Input string to tokenize.
            model_id: Model identifier, used to pick the encoding.

        Returns:
            int: Calculated token count.
        """
        encoding_name = "o200k_base"
        if any(x in (model_id or "").lower() for x in _LEGACY_MARKERS):
            encoding_name = "cl100k_base"

        return len(self._get_encoding(encoding_name).encode(text, disallowed_special=()))

    def _get_encoding(self, name: str) -> "tiktoken.Encoding":
        if name not in self._encodings:
            try:
                self._encodings[name] = tiktoken.get_encoding(name)
            except ValueError:
                logger.debug(f"Encoding '{name}' not found, falling back to cl100k.")
                self._encodings[name] = tiktoken.get_encoding("cl100k_base")
        return self._encodings[name]
