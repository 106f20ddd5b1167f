from __future__ import annotations

"""
Token Counting Service.

Estimates the token footprint of minified output and context chunks for
the target model. tiktoken is used as a universal BPE proxy; any failure
(missing encoding files, offline environment) degrades to the character
heuristic so reporting never breaks a run.
"""

import logging
from typing import Optional

from codeminifier4ai.core.processing.strategies import (
    DEFAULT_MODEL,
    HeuristicStrategy,
    TiktokenStrategy,
    TokenizerStrategy,
)

logger = logging.getLogger(__name__)


class TokenizerService:
    """Model-aware token estimation with a heuristic safety net."""

    def __init__(self) -> None:
        self.heuristic = HeuristicStrategy()
        self._tiktoken: Optional[TokenizerStrategy] = TiktokenStrategy()

    def count(self, text: str, model: str = DEFAULT_MODEL) -> int:
        """
        Count the tokens of ``text``.

        Args:
            text: Raw input text.
            model: Target model identifier.

        Returns:
            int: Token count (0 for empty input).
        """
        if not text:
            return 0

        if self._tiktoken is None:
            return self.heuristic.count(text, model)

        model_id = "gpt-4o" if model == DEFAULT_MODEL else model
        try:
            return self._tiktoken.count(text, model_id)
        except Exception as e:
            logger.warning(f"Token encoder failed: {e}. Using heuristic fallback.")
            return self.heuristic.count(text, model)


_SERVICE_INSTANCE = TokenizerService()


def count_tokens(text: str, model: str = DEFAULT_MODEL) -> int:
    """Estimate the number of tokens of ``text`` for ``model``."""
    return _SERVICE_INSTANCE.count(text, model)
