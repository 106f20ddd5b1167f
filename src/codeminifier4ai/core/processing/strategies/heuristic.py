from __future__ import annotations

"""
Heuristic Tokenization Strategy.

Character-density estimate used whenever a real encoder is unavailable
or fails.
"""

import math

from codeminifier4ai.core.processing.strategies.base import TokenizerStrategy

# Roughly 4 characters per token for code and English prose
CHARS_PER_TOKEN_AVG: int = 4


class HeuristicStrategy(TokenizerStrategy):
    """Fallback algorithm using character density estimation."""

    def count(self, text: str, model_id: str) -> int:
        if not text:
            return 0
        return math.ceil(len(text) / CHARS_PER_TOKEN_AVG)
