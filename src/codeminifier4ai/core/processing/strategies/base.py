from __future__ import annotations

"""
Base Definitions for Tokenization Strategies.

Provides the abstract interface shared by every token counting strategy.
"""

from abc import ABC, abstractmethod

from codeminifier4ai.domain.constants import DEFAULT_MODEL_KEY

DEFAULT_MODEL: str = DEFAULT_MODEL_KEY


class TokenizerStrategy(ABC):
    """
    Abstract base class for model-specific tokenization algorithms.
    """

    @abstractmethod
    def count(self, text: str, model_id: str) -> int:
        """
        Calculate the token count for a given text segment.

        Args:
            text: Input string to be tokenized.
            model_id: Specific model identifier for encoding selection.

        Returns:
            int: Total token count.
        """
