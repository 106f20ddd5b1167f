from __future__ import annotations

"""
Unit tests for the Tokenizer Service.

Verifies:
1. Delegation to the tiktoken strategy.
2. Fallback to heuristic estimation on failure or absence.
3. Handling of empty inputs and the public API singleton.
"""

from unittest.mock import patch

import pytest

from codeminifier4ai.core.processing.strategies import DEFAULT_MODEL
from codeminifier4ai.core.processing.tokenizer import TokenizerService, count_tokens


@pytest.fixture
def service() -> TokenizerService:
    """Provide a fresh instance of the TokenizerService."""
    return TokenizerService()


def test_tokenizer_service_delegation(service: TokenizerService) -> None:
    """Verify that every model routes through tiktoken."""
    with patch.object(service, "_tiktoken") as mock_tik:
        mock_tik.count.return_value = 42

        assert service.count("some text", "gpt-4o") == 42
        assert service.count("some text", "claude-3-sonnet") == 42


def test_tokenizer_service_maps_default_model(service: TokenizerService) -> None:
    """The placeholder default model is counted as gpt-4o."""
    with patch.object(service, "_tiktoken") as mock_tik:
        mock_tik.count.return_value = 7

        service.count("some text", DEFAULT_MODEL)

        mock_tik.count.assert_called_once_with("some text", "gpt-4o")


def test_tokenizer_service_fallback_on_failure(service: TokenizerService) -> None:
    """Ensure that if tiktoken fails, the heuristic takes over."""
    with patch.object(service, "_tiktoken") as mock_tik:
        mock_tik.count.side_effect = Exception("Library Error")

        # 8 chars -> 2 tokens
        assert service.count("12345678", "any-model") == 2


def test_tokenizer_service_heuristic_when_no_tiktoken(service: TokenizerService) -> None:
    """Verify fallback when no encoder is configured."""
    service._tiktoken = None

    # 12 chars -> 3 tokens
    assert service.count("123456789012", "any-model") == 3


def test_tokenizer_service_empty_input(service: TokenizerService) -> None:
    """Verify that empty or None inputs return zero tokens."""
    assert service.count("", "gpt-4o") == 0
    assert service.count(None, "gpt-4o") == 0  # type: ignore


def test_public_api_count_tokens() -> None:
    """Verify the module level function uses the service singleton."""
    with patch("codeminifier4ai.core.processing.tokenizer._SERVICE_INSTANCE") as mock_service:
        mock_service.count.return_value = 100

        assert count_tokens("hello", "gpt-4o") == 100
        mock_service.count.assert_called_once_with("hello", "gpt-4o")
