from __future__ import annotations

"""
Configuration Validation Service.

Normalizes configuration dictionaries coming from the persisted file or
the CLI: missing keys are filled from the defaults and loosely typed values
(numeric strings, floats) are coerced, with a warning for every correction.
"""

import logging
from typing import Any, Dict, List, Tuple

from codeminifier4ai.domain.config import get_default_config

logger = logging.getLogger(__name__)

_STRING_FIELDS = ["input_path", "output_path", "session_id", "target_model"]

# Field -> minimum accepted value
_INT_FIELDS = {
    "max_chunk_chars": 1,
    "context_chunk_size": 1,
    "context_overlap": 0,
}


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def validate_config(
        config: Any,
        *,
        strict: bool = False,
) -> Tuple[Dict[str, Any], List[str]]:
    """
    Validate and normalize a configuration dictionary.

    Args:
        config: Raw configuration data.
        strict: Raise on invalid values instead of falling back to defaults.

    Returns:
        Tuple[Dict[str, Any], List[str]]: Normalized configuration and the
        list of warnings produced while normalizing.

    Raises:
        TypeError: In strict mode, on a value of the wrong type.
        ValueError: In strict mode, on an out-of-range value.
    """
    warnings: List[str] = []
    defaults = get_default_config()

    if not isinstance(config, dict):
        msg = f"Invalid config type: expected dict, received {type(config).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using defaults.")
        logger.warning(msg)
        return defaults, warnings

    merged: Dict[str, Any] = dict(defaults)
    merged.update(config)

    for field in _STRING_FIELDS:
        merged[field] = _as_str(merged.get(field), defaults[field], field, warnings, strict)

    for field, minimum in _INT_FIELDS.items():
        merged[field] = _as_int(merged.get(field), defaults[field], minimum, field, warnings, strict)

    if merged["context_overlap"] >= merged["context_chunk_size"]:
        msg = (
            f"context_overlap ({merged['context_overlap']}) must be smaller than "
            f"context_chunk_size ({merged['context_chunk_size']})."
        )
        if strict:
            raise ValueError(msg)
        fallback = min(defaults["context_overlap"], merged["context_chunk_size"] // 2)
        warnings.append(f"{msg} Using {fallback}.")
        merged["context_overlap"] = fallback

    return merged, warnings


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: TYPE COERCION
# -----------------------------------------------------------------------------

def _as_str(value: Any, fallback: str, field: str, warnings: List[str], strict: bool) -> str:
    """Validate and sanitize string inputs."""
    if value is None:
        return fallback
    if isinstance(value, str):
        v = value.strip()
        return v if v else fallback

    msg = f"Invalid field '{field}': expected str, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_int(
        value: Any,
        fallback: int,
        minimum: int,
        field: str,
        warnings: List[str],
        strict: bool,
) -> int:
    """Coerce numeric input into an int not lower than ``minimum``."""
    if value is None:
        return fallback

    result = None
    if isinstance(value, bool):
        result = None
    elif isinstance(value, int):
        result = value
    elif not strict:
        if isinstance(value, float) and value.is_integer():
            warnings.append(f"Field '{field}' converted from float {value} to int.")
            result = int(value)
        elif isinstance(value, str) and value.strip().lstrip("-").isdigit():
            warnings.append(f"Field '{field}' converted from '{value}' to int.")
            result = int(value.strip())

    if result is None:
        msg = f"Invalid field '{field}': expected int, received {type(value).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using fallback.")
        return fallback

    if result < minimum:
        msg = f"Invalid field '{field}': {result} is lower than {minimum}."
        if strict:
            raise ValueError(msg)
        warnings.append(f"{msg} Using fallback.")
        return fallback

    return result
