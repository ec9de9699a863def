# SPDX-License-Identifier: LGPL-3.0-only
# Copyright (c) 2026 pi-gateway-extensions contributors

"""
Kilo gateway model record -> ModelConfig.

Raw records follow the OpenRouter-style schema:

    {
        "id": "anthropic/claude-sonnet-4.5",
        "name": "Claude Sonnet 4.5",
        "context_length": 200000,
        "architecture": {"input_modalities": ["text", "image"]},
        "top_provider": {"context_length": 200000, "max_completion_tokens": 64000},
        "supported_parameters": ["tools", "reasoning", ...],
        "pricing": {"prompt": "0.000003", "completion": "0.000015"},
        "preferredIndex": 3
    }

Any field may be missing or have the wrong type; nothing here raises.
"""

import math
from typing import Any, Dict, List, Optional, Tuple

from ..core.constants import (
    DEFAULT_CONTEXT_WINDOW,
    MAX_ESTIMATED_MAX_TOKENS,
    MAX_TOKENS_CONTEXT_DIVISOR,
    MIN_ESTIMATED_MAX_TOKENS,
    REASONING_PARAMETER_MARKERS,
)
from ..core.types import DEFAULT_COMPAT, ZERO_COST, InputModality, ModelConfig


def as_positive_int(value: Any) -> Optional[int]:
    """
    Coerce a JSON number to a positive int.

    Non-numbers (including bools and numeric strings), non-finite values
    and anything that floors to < 1 return None.
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if not math.isfinite(value):
        return None
    result = math.floor(value)
    if result < 1:
        return None
    return result


def _get_dict(record: Dict[str, Any], key: str) -> Dict[str, Any]:
    value = record.get(key)
    return value if isinstance(value, dict) else {}


def _get_str_list(record: Dict[str, Any], key: str) -> List[str]:
    value = record.get(key)
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, str)]


def resolve_context_window(record: Dict[str, Any]) -> int:
    """Top-level context_length, then top_provider.context_length, then default."""
    return (
        as_positive_int(record.get("context_length"))
        or as_positive_int(_get_dict(record, "top_provider").get("context_length"))
        or DEFAULT_CONTEXT_WINDOW
    )


def resolve_max_tokens(record: Dict[str, Any], context_window: int) -> int:
    """
    Vendor max_completion_tokens verbatim when present, otherwise a quarter
    of the context window clamped to [4096, 65536].
    """
    provider_max = as_positive_int(
        _get_dict(record, "top_provider").get("max_completion_tokens")
    )
    if provider_max:
        return provider_max
    estimated = context_window // MAX_TOKENS_CONTEXT_DIVISOR
    return max(MIN_ESTIMATED_MAX_TOKENS, min(estimated, MAX_ESTIMATED_MAX_TOKENS))


def resolve_input_modalities(record: Dict[str, Any]) -> Tuple[InputModality, ...]:
    modalities = _get_str_list(_get_dict(record, "architecture"), "input_modalities")
    if "image" in modalities:
        return ("text", "image")
    return ("text",)


def supports_reasoning(record: Dict[str, Any]) -> bool:
    params = _get_str_list(record, "supported_parameters")
    return any(marker in params for marker in REASONING_PARAMETER_MARKERS)


def to_model_config(record: Any) -> Optional[ModelConfig]:
    """
    Normalize one raw gateway record.

    Returns:
        ModelConfig, or None when the record has no usable id
    """
    if not isinstance(record, dict):
        return None

    raw_id = record.get("id")
    model_id = raw_id.strip() if isinstance(raw_id, str) else ""
    if not model_id:
        return None

    raw_name = record.get("name")
    name = raw_name.strip() if isinstance(raw_name, str) else ""

    context_window = resolve_context_window(record)
    return ModelConfig(
        id=model_id,
        name=name or model_id,
        reasoning=supports_reasoning(record),
        input=resolve_input_modalities(record),
        context_window=context_window,
        max_tokens=resolve_max_tokens(record, context_window),
        cost=ZERO_COST,
        compat=DEFAULT_COMPAT,
    )


# =============================================================================
# FREE MODEL DETECTION (auxiliary listing only)
# =============================================================================


def is_free_model(record: Any) -> bool:
    """
    True when every pricing field of a raw record is zero.

    A record without pricing fields is treated as "not free", as is any
    price that does not parse as a number.
    """
    if not isinstance(record, dict):
        return False
    pricing = record.get("pricing")
    if not isinstance(pricing, dict) or not pricing:
        return False
    for value in pricing.values():
        if isinstance(value, bool):
            return False
        try:
            price = float(value)
        except (TypeError, ValueError):
            return False
        if not math.isfinite(price) or price != 0:
            return False
    return True
