# SPDX-License-Identifier: LGPL-3.0-only
# Copyright (c) 2026 pi-gateway-extensions contributors

"""
Static Kilo Code catalog used when the gateway is unreachable at start-up.

Hand-curated, not a cache of a previous fetch. Only the initial load
falls back to this table; a failed manual refresh never does.
"""

from typing import Tuple

from ..core.types import ModelConfig

FALLBACK_MODELS: Tuple[ModelConfig, ...] = (
    ModelConfig(
        id="anthropic/claude-sonnet-4.5",
        name="Anthropic: Claude Sonnet 4.5",
        reasoning=True,
        input=("text", "image"),
        context_window=1000000,
        max_tokens=64000,
    ),
    ModelConfig(
        id="anthropic/claude-opus-4.1",
        name="Anthropic: Claude Opus 4.1",
        reasoning=True,
        input=("text", "image"),
        context_window=200000,
        max_tokens=32000,
    ),
    ModelConfig(
        id="openai/gpt-5",
        name="OpenAI: GPT-5",
        reasoning=True,
        input=("text", "image"),
        context_window=400000,
        max_tokens=128000,
    ),
    ModelConfig(
        id="google/gemini-2.5-pro",
        name="Google: Gemini 2.5 Pro",
        reasoning=True,
        input=("text", "image"),
        context_window=1048576,
        max_tokens=65536,
    ),
    ModelConfig(
        id="x-ai/grok-code-fast-1",
        name="xAI: Grok Code Fast 1",
        reasoning=True,
        input=("text",),
        context_window=256000,
        max_tokens=10000,
    ),
    ModelConfig(
        id="qwen/qwen3-coder",
        name="Qwen: Qwen3 Coder 480B A35B",
        reasoning=False,
        input=("text",),
        context_window=262144,
        max_tokens=65536,
    ),
)
