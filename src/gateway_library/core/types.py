# SPDX-License-Identifier: LGPL-3.0-only
# Copyright (c) 2026 pi-gateway-extensions contributors

"""
Shared type definitions for the gateway library.

This module contains dataclasses and type definitions used across
the catalog, quota tracking, and host-facing packages.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Literal, Optional, Tuple


InputModality = Literal["text", "image"]


# =============================================================================
# MODEL CATALOG TYPES
# =============================================================================


@dataclass(frozen=True)
class ModelCost:
    """
    Per-token price vector for a model.

    The Kilo gateway feed is not trusted for pricing, so catalog entries
    always carry the zero vector.
    """

    input: float = 0.0
    output: float = 0.0
    cache_read: float = 0.0
    cache_write: float = 0.0

    def to_dict(self) -> Dict[str, float]:
        return {
            "input": self.input,
            "output": self.output,
            "cacheRead": self.cache_read,
            "cacheWrite": self.cache_write,
        }


@dataclass(frozen=True)
class ModelCompat:
    """
    OpenAI-completions compatibility descriptor.

    Constant for a provider; not derived per model.
    """

    max_tokens_field: str = "max_tokens"
    supports_developer_role: bool = False
    supports_reasoning_effort: bool = False
    supports_usage_in_streaming: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "maxTokensField": self.max_tokens_field,
            "supportsDeveloperRole": self.supports_developer_role,
            "supportsReasoningEffort": self.supports_reasoning_effort,
            "supportsUsageInStreaming": self.supports_usage_in_streaming,
        }


ZERO_COST = ModelCost()
DEFAULT_COMPAT = ModelCompat()


@dataclass(frozen=True)
class ModelConfig:
    """
    Canonical model entry published to the host's provider registry.

    Unique by id within one catalog snapshot.
    """

    id: str
    name: str
    reasoning: bool
    input: Tuple[InputModality, ...]
    context_window: int
    max_tokens: int
    cost: ModelCost = ZERO_COST
    compat: ModelCompat = DEFAULT_COMPAT

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the camelCase shape the host registry expects."""
        return {
            "id": self.id,
            "name": self.name,
            "reasoning": self.reasoning,
            "input": list(self.input),
            "cost": self.cost.to_dict(),
            "contextWindow": self.context_window,
            "maxTokens": self.max_tokens,
            "compat": self.compat.to_dict(),
        }


@dataclass(frozen=True)
class ProviderRegistration:
    """
    Everything the host needs to register (or re-register) a provider.
    """

    name: str
    base_url: str
    api_key_env: str
    api: str
    models: Tuple[ModelConfig, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "baseUrl": self.base_url,
            "apiKey": self.api_key_env,
            "api": self.api,
            "models": [model.to_dict() for model in self.models],
        }


# =============================================================================
# QUOTA RESPONSE TYPES (vendor-shaped, never merged into one schema)
# =============================================================================


@dataclass
class AntigravityQuotaInfo:
    """Quota info for one Antigravity model (fraction-based shape)."""

    remaining_fraction: Optional[float] = None
    reset_time: Optional[datetime] = None
    is_exhausted: bool = False


@dataclass
class AntigravityQuotaResponse:
    """
    Result of the two-step Antigravity quota fetch.

    `load_data` and `models_data` are the raw vendor payloads; the parsed
    fields below are derived from them.
    """

    load_data: Dict[str, Any]
    models_data: Dict[str, Any]
    project_id: Optional[str] = None
    available_prompt_credits: Optional[float] = None
    models: Dict[str, Optional[AntigravityQuotaInfo]] = field(default_factory=dict)
    recommended_ids: List[str] = field(default_factory=list)

    def to_payload(self) -> Dict[str, Any]:
        return {"loadData": self.load_data, "modelsData": self.models_data}


@dataclass
class CopilotQuotaSnapshot:
    """Quota snapshot for one Copilot SKU (counter-based shape)."""

    quota_id: str
    entitlement: float = 0.0
    remaining: float = 0.0
    percent_remaining: Optional[float] = None
    unlimited: bool = False


@dataclass
class CopilotQuotaResponse:
    """Parsed `copilot_internal/user` response plus the raw payload."""

    raw: Dict[str, Any]
    login: str = ""
    plan: str = ""
    sku: str = ""
    access_type_sku: Optional[str] = None
    quota_reset_date: Optional[datetime] = None
    snapshots: Dict[str, CopilotQuotaSnapshot] = field(default_factory=dict)

    def to_payload(self) -> Dict[str, Any]:
        return self.raw


# =============================================================================
# QUOTA DISPLAY TYPES
# =============================================================================


class Severity:
    """
    Severity classes for a quota row.

    Used by the quota view to pick a display style.
    """

    CRITICAL = "critical"
    WARNING = "warning"
    NORMAL = "normal"
    UNLIMITED = "unlimited"


@dataclass(frozen=True)
class QuotaRow:
    """
    One display row of a quota snapshot set, after vendor normalization.
    """

    key: str
    severity: str
    fraction: Optional[float] = None  # 0.0-1.0, None when unknown
    reset_time: Optional[datetime] = None
    exhausted: bool = False
    unlimited: bool = False
    detail: Optional[str] = None  # e.g. "120/300" for counter-based vendors
