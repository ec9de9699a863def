# SPDX-License-Identifier: LGPL-3.0-only
# Copyright (c) 2026 pi-gateway-extensions contributors

"""
Kilo Gateway Catalog Fetching Mixin

Fetches the raw model list from the Kilo gateway, orders it, normalizes
every record, and enforces that at least one usable model came back.

API Details:
- Endpoint: GET {api_base}/models
- Auth: none (the key is only needed for completions)
- Response: { "data": [ {raw model record}, ... ] }

Required from provider:
    - self.provider_name: str
    - self.models_url: str
    - self.http_timeout: float
"""

import logging
import sys
from typing import Any, Dict, List, Optional, Tuple

import httpx

from ..core.errors import EmptyCatalogError, FetchError, describe_http_failure
from ..core.types import ModelConfig
from .normalizer import as_positive_int, is_free_model, to_model_config

lib_logger = logging.getLogger("gateway_library")

# Records without a preferredIndex all tie at the bottom
MISSING_PREFERRED_INDEX = sys.maxsize


def preferred_order_key(record: Dict[str, Any]) -> Tuple[int, str, str]:
    """
    Sort key for raw records: preferredIndex ascending, then display label.

    The label is the raw name, falling back to the id. Labels compare
    case-insensitively first; names differing only in case put the
    lowercase form first.
    """
    index = as_positive_int(record.get("preferredIndex"))
    label = record.get("name") or record.get("id") or ""
    if not isinstance(label, str):
        label = str(label)
    return (
        index if index is not None else MISSING_PREFERRED_INDEX,
        label.casefold(),
        label.swapcase(),
    )


def sort_raw_models(records: List[Any]) -> List[Dict[str, Any]]:
    """Return dict records in presentation order (input is not mutated)."""
    return sorted(
        (record for record in records if isinstance(record, dict)),
        key=preferred_order_key,
    )


def normalize_catalog(records: List[Any]) -> List[ModelConfig]:
    """
    Order and normalize raw records, dropping unusable ones.

    Duplicate ids keep their first (highest-ranked) occurrence so the
    catalog stays unique by id.
    """
    models: List[ModelConfig] = []
    seen_ids = set()
    for record in sort_raw_models(records):
        model = to_model_config(record)
        if model is None:
            continue
        if model.id in seen_ids:
            lib_logger.debug(f"Dropping duplicate gateway model id '{model.id}'")
            continue
        seen_ids.add(model.id)
        models.append(model)
    return models


class KiloCatalogFetcher:
    """
    Mixin class providing catalog fetching for the Kilo Code provider.

    Usage:
        class KiloCodeProvider(KiloCatalogFetcher):
            ...

    The provider class must initialize these instance attributes in __init__:
        self.provider_name: str
        self.models_url: str
        self.http_timeout: float
    """

    provider_name: str
    models_url: str
    http_timeout: float

    # =========================================================================
    # RAW GATEWAY ACCESS
    # =========================================================================

    async def fetch_raw_models(
        self, client: Optional[httpx.AsyncClient] = None
    ) -> List[Any]:
        """
        Fetch the unprocessed model list from the gateway.

        Args:
            client: Optional HTTP client for connection reuse

        Returns:
            The `data` list of the response (empty when absent or malformed)

        Raises:
            FetchError: On non-success status or transport failure
        """
        headers = {"Accept": "application/json"}
        try:
            if client is not None:
                response = await client.get(
                    self.models_url, headers=headers, timeout=self.http_timeout
                )
            else:
                async with httpx.AsyncClient() as new_client:
                    response = await new_client.get(
                        self.models_url, headers=headers, timeout=self.http_timeout
                    )
        except httpx.RequestError as e:
            raise FetchError(
                f"Failed to fetch models: {type(e).__name__}: {e}",
                provider=self.provider_name,
            ) from e

        if not response.is_success:
            raise FetchError(
                describe_http_failure("fetch models", response.status_code),
                provider=self.provider_name,
                status_code=response.status_code,
            )

        try:
            payload = response.json()
        except ValueError as e:
            raise FetchError(
                f"Failed to fetch models: invalid JSON ({e})",
                provider=self.provider_name,
                status_code=response.status_code,
            ) from e

        data = payload.get("data") if isinstance(payload, dict) else None
        if not isinstance(data, list):
            lib_logger.debug("Kilo gateway response has no 'data' list")
            return []
        return data

    # =========================================================================
    # CATALOG
    # =========================================================================

    async def fetch_catalog(
        self, client: Optional[httpx.AsyncClient] = None
    ) -> List[ModelConfig]:
        """
        Fetch and normalize the catalog.

        Returns:
            Models in gateway-preferred order

        Raises:
            FetchError: On non-success status or transport failure
            EmptyCatalogError: When no record survives normalization
        """
        raw_models = await self.fetch_raw_models(client)
        models = normalize_catalog(raw_models)
        if not models:
            raise EmptyCatalogError(provider=self.provider_name, raw_count=len(raw_models))

        lib_logger.debug(
            f"Kilo gateway returned {len(raw_models)} records, {len(models)} usable"
        )
        return models

    async def fetch_free_models(
        self, client: Optional[httpx.AsyncClient] = None
    ) -> List[ModelConfig]:
        """
        Fetch the catalog restricted to models whose gateway pricing is all zero.

        Returns:
            Free models in gateway-preferred order (possibly empty)
        """
        raw_models = await self.fetch_raw_models(client)
        return normalize_catalog([record for record in raw_models if is_free_model(record)])
