# SPDX-License-Identifier: LGPL-3.0-only
# Copyright (c) 2026 pi-gateway-extensions contributors

"""
Catalog registry bridge.

Owns the currently published Kilo Code catalog and (re-)registers it with
the host's provider registry. Two entry points:

- load_initial(): fetch once; on any gateway failure publish the static
  fallback table instead, so the extension still activates offline.
- refresh(): fetch again and publish on success; on failure raise and
  leave the published catalog untouched.

Publishing replaces the whole catalog in one step. Fetch + publish run
under a single lock, so overlapping refreshes are serialized.
"""

import asyncio
import logging
import time
from typing import TYPE_CHECKING, Callable, Optional, Sequence, Tuple

import httpx

from ..core.errors import GatewayError
from ..core.types import ModelConfig, ProviderRegistration
from .fallback import FALLBACK_MODELS

if TYPE_CHECKING:
    from ..providers.kilo_code_provider import KiloCodeProvider

lib_logger = logging.getLogger("gateway_library")

SOURCE_GATEWAY = "gateway"
SOURCE_FALLBACK = "fallback"

PublishCallback = Callable[[ProviderRegistration], None]


class CatalogSlot:
    """
    The published catalog as a single immutable snapshot.

    Readers always see either the previous or the next snapshot, never a
    mix of both.
    """

    def __init__(self):
        self._snapshot: Tuple[Tuple[ModelConfig, ...], Optional[str], Optional[float]] = (
            (),
            None,
            None,
        )

    @property
    def models(self) -> Tuple[ModelConfig, ...]:
        return self._snapshot[0]

    @property
    def source(self) -> Optional[str]:
        return self._snapshot[1]

    @property
    def published_at(self) -> Optional[float]:
        return self._snapshot[2]

    def replace(self, models: Tuple[ModelConfig, ...], source: str) -> None:
        self._snapshot = (models, source, time.time())


class CatalogRegistryBridge:
    """
    Publishes the Kilo Code catalog to the host and keeps the current copy.

    Args:
        provider: Provider that fetches the catalog and builds registrations
        publish: Host callback that registers a provider (last writer wins)
        fallback: Models published when the initial fetch fails
        client: Optional shared HTTP client
    """

    def __init__(
        self,
        provider: "KiloCodeProvider",
        publish: PublishCallback,
        fallback: Sequence[ModelConfig] = FALLBACK_MODELS,
        client: Optional[httpx.AsyncClient] = None,
    ):
        if not fallback:
            raise ValueError("fallback catalog must contain at least one model")
        self._provider = provider
        self._publish = publish
        self._fallback = tuple(fallback)
        self._client = client
        self._slot = CatalogSlot()
        self._lock = asyncio.Lock()

    @property
    def models(self) -> Tuple[ModelConfig, ...]:
        """Currently published catalog (empty before the first publish)."""
        return self._slot.models

    @property
    def source(self) -> Optional[str]:
        """Either "gateway" or "fallback"; None before the first publish."""
        return self._slot.source

    @property
    def published_at(self) -> Optional[float]:
        return self._slot.published_at

    async def load_initial(self) -> Tuple[ModelConfig, ...]:
        """
        Fetch and publish the catalog, falling back to the static table.

        Never raises for gateway/credential failures.
        """
        async with self._lock:
            try:
                models = await self._provider.fetch_catalog(self._client)
                source = SOURCE_GATEWAY
            except GatewayError as e:
                lib_logger.warning(
                    f"Kilo catalog fetch failed at start-up ({e}), "
                    f"using {len(self._fallback)} fallback models"
                )
                models = self._fallback
                source = SOURCE_FALLBACK
            return self._publish_locked(models, source)

    async def refresh(self) -> Tuple[ModelConfig, ...]:
        """
        Re-fetch and publish the catalog.

        Raises:
            GatewayError: When the fetch fails; the published catalog is unchanged
        """
        async with self._lock:
            models = await self._provider.fetch_catalog(self._client)
            return self._publish_locked(models, SOURCE_GATEWAY)

    def _publish_locked(
        self, models: Sequence[ModelConfig], source: str
    ) -> Tuple[ModelConfig, ...]:
        snapshot = tuple(models)
        # Register first: if the host rejects it, the slot keeps the old catalog
        self._publish(self._provider.build_registration(snapshot))
        self._slot.replace(snapshot, source)
        lib_logger.info(
            f"Published {len(snapshot)} {self._provider.provider_name} models ({source})"
        )
        return snapshot
