# SPDX-License-Identifier: MIT
# Copyright (c) 2026 pi-gateway-extensions contributors

"""
Kilo Code provider extension.

Registers the kilo-code provider with the live gateway catalog (or the
fallback table when the gateway is down at start-up) and exposes:

- /kilo-refresh-models: re-fetch and re-register the catalog
- /kilo-free-models: list models whose gateway pricing is all zero
- refresh_kilo_models tool: same refresh, callable by the model
"""

from typing import Any, Dict, Optional, Tuple

import httpx

from gateway_library.catalog.registry import CatalogRegistryBridge
from gateway_library.core.config import ExtensionSettings, load_settings
from gateway_library.core.errors import GatewayError
from gateway_library.core.types import ModelConfig
from gateway_library.providers.kilo_code_provider import KiloCodeProvider

from ..host import CommandContext, CommandSpec, ExtensionAPI, ToolResult, ToolSpec


class KiloCodeExtension:
    """Catalog publishing and refresh for the Kilo Code provider."""

    def __init__(
        self,
        pi: ExtensionAPI,
        settings: Optional[ExtensionSettings] = None,
        provider: Optional[KiloCodeProvider] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.pi = pi
        self.settings = settings or load_settings()
        self.provider = provider or KiloCodeProvider(self.settings)
        self._client = client
        self.bridge = CatalogRegistryBridge(
            self.provider, pi.register_provider, client=client
        )

    @property
    def models(self) -> Tuple[ModelConfig, ...]:
        return self.bridge.models

    async def activate(self, load_catalog: bool = True) -> None:
        """
        Register the commands and tool.

        With load_catalog=False the initial fetch is skipped and nothing is
        published until the first refresh.
        """
        if load_catalog:
            await self.bridge.load_initial()

        self.pi.register_command(
            CommandSpec(
                name="kilo-refresh-models",
                description="Refresh Kilo Code model catalog from Kilo Gateway",
                handler=self.handle_refresh_command,
            )
        )
        self.pi.register_command(
            CommandSpec(
                name="kilo-free-models",
                description="List Kilo Code models that are free to use",
                handler=self.handle_free_models_command,
            )
        )
        self.pi.register_tool(
            ToolSpec(
                name="refresh_kilo_models",
                label="Refresh Kilo Models",
                description="Re-fetch the Kilo Code model catalog from the Kilo Gateway.",
                execute=self.execute_refresh_tool,
            )
        )

    async def handle_refresh_command(self, _args: str, ctx: CommandContext) -> None:
        ctx.ui.notify("Refreshing Kilo Code models...", "info")
        try:
            models = await self.bridge.refresh()
        except GatewayError as e:
            ctx.ui.notify(f"Failed to refresh Kilo models: {e.message}", "error")
            return
        ctx.ui.notify(f"Loaded {len(models)} Kilo Code models", "info")

    async def handle_free_models_command(self, _args: str, ctx: CommandContext) -> None:
        ctx.ui.notify("Fetching free Kilo Code models...", "info")
        try:
            free_models = await self.provider.fetch_free_models(self._client)
        except GatewayError as e:
            ctx.ui.notify(f"Failed to list free Kilo models: {e.message}", "error")
            return
        if not free_models:
            ctx.ui.notify("No free Kilo Code models available", "info")
            return
        names = ", ".join(model.id for model in free_models)
        ctx.ui.notify(f"{len(free_models)} free Kilo Code models: {names}", "info")

    async def execute_refresh_tool(self, _params: Dict[str, Any]) -> ToolResult:
        try:
            models = await self.bridge.refresh()
        except GatewayError as e:
            return ToolResult.error(e.message)
        return ToolResult.text(
            f"Loaded {len(models)} Kilo Code models",
            details={"models": [model.id for model in models]},
        )
