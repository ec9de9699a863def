# SPDX-License-Identifier: MIT
# Copyright (c) 2026 pi-gateway-extensions contributors

"""
Antigravity quota extension: /quota command and get_antigravity_quota tool.
"""

from typing import List, Optional

import httpx
from rich.text import Text

from gateway_library.core.config import ExtensionSettings, load_settings
from gateway_library.core.types import AntigravityQuotaResponse
from gateway_library.providers.antigravity_provider import AntigravityProvider

from ..host import ExtensionAPI
from ..quota_viewer import render_antigravity_lines
from .quota_extension import QuotaExtension


class AntigravityQuotaExtension(QuotaExtension):
    command_name = "quota"
    command_description = "Show Antigravity usage limits and quotas"
    tool_name = "get_antigravity_quota"
    tool_label = "Get Antigravity Quota"
    tool_description = "Fetch current Antigravity usage limits and model quotas."
    widget_key = "antigravity-quota"
    display_name = "Antigravity"

    def __init__(
        self,
        pi: ExtensionAPI,
        settings: Optional[ExtensionSettings] = None,
        provider: Optional[AntigravityProvider] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        settings = settings or load_settings()
        super().__init__(
            pi,
            provider or AntigravityProvider(settings),
            widget_ttl=settings.quota_widget_ttl,
            client=client,
        )

    def render(self, response: AntigravityQuotaResponse) -> List[Text]:
        return render_antigravity_lines(response)
