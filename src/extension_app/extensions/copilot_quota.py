# SPDX-License-Identifier: MIT
# Copyright (c) 2026 pi-gateway-extensions contributors

"""
GitHub Copilot quota extension: /quota-copilot command and get_copilot_quota tool.
"""

from typing import List, Optional

import httpx
from rich.text import Text

from gateway_library.core.config import ExtensionSettings, load_settings
from gateway_library.core.types import CopilotQuotaResponse
from gateway_library.providers.copilot_provider import CopilotProvider

from ..host import ExtensionAPI
from ..quota_viewer import render_copilot_lines
from .quota_extension import QuotaExtension


class CopilotQuotaExtension(QuotaExtension):
    command_name = "quota-copilot"
    command_description = "Show GitHub Copilot usage statistics and quotas"
    tool_name = "get_copilot_quota"
    tool_label = "Get Copilot Quota"
    tool_description = "Fetch current GitHub Copilot usage limits and quotas."
    widget_key = "copilot-quota"
    display_name = "Copilot"

    def __init__(
        self,
        pi: ExtensionAPI,
        settings: Optional[ExtensionSettings] = None,
        provider: Optional[CopilotProvider] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        settings = settings or load_settings()
        super().__init__(
            pi,
            provider or CopilotProvider(settings),
            widget_ttl=settings.quota_widget_ttl,
            client=client,
        )

    def render(self, response: CopilotQuotaResponse) -> List[Text]:
        return render_copilot_lines(response)
