# SPDX-License-Identifier: LGPL-3.0-only
# Copyright (c) 2026 pi-gateway-extensions contributors

"""
GitHub Copilot Provider with Quota Tracking

Quota reporting for a GitHub Copilot subscription via the
CopilotQuotaTracker mixin.

Environment variables:
    COPILOT_API_BASE: API base URL (default: https://api.github.com)
    PI_AGENT_DIR: Location of auth.json (default: ~/.pi/agent)
"""

from typing import Optional

import httpx

from ..core.config import ExtensionSettings, load_settings
from ..core.constants import COPILOT_PROVIDER_NAME
from ..core.types import CopilotQuotaResponse
from ..credential_store import CredentialStore
from ..utils.paths import get_auth_file
from .utilities.copilot_quota_tracker import CopilotQuotaTracker


class CopilotProvider(CopilotQuotaTracker):
    """
    Quota reporting for the github-copilot credential in auth.json.
    """

    provider_name = COPILOT_PROVIDER_NAME

    def __init__(
        self,
        settings: Optional[ExtensionSettings] = None,
        credentials: Optional[CredentialStore] = None,
    ):
        settings = settings or load_settings()
        self._credentials = credentials or CredentialStore(
            get_auth_file(settings.agent_dir)
        )
        self.api_base = settings.copilot_api_base.rstrip("/")
        self.http_timeout = settings.http_timeout

    async def fetch_quota(
        self, client: Optional[httpx.AsyncClient] = None
    ) -> CopilotQuotaResponse:
        return await self.fetch_copilot_quota(client)
