# SPDX-License-Identifier: LGPL-3.0-only
# Copyright (c) 2026 pi-gateway-extensions contributors

"""
Antigravity Quota Tracking Mixin

Provides quota fetching for the Antigravity (cloud code assist) provider.
Quota is reported per model as a remaining fraction with a reset time.

API Details:
- Step 1: POST {base}/v1internal:loadCodeAssist
    Body: {"metadata": {"ideType": ..., "platform": ..., "pluginType": ...}}
    Response: {"availablePromptCredits": num?, "cloudaicompanionProject": str | {"id": str}}
- Step 2: POST {base}/v1internal:fetchAvailableModels
    Body: {"project": resolved_project_id}
    Response: {
        "models": {"<model-id>": {"quotaInfo": {"remainingFraction": 0.8,
                                               "resetTime": "...", "isExhausted": false}}},
        "agentModelSorts": [{"groups": [{"modelIds": [...]}]}]
    }
- Auth: Bearer access token from auth.json["google-antigravity"]["access"]

The project id from auth.json wins over the one returned by step 1. Step 2
depends on step 1, so the calls are strictly sequential.

Required from provider:
    - self._credentials: CredentialStore
    - self.api_base: str
    - self.http_timeout: float
    - self.dump_responses: bool
    - self.logs_dir: Path
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import httpx

from ...core.constants import (
    ANTIGRAVITY_CLIENT_METADATA,
    ANTIGRAVITY_LOAD_ENDPOINT,
    ANTIGRAVITY_MODELS_ENDPOINT,
    ANTIGRAVITY_PROVIDER_NAME,
    ANTIGRAVITY_USER_AGENT,
)
from ...core.errors import FetchError, describe_http_failure
from ...core.types import AntigravityQuotaInfo, AntigravityQuotaResponse
from ...credential_store import CredentialStore
from ...utils.timeparse import parse_iso_timestamp

lib_logger = logging.getLogger("gateway_library")


# =============================================================================
# PAYLOAD PARSING
# =============================================================================


def resolve_project_id(
    local_project_id: Any, load_data: Dict[str, Any]
) -> Optional[str]:
    """
    Pick the project id for the models call.

    auth.json's projectId wins; otherwise cloudaicompanionProject from
    loadCodeAssist, which is either a string or an object with an "id".
    """
    if isinstance(local_project_id, str) and local_project_id.strip():
        return local_project_id.strip()
    project = load_data.get("cloudaicompanionProject")
    if isinstance(project, dict):
        project = project.get("id")
    if isinstance(project, str) and project.strip():
        return project.strip()
    return None


def parse_quota_info(raw: Any) -> Optional[AntigravityQuotaInfo]:
    """Parse one model's quotaInfo; None when the model has none."""
    if not isinstance(raw, dict):
        return None
    fraction = raw.get("remainingFraction")
    if isinstance(fraction, bool) or not isinstance(fraction, (int, float)):
        fraction = None
    else:
        fraction = min(1.0, max(0.0, float(fraction)))
    return AntigravityQuotaInfo(
        remaining_fraction=fraction,
        reset_time=parse_iso_timestamp(raw.get("resetTime")),
        is_exhausted=raw.get("isExhausted") is True,
    )


def parse_recommended_ids(models_data: Dict[str, Any]) -> List[str]:
    """Model ids in the groups of the first agentModelSorts entry."""
    sorts = models_data.get("agentModelSorts")
    if not isinstance(sorts, list) or not sorts or not isinstance(sorts[0], dict):
        return []
    groups = sorts[0].get("groups")
    if not isinstance(groups, list):
        return []
    ids: List[str] = []
    for group in groups:
        model_ids = group.get("modelIds") if isinstance(group, dict) else None
        if isinstance(model_ids, list):
            ids.extend(mid for mid in model_ids if isinstance(mid, str))
    return ids


def parse_antigravity_response(
    load_data: Dict[str, Any],
    models_data: Dict[str, Any],
    project_id: Optional[str] = None,
) -> AntigravityQuotaResponse:
    credits = load_data.get("availablePromptCredits")
    if isinstance(credits, bool) or not isinstance(credits, (int, float)):
        credits = None

    models: Dict[str, Optional[AntigravityQuotaInfo]] = {}
    raw_models = models_data.get("models")
    if isinstance(raw_models, dict):
        for model_id, info in raw_models.items():
            quota = info.get("quotaInfo") if isinstance(info, dict) else None
            models[model_id] = parse_quota_info(quota)

    return AntigravityQuotaResponse(
        load_data=load_data,
        models_data=models_data,
        project_id=project_id,
        available_prompt_credits=credits,
        models=models,
        recommended_ids=parse_recommended_ids(models_data),
    )


class AntigravityQuotaTracker:
    """
    Mixin class providing quota fetching for the Antigravity provider.

    Usage:
        class AntigravityProvider(AntigravityQuotaTracker):
            ...

    The provider class must initialize these instance attributes in __init__:
        self._credentials: CredentialStore
        self.api_base: str
        self.http_timeout: float
        self.dump_responses: bool
        self.logs_dir: Path
    """

    _credentials: CredentialStore
    api_base: str
    http_timeout: float
    dump_responses: bool
    logs_dir: Path

    # =========================================================================
    # HTTP
    # =========================================================================

    async def _post_json(
        self,
        client: httpx.AsyncClient,
        endpoint: str,
        headers: Dict[str, str],
        body: Dict[str, Any],
        action: str,
    ) -> Dict[str, Any]:
        url = f"{self.api_base}{endpoint}"
        try:
            response = await client.post(
                url, headers=headers, json=body, timeout=self.http_timeout
            )
        except httpx.RequestError as e:
            raise FetchError(
                f"Failed to {action}: {type(e).__name__}: {e}",
                provider=ANTIGRAVITY_PROVIDER_NAME,
            ) from e

        if not response.is_success:
            if response.status_code in (401, 403):
                lib_logger.warning(
                    f"Antigravity rejected the access token (HTTP {response.status_code}). "
                    "Log in to google-antigravity again to refresh auth.json"
                )
            raise FetchError(
                describe_http_failure(action, response.status_code),
                provider=ANTIGRAVITY_PROVIDER_NAME,
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise FetchError(
                f"Failed to {action}: invalid JSON ({e})",
                provider=ANTIGRAVITY_PROVIDER_NAME,
                status_code=response.status_code,
            ) from e
        return data if isinstance(data, dict) else {}

    # =========================================================================
    # QUOTA API
    # =========================================================================

    async def fetch_antigravity_quota(
        self, client: Optional[httpx.AsyncClient] = None
    ) -> AntigravityQuotaResponse:
        """
        Fetch per-model quota for the stored Antigravity account.

        Args:
            client: Optional HTTP client for connection reuse

        Returns:
            AntigravityQuotaResponse with both raw payloads

        Raises:
            AuthError: No usable google-antigravity credential in auth.json
            FetchError: Either call failed
        """
        credential = self._credentials.get_vendor_credential(
            ANTIGRAVITY_PROVIDER_NAME, "access"
        )
        headers = {
            "Authorization": f"Bearer {credential['access']}",
            "Content-Type": "application/json",
            "User-Agent": ANTIGRAVITY_USER_AGENT,
        }

        if client is not None:
            result = await self._fetch_quota_with_client(
                client, headers, credential.get("projectId")
            )
        else:
            async with httpx.AsyncClient() as new_client:
                result = await self._fetch_quota_with_client(
                    new_client, headers, credential.get("projectId")
                )

        if self.dump_responses:
            self._dump_raw_responses(result)
        return result

    async def _fetch_quota_with_client(
        self,
        client: httpx.AsyncClient,
        headers: Dict[str, str],
        local_project_id: Any,
    ) -> AntigravityQuotaResponse:
        load_data = await self._post_json(
            client,
            ANTIGRAVITY_LOAD_ENDPOINT,
            headers,
            {"metadata": dict(ANTIGRAVITY_CLIENT_METADATA)},
            "loadCodeAssist",
        )

        project_id = resolve_project_id(local_project_id, load_data)
        if project_id is None:
            lib_logger.debug("No Antigravity project id resolved, querying without one")
            body: Dict[str, Any] = {}
        else:
            lib_logger.debug(f"Using Antigravity project '{project_id}'")
            body = {"project": project_id}

        models_data = await self._post_json(
            client, ANTIGRAVITY_MODELS_ENDPOINT, headers, body, "fetchAvailableModels"
        )
        return parse_antigravity_response(load_data, models_data, project_id)

    # =========================================================================
    # DIAGNOSTICS
    # =========================================================================

    def _dump_raw_responses(self, result: AntigravityQuotaResponse) -> None:
        """Write both raw responses to the logs dir; failures are only logged."""
        try:
            self.logs_dir.mkdir(parents=True, exist_ok=True)
            for file_name, payload in (
                ("loadData.json", result.load_data),
                ("modelsData.json", result.models_data),
            ):
                with open(self.logs_dir / file_name, "w", encoding="utf-8") as f:
                    json.dump(payload, f, indent=2)
        except OSError as e:
            lib_logger.warning(f"Failed to write Antigravity quota diagnostics: {e}")
