# SPDX-License-Identifier: LGPL-3.0-only
# Copyright (c) 2026 pi-gateway-extensions contributors

"""
Read-only access to the pi agent credential store (auth.json).

The store is a JSON document keyed by vendor name, e.g.:

    {
        "google-antigravity": {"access": "...", "refresh": "...", "projectId": "..."},
        "github-copilot": {"access": "...", "refresh": "..."}
    }

Credentials are owned by the host's login flow; this module never writes.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from .core.errors import AuthError
from .utils.paths import get_auth_file

lib_logger = logging.getLogger("gateway_library")


class CredentialStore:
    """Loads vendor credentials from auth.json on every lookup."""

    def __init__(self, auth_path: Optional[Path] = None):
        self.auth_path = auth_path or get_auth_file()

    def _load(self) -> Dict[str, Any]:
        if not self.auth_path.is_file():
            raise AuthError(f"auth.json not found at {self.auth_path}")
        try:
            with open(self.auth_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            raise AuthError(
                f"auth.json at {self.auth_path} could not be read: {e}"
            ) from e
        if not isinstance(data, dict):
            raise AuthError(f"auth.json at {self.auth_path} is not a JSON object")
        return data

    def get_vendor_credential(self, vendor: str, token_field: str) -> Dict[str, Any]:
        """
        Get the credential entry for a vendor.

        Args:
            vendor: Top-level key in auth.json (e.g. "github-copilot")
            token_field: Field that must hold a non-empty token

        Returns:
            The vendor's credential dict

        Raises:
            AuthError: If the file, the vendor entry, or the token is missing
        """
        entry = self._load().get(vendor)
        if not isinstance(entry, dict):
            raise AuthError(
                f"{vendor} credential not found in auth.json", provider=vendor
            )
        token = entry.get(token_field)
        if not isinstance(token, str) or not token.strip():
            raise AuthError(
                f"{vendor} credential not found in auth.json (missing '{token_field}')",
                provider=vendor,
            )
        lib_logger.debug(f"Loaded {vendor} credential from {self.auth_path}")
        return entry
