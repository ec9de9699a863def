# SPDX-License-Identifier: LGPL-3.0-only
# Copyright (c) 2026 pi-gateway-extensions contributors

"""
Error types raised by the gateway library.

Nothing here is retried automatically. Callers either surface the error
verbatim (commands, tools, manual refresh) or, for the initial catalog
load only, log it and fall back to the static catalog.
"""

from typing import Optional


class GatewayError(Exception):
    """Base class for all gateway library errors."""

    def __init__(self, message: str, provider: Optional[str] = None):
        self.message = message
        self.provider = provider
        super().__init__(message)


class AuthError(GatewayError):
    """
    The local credential store has no usable credential for a vendor.

    Raised when auth.json is missing or unreadable, when the vendor key is
    absent, or when the token field is empty.
    """


class FetchError(GatewayError):
    """
    A vendor HTTP call failed.

    Carries the HTTP status code when the server answered; transport
    failures (connect errors, timeouts) have no status code.
    """

    def __init__(
        self,
        message: str,
        provider: Optional[str] = None,
        status_code: Optional[int] = None,
    ):
        self.status_code = status_code
        super().__init__(message, provider=provider)


class EmptyCatalogError(FetchError):
    """The gateway was reachable but no usable model came back."""

    def __init__(self, provider: Optional[str] = None, raw_count: int = 0):
        self.raw_count = raw_count
        message = "gateway returned zero models"
        if raw_count:
            message += f" ({raw_count} raw records, none usable)"
        super().__init__(message, provider=provider)


def describe_http_failure(action: str, status_code: int) -> str:
    """Format a FetchError message for a non-success HTTP status."""
    return f"Failed to {action}: HTTP {status_code}"
