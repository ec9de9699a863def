# SPDX-License-Identifier: LGPL-3.0-only
# Copyright (c) 2026 pi-gateway-extensions contributors

"""
Constants shared by the catalog and quota packages.
"""

# =============================================================================
# KILO CODE GATEWAY
# =============================================================================

KILO_PROVIDER_NAME = "kilo-code"
KILO_DEFAULT_API_BASE = "https://api.kilo.ai/api/gateway"
KILO_MODELS_ENDPOINT = "/models"
KILO_DEFAULT_API_KEY_ENV = "KILO_API_KEY"
KILO_API_DIALECT = "openai-completions"

# Model normalization defaults
DEFAULT_CONTEXT_WINDOW = 128000
MIN_ESTIMATED_MAX_TOKENS = 4096
MAX_ESTIMATED_MAX_TOKENS = 65536
MAX_TOKENS_CONTEXT_DIVISOR = 4

# Any of these in supported_parameters marks a reasoning-capable model
REASONING_PARAMETER_MARKERS = ("reasoning", "include_reasoning")

# =============================================================================
# ANTIGRAVITY (cloud code assist)
# =============================================================================

ANTIGRAVITY_PROVIDER_NAME = "google-antigravity"
ANTIGRAVITY_DEFAULT_API_BASE = "https://cloudcode-pa.googleapis.com"
ANTIGRAVITY_LOAD_ENDPOINT = "/v1internal:loadCodeAssist"
ANTIGRAVITY_MODELS_ENDPOINT = "/v1internal:fetchAvailableModels"
ANTIGRAVITY_USER_AGENT = "antigravity"
ANTIGRAVITY_CLIENT_METADATA = {
    "ideType": "ANTIGRAVITY",
    "platform": "PLATFORM_UNSPECIFIED",
    "pluginType": "GEMINI",
}

# =============================================================================
# GITHUB COPILOT
# =============================================================================

COPILOT_PROVIDER_NAME = "github-copilot"
COPILOT_DEFAULT_API_BASE = "https://api.github.com"
COPILOT_USER_ENDPOINT = "/copilot_internal/user"
COPILOT_HEADERS = {
    "User-Agent": "GitHubCopilotChat/0.35.0",
    "Editor-Version": "vscode/1.107.0",
    "Editor-Plugin-Version": "copilot-chat/0.35.0",
    "Copilot-Integration-Id": "vscode-chat",
}

# =============================================================================
# QUOTA DISPLAY
# =============================================================================

CRITICAL_FRACTION_THRESHOLD = 0.10
WARNING_FRACTION_THRESHOLD = 0.50
DEFAULT_QUOTA_WIDGET_TTL = 60.0
DEFAULT_HTTP_TIMEOUT = 30.0
