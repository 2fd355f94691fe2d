"""genai_bridge.config.defaults
============================

Central place for the stable default values used across the package: vendor
endpoints, default models, retry/backoff numbers and wire constants. These
can be overridden per client (``ClientConfig``), through the optional config
file or ``<PREFIX>_MODEL`` / ``<PREFIX>_BASE_URL`` environment variables.

This module avoids importing from other package modules to prevent circular
dependencies. Only plain constants live here.
"""

from __future__ import annotations

# ---- Provider endpoints and models ----
GOOGLE_DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/models"
GOOGLE_DEFAULT_MODEL = "gemini-2.0-flash"

OPENAI_DEFAULT_BASE_URL = "https://api.openai.com/v1"
OPENAI_DEFAULT_MODEL = "gpt-4.1-2025-04-14"
OPENAI_DEFAULT_MAX_TOKENS = 1200

CLAUDE_DEFAULT_BASE_URL = "https://api.anthropic.com/v1"
CLAUDE_DEFAULT_MODEL = "claude-sonnet-4-20250514"
CLAUDE_DEFAULT_MAX_TOKENS = 1000
ANTHROPIC_API_VERSION = "2023-06-01"

# ---- Network defaults ----
# Per-operation timeout; long enough for big inputs.
DEFAULT_TIMEOUT_SECONDS = 300.0
DEFAULT_RETRIES = 3
DEFAULT_BACKOFF_BASE = 1.8
DEFAULT_MAX_BACKOFF_SECONDS = 20.0
DEFAULT_JITTER_SECONDS = 0.25
# Upper bound on a server supplied Retry-After wait.
DEFAULT_MAX_RETRY_AFTER_SECONDS = 60.0

# ---- Streaming ----
DEFAULT_MAX_STREAM_BUFFER_BYTES = 1024 * 1024
# Regex: a blank line ends a frame, with LF or CRLF line endings.
SSE_FRAME_TERMINATOR = r"\r?\n\r?\n"
SSE_DATA_PREFIX = "data:"
OPENAI_STREAM_DONE = "[DONE]"

# ---- Config file ----
CONFIG_FILE_ENV = "GENAI_CONFIG_FILE"


__all__ = [
    "GOOGLE_DEFAULT_BASE_URL",
    "GOOGLE_DEFAULT_MODEL",
    "OPENAI_DEFAULT_BASE_URL",
    "OPENAI_DEFAULT_MODEL",
    "OPENAI_DEFAULT_MAX_TOKENS",
    "CLAUDE_DEFAULT_BASE_URL",
    "CLAUDE_DEFAULT_MODEL",
    "CLAUDE_DEFAULT_MAX_TOKENS",
    "ANTHROPIC_API_VERSION",
    "DEFAULT_TIMEOUT_SECONDS",
    "DEFAULT_RETRIES",
    "DEFAULT_BACKOFF_BASE",
    "DEFAULT_MAX_BACKOFF_SECONDS",
    "DEFAULT_JITTER_SECONDS",
    "DEFAULT_MAX_RETRY_AFTER_SECONDS",
    "DEFAULT_MAX_STREAM_BUFFER_BYTES",
    "SSE_FRAME_TERMINATOR",
    "SSE_DATA_PREFIX",
    "OPENAI_STREAM_DONE",
    "CONFIG_FILE_ENV",
]
