"""chat_gateway.config.defaults
============================

Central place for small, stable default values used across the chat_gateway
package. These defaults can be overridden via environment variables or an
external configuration file, but provide sensible fallbacks for local
development and tests.

Module Purpose
--------------
- Provide a single import location for default constants (no I/O).
- Keep adapters free of magic literals: base URLs, fallback model lists and
  models used for key validation all live here.

This module intentionally avoids importing from other gateway packages to
prevent circular dependencies. Only plain constants should live here.
"""

from __future__ import annotations

from typing import Dict, Tuple

# ---- Timeouts ----
# Deadline applied to each outbound request dispatch (milliseconds).
DEFAULT_TIMEOUT_MS = 60000


# ---- Rate limiter ----
DEFAULT_MAX_REQUESTS_PER_MINUTE = 60
DEFAULT_WINDOW_SIZE_MS = 60000


# ---- Provider base URLs ----
OPENAI_DEFAULT_BASE_URL = "https://api.openai.com/v1"
GEMINI_DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
DEEPSEEK_DEFAULT_BASE_URL = "https://api.deepseek.com/v1"
QWEN_DEFAULT_BASE_URL = "https://dashscope.aliyuncs.com/api/v1"
DOUBAO_DEFAULT_BASE_URL = "https://ark.cn-beijing.volces.com/api/v3"
ZHIPU_DEFAULT_BASE_URL = "https://open.bigmodel.cn/api/paas/v4"

DEFAULT_ENDPOINTS: Dict[str, str] = {
    "openai": OPENAI_DEFAULT_BASE_URL,
    "gemini": GEMINI_DEFAULT_BASE_URL,
    "deepseek": DEEPSEEK_DEFAULT_BASE_URL,
    "qwen": QWEN_DEFAULT_BASE_URL,
    "doubao": DOUBAO_DEFAULT_BASE_URL,
    "zhipu": ZHIPU_DEFAULT_BASE_URL,
}


# ---- Fallback model lists ----
# Returned by ``list_models`` whenever discovery is unavailable or fails.
DEFAULT_MODELS: Dict[str, Tuple[str, ...]] = {
    "openai": (
        "gpt-5",
        "gpt-5-mini",
        "gpt-5.1",
        "gpt-4.1",
        "gpt-4.1-mini",
        "gpt-4o",
        "gpt-4o-mini",
        "o3",
        "o4-mini",
    ),
    "gemini": (
        "gemini-3-pro",
        "gemini-2.5-pro",
        "gemini-2.5-flash",
        "gemini-2.5-flash-lite",
        "gemini-2.0-flash",
    ),
    "deepseek": (
        "deepseek-chat",
        "deepseek-reasoner",
    ),
    "qwen": (
        "qwen3-max",
        "qwen3-plus",
        "qwen3-turbo",
        "qwen-max",
        "qwen-plus",
        "qwen-turbo",
    ),
    "doubao": (
        "doubao-seed-1-8-251228",
        "doubao-seed-1.6",
        "doubao-seed-1.8",
        "doubao-seed-1.6-thinking",
        "doubao-seed-1.6-vision",
        "doubao-seedance-1.0-pro",
        "doubao-1.5-ui-tars",
    ),
    "zhipu": (
        "glm-4-plus",
        "glm-4-air",
        "glm-4-flash",
        "glm-4-long",
    ),
}


# ---- Key validation requests ----
# Cheapest model per provider used for one-token validation requests.
QWEN_VALIDATION_MODEL = "qwen-turbo"
DOUBAO_VALIDATION_MODEL = "doubao-lite-32k"
ZHIPU_VALIDATION_MODEL = "glm-4-flash"
# Zhipu keys are "<id>.<secret>"; anything shorter cannot be valid.
ZHIPU_MIN_API_KEY_LENGTH = 10


__all__ = [
    "DEFAULT_TIMEOUT_MS",
    "DEFAULT_MAX_REQUESTS_PER_MINUTE",
    "DEFAULT_WINDOW_SIZE_MS",
    "OPENAI_DEFAULT_BASE_URL",
    "GEMINI_DEFAULT_BASE_URL",
    "DEEPSEEK_DEFAULT_BASE_URL",
    "QWEN_DEFAULT_BASE_URL",
    "DOUBAO_DEFAULT_BASE_URL",
    "ZHIPU_DEFAULT_BASE_URL",
    "DEFAULT_ENDPOINTS",
    "DEFAULT_MODELS",
    "QWEN_VALIDATION_MODEL",
    "DOUBAO_VALIDATION_MODEL",
    "ZHIPU_VALIDATION_MODEL",
    "ZHIPU_MIN_API_KEY_LENGTH",
]
