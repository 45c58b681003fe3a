import os
from dataclasses import dataclass
from typing import Optional


def _env_first(*keys: str) -> Optional[str]:
    for key in keys:
        value = os.environ.get(key)
        if value:
            return value
    return None


def _env_float(key: str, default: float) -> float:
    raw = os.environ.get(key)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


_api_base = _env_first("CRAFTYCOOK_API_URL", "CRAFTYCOOK_BASE_URL") or "http://localhost:5001"
if _api_base.rstrip("/").endswith("/api"):
    # Endpoint paths already carry the /api prefix.
    _api_base = _api_base.rstrip("/")[: -len("/api")]
API_BASE_URL = _api_base.rstrip("/")

# Seconds. Interaction endpoints have no timeout of their own in the web client;
# a generous one keeps a hung socket from blocking forever.
REQUEST_TIMEOUT = _env_float("CRAFTYCOOK_REQUEST_TIMEOUT", 60.0)
AI_TIMEOUT = _env_float("CRAFTYCOOK_AI_TIMEOUT", 10.0)
AI_DETAIL_TIMEOUT = _env_float("CRAFTYCOOK_AI_DETAIL_TIMEOUT", 30.0)

# Milliseconds, matching the loading overlay of the web client.
LOADING_DELAY_MS = int(_env_float("CRAFTYCOOK_LOADING_DELAY_MS", 150))
LOADING_MIN_VISIBLE_MS = int(_env_float("CRAFTYCOOK_LOADING_MIN_VISIBLE_MS", 500))

NOTIFICATION_HISTORY = 50

# Endpoint paths consumed by the stores.
ENDPOINTS = {
    "like": "api/interactions/{post_id}/like",
    "bookmark": "api/interactions/{post_id}/bookmark",
    "comments": "api/interactions/{post_id}/comments",
    "comment": "api/interactions/comments/{comment_id}",
    "comment_like": "api/interactions/comments/{comment_id}/like",
    "share": "api/interactions/{post_id}/share",
    "view": "api/interactions/{post_id}/view",
    "engagement": "api/interactions/{post_id}/engagement",
    "bookmarks": "api/interactions/bookmarks",
    "ai_suggestions": "api/ai/suggestions",
    "ai_recipe_detail": "api/ai/recipe-detail",
    "reports": "api/reports",
    "vendor_reports": "api/vendor-reports",
    "posts": "api/posts",
    "post": "api/posts/{post_id}",
    "post_publish": "api/posts/{post_id}/publish",
    "drafts": "api/posts/user/drafts",
    "upload": "api/posts/upload",
    "auth_login": "api/auth/login",
    "auth_logout": "api/auth/logout",
    "auth_check": "api/auth/check",
}


@dataclass
class Settings:
    api_base_url: str = API_BASE_URL
    token: Optional[str] = None
    request_timeout: float = REQUEST_TIMEOUT
    ai_timeout: float = AI_TIMEOUT
    ai_detail_timeout: float = AI_DETAIL_TIMEOUT
    loading_delay_ms: int = LOADING_DELAY_MS
    loading_min_visible_ms: int = LOADING_MIN_VISIBLE_MS


def load_settings() -> Settings:
    """Read settings from the environment at call time, so a .env loaded after import still applies."""
    base = _env_first("CRAFTYCOOK_API_URL", "CRAFTYCOOK_BASE_URL") or API_BASE_URL
    base = base.rstrip("/")
    if base.endswith("/api"):
        base = base[: -len("/api")]
    return Settings(
        api_base_url=base,
        token=_env_first("CRAFTYCOOK_API_TOKEN", "CRAFTYCOOK_TOKEN"),
        request_timeout=_env_float("CRAFTYCOOK_REQUEST_TIMEOUT", REQUEST_TIMEOUT),
        ai_timeout=_env_float("CRAFTYCOOK_AI_TIMEOUT", AI_TIMEOUT),
        ai_detail_timeout=_env_float("CRAFTYCOOK_AI_DETAIL_TIMEOUT", AI_DETAIL_TIMEOUT),
        loading_delay_ms=int(_env_float("CRAFTYCOOK_LOADING_DELAY_MS", LOADING_DELAY_MS)),
        loading_min_visible_ms=int(_env_float("CRAFTYCOOK_LOADING_MIN_VISIBLE_MS", LOADING_MIN_VISIBLE_MS)),
    )
