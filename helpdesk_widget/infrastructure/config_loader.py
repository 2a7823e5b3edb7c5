from __future__ import annotations
import os
from dotenv import load_dotenv
from helpdesk_widget.config import (
    DEFAULT_TIMEOUT_SECONDS,
    DEFAULT_TOKEN_CACHE_TTL_MINUTES,
    HelpdeskWidgetConfig,
    TokenCacheConfig,
)
from helpdesk_widget.shared.errors import HelpdeskConfigError


load_dotenv()

def _get_required_env(name: str) -> str:
    value = os.getenv(name)
    if not value:
        raise HelpdeskConfigError(f"Environment variable {name} is required but not set")
    return value

def _get_bool_env(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes", "y")

def load_helpdesk_widget_config() -> HelpdeskWidgetConfig:
    api_url = _get_required_env("HELPDESK_API_URL")
    api_key = _get_required_env("HELPDESK_API_KEY")

    ttl_str = os.getenv("HELPDESK_TOKEN_CACHE_TTL", str(DEFAULT_TOKEN_CACHE_TTL_MINUTES))
    try:
        token_cache_ttl_minutes = int(ttl_str)
    except ValueError as exc:
        raise HelpdeskConfigError("HELPDESK_TOKEN_CACHE_TTL must be an integer") from exc

    timeout_str = os.getenv("HELPDESK_TIMEOUT_SECONDS", str(DEFAULT_TIMEOUT_SECONDS))
    try:
        timeout_seconds = float(timeout_str)
    except ValueError as exc:
        raise HelpdeskConfigError("HELPDESK_TIMEOUT_SECONDS must be a number") from exc

    return HelpdeskWidgetConfig(
        api_url=api_url,
        api_key=api_key,
        token_cache_ttl_minutes=token_cache_ttl_minutes,
        debug=_get_bool_env("HELPDESK_DEBUG"),
        timeout_seconds=timeout_seconds,
    )

def load_token_cache_config() -> TokenCacheConfig:
    db_path = os.getenv("HELPDESK_TOKEN_CACHE_DB") or None
    return TokenCacheConfig(db_path=db_path)
