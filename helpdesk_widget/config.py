from __future__ import annotations
from dataclasses import dataclass
from helpdesk_widget.shared.errors import HelpdeskConfigError


DEFAULT_TOKEN_CACHE_TTL_MINUTES = 55
DEFAULT_TIMEOUT_SECONDS = 30.0

# helpdesk
@dataclass(frozen=True)
class HelpdeskWidgetConfig:
    api_url: str
    api_key: str
    token_cache_ttl_minutes: int = DEFAULT_TOKEN_CACHE_TTL_MINUTES
    debug: bool = False
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS

    def __post_init__(self) -> None:
        if not self.api_url:
            raise HelpdeskConfigError("Helpdesk API URL is required")
        if not self.api_key:
            raise HelpdeskConfigError("Helpdesk API key is required")

        # base url is stored without trailing slash
        object.__setattr__(self, "api_url", self.api_url.rstrip("/"))

# token cache
@dataclass(frozen=True)
class TokenCacheConfig:
    db_path: str | None = None
