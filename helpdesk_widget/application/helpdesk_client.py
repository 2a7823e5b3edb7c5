from __future__ import annotations
import hashlib
import logging
from typing import Any, Dict, Mapping
from urllib.parse import urlencode
from helpdesk_widget.application.ports.http_transport_port import HttpTransportPort
from helpdesk_widget.application.ports.token_cache_port import TokenCachePort
from helpdesk_widget.config import HelpdeskWidgetConfig
from helpdesk_widget.domain.helpdesk import (
    CompanyCheck,
    Failure,
    OperationResult,
    Success,
    TokenGrant,
    UserCheck,
    UserIdentity,
)
from helpdesk_widget.shared.errors import HelpdeskTransportError


logger = logging.getLogger(__name__)

VALIDATE_KEY_PATH = "/api/external/validate-key"
CHECK_USER_PATH = "/api/external/check-user"
LOGIN_PATH = "/api/external/login"

TOKEN_CACHE_KEY_PREFIX = "helpdesk_token_"

def token_cache_key(email: str) -> str:
    """Return the cache key holding the access token for the given email."""

    digest = hashlib.md5(email.encode("utf-8"), usedforsecurity=False).hexdigest()
    return TOKEN_CACHE_KEY_PREFIX + digest

class HelpdeskClient:
    """Single-sign-on client for the Helpdesk external API and its embedded widget.
        Remote calls go through the injected transport and never raise to the
        caller: every transport failure comes back as a Failure result with a
        fixed, operation-specific message. Access tokens are cached per email
        in the injected TTL cache.
        """

    def __init__(
        self,
        config: HelpdeskWidgetConfig,
        transport: HttpTransportPort,
        cache: TokenCachePort,
    ) -> None:
        self._config = config
        self._transport = transport
        self._cache = cache

    @property
    def config(self) -> HelpdeskWidgetConfig:
        return self._config

    def validate_api_key(self) -> OperationResult[CompanyCheck]:
        try:
            data = _as_dict(self._transport.post(VALIDATE_KEY_PATH))
        except HelpdeskTransportError as exc:
            self._log_error("validateApiKey", exc)
            return Failure(error="API key invalid or service unavailable")

        return Success(CompanyCheck(company=data.get("company")))

    def check_user_exists(self, email: str) -> OperationResult[UserCheck]:
        try:
            data = _as_dict(self._transport.post(CHECK_USER_PATH, {"email": email}))
        except HelpdeskTransportError as exc:
            self._log_error("checkUserExists", exc)
            return Failure(
                error="error verifying user",
                value=UserCheck(exists=False, user=None),
            )

        return Success(
            UserCheck(
                exists=bool(data.get("exists", False)),
                user=data.get("user"),
            )
        )

    def get_auth_token(self, email: str) -> OperationResult[TokenGrant]:
        """Return an access token for the user, from cache when one is held.
            A cache hit makes no network call. On a miss the login endpoint is
            called and a returned token is cached for the configured TTL.
            """

        cache_key = token_cache_key(email)
        cached_token = self._cache.get(cache_key)
        if cached_token:
            logger.debug("Helpdesk token cache hit for key %s", cache_key)
            return Success(TokenGrant(token=cached_token, from_cache=True))

        try:
            data = _as_dict(self._transport.post(LOGIN_PATH, {"email": email}))
        except HelpdeskTransportError as exc:
            self._log_error("getAuthToken", exc)
            return Failure(error="authentication error")

        access_token = data.get("accessToken")
        if access_token:
            token = str(access_token)
            self._cache.put(cache_key, token, self._config.token_cache_ttl_minutes)
            return Success(TokenGrant(token=token, from_cache=False))

        return Failure(error=str(data.get("message") or "error obtaining token"))

    def get_widget_url(
        self,
        user: UserIdentity | Mapping[str, Any],
        token: str | None = None,
    ) -> str:
        """Build the widget URL.

            Without a token the anonymous widget is bootstrapped with the API key
            and the user's identity. With a token the URL deep-links to the
            tickets view and carries only the token.
            """

        if not isinstance(user, UserIdentity):
            user = UserIdentity.from_mapping(user)

        url = f"{self._config.api_url}/widget"
        params: Dict[str, str] = {
            "api_key": self._config.api_key,
            "email": user.email,
            "first_name": user.first_name,
            "last_name": user.last_name,
        }

        if token:
            url += "/tickets"
            params = {"token": token}

        return f"{url}?{urlencode(params)}"

    def invalidate_token_cache(self, email: str) -> None:
        self._cache.forget(token_cache_key(email))

    def _log_error(self, operation: str, exc: HelpdeskTransportError) -> None:
        if not self._config.debug:
            return

        logger.error(
            "[HelpdeskWidget::%s] Error: message=%s code=%s",
            operation,
            exc,
            exc.status_code,
        )

def _as_dict(data: Any) -> Dict[str, Any]:
    # absent fields fall back to defaults, so a non-object body reads as empty
    if isinstance(data, dict):
        return data
    return {}
