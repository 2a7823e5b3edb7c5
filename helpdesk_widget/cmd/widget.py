from __future__ import annotations
import argparse
import json
import logging
from pathlib import Path
from typing import Any, Dict, Sequence
from helpdesk_widget.application.helpdesk_client import HelpdeskClient
from helpdesk_widget.application.ports.token_cache_port import TokenCachePort
from helpdesk_widget.application.widget_session import resolve_widget_url
from helpdesk_widget.domain.helpdesk import UserIdentity
from helpdesk_widget.infrastructure.config_loader import (
    load_helpdesk_widget_config,
    load_token_cache_config,
)
from helpdesk_widget.infrastructure.http_transport import RequestsHttpTransport
from helpdesk_widget.infrastructure.sqlite_token_cache import SQLiteTokenCache
from helpdesk_widget.infrastructure.token_cache import InMemoryTokenCache
from helpdesk_widget.shared.errors import HelpdeskConfigError, TokenCacheError


logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_CONFIG_ERROR = 2

def logging_conf(debug: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s - %(message)s",
    )

def _build_client() -> HelpdeskClient:
    config = load_helpdesk_widget_config()

    # token cache: sqlite file when configured, otherwise per-process memory
    cache_config = load_token_cache_config()
    cache: TokenCachePort
    if cache_config.db_path:
        cache = SQLiteTokenCache(Path(cache_config.db_path))
    else:
        cache = InMemoryTokenCache()

    transport = RequestsHttpTransport(config)
    return HelpdeskClient(config, transport, cache)

def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="helpdesk-widget",
        description="Single-sign-on helper for the Helpdesk widget",
    )
    p.add_argument("--debug", action="store_true", help="enable debug logging")
    sub = p.add_subparsers(dest="command", required=True)

    sub.add_parser("validate-key", help="check the configured API key")

    check_user = sub.add_parser("check-user", help="check whether a user exists")
    check_user.add_argument("email")

    token = sub.add_parser("token", help="obtain an access token for a user")
    token.add_argument("email")

    widget_url = sub.add_parser("widget-url", help="print the widget URL for a user")
    widget_url.add_argument("email")
    widget_url.add_argument("--first-name", default="")
    widget_url.add_argument("--last-name", default="")
    mode = widget_url.add_mutually_exclusive_group()
    mode.add_argument("--token", default=None, help="deep-link with an existing token")
    mode.add_argument(
        "--login",
        action="store_true",
        help="log the user in and deep-link, falling back to the anonymous widget",
    )

    forget = sub.add_parser("forget-token", help="drop the cached token for a user")
    forget.add_argument("email")

    return p

def _print_json(data: Dict[str, Any]) -> None:
    print(json.dumps(data, indent=2, ensure_ascii=False))

def run(argv: Sequence[str] | None = None, client: HelpdeskClient | None = None) -> int:
    args = _build_parser().parse_args(argv)
    logging_conf(args.debug)

    if client is None:
        try:
            client = _build_client()
        except (HelpdeskConfigError, TokenCacheError) as exc:
            logger.error("Helpdesk widget is not configured: %s", exc)
            return EXIT_CONFIG_ERROR

    if args.command == "widget-url":
        user = UserIdentity(
            email=args.email,
            first_name=args.first_name,
            last_name=args.last_name,
        )
        if args.login:
            print(resolve_widget_url(client, user))
        else:
            print(client.get_widget_url(user, token=args.token))
        return EXIT_OK

    if args.command == "forget-token":
        client.invalidate_token_cache(args.email)
        logger.info("Cached Helpdesk token dropped for %s", args.email)
        return EXIT_OK

    if args.command == "validate-key":
        result = client.validate_api_key()
    elif args.command == "check-user":
        result = client.check_user_exists(args.email)
    else:
        result = client.get_auth_token(args.email)

    _print_json(result.to_dict())
    return EXIT_OK if result.success else EXIT_FAILURE

def main() -> None:
    raise SystemExit(run())
