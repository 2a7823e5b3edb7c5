from __future__ import annotations
import logging
from typing import Any, Mapping
from helpdesk_widget.application.helpdesk_client import HelpdeskClient
from helpdesk_widget.domain.helpdesk import UserIdentity


logger = logging.getLogger(__name__)

def resolve_widget_url(
    client: HelpdeskClient,
    user: UserIdentity | Mapping[str, Any],
) -> str:
    """Return the widget URL to embed for the user.
        Logs the user in and deep-links to the tickets view when a token is
        obtained, otherwise falls back to the anonymous widget URL.
        """

    if not isinstance(user, UserIdentity):
        user = UserIdentity.from_mapping(user)

    if not user.email:
        logger.warning("User has no email; serving anonymous Helpdesk widget")
        return client.get_widget_url(user)

    result = client.get_auth_token(user.email)
    if result.success and result.value is not None:
        return client.get_widget_url(user, token=result.value.token)

    logger.warning(
        "Could not obtain Helpdesk token for %s: %s; serving anonymous widget",
        user.email,
        getattr(result, "error", None),
    )
    return client.get_widget_url(user)
