from __future__ import annotations
import logging
from typing import Any, Mapping
import requests
from requests import HTTPError, RequestException
from helpdesk_widget.config import HelpdeskWidgetConfig
from helpdesk_widget.shared.errors import HelpdeskTransportError


logger = logging.getLogger(__name__)

class RequestsHttpTransport:
    """HTTP transport for the Helpdesk external API.
        Sends one JSON POST per call against the configured base URL with the
        service key header attached. There are no retries: any network, HTTP
        status or JSON decoding failure is raised as HelpdeskTransportError.
        """

    def __init__(self, config: HelpdeskWidgetConfig) -> None:
        self._config = config
        self._session = requests.Session()
        self._session.headers.update(
            {
                "Accept": "application/json",
                "Content-Type": "application/json",
                "X-Service-Key": config.api_key,
            }
        )

    def post(self, path: str, json_body: Mapping[str, Any] | None = None) -> Any:
        url = self._config.api_url + "/" + path.lstrip("/")

        try:
            response = self._session.post(
                url,
                json=dict(json_body) if json_body is not None else None,
                timeout=self._config.timeout_seconds,
            )
            response.raise_for_status()
        except HTTPError as exc:
            status_code = exc.response.status_code if exc.response is not None else None
            logger.debug("Helpdesk API POST %s failed with HTTP %s", path, status_code)
            raise HelpdeskTransportError(
                f"Helpdesk API returned an error for {path}: {exc}",
                status_code=status_code,
            ) from exc
        except RequestException as exc:
            logger.debug("Helpdesk API POST %s failed: %s", path, exc)
            raise HelpdeskTransportError(f"Error calling Helpdesk API {path}: {exc}") from exc

        logger.debug("Helpdesk API POST %s -> %s", path, response.status_code)

        try:
            return response.json()
        except ValueError as exc:
            raise HelpdeskTransportError(
                f"Failed to parse Helpdesk API response for {path} as JSON",
                status_code=response.status_code,
            ) from exc

    def close(self) -> None:
        self._session.close()
