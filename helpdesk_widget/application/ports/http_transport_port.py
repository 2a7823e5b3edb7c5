from __future__ import annotations
from typing import Any, Mapping, Protocol


class HttpTransportPort(Protocol):
    def post(self, path: str, json_body: Mapping[str, Any] | None = None) -> Any:
        """POST to a path under the Helpdesk base URL and return the parsed JSON body.

            Raises HelpdeskTransportError on any network, HTTP status or JSON failure.
            """
        ...
