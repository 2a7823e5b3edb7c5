from __future__ import annotations
from typing import Protocol


class TokenCachePort(Protocol):
    def get(self, key: str) -> str | None:
        ...

    def put(self, key: str, value: str, ttl_minutes: int) -> None:
        ...

    def forget(self, key: str) -> None:
        ...
