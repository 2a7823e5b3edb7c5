from __future__ import annotations
from dataclasses import asdict, dataclass, is_dataclass
from typing import Any, Dict, Generic, Mapping, Optional, TypeVar, Union


T = TypeVar("T")

@dataclass(frozen=True)
class UserIdentity:
    """A host application user, identified by email."""

    email: str
    first_name: str = ""
    last_name: str = ""

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "UserIdentity":
        return cls(
            email=_str_or_empty(data.get("email")),
            first_name=_str_or_empty(data.get("first_name")),
            last_name=_str_or_empty(data.get("last_name")),
        )

# payloads
@dataclass(frozen=True)
class CompanyCheck:
    company: Optional[Dict[str, Any]] = None

@dataclass(frozen=True)
class UserCheck:
    exists: bool = False
    user: Optional[Dict[str, Any]] = None

@dataclass(frozen=True)
class TokenGrant:
    token: str
    from_cache: bool = False

# results
@dataclass(frozen=True)
class Success(Generic[T]):
    value: T

    @property
    def success(self) -> bool:
        return True

    def to_dict(self) -> Dict[str, Any]:
        return {"success": True, **_payload_dict(self.value)}

@dataclass(frozen=True)
class Failure(Generic[T]):
    """Failed operation. value carries the payload defaults callers still read."""

    error: str
    value: Optional[T] = None

    @property
    def success(self) -> bool:
        return False

    def to_dict(self) -> Dict[str, Any]:
        return {"success": False, **_payload_dict(self.value), "error": self.error}


OperationResult = Union[Success[T], Failure[T]]

def _payload_dict(value: Any) -> Dict[str, Any]:
    if value is None:
        return {}
    if is_dataclass(value) and not isinstance(value, type):
        return asdict(value)
    return {"value": value}

def _str_or_empty(value: Any) -> str:
    if value is None:
        return ""
    return str(value)
