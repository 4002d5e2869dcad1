from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple


@dataclass(frozen=True)
class Listener:
    """One process observed holding one listening TCP socket."""

    port: int
    pid: Optional[int]
    command: str
    user: str
    endpoint: str

    def sort_key(self) -> Tuple[int, int]:
        return (self.port, self.pid or 0)


@dataclass(frozen=True)
class Role:
    description: str
    confidence: str

    def to_dict(self) -> Dict[str, str]:
        return {"description": self.description, "confidence": self.confidence}


@dataclass(frozen=True)
class AggregatedListener:
    """All endpoints sharing one ``(port, pid, command, user)`` key.

    ``endpoints`` is sorted and duplicate free; ``endpoint`` is its first
    member.
    """

    port: int
    pid: Optional[int]
    command: str
    user: str
    endpoint: str
    endpoints: Tuple[str, ...]
    role: Role

    def to_dict(self) -> Dict[str, Any]:
        return {
            "port": self.port,
            "pid": self.pid,
            "command": self.command,
            "user": self.user,
            "endpoint": self.endpoint,
            "endpoints": list(self.endpoints),
            "role": self.role.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AggregatedListener":
        role = data.get("role") or {}
        return cls(
            port=int(data["port"]),
            pid=None if data.get("pid") is None else int(data["pid"]),
            command=str(data["command"]),
            user=str(data["user"]),
            endpoint=str(data["endpoint"]),
            endpoints=tuple(str(e) for e in data.get("endpoints") or []),
            role=Role(str(role.get("description", "")), str(role.get("confidence", ""))),
        )


@dataclass
class CollectionResult:
    listeners: List[Listener]
    source: str
    errors: List[str] = field(default_factory=list)
