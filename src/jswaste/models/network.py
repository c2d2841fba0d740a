"""Network request models."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class NetworkRecord:
    """The parts of a finished network request needed to size a resource."""

    url: str
    """Request URL."""

    resource_type: str = ""
    """DevTools resource type (Script, Document, Stylesheet, ...)."""

    transfer_size: int = 0
    """Bytes sent over the wire, headers and compression included."""

    resource_size: int = 0
    """Decoded body size."""

    request_id: str = ""
    """Request identifier from the DevTools log."""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> NetworkRecord:
        return cls(
            url=str(data.get("url", "")),
            resource_type=str(data.get("resourceType") or ""),
            transfer_size=int(data.get("transferSize") or 0),
            resource_size=int(data.get("resourceSize") or 0),
            request_id=str(data.get("requestId", "")),
        )
