"""Bundle models: a script, its network request and its source map."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from jswaste.models.network import NetworkRecord
    from jswaste.parsing.sourcemap import SourceMap


@dataclass(frozen=True)
class ScriptElement:
    """A script on the page and, when available, its source text."""

    src: str | None = None
    content: str | None = None
    request_id: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ScriptElement:
        return cls(
            src=data.get("src"),
            content=data.get("content"),
            request_id=str(data.get("requestId", "")),
        )


@dataclass(frozen=True)
class SourceMapArtifact:
    """A source map collected for a script, or the reason it is missing."""

    script_url: str
    source_map_url: str | None = None
    map: dict[str, Any] | None = None
    error_message: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SourceMapArtifact:
        raw_map = data.get("map")
        return cls(
            script_url=str(data.get("scriptUrl", "")),
            source_map_url=data.get("sourceMapUrl"),
            map=raw_map if isinstance(raw_map, dict) else None,
            error_message=str(data.get("errorMessage", "")),
        )


@dataclass
class BundleSizes:
    """How many generated bytes of a bundle belong to each original file."""

    files: dict[str, int] = field(default_factory=dict)
    unmapped_bytes: int = 0
    total_bytes: int = 0


@dataclass
class Bundle:
    """A bundled script correlated with its network request and source map."""

    script: ScriptElement
    network_record: NetworkRecord | None
    raw_map: dict[str, Any]
    map: SourceMap
    sizes: BundleSizes
