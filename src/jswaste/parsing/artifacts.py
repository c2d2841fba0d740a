"""Load page-load artifacts collected by a browser run.

The artifacts file is a JSON object with these keys (all optional):

- ``JsUsage``: script coverage samples, either a list or a mapping of
  script id to sample.
- ``networkRecords``: finished network requests.
- ``ScriptElements``: scripts on the page with their source text.
- ``SourceMaps``: source maps collected for scripts.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from jswaste.models.bundle import ScriptElement, SourceMapArtifact
from jswaste.models.coverage import ScriptCoverage
from jswaste.models.network import NetworkRecord

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)


class ArtifactsError(Exception):
    """Raised when an artifacts file cannot be read or has the wrong shape."""


@dataclass
class Artifacts:
    """Everything the unused JavaScript audit consumes from a page load."""

    js_usage: list[ScriptCoverage] = field(default_factory=list)
    network_records: list[NetworkRecord] = field(default_factory=list)
    script_elements: list[ScriptElement] = field(default_factory=list)
    source_maps: list[SourceMapArtifact] = field(default_factory=list)


def _as_list(raw: Any, key: str) -> list[dict[str, Any]]:
    if raw is None:
        return []
    if isinstance(raw, dict):
        raw = list(raw.values())
    if not isinstance(raw, list):
        msg = f"Artifact '{key}' must be a list or an object"
        raise ArtifactsError(msg)
    items = [item for item in raw if isinstance(item, dict)]
    if len(items) != len(raw):
        logger.warning("Ignoring %d malformed entries in '%s'", len(raw) - len(items), key)
    return items


def parse_artifacts(data: dict[str, Any]) -> Artifacts:
    """Build :class:`Artifacts` from an already-decoded JSON object."""
    return Artifacts(
        js_usage=[ScriptCoverage.from_dict(d) for d in _as_list(data.get("JsUsage"), "JsUsage")],
        network_records=[
            NetworkRecord.from_dict(d)
            for d in _as_list(data.get("networkRecords"), "networkRecords")
        ],
        script_elements=[
            ScriptElement.from_dict(d)
            for d in _as_list(data.get("ScriptElements"), "ScriptElements")
        ],
        source_maps=[
            SourceMapArtifact.from_dict(d) for d in _as_list(data.get("SourceMaps"), "SourceMaps")
        ],
    )


def load_artifacts(path: Path) -> Artifacts:
    """Read and parse an artifacts JSON file.

    Raises:
        ArtifactsError: If the file is unreadable, not JSON, or not an object.
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        msg = f"Cannot read artifacts file {path}: {exc}"
        raise ArtifactsError(msg) from exc
    except json.JSONDecodeError as exc:
        msg = f"Artifacts file {path} is not valid JSON: {exc}"
        raise ArtifactsError(msg) from exc

    if not isinstance(data, dict):
        msg = f"Artifacts file {path} must contain a JSON object"
        raise ArtifactsError(msg)

    artifacts = parse_artifacts(data)
    logger.info(
        "Loaded %d coverage samples, %d network records, %d source maps from %s",
        len(artifacts.js_usage),
        len(artifacts.network_records),
        len(artifacts.source_maps),
        path,
    )
    return artifacts
