"""Build the bundle index: scripts that ship with a usable source map."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from jswaste.models.bundle import Bundle, BundleSizes
from jswaste.parsing.sourcemap import SourceMap, SourceMapError

if TYPE_CHECKING:
    from jswaste.models.bundle import ScriptElement, SourceMapArtifact
    from jswaste.models.network import NetworkRecord
    from jswaste.parsing.artifacts import Artifacts

logger = logging.getLogger(__name__)


def _build_bundle(
    artifact: SourceMapArtifact,
    script: ScriptElement,
    network_record: NetworkRecord | None,
) -> Bundle | None:
    raw_map = artifact.map or {}
    try:
        source_map = SourceMap(raw_map, artifact.source_map_url)
    except (SourceMapError, KeyError, TypeError, ValueError) as exc:
        logger.warning("Skipping source map for %s: %s", artifact.script_url, exc)
        return None

    if script.content:
        sizes = source_map.compute_generated_file_sizes(script.content)
    else:
        sizes = BundleSizes()
    return Bundle(
        script=script,
        network_record=network_record,
        raw_map=raw_map,
        map=source_map,
        sizes=sizes,
    )


async def analyze_bundles(artifacts: Artifacts) -> list[Bundle]:
    """Correlate source maps with their script elements and network records.

    Source maps without mappings, or whose script element is unknown, are
    ignored. Maps are decoded in worker threads.
    """
    pending = []
    for artifact in artifacts.source_maps:
        if not artifact.map:
            if artifact.error_message:
                logger.info("No source map for %s: %s", artifact.script_url, artifact.error_message)
            continue
        if not artifact.map.get("mappings") and not artifact.map.get("sections"):
            continue

        script = next((s for s in artifacts.script_elements if s.src == artifact.script_url), None)
        if script is None:
            logger.debug("No script element for source map of %s", artifact.script_url)
            continue
        network_record = next(
            (r for r in artifacts.network_records if r.url == artifact.script_url), None
        )
        pending.append(asyncio.to_thread(_build_bundle, artifact, script, network_record))

    bundles = [bundle for bundle in await asyncio.gather(*pending) if bundle is not None]
    logger.info("Found %d bundles with source maps", len(bundles))
    return bundles
