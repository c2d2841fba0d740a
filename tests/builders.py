"""Builders for coverage samples, network records and bundles used across tests."""

from __future__ import annotations

from typing import Any

from jswaste.models.bundle import Bundle, ScriptElement
from jswaste.models.coverage import CoverageRange, FunctionCoverage, ScriptCoverage
from jswaste.models.network import NetworkRecord
from jswaste.parsing.sourcemap import SourceMap


def make_coverage(url: str, *ranges: tuple[int, int, int]) -> ScriptCoverage:
    """Build a one-function coverage sample from ``(start, end, count)`` tuples."""
    return ScriptCoverage(
        url=url,
        functions=(
            FunctionCoverage(
                function_name="",
                ranges=tuple(CoverageRange(start, end, count) for start, end, count in ranges),
            ),
        ),
    )


def make_record(url: str, transfer_size: int, resource_type: str = "Script") -> NetworkRecord:
    return NetworkRecord(
        url=url,
        resource_type=resource_type,
        transfer_size=transfer_size,
        resource_size=transfer_size,
    )


def make_bundle(
    content: str,
    raw_map: dict[str, Any],
    network_record: NetworkRecord | None,
) -> Bundle:
    """Build a bundle the same way the bundle index does."""
    source_map = SourceMap(raw_map)
    return Bundle(
        script=ScriptElement(src=network_record.url if network_record else None, content=content),
        network_record=network_record,
        raw_map=raw_map,
        map=source_map,
        sizes=source_map.compute_generated_file_sizes(content),
    )


# One original file per generated line: a.js, b.js, c.js
THREE_FILE_MAP: dict[str, Any] = {
    "version": 3,
    "sources": ["a.js", "b.js", "c.js"],
    "names": [],
    "mappings": "AAAA;ACAA;ACAA",
}

THREE_FILE_CONTENT = "a" * 1500 + "\n" + "b" * 1200 + "\n" + "c" * 500
