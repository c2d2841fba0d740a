"""Attribute a bundle's unused bytes to its original source files."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from jswaste.models.finding import FileBreakdown

if TYPE_CHECKING:
    from jswaste.agents.analyzers.waste import WasteData
    from jswaste.models.bundle import Bundle
    from jswaste.models.finding import WasteFinding

logger = logging.getLogger(__name__)

MIN_FILE_UNUSED_BYTES = 1024
MAX_BREAKDOWN_FILES = 5


def count_unused_bytes_by_file(waste_data: list[WasteData], bundle: Bundle) -> dict[str, int]:
    """Count, per original file, the bundle bytes that no sample executed.

    Precondition: index ``i`` of the bundle's source text is offset ``i`` of
    every coverage sample. This holds when the coverage was collected from
    the same script text; it is not checked here.

    A byte counts only when every sample flags it unused. Newlines end a
    line and belong to no file, matching
    :meth:`SourceMap.compute_generated_file_sizes`. Positions the source map
    cannot resolve to a file are skipped.
    """
    content = bundle.script.content or ""
    files: dict[str, int] = {}
    line = 0
    column = 0
    for index, char in enumerate(content):
        if char == "\n":
            line += 1
            column = 0
            continue

        if waste_data and all(data.is_unused(index) for data in waste_data):
            entry = bundle.map.find_entry(line, column)
            if entry is not None and entry.source_url is not None:
                files[entry.source_url] = files.get(entry.source_url, 0) + 1
        column += 1
    return files


def create_bundle_multi_data(
    item: WasteFinding,
    waste_data: list[WasteData],
    bundle: Bundle,
    *,
    min_unused_bytes: int = MIN_FILE_UNUSED_BYTES,
    max_files: int = MAX_BREAKDOWN_FILES,
) -> None:
    """Attach the top original files behind *item*'s waste as ``item.multi``.

    Does nothing when the bundle has no source text.
    """
    if not bundle.script.content:
        return

    files = count_unused_bytes_by_file(waste_data, bundle)
    top_files = sorted(files.items(), key=lambda pair: pair[1], reverse=True)
    top_files = [pair for pair in top_files if pair[1] >= min_unused_bytes][:max_files]

    item.multi = FileBreakdown(
        url=[source for source, _ in top_files],
        total_bytes=[bundle.sizes.files.get(source) for source, _ in top_files],
        wasted_bytes=[unused for _, unused in top_files],
    )
    logger.debug(
        "%s: attributed unused bytes to %d of %d original files",
        item.url,
        len(top_files),
        len(files),
    )
