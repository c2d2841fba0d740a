"""Source Map v3 decoding and position lookup.

Decodes the base64 VLQ ``mappings`` string of a source map into a sorted
list of entries so that any generated ``(line, column)`` position can be
resolved to the original file it came from. Lines and columns are 0-based.
Index maps (``sections``) are flattened with their offsets applied.
"""

from __future__ import annotations

import logging
from bisect import bisect_right
from dataclasses import dataclass
from typing import Any
from urllib.parse import urljoin

from jswaste.models.bundle import BundleSizes

logger = logging.getLogger(__name__)

_B64_VALUES = {
    char: index
    for index, char in enumerate(
        "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/"
    )
}

_VLQ_VALUE_MASK = 0b11111
_VLQ_CONTINUATION_SHIFT = 5

# Segment field counts
_SEGMENT_WITH_SOURCE = 4
_SEGMENT_WITH_NAME = 5


class SourceMapError(ValueError):
    """Raised when a source map cannot be decoded."""


def parse_vlq(segment: str) -> list[int]:
    """Decode a base64 VLQ segment into a list of signed integers.

    Raises:
        SourceMapError: On a non-base64 character or a truncated value.
    """
    values: list[int] = []
    current, shift = 0, 0
    for char in segment:
        digit = _B64_VALUES.get(char)
        if digit is None:
            msg = f"Invalid base64 VLQ character {char!r} in segment {segment!r}"
            raise SourceMapError(msg)
        # 5 value bits, high bit is the continuation flag
        current += (digit & _VLQ_VALUE_MASK) << shift
        if digit >> _VLQ_CONTINUATION_SHIFT:
            shift += _VLQ_CONTINUATION_SHIFT
            continue
        # low bit of the unpacked value is the sign
        value = current >> 1
        values.append(-value if current & 1 else value)
        current, shift = 0, 0

    if shift:
        msg = f"Truncated base64 VLQ segment {segment!r}"
        raise SourceMapError(msg)
    return values


@dataclass(frozen=True)
class SourceMapEntry:
    """One decoded mapping: a generated position and where it came from."""

    line: int
    column: int
    source_url: str | None = None
    source_line: int | None = None
    source_column: int | None = None
    name: str | None = None


def _resolve_source_url(source: str, source_root: str, map_url: str | None) -> str:
    if source_root:
        source = source_root.rstrip("/") + "/" + source.lstrip("/")
    if map_url:
        return urljoin(map_url, source)
    return source


def _decode_mappings(
    raw_map: dict[str, Any],
    map_url: str | None,
    *,
    line_offset: int = 0,
    column_offset: int = 0,
) -> list[SourceMapEntry]:
    """Decode the ``mappings`` of a regular (non-index) map."""
    source_root = str(raw_map.get("sourceRoot") or "")
    sources = [
        _resolve_source_url(str(src), source_root, map_url) if src is not None else None
        for src in raw_map.get("sources", [])
    ]
    names = [str(name) for name in raw_map.get("names", [])]
    mappings = raw_map.get("mappings", "")
    if not isinstance(mappings, str):
        msg = "Source map 'mappings' must be a string"
        raise SourceMapError(msg)

    entries: list[SourceMapEntry] = []
    source_index, source_line, source_column, name_index = 0, 0, 0, 0
    for line_number, line in enumerate(mappings.split(";")):
        column = 0
        for segment in line.split(","):
            if not segment:
                continue
            fields = parse_vlq(segment)
            column += fields[0]
            generated_line = line_number + line_offset
            generated_column = column + (column_offset if line_number == 0 else 0)

            if len(fields) < _SEGMENT_WITH_SOURCE:
                entries.append(SourceMapEntry(line=generated_line, column=generated_column))
                continue

            source_index += fields[1]
            source_line += fields[2]
            source_column += fields[3]
            name = None
            if len(fields) >= _SEGMENT_WITH_NAME:
                name_index += fields[4]
                name = names[name_index] if 0 <= name_index < len(names) else None

            source_url = sources[source_index] if 0 <= source_index < len(sources) else None
            entries.append(
                SourceMapEntry(
                    line=generated_line,
                    column=generated_column,
                    source_url=source_url,
                    source_line=source_line,
                    source_column=source_column,
                    name=name,
                )
            )
    return entries


class SourceMap:
    """Position resolver over a decoded source map."""

    def __init__(self, raw_map: dict[str, Any], map_url: str | None = None) -> None:
        """Decode *raw_map*.

        Args:
            raw_map: The parsed source map JSON object.
            map_url: URL the map was fetched from; relative sources resolve
                against it.

        Raises:
            SourceMapError: If the mappings cannot be decoded.
        """
        self._raw = raw_map
        self._map_url = map_url
        if not isinstance(raw_map, dict):
            msg = "Source map must be a JSON object"
            raise SourceMapError(msg)

        entries: list[SourceMapEntry] = []
        if "sections" in raw_map:
            sections = raw_map["sections"]
            if not isinstance(sections, list):
                msg = "Source map 'sections' must be a list"
                raise SourceMapError(msg)
            for index, section in enumerate(sections):
                if not isinstance(section, dict):
                    msg = f"Source map section {index} must be an object"
                    raise SourceMapError(msg)
                offset = section.get("offset", {})
                section_map = section.get("map", {})
                if not isinstance(offset, dict) or not isinstance(section_map, dict):
                    msg = f"Source map section {index} needs an 'offset' and a 'map' object"
                    raise SourceMapError(msg)
                entries.extend(
                    _decode_mappings(
                        section_map,
                        map_url,
                        line_offset=int(offset.get("line", 0)),
                        column_offset=int(offset.get("column", 0)),
                    )
                )
        else:
            entries = _decode_mappings(raw_map, map_url)

        entries.sort(key=lambda entry: (entry.line, entry.column))
        self._entries = entries
        self._positions = [(entry.line, entry.column) for entry in entries]

    def find_entry(self, line: int, column: int) -> SourceMapEntry | None:
        """Return the closest mapping at or before ``(line, column)``.

        Returns None when the position precedes every mapping.
        """
        index = bisect_right(self._positions, (line, column))
        return self._entries[index - 1] if index else None

    def compute_generated_file_sizes(self, content: str) -> BundleSizes:
        """Attribute every generated byte of *content* to an original file.

        A mapping owns the bytes from its column up to the next mapping on
        the same line, or to the end of the line. Bytes owned by no source
        are counted as unmapped.
        """
        lines = content.split("\n")
        total_bytes = len(content)
        unmapped_bytes = total_bytes
        files: dict[str, int] = {}

        for index, entry in enumerate(self._entries):
            following = self._entries[index + 1] if index + 1 < len(self._entries) else None
            if entry.source_url is None:
                continue

            if entry.line >= len(lines):
                logger.error("%d is an invalid line in the generated file", entry.line)
                return BundleSizes(files={}, unmapped_bytes=total_bytes, total_bytes=total_bytes)

            line_length = len(lines[entry.line])
            if entry.column > line_length:
                logger.error("%d:%d is an invalid mapping position", entry.line, entry.column)
                return BundleSizes(files={}, unmapped_bytes=total_bytes, total_bytes=total_bytes)

            if following is not None and following.line == entry.line:
                if following.column > line_length:
                    logger.error(
                        "%d:%d is an invalid mapping position", entry.line, following.column
                    )
                    return BundleSizes(
                        files={}, unmapped_bytes=total_bytes, total_bytes=total_bytes
                    )
                mapping_length = following.column - entry.column
            else:
                mapping_length = line_length - entry.column

            files[entry.source_url] = files.get(entry.source_url, 0) + mapping_length
            unmapped_bytes -= mapping_length

        return BundleSizes(files=files, unmapped_bytes=unmapped_bytes, total_bytes=total_bytes)
