"""Wasted-bytes findings produced by the unused JavaScript audit."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

_BYTES_PER_KIB = 1024


@dataclass
class FileBreakdown:
    """Per-original-file waste for a bundled script.

    Three parallel lists, one row per source file, sorted by wasted bytes
    descending. A ``None`` total means the bundle's size table has no entry
    for that file; it is unknown, not zero.
    """

    url: list[str] = field(default_factory=list)
    total_bytes: list[int | None] = field(default_factory=list)
    wasted_bytes: list[int] = field(default_factory=list)

    def rows(self) -> list[tuple[str, int | None, int]]:
        """Return the breakdown as ``(url, total_bytes, wasted_bytes)`` rows."""
        return list(zip(self.url, self.total_bytes, self.wasted_bytes, strict=True))

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": "multi",
            "url": list(self.url),
            "totalBytes": list(self.total_bytes),
            "wastedBytes": list(self.wasted_bytes),
        }


@dataclass
class WasteFinding:
    """Estimated waste for one script URL."""

    url: str
    """Script URL."""

    total_bytes: int
    """Estimated transferred size of the script."""

    wasted_bytes: int
    """Estimated transferred bytes that were never executed."""

    wasted_percent: float
    """``100 * wasted_bytes / total_bytes`` (0 when nothing was transferred)."""

    multi: FileBreakdown | None = None
    """Top original source files behind the waste, for bundles."""

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "url": self.url,
            "totalBytes": self.total_bytes,
            "wastedBytes": self.wasted_bytes,
            "wastedPercent": self.wasted_percent,
        }
        if self.multi is not None:
            data["multi"] = self.multi.to_dict()
        return data


@dataclass(frozen=True)
class Heading:
    """Column metadata telling the report layer how to render a field."""

    key: str
    value_type: str
    label: str
    multi: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "key": self.key,
            "valueType": self.value_type,
            "multi": self.multi,
            "label": self.label,
        }


WASTE_HEADINGS: tuple[Heading, ...] = (
    Heading(key="url", value_type="url", label="URL", multi=True),
    Heading(key="totalBytes", value_type="bytes", label="Transfer Size", multi=True),
    Heading(key="wastedBytes", value_type="bytes", label="Potential Savings", multi=True),
)


@dataclass
class WasteAuditResult:
    """Findings plus the fixed column metadata for rendering them."""

    items: list[WasteFinding] = field(default_factory=list)
    headings: tuple[Heading, ...] = WASTE_HEADINGS

    @property
    def total_wasted_bytes(self) -> int:
        """Return the sum of wasted bytes across all findings."""
        return sum(item.wasted_bytes for item in self.items)

    @property
    def display_value(self) -> str:
        """Return a short human summary of the potential savings."""
        if not self.items:
            return ""
        kib = round(self.total_wasted_bytes / _BYTES_PER_KIB)
        return f"Potential savings of {kib:,} KiB"

    def sorted_items(self) -> list[WasteFinding]:
        """Return findings ordered by wasted bytes, largest first."""
        return sorted(self.items, key=lambda item: item.wasted_bytes, reverse=True)

    def to_dict(self) -> dict[str, Any]:
        return {
            "displayValue": self.display_value,
            "totalWastedBytes": self.total_wasted_bytes,
            "headings": [heading.to_dict() for heading in self.headings],
            "items": [item.to_dict() for item in self.items],
        }
