"""Flatten a script coverage sample into a per-byte waste bitmap."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from jswaste.models.coverage import ScriptCoverage


@dataclass(frozen=True)
class WasteData:
    """Which offsets of one coverage sample never executed."""

    unused_by_index: bytes
    """One flag per offset; 1 means never executed."""

    unused_length: int
    """Number of unexecuted offsets."""

    content_length: int
    """Largest end offset seen in the sample."""

    def is_unused(self, index: int) -> bool:
        """Return True if *index* is flagged unexecuted (offsets past the end are used)."""
        return 0 <= index < self.content_length and self.unused_by_index[index] == 1


def compute_waste(script_coverage: ScriptCoverage) -> WasteData:
    """Compute the waste bitmap of one coverage sample.

    Nesting is ignored: if any range covering a byte reports a zero count,
    the byte is unexecuted. Overlapping zero-count ranges mark bytes once.
    """
    content_length = max(
        (r.end_offset for func in script_coverage.functions for r in func.ranges),
        default=0,
    )

    unused_by_index = bytearray(content_length)
    for func in script_coverage.functions:
        for r in func.ranges:
            if r.is_executed:
                continue
            start = max(r.start_offset, 0)
            if r.end_offset > start:
                unused_by_index[start : r.end_offset] = b"\x01" * (r.end_offset - start)

    return WasteData(
        unused_by_index=bytes(unused_by_index),
        unused_length=unused_by_index.count(1),
        content_length=content_length,
    )
