"""Script coverage models (DevTools ``Profiler.ScriptCoverage`` shape)."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class CoverageRange:
    """A range of the script's flat offset space and its execution count."""

    start_offset: int
    end_offset: int
    count: int

    @property
    def is_executed(self) -> bool:
        """Return True unless the range reports a zero execution count."""
        return self.count != 0

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CoverageRange:
        return cls(
            start_offset=int(data.get("startOffset", 0)),
            end_offset=int(data.get("endOffset", 0)),
            count=int(data.get("count", 0)),
        )


@dataclass(frozen=True)
class FunctionCoverage:
    """Coverage ranges reported for one function of a script.

    The first range spans the whole function; later ranges are nested
    blocks. A byte covered by any zero-count range never ran, whatever the
    counts of the ranges around it.
    """

    function_name: str = ""
    ranges: tuple[CoverageRange, ...] = ()
    is_block_coverage: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> FunctionCoverage:
        return cls(
            function_name=str(data.get("functionName", "")),
            ranges=tuple(CoverageRange.from_dict(r) for r in data.get("ranges", [])),
            is_block_coverage=bool(data.get("isBlockCoverage", False)),
        )


@dataclass(frozen=True)
class ScriptCoverage:
    """One coverage sample for a single script load."""

    url: str
    functions: tuple[FunctionCoverage, ...] = field(default_factory=tuple)
    script_id: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ScriptCoverage:
        return cls(
            url=str(data.get("url", "")),
            functions=tuple(FunctionCoverage.from_dict(f) for f in data.get("functions", [])),
            script_id=str(data.get("scriptId", "")),
        )
