"""Data models for jswaste."""

from jswaste.models.bundle import Bundle, BundleSizes, ScriptElement, SourceMapArtifact
from jswaste.models.coverage import CoverageRange, FunctionCoverage, ScriptCoverage
from jswaste.models.finding import (
    WASTE_HEADINGS,
    FileBreakdown,
    Heading,
    WasteAuditResult,
    WasteFinding,
)
from jswaste.models.network import NetworkRecord

__all__ = [
    "WASTE_HEADINGS",
    "Bundle",
    "BundleSizes",
    "CoverageRange",
    "FileBreakdown",
    "FunctionCoverage",
    "Heading",
    "NetworkRecord",
    "ScriptCoverage",
    "ScriptElement",
    "SourceMapArtifact",
    "WasteAuditResult",
    "WasteFinding",
]
