"""Artifact loading and source map decoding."""

from jswaste.parsing.artifacts import Artifacts, ArtifactsError, load_artifacts, parse_artifacts
from jswaste.parsing.sourcemap import SourceMap, SourceMapEntry, SourceMapError, parse_vlq

__all__ = [
    "Artifacts",
    "ArtifactsError",
    "SourceMap",
    "SourceMapEntry",
    "SourceMapError",
    "load_artifacts",
    "parse_artifacts",
    "parse_vlq",
]
