"""Reporters for outputting audit results."""

from __future__ import annotations

from jswaste.agents.reporters.json_reporter import JSONReporter
from jswaste.agents.reporters.terminal import CLIReporter, reporter

__all__ = [
    "CLIReporter",
    "JSONReporter",
    "reporter",
]
