"""UnusedJavaScript audit — estimates transfer bytes spent on code that never ran.

For every script with coverage samples:
1. Flattens each sample into a waste bitmap
2. Merges the samples into one wasted-bytes estimate for the script
3. Drops scripts whose waste is below the reporting threshold
4. For bundles with a source map, attributes the waste to original files
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from jswaste.agents.analyzers.aggregate import merge_waste
from jswaste.agents.analyzers.attribution import (
    MAX_BREAKDOWN_FILES,
    MIN_FILE_UNUSED_BYTES,
    create_bundle_multi_data,
)
from jswaste.agents.analyzers.bundles import analyze_bundles
from jswaste.agents.analyzers.waste import compute_waste
from jswaste.agents.base import BaseAgent, TaskInput, TaskOutput, TaskStatus
from jswaste.models.finding import WasteAuditResult
from jswaste.parsing.artifacts import Artifacts
from jswaste.telemetry import record_metric_count, start_span

if TYPE_CHECKING:
    from jswaste.models.bundle import Bundle
    from jswaste.models.coverage import ScriptCoverage
    from jswaste.models.network import NetworkRecord

logger = logging.getLogger(__name__)

IGNORE_THRESHOLD_IN_BYTES = 2048


@dataclass
class UnusedJavaScriptTask(TaskInput):
    """Task input for the unused JavaScript audit."""

    task_type: str = "unused_javascript"
    """Type of task (defaults to 'unused_javascript')."""

    target: str = ""
    """Where the artifacts came from, for logging."""

    artifacts: Artifacts = field(default_factory=Artifacts)
    """Collected page-load artifacts."""


def group_by_url(js_usage: list[ScriptCoverage]) -> dict[str, list[ScriptCoverage]]:
    """Group coverage samples by script URL, keeping first-seen order."""
    scripts_by_url: dict[str, list[ScriptCoverage]] = {}
    for script in js_usage:
        scripts_by_url.setdefault(script.url, []).append(script)
    return scripts_by_url


class UnusedJavaScriptAudit(BaseAgent):
    """Audit that reports scripts with large amounts of never-executed code."""

    def __init__(
        self,
        *,
        ignore_threshold_bytes: int = IGNORE_THRESHOLD_IN_BYTES,
        min_file_unused_bytes: int = MIN_FILE_UNUSED_BYTES,
        max_breakdown_files: int = MAX_BREAKDOWN_FILES,
    ) -> None:
        """Initialize the audit.

        Args:
            ignore_threshold_bytes: Findings must waste more than this many bytes.
            min_file_unused_bytes: Original files with fewer unused bytes are
                left out of a bundle's breakdown.
            max_breakdown_files: Maximum original files listed per bundle.
        """
        self._ignore_threshold = ignore_threshold_bytes
        self._min_file_unused_bytes = min_file_unused_bytes
        self._max_breakdown_files = max_breakdown_files

    @property
    def name(self) -> str:
        return "unused-javascript"

    @property
    def title(self) -> str:
        return "Remove unused JavaScript"

    @property
    def description(self) -> str:
        return (
            "Remove unused JavaScript to reduce bytes consumed by network activity. "
            "Split large bundles so code is only loaded when it is needed."
        )

    def audit(
        self,
        js_usage: list[ScriptCoverage],
        network_records: list[NetworkRecord],
        bundles: list[Bundle],
    ) -> WasteAuditResult:
        """Compute wasted-bytes findings for every script with coverage.

        Findings follow script discovery order. Scripts without a network
        record are skipped since their transfer size is unknown.
        """
        items = []
        for url, script_coverage in group_by_url(js_usage).items():
            network_record = next((r for r in network_records if r.url == url), None)
            if network_record is None:
                logger.debug("No network record for %s, skipping", url)
                continue

            waste_data = [compute_waste(sample) for sample in script_coverage]
            item = merge_waste(waste_data, network_record)
            if item.wasted_bytes <= self._ignore_threshold:
                continue

            bundle = next((b for b in bundles if b.network_record is network_record), None)
            if bundle is not None:
                create_bundle_multi_data(
                    item,
                    waste_data,
                    bundle,
                    min_unused_bytes=self._min_file_unused_bytes,
                    max_files=self._max_breakdown_files,
                )
            items.append(item)

        return WasteAuditResult(items=items)

    async def run(self, task: TaskInput) -> TaskOutput:
        """Execute the audit.

        Args:
            task: An UnusedJavaScriptTask carrying the collected artifacts.

        Returns:
            TaskOutput with the WasteAuditResult in result['audit'].
        """
        if not isinstance(task, UnusedJavaScriptTask):
            return TaskOutput(
                status=TaskStatus.FAILED,
                errors=["Task must be an UnusedJavaScriptTask instance"],
            )

        artifacts = task.artifacts
        try:
            bundles = await analyze_bundles(artifacts)

            with start_span("audit.unused_javascript", task.target or self.name) as span:
                result = self.audit(artifacts.js_usage, artifacts.network_records, bundles)
                span.set_data("findings", len(result.items))

            record_metric_count("jswaste.audit.findings", len(result.items), audit=self.name)
            logger.info(
                "Unused JavaScript audit complete: %d findings, %d bytes wasted",
                len(result.items),
                result.total_wasted_bytes,
            )
            return TaskOutput(
                status=TaskStatus.COMPLETED,
                result={"audit": result, "bundles": bundles},
            )

        except Exception as exc:
            logger.exception("Unexpected error during unused JavaScript audit")
            return TaskOutput(
                status=TaskStatus.FAILED,
                errors=[f"Unexpected error: {exc}"],
            )
