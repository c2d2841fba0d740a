"""JSON reporter — generates structured JSON audit reports.

Produces machine-readable JSON output for downstream tooling.
"""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from pathlib import Path

    from jswaste.agents.base import BaseAgent
    from jswaste.models.finding import WasteAuditResult

logger = logging.getLogger(__name__)


class JSONReporter:
    """Serialize an audit result into a single JSON document."""

    def generate(
        self,
        output_path: Path,
        *,
        result: WasteAuditResult,
        audit: BaseAgent | None = None,
    ) -> Path:
        """Write a JSON report file.

        Args:
            output_path: Path to write the JSON file.
            result: Findings of the audit.
            audit: The audit that produced them, for id/title metadata.

        Returns:
            The path to the generated JSON file.
        """
        report = _build_report(result=result, audit=audit)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(
            json.dumps(report, indent=2, ensure_ascii=False),
            encoding="utf-8",
        )
        logger.info("JSON report written to %s", output_path)
        return output_path

    def generate_string(
        self,
        *,
        result: WasteAuditResult,
        audit: BaseAgent | None = None,
    ) -> str:
        """Return the JSON report as a string."""
        report = _build_report(result=result, audit=audit)
        return json.dumps(report, indent=2, ensure_ascii=False)


def _build_report(
    *,
    result: WasteAuditResult,
    audit: BaseAgent | None = None,
) -> dict[str, Any]:
    """Build the JSON report structure."""
    audit_data: dict[str, Any] = {}
    if audit is not None:
        audit_data.update(
            {"id": audit.name, "title": audit.title, "description": audit.description}
        )
    audit_data.update(result.to_dict())

    return {
        "tool": "jswaste",
        "timestamp": datetime.now(tz=UTC).isoformat(),
        "audit": audit_data,
    }
