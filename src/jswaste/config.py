"""Configuration parsing from ``.jswaste.yml``."""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from jswaste.agents.analyzers.attribution import MAX_BREAKDOWN_FILES, MIN_FILE_UNUSED_BYTES
from jswaste.agents.analyzers.unused_javascript import IGNORE_THRESHOLD_IN_BYTES

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".jswaste.yml"

_ENV_VAR_RE = re.compile(r"\$\{(\w+)\}")

_REPORT_FORMATS = frozenset({"terminal", "json"})

_TRUTHY = frozenset({"1", "true", "yes"})


def _resolve_env_vars(value: str) -> str:
    """Replace ``${VAR_NAME}`` placeholders with environment variable values."""

    def _replace(match: re.Match[str]) -> str:
        var = match.group(1)
        resolved = os.environ.get(var)
        if resolved is None:
            logger.warning("Environment variable %s is not set (referenced in config)", var)
            return ""
        return resolved

    return _ENV_VAR_RE.sub(_replace, value)


def _resolve_dict(data: dict[str, Any]) -> dict[str, Any]:
    """Recursively resolve environment variables in a dictionary."""
    result: dict[str, Any] = {}
    for key, value in data.items():
        if isinstance(value, str):
            result[key] = _resolve_env_vars(value)
        elif isinstance(value, dict):
            result[key] = _resolve_dict(value)
        elif isinstance(value, list):
            result[key] = [
                _resolve_env_vars(item) if isinstance(item, str) else item for item in value
            ]
        else:
            result[key] = value
    return result


@dataclass
class AuditConfig:
    """Thresholds for the unused JavaScript audit."""

    ignore_threshold_bytes: int = IGNORE_THRESHOLD_IN_BYTES
    """Scripts must waste more than this many bytes to be reported."""

    min_file_unused_bytes: int = MIN_FILE_UNUSED_BYTES
    """Original files need at least this many unused bytes to be listed."""

    max_breakdown_files: int = MAX_BREAKDOWN_FILES
    """Maximum original files listed per bundle."""


@dataclass
class ReportConfig:
    """Reporting and output configuration."""

    format: str = "terminal"
    """Default output format: terminal or json."""

    output_path: str = ""
    """File to write the JSON report to (empty = stdout)."""


@dataclass
class SentryConfig:
    """Sentry observability configuration (opt-in)."""

    enabled: bool = False
    """Whether error and trace reporting is enabled."""

    dsn: str = ""
    """Sentry project DSN (supports ${ENV_VAR} expansion)."""

    environment: str = ""
    """Environment tag (empty = local)."""

    traces_sample_rate: float = 0.0
    """Fraction of audits traced (0.0-1.0)."""


@dataclass
class JsWasteConfig:
    """Complete ``.jswaste.yml`` configuration."""

    root: str
    """Directory the configuration was loaded from."""

    audit: AuditConfig = field(default_factory=AuditConfig)
    report: ReportConfig = field(default_factory=ReportConfig)
    sentry: SentryConfig = field(default_factory=SentryConfig)

    raw: dict[str, Any] = field(default_factory=dict)
    """The resolved YAML document, as read."""


def _section(raw: dict[str, Any], name: str) -> dict[str, Any]:
    section = raw.get(name, {})
    if not isinstance(section, dict):
        logger.warning("Ignoring '%s' section of %s: expected a mapping", name, CONFIG_FILENAME)
        return {}
    return section


def _parse_audit_config(raw: dict[str, Any]) -> AuditConfig:
    return AuditConfig(
        ignore_threshold_bytes=int(raw.get("ignore_threshold_bytes", IGNORE_THRESHOLD_IN_BYTES)),
        min_file_unused_bytes=int(raw.get("min_file_unused_bytes", MIN_FILE_UNUSED_BYTES)),
        max_breakdown_files=int(raw.get("max_breakdown_files", MAX_BREAKDOWN_FILES)),
    )


def _parse_report_config(raw: dict[str, Any]) -> ReportConfig:
    return ReportConfig(
        format=str(raw.get("format", "terminal")),
        output_path=str(raw.get("output_path", "")),
    )


def _parse_sentry_config(raw: dict[str, Any]) -> SentryConfig:
    """Parse the sentry section, falling back to ``JSWASTE_SENTRY_*`` variables."""
    enabled_raw = raw.get("enabled", os.environ.get("JSWASTE_SENTRY_ENABLED", ""))
    if isinstance(enabled_raw, str):
        enabled = enabled_raw.strip().lower() in _TRUTHY
    else:
        enabled = bool(enabled_raw)

    return SentryConfig(
        enabled=enabled,
        dsn=str(raw.get("dsn", os.environ.get("JSWASTE_SENTRY_DSN", ""))),
        environment=str(raw.get("environment", "")),
        traces_sample_rate=float(
            raw.get("traces_sample_rate", os.environ.get("JSWASTE_SENTRY_TRACES_SAMPLE_RATE", 0.0))
        ),
    )


def load_config(root: str | Path) -> JsWasteConfig:
    """Load and parse ``.jswaste.yml`` from *root*.

    Falls back to defaults and environment variables when the file is
    missing or incomplete.
    """
    root_path = Path(root).resolve()
    config_path = root_path / CONFIG_FILENAME

    raw: dict[str, Any] = {}
    if config_path.is_file():
        parsed = yaml.safe_load(config_path.read_text(encoding="utf-8"))
        if isinstance(parsed, dict):
            raw = _resolve_dict(parsed)
        elif parsed is not None:
            logger.warning("Ignoring %s: expected a mapping at the top level", config_path)

    return JsWasteConfig(
        root=str(root_path),
        audit=_parse_audit_config(_section(raw, "audit")),
        report=_parse_report_config(_section(raw, "report")),
        sentry=_parse_sentry_config(_section(raw, "sentry")),
        raw=raw,
    )


def _validate_audit_config(audit: AuditConfig) -> list[str]:
    """Validate audit thresholds."""
    errors: list[str] = []

    if audit.ignore_threshold_bytes < 0:
        errors.append(
            f"audit.ignore_threshold_bytes must be non-negative "
            f"(got: {audit.ignore_threshold_bytes})"
        )

    if audit.min_file_unused_bytes < 0:
        errors.append(
            f"audit.min_file_unused_bytes must be non-negative "
            f"(got: {audit.min_file_unused_bytes})"
        )

    if audit.max_breakdown_files < 1:
        errors.append(
            f"audit.max_breakdown_files must be at least 1 (got: {audit.max_breakdown_files})"
        )

    return errors


def _validate_report_config(report: ReportConfig) -> list[str]:
    """Validate report settings."""
    if report.format not in _REPORT_FORMATS:
        allowed = ", ".join(sorted(_REPORT_FORMATS))
        return [f"report.format must be one of {allowed} (got: {report.format})"]
    return []


def _validate_sentry_config(sentry: SentryConfig) -> list[str]:
    """Validate Sentry configuration."""
    errors: list[str] = []

    if sentry.enabled and not sentry.dsn:
        errors.append("sentry.dsn is required when sentry.enabled is true")

    if not 0.0 <= sentry.traces_sample_rate <= 1.0:
        errors.append(
            f"sentry.traces_sample_rate must be between 0.0 and 1.0 "
            f"(got: {sentry.traces_sample_rate})"
        )

    return errors


def validate_config(config: JsWasteConfig) -> list[str]:
    """Validate the configuration and return a list of error messages.

    Returns an empty list if the configuration is valid.
    """
    errors: list[str] = []
    errors.extend(_validate_audit_config(config.audit))
    errors.extend(_validate_report_config(config.report))
    errors.extend(_validate_sentry_config(config.sentry))
    return errors
