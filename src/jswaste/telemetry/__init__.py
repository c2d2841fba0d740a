"""Telemetry integrations for jswaste."""

from jswaste.telemetry.sentry_integration import (
    init_sentry,
    is_sentry_enabled,
    record_metric_count,
    start_span,
)

__all__ = [
    "init_sentry",
    "is_sentry_enabled",
    "record_metric_count",
    "start_span",
]
