"""Sentry SDK integration for jswaste.

Tracing, metrics and error capture are strictly OPT-IN: nothing is sent
unless ``sentry.enabled: true`` is set in ``.jswaste.yml`` or
``JSWASTE_SENTRY_ENABLED=true`` is exported.
"""

from __future__ import annotations

import logging
import re
import threading
from typing import TYPE_CHECKING, Any

import sentry_sdk
import sentry_sdk.metrics
from sentry_sdk.integrations.logging import LoggingIntegration

from jswaste import __version__

if TYPE_CHECKING:
    from types import TracebackType

    from jswaste.config import SentryConfig

logger = logging.getLogger(__name__)

_init_lock = threading.Lock()
_initialized: dict[str, bool] = {"value": False}

_PATH_HOME_RE = re.compile(r"/(?:home|Users)/[^/]+")


def init_sentry(config: SentryConfig) -> None:
    """Initialize Sentry SDK if enabled and configured.

    Idempotent and thread-safe; later calls are no-ops.
    """
    with _init_lock:
        if _initialized["value"]:
            return
        if not config.enabled:
            logger.debug("Sentry disabled (sentry.enabled is false)")
            return
        if not config.dsn:
            logger.warning("Sentry enabled but no DSN configured")
            return

        sentry_sdk.init(
            dsn=config.dsn,
            release=f"jswaste@{__version__}",
            environment=config.environment or "local",
            traces_sample_rate=config.traces_sample_rate,
            send_default_pii=False,
            server_name="",
            before_send=_before_send,
            in_app_include=["jswaste"],
            integrations=[
                LoggingIntegration(level=logging.INFO, event_level=logging.ERROR),
            ],
        )

        _initialized["value"] = True
        logger.info(
            "Sentry initialized (env=%s, tracing=%.2f)",
            config.environment or "local",
            config.traces_sample_rate,
        )


def is_sentry_enabled() -> bool:
    """Return whether Sentry has been successfully initialized."""
    return _initialized["value"]


def _scrub_path(path: str) -> str:
    """Replace user home directory in paths."""
    return _PATH_HOME_RE.sub("/~", path)


def _before_send(event: dict[str, Any], _hint: dict[str, Any]) -> dict[str, Any] | None:
    """Strip local variables and home directories from error events."""
    exception = event.get("exception")
    if isinstance(exception, dict):
        for value in exception.get("values", []):
            stacktrace = value.get("stacktrace")
            if not isinstance(stacktrace, dict):
                continue
            for frame in stacktrace.get("frames", []):
                # locals may hold page source text
                frame.pop("vars", None)
                for key in ("filename", "abs_path"):
                    if isinstance(frame.get(key), str):
                        frame[key] = _scrub_path(frame[key])

    event.pop("server_name", None)
    return event


def record_metric_count(name: str, value: int = 1, **attrs: str | int | float) -> None:
    """Emit a Sentry counter metric. No-op if Sentry is disabled."""
    if not _initialized["value"]:
        return
    sentry_sdk.metrics.count(name, float(value), attributes=dict(attrs) if attrs else None)


class _NoOpSpan:
    """Context manager that does nothing when Sentry is disabled."""

    def __enter__(self) -> _NoOpSpan:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        pass

    def set_data(self, key: str, value: Any) -> None:
        """No-op data setter."""


def start_span(op: str, description: str) -> Any:
    """Start a new Sentry span. Returns a context manager.

    Returns a no-op context manager if Sentry is disabled.
    """
    if not _initialized["value"]:
        return _NoOpSpan()
    return sentry_sdk.start_span(op=op, description=description)
