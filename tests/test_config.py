"""Tests for config.py — .jswaste.yml parsing and validation."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml

from jswaste.config import (
    AuditConfig,
    JsWasteConfig,
    ReportConfig,
    SentryConfig,
    _resolve_dict,
    _resolve_env_vars,
    load_config,
    validate_config,
)

if TYPE_CHECKING:
    import pytest


def _write_config(root: Path, data: dict[str, Any]) -> None:
    """Write .jswaste.yml with given data."""
    (root / ".jswaste.yml").write_text(yaml.dump(data), encoding="utf-8")


# ── _resolve_env_vars / _resolve_dict ─────────────────────────────────


class TestResolveEnvVars:
    def test_resolves_existing_var(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MY_VAR", "hello")
        assert _resolve_env_vars("${MY_VAR}") == "hello"

    def test_missing_var_returns_empty(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("MISSING_VAR", raising=False)
        assert _resolve_env_vars("${MISSING_VAR}") == ""

    def test_nested_dicts_and_lists(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("INNER", "resolved")
        result = _resolve_dict({"outer": {"inner": "${INNER}"}, "items": ["${INNER}", 1]})

        assert result["outer"]["inner"] == "resolved"
        assert result["items"] == ["resolved", 1]


# ── load_config ───────────────────────────────────────────────────────


class TestLoadConfig:
    def test_defaults_without_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("JSWASTE_SENTRY_ENABLED", raising=False)
        monkeypatch.delenv("JSWASTE_SENTRY_DSN", raising=False)
        config = load_config(tmp_path)

        assert config.root == str(tmp_path.resolve())
        assert config.audit == AuditConfig()
        assert config.audit.ignore_threshold_bytes == 2048
        assert config.audit.min_file_unused_bytes == 1024
        assert config.audit.max_breakdown_files == 5
        assert config.report.format == "terminal"
        assert config.sentry.enabled is False

    def test_reads_sections(self, tmp_path: Path) -> None:
        _write_config(
            tmp_path,
            {
                "audit": {"ignore_threshold_bytes": 4096, "max_breakdown_files": 3},
                "report": {"format": "json", "output_path": "out/report.json"},
            },
        )
        config = load_config(tmp_path)

        assert config.audit.ignore_threshold_bytes == 4096
        assert config.audit.min_file_unused_bytes == 1024
        assert config.audit.max_breakdown_files == 3
        assert config.report == ReportConfig(format="json", output_path="out/report.json")

    def test_sentry_dsn_from_env_placeholder(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("MY_DSN", "https://key@sentry.example.com/1")
        _write_config(tmp_path, {"sentry": {"enabled": True, "dsn": "${MY_DSN}"}})

        config = load_config(tmp_path)

        assert config.sentry.enabled is True
        assert config.sentry.dsn == "https://key@sentry.example.com/1"

    def test_sentry_enabled_from_env(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("JSWASTE_SENTRY_ENABLED", "yes")
        monkeypatch.setenv("JSWASTE_SENTRY_DSN", "https://key@sentry.example.com/2")

        config = load_config(tmp_path)

        assert config.sentry.enabled is True
        assert config.sentry.dsn == "https://key@sentry.example.com/2"

    def test_non_mapping_section_falls_back_to_defaults(self, tmp_path: Path) -> None:
        _write_config(tmp_path, {"audit": ["not", "a", "mapping"]})
        assert load_config(tmp_path).audit == AuditConfig()

    def test_non_mapping_document_is_ignored(self, tmp_path: Path) -> None:
        (tmp_path / ".jswaste.yml").write_text("- just\n- a list\n", encoding="utf-8")
        assert load_config(tmp_path).raw == {}


# ── validate_config ───────────────────────────────────────────────────


class TestValidateConfig:
    def test_defaults_are_valid(self) -> None:
        assert validate_config(JsWasteConfig(root=".")) == []

    def test_negative_thresholds(self) -> None:
        config = JsWasteConfig(
            root=".",
            audit=AuditConfig(ignore_threshold_bytes=-1, min_file_unused_bytes=-5),
        )
        errors = validate_config(config)

        assert len(errors) == 2
        assert "audit.ignore_threshold_bytes" in errors[0]
        assert "audit.min_file_unused_bytes" in errors[1]

    def test_max_breakdown_files_must_be_positive(self) -> None:
        config = JsWasteConfig(root=".", audit=AuditConfig(max_breakdown_files=0))
        assert validate_config(config) == [
            "audit.max_breakdown_files must be at least 1 (got: 0)"
        ]

    def test_unknown_report_format(self) -> None:
        config = JsWasteConfig(root=".", report=ReportConfig(format="html"))
        errors = validate_config(config)

        assert len(errors) == 1
        assert "report.format" in errors[0]

    def test_sentry_requires_dsn_and_valid_rate(self) -> None:
        config = JsWasteConfig(
            root=".", sentry=SentryConfig(enabled=True, traces_sample_rate=1.5)
        )
        errors = validate_config(config)

        assert "sentry.dsn is required when sentry.enabled is true" in errors
        assert any("traces_sample_rate" in error for error in errors)
