"""jswaste CLI — top-level command group."""

from __future__ import annotations

import asyncio
import json
import logging
from dataclasses import asdict
from pathlib import Path
from typing import Any

import click
import yaml
from rich.console import Console
from rich.logging import RichHandler

from jswaste import __version__
from jswaste.agents.analyzers.unused_javascript import UnusedJavaScriptAudit, UnusedJavaScriptTask
from jswaste.agents.base import TaskStatus
from jswaste.agents.reporters.json_reporter import JSONReporter
from jswaste.agents.reporters.terminal import reporter
from jswaste.config import CONFIG_FILENAME, JsWasteConfig, load_config, validate_config
from jswaste.parsing.artifacts import ArtifactsError, load_artifacts
from jswaste.telemetry import init_sentry

logger = logging.getLogger(__name__)
console = Console()

# Masking thresholds
_MIN_MASKED_VALUE_LENGTH = 8

_SENSITIVE_KEYS = frozenset({"dsn"})


def _configure_logging(*, verbose: bool) -> None:
    """Send debug logs of the ``jswaste`` package to stderr when verbose."""
    if not verbose:
        return
    package_logger = logging.getLogger("jswaste")
    package_logger.setLevel(logging.DEBUG)
    if not any(isinstance(h, RichHandler) for h in package_logger.handlers):
        package_logger.addHandler(
            RichHandler(console=Console(stderr=True), show_path=False, rich_tracebacks=True)
        )


def _config_to_dict(config: JsWasteConfig) -> dict[str, Any]:
    """Convert JsWasteConfig to dictionary for display."""
    result = asdict(config)
    # Remove the raw field as it's redundant
    result.pop("raw", None)
    return result


def _mask_sensitive_values(config_dict: dict[str, Any]) -> dict[str, Any]:
    """Recursively mask sensitive values in a configuration dict."""
    result: dict[str, Any] = {}
    for key, value in config_dict.items():
        if key in _SENSITIVE_KEYS and isinstance(value, str) and value:
            if len(value) > _MIN_MASKED_VALUE_LENGTH:
                result[key] = f"{value[:4]}...{value[-4:]}"
            else:
                result[key] = "***"
        elif isinstance(value, dict):
            result[key] = _mask_sensitive_values(value)
        else:
            result[key] = value
    return result


def _load_config_or_abort(path: str) -> JsWasteConfig:
    try:
        return load_config(path)
    except (OSError, yaml.YAMLError, ValueError) as e:
        reporter.print_error(f"Failed to load configuration: {e}")
        raise click.Abort from e


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
@click.version_option(version=__version__, prog_name="jswaste")
@click.pass_context
def cli(ctx: click.Context, *, verbose: bool) -> None:
    """jswaste — find JavaScript that was downloaded but never executed."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    _configure_logging(verbose=verbose)


@cli.command()
@click.argument(
    "artifacts_path",
    type=click.Path(exists=True, dir_okay=False, resolve_path=True, path_type=Path),
)
@click.option(
    "--path",
    default=".",
    type=click.Path(exists=True, file_okay=False, resolve_path=True),
    help=f"Directory containing {CONFIG_FILENAME}.",
)
@click.option("--json-output", "as_json", is_flag=True, help="Output JSON instead of a table.")
@click.option(
    "--output",
    "output_path",
    default=None,
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write the JSON report to this file.",
)
def audit(artifacts_path: Path, path: str, *, as_json: bool, output_path: Path | None) -> None:
    """Estimate wasted bytes from unused JavaScript in a page load.

    ARTIFACTS_PATH is a JSON file with the page's coverage samples
    (JsUsage), networkRecords, ScriptElements and SourceMaps.

    Example:
      jswaste audit artifacts.json
      jswaste audit artifacts.json --json-output
      jswaste audit artifacts.json --output report.json
    """
    config = _load_config_or_abort(path)
    errors = validate_config(config)
    if errors:
        for error in errors:
            reporter.print_error(error)
        raise click.Abort

    init_sentry(config.sentry)

    try:
        artifacts = load_artifacts(artifacts_path)
    except ArtifactsError as e:
        reporter.print_error(str(e))
        raise click.Abort from e

    audit_agent = UnusedJavaScriptAudit(
        ignore_threshold_bytes=config.audit.ignore_threshold_bytes,
        min_file_unused_bytes=config.audit.min_file_unused_bytes,
        max_breakdown_files=config.audit.max_breakdown_files,
    )
    task = UnusedJavaScriptTask(target=str(artifacts_path), artifacts=artifacts)
    output = asyncio.run(audit_agent.run(task))
    if output.status != TaskStatus.COMPLETED:
        for error in output.errors:
            reporter.print_error(error)
        raise click.Abort

    result = output.result["audit"]
    json_reporter = JSONReporter()
    output_path = output_path or (
        Path(config.report.output_path) if config.report.output_path else None
    )
    if output_path is not None:
        json_reporter.generate(output_path, result=result, audit=audit_agent)
        if not as_json:
            reporter.print_info(f"Report written to {output_path}")

    if as_json or config.report.format == "json":
        click.echo(json_reporter.generate_string(result=result, audit=audit_agent))
        return

    reporter.print_header(audit_agent.title)
    reporter.print_waste_findings(result)


@cli.group("config")
def config_group() -> None:
    """Inspect the .jswaste.yml configuration."""


@config_group.command("show")
@click.option(
    "--path",
    default=".",
    type=click.Path(exists=True, file_okay=False, resolve_path=True),
    help="Directory containing the configuration.",
)
@click.option(
    "--json-output",
    "as_json",
    is_flag=True,
    help="Output as JSON instead of YAML.",
)
@click.option(
    "--no-mask",
    is_flag=True,
    help="Show sensitive values unmasked (use with caution).",
)
def config_show(path: str, *, as_json: bool, no_mask: bool) -> None:
    """Display resolved configuration with masked sensitive values.

    Example:
      jswaste config show
      jswaste config show --json-output
    """
    config = _load_config_or_abort(path)

    config_dict = _config_to_dict(config)
    if not no_mask:
        config_dict = _mask_sensitive_values(config_dict)

    if as_json:
        click.echo(json.dumps(config_dict, indent=2))
    else:
        console.print()
        console.print("[bold cyan]Configuration:[/bold cyan]")
        console.print()
        click.echo(yaml.safe_dump(config_dict, sort_keys=False, default_flow_style=False))


@config_group.command("validate")
@click.option(
    "--path",
    default=".",
    type=click.Path(exists=True, file_okay=False, resolve_path=True),
    help="Directory containing the configuration.",
)
def config_validate(path: str) -> None:
    """Validate `.jswaste.yml` configuration.

    Example:
      jswaste config validate
    """
    config = _load_config_or_abort(path)

    errors = validate_config(config)
    if not errors:
        reporter.print_success("Configuration is valid!")
        return

    reporter.print_error(f"Found {len(errors)} configuration error(s):")
    console.print()
    for idx, error in enumerate(errors, start=1):
        console.print(f"  {idx}. [red]{error}[/red]")

    console.print()
    console.print(
        f"[dim]Fix these errors in {CONFIG_FILENAME} and run 'jswaste config validate' again.[/dim]"
    )
    raise click.Abort


def main() -> None:
    """Console script entry point."""
    cli()
