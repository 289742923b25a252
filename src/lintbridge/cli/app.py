# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI application entry point wiring the publish and preview commands."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Annotated

import typer

from ..config import Config, ConfigError, apply_overrides, load_config
from ..core.errors import LintBridgeError, ReportError
from ..core.serialization import to_wire
from ..discovery import CommandDiagnosticSource, GitRevisionProvider, StaticDiagnosticSource
from ..interfaces import DiagnosticSource
from ..parsers.clippy import MappingStats
from ..pipeline import PipelineResult, ToolIdentity, prepare_run, run_pipeline
from ..reporting import InsightsEndpoint, InsightsPublisher
from .shared import EXIT_USAGE, CLIError, CLILogger, build_cli_logger

app = typer.Typer(
    name="lintbridge",
    help="Publish linter diagnostics as Bitbucket Code Insights annotations.",
    no_args_is_help=True,
    add_completion=False,
)

RootOption = Annotated[
    Path,
    typer.Option("--root", "-r", help="Project root to lint.", file_okay=False, resolve_path=True),
]
NoEmojiOption = Annotated[bool, typer.Option("--no-emoji", help="Disable emoji in output.")]
NoColorOption = Annotated[bool, typer.Option("--no-color", help="Disable coloured output.")]
VerboseOption = Annotated[bool, typer.Option("--verbose", "-v", help="Report skipped diagnostics.")]
DebugOption = Annotated[bool, typer.Option("--debug", help="Print request and command details.")]


def _load(root: Path, overrides: dict[str, dict[str, object]]) -> Config:
    """Return the configuration for ``root`` with CLI ``overrides`` applied.

    Raises:
        CLIError: When the configuration is invalid.
    """

    try:
        return apply_overrides(load_config(root), overrides)
    except ConfigError as exc:
        raise CLIError(str(exc), exit_code=EXIT_USAGE) from exc


def _logger_for(config: Config, *, debug: bool) -> CLILogger:
    output = config.output
    return build_cli_logger(emoji=output.emoji, color=output.color, verbose=output.verbose, debug=debug)


def _report_stats(stats: MappingStats, logger: CLILogger) -> None:
    logger.info(
        f"Read {stats.total} line(s): {stats.emitted} annotation(s), "
        f"{stats.ignored} non-diagnostic record(s), {stats.malformed} malformed, {stats.invalid} invalid"
    )
    if stats.skipped and logger.verbose:
        logger.warn(f"Skipped {stats.skipped} diagnostic line(s) that could not be converted")


def _identity(config: Config) -> ToolIdentity:
    return ToolIdentity(title=config.tool.title, logo_url=config.tool.logo_url)


def _command_source(config: Config, root: Path, logger: CLILogger) -> CommandDiagnosticSource:
    source = CommandDiagnosticSource(config.tool.command, cwd=root, timeout=config.tool.timeout)
    logger.debug(f"command=\"{' '.join(source.command)}\" cwd={root}")
    return source


def _exit_on(exc: CLIError, logger: CLILogger) -> typer.Exit:
    logger.fail(str(exc))
    return typer.Exit(code=exc.exit_code)


@app.command("publish")
def publish(
    url: Annotated[str | None, typer.Option("--url", "-u", help="Bitbucket Server base URL.")] = None,
    project: Annotated[str | None, typer.Option("--project", "-p", help="Bitbucket project key.")] = None,
    slug: Annotated[str | None, typer.Option("--slug", "-s", help="Bitbucket repository slug.")] = None,
    user: Annotated[
        str | None,
        typer.Option("--user", envvar="LINTBRIDGE_USERNAME", help="User for HTTP basic auth."),
    ] = None,
    password: Annotated[
        str | None,
        typer.Option("--password", envvar="LINTBRIDGE_PASSWORD", help="Password or token for HTTP basic auth."),
    ] = None,
    report_key: Annotated[str | None, typer.Option("--report-key", help="Code Insights report key.")] = None,
    root: RootOption = Path("."),
    no_emoji: NoEmojiOption = False,
    no_color: NoColorOption = False,
    verbose: VerboseOption = False,
    debug: DebugOption = False,
) -> None:
    """Run the linter and publish its findings against the current commit."""

    overrides: dict[str, dict[str, object]] = {
        "server": {"url": url, "project": project, "slug": slug, "username": user, "password": password},
        "tool": {"report_key": report_key},
        "output": {
            "emoji": False if no_emoji else None,
            "color": False if no_color else None,
            "verbose": True if verbose else None,
        },
    }
    bootstrap = build_cli_logger(emoji=not no_emoji, color=not no_color)
    try:
        config = _load(root, overrides)
    except CLIError as exc:
        raise _exit_on(exc, bootstrap) from exc
    logger = _logger_for(config, debug=debug)

    missing = config.server.missing_fields()
    if missing:
        error = CLIError(f"Missing server settings: {', '.join(missing)}", exit_code=EXIT_USAGE)
        raise _exit_on(error, logger)

    server = config.server
    endpoint = InsightsEndpoint(
        base_url=server.url or "",
        project=server.project or "",
        slug=server.slug or "",
        report_key=config.tool.report_key,
    )
    source = _command_source(config, root, logger)
    try:
        with InsightsPublisher.create(
            endpoint,
            username=server.username or "",
            password=server.password or "",
            timeout=server.timeout,
        ) as publisher:
            result = run_pipeline(source, GitRevisionProvider(root), publisher, _identity(config))
    except (LintBridgeError, ReportError) as exc:
        raise _exit_on(CLIError(str(exc)), logger) from exc

    _report_published(result, logger)


def _report_published(result: PipelineResult, logger: CLILogger) -> None:
    logger.debug(f"url={result.report_receipt.url} status={result.report_receipt.status_code}")
    logger.debug(f"url={result.annotations_receipt.url} status={result.annotations_receipt.status_code}")
    _report_stats(result.prepared.stats, logger)
    logger.ok(f"Published {len(result.annotations)} annotation(s) for commit {result.revision[:12]}")


@app.command("preview")
def preview(
    input_file: Annotated[
        Path | None,
        typer.Option(
            "--input",
            "-i",
            help="Read captured linter output instead of running the linter.",
            exists=True,
            dir_okay=False,
            resolve_path=True,
        ),
    ] = None,
    root: RootOption = Path("."),
    no_emoji: NoEmojiOption = False,
    no_color: NoColorOption = False,
    verbose: VerboseOption = False,
    debug: DebugOption = False,
) -> None:
    """Print the report and annotation bodies that ``publish`` would send."""

    overrides: dict[str, dict[str, object]] = {
        "output": {
            "emoji": False if no_emoji else None,
            "color": False if no_color else None,
            "verbose": True if verbose else None,
        },
    }
    bootstrap = build_cli_logger(emoji=not no_emoji, color=not no_color)
    try:
        config = _load(root, overrides)
    except CLIError as exc:
        raise _exit_on(exc, bootstrap) from exc
    logger = _logger_for(config, debug=debug)

    try:
        source: DiagnosticSource = (
            StaticDiagnosticSource.from_file(input_file)
            if input_file is not None
            else _command_source(config, root, logger)
        )
        prepared = prepare_run(source, _identity(config))
    except (LintBridgeError, ReportError) as exc:
        raise _exit_on(CLIError(str(exc)), logger) from exc

    payload = {"report": to_wire(prepared.report), "annotations": to_wire(prepared.annotations)}
    logger.echo(json.dumps(payload, indent=2))
    _report_stats(prepared.stats, logger)


__all__ = ["app", "preview", "publish"]
