"""CLI output and error rendering helpers.

This module centralizes user-facing CLI presentation for command diagnostics,
per-rule normalization reports, and directory run summaries.
"""

from __future__ import annotations

from pathlib import Path
from typing import NoReturn

import typer

from .errors import NormalizationStageError
from .text.normalizer import NormalizationReport


def exit_with_command_error(command_name: str, exc: Exception) -> NoReturn:
    """Print concise diagnostics for command failures and exit with code 1."""

    if isinstance(exc, NormalizationStageError):
        typer.secho(
            exc.headline(command_name),
            fg=typer.colors.RED,
            err=True,
        )
        if exc.hint:
            typer.secho(f"Hint: {exc.hint}", fg=typer.colors.YELLOW, err=True)
    else:
        typer.secho(f"{command_name} failed: {exc}", fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1) from exc


def echo_rule_report(report: NormalizationReport, err: bool = False) -> None:
    """Print per-rule substitution counts in execution order."""

    for rule_report in report.rule_reports:
        typer.echo(f"{rule_report.name}: {rule_report.substitutions}", err=err)
    typer.echo(f"Total substitutions: {report.total_substitutions}", err=err)


def echo_document_row(relative_path: Path, report: NormalizationReport) -> None:
    """Print one directory-run row for a normalized document."""

    status = "changed" if report.changed else "unchanged"
    typer.echo(f"{relative_path.as_posix()}: {status} ({report.total_substitutions})")


def echo_directory_summary(document_count: int, changed_count: int, output_dir: Path) -> None:
    """Print directory-run totals."""

    typer.echo(f"Documents: {document_count}")
    typer.echo(f"Changed: {changed_count}")
    typer.echo(f"Output: {output_dir}")
