"""Command-line interface for mdtidy.

Responsibilities:
- Expose user-facing commands for Markdown normalization.
- Convert CLI arguments, YAML config, and environment values into `NormalizerConfig`.

Key public functions:
- `app`: Typer application instance.
- `main`: invoke the Typer application.
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from .cli_rendering import (
    echo_directory_summary,
    echo_document_row,
    echo_rule_report,
    exit_with_command_error,
)
from .config import ConfigLoader, NormalizerConfig
from .errors import NormalizationStageError
from .io.storage import DocumentStore
from .telemetry.logger import RunLogger
from .text.normalizer import MarkdownNormalizer, NormalizationReport

app = typer.Typer(
    name="mdtidy",
    no_args_is_help=True,
    help="Normalize scraped or imported Markdown before rendering.",
)

_STDIN_MARKER = "-"


def _load_base_config(config_file: Path | None) -> NormalizerConfig:
    """Load YAML config when requested, else environment config, mapping failures to stage errors."""

    if config_file is None:
        try:
            return ConfigLoader.from_env()
        except ValueError as exc:
            raise NormalizationStageError(
                stage="config",
                detail=f"Invalid environment configuration: {exc}",
                hint="Fix or unset the offending `MDTIDY_*` variable.",
            ) from exc

    try:
        return ConfigLoader.from_yaml(config_file)
    except FileNotFoundError as exc:
        raise NormalizationStageError(
            stage="config",
            detail=f"Config file not found: `{config_file}`.",
            hint="Provide an existing path via `--config <path.yaml>`.",
        ) from exc
    except ValueError as exc:
        raise NormalizationStageError(
            stage="config",
            detail=f"Invalid config file `{config_file}`: {exc}",
            hint="Fix config schema/values and rerun.",
        ) from exc
    except Exception as exc:
        raise NormalizationStageError(
            stage="config",
            detail=f"Failed to load config file `{config_file}`: {exc}",
            hint="Verify YAML syntax and file permissions.",
        ) from exc


def _resolve_command_config(config_file: Path | None, **overrides: object) -> NormalizerConfig:
    """Resolve effective command config from YAML/env defaults and explicit CLI overrides."""

    base_config = _load_base_config(config_file)
    try:
        return base_config.with_overrides(**overrides)
    except ValueError as exc:
        raise NormalizationStageError(
            stage="config",
            detail=str(exc),
            hint="Check command options and config values.",
        ) from exc


def _is_stdin(path: Path | None) -> bool:
    """Return whether a path argument selects standard input."""

    return path is None or str(path) == _STDIN_MARKER


def _normalize_logged(
    normalizer: MarkdownNormalizer, text: str, run_logger: RunLogger, **context: object
) -> NormalizationReport:
    """Normalize one document and emit phase events for the rules that fired."""

    run_logger.log_stage_start("normalize", **context)
    report = normalizer.normalize_with_report(text)
    for rule_report in report.rule_reports:
        if rule_report.substitutions:
            run_logger.log_rule_applied(rule_report.name, rule_report.substitutions)
    run_logger.log_stage_complete(
        "normalize", substitutions=report.total_substitutions, **context
    )
    return report


def _failure_stage(exc: Exception, default: str) -> str:
    """Return the stage name to log for a failed command."""

    if isinstance(exc, NormalizationStageError):
        return exc.stage
    return default


@app.command("clean")
def clean_command(
    input_path: Annotated[
        Path | None,
        typer.Argument(help="Markdown document to normalize; omit or pass `-` for stdin."),
    ] = None,
    out: Annotated[
        Path | None,
        typer.Option("--out", help="Output document path; stdout when omitted."),
    ] = None,
    config_file: Annotated[
        Path | None,
        typer.Option("--config", help="Path to YAML config file with command defaults."),
    ] = None,
    encoding: Annotated[
        str | None, typer.Option("--encoding", help="Text encoding for input and output.")
    ] = None,
    report: Annotated[
        bool | None,
        typer.Option("--report/--no-report", help="Print per-rule substitution counts."),
    ] = None,
    log_level: Annotated[
        str | None, typer.Option("--log-level", help="Minimum level for phase logs.")
    ] = None,
) -> None:
    """Normalize a single Markdown document."""

    try:
        config = _resolve_command_config(
            config_file,
            input_path=input_path,
            output_path=out,
            encoding=encoding,
            report=report,
            log_level=log_level,
        )
    except Exception as exc:
        exit_with_command_error("clean", exc)

    run_logger = RunLogger(level=config.log_level)
    try:
        run_logger.log_stage_start("read")
        if _is_stdin(config.input_path):
            text = typer.get_text_stream("stdin", encoding=config.encoding).read()
        else:
            source = DocumentStore(config.input_path.parent, encoding=config.encoding)
            text = source.load_text(Path(config.input_path.name))
        run_logger.log_stage_complete("read", chars=len(text))

        normalization = _normalize_logged(MarkdownNormalizer(), text, run_logger)

        run_logger.log_stage_start("write")
        if config.output_path is None:
            typer.echo(normalization.cleaned_text, nl=False)
        else:
            target = DocumentStore(config.output_path.parent, encoding=config.encoding)
            target.save_text(Path(config.output_path.name), normalization.cleaned_text)
        run_logger.log_stage_complete("write")
    except Exception as exc:
        run_logger.log_stage_failure(_failure_stage(exc, "clean"), type(exc).__name__)
        exit_with_command_error("clean", exc)

    if config.report:
        echo_rule_report(normalization, err=config.output_path is None)


@app.command("clean-dir")
def clean_dir_command(
    input_dir: Annotated[
        Path | None,
        typer.Argument(help="Directory of Markdown documents. Required unless configured."),
    ] = None,
    out: Annotated[
        Path | None,
        typer.Option("--out", help="Output directory mirroring the input layout."),
    ] = None,
    pattern: Annotated[
        str | None, typer.Option("--pattern", help="Glob selecting documents, e.g. `*.md`.")
    ] = None,
    config_file: Annotated[
        Path | None,
        typer.Option("--config", help="Path to YAML config file with command defaults."),
    ] = None,
    encoding: Annotated[
        str | None, typer.Option("--encoding", help="Text encoding for input and output.")
    ] = None,
    log_level: Annotated[
        str | None, typer.Option("--log-level", help="Minimum level for phase logs.")
    ] = None,
) -> None:
    """Normalize every matching document in a directory tree."""

    try:
        config = _resolve_command_config(
            config_file,
            input_path=input_dir,
            output_path=out,
            glob_pattern=pattern,
            encoding=encoding,
            log_level=log_level,
        )
        if config.input_path is None:
            raise NormalizationStageError(
                stage="config",
                detail="Input directory is required.",
                hint="Pass `<input_dir>` or set `input_path` in `--config`.",
            )
        if config.output_path is None:
            raise NormalizationStageError(
                stage="config",
                detail="Output directory is required.",
                hint="Pass `--out <dir>` or set `output_path` in `--config`.",
            )
    except Exception as exc:
        exit_with_command_error("clean-dir", exc)

    run_logger = RunLogger(level=config.log_level)
    normalizer = MarkdownNormalizer()
    source = DocumentStore(config.input_path, encoding=config.encoding)
    target = DocumentStore(config.output_path, encoding=config.encoding)
    changed_count = 0
    try:
        documents = source.iter_documents(config.glob_pattern)
        for relative_path in documents:
            normalization = _normalize_logged(
                normalizer,
                source.load_text(relative_path),
                run_logger,
                document=relative_path.as_posix(),
            )
            target.save_text(relative_path, normalization.cleaned_text)
            if normalization.changed:
                changed_count += 1
            echo_document_row(relative_path, normalization)
    except Exception as exc:
        run_logger.log_stage_failure(_failure_stage(exc, "clean-dir"), type(exc).__name__)
        exit_with_command_error("clean-dir", exc)

    echo_directory_summary(len(documents), changed_count, config.output_path)


@app.command("rules")
def rules_command() -> None:
    """List normalization rules in execution order."""

    for position, name in enumerate(MarkdownNormalizer().rule_names(), start=1):
        typer.echo(f"{position}. {name}")


def main() -> None:
    """CLI entrypoint for console scripts."""
    app()


if __name__ == "__main__":
    main()
