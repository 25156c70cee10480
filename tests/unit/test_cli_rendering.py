"""Unit tests for CLI output and error rendering helpers."""

from __future__ import annotations

from pathlib import Path

import pytest
import typer

from mdtidy.cli_rendering import echo_document_row, echo_rule_report, exit_with_command_error
from mdtidy.errors import NormalizationStageError
from mdtidy.text import MarkdownNormalizer


def test_exit_with_command_error_renders_stage_error_with_hint(
    capsys: pytest.CaptureFixture[str],
) -> None:
    """Renderer should print stage diagnostics and hint before exiting with code 1."""

    error = NormalizationStageError(
        stage="read",
        detail="Input document not found: `posts/missing.md`.",
        hint="Verify the input path exists.",
    )

    with pytest.raises(typer.Exit) as exc_info:
        exit_with_command_error("clean", error)

    captured = capsys.readouterr()
    assert exc_info.value.exit_code == 1
    assert "clean failed at stage `read`" in captured.err
    assert "Hint: Verify the input path exists." in captured.err


def test_exit_with_command_error_renders_non_stage_fallback(
    capsys: pytest.CaptureFixture[str],
) -> None:
    """Renderer should print fallback exception text for non-stage failures."""

    with pytest.raises(typer.Exit) as exc_info:
        exit_with_command_error("clean-dir", RuntimeError("unexpected failure"))

    captured = capsys.readouterr()
    assert exc_info.value.exit_code == 1
    assert "clean-dir failed: unexpected failure" in captured.err


def test_echo_rule_report_prints_counts_in_rule_order(
    capsys: pytest.CaptureFixture[str],
) -> None:
    """Report rendering should list every rule followed by the total."""

    report = MarkdownNormalizer().normalize_with_report("word**bold**")

    echo_rule_report(report)

    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "separate-headings: 0"
    assert "space-stuck-bold: 1" in lines
    assert lines[-1] == "Total substitutions: 1"
    assert len(lines) == 7


def test_echo_document_row_marks_unchanged_documents(
    capsys: pytest.CaptureFixture[str],
) -> None:
    """Directory rows should say whether a document changed."""

    report = MarkdownNormalizer().normalize_with_report("Already clean.")

    echo_document_row(Path("posts/clean.md"), report)

    assert capsys.readouterr().out == "posts/clean.md: unchanged (0)\n"


@pytest.mark.parametrize("stage", ["config", "read", "write"])
def test_stage_error_headline_names_command_and_stage(stage: str) -> None:
    """Stage errors should summarize the failing command, stage, and detail."""

    error = NormalizationStageError(stage=stage, detail="Output directory is read-only.")

    assert error.headline("clean-dir") == (
        f"clean-dir failed at stage `{stage}`: Output directory is read-only."
    )
    assert str(error) == "Output directory is read-only."
    assert error.hint is None
