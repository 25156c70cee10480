"""Domain exceptions for CLI diagnostics."""

from __future__ import annotations

from typing import Literal

Stage = Literal["config", "read", "write"]


class NormalizationStageError(RuntimeError):
    """Raised when loading config, reading a document, or writing output fails.

    The Markdown rules themselves never raise; only the I/O and configuration
    around them can fail, so those are the only stages.
    """

    def __init__(self, *, stage: Stage, detail: str, hint: str | None = None) -> None:
        super().__init__(detail)
        self.stage: Stage = stage
        self.detail = detail
        self.hint = hint

    def headline(self, command_name: str) -> str:
        """Return the one-line failure summary shown for `command_name`."""

        return f"{command_name} failed at stage `{self.stage}`: {self.detail}"
