"""Document storage abstraction.

Responsibilities:
- Read and write Markdown documents relative to a root directory.
- Enumerate documents deterministically for directory runs.
- Map filesystem and decoding failures to stage-scoped errors.
"""

from __future__ import annotations

from pathlib import Path

from ..errors import NormalizationStageError


class DocumentStore:
    """Filesystem-backed Markdown document store."""

    def __init__(self, root: Path, encoding: str = "utf-8") -> None:
        """Initialize the store with a root directory and text encoding."""

        self.root = root
        self.encoding = encoding

    def iter_documents(self, pattern: str) -> list[Path]:
        """Return sorted relative paths of files under root matching `pattern`."""

        if not self.root.is_dir():
            raise NormalizationStageError(
                stage="read",
                detail=f"Input directory not found: `{self.root}`.",
                hint="Pass an existing directory of Markdown documents.",
            )
        return sorted(
            path.relative_to(self.root)
            for path in self.root.rglob(pattern)
            if path.is_file()
        )

    def load_text(self, relative_path: Path) -> str:
        """Load one document from the store."""

        path = self.root / relative_path
        try:
            return path.read_text(encoding=self.encoding)
        except FileNotFoundError as exc:
            raise NormalizationStageError(
                stage="read",
                detail=f"Input document not found: `{path}`.",
                hint="Verify the input path exists.",
            ) from exc
        except UnicodeDecodeError as exc:
            raise NormalizationStageError(
                stage="read",
                detail=f"Cannot decode `{path}` as {self.encoding}.",
                hint="Pass the correct codec via `--encoding`.",
            ) from exc
        except OSError as exc:
            raise NormalizationStageError(
                stage="read",
                detail=f"Failed to read `{path}`: {exc}",
                hint="Verify the input path is a readable file.",
            ) from exc

    def save_text(self, relative_path: Path, content: str) -> Path:
        """Save document content and return its final path."""

        path = self.root / relative_path
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding=self.encoding)
        except OSError as exc:
            raise NormalizationStageError(
                stage="write",
                detail=f"Failed to write `{path}`: {exc}",
                hint="Verify the output location is writable.",
            ) from exc
        return path
