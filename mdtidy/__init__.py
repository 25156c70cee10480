"""Top-level package for mdtidy.

This package cleans Markdown produced by scraping or content imports so it
renders correctly. The main entry point is `normalize_markdown`; use
`MarkdownNormalizer` for custom rule sequences or per-rule diagnostics.
"""

from .text.normalizer import MarkdownNormalizer, NormalizationReport, normalize_markdown

__all__ = ["MarkdownNormalizer", "NormalizationReport", "normalize_markdown", "__version__"]

__version__ = "0.1.0"
