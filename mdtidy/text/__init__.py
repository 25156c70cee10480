"""Markdown cleanup components.

This package provides the deterministic rewrite rules and the normalizer that
runs them before Markdown is handed to a renderer.
"""

from .normalizer import (
    MarkdownNormalizer,
    NormalizationReport,
    RuleReport,
    normalize_markdown,
)
from .rules import (
    CollapseInlineWhitespace,
    CollapseTripleAsterisks,
    SeparateHeadings,
    SpaceStuckBold,
    TrimBoldDelimiterSpaces,
    TrimSpaceBeforePunctuation,
    default_rules,
)

__all__ = [
    "MarkdownNormalizer",
    "NormalizationReport",
    "RuleReport",
    "normalize_markdown",
    "default_rules",
    "SeparateHeadings",
    "CollapseTripleAsterisks",
    "TrimBoldDelimiterSpaces",
    "SpaceStuckBold",
    "TrimSpaceBeforePunctuation",
    "CollapseInlineWhitespace",
]
