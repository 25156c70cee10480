"""Markdown normalization stage.

Responsibilities:
- Run the ordered rewrite rules over raw Markdown before it reaches a renderer.
- Degrade absent input to an empty document instead of failing.

Key public entry points:
- `MarkdownNormalizer`: configurable rule pipeline with optional diagnostics.
- `normalize_markdown`: one-call helper using the default rule sequence.
"""

from __future__ import annotations

from dataclasses import dataclass

from .rules import MarkdownRule, default_rules


@dataclass(frozen=True, slots=True)
class RuleReport:
    """Substitution count produced by a single rule during one call."""

    name: str
    substitutions: int


@dataclass(frozen=True, slots=True)
class NormalizationReport:
    """Structured output of one normalization call."""

    source_text: str
    cleaned_text: str
    rule_reports: tuple[RuleReport, ...]

    @property
    def total_substitutions(self) -> int:
        """Return the number of substitutions applied across all rules."""

        return sum(report.substitutions for report in self.rule_reports)

    @property
    def changed(self) -> bool:
        """Return whether normalization altered the document."""

        return self.cleaned_text != self.source_text


class MarkdownNormalizer:
    """Apply a sequence of Markdown rewrite rules in a fixed order."""

    def __init__(self, rules: list[MarkdownRule] | None = None) -> None:
        """Initialize with custom rules or the default rule sequence."""

        self.rules = rules if rules is not None else default_rules()

    def rule_names(self) -> list[str]:
        """Return configured rule names in execution order."""

        return [rule.name for rule in self.rules]

    def normalize_with_report(self, text: str | None) -> NormalizationReport:
        """Apply all configured rules and return cleaned text with diagnostics."""

        source = text or ""
        current = source
        reports: list[RuleReport] = []
        for rule in self.rules:
            current, substitutions = rule.apply(current)
            reports.append(RuleReport(name=rule.name, substitutions=substitutions))
        return NormalizationReport(
            source_text=source,
            cleaned_text=current,
            rule_reports=tuple(reports),
        )

    def normalize(self, text: str | None) -> str:
        """Return normalized Markdown; `None` or empty input yields `""`."""

        if not text:
            return ""
        return self.normalize_with_report(text).cleaned_text


_DEFAULT_NORMALIZER = MarkdownNormalizer()


def normalize_markdown(text: str | None) -> str:
    """Normalize Markdown text with the default rule sequence."""

    return _DEFAULT_NORMALIZER.normalize(text)
