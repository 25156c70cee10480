"""Deterministic Markdown rewrite rules.

Responsibilities:
- Provide composable cleanup rules for scraped or imported Markdown artifacts.
- Report how many substitutions each rule applied for run diagnostics.

Every rule is a total function over `str`: any input, including malformed
Markdown, yields a string and never raises.
"""

from __future__ import annotations

import re
from typing import Protocol


class MarkdownRule(Protocol):
    """Protocol for Markdown rewrite rules."""

    name: str

    def apply(self, text: str) -> tuple[str, int]:
        """Apply one rewrite and return the new text with its substitution count."""


class SeparateHeadings:
    """Start glued heading markers on their own paragraph block.

    `text## Header` becomes `text\\n\\n## Header`. The preceding character may not
    be `#`, so a heading at the very start of a string is never split apart.
    """

    name = "separate-headings"
    _PATTERN = re.compile(r"([^\n#])\s*(#{1,6}\s)")

    def apply(self, text: str) -> tuple[str, int]:
        """Insert a blank line before heading markers glued to earlier text."""

        return self._PATTERN.subn(r"\1\n\n\2", text)


class CollapseTripleAsterisks:
    """Rewrite `*** content ***` bold-italic artifacts to plain `*content*`."""

    name = "collapse-triple-asterisks"
    _PATTERN = re.compile(r"\*\*\*\s*([^*]+?)\s*\*\*\*")

    def apply(self, text: str) -> tuple[str, int]:
        """Collapse triple-asterisk runs to single-asterisk emphasis."""

        return self._PATTERN.subn(r"*\1*", text)


class TrimBoldDelimiterSpaces:
    """Strip spaces just inside `**` delimiters.

    A delimiter's role comes from how many delimiters precede it on its line:
    odd positions open, even positions close. Openers and closers are trimmed by
    two independent substitutions, so a delimiter without a partner is still
    handled on its own.
    """

    name = "trim-bold-delimiter-spaces"
    _AFTER_OPEN = re.compile(r"\n|\*\*[ \t]*")
    _BEFORE_CLOSE = re.compile(r"\n|[ \t]*\*\*")

    def apply(self, text: str) -> tuple[str, int]:
        """Remove horizontal whitespace after openers and before closers."""

        text, opened = self._trim_by_role(self._AFTER_OPEN, text, opening=True)
        text, closed = self._trim_by_role(self._BEFORE_CLOSE, text, opening=False)
        return text, opened + closed

    @staticmethod
    def _trim_by_role(pattern: re.Pattern[str], text: str, opening: bool) -> tuple[str, int]:
        """Collapse matched delimiters to bare `**` when they play the given role."""

        position = 0
        trimmed = 0

        def _replace(match: re.Match[str]) -> str:
            nonlocal position, trimmed
            token = match.group(0)
            if token == "\n":
                position = 0
                return token
            position += 1
            if (position % 2 == 1) != opening or token == "**":
                return token
            trimmed += 1
            return "**"

        return pattern.sub(_replace, text), trimmed


class SpaceStuckBold:
    """Insert a space between a word and a bold span glued to it."""

    name = "space-stuck-bold"
    # Spans are consumed left to right so a closer is never mistaken for an opener.
    _PATTERN = re.compile(r"([A-Za-z0-9]?)(\*\*[^*\n]+?\*\*)")

    def apply(self, text: str) -> tuple[str, int]:
        """Separate `word**bold**` into `word **bold**`."""

        inserted = 0

        def _replace(match: re.Match[str]) -> str:
            nonlocal inserted
            preceding, span = match.groups()
            if not preceding:
                return span
            inserted += 1
            return f"{preceding} {span}"

        return self._PATTERN.sub(_replace, text), inserted


class TrimSpaceBeforePunctuation:
    """Remove whitespace left in front of commas and periods."""

    name = "trim-space-before-punctuation"
    _PATTERN = re.compile(r"\s+([,.])")

    def apply(self, text: str) -> tuple[str, int]:
        """Turn `word ,` into `word,` and `word .` into `word.`."""

        return self._PATTERN.subn(r"\1", text)


class CollapseInlineWhitespace:
    """Collapse runs of spaces and tabs, and lone tabs, to a single space."""

    name = "collapse-inline-whitespace"
    _PATTERN = re.compile(r"[ \t]{2,}|\t")

    def apply(self, text: str) -> tuple[str, int]:
        """Collapse horizontal whitespace runs, leaving newlines intact."""

        return self._PATTERN.subn(" ", text)


def default_rules() -> list[MarkdownRule]:
    """Return the canonical rule sequence in execution order."""

    return [
        SeparateHeadings(),
        CollapseTripleAsterisks(),
        TrimBoldDelimiterSpaces(),
        SpaceStuckBold(),
        TrimSpaceBeforePunctuation(),
        CollapseInlineWhitespace(),
    ]
