"""Configuration model and loaders for mdtidy.

Responsibilities:
- Define run configuration as a typed dataclass.
- Provide loader entry points for YAML- and environment-based configuration.
- Resolve CLI overrides on top of loaded values.

Key types:
- `NormalizerConfig`: normalized settings for one CLI run.
- `ConfigLoader`: static construction helpers for `NormalizerConfig`.
"""

from __future__ import annotations

import codecs
from dataclasses import dataclass, replace
import os
from pathlib import Path
from typing import Any, Mapping

import yaml


_DEFAULT_ENCODING = "utf-8"
_DEFAULT_GLOB_PATTERN = "*.md"
_DEFAULT_LOG_LEVEL = "INFO"
_SUPPORTED_LOG_LEVELS = frozenset({"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR"})
_TRUE_TOKENS = frozenset({"1", "true", "yes", "on"})
_FALSE_TOKENS = frozenset({"0", "false", "no", "off"})


def _clean_string(value: object) -> str | None:
    """Return a stripped string, or `None` for missing and blank values."""

    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _parse_flag(value: object) -> bool | None:
    """Parse `true`/`false`-style tokens; return `None` when unrecognized."""

    if isinstance(value, bool):
        return value
    token = _clean_string(value)
    if token is None:
        return None
    token = token.lower()
    if token in _TRUE_TOKENS:
        return True
    if token in _FALSE_TOKENS:
        return False
    return None


@dataclass(slots=True)
class NormalizerConfig:
    """Runtime configuration for one normalization run.

    Attributes:
        input_path: Source document or directory; `None` means stdin.
        output_path: Destination document or directory; `None` means stdout.
        encoding: Text encoding used to read and write documents.
        glob_pattern: Pattern used to select documents in directory runs.
        log_level: Minimum level for phase log lines.
        report: Whether per-rule substitution counts are printed.
    """

    input_path: Path | None = None
    output_path: Path | None = None
    encoding: str = _DEFAULT_ENCODING
    glob_pattern: str = _DEFAULT_GLOB_PATTERN
    log_level: str = _DEFAULT_LOG_LEVEL
    report: bool = False

    def validate(self) -> None:
        """Validate configuration values before a run starts."""

        try:
            codecs.lookup(self.encoding)
        except LookupError as exc:
            raise ValueError(f"`encoding` names an unknown codec: `{self.encoding}`.") from exc
        if not self.glob_pattern.strip():
            raise ValueError("`glob_pattern` must be a non-empty string.")
        if self.log_level not in _SUPPORTED_LOG_LEVELS:
            levels = ", ".join(sorted(_SUPPORTED_LOG_LEVELS))
            raise ValueError(f"`log_level` must be one of: {levels}.")

    def with_overrides(self, **overrides: object) -> NormalizerConfig:
        """Return a validated copy where non-`None` overrides replace loaded values."""

        applied = {key: value for key, value in overrides.items() if value is not None}
        if "log_level" in applied:
            applied["log_level"] = str(applied["log_level"]).upper()
        updated = replace(self, **applied)
        updated.validate()
        return updated


class ConfigLoader:
    """Factory methods for creating `NormalizerConfig` from external sources."""

    _SUPPORTED_YAML_KEYS = frozenset(
        {
            "input_path",
            "output_path",
            "encoding",
            "glob_pattern",
            "log_level",
            "report",
        }
    )

    @staticmethod
    def from_yaml(path: Path) -> NormalizerConfig:
        """Create a validated config from a YAML file."""

        payload = yaml.safe_load(path.read_text(encoding="utf-8"))
        if payload is None:
            payload = {}
        if not isinstance(payload, Mapping):
            raise ValueError(f"YAML config `{path}` must contain a top-level mapping/object.")
        return ConfigLoader._build_config_from_mapping(payload, source_label=f"YAML `{path}`")

    @staticmethod
    def from_env(env: Mapping[str, str] | None = None) -> NormalizerConfig:
        """Create a validated config from `MDTIDY_*` environment variables."""

        env_map: Mapping[str, str] = os.environ if env is None else env

        input_path = _clean_string(env_map.get("MDTIDY_INPUT"))
        output_path = _clean_string(env_map.get("MDTIDY_OUTPUT"))
        report_raw = env_map.get("MDTIDY_REPORT")
        report = _parse_flag(report_raw)
        if report_raw is not None and _clean_string(report_raw) and report is None:
            raise ValueError(
                "`MDTIDY_REPORT` must be a boolean value (`true`/`false`, `1`/`0`, `yes`/`no`)."
            )

        config = NormalizerConfig(
            input_path=Path(input_path) if input_path else None,
            output_path=Path(output_path) if output_path else None,
            encoding=_clean_string(env_map.get("MDTIDY_ENCODING")) or _DEFAULT_ENCODING,
            glob_pattern=(
                _clean_string(env_map.get("MDTIDY_GLOB_PATTERN")) or _DEFAULT_GLOB_PATTERN
            ),
            log_level=(
                _clean_string(env_map.get("MDTIDY_LOG_LEVEL")) or _DEFAULT_LOG_LEVEL
            ).upper(),
            report=bool(report),
        )
        config.validate()
        return config

    @staticmethod
    def _build_config_from_mapping(
        payload: Mapping[str, Any], source_label: str
    ) -> NormalizerConfig:
        """Build and validate config from an already parsed mapping."""

        unknown = sorted(set(payload).difference(ConfigLoader._SUPPORTED_YAML_KEYS))
        if unknown:
            key_list = ", ".join(str(key) for key in unknown)
            raise ValueError(f"{source_label} includes unsupported key(s): {key_list}.")

        input_path = _clean_string(payload.get("input_path"))
        output_path = _clean_string(payload.get("output_path"))
        log_level = _clean_string(payload.get("log_level")) or _DEFAULT_LOG_LEVEL

        report = False
        if payload.get("report") is not None:
            parsed_report = _parse_flag(payload["report"])
            if parsed_report is None:
                raise ValueError(
                    f"{source_label} field `report` must be a boolean value "
                    "(`true`/`false`, `1`/`0`, `yes`/`no`)."
                )
            report = parsed_report

        config = NormalizerConfig(
            input_path=Path(input_path) if input_path else None,
            output_path=Path(output_path) if output_path else None,
            encoding=_clean_string(payload.get("encoding")) or _DEFAULT_ENCODING,
            glob_pattern=_clean_string(payload.get("glob_pattern")) or _DEFAULT_GLOB_PATTERN,
            log_level=log_level.upper(),
            report=report,
        )
        config.validate()
        return config
