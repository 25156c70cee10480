"""Unit tests for YAML/environment configuration loader behavior."""

from __future__ import annotations

from pathlib import Path

import pytest

from mdtidy.config import ConfigLoader, NormalizerConfig


def test_config_loader_from_yaml_loads_valid_config_and_normalizes_values(
    tmp_path: Path,
) -> None:
    """YAML loader should parse valid payloads and normalize typed/blank values."""

    config_path = tmp_path / "mdtidy.yml"
    config_path.write_text(
        """
input_path: " posts/intro.md "
output_path: " out/intro.md "
encoding: " utf-8 "
glob_pattern: " *.markdown "
log_level: " debug "
report: " yes "
""".strip(),
        encoding="utf-8",
    )

    config = ConfigLoader.from_yaml(config_path)

    assert config.input_path == Path("posts/intro.md")
    assert config.output_path == Path("out/intro.md")
    assert config.encoding == "utf-8"
    assert config.glob_pattern == "*.markdown"
    assert config.log_level == "DEBUG"
    assert config.report is True


def test_config_loader_from_yaml_uses_defaults_for_empty_file(tmp_path: Path) -> None:
    """An empty YAML file should produce the default configuration."""

    config_path = tmp_path / "empty.yml"
    config_path.write_text("", encoding="utf-8")

    assert ConfigLoader.from_yaml(config_path) == NormalizerConfig()


def test_config_loader_from_yaml_rejects_unknown_keys(tmp_path: Path) -> None:
    """Loader should fail fast on unsupported keys."""

    config_path = tmp_path / "mdtidy.yml"
    config_path.write_text("renderer: katex\n", encoding="utf-8")

    with pytest.raises(ValueError, match="unsupported key"):
        ConfigLoader.from_yaml(config_path)


def test_config_loader_from_yaml_rejects_non_mapping_root(tmp_path: Path) -> None:
    """Loader should require a top-level mapping."""

    config_path = tmp_path / "mdtidy.yml"
    config_path.write_text("- one\n- two\n", encoding="utf-8")

    with pytest.raises(ValueError, match="top-level mapping"):
        ConfigLoader.from_yaml(config_path)


def test_config_loader_from_yaml_rejects_invalid_report_flag(tmp_path: Path) -> None:
    """Boolean fields should only accept recognized tokens."""

    config_path = tmp_path / "mdtidy.yml"
    config_path.write_text("report: maybe\n", encoding="utf-8")

    with pytest.raises(ValueError, match="`report` must be a boolean"):
        ConfigLoader.from_yaml(config_path)


def test_config_loader_from_env_reads_prefixed_variables() -> None:
    """Environment loader should map `MDTIDY_*` variables onto config fields."""

    config = ConfigLoader.from_env(
        {
            "MDTIDY_INPUT": "posts",
            "MDTIDY_OUTPUT": " cleaned ",
            "MDTIDY_ENCODING": "latin-1",
            "MDTIDY_GLOB_PATTERN": "*.markdown",
            "MDTIDY_LOG_LEVEL": "warning",
            "MDTIDY_REPORT": "on",
        }
    )

    assert config.input_path == Path("posts")
    assert config.output_path == Path("cleaned")
    assert config.encoding == "latin-1"
    assert config.glob_pattern == "*.markdown"
    assert config.log_level == "WARNING"
    assert config.report is True


def test_config_loader_from_env_defaults_when_unset() -> None:
    """Missing variables should fall back to defaults."""

    assert ConfigLoader.from_env({}) == NormalizerConfig()


def test_config_loader_from_env_rejects_invalid_report_flag() -> None:
    """Unrecognized boolean tokens should be reported with the variable name."""

    with pytest.raises(ValueError, match="MDTIDY_REPORT"):
        ConfigLoader.from_env({"MDTIDY_REPORT": "sometimes"})


def test_config_validate_rejects_unknown_log_level() -> None:
    """Validation should reject log levels `loguru` does not define."""

    with pytest.raises(ValueError, match="log_level"):
        ConfigLoader.from_env({"MDTIDY_LOG_LEVEL": "loud"})


def test_with_overrides_ignores_none_and_uppercases_log_level() -> None:
    """Overrides should replace only explicitly provided values."""

    base = NormalizerConfig(output_path=Path("out.md"), report=True)

    updated = base.with_overrides(
        input_path=Path("in.md"), output_path=None, report=None, log_level="debug"
    )

    assert updated.input_path == Path("in.md")
    assert updated.output_path == Path("out.md")
    assert updated.report is True
    assert updated.log_level == "DEBUG"


def test_with_overrides_rejects_unknown_encoding() -> None:
    """Overrides should be validated like loaded values."""

    with pytest.raises(ValueError, match="unknown codec"):
        NormalizerConfig().with_overrides(encoding="no-such-codec")


def test_config_loader_from_yaml_rejects_free_form_extra_mapping(tmp_path: Path) -> None:
    """Only keys the CLI consumes are accepted; free-form metadata is rejected."""

    config_path = tmp_path / "mdtidy.yml"
    config_path.write_text("extra:\n  site: society-blog\n", encoding="utf-8")

    with pytest.raises(ValueError, match="unsupported key\\(s\\): extra"):
        ConfigLoader.from_yaml(config_path)
