from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest

from depmatrix.config import (
    DepMatrixConfig,
    apply_overrides,
    discover_config_file,
    load_config,
    _parse_section,
    _pyproject_has_depmatrix_section,
    _read_toml,
)
from depmatrix.constants import DEFAULT_REGISTRY_URL
from depmatrix.exceptions import ConfigError


@pytest.mark.unit
class TestDepMatrixConfig:
    """Tests for DepMatrixConfig dataclass."""

    def test_default_initialization(self) -> None:
        """Test DepMatrixConfig initializes with correct defaults."""
        config = DepMatrixConfig()

        assert config.directories == []
        assert config.exclude_packages == []
        assert config.limit is None
        assert config.registry_url == DEFAULT_REGISTRY_URL
        assert config.max_concurrency == 10
        assert config.timeout == 30
        assert config.source_path is None

    def test_to_log_dict(self) -> None:
        """Test to_log_dict returns configuration without metadata."""
        config = DepMatrixConfig(
            directories=["apps/web"],
            limit=3,
            source_path=Path("/test/path.toml"),
        )

        result = config.to_log_dict()

        assert result["directories"] == ["apps/web"]
        assert result["limit"] == 3
        assert "source_path" not in result


@pytest.mark.unit
class TestDiscoverConfigFile:
    """Tests for discover_config_file function."""

    def test_explicit_path_priority(self, tmp_path: Path) -> None:
        """Test explicit path is used when provided and exists."""
        config_file = tmp_path / "custom.toml"
        config_file.write_text("[depmatrix]\n", encoding="utf-8")
        (tmp_path / "depmatrix.toml").write_text("[depmatrix]\n", encoding="utf-8")

        with patch("depmatrix.config.Path.cwd", return_value=tmp_path):
            result = discover_config_file(config_file)

        assert result == config_file.resolve()

    def test_explicit_path_not_found_raises_error(self, tmp_path: Path) -> None:
        """Test ConfigError raised when explicit path doesn't exist."""
        missing = tmp_path / "missing.toml"

        with pytest.raises(ConfigError) as exc_info:
            discover_config_file(missing)

        assert exc_info.value.config_path == str(missing)

    def test_discovers_depmatrix_toml(self, tmp_path: Path) -> None:
        """Test depmatrix.toml in the working directory is found."""
        config_file = tmp_path / "depmatrix.toml"
        config_file.write_text("[depmatrix]\n", encoding="utf-8")

        with patch("depmatrix.config.Path.cwd", return_value=tmp_path):
            assert discover_config_file() == config_file

    def test_discovers_pyproject_toml_with_section(self, tmp_path: Path) -> None:
        """Test pyproject.toml is used when it has [tool.depmatrix]."""
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text("[tool.depmatrix]\nlimit = 2\n", encoding="utf-8")

        with patch("depmatrix.config.Path.cwd", return_value=tmp_path):
            assert discover_config_file() == pyproject

    def test_ignores_pyproject_toml_without_section(self, tmp_path: Path) -> None:
        """Test pyproject.toml without the section is skipped."""
        (tmp_path / "pyproject.toml").write_text("[tool.other]\n", encoding="utf-8")

        with patch("depmatrix.config.Path.cwd", return_value=tmp_path):
            assert discover_config_file() is None

    def test_precedence_order(self, tmp_path: Path) -> None:
        """Test depmatrix.toml wins over pyproject.toml."""
        (tmp_path / "depmatrix.toml").write_text("[depmatrix]\n", encoding="utf-8")
        (tmp_path / "pyproject.toml").write_text("[tool.depmatrix]\n", encoding="utf-8")

        with patch("depmatrix.config.Path.cwd", return_value=tmp_path):
            assert discover_config_file() == tmp_path / "depmatrix.toml"


@pytest.mark.unit
class TestPyprojectHasDepmatrixSection:
    """Tests for _pyproject_has_depmatrix_section."""

    def test_returns_true_when_section_exists(self, tmp_path: Path) -> None:
        """Test detection of [tool.depmatrix]."""
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text("[tool.depmatrix]\n", encoding="utf-8")

        assert _pyproject_has_depmatrix_section(pyproject) is True

    def test_returns_false_on_invalid_toml(self, tmp_path: Path) -> None:
        """Test unreadable pyproject files are ignored."""
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text("[tool.depmatrix\n", encoding="utf-8")

        assert _pyproject_has_depmatrix_section(pyproject) is False


@pytest.mark.unit
class TestReadToml:
    """Tests for _read_toml."""

    def test_reads_valid_toml(self, tmp_path: Path) -> None:
        """Test a valid file is parsed."""
        path = tmp_path / "depmatrix.toml"
        path.write_text('[depmatrix]\ndirectories = ["a"]\n', encoding="utf-8")

        assert _read_toml(path) == {"depmatrix": {"directories": ["a"]}}

    def test_raises_error_on_invalid_toml(self, tmp_path: Path) -> None:
        """Test invalid TOML raises ConfigError."""
        path = tmp_path / "depmatrix.toml"
        path.write_text("not = [valid", encoding="utf-8")

        with pytest.raises(ConfigError, match="Invalid TOML"):
            _read_toml(path)

    def test_raises_error_when_file_not_found(self, tmp_path: Path) -> None:
        """Test unreadable files raise ConfigError."""
        with pytest.raises(ConfigError, match="Cannot read"):
            _read_toml(tmp_path / "missing.toml")


@pytest.mark.unit
class TestParseSection:
    """Tests for _parse_section."""

    def test_parses_empty_section(self) -> None:
        """Test an empty table yields defaults."""
        assert _parse_section({}, config_path="x") == DepMatrixConfig()

    def test_parses_all_options(self) -> None:
        """Test every known option is read."""
        config = _parse_section(
            {
                "directories": ["apps/web", " apps/api "],
                "exclude_packages": "@internal/*, typescript",
                "limit": 5,
                "registry_url": " https://npm.example ",
                "max_concurrency": 4,
                "timeout": 12,
            },
            config_path="x",
        )

        assert config.directories == ["apps/web", "apps/api"]
        assert config.exclude_packages == ["@internal/*", "typescript"]
        assert config.limit == 5
        assert config.registry_url == "https://npm.example"
        assert config.max_concurrency == 4
        assert config.timeout == 12

    def test_raises_error_on_unknown_keys(self) -> None:
        """Test typos are reported."""
        with pytest.raises(ConfigError, match="Unknown configuration keys: limt"):
            _parse_section({"limt": 3}, config_path="x")

    @pytest.mark.parametrize(
        "key, value",
        [
            ("limit", 0),
            ("limit", "3"),
            ("limit", True),
            ("timeout", -1),
            ("max_concurrency", 1.5),
            ("directories", [1, 2]),
            ("exclude_packages", {"a": 1}),
            ("registry_url", ""),
        ],
    )
    def test_raises_error_on_wrong_type(self, key: str, value) -> None:
        """Test invalid values name the offending option."""
        with pytest.raises(ConfigError) as exc_info:
            _parse_section({key: value}, config_path="x")

        assert exc_info.value.option == key


@pytest.mark.unit
class TestLoadConfig:
    """Tests for load_config."""

    def test_returns_defaults_when_no_config_found(self, tmp_path: Path) -> None:
        """Test defaults without any file."""
        with patch("depmatrix.config.Path.cwd", return_value=tmp_path):
            config = load_config()

        assert config == DepMatrixConfig()

    def test_loads_depmatrix_toml(self, tmp_path: Path) -> None:
        """Test values are read from depmatrix.toml."""
        path = tmp_path / "depmatrix.toml"
        path.write_text('[depmatrix]\nlimit = 2\nexclude_packages = ["@foo/*"]\n', encoding="utf-8")

        with patch("depmatrix.config.Path.cwd", return_value=tmp_path):
            config = load_config()

        assert config.limit == 2
        assert config.exclude_packages == ["@foo/*"]
        assert config.source_path == path

    def test_loads_pyproject_toml(self, tmp_path: Path) -> None:
        """Test values are read from [tool.depmatrix]."""
        (tmp_path / "pyproject.toml").write_text(
            '[tool.depmatrix]\ndirectories = "apps/web\\napps/api"\n', encoding="utf-8"
        )

        with patch("depmatrix.config.Path.cwd", return_value=tmp_path):
            config = load_config()

        assert config.directories == ["apps/web", "apps/api"]

    def test_handles_empty_depmatrix_section(self, tmp_path: Path) -> None:
        """Test an empty table keeps defaults but records the source."""
        path = tmp_path / "custom.toml"
        path.write_text("[depmatrix]\n", encoding="utf-8")

        config = load_config(path)

        assert config.limit is None
        assert config.source_path == path.resolve()


@pytest.mark.unit
class TestApplyOverrides:
    """Tests for apply_overrides."""

    def test_overrides_replace_file_values(self) -> None:
        """Test action or CLI values win over the file."""
        base = DepMatrixConfig(directories=["a"], exclude_packages=["x"], limit=5)

        merged = apply_overrides(
            base,
            directories="b,c",
            exclude_packages="@foo/*\ntypescript",
            limit="1",
            registry_url="https://npm.example",
        )

        assert merged.directories == ["b", "c"]
        assert merged.exclude_packages == ["@foo/*", "typescript"]
        assert merged.limit == 1
        assert merged.registry_url == "https://npm.example"
        assert base.directories == ["a"]

    def test_empty_values_keep_file_values(self) -> None:
        """Test unset action inputs arrive as empty strings and are ignored."""
        base = DepMatrixConfig(directories=["a"], limit=5)

        merged = apply_overrides(base, directories="", exclude_packages=None, limit="")

        assert merged.directories == ["a"]
        assert merged.limit == 5

    def test_invalid_limit_clears_limit(self) -> None:
        """Test an invalid limit input means no limit."""
        merged = apply_overrides(DepMatrixConfig(limit=5), limit="many")

        assert merged.limit is None
