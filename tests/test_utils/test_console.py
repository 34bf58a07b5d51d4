from __future__ import annotations

from typing import Generator
from unittest.mock import MagicMock, patch

import pytest
from rich.table import Table
from rich.console import Console

from depmatrix.utils.console import (
    DEPMATRIX_THEME,
    _get_console,
    _should_use_color,
    colorize_update_type,
    get_raw_console,
    print_error,
    print_success,
    print_table,
    print_warning,
    reconfigure_console,
)


@pytest.fixture(autouse=True)
def reset_console() -> Generator[None, None, None]:
    """Reset the shared consoles before and after each test."""
    reconfigure_console()
    yield
    reconfigure_console()


@pytest.mark.unit
class TestTheme:
    """Tests for the console theme."""

    @pytest.mark.parametrize(
        "style_name", ["success", "error", "warning", "info", "dim", "highlight"]
    )
    def test_theme_has_style(self, style_name: str) -> None:
        """Test every style used by the helpers is defined."""
        assert style_name in DEPMATRIX_THEME.styles


@pytest.mark.unit
class TestShouldUseColor:
    """Tests for _should_use_color."""

    def test_no_color_env_disables_color(self, monkeypatch) -> None:
        """Test NO_COLOR wins over a TTY."""
        monkeypatch.setenv("NO_COLOR", "1")
        stream = MagicMock()
        stream.isatty.return_value = True

        assert _should_use_color(stream) is False

    def test_tty_enables_color(self, monkeypatch) -> None:
        """Test an interactive stream gets color."""
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.delenv("CI", raising=False)
        stream = MagicMock()
        stream.isatty.return_value = True

        assert _should_use_color(stream) is True

    def test_isatty_error(self, monkeypatch) -> None:
        """Test broken streams fall back to no color."""
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.delenv("CI", raising=False)
        stream = MagicMock()
        stream.isatty.side_effect = OSError("closed")

        assert _should_use_color(stream) is False


@pytest.mark.unit
class TestGetConsole:
    """Tests for the shared console instances."""

    def test_singleton_per_stream(self) -> None:
        """Test stdout and stderr consoles are cached separately."""
        out = _get_console()
        err = _get_console(stderr=True)

        assert out is _get_console()
        assert err is get_raw_console(stderr=True)
        assert out is not err
        assert err.stderr is True

    def test_reconfigure_clears_console(self) -> None:
        """Test reconfigure_console drops the cached instances."""
        first = _get_console()

        reconfigure_console()

        assert _get_console() is not first


@pytest.mark.unit
class TestStatusMessages:
    """Tests for print_success, print_error and print_warning."""

    def test_prints_success_message(self) -> None:
        """Test print_success uses the success style."""
        with patch.object(Console, "print") as mock_print:
            print_success("All dependencies are up to date!")

            mock_print.assert_called_once_with(
                "[OK] All dependencies are up to date!", style="success"
            )

    def test_prints_error_message(self) -> None:
        """Test print_error uses the error style."""
        with patch.object(Console, "print") as mock_print:
            print_error("Workspace root is not a directory")

            mock_print.assert_called_once_with(
                "[ERROR] Workspace root is not a directory", style="error"
            )

    def test_prints_warning_with_custom_prefix(self) -> None:
        """Test the prefix can be overridden."""
        with patch.object(Console, "print") as mock_print:
            print_warning("careful", prefix="!")

            mock_print.assert_called_once_with("! careful", style="warning")


@pytest.mark.unit
class TestPrintTable:
    """Tests for print_table structured output."""

    def test_prints_table(self) -> None:
        """Test rows are rendered as a Rich table."""
        data = [
            {"Group": "babel packages", "Latest": "7.24.0"},
            {"Group": "left-pad", "Latest": "1.3.0"},
        ]

        with patch.object(Console, "print") as mock_print:
            print_table(data, title="Dependency Update Groups")

            table = mock_print.call_args[0][0]
            assert isinstance(table, Table)
            assert table.title == "Dependency Update Groups"
            assert [c.header for c in table.columns] == ["Group", "Latest"]
            assert table.row_count == 2

    def test_empty_data_prints_nothing(self) -> None:
        """Test an empty list prints nothing."""
        with patch.object(Console, "print") as mock_print:
            print_table([])

            mock_print.assert_not_called()


@pytest.mark.unit
class TestColorizeUpdateType:
    """Tests for colorize_update_type."""

    @pytest.mark.parametrize(
        "label, expected",
        [
            ("major", "[red]major[/red]"),
            ("minor", "[yellow]minor[/yellow]"),
            ("patch", "[green]patch[/green]"),
            (None, "[dim]-[/dim]"),
            ("other", "other"),
        ],
    )
    def test_labels(self, label, expected: str) -> None:
        """Test each semver label maps to its markup."""
        assert colorize_update_type(label) == expected
