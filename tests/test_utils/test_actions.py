"""Unit tests for depmatrix.utils.actions module."""

from __future__ import annotations

import io
from pathlib import Path

import pytest

from depmatrix.utils.actions import get_string_as_array, set_output


@pytest.mark.unit
class TestGetStringAsArray:
    """Tests for get_string_as_array."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            ("apps/web", ["apps/web"]),
            ("apps/web,apps/api", ["apps/web", "apps/api"]),
            ("apps/web, apps/api\n\ntools", ["apps/web", "apps/api", "tools"]),
            ("@internal/*\ntypescript\n", ["@internal/*", "typescript"]),
            (" , ,\n", []),
            ("", []),
            (None, []),
        ],
    )
    def test_split(self, value, expected) -> None:
        """Test commas and newlines both separate items."""
        assert get_string_as_array(value) == expected


@pytest.mark.unit
class TestSetOutput:
    """Tests for set_output."""

    def test_writes_to_stream_without_output_file(self, monkeypatch) -> None:
        """Test the bare value goes to the stream outside a runner."""
        monkeypatch.delenv("GITHUB_OUTPUT", raising=False)
        stream = io.StringIO()

        set_output("matrix", '{"include":[]}', stream=stream)

        assert stream.getvalue() == '{"include":[]}\n'

    def test_appends_single_line(self, monkeypatch, tmp_path: Path) -> None:
        """Test name=value records are appended."""
        output_file = tmp_path / "output"
        output_file.write_text("previous=1\n", encoding="utf-8")
        monkeypatch.setenv("GITHUB_OUTPUT", str(output_file))
        stream = io.StringIO()

        set_output("matrix", '{"include":[]}', stream=stream)

        assert output_file.read_text(encoding="utf-8") == (
            'previous=1\nmatrix={"include":[]}\n'
        )
        assert stream.getvalue() == ""

    def test_multiline_uses_delimiter(self, monkeypatch, tmp_path: Path) -> None:
        """Test multi-line values are wrapped in a heredoc block."""
        output_file = tmp_path / "output"
        monkeypatch.setenv("GITHUB_OUTPUT", str(output_file))

        set_output("body", "line one\nline two")

        lines = output_file.read_text(encoding="utf-8").splitlines()
        assert lines[0].startswith("body<<ghadelimiter_")
        delimiter = lines[0][len("body<<"):]
        assert lines[1:] == ["line one", "line two", delimiter]
