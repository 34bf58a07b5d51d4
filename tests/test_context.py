from __future__ import annotations

from pathlib import Path

import click
import pytest

from depmatrix.config import DepMatrixConfig
from depmatrix.context import DepMatrixContext, pass_context


@pytest.mark.unit
class TestDepMatrixContext:
    """Tests for DepMatrixContext class."""

    def test_default_initialization(self) -> None:
        """Test DepMatrixContext initializes with correct default values."""
        ctx = DepMatrixContext()

        assert ctx.config_path is None
        assert ctx.verbose == 0
        assert ctx.color is True
        assert ctx.config is None

    def test_all_attributes_can_be_set(self) -> None:
        """Test all context attributes can be set and retrieved."""
        ctx = DepMatrixContext()
        config = DepMatrixConfig(limit=3)

        ctx.config_path = Path("/path/to/depmatrix.toml")
        ctx.verbose = 2
        ctx.color = False
        ctx.config = config

        assert ctx.config_path == Path("/path/to/depmatrix.toml")
        assert ctx.verbose == 2
        assert ctx.color is False
        assert ctx.config is config

    def test_slots_prevents_arbitrary_attributes(self) -> None:
        """Test __slots__ prevents setting undefined attributes."""
        ctx = DepMatrixContext()

        with pytest.raises(AttributeError):
            ctx.arbitrary_attribute = "value"  # type: ignore


@pytest.mark.unit
class TestPassContextDecorator:
    """Tests for pass_context decorator."""

    def test_pass_context_injects_existing_context(self) -> None:
        """Test pass_context injects the existing DepMatrixContext."""

        @click.command()
        @pass_context
        def test_command(ctx: DepMatrixContext) -> DepMatrixContext:
            return ctx

        click_ctx = click.Context(click.Command("test"))
        depmatrix_ctx = DepMatrixContext()
        click_ctx.obj = depmatrix_ctx

        result = click_ctx.invoke(test_command)

        assert result is depmatrix_ctx

    def test_pass_context_creates_context_when_missing(self) -> None:
        """Test pass_context creates a default DepMatrixContext."""

        @click.command()
        @pass_context
        def test_command(ctx: DepMatrixContext) -> DepMatrixContext:
            return ctx

        click_ctx = click.Context(click.Command("test"))

        result = click_ctx.invoke(test_command)

        assert isinstance(result, DepMatrixContext)
        assert result.config is None
