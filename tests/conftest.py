"""Pytest configuration and shared fixtures for the md2term test suite.

This module registers the test markers, the Hypothesis profiles and a few
fixtures for rendering Markdown into inspectable lines.
"""

import errno
import os
from io import StringIO
from typing import Callable

import pytest
from hypothesis import Phase, Verbosity, settings

from md2term.options import TerminalRendererOptions
from md2term.parsers.markdown import markdown_to_events
from md2term.renderers.context import StyledLine
from md2term.renderers.emitter import LineRecorder, create_console
from md2term.renderers.terminal import TerminalRenderer

# Register custom Hypothesis profiles
settings.register_profile("ci", max_examples=100, verbosity=Verbosity.verbose)
settings.register_profile("dev", max_examples=20)
settings.register_profile(
    "debug", max_examples=10, verbosity=Verbosity.verbose, phases=[Phase.explicit, Phase.reuse, Phase.generate]
)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")


@pytest.fixture
def recorder() -> LineRecorder:
    """Provide an emitter that keeps rendered lines in memory."""
    return LineRecorder()


@pytest.fixture
def render_styled() -> Callable[..., list[StyledLine]]:
    """Render Markdown and return the styled lines.

    Keyword arguments are ``TerminalRendererOptions`` fields.
    """

    def _render(markdown: str, **options) -> list[StyledLine]:
        recorder = LineRecorder()
        renderer = TerminalRenderer(TerminalRendererOptions(**options), emitter=recorder)
        renderer.render(markdown_to_events(markdown))
        return recorder.lines

    return _render


@pytest.fixture
def render_plain(render_styled) -> Callable[..., list[str]]:
    """Render Markdown and return the plain text of every line, without padding."""

    def _render(markdown: str, **options) -> list[str]:
        return [line.plain for line in render_styled(markdown, **options)]

    return _render


@pytest.fixture
def plain_console():
    """Provide a colorless console writing to a buffer, and the buffer."""
    buffer = StringIO()
    return create_console(color="never", file=buffer), buffer


class ClosedPipe(StringIO):
    """Text stream whose reader has gone away."""

    def write(self, text: str) -> int:
        raise BrokenPipeError(errno.EPIPE, "Broken pipe")


@pytest.fixture
def closed_pipe() -> ClosedPipe:
    """Provide an output stream that fails every write with BrokenPipeError."""
    return ClosedPipe()
