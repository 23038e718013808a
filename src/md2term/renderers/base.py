#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2term/renderers/base.py
"""Base class for event stream renderers.

Renderers consume the Markdown event stream produced by
``md2term.parsers.markdown`` and write output somewhere.

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterable

from md2term.events import Event
from md2term.exceptions import InvalidOptionsError
from md2term.options.base import BaseRendererOptions


class BaseRenderer(ABC):
    """Abstract base class for event stream renderers.

    Parameters
    ----------
    options : BaseRendererOptions or None, default = None
        Renderer-specific options

    """

    def __init__(self, options: BaseRendererOptions | None = None):
        """Initialize the renderer with optional configuration."""
        self.options = options

    @abstractmethod
    def render(self, events: Iterable[Event]) -> None:
        """Consume the whole event stream and write the output.

        Parameters
        ----------
        events : iterable of Event
            Events in document order

        Raises
        ------
        RenderingError
            If output cannot be produced

        """

    def render_to_string(self, events: Iterable[Event]) -> str:
        """Render the event stream to a string, if the renderer supports it.

        Raises
        ------
        NotImplementedError
            If the renderer does not support string output

        """
        raise NotImplementedError(f"{self.__class__.__name__} does not support rendering to a string.")

    @staticmethod
    def _validate_options_type(
        options: BaseRendererOptions | None,
        expected_type: type[BaseRendererOptions],
        component_name: str,
    ) -> None:
        """Raise InvalidOptionsError unless options is None or of the expected type."""
        if options is not None and not isinstance(options, expected_type):
            raise InvalidOptionsError(
                component_name=component_name,
                expected_type=expected_type,
                received_type=type(options),
            )
