"""Typed errors raised by pipelog."""

from __future__ import annotations

from typing import Any


class PipelogError(Exception):
    """Base class for every error raised by the package."""


class MissingPipeError(PipelogError, TypeError):
    """A template references a pipe that is missing or not callable."""

    def __init__(self, pipe_name: str, template: str | None = None) -> None:
        self.pipe_name = pipe_name
        self.template = template
        super().__init__(f'Pipe property "{pipe_name}" is not a function')


class InvalidFormatError(PipelogError, TypeError):
    def __init__(self, specifier: Any) -> None:
        self.specifier = specifier
        super().__init__(f"Unsupported format specifier of type {type(specifier).__name__}")
