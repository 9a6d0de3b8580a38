"""Exceptions raised by the analyzer; the CLI maps them to exit status 1."""
from __future__ import annotations

from pathlib import Path


class AnalyzerError(Exception):
    pass


class InputReadError(AnalyzerError):
    def __init__(self, path: Path, cause: BaseException):
        self.path = path
        self.cause = cause
        super().__init__(f"Failed to read file `{path}` ({cause})")


class PositionFormatError(AnalyzerError):
    """Input parsed but does not describe a position."""


class InvalidPositionError(AnalyzerError):
    """Position cannot arise from legal play, or cannot be analyzed."""


class OutputWriteError(AnalyzerError):
    def __init__(self, path: Path, cause: BaseException):
        self.path = path
        self.cause = cause
        super().__init__(f"Failed to write to `{path}` ({cause})")
