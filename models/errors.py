"""Exceptions raised by the accident loaders and renderers."""

from __future__ import annotations

from typing import Any


class AccidentFileNotFoundError(FileNotFoundError):
    """The yearly accident file does not exist on disk."""

    def __init__(self, filename: str) -> None:
        super().__init__(f"file '{filename}' does not exist")
        self.filename = filename


class InvalidYearError(ValueError):
    """A requested year cannot be represented as an integer."""

    def __init__(self, value: Any) -> None:
        super().__init__(f"invalid year: {value!r}")
        self.value = value


class InvalidStateError(ValueError):
    """A state code does not occur in the loaded year's accidents."""

    def __init__(self, state: Any) -> None:
        super().__init__(f"invalid STATE number: {state}")
        self.state = state
