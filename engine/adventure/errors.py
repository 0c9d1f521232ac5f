"""Error taxonomy for the Adventure Format engine.

Every failure is fatal: the loader and the interpreter raise one of these and
let it propagate up to the driver, which decides whether to terminate.
"""
from __future__ import annotations
from typing import Optional


class AdventureError(Exception):
    """Base class for all load-time and run-time adventure faults."""

    def __init__(self, message: str, line_number: Optional[int] = None, line: Optional[str] = None):
        self.message = message
        self.line_number = line_number
        self.line = line
        super().__init__(self._format())

    def _format(self) -> str:
        text = self.message
        if self.line_number is not None:
            text = f"{text} at line {self.line_number}"
        if self.line is not None:
            text = f"{text}: {self.line.strip()!r}"
        return text


class FormatError(AdventureError):
    """Malformed document: banner, section, declaration or command syntax."""
    pass


class DuplicateDefinitionError(AdventureError):
    """An item, variable (or, in strict mode, scene) declared twice."""
    pass


class UnresolvedReferenceError(AdventureError):
    """A command or the engine refers to an undeclared item, variable or scene."""
    pass


class TypeMismatchError(AdventureError):
    """An integer-only command applied to a bool or string variable."""
    pass
