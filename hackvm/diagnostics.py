"""Error types raised while translating VM code.

Every error here points at an invalid input program, so translation stops at
the first one. The driver fills in the file and line the error came from.
"""
from typing import Optional


class VMTranslationError(Exception):
    """Base class for translation errors, rendered as `file:line: kind: message`."""

    kind = "error"

    def __init__(self, message: str, *, line: Optional[int] = None,
                 file: Optional[str] = None, hint: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.line = line
        self.file = file
        self.hint = hint

    def located(self, line: Optional[int] = None, file: Optional[str] = None):
        """Fill in missing location fields and return self."""
        if self.line is None:
            self.line = line
        if self.file is None:
            self.file = file
        return self

    def __str__(self) -> str:
        loc = ""
        if self.file is not None:
            loc += f"{self.file}:"
        if self.line is not None:
            loc += f"{self.line}:"
        if loc:
            loc += " "
        core = f"{self.kind}: {self.message}"
        if self.hint:
            core += f"  (hint: {self.hint})"
        return loc + core


class ParseError(VMTranslationError):
    """Unknown mnemonic, wrong argument count, bad segment or number."""
    kind = "parse error"


class RangeError(VMTranslationError):
    """Segment offset outside the bounds of its segment."""
    kind = "range error"


class SemanticError(VMTranslationError):
    """Well-formed command that cannot be translated, e.g. pop to constant."""
    kind = "semantic error"
