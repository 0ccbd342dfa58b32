"""Range and semantic checks for parsed VM commands."""
from . import ast
from .diagnostics import RangeError, SemanticError
from .segments import SEGMENT_LIMITS


def validate_command(cmd):
    """Raise RangeError or SemanticError if cmd cannot be translated."""
    if not isinstance(cmd, (ast.Push, ast.Pop)):
        return

    limit = SEGMENT_LIMITS.get(cmd.segment)
    if limit is not None and cmd.offset >= limit:
        name = cmd.segment.value
        raise RangeError(
            f"{name} offset {cmd.offset} out of range",
            hint=f"{name} accepts 0..{limit - 1}",
        )

    if isinstance(cmd, ast.Pop) and cmd.segment is ast.Segment.CONSTANT:
        raise SemanticError("cannot pop into the constant segment")
