from lark import Lark, Transformer
from lark.exceptions import LarkError, UnexpectedInput, VisitError
from . import ast
from .diagnostics import ParseError, VMTranslationError


GRAMMAR = r"""
start: command

?command: push_cmd
        | pop_cmd
        | arithmetic_cmd
        | label_cmd
        | goto_cmd
        | if_goto_cmd
        | function_cmd
        | call_cmd
        | return_cmd

push_cmd: "push" SEGMENT INDEX
pop_cmd: "pop" SEGMENT INDEX
arithmetic_cmd: ARITH_OP
label_cmd: "label" SYMBOL
goto_cmd: "goto" SYMBOL
if_goto_cmd: "if-goto" SYMBOL
function_cmd: "function" SYMBOL INDEX
call_cmd: "call" SYMBOL INDEX
return_cmd: "return"

ARITH_OP: "add" | "sub" | "neg" | "not" | "or" | "and" | "eq" | "lt" | "gt"

// Segment names are matched loosely so unknown ones get a precise error
SEGMENT: /[A-Za-z_][A-Za-z0-9_]*/
// Symbols follow the assembler's rules: no leading digit
SYMBOL: /[A-Za-z_.$:][A-Za-z0-9_.$:]*/
INDEX: /[0-9]+/

%ignore /[ \t\r\n]+/
"""

# How each mnemonic is written, used in error messages
USAGE = {
    'push': 'push <segment> <index>',
    'pop': 'pop <segment> <index>',
    'label': 'label <name>',
    'goto': 'goto <name>',
    'if-goto': 'if-goto <name>',
    'function': 'function <name> <nLocals>',
    'call': 'call <name> <nArgs>',
    'return': 'return',
}
USAGE.update({op: op for op in ast.ARITHMETIC_OPS})

MAX_INDEX = 0xFFFF

COMMENT = '//'


class ASTBuilder(Transformer):
    def _segment(self, token):
        name = str(token)
        try:
            return ast.Segment(name)
        except ValueError:
            valid = ", ".join(s.value for s in ast.Segment)
            raise ParseError(f"unknown memory segment '{name}'", hint=f"one of {valid}")

    def _index(self, token):
        """Parse a decimal index as an unsigned 16-bit integer."""
        value = int(str(token))
        if value > MAX_INDEX:
            raise ParseError(f"index {value} does not fit in 16 bits")
        return value

    def start(self, items):
        return items[0]

    def push_cmd(self, items):
        return ast.Push(segment=self._segment(items[0]), offset=self._index(items[1]))

    def pop_cmd(self, items):
        return ast.Pop(segment=self._segment(items[0]), offset=self._index(items[1]))

    def arithmetic_cmd(self, items):
        return ast.Arithmetic(op=str(items[0]))

    def label_cmd(self, items):
        return ast.Label(name=str(items[0]))

    def goto_cmd(self, items):
        return ast.Goto(name=str(items[0]))

    def if_goto_cmd(self, items):
        return ast.IfGoto(name=str(items[0]))

    def function_cmd(self, items):
        return ast.Function(name=str(items[0]), n_locals=self._index(items[1]))

    def call_cmd(self, items):
        return ast.Call(name=str(items[0]), n_args=self._index(items[1]))

    def return_cmd(self, items):
        return ast.Return()


_parser = None


def _get_parser():
    global _parser
    if _parser is None:
        _parser = Lark(GRAMMAR, parser="lalr", propagate_positions=False)
    return _parser


def _describe_failure(line):
    """Turn a grammar failure into a message naming what is wrong."""
    parts = line.split()
    mnemonic = parts[0]
    if mnemonic not in USAGE:
        return ParseError(f"unknown command '{mnemonic}'")
    usage = USAGE[mnemonic]
    expected = len(usage.split()) - 1
    got = len(parts) - 1
    if got < expected:
        return ParseError(f"missing argument for '{mnemonic}'", hint=f"expected: {usage}")
    if got > expected:
        return ParseError(f"too many arguments for '{mnemonic}'", hint=f"expected: {usage}")
    if usage.endswith(">") and usage.split()[-1] != "<name>" and not parts[-1].isdigit():
        return ParseError(f"'{parts[-1]}' is not an unsigned integer", hint=f"expected: {usage}")
    return ParseError(f"malformed '{mnemonic}' command: {line}", hint=f"expected: {usage}")


def parse_line(line: str) -> ast.Command:
    """Parse one already-filtered VM line into a command.

    Raises ParseError for anything that is not exactly one valid command.
    """
    if not line or not line.strip():
        raise ParseError("empty line")
    try:
        tree = _get_parser().parse(line)
    except UnexpectedInput:
        raise _describe_failure(line) from None
    except LarkError as e:
        raise ParseError(f"cannot parse '{line.strip()}': {e}") from None
    builder = ASTBuilder()
    try:
        return builder.transform(tree)
    except VisitError as e:
        if isinstance(e.orig_exc, VMTranslationError):
            raise e.orig_exc from None
        raise


def source_lines(text: str):
    """Yield (lineno, line) for every line holding a command.

    Line numbers are 1-based and refer to the original text; blank lines,
    comment lines and trailing comments are dropped.
    """
    for lineno, raw in enumerate(text.splitlines(), start=1):
        line = raw.split(COMMENT, 1)[0].strip()
        if line:
            yield lineno, line
