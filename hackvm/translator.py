"""One translation run: bootstrap, then files in the order given."""
import sys
from typing import Iterable, List, Optional, TextIO, Tuple, Union

from . import ast
from .codegen import CodeGen
from .context import TranslatorContext
from .diagnostics import SemanticError, VMTranslationError
from .parser import parse_line, source_lines


class Translator:
    """Owns the context and output sink of a single run.

    Usage:
        with Translator(out) as tr:
            tr.bootstrap()
            tr.translate_source("Main", text)
    """

    def __init__(self, out: TextIO, *, annotate: bool = True, print_debug: bool = False):
        self.out = out
        self.print_debug = print_debug
        self.ctx = TranslatorContext()
        self.codegen = CodeGen(self.ctx, annotate=annotate)
        self.warnings: List[str] = []
        self.labels = {}  # label name -> (file, line) of first definition
        self.bootstrapped = False
        self.lines_translated = 0

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False

    def close(self):
        self.out.flush()

    def _write(self, code: List[str]):
        self.out.write("\n".join(code))
        self.out.write("\n")

    def bootstrap(self):
        """Emit the startup code. Allowed once per run, before any command."""
        if self.bootstrapped:
            raise SemanticError("bootstrap already emitted for this run")
        if self.lines_translated:
            raise SemanticError("bootstrap must come before any translated command")
        self.bootstrapped = True
        self._write(self.codegen.gen_bootstrap())

    def translate_line(self, line: str, lineno: Optional[int] = None):
        try:
            cmd = parse_line(line)
            if self.print_debug:
                print(f"DEBUG: {self.ctx.filename}:{lineno}: {cmd}", file=sys.stderr)
            if isinstance(cmd, ast.Label):
                self._note_label(cmd.name, lineno)
            code = self.codegen.gen_command(cmd)
        except VMTranslationError as e:
            raise e.located(line=lineno, file=self.ctx.filename)
        self._write(code)
        self.lines_translated += 1

    def translate_file(self, stem: str, lines: Iterable[Union[str, Tuple[int, str]]]):
        """Translate pre-filtered lines of one input file.

        `lines` holds (lineno, text) pairs or bare strings, which are then
        numbered from 1.
        """
        self.ctx.set_file(stem)
        for index, item in enumerate(lines, start=1):
            if isinstance(item, tuple):
                lineno, line = item
            else:
                lineno, line = index, item
            self.translate_line(line, lineno)

    def translate_source(self, stem: str, text: str):
        """Translate raw file contents, skipping comments and blank lines."""
        self.translate_file(stem, source_lines(text))

    def _note_label(self, name: str, lineno):
        here = (self.ctx.filename, lineno)
        first = self.labels.get(name)
        if first is None:
            self.labels[name] = here
            return
        self.warnings.append(
            f"{here[0]}:{here[1]}: label '{name}' already defined at {first[0]}:{first[1]}"
        )
