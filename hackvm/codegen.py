from typing import List

from . import ast
from . import codegen_utils
from .codegen_utils import jump, pop_d, push_d, push_register, push_zero
from .context import TranslatorContext
from .diagnostics import SemanticError
from .segments import (
    ENTRY_POINT, FRAME_REGISTERS, SCRATCH, STACK_BASE,
    Direct, Immediate, Indirect, resolve,
)
from .validator import validate_command


# Computation written back to the second operand's slot; D holds the top
BINARY_COMP = {
    'add': 'D+M',
    'sub': 'M-D',
    'and': 'D&M',
    'or': 'D|M',
}

UNARY_COMP = {
    'neg': '-M',
    'not': '!M',
}

# x - y is in D when the jump is tested
COMPARISON_JUMP = {
    'eq': 'JEQ',
    'lt': 'JLT',
    'gt': 'JGT',
}

# Frame slots below the saved LCL, restored in this order on return
RESTORE_ORDER = ('THAT', 'THIS', 'ARG', 'LCL')


class CodeGen:
    """Translate commands into assembly blocks.

    Each call returns one independent block of lines. The only state touched
    is the shared TranslatorContext (label counters, current file name).
    """

    def __init__(self, ctx: TranslatorContext, annotate: bool = True):
        self.ctx = ctx
        self.annotate = annotate

    def gen_command(self, cmd) -> List[str]:
        validate_command(cmd)

        if isinstance(cmd, ast.Push):
            code = self._emit_push(cmd)
        elif isinstance(cmd, ast.Pop):
            code = self._emit_pop(cmd)
        elif isinstance(cmd, ast.Arithmetic):
            code = self._emit_arithmetic(cmd)
        elif isinstance(cmd, ast.Label):
            code = [f"({cmd.name})"]
        elif isinstance(cmd, ast.Goto):
            code = jump(cmd.name)
        elif isinstance(cmd, ast.IfGoto):
            # any non-zero value counts as true
            code = pop_d() + [f"@{cmd.name}", "D;JNE"]
        elif isinstance(cmd, ast.Function):
            code = self._emit_function(cmd)
        elif isinstance(cmd, ast.Call):
            code = self._emit_call(cmd.name, cmd.n_args)
        elif isinstance(cmd, ast.Return):
            code = self._emit_return()
        else:
            raise SemanticError(f"cannot generate code for {cmd!r}")

        if self.annotate:
            code = [codegen_utils.command_to_comment(cmd)] + code
        return code

    def gen_bootstrap(self) -> List[str]:
        """SP = 256, then call the entry point with no arguments."""
        code = [f"@{STACK_BASE}", "D=A", "@SP", "M=D"]
        code += self._emit_call(ENTRY_POINT, 0)
        if self.annotate:
            code = ["// bootstrap"] + code
        return code

    # Memory access

    def _emit_push(self, cmd: ast.Push) -> List[str]:
        addr = resolve(cmd.segment, cmd.offset, self.ctx)
        if isinstance(addr, Immediate):
            code = [f"@{addr.value}", "D=A"]
        elif isinstance(addr, Direct):
            code = [f"@{addr.symbol}", "D=M"]
        else:
            code = [f"@{addr.offset}", "D=A", f"@{addr.base}", "A=D+M", "D=M"]
        return code + push_d()

    def _emit_pop(self, cmd: ast.Pop) -> List[str]:
        addr = resolve(cmd.segment, cmd.offset, self.ctx)
        if isinstance(addr, Direct):
            return pop_d() + [f"@{addr.symbol}", "M=D"]
        # Target address goes to scratch first: popping needs D as well
        scratch = SCRATCH[0]
        code = [f"@{addr.base}", "D=M", f"@{addr.offset}", "D=D+A", f"@{scratch}", "M=D"]
        code += pop_d()
        code += [f"@{scratch}", "A=M", "M=D"]
        return code

    # Arithmetic and logic

    def _emit_arithmetic(self, cmd: ast.Arithmetic) -> List[str]:
        if cmd.is_unary:
            return ["@SP", "A=M-1", f"M={UNARY_COMP[cmd.op]}"]
        if cmd.is_binary:
            return pop_d() + ["@SP", "AM=M-1", f"M={BINARY_COMP[cmd.op]}", "@SP", "M=M+1"]
        return self._emit_comparison(cmd.op)

    def _emit_comparison(self, op: str) -> List[str]:
        true_label, end_label = self.ctx.next_jump_labels()
        code = pop_d()
        code += ["@SP", "AM=M-1", "D=M-D"]
        code += [f"@{true_label}", f"D;{COMPARISON_JUMP[op]}"]
        code += ["@SP", "A=M", "M=0"]
        code += jump(end_label)
        code += [f"({true_label})", "@SP", "A=M", "M=-1"]
        code += [f"({end_label})", "@SP", "M=M+1"]
        return code

    # Functions

    def _emit_function(self, cmd: ast.Function) -> List[str]:
        code = [f"({cmd.name})"]
        for _ in range(cmd.n_locals):
            code += push_zero()
        return code

    def _emit_call(self, name: str, n_args: int) -> List[str]:
        return_label = self.ctx.next_return_label(name)
        code = [f"@{return_label}", "D=A"] + push_d()
        for reg in FRAME_REGISTERS:
            code += push_register(reg)
        # LCL = SP
        code += ["@SP", "D=M", "@LCL", "M=D"]
        # ARG = SP - n_args - 5
        code += ["@SP", "D=M", f"@{n_args + 5}", "D=D-A", "@ARG", "M=D"]
        code += jump(name)
        code += [f"({return_label})"]
        return code

    def _emit_return(self) -> List[str]:
        frame, ret = SCRATCH
        # frame = LCL; ret = *(frame - 5), read before *ARG is overwritten
        code = ["@LCL", "D=M", f"@{frame}", "M=D"]
        code += ["@5", "A=D-A", "D=M", f"@{ret}", "M=D"]
        # *ARG = pop(); SP = ARG + 1
        code += pop_d() + ["@ARG", "A=M", "M=D"]
        code += ["@ARG", "D=M+1", "@SP", "M=D"]
        for reg in RESTORE_ORDER:
            code += [f"@{frame}", "AM=M-1", "D=M", f"@{reg}", "M=D"]
        code += [f"@{ret}", "A=M", "0;JMP"]
        return code
