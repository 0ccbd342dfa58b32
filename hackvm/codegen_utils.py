"""Utility functions for code generation."""


def push_d():
    """*SP = D; SP++"""
    return ["@SP", "A=M", "M=D", "@SP", "M=M+1"]


def pop_d():
    """SP--; D = *SP"""
    return ["@SP", "AM=M-1", "D=M"]


def push_register(reg):
    """Push the contents of a named register (LCL, ARG, ...)."""
    return [f"@{reg}", "D=M"] + push_d()


def push_zero():
    return ["@SP", "A=M", "M=0", "@SP", "M=M+1"]


def jump(target):
    return [f"@{target}", "0;JMP"]


def command_to_comment(cmd):
    """Source text for a command, as an assembly comment."""
    return f"// {cmd.to_source()}"
