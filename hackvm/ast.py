from dataclasses import dataclass
from enum import Enum
from typing import Union


class Segment(Enum):
    """Virtual memory segments addressable by push/pop."""
    LOCAL = 'local'
    ARGUMENT = 'argument'
    THIS = 'this'
    THAT = 'that'
    CONSTANT = 'constant'
    STATIC = 'static'
    TEMP = 'temp'
    POINTER = 'pointer'


# Arithmetic/logical mnemonics grouped by how they touch the stack
BINARY_OPS = ('add', 'sub', 'and', 'or')
UNARY_OPS = ('neg', 'not')
COMPARISON_OPS = ('eq', 'lt', 'gt')
ARITHMETIC_OPS = BINARY_OPS + UNARY_OPS + COMPARISON_OPS


@dataclass(frozen=True)
class Push:
    segment: Segment
    offset: int

    def to_source(self) -> str:
        return f"push {self.segment.value} {self.offset}"


@dataclass(frozen=True)
class Pop:
    segment: Segment
    offset: int

    def to_source(self) -> str:
        return f"pop {self.segment.value} {self.offset}"


@dataclass(frozen=True)
class Arithmetic:
    """add/sub/neg/not/or/and/eq/lt/gt."""
    op: str

    @property
    def is_binary(self) -> bool:
        return self.op in BINARY_OPS

    @property
    def is_unary(self) -> bool:
        return self.op in UNARY_OPS

    @property
    def is_comparison(self) -> bool:
        return self.op in COMPARISON_OPS

    def to_source(self) -> str:
        return self.op


@dataclass(frozen=True)
class Label:
    name: str

    def to_source(self) -> str:
        return f"label {self.name}"


@dataclass(frozen=True)
class Goto:
    name: str

    def to_source(self) -> str:
        return f"goto {self.name}"


@dataclass(frozen=True)
class IfGoto:
    """Jump when the popped stack top is non-zero."""
    name: str

    def to_source(self) -> str:
        return f"if-goto {self.name}"


@dataclass(frozen=True)
class Function:
    name: str
    n_locals: int

    def to_source(self) -> str:
        return f"function {self.name} {self.n_locals}"


@dataclass(frozen=True)
class Call:
    name: str
    n_args: int

    def to_source(self) -> str:
        return f"call {self.name} {self.n_args}"


@dataclass(frozen=True)
class Return:
    def to_source(self) -> str:
        return "return"


Command = Union[Push, Pop, Arithmetic, Label, Goto, IfGoto, Function, Call, Return]
