"""Memory layout of the target machine and segment address resolution."""
from dataclasses import dataclass
from typing import Union

from .ast import Segment
from .diagnostics import SemanticError


# Base pointer registers of the indirectly addressed segments
BASE_REGISTERS = {
    Segment.LOCAL: 'LCL',
    Segment.ARGUMENT: 'ARG',
    Segment.THIS: 'THIS',
    Segment.THAT: 'THAT',
}

# Frame registers saved by a call, in push order
FRAME_REGISTERS = ('LCL', 'ARG', 'THIS', 'THAT')

POINTER_REGISTERS = ('THIS', 'THAT')

TEMP_BASE = 5          # temp i lives at RAM[5 + i]
SCRATCH = ('R13', 'R14')
STACK_BASE = 256       # first address above reserved low memory
ENTRY_POINT = 'Sys.init'

# Exclusive upper bounds for offsets
SEGMENT_LIMITS = {
    Segment.TEMP: 8,        # RAM[5..12]
    Segment.POINTER: 2,
    Segment.STATIC: 239,    # RAM[16..255]
}


@dataclass(frozen=True)
class Immediate:
    value: int


@dataclass(frozen=True)
class Direct:
    """A fixed memory location, named by symbol or numeric address."""
    symbol: str


@dataclass(frozen=True)
class Indirect:
    """Base register contents plus offset."""
    base: str
    offset: int


Address = Union[Immediate, Direct, Indirect]


def resolve(segment: Segment, offset: int, ctx) -> Address:
    """Map segment + offset to an addressing strategy.

    Static symbols are namespaced by the context's current file name.
    """
    if segment in BASE_REGISTERS:
        return Indirect(base=BASE_REGISTERS[segment], offset=offset)
    if segment is Segment.CONSTANT:
        return Immediate(value=offset)
    if segment is Segment.STATIC:
        return Direct(symbol=ctx.static_symbol(offset))
    if segment is Segment.TEMP:
        return Direct(symbol=str(TEMP_BASE + offset))
    if segment is Segment.POINTER:
        return Direct(symbol=POINTER_REGISTERS[offset])
    raise SemanticError(f"unsupported segment {segment!r}")
