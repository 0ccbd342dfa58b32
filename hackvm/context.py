from dataclasses import dataclass
from typing import Tuple


@dataclass
class TranslatorContext:
    """State shared by every code generator during one translation run.

    The counters only ever grow. Switching input files changes `filename`
    and nothing else, so generated labels stay unique across the whole output.
    """
    filename: str = ""
    jump_counter: int = 0
    call_counter: int = 0

    def set_file(self, stem: str):
        self.filename = stem

    def next_jump_labels(self) -> Tuple[str, str]:
        """Allocate the true/end labels for one comparison."""
        self.jump_counter += 1
        return f"JUMP_START_{self.jump_counter}", f"JUMP_END_{self.jump_counter}"

    def next_return_label(self, function: str) -> str:
        """Allocate the return address label for one call site."""
        self.call_counter += 1
        return f"{function}$ret.{self.call_counter}"

    def static_symbol(self, offset: int) -> str:
        return f"{self.filename}.{offset}"
