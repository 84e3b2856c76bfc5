import re
from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable, Optional

from core.process import Process

FINISH_TOKEN = 'FIN'
IO_PREFIX = 'ES'
DEFAULT_IO_DURATION = 1

_IO_DURATION = re.compile(r'[+-]?[0-9]+')
# durations must fit a signed 64-bit integer
_MAX_IO_DURATION = 2 ** 63 - 1
_MIN_IO_DURATION = -2 ** 63


class InstructionKind(Enum):
    COMPUTE = auto()
    IO = auto()
    FINISH = auto()


@dataclass(frozen=True)
class Instruction:
    token: str
    kind: InstructionKind
    duration: int = 0   # ticks, IO only

    def __repr__(self):
        if self.kind is InstructionKind.IO:
            return f"Instruction({self.token!r} IO {self.duration})"
        return f"Instruction({self.token!r} {self.kind.name})"


def decode(token: str) -> Instruction:
    """Classify a token.

    ``FIN`` finishes the process, ``ES<digits>`` blocks it for that many
    ticks and everything else is plain computation. The suffix may carry a
    sign. A suffix that is not an integer, or does not fit in 64 bits,
    blocks for DEFAULT_IO_DURATION. Durations of zero or less still spend
    one tick in the blocked queue.
    """
    if token == FINISH_TOKEN:
        return Instruction(token, InstructionKind.FINISH)
    if token.startswith(IO_PREFIX):
        suffix = token[len(IO_PREFIX):]
        duration = DEFAULT_IO_DURATION
        if _IO_DURATION.fullmatch(suffix):
            value = int(suffix)
            if _MIN_IO_DURATION <= value <= _MAX_IO_DURATION:
                duration = value
        return Instruction(token, InstructionKind.IO, duration)
    return Instruction(token, InstructionKind.COMPUTE)


def apply(process: Process, token: str,
          on_execute: Optional[Callable[[Process, Instruction], None]] = None) -> Instruction:
    """Apply one already-fetched instruction to a running process."""
    instr = decode(token)
    process.executed += 1
    if on_execute is not None:
        on_execute(process, instr)
    if instr.kind is InstructionKind.FINISH:
        process.terminate()
    elif instr.kind is InstructionKind.IO:
        process.block(instr.duration)
    return instr
