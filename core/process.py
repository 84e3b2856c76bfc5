from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterable, Optional

from core.errors import IllegalTransition, InvariantViolation


class ProcessState(Enum):
    NEW = auto()
    READY = auto()
    RUNNING = auto()
    BLOCKED = auto()
    TERMINATED = auto()


class Trigger(Enum):
    ADMIT = auto()
    DISPATCH = auto()
    PREEMPT = auto()     # quantum exhausted, still runnable
    BLOCK = auto()       # I/O instruction
    TERMINATE = auto()   # FIN or pc overrun
    WAKE = auto()        # block countdown expired


_TRANSITIONS = {
    (ProcessState.NEW, Trigger.ADMIT): ProcessState.READY,
    (ProcessState.READY, Trigger.DISPATCH): ProcessState.RUNNING,
    (ProcessState.RUNNING, Trigger.PREEMPT): ProcessState.READY,
    (ProcessState.RUNNING, Trigger.BLOCK): ProcessState.BLOCKED,
    (ProcessState.RUNNING, Trigger.TERMINATE): ProcessState.TERMINATED,
    (ProcessState.BLOCKED, Trigger.WAKE): ProcessState.READY,
}


def transition(state: ProcessState, trigger: Trigger) -> ProcessState:
    """Return the state reached from ``state`` on ``trigger``.

    TERMINATED has no outgoing edge, so any trigger on it raises.
    """
    try:
        return _TRANSITIONS[(state, trigger)]
    except KeyError:
        raise IllegalTransition(state, trigger) from None


@dataclass(frozen=True)
class ProcessSnapshot:
    pid: int
    state: ProcessState
    pc: int
    block_remaining: int


class Process:
    def __init__(self, pid: int, instructions: Iterable[str]):
        self.pid = pid
        self.instructions = tuple(instructions)
        self.state = ProcessState.NEW
        self.pc = 0
        self.block_remaining = 0
        # accounting
        self.dispatches = 0
        self.executed = 0
        self.finished_cycle: Optional[int] = None

    def _apply(self, trigger: Trigger) -> None:
        self.state = transition(self.state, trigger)

    def admit(self) -> None:
        self._apply(Trigger.ADMIT)

    def dispatch(self) -> None:
        self._apply(Trigger.DISPATCH)
        self.dispatches += 1

    def preempt(self) -> None:
        self._apply(Trigger.PREEMPT)

    def block(self, duration: int) -> None:
        self._apply(Trigger.BLOCK)
        self.block_remaining = duration

    def terminate(self) -> None:
        self._apply(Trigger.TERMINATE)

    def wake(self) -> None:
        if self.block_remaining > 0:
            raise InvariantViolation(
                f"pid={self.pid} woken with {self.block_remaining} ticks still remaining")
        self._apply(Trigger.WAKE)

    @property
    def exhausted(self) -> bool:
        return self.pc >= len(self.instructions)

    def fetch(self) -> str:
        """Return the instruction at the pc and advance past it."""
        if self.exhausted:
            raise InvariantViolation(f"pid={self.pid} fetch past end of program (pc={self.pc})")
        token = self.instructions[self.pc]
        self.pc += 1
        return token

    def snapshot(self) -> ProcessSnapshot:
        return ProcessSnapshot(self.pid, self.state, self.pc, self.block_remaining)

    def __repr__(self) -> str:
        return f"Process(pid={self.pid}, state={self.state.name}, pc={self.pc}/{len(self.instructions)})"
