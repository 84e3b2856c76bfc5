from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple

from core.errors import InvalidQuantum, InvariantViolation
from core.event import Event, EventSink, EventType, QueueName
from core.instruction import Instruction, apply
from core.process import Process, ProcessSnapshot, ProcessState
from core.scheduler import BlockedQueue, ReadyQueue


@dataclass
class CycleResult:
    cycle: int
    pid: Optional[int] = None             # None for an idle cycle
    executed: int = 0
    outcome: Optional[ProcessState] = None
    woken: List[int] = field(default_factory=list)

    @property
    def idle(self) -> bool:
        return self.pid is None


@dataclass(frozen=True)
class DispatcherSnapshot:
    cycle: int
    running: Optional[int]
    ready: Tuple[int, ...]
    blocked: Tuple[Tuple[int, int], ...]


class Dispatcher:
    """Round-robin dispatcher over a ready FIFO and a blocked countdown area.

    The dispatcher is the only owner of its queues and process records. A
    process is held by exactly one of the ready queue, the blocked queue or
    the running slot until it terminates, after which it is held by none.
    """

    def __init__(self, sink: Optional[EventSink] = None):
        self.ready = ReadyQueue()
        self.blocked = BlockedQueue()
        self.running: Optional[Process] = None
        self.pcb_table: Dict[int, ProcessSnapshot] = {}
        self.cycle = 0
        self._sink = sink
        self._seq = 0

    # events
    def _emit(self, etype: EventType, process: Process, **payload) -> None:
        if self._sink is None:
            return
        self._seq += 1
        self._sink(Event(seq=self._seq, cycle=self.cycle, pid=process.pid, type=etype, **payload))

    def _on_instruction(self, process: Process, instr: Instruction) -> None:
        self._emit(EventType.INSTRUCTION_EXECUTED, process, token=instr.token)

    # ownership
    def _holder(self, process: Process) -> Optional[str]:
        if self.running is process:
            return 'running'
        if process in self.ready:
            return 'ready'
        if process in self.blocked:
            return 'blocked'
        return None

    def _claim(self, process: Process) -> None:
        holder = self._holder(process)
        if holder is not None:
            raise InvariantViolation(f"pid={process.pid} is already held by the {holder} slot")
        if process.state is ProcessState.TERMINATED:
            raise InvariantViolation(f"pid={process.pid} is terminated and cannot be re-enqueued")

    def _enqueue_ready(self, process: Process) -> None:
        self._claim(process)
        self.ready.enqueue(process)
        self._emit(EventType.ENQUEUED, process, queue=QueueName.READY)

    def _enqueue_blocked(self, process: Process) -> None:
        self._claim(process)
        self.blocked.enqueue(process)
        self._emit(EventType.BLOCKED, process, duration=process.block_remaining)
        self._emit(EventType.ENQUEUED, process, queue=QueueName.BLOCKED)

    def save_state(self, process: Process) -> ProcessSnapshot:
        snap = process.snapshot()
        self.pcb_table[process.pid] = snap
        return snap

    # admission
    def admit(self, processes: Iterable[Process]) -> None:
        """Move a batch of NEW processes onto the ready queue.

        The whole batch is checked first, so a rejected batch admits nothing.
        """
        batch = list(processes)
        seen = set()
        for process in batch:
            if process.pid in self.pcb_table or process.pid in seen:
                raise InvariantViolation(f"pid={process.pid} has already been admitted")
            if process.state is not ProcessState.NEW:
                raise InvariantViolation(
                    f"pid={process.pid} must be NEW to be admitted, not {process.state.name}")
            seen.add(process.pid)
        for process in batch:
            process.admit()
            self.save_state(process)
            self._enqueue_ready(process)

    def has_work(self) -> bool:
        return bool(self.ready) or bool(self.blocked)

    # the cycle
    def run_cycle(self, quantum: int) -> CycleResult:
        """Dispatch at most one process for up to ``quantum`` instructions, then tick Blocked."""
        if isinstance(quantum, bool) or not isinstance(quantum, int) or quantum < 1:
            raise InvalidQuantum(quantum)
        self.cycle += 1
        result = CycleResult(cycle=self.cycle)

        process = self.ready.dequeue()
        if process is not None:
            self._load(process)
            result.pid = process.pid
            result.executed = self._execute(process, quantum)
            self._file(process)
            self.save_state(process)
            result.outcome = process.state

        for process in self.blocked.tick():
            process.wake()
            self.save_state(process)
            self._enqueue_ready(process)
            result.woken.append(process.pid)
        return result

    def _load(self, process: Process) -> None:
        if self.running is not None:
            raise InvariantViolation(
                f"cannot load pid={process.pid}: pid={self.running.pid} still holds the CPU")
        self._claim(process)
        process.dispatch()
        self.running = process
        self._emit(EventType.DISPATCHED, process)

    def _execute(self, process: Process, quantum: int) -> int:
        executed = 0
        for _ in range(quantum):
            if process.exhausted:
                # ran off the end without FIN
                process.terminate()
                break
            apply(process, process.fetch(), self._on_instruction)
            executed += 1
            if process.state is not ProcessState.RUNNING:
                break
        return executed

    def _file(self, process: Process) -> None:
        self.running = None
        if process.state is ProcessState.RUNNING:
            process.preempt()
            self._enqueue_ready(process)
        elif process.state is ProcessState.BLOCKED:
            self._enqueue_blocked(process)
        elif process.state is ProcessState.TERMINATED:
            process.finished_cycle = self.cycle
            self._emit(EventType.TERMINATED, process)
        else:
            raise InvariantViolation(f"pid={process.pid} left the CPU in state {process.state.name}")

    def snapshot(self) -> DispatcherSnapshot:
        return DispatcherSnapshot(
            cycle=self.cycle,
            running=self.running.pid if self.running is not None else None,
            ready=tuple(self.ready.pids()),
            blocked=tuple(self.blocked.remaining()),
        )
