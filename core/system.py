from dataclasses import dataclass
from typing import Iterable, List, Optional

from core.dispatcher import CycleResult, Dispatcher
from core.errors import InvalidQuantum
from core.event import EventSink
from core.process import Process


@dataclass(frozen=True)
class Measurements:
    cycles: int
    busy_cycles: int
    instructions: int

    @property
    def idle_cycles(self) -> int:
        return self.cycles - self.busy_cycles

    @property
    def cpu_utilisation(self) -> int:
        return self.busy_cycles * 100 // self.cycles if self.cycles > 0 else 0


class System:
    """Drives dispatcher cycles until no process is ready or blocked.

    Every dispatch either advances a program counter or terminates its
    process, and every block expires after finitely many ticks, so the run
    ends for any set of finite programs.
    """

    def __init__(self, processes: Iterable[Process], time_quantum: int, sink: Optional[EventSink] = None,
                 keep_history: bool = True):
        if isinstance(time_quantum, bool) or not isinstance(time_quantum, int) or time_quantum < 1:
            raise InvalidQuantum(time_quantum)
        self.processes: List[Process] = list(processes)
        self.time_quantum = time_quantum
        self.dispatcher = Dispatcher(sink=sink)
        self.keep_history = keep_history
        self.history: List[CycleResult] = []

        # stats
        self.busy_cycles = 0
        self.instructions = 0

    def start(self) -> Measurements:
        self.dispatcher.admit(self.processes)
        return self.run()

    def step(self) -> CycleResult:
        result = self.dispatcher.run_cycle(self.time_quantum)
        if self.keep_history:
            self.history.append(result)
        if not result.idle:
            self.busy_cycles += 1
        self.instructions += result.executed
        return result

    def run(self) -> Measurements:
        while self.dispatcher.has_work():
            self.step()
        return self.measurements()

    def measurements(self) -> Measurements:
        return Measurements(
            cycles=self.dispatcher.cycle,
            busy_cycles=self.busy_cycles,
            instructions=self.instructions,
        )
