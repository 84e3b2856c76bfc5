# Text rendering of dispatcher events and run results
from typing import Iterable, List

from core.event import Event, EventType
from core.process import Process
from core.system import Measurements


def format_event(event: Event) -> str:
    line = f"[cycle={event.cycle}] pid={event.pid} {event.type.name}"
    if event.type is EventType.ENQUEUED:
        line += f" queue={event.queue.name}"
    elif event.type is EventType.INSTRUCTION_EXECUTED:
        line += f" token={event.token}"
    elif event.type is EventType.BLOCKED:
        line += f" duration={event.duration}"
    return line


def print_event(event: Event) -> None:
    print(format_event(event))


def format_summary(processes: Iterable[Process]) -> List[str]:
    lines = []
    for p in processes:
        finished = p.finished_cycle if p.finished_cycle is not None else '-'
        lines.append(f"pid {p.pid} dispatches {p.dispatches} executed {p.executed} finished {finished}")
    return lines


def format_measurements(m: Measurements) -> str:
    return f"measurements {m.cycles} {m.cpu_utilisation}"
