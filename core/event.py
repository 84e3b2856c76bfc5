from enum import Enum, auto
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple


class QueueName(Enum):
    READY = auto()
    BLOCKED = auto()


class EventType(Enum):
    ENQUEUED = auto()
    DISPATCHED = auto()
    INSTRUCTION_EXECUTED = auto()
    BLOCKED = auto()
    TERMINATED = auto()


@dataclass(frozen=True)
class Event:
    seq: int
    cycle: int
    pid: int
    type: EventType
    queue: Optional[QueueName] = None      # ENQUEUED
    token: Optional[str] = None            # INSTRUCTION_EXECUTED
    duration: Optional[int] = None         # BLOCKED

    def __repr__(self):
        return f"Event(seq={self.seq}, cycle={self.cycle}, pid={self.pid}, type={self.type.name})"


EventSink = Callable[[Event], None]


class EventRecorder:
    """Keeps every emitted event and forwards it to subscribers.

    Events are frozen, so subscribers and readers of ``events`` get values
    that cannot reach back into the dispatcher.
    """

    def __init__(self):
        self._events: List[Event] = []
        self._subscribers: List[EventSink] = []

    def subscribe(self, sink: EventSink) -> None:
        self._subscribers.append(sink)

    def __call__(self, event: Event) -> None:
        self._events.append(event)
        for sink in self._subscribers:
            sink(event)

    @property
    def events(self) -> Tuple[Event, ...]:
        return tuple(self._events)

    def for_pid(self, pid: int) -> Tuple[Event, ...]:
        return tuple(e for e in self._events if e.pid == pid)

    def __len__(self):
        return len(self._events)
