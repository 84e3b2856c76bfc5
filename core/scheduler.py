# Ready and blocked holding areas
from collections import deque
from typing import List, Optional

from core.process import Process


class ReadyQueue:
    """FIFO of processes waiting for the CPU."""

    def __init__(self):
        self._queue: deque[Process] = deque()

    def enqueue(self, process: Process) -> None:
        self._queue.append(process)

    def dequeue(self) -> Optional[Process]:
        if self._queue:
            return self._queue.popleft()
        return None

    def __contains__(self, process: Process) -> bool:
        return any(p is process for p in self._queue)

    def __len__(self) -> int:
        return len(self._queue)

    def __bool__(self) -> bool:
        return bool(self._queue)

    def pids(self) -> List[int]:
        return [p.pid for p in self._queue]


class BlockedQueue:
    """Processes counting down a simulated I/O wait."""

    def __init__(self):
        self._entries: List[Process] = []

    def enqueue(self, process: Process) -> None:
        self._entries.append(process)

    def tick(self) -> List[Process]:
        """Advance every countdown by one and return the expired processes.

        Decrement and collection happen over the current entries before the
        holding list is rebuilt, so no entry is skipped or visited twice.
        Expired processes keep their insertion order.
        """
        expired = []
        for process in self._entries:
            process.block_remaining -= 1
            if process.block_remaining <= 0:
                expired.append(process)
        if expired:
            self._entries = [p for p in self._entries if p.block_remaining > 0]
        return expired

    def __contains__(self, process: Process) -> bool:
        return any(p is process for p in self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __bool__(self) -> bool:
        return bool(self._entries)

    def remaining(self) -> List[tuple]:
        return [(p.pid, p.block_remaining) for p in self._entries]
