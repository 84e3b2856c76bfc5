# Config + process file parser
import re
from typing import Dict, List

from core.process import Process

DEFAULT_TIME_QUANTUM = 2

_HEADER = re.compile(r'^process\s+(\d+)\s*$')


def parse_sysconfig(path: str) -> int:
    time_quantum = DEFAULT_TIME_QUANTUM
    with open(path, 'r') as fh:
        for lineno, line in enumerate(fh, 1):
            line = line.strip()
            if not line or line.startswith('#'):
                continue
            parts = re.split(r'\s+', line)
            if parts[0] == 'timequantum':
                if len(parts) < 2:
                    raise ValueError(f"{path}:{lineno}: timequantum needs a value")
                # timequantum 2instr
                time_quantum = int(parts[1].rstrip('instr'))
                if time_quantum < 1:
                    raise ValueError(f"{path}:{lineno}: time quantum must be positive, got {time_quantum}")
    return time_quantum


def parse_processes(path: str) -> Dict[int, List[str]]:
    programs: Dict[int, List[str]] = {}
    current = None
    with open(path, 'r') as fh:
        for lineno, raw in enumerate(fh, 1):
            line = raw.rstrip('\n')
            if not line.strip() or line.strip().startswith('#'):
                continue
            if not line.startswith('\t') and not line.startswith(' '):
                # process header: process <pid>
                m = _HEADER.match(line.strip())
                if not m:
                    raise ValueError(f"{path}:{lineno}: expected 'process <pid>', got {line.strip()!r}")
                current = int(m.group(1))
                if current in programs:
                    raise ValueError(f"{path}:{lineno}: duplicate process {current}")
                programs[current] = []
            else:
                # instruction line: one or more tokens
                if current is None:
                    raise ValueError(f"{path}:{lineno}: instruction before any process header")
                programs[current].extend(re.split(r'\s+', line.strip()))
    return programs


def load_processes(path: str) -> List[Process]:
    return [Process(pid, tokens) for pid, tokens in parse_processes(path).items()]
