"""
rrdispatch.py


Round-robin dispatcher simulation with cooperative I/O blocking.


Each process is a list of instruction tokens: ``FIN`` ends the process,
``ES<n>`` blocks it for n dispatcher cycles and anything else is a
compute instruction. Every cycle the dispatcher takes the head of the
ready queue, runs it for at most one time quantum, files it back into
the ready or blocked queue (or retires it) and then ticks the blocked
queue once. The run ends when both queues are empty.


Usage:
python rrdispatch.py sysconfig.txt processes.txt


The last line of output is ``measurements <cycles> <cpu-utilisation>``.
"""


import argparse
import sys

from core.system import System
from simio.parser import load_processes, parse_sysconfig
from simio.report import format_measurements, format_summary, print_event


def main(argv=None):
    parser = argparse.ArgumentParser(description='rrdispatch (round-robin dispatcher simulator)')
    parser.add_argument('sysconfig', help='Path to sysconfig file')
    parser.add_argument('processes', help='Path to processes file')
    parser.add_argument('-v', '--verbose', action='store_true', help='Print every dispatcher event')
    parser.add_argument('-q', '--quantum', type=int, help='Override the time quantum from sysconfig')
    parser.add_argument('--summary', action='store_true', help='Print per-process accounting')
    args = parser.parse_args(argv)

    try:
        tq = parse_sysconfig(args.sysconfig)
        processes = load_processes(args.processes)
    except (OSError, ValueError) as exc:
        parser.error(str(exc))
    if args.quantum is not None:
        if args.quantum < 1:
            parser.error(f"time quantum must be positive, got {args.quantum}")
        tq = args.quantum

    print(f"found {len(processes)} processes")
    print(f"time quantum is {tq}")
    # events are only rendered, never kept
    sink = print_event if args.verbose else None
    s = System(processes, time_quantum=tq, sink=sink, keep_history=False)
    measurements = s.start()
    if args.summary:
        for line in format_summary(s.processes):
            print(line)
    print(format_measurements(measurements))
    return 0


# ------------------------------- CLI ---------------------------------
if __name__ == '__main__':
    sys.exit(main())
