# Scheduler errors. Only structural corruption raises; simulated anomalies are absorbed.


class SchedulerError(Exception):
    """Base class for dispatcher failures."""


class InvariantViolation(SchedulerError, RuntimeError):
    """A process record or queue is in a state the dispatcher can never produce."""


class IllegalTransition(InvariantViolation):
    def __init__(self, state, trigger):
        self.state = state
        self.trigger = trigger
        super().__init__(f"no transition from {state.name} on {trigger.name}")


class InvalidQuantum(SchedulerError, ValueError):
    def __init__(self, quantum):
        self.quantum = quantum
        super().__init__(f"time quantum must be a positive integer, got {quantum!r}")
