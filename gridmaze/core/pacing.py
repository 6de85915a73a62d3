import logging
import threading
from typing import Callable, Iterator, Optional

from gridmaze.core.events import EVT_BACKTRACK, Step
from gridmaze.core.grid import Snapshot

logger = logging.getLogger(__name__)

StepObserver = Callable[[Snapshot], None]


class Pacer:
    """
    Cooperative delay between emitted steps.
    Another thread may call interrupt() to cut the current pause short;
    the run then proceeds to its next step immediately.
    """

    def __init__(self):
        self._wake = threading.Event()
        self.interrupted = 0

    def pause(self, seconds: float) -> bool:
        """Returns False if the pause was interrupted."""
        if seconds <= 0:
            return True
        if self._wake.wait(seconds):
            self._wake.clear()
            self.interrupted += 1
            logger.debug("Pause interrupted, proceeding")
            return False
        return True

    def interrupt(self):
        self._wake.set()


def drive(steps: Iterator[Step], on_step: Optional[StepObserver] = None,
          step_delay: float = 0.0, pacer: Optional[Pacer] = None) -> int:
    """
    Runs a step iterator to completion, feeding each snapshot to `on_step`
    and pausing `step_delay` seconds between steps (half that after a backtrack).
    There is no pause after the last step.
    Exceptions raised by the observer propagate after the iterator is closed.
    Returns the number of steps emitted.
    """
    if pacer is None:
        pacer = Pacer()

    emitted = 0
    pending = 0.0
    try:
        for step in steps:
            if pending > 0:
                pacer.pause(pending)
            emitted += 1
            if on_step is not None:
                on_step(step.snapshot)
            pending = step_delay / 2 if step.kind == EVT_BACKTRACK else step_delay
    finally:
        steps.close()
    return emitted
