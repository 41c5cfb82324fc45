"""
Visualization pacer: turns a synchronous search into an observable,
pausable, cancellable process.

Every visited node passes through one suspension point (``step``), where the
pacer hands the classification delta to the progress callback, sleeps for a
speed-derived delay, blocks while paused and unwinds once cancelled.
"""

import logging
import threading
from typing import Callable, Optional

from .config import RunConfig, clamp_speed
from .constants import DEFAULT_SPEED, TIME_UNIT, PAUSE_POLL_INTERVAL, PATH
from .errors import RunStateError, SearchCancelled
from .result import RunState, StepEvent

logger = logging.getLogger(__name__)

ACTIVE_STATES = (RunState.RUNNING, RunState.PAUSED)


def step_delay(speed: int) -> int:
    """Delay in time units per visited node; higher speed, shorter delay."""
    return max(1, 101 - int(speed))


class Pacer:
    def __init__(self, speed: int = DEFAULT_SPEED,
                 on_step: Optional[Callable[[StepEvent], None]] = None,
                 on_clear: Optional[Callable[[], None]] = None,
                 should_stop: Optional[Callable[[], bool]] = None,
                 is_paused: Optional[Callable[[], bool]] = None,
                 time_unit: float = TIME_UNIT,
                 poll_interval: float = PAUSE_POLL_INTERVAL):
        self.speed = clamp_speed(speed)
        self.on_step = on_step
        self.on_clear = on_clear
        self.should_stop = should_stop
        self.is_paused = is_paused
        self.time_unit = time_unit
        self.poll_interval = poll_interval
        self.path_revealed = 0

        # Condition over an RLock; toggle_pause re-enters resume
        self._cond = threading.Condition()
        self._state = RunState.IDLE

    @classmethod
    def from_config(cls, config: RunConfig, **callbacks) -> "Pacer":
        return cls(speed=config.speed, time_unit=config.time_unit,
                   poll_interval=config.poll_interval, **callbacks)

    @classmethod
    def immediate(cls) -> "Pacer":
        """Pacer without callbacks or delays, for headless runs."""
        return cls(time_unit=0.0)

    # ---------- state machine ----------
    @property
    def state(self) -> RunState:
        with self._cond:
            return self._state

    @property
    def delay_units(self) -> int:
        return step_delay(self.speed)

    def set_speed(self, speed: int):
        self.speed = clamp_speed(speed)

    def begin(self):
        """Idle (or finished) -> Running; asks the caller to clear old markings."""
        with self._cond:
            if self._state in ACTIVE_STATES:
                raise RunStateError(f"cannot begin a run while {self._state.value}")
            self._state = RunState.RUNNING
            self.path_revealed = 0
        logger.debug("Pacer running at speed %d", self.speed)
        if self.on_clear is not None:
            self.on_clear()

    def pause(self) -> bool:
        with self._cond:
            if self._state is not RunState.RUNNING:
                return False
            self._state = RunState.PAUSED
            return True

    def resume(self) -> bool:
        with self._cond:
            if self._state is not RunState.PAUSED:
                return False
            self._state = RunState.RUNNING
            self._cond.notify_all()
            return True

    def toggle_pause(self) -> bool:
        """Returns True when the pacer ends up paused."""
        with self._cond:
            if self._state is RunState.PAUSED:
                self.resume()
                return False
            return self.pause()

    def cancel(self) -> bool:
        with self._cond:
            if self._state not in ACTIVE_STATES and self._state is not RunState.IDLE:
                return False
            self._state = RunState.CANCELLED
            self._cond.notify_all()
        logger.debug("Pacer cancelled")
        return True

    def complete(self):
        with self._cond:
            if self._state is RunState.CANCELLED:
                raise SearchCancelled()
            if self._state not in ACTIVE_STATES:
                raise RunStateError(f"cannot complete a run that is {self._state.value}")
            self._state = RunState.COMPLETED
            self._cond.notify_all()

    # ---------- suspension point ----------
    def check(self):
        """Raise SearchCancelled if the run was stopped."""
        if self.should_stop is not None and self.should_stop():
            self.cancel()
        if self.state is RunState.CANCELLED:
            raise SearchCancelled()

    def report(self, event: StepEvent):
        if self.on_step is None:
            return
        try:
            self.on_step(event)
        except Exception:
            # Abort as if cancelled; markings already applied stay with the caller
            with self._cond:
                self._state = RunState.CANCELLED
                self._cond.notify_all()
            raise

    def checkpoint(self, units: Optional[float] = None):
        self.check()
        units = self.delay_units if units is None else units
        seconds = units * self.time_unit
        if seconds > 0:
            with self._cond:
                self._cond.wait_for(lambda: self._state is RunState.CANCELLED, timeout=seconds)
        self._wait_while_paused()
        self.check()

    def step(self, event: StepEvent):
        self.report(event)
        self.checkpoint()

    def reveal_path(self, path):
        """Mark path nodes one at a time at half the per-node delay."""
        for coord in path:
            self.path_revealed += 1
            self.report(StepEvent(PATH, coord, path_length=self.path_revealed))
            self.checkpoint(self.delay_units / 2)

    def _paused(self) -> bool:
        if self._state is RunState.PAUSED:
            return True
        return self.is_paused is not None and bool(self.is_paused())

    def _wait_while_paused(self):
        with self._cond:
            while self._paused():
                if self._state is RunState.CANCELLED:
                    return
                if self.should_stop is not None and self.should_stop():
                    return
                self._cond.wait(self.poll_interval)
