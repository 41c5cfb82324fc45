"""
Background runner: owns one search thread and one pacer at a time.

The viewer (or any other caller) starts runs here and steers them with
pause/resume/stop while its own loop keeps drawing.
"""

import logging
import threading
from typing import Callable, Optional

from .constants import DEFAULT_SPEED, TIME_UNIT, PAUSE_POLL_INTERVAL
from .config import RunConfig, clamp_speed
from .pacer import Pacer, ACTIVE_STATES
from .registry import get_algorithm
from .result import RunState, SearchResult, StepEvent
from .search import SearchEngine

logger = logging.getLogger(__name__)


class SearchRunner:
    def __init__(self, engine: Optional[SearchEngine] = None,
                 on_step: Optional[Callable[[StepEvent], None]] = None,
                 on_clear: Optional[Callable[[], None]] = None,
                 on_complete: Optional[Callable[[SearchResult], None]] = None,
                 speed: int = DEFAULT_SPEED, time_unit: float = TIME_UNIT,
                 poll_interval: float = PAUSE_POLL_INTERVAL):
        self.engine = engine or SearchEngine()
        self.on_step = on_step
        self.on_clear = on_clear
        self.on_complete = on_complete
        self.speed = clamp_speed(speed)
        self.time_unit = time_unit
        self.poll_interval = poll_interval

        self.last_result: Optional[SearchResult] = None
        self.last_error: Optional[BaseException] = None
        self._pacer: Optional[Pacer] = None
        self._stop_event: Optional[threading.Event] = None
        self._thread: Optional[threading.Thread] = None

    @classmethod
    def from_config(cls, config: RunConfig, **callbacks) -> "SearchRunner":
        return cls(speed=config.speed, time_unit=config.time_unit,
                   poll_interval=config.poll_interval, **callbacks)

    # ---------- run lifecycle ----------
    def start(self, space, start, goal=None, algorithm: str = 'astar',
              diagonal: Optional[bool] = None, reveal_path: bool = True,
              seed: Optional[int] = None):
        """
        Cancel any active run, then search a snapshot of ``space`` in the background.

        Bad endpoints or an unknown algorithm raise here, before the active
        run is touched.
        """
        info = get_algorithm(algorithm)
        space.validate_endpoint(tuple(start), 'start')
        if goal is not None:
            space.validate_endpoint(tuple(goal), 'goal')
        elif info.finds_path:
            raise ValueError(f"algorithm '{algorithm}' needs a goal")

        self.stop()
        self.join()

        snapshot = space.snapshot()
        stop_event = threading.Event()
        pacer = Pacer(speed=self.speed, on_step=self.on_step, on_clear=self.on_clear,
                      should_stop=stop_event.is_set, time_unit=self.time_unit,
                      poll_interval=self.poll_interval)
        self._stop_event = stop_event
        self._pacer = pacer
        self.last_result = None
        self.last_error = None

        def worker():
            try:
                result = self.engine.run(snapshot, start, goal, algorithm, pacer=pacer,
                                         diagonal=diagonal, reveal_path=reveal_path, seed=seed)
            except Exception as exc:
                # A failing callback ends the run; the caller inspects last_error
                logger.exception("Search run failed")
                self.last_error = exc
                return
            self.last_result = result
            if result.completed and self.on_complete is not None:
                self.on_complete(result)

        self._thread = threading.Thread(target=worker, name=f"pathviz-{algorithm}", daemon=True)
        self._thread.start()
        logger.debug("Started %s run", algorithm)

    def start_config(self, space, start, goal, config: RunConfig):
        """``start`` with the run options taken from ``config``."""
        self.set_speed(config.speed)
        self.start(space, start, goal, config.algorithm, diagonal=config.diagonal,
                   reveal_path=config.reveal_path, seed=config.seed)

    def stop(self) -> bool:
        if self._stop_event is None:
            return False
        self._stop_event.set()
        return self._pacer.cancel()

    def join(self, timeout: Optional[float] = None) -> bool:
        """Wait for the worker; returns True once no run is left alive."""
        if self._thread is None:
            return True
        self._thread.join(timeout)
        return not self._thread.is_alive()

    # ---------- steering ----------
    def pause(self) -> bool:
        return self._pacer is not None and self._pacer.pause()

    def resume(self) -> bool:
        return self._pacer is not None and self._pacer.resume()

    def toggle_pause(self) -> bool:
        return self._pacer is not None and self._pacer.toggle_pause()

    def set_speed(self, speed: int):
        self.speed = clamp_speed(speed)
        if self._pacer is not None:
            self._pacer.set_speed(self.speed)

    # ---------- queries ----------
    @property
    def state(self) -> RunState:
        if self._pacer is None:
            return RunState.IDLE
        return self._pacer.state

    @property
    def is_active(self) -> bool:
        if self._thread is None or not self._thread.is_alive():
            return False
        return self.state in ACTIVE_STATES or self.state is RunState.IDLE

    @property
    def is_paused(self) -> bool:
        return self.state is RunState.PAUSED
