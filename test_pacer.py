"""
Tests for the pacing protocol: pause, resume, cancel and the background runner
"""

import threading
import time

import pytest

from pathviz.pathviz_engine.config import HEADLESS
from pathviz.pathviz_engine.constants import VISITED
from pathviz.pathviz_engine.controller import SearchRunner
from pathviz.pathviz_engine.envs import open_grid, create_test_environment
from pathviz.pathviz_engine.errors import (RunStateError, SearchCancelled, InvalidEndpointError,
                                           UnknownAlgorithmError)
from pathviz.pathviz_engine.pacer import Pacer, step_delay
from pathviz.pathviz_engine.result import RunState, StepEvent
from pathviz.pathviz_engine.search import SearchEngine


def run_in_thread(space, pacer, algorithm='bfs'):
    outcome = {}

    def worker():
        try:
            outcome['result'] = SearchEngine().run(space, space.start, space.end, algorithm, pacer=pacer)
        except Exception as exc:
            outcome['error'] = exc

    thread = threading.Thread(target=worker, daemon=True)
    thread.start()
    return thread, outcome


def wait_until(predicate, timeout=2.0):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.005)
    return predicate()


def test_step_delay():
    assert step_delay(1) == 100
    assert step_delay(50) == 51
    assert step_delay(100) == 1
    assert step_delay(200) == 1


def test_state_machine():
    cleared = []
    pacer = Pacer(time_unit=0, on_clear=lambda: cleared.append(True))
    assert pacer.state is RunState.IDLE
    assert not pacer.pause()

    pacer.begin()
    assert cleared == [True]
    with pytest.raises(RunStateError):
        pacer.begin()

    assert pacer.toggle_pause() is True
    assert pacer.state is RunState.PAUSED
    assert pacer.toggle_pause() is False
    assert pacer.state is RunState.RUNNING

    pacer.complete()
    assert pacer.state is RunState.COMPLETED
    assert not pacer.cancel()
    with pytest.raises(RunStateError):
        pacer.complete()

    pacer.begin()
    assert pacer.cancel()
    with pytest.raises(SearchCancelled):
        pacer.complete()
    with pytest.raises(SearchCancelled):
        pacer.checkpoint()


def test_speed_is_clamped():
    pacer = Pacer(speed=500)
    assert pacer.speed == 200
    pacer.set_speed(0)
    assert pacer.speed == 1
    assert pacer.delay_units == 100


def test_checkpoint_waits_for_the_delay():
    pacer = Pacer(speed=91, time_unit=0.001)
    pacer.begin()
    t0 = time.perf_counter()
    for _ in range(3):
        pacer.checkpoint()
    assert time.perf_counter() - t0 >= 0.025


def test_cancel_interrupts_the_delay():
    pacer = Pacer(speed=1, time_unit=1.0)
    pacer.begin()
    raised = []

    def worker():
        try:
            pacer.checkpoint()
        except SearchCancelled:
            raised.append(True)

    thread = threading.Thread(target=worker, daemon=True)
    thread.start()
    time.sleep(0.05)
    pacer.cancel()
    thread.join(2.0)
    assert not thread.is_alive()
    assert raised == [True]


def test_pause_freezes_and_resume_continues():
    space = create_test_environment()
    events = []
    paused_at = threading.Event()
    pacer = Pacer(time_unit=0, poll_interval=0.01)

    def on_step(event):
        events.append(event)
        if event.kind == VISITED and event.visited == 5:
            pacer.pause()
            paused_at.set()

    pacer.on_step = on_step
    thread, outcome = run_in_thread(space, pacer)

    assert paused_at.wait(2.0)
    time.sleep(0.05)
    frozen = len(events)
    time.sleep(0.05)
    assert len(events) == frozen
    assert events[-1].kind == VISITED
    assert pacer.state is RunState.PAUSED

    assert pacer.resume()
    thread.join(5.0)
    assert not thread.is_alive()
    assert outcome['result'].completed
    assert outcome['result'].found


def test_cancel_while_paused():
    space = create_test_environment()
    paused_at = threading.Event()
    pacer = Pacer(time_unit=0, poll_interval=0.01)

    def on_step(event):
        if event.kind == VISITED and event.visited == 3:
            pacer.pause()
            paused_at.set()

    pacer.on_step = on_step
    thread, outcome = run_in_thread(space, pacer)
    assert paused_at.wait(2.0)
    pacer.cancel()
    thread.join(2.0)

    result = outcome['result']
    assert result.status is RunState.CANCELLED
    assert result.path == ()
    assert result.visited == 3


def test_external_pause_and_stop_predicates():
    space = create_test_environment()
    hold = threading.Event()
    stop = threading.Event()
    steps = []

    def on_step(event):
        if event.kind == VISITED:
            steps.append(event)
            if len(steps) == 4:
                hold.set()

    pacer = Pacer(time_unit=0, poll_interval=0.01, on_step=on_step,
                  is_paused=hold.is_set, should_stop=stop.is_set)
    thread, outcome = run_in_thread(space, pacer)

    assert wait_until(hold.is_set)
    time.sleep(0.05)
    assert len(steps) == 4
    stop.set()
    thread.join(2.0)
    assert outcome['result'].cancelled
    assert pacer.state is RunState.CANCELLED


def test_callback_error_aborts_the_run():
    def on_step(event):
        raise RuntimeError("display gone")

    pacer = Pacer(time_unit=0, on_step=on_step)
    space = open_grid(5)
    with pytest.raises(RuntimeError):
        SearchEngine().run(space, space.start, space.end, 'bfs', pacer=pacer)
    assert pacer.state is RunState.CANCELLED


def test_reveal_path_uses_path_length():
    seen = []
    pacer = Pacer(time_unit=0, on_step=seen.append)
    pacer.begin()
    pacer.reveal_path([(0, 0), (0, 1), (0, 2)])
    assert [e.path_length for e in seen] == [1, 2, 3]
    assert all(isinstance(e, StepEvent) for e in seen)


def test_reveal_path_waits_half_the_step_delay():
    # speed 81: 20 units per visited node, 10 per revealed node
    pacer = Pacer(speed=81, time_unit=0.001)
    pacer.begin()
    t0 = time.perf_counter()
    pacer.reveal_path([(0, 0), (0, 1), (0, 2)])
    elapsed = time.perf_counter() - t0
    assert 0.03 <= elapsed < 0.06


def test_runner_reports_completion():
    space = open_grid(5)
    completed = []
    runner = SearchRunner(time_unit=0, on_complete=completed.append)
    runner.start(space, space.start, space.end, 'astar')
    assert runner.join(5.0)
    assert runner.last_result.completed
    assert completed == [runner.last_result]
    assert runner.state is RunState.COMPLETED
    assert not runner.is_active


def test_runner_stop_is_not_a_completion():
    space = create_test_environment()
    completed = []
    runner = SearchRunner(speed=1, time_unit=0.01, on_complete=completed.append)
    runner.start(space, space.start, space.end, 'bfs')
    assert wait_until(lambda: runner.state is RunState.RUNNING)
    assert runner.stop()
    assert runner.join(2.0)
    assert runner.last_result.cancelled
    assert completed == []


def test_runner_restart_cancels_previous_run():
    space = create_test_environment()
    results = []
    runner = SearchRunner(speed=1, time_unit=0.01, on_complete=results.append)
    runner.start(space, space.start, space.end, 'bfs')
    assert wait_until(lambda: runner.state is RunState.RUNNING)

    runner.speed = 200
    runner.time_unit = 0
    runner.start(space, space.start, space.end, 'dijkstra')
    assert runner.join(5.0)
    assert [r.algorithm for r in results] == ['dijkstra']


def test_runner_snapshots_the_space():
    space = open_grid(5)
    runner = SearchRunner(speed=91, time_unit=0.001)
    runner.start(space, space.start, space.end, 'bfs')
    space.set_wall((0, 1))
    space.set_wall((1, 0))
    assert runner.join(5.0)
    assert runner.last_result.found


def test_runner_pause_and_resume():
    space = open_grid(5)
    runner = SearchRunner(speed=1, time_unit=0.001, poll_interval=0.01)
    runner.start(space, space.start, space.end, 'bfs')
    assert wait_until(lambda: runner.state is RunState.RUNNING)
    assert runner.pause()
    assert runner.is_paused
    assert runner.toggle_pause() is False
    runner.set_speed(200)
    assert runner.join(5.0)
    assert runner.last_result.completed


def test_runner_rejects_bad_requests_without_touching_the_active_run():
    space = create_test_environment()
    runner = SearchRunner(speed=1, time_unit=0.01)
    runner.start(space, space.start, space.end, 'bfs')
    assert wait_until(lambda: runner.state is RunState.RUNNING)

    with pytest.raises(InvalidEndpointError):
        runner.start(space, (99, 99), space.end, 'bfs')
    with pytest.raises(UnknownAlgorithmError):
        runner.start(space, space.start, space.end, 'bogus')
    with pytest.raises(ValueError):
        runner.start(space, space.start, None, 'astar')
    assert runner.is_active
    assert runner.state is RunState.RUNNING

    assert runner.stop()
    assert runner.join(2.0)
    assert runner.last_result.cancelled


def test_runner_records_callback_errors():
    space = open_grid(5)

    def broken(event):
        raise RuntimeError("display gone")

    runner = SearchRunner(time_unit=0, on_step=broken)
    runner.start(space, space.start, space.end, 'bfs')
    assert runner.join(2.0)
    assert runner.last_result is None
    assert isinstance(runner.last_error, RuntimeError)


def test_runner_from_config():
    config = HEADLESS.with_algorithm('dijkstra').with_speed(150)
    completed = []
    runner = SearchRunner.from_config(config, on_complete=completed.append)
    assert (runner.speed, runner.time_unit, runner.poll_interval) == \
        (150, config.time_unit, config.poll_interval)

    space = open_grid(5)
    runner.start_config(space, space.start, space.end, config.with_speed(200))
    assert runner.join(5.0)
    assert runner.speed == 200
    assert [r.algorithm for r in completed] == ['dijkstra']
    assert completed[0].path_length == 9
