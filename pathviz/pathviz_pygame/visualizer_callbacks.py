"""
Callbacks the search thread calls into. They only touch the display copy of
the grid, under its lock; the render loop reads the same copy.
"""

import threading

from ..pathviz_engine.constants import VISITED, FRONTIER, PATH


class DisplayState:
    def __init__(self, space):
        self.space = space
        self.lock = threading.RLock()
        self.visited_count = 0
        self.frontier_count = 0
        self.path_length = 0
        self.result = None


def update_display(display, event):
    with display.lock:
        display.space.mark(event.coord, event.kind)
        if event.kind in (VISITED, FRONTIER):
            display.visited_count = event.visited
            display.frontier_count = event.frontier
        elif event.kind == PATH:
            display.path_length = event.path_length


def clear_display(display):
    with display.lock:
        display.space.clear_visualization()
        display.visited_count = 0
        display.frontier_count = 0
        display.path_length = 0
        display.result = None


def finish_display(display, result):
    with display.lock:
        display.result = result
        display.visited_count = result.visited
        display.path_length = result.path_length
