import heapq
import itertools
from collections import deque


class PriorityFrontier:
    """
    Min-priority frontier with stable ties.

    The same element may be enqueued several times with different priorities;
    there is no decrease-key, so consumers skip stale entries through their
    visited set.
    """

    def __init__(self):
        self.elements = []
        self._counter = itertools.count()

    def __len__(self):
        return len(self.elements)

    def is_empty(self) -> bool:
        return not self.elements

    def enqueue(self, element, priority: float = 0.0):
        # The insertion counter breaks ties and keeps elements from being compared
        heapq.heappush(self.elements, (priority, next(self._counter), element))

    def dequeue_min(self):
        if not self.elements:
            raise IndexError("dequeue from an empty frontier")
        return heapq.heappop(self.elements)[2]

    def dequeue(self):
        return self.dequeue_min()

    def peek_priority(self) -> float:
        if not self.elements:
            raise IndexError("peek into an empty frontier")
        return self.elements[0][0]


class FifoFrontier:
    """Queue frontier for breadth-first search; priorities are ignored."""

    def __init__(self):
        self.elements = deque()

    def __len__(self):
        return len(self.elements)

    def is_empty(self) -> bool:
        return not self.elements

    def enqueue(self, element, priority: float = 0.0):
        self.elements.append(element)

    def dequeue(self):
        if not self.elements:
            raise IndexError("dequeue from an empty frontier")
        return self.elements.popleft()


class LifoFrontier:
    """Stack frontier for depth-first search; priorities are ignored."""

    def __init__(self):
        self.elements = []

    def __len__(self):
        return len(self.elements)

    def is_empty(self) -> bool:
        return not self.elements

    def enqueue(self, element, priority: float = 0.0):
        self.elements.append(element)

    def dequeue(self):
        if not self.elements:
            raise IndexError("dequeue from an empty frontier")
        return self.elements.pop()
