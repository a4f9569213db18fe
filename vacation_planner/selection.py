# vacation_planner/selection.py
import heapq
import itertools
from typing import Dict, List, Tuple

from .config import DISPLAY_LIMIT, WINDOW_LIMIT
from .data_models import SlotSolutionCandidate


class TopKSelector:
    """
    Size-bounded min-priority queue over candidate scores.

    The heap holds (score, handle) pairs, the candidates live in a separate
    table keyed by handle. While the heap is below ``window_limit`` every
    candidate goes in; after that a candidate replaces the root only when its
    score is strictly greater. At every point the heap holds the
    ``window_limit`` best scores seen so far.
    """

    def __init__(self, window_limit: int = WINDOW_LIMIT, display_limit: int = DISPLAY_LIMIT):
        if display_limit > window_limit:
            raise ValueError("display_limit cannot exceed window_limit")
        self.window_limit = window_limit
        self.display_limit = display_limit
        self._heap: List[Tuple[float, int]] = []
        self._candidates: Dict[int, SlotSolutionCandidate] = {}
        self._handles = itertools.count()

    def __len__(self) -> int:
        return len(self._heap)

    def offer(self, candidate: SlotSolutionCandidate) -> bool:
        """Returns True if the candidate was kept."""
        if len(self._heap) >= self.window_limit:
            if self.window_limit == 0 or candidate.score <= self._heap[0][0]:
                return False
            _, evicted = heapq.heappop(self._heap)
            del self._candidates[evicted]
        handle = next(self._handles)
        self._candidates[handle] = candidate
        heapq.heappush(self._heap, (candidate.score, handle))
        return True

    def merge(self, other: "TopKSelector") -> None:
        """Folds the candidates retained by another selector into this one."""
        for _, handle in sorted(other._heap):
            self.offer(other._candidates[handle])

    def drain(self) -> List[SlotSolutionCandidate]:
        """
        Shrinks to ``display_limit`` and empties the heap.

        Returns survivors in extract-min order, i.e. ascending by score.
        """
        while len(self._heap) > self.display_limit:
            _, handle = heapq.heappop(self._heap)
            del self._candidates[handle]

        res = []
        while self._heap:
            _, handle = heapq.heappop(self._heap)
            res.append(self._candidates.pop(handle))
        return res

    def best(self) -> List[SlotSolutionCandidate]:
        """Survivors best first."""
        return self.drain()[::-1]
