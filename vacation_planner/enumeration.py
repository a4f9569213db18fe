# vacation_planner/enumeration.py
from math import prod
from typing import Iterator, Sequence, Tuple

from .data_models import CategorizedPlaces, SlotTag


class CombinationEnumerator:
    """
    Odometer over index tuples, one index per tag position.

    Position i runs over [0, bounds[i]). The last position turns fastest and
    the sequence ends when the first position overflows. A zero bound means
    there is nothing to enumerate.
    """

    def __init__(self, bounds: Sequence[int]):
        self.bounds: Tuple[int, ...] = tuple(int(b) for b in bounds)
        self.positions = [0] * len(self.bounds)
        self._exhausted = not self.bounds or any(b <= 0 for b in self.bounds)

    @classmethod
    def for_tag(cls, tag: SlotTag, places: CategorizedPlaces) -> "CombinationEnumerator":
        return cls([len(places.cluster(category)) for category in tag])

    def __len__(self) -> int:
        if not self.bounds:
            return 0
        return prod(self.bounds)

    def has_next(self) -> bool:
        return not self._exhausted

    def current(self) -> Tuple[int, ...]:
        return tuple(self.positions)

    def advance(self) -> None:
        if self._exhausted:
            return
        for i in reversed(range(len(self.bounds))):
            self.positions[i] += 1
            if self.positions[i] < self.bounds[i]:
                return
            self.positions[i] = 0
        self._exhausted = True

    def seek(self, rank: int) -> None:
        """Jump to the rank-th tuple in odometer order."""
        total = len(self)
        if rank < 0:
            raise ValueError("rank must be non-negative")
        if rank >= total:
            self._exhausted = True
            return
        for i in reversed(range(len(self.bounds))):
            rank, self.positions[i] = divmod(rank, self.bounds[i])
        self._exhausted = False

    def __iter__(self) -> Iterator[Tuple[int, ...]]:
        while self.has_next():
            yield self.current()
            self.advance()
