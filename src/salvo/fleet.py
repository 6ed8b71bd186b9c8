from __future__ import annotations

from typing import Iterable, List, Tuple

from .errors import InvariantViolation


class FleetTracker:
    """
    Remaining (not yet sunk) ship lengths of the opponent.

    The derived sizes feed the rating heuristic and are refreshed after every
    change:
      - max_size: largest remaining length
      - second_max_size: second-largest *distinct* length, 0 if there is none
      - min_size: smallest remaining length
    All three are 0 once the whole fleet is sunk.
    """

    def __init__(self, lengths: Iterable[int]) -> None:
        self._lengths: List[int] = list(lengths)
        if any(length <= 0 for length in self._lengths):
            raise InvariantViolation(f"ship lengths must be positive: {self._lengths}")
        self.max_size = 0
        self.second_max_size = 0
        self.min_size = 0
        self._update_sizes()

    def _update_sizes(self) -> None:
        sizes = sorted(set(self._lengths), reverse=True)
        self.max_size = sizes[0] if sizes else 0
        self.second_max_size = sizes[1] if len(sizes) > 1 else 0
        self.min_size = sizes[-1] if sizes else 0

    def remove(self, length: int) -> None:
        """Drop one ship of *length*; it must still be afloat."""
        try:
            self._lengths.remove(length)
        except ValueError:
            raise InvariantViolation(
                f"no remaining ship of length {length} (fleet: {self.remaining})"
            ) from None
        self._update_sizes()

    def is_single_size_fleet(self) -> bool:
        return self.second_max_size == 0

    def is_empty(self) -> bool:
        return not self._lengths

    @property
    def remaining(self) -> Tuple[int, ...]:
        return tuple(sorted(self._lengths, reverse=True))

    def __len__(self) -> int:
        return len(self._lengths)

    def __repr__(self) -> str:
        return f"FleetTracker({list(self.remaining)})"
