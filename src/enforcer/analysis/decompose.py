"""
Target/Travel Decomposer

Splits a coordinate sequence into "target" samples, where the stick dwelled
(a sample equal to the one before it), and "travel" samples seen while the
stick was moving between targets. Also provides value-keyed deduplication.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from enforcer.core.coords import Coord, is_equal_coord


@dataclass(frozen=True)
class Decomposition:
    """Per-sample target/travel split of a coordinate sequence."""

    target_indices: tuple[int, ...]
    travel_indices: tuple[int, ...]

    @property
    def target_sample_count(self) -> int:
        return len(self.target_indices)

    @property
    def travel_sample_count(self) -> int:
        return len(self.travel_indices)


@dataclass(frozen=True)
class DwellCounts:
    """Dwell events and the transitions between them."""

    targets: int
    travels: int

    @property
    def travel_ratio(self) -> float:
        """Travel transitions per target-to-target move. 0 with fewer than 2 targets."""
        if self.targets <= 1:
            return 0.0
        return self.travels / (self.targets - 1)


def is_target_sample(coords: Sequence[Coord], index: int) -> bool:
    """A sample is a target if it equals the immediately preceding sample."""
    return index > 0 and is_equal_coord(coords[index], coords[index - 1])


def decompose(coords: Sequence[Coord]) -> Decomposition:
    """Split sample indices into target and travel samples."""
    targets = []
    travels = []
    for i in range(len(coords)):
        if is_target_sample(coords, i):
            targets.append(i)
        else:
            travels.append(i)
    return Decomposition(tuple(targets), tuple(travels))


def get_unique_coords(coords: Sequence[Coord]) -> list[Coord]:
    """Values with distinct epsilon-quantized keys, in first-seen order."""
    seen: set[tuple[int, int]] = set()
    unique = []
    for coord in coords:
        key = coord.key()
        if key not in seen:
            seen.add(key)
            unique.append(coord)
    return unique


def get_target_coords(coords: Sequence[Coord]) -> list[Coord]:
    """Distinct values the stick dwelled on for at least two consecutive frames."""
    seen: set[tuple[int, int]] = set()
    targets = []
    for i in range(1, len(coords)):
        if is_equal_coord(coords[i], coords[i - 1]):
            key = coords[i].key()
            if key not in seen:
                seen.add(key)
                targets.append(coords[i])
    return targets


def count_targets_and_travel(coords: Sequence[Coord]) -> DwellCounts:
    """
    Count dwell events and the travel between them.

    Each run of two or more equal samples is one target. A move from one
    target to the next counts one travel when at least one intermediate
    value was seen on the way; only the first intermediate value counts.

    Example: AAA BB C DD has three targets and one travel.
    """
    targets = 0
    travels = 0
    last: Coord | None = None
    in_target = True  # Nothing before the first sample counts as travel
    in_travel = False

    for coord in coords:
        if last is not None and is_equal_coord(coord, last):
            if not in_target:
                targets += 1
            in_target = True
            in_travel = False
        else:
            if not in_target and not in_travel:
                travels += 1
                in_travel = True
            in_target = False
        last = coord

    return DwellCounts(targets=targets, travels=travels)
