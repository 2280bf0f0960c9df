"""
Render window model for one decimated channel view.
"""
from dataclasses import dataclass
from typing import Sequence


@dataclass(frozen=True)
class RenderWindow:
    """A decimated slice of one channel, ready for drawing.

    Attributes:
        start_index: First raw sample index covered by the window
        end_index: Raw sample index one past the end of the window
        values: Decimated sample values (at most the point budget)
    """
    start_index: int
    end_index: int
    values: Sequence[int]

    def __post_init__(self):
        """Validate window bounds."""
        if self.start_index < 0:
            raise ValueError(f"start_index must be >= 0, got {self.start_index}")
        if self.end_index < self.start_index:
            raise ValueError(f"end_index ({self.end_index}) must be >= start_index ({self.start_index})")

    @property
    def raw_length(self) -> int:
        """Number of raw samples the window spans."""
        return self.end_index - self.start_index

    @property
    def point_count(self) -> int:
        return len(self.values)

    @property
    def stride(self) -> int:
        """Raw samples per emitted point (1 when not decimated)."""
        if not self.point_count:
            return 1
        return max(1, self.raw_length // self.point_count)
