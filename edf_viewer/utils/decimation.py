"""
Scroll windowing and uniform-stride decimation of channel samples.

A render call picks a contiguous window of raw samples starting at the scroll
offset and reduces it to a fixed point budget by keeping every ratio-th
sample. This is plain subsampling, not a min/max envelope, so narrow peaks can
be skipped; the trade-off keeps every call O(budget).
"""
from typing import Optional, Sequence

from edf_viewer.models.render_window import RenderWindow


def max_start(length: int, span: int) -> int:
    """Largest valid scroll offset for a channel of the given length."""
    return max(0, length - span)


def _resolve(length: int, start: int, budget: int, span: Optional[int]):
    if budget < 1:
        raise ValueError(f"budget must be >= 1, got {budget}")
    if span is None:
        span = budget
    elif span < budget:
        raise ValueError(f"span ({span}) must be >= budget ({budget})")
    start = min(max(0, int(start)), max_start(length, span))
    end = min(start + span, length)
    return start, end


def _decimate(samples: Sequence[int], start: int, end: int, budget: int) -> Sequence[int]:
    window_length = end - start
    if window_length <= budget:
        return samples[start:end]
    ratio = window_length // budget
    # exactly `budget` points at indices 0, ratio, ..., (budget - 1) * ratio
    return samples[start:start + ratio * budget:ratio]


def window_and_decimate(samples: Sequence[int], start: int, budget: int,
                        span: Optional[int] = None) -> Sequence[int]:
    """Select a scroll window of a channel and decimate it to the point budget.

    Args:
        samples: Full channel samples (numpy array or list)
        start: Requested first sample; clamped to [0, max(0, len - span)]
        budget: Maximum number of output points
        span: Raw samples covered by the window (defaults to budget)

    Returns:
        At most `budget` samples, of the same sequence type as the input.
        For numpy input the result is a view, no samples are copied.
    """
    start, end = _resolve(len(samples), start, budget, span)
    return _decimate(samples, start, end, budget)


def render_window(samples: Sequence[int], start: int, budget: int,
                  span: Optional[int] = None) -> RenderWindow:
    """Same as window_and_decimate() but also reports the raw bounds covered."""
    start, end = _resolve(len(samples), start, budget, span)
    return RenderWindow(start_index=start, end_index=end, values=_decimate(samples, start, end, budget))
