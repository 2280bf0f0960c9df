"""
Static PNG preview of a recording.

Draws the decimated window of every channel stacked top to bottom, each trace
on its own baseline, using matplotlib's non-interactive Agg backend.
"""
import logging
from typing import Optional

import numpy as np

from edf_viewer import constants as c
from edf_viewer.models.recording import DecodedRecording
from edf_viewer.utils.decimation import render_window

logger = logging.getLogger(__name__)


def export_preview(recording: DecodedRecording, path: str, start: int = 0,
                   budget: int = c.MAX_POINTS_PER_WAVE_DEFAULT, span: Optional[int] = None) -> str:
    """Render all channels at one scroll offset and save a PNG.

    Args:
        recording: Decoded recording to draw
        path: Output file path
        start: Scroll offset in raw samples
        budget: Point budget per channel
        span: Raw samples per window (defaults to budget)

    Returns:
        The path written
    """
    from matplotlib.figure import Figure
    from matplotlib.backends.backend_agg import FigureCanvasAgg

    count = recording.header.channel_count
    fig = Figure(figsize=(c.PREVIEW_WIDTH_INCHES, max(2.0, count * c.PREVIEW_ROW_HEIGHT_INCHES)))
    FigureCanvasAgg(fig)
    ax = fig.add_subplot(111)
    ax.set_facecolor('black')

    for index, channel in enumerate(recording.channels):
        window = render_window(recording.signals[index], start, budget, span)
        values = np.asarray(window.values, dtype=np.float64)
        if values.size == 0:
            continue
        # normalise to the digital range so every trace fits its row
        half_range = max(1.0, (channel.digital_max - channel.digital_min) / 2.0)
        centre = (channel.digital_max + channel.digital_min) / 2.0
        y = (values - centre) / half_range * 0.4 + (count - 1 - index)
        x = np.linspace(0.0, 1.0, values.size, endpoint=False)
        ax.plot(x, y, color=c.PREVIEW_COLORS[index % len(c.PREVIEW_COLORS)], linewidth=0.6)

    ax.set_yticks(range(count))
    ax.set_yticklabels([ch.label for ch in reversed(recording.channels)])
    ax.set_xticks([])
    ax.set_ylim(-1, count)
    fig.tight_layout()
    fig.savefig(path, dpi=c.PREVIEW_DPI)
    logger.info(f"Wrote preview of {count} channels to {path}")
    return path
