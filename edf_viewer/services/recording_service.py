"""
Recording Service for loading EDF recordings and serving render windows.

This service owns the currently loaded recording and is the single entry
point the rendering layer talks to: it loads files or buffers, summarises
channels in physical units and hands out decimated windows sized by the
viewer settings.
"""
import logging
import os
from typing import Optional, List

from edf_viewer.config import ViewerSettings
from edf_viewer.exceptions import DegenerateCalibrationError, RecordingLoadError
from edf_viewer.models.recording import DecodedRecording, ChannelSummary
from edf_viewer.models.render_window import RenderWindow
from edf_viewer.utils.decimation import render_window, max_start
from edf_viewer.utils.edf_decoder import decode
from edf_viewer.utils.synthetic import generate_recording
from edf_viewer.utils.unit_conversion import mean_physical_value

logger = logging.getLogger(__name__)


class RecordingService:
    """Service for managing one loaded recording.

    This service provides:
    - Loading EDF files and in-memory buffers
    - Installing synthetic recordings
    - Per-channel diagnostic summaries (mean in physical units)
    - Decimated render windows per channel

    Attributes:
        settings: Viewer settings supplying the point budget and visible span
        recording: Currently loaded recording (None if nothing loaded)
        source: Path or description of the loaded recording
    """

    def __init__(self, settings: Optional[ViewerSettings] = None):
        """Initialize the recording service.

        Args:
            settings: Viewer settings (defaults are used if None)
        """
        self.settings = settings or ViewerSettings()
        self.recording: Optional[DecodedRecording] = None
        self.source: Optional[str] = None

    def load_edf_file(self, filepath: str) -> DecodedRecording:
        """Read and decode an EDF file.

        Args:
            filepath: Path to the EDF file

        Returns:
            The decoded recording, which becomes the loaded recording

        Raises:
            RecordingLoadError: The file cannot be read
            MalformedHeaderError: The header is malformed
            TruncatedDataError: The file is shorter than its header implies
        """
        try:
            with open(filepath, 'rb') as f:
                data = f.read()
        except OSError as e:
            logger.error(f"Failed to read EDF file {filepath}: {e}")
            raise RecordingLoadError(f"Failed to read EDF file {filepath}: {e}",
                                     path=filepath, original_error=e)
        logger.debug(f"Read {len(data)} bytes from {filepath}")
        return self.load_buffer(data, source=os.path.basename(filepath))

    def load_buffer(self, data: bytes, source: Optional[str] = None) -> DecodedRecording:
        """Decode an in-memory EDF buffer and make it the loaded recording.

        A failed decode leaves the previously loaded recording in place.
        """
        recording = decode(data)
        self._install(recording, source or '<buffer>')
        return recording

    def load_synthetic(self, channel_count: Optional[int] = None, sampling_rate: Optional[int] = None,
                       duration_seconds: Optional[int] = None, seed: Optional[int] = None) -> DecodedRecording:
        """Generate a synthetic recording and make it the loaded recording."""
        kwargs = {'seed': seed}
        if channel_count is not None:
            kwargs['channel_count'] = channel_count
        if sampling_rate is not None:
            kwargs['sampling_rate'] = sampling_rate
        if duration_seconds is not None:
            kwargs['duration_seconds'] = duration_seconds
        recording = generate_recording(**kwargs)
        self._install(recording, '<synthetic>')
        return recording

    def _install(self, recording: DecodedRecording, source: str) -> None:
        self.recording = recording
        self.source = source
        logger.info(f"Loaded recording {source}: {recording.header.channel_count} channels, "
                    f"{recording.header.total_duration_seconds:g} s")

    def is_loaded(self) -> bool:
        """Check if a recording is currently loaded."""
        return self.recording is not None

    def clear(self) -> None:
        """Drop the loaded recording."""
        self.recording = None
        self.source = None

    def _require_recording(self) -> DecodedRecording:
        if self.recording is None:
            raise RuntimeError("No recording loaded")
        return self.recording

    def channel_summaries(self) -> List[ChannelSummary]:
        """Summarise every channel and log its mean physical value.

        Channels with a degenerate calibration are reported with a None mean
        and logged as a warning instead of aborting the summary.
        """
        recording = self._require_recording()
        summaries = []
        for index, channel in enumerate(recording.channels):
            samples = recording.signals[index]
            try:
                mean = mean_physical_value(index, recording.signals, channel)
            except DegenerateCalibrationError as e:
                logger.warning(f"Channel {index} ({channel.label!r}): {e}")
                mean = None
            summary = ChannelSummary(
                index=index,
                label=channel.label,
                unit=channel.unit,
                sample_count=len(samples),
                sampling_rate_hz=recording.channel_sampling_rate(index),
                raw_min=int(samples.min()) if len(samples) else None,
                raw_max=int(samples.max()) if len(samples) else None,
                mean_physical=mean,
            )
            if mean is not None:
                logger.info(f"Channel {index} ({channel.label!r}) mean: {mean:.6g} {channel.unit}".rstrip())
            summaries.append(summary)
        return summaries

    def window_span(self, channel_index: int = 0) -> int:
        """Raw samples covered by one window of the given channel."""
        budget = self.settings.max_points_per_wave
        if self.settings.visible_seconds is None:
            return budget
        rate = self._require_recording().channel_sampling_rate(channel_index)
        return max(budget, int(round(self.settings.visible_seconds * rate)))

    def max_start(self, channel_index: int = 0) -> int:
        """Largest scroll offset for a channel."""
        recording = self._require_recording()
        return max_start(len(recording.signals[channel_index]), self.window_span(channel_index))

    def window(self, channel_index: int, start: int = 0, span: Optional[int] = None) -> RenderWindow:
        """Decimated render window of one channel.

        Args:
            channel_index: Channel to window
            start: Scroll offset in raw samples (clamped)
            span: Raw samples to cover, overriding the visible_seconds setting

        Raises:
            IndexError: channel_index is out of range
        """
        recording = self._require_recording()
        if not 0 <= channel_index < recording.header.channel_count:
            raise IndexError(f"Channel index {channel_index} out of range "
                             f"(0..{recording.header.channel_count - 1})")
        if span is None:
            span = self.window_span(channel_index)
        return render_window(recording.signals[channel_index], start,
                             self.settings.max_points_per_wave, span)

    def windows(self, start: int = 0, span: Optional[int] = None) -> List[RenderWindow]:
        """Render windows for every channel at the same scroll offset."""
        recording = self._require_recording()
        return [self.window(index, start, span) for index in range(recording.header.channel_count)]
