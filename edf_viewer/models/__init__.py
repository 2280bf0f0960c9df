"""
Data models for the EDF viewer.

This package contains immutable value objects shared by the decoder, the
recording service and the rendering consumers.

Models:
- RecordingHeader: Recording-level header fields
- ChannelDescriptor: Per-channel label and calibration
- SignalMatrix: Read-only per-channel raw samples
- DecodedRecording: Header, channels and samples of one decoded buffer
- ChannelSummary: Per-channel diagnostic summary
- RenderWindow: Decimated slice of one channel
"""

from edf_viewer.models.recording import (
    RecordingHeader, ChannelDescriptor, SignalMatrix, DecodedRecording, ChannelSummary,
)
from edf_viewer.models.render_window import RenderWindow

__all__ = [
    'RecordingHeader', 'ChannelDescriptor', 'SignalMatrix', 'DecodedRecording',
    'ChannelSummary', 'RenderWindow',
]
