"""
EDF Viewer - decoding and windowed decimation of EDF biosignal recordings.

The package turns a raw European Data Format buffer into per-channel sample
arrays and serves bounded-size, decimated windows of them to a renderer.

Core entry points:
- decode(buffer): parse header and data records into a DecodedRecording
- mean_physical_value(channel_index, signals, channel): channel mean in physical units
- window_and_decimate(samples, start, budget, span=None): decimated scroll window

Higher level:
- RecordingService: loads recordings and serves render windows
- edf_viewer.main: command-line front end
"""

from edf_viewer.exceptions import (
    EdfViewerException, MalformedHeaderError, TruncatedDataError,
    DegenerateCalibrationError, RecordingLoadError, ConfigurationError,
)
from edf_viewer.models import (
    RecordingHeader, ChannelDescriptor, SignalMatrix, DecodedRecording, ChannelSummary, RenderWindow,
)
from edf_viewer.utils.edf_decoder import decode, parse_header, decode_samples
from edf_viewer.utils.unit_conversion import to_physical, mean_physical_value
from edf_viewer.utils.decimation import window_and_decimate, render_window
from edf_viewer.services.recording_service import RecordingService

__version__ = '0.1.0'

__all__ = [
    'EdfViewerException', 'MalformedHeaderError', 'TruncatedDataError',
    'DegenerateCalibrationError', 'RecordingLoadError', 'ConfigurationError',
    'RecordingHeader', 'ChannelDescriptor', 'SignalMatrix', 'DecodedRecording',
    'ChannelSummary', 'RenderWindow',
    'decode', 'parse_header', 'decode_samples',
    'to_physical', 'mean_physical_value',
    'window_and_decimate', 'render_window',
    'RecordingService',
]
