"""
Utility modules for EDF decoding, unit conversion and windowing.

This package contains:
- edf_decoder: EDF header parsing and data record decoding
- unit_conversion: Digital-to-physical conversion and channel means
- decimation: Scroll windowing and uniform-stride decimation
- synthetic: Generated sine-wave recordings
"""

from edf_viewer.utils.edf_decoder import decode, parse_header, decode_samples
from edf_viewer.utils.unit_conversion import to_physical, mean_physical_value, channel_to_physical
from edf_viewer.utils.decimation import window_and_decimate, render_window, max_start
from edf_viewer.utils.synthetic import generate_recording

__all__ = [
    'decode',
    'parse_header',
    'decode_samples',
    'to_physical',
    'mean_physical_value',
    'channel_to_physical',
    'window_and_decimate',
    'render_window',
    'max_start',
    'generate_recording',
]
