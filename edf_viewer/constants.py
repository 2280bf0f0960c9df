"""
Constants and configuration values for the EDF viewer.

This module centralizes the European Data Format layout constants and the
viewer defaults used throughout the package, providing a single source of
truth for these values.

Constants are organized by category:
- EDF fixed header layout (byte offsets and widths)
- EDF per-signal header layout (parallel-array block offsets)
- Data record sample encoding
- Viewer defaults (point budget, synthetic source parameters)

All layout values come from the EDF specification and must not be changed;
real EDF files will not decode correctly otherwise.
"""

# Fixed header
EDF_FIXED_HEADER_BYTES = 256
EDF_SIGNAL_HEADER_BYTES = 256  # per channel

VERSION_OFFSET = 0
VERSION_WIDTH = 8
PATIENT_ID_OFFSET = 8
PATIENT_ID_WIDTH = 80
RECORDING_ID_OFFSET = 88
RECORDING_ID_WIDTH = 80
START_DATE_OFFSET = 168
START_DATE_WIDTH = 8
START_TIME_OFFSET = 176
START_TIME_WIDTH = 8
HEADER_BYTES_OFFSET = 184
HEADER_BYTES_WIDTH = 8
RECORD_COUNT_OFFSET = 236
RECORD_COUNT_WIDTH = 8
RECORD_DURATION_OFFSET = 244
RECORD_DURATION_WIDTH = 8
CHANNEL_COUNT_OFFSET = 252
CHANNEL_COUNT_WIDTH = 4

# Per-signal header: field for channel k lives at
# EDF_FIXED_HEADER_BYTES + block_offset * channel_count + width * k
LABEL_BLOCK_OFFSET = 0
LABEL_WIDTH = 16
TRANSDUCER_BLOCK_OFFSET = 16
TRANSDUCER_WIDTH = 80
PHYSICAL_DIMENSION_BLOCK_OFFSET = 96
PHYSICAL_DIMENSION_WIDTH = 8
PHYSICAL_MIN_BLOCK_OFFSET = 104
PHYSICAL_MAX_BLOCK_OFFSET = 112
DIGITAL_MIN_BLOCK_OFFSET = 120
DIGITAL_MAX_BLOCK_OFFSET = 128
CALIBRATION_WIDTH = 8
PREFILTERING_BLOCK_OFFSET = 136
PREFILTERING_WIDTH = 80
SAMPLES_PER_RECORD_BLOCK_OFFSET = 216
SAMPLES_PER_RECORD_WIDTH = 8

# Data records: little-endian signed 16-bit samples
SAMPLE_DTYPE = '<i2'
SAMPLE_BYTES = 2
DIGITAL_MIN_INT16 = -32768
DIGITAL_MAX_INT16 = 32767

# Two-digit year clipping for the start date (EDF spec: 85-99 -> 19xx)
START_DATE_CLIP_YEAR = 85

# Viewer defaults
MAX_POINTS_PER_WAVE_DEFAULT = 2000  # Maximum points to render per wave
MAX_POINTS_PER_WAVE_MIN = 1

# Synthetic source defaults
SYNTHETIC_CHANNEL_COUNT = 8
SYNTHETIC_SAMPLING_RATE = 512  # Hz
SYNTHETIC_DURATION_SECONDS = 2 * 60 * 60  # 2 hours
SYNTHETIC_BASE_FREQUENCY = 10.0  # Hz, channel 0
SYNTHETIC_FREQUENCY_STEP = 0.5  # Hz added per channel
SYNTHETIC_NOISE_AMPLITUDE = 0.1  # peak-to-peak
SYNTHETIC_PHYSICAL_MIN = -2.0
SYNTHETIC_PHYSICAL_MAX = 2.0
SYNTHETIC_UNIT = 'uV'

# Preview export
PREVIEW_WIDTH_INCHES = 12.0
PREVIEW_ROW_HEIGHT_INCHES = 0.8
PREVIEW_DPI = 100
PREVIEW_COLORS = [
    '#ff0000', '#ff7f00', '#ffff00', '#00ff00', '#0000ff',
    '#4b0082', '#9400d3', '#ff1493', '#00ffff', '#ffffff',
]
