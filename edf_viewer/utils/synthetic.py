"""
Synthetic multi-channel recordings.

Generates sine waves with uniform noise, one frequency per channel, quantised
into the int16 digital range so the result is indistinguishable from a
decoded EDF file to the rest of the pipeline. Useful for demos and for
exercising the viewer without a recording on disk.
"""
import logging
from typing import Optional

import numpy as np

from edf_viewer import constants as c
from edf_viewer.models.recording import (
    RecordingHeader, ChannelDescriptor, SignalMatrix, DecodedRecording,
)

logger = logging.getLogger(__name__)


def channel_frequency(channel_index: int) -> float:
    """Sine frequency used for a synthetic channel."""
    return c.SYNTHETIC_BASE_FREQUENCY + channel_index * c.SYNTHETIC_FREQUENCY_STEP


def generate_recording(channel_count: int = c.SYNTHETIC_CHANNEL_COUNT,
                       sampling_rate: int = c.SYNTHETIC_SAMPLING_RATE,
                       duration_seconds: int = c.SYNTHETIC_DURATION_SECONDS,
                       seed: Optional[int] = None) -> DecodedRecording:
    """Build a synthetic recording.

    Args:
        channel_count: Number of channels (>= 1)
        sampling_rate: Samples per second for every channel (>= 1)
        duration_seconds: Whole seconds of signal (one data record per second)
        seed: Seed for the noise generator; the same seed gives identical samples

    Returns:
        DecodedRecording with 'SYN n' labels and a -2..2 uV calibration
    """
    if channel_count < 1:
        raise ValueError(f"channel_count must be >= 1, got {channel_count}")
    if sampling_rate < 1:
        raise ValueError(f"sampling_rate must be >= 1, got {sampling_rate}")
    if duration_seconds < 0:
        raise ValueError(f"duration_seconds must be >= 0, got {duration_seconds}")

    rng = np.random.default_rng(seed)
    record_count = int(duration_seconds)
    total = record_count * sampling_rate
    t = np.arange(total, dtype=np.float64) / sampling_rate

    pmin, pmax = c.SYNTHETIC_PHYSICAL_MIN, c.SYNTHETIC_PHYSICAL_MAX
    dmin, dmax = c.DIGITAL_MIN_INT16, c.DIGITAL_MAX_INT16
    scale = (dmax - dmin) / (pmax - pmin)

    channels = []
    arrays = []
    for i in range(channel_count):
        physical = np.sin(2 * np.pi * channel_frequency(i) * t)
        physical += (rng.random(total) - 0.5) * c.SYNTHETIC_NOISE_AMPLITUDE
        digital = np.clip(np.rint((physical - pmin) * scale + dmin), dmin, dmax).astype(np.int16)
        arrays.append(digital)
        channels.append(ChannelDescriptor(
            label=f"SYN {i + 1}",
            digital_min=dmin,
            digital_max=dmax,
            physical_min=pmin,
            physical_max=pmax,
            samples_per_record=sampling_rate,
            transducer='synthetic',
            physical_dimension=c.SYNTHETIC_UNIT,
        ))

    header = RecordingHeader(
        channel_count=channel_count,
        record_count=record_count,
        record_duration_seconds=1.0,
        samples_per_record=sampling_rate,
        version='0',
        patient_id='X X X X',
        recording_id='Startdate X X X synthetic',
    )
    logger.info(f"Generated synthetic recording: {channel_count} channels, {sampling_rate} Hz, {record_count} s")
    return DecodedRecording(header=header, channels=tuple(channels), signals=SignalMatrix(arrays))
