"""
Digital-to-physical unit conversion for EDF channels.

EDF stores integer codes; each channel maps its digital range linearly onto
its physical range:

    physical = (raw - digital_min) * (physical_max - physical_min)
               / (digital_max - digital_min) + physical_min
"""
import logging
import math
from typing import Union

import numpy as np

from edf_viewer.exceptions import DegenerateCalibrationError
from edf_viewer.models.recording import ChannelDescriptor, SignalMatrix

logger = logging.getLogger(__name__)

Number = Union[int, float]


def to_physical(raw_value: Union[Number, np.ndarray], digital_min: int, digital_max: int,
                physical_min: float, physical_max: float,
                channel_label: str = None) -> Union[float, np.ndarray]:
    """Convert raw digital values to physical units.

    Args:
        raw_value: A single raw value or a numpy array of raw values
        digital_min: Channel digital minimum
        digital_max: Channel digital maximum
        physical_min: Physical value at digital_min
        physical_max: Physical value at digital_max
        channel_label: Channel label used in the error message (optional)

    Returns:
        float for scalar input, float64 array for array input

    Raises:
        DegenerateCalibrationError: digital_max equals digital_min
    """
    digital_span = digital_max - digital_min
    if digital_span == 0:
        name = f"channel {channel_label!r}" if channel_label is not None else "channel"
        raise DegenerateCalibrationError(
            f"Cannot convert {name} to physical units: digital_min == digital_max == {digital_min}",
            channel_label=channel_label, digital_value=digital_min)

    scale = (physical_max - physical_min) / digital_span
    if isinstance(raw_value, np.ndarray):
        return (raw_value.astype(np.float64) - digital_min) * scale + physical_min
    return (float(raw_value) - digital_min) * scale + physical_min


def channel_to_physical(samples: np.ndarray, channel: ChannelDescriptor) -> np.ndarray:
    """Convert a whole channel using its descriptor."""
    return to_physical(np.asarray(samples), channel.digital_min, channel.digital_max,
                       channel.physical_min, channel.physical_max, channel_label=channel.label)


def mean_physical_value(channel_index: int, signals: SignalMatrix, channel: ChannelDescriptor) -> float:
    """Mean of one channel in physical units.

    The transform is affine, so the mean of the raw samples is converted
    instead of converting every sample.

    Returns:
        The mean, or NaN for a channel without samples

    Raises:
        DegenerateCalibrationError: The channel's digital range is empty
        IndexError: channel_index is out of range
    """
    samples = signals[channel_index]
    if len(samples) == 0:
        logger.debug(f"Channel {channel_index} ({channel.label!r}) has no samples; mean is NaN")
        # still reject a degenerate calibration
        to_physical(0, channel.digital_min, channel.digital_max,
                    channel.physical_min, channel.physical_max, channel_label=channel.label)
        return math.nan
    raw_mean = float(np.mean(samples, dtype=np.float64))
    return to_physical(raw_mean, channel.digital_min, channel.digital_max,
                       channel.physical_min, channel.physical_max, channel_label=channel.label)
