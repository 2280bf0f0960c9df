import math

import numpy as np
import pytest

from edf_viewer.exceptions import DegenerateCalibrationError
from edf_viewer.models.recording import ChannelDescriptor, SignalMatrix
from edf_viewer.utils.unit_conversion import to_physical, channel_to_physical, mean_physical_value


def test_endpoints_map_to_physical_range():
    assert to_physical(-32768, -32768, 32767, -200.0, 200.0) == pytest.approx(-200.0)
    assert to_physical(32767, -32768, 32767, -200.0, 200.0) == pytest.approx(200.0)


def test_known_value():
    # scale 0.01 per code
    assert to_physical(20, -100, 100, -1.0, 1.0) == pytest.approx(0.2)
    assert to_physical(0, 0, 255, 0.0, 10.0) == pytest.approx(0.0)


def test_is_affine():
    f = lambda v: to_physical(v, -2048, 2047, -500.0, 500.0)
    a, b = -1000, 1500
    assert f((a + b) / 2) == pytest.approx((f(a) + f(b)) / 2)
    assert f(b) - f(a) == pytest.approx((b - a) * 1000.0 / 4095)


def test_monotonic_for_increasing_ranges():
    raw = np.arange(-2048, 2048, 7, dtype=np.int16)
    physical = to_physical(raw, -2048, 2047, -500.0, 500.0)
    assert physical.dtype == np.float64
    assert np.all(np.diff(physical) > 0)


def test_inverted_physical_range_is_decreasing():
    raw = np.array([0, 10, 20], dtype=np.int16)
    physical = to_physical(raw, 0, 100, 5.0, -5.0)
    assert np.all(np.diff(physical) < 0)


def test_scalar_input_returns_float():
    assert isinstance(to_physical(3, 0, 10, 0.0, 1.0), float)


def test_degenerate_calibration_raises():
    with pytest.raises(DegenerateCalibrationError) as excinfo:
        to_physical(5, 7, 7, 0.0, 1.0, channel_label='Flat')
    assert excinfo.value.channel_label == 'Flat'
    assert excinfo.value.digital_value == 7


def test_channel_to_physical_uses_descriptor():
    channel = ChannelDescriptor('EEG', -100, 100, -1.0, 1.0)
    assert channel_to_physical(np.array([-100, 0, 100]), channel).tolist() == pytest.approx([-1.0, 0.0, 1.0])


def test_mean_physical_value():
    signals = SignalMatrix([[10, 20, 30], [0, 0, 100]])
    channel = ChannelDescriptor('EEG', -100, 100, -1.0, 1.0)
    assert mean_physical_value(0, signals, channel) == pytest.approx(0.2)
    assert mean_physical_value(1, signals, channel) == pytest.approx(1.0 / 3)


def test_mean_matches_mean_of_converted_samples():
    rng = np.random.default_rng(3)
    samples = rng.integers(-32768, 32767, size=1000).astype(np.int16)
    channel = ChannelDescriptor('EEG', -32768, 32767, -3200.0, 3200.0)
    expected = channel_to_physical(samples, channel).mean()
    assert mean_physical_value(0, SignalMatrix([samples]), channel) == pytest.approx(expected)


def test_mean_of_empty_channel_is_nan():
    channel = ChannelDescriptor('EEG', -100, 100, -1.0, 1.0)
    assert math.isnan(mean_physical_value(0, SignalMatrix([[]]), channel))


def test_mean_of_degenerate_channel_raises():
    channel = ChannelDescriptor('Flat', 0, 0, -1.0, 1.0)
    with pytest.raises(DegenerateCalibrationError):
        mean_physical_value(0, SignalMatrix([[1, 2]]), channel)
    with pytest.raises(DegenerateCalibrationError):
        mean_physical_value(0, SignalMatrix([[]]), channel)
