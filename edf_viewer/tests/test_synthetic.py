import numpy as np
import pytest

from edf_viewer.utils.synthetic import generate_recording, channel_frequency
from edf_viewer.utils.unit_conversion import channel_to_physical, mean_physical_value


def test_shape_and_labels():
    rec = generate_recording(channel_count=3, sampling_rate=128, duration_seconds=4, seed=1)
    assert rec.header.channel_count == 3
    assert rec.header.record_count == 4
    assert rec.header.sampling_rate_hz == pytest.approx(128.0)
    assert rec.labels == ('SYN 1', 'SYN 2', 'SYN 3')
    assert rec.signals.channel_lengths == (512, 512, 512)
    assert all(ch.unit == 'uV' for ch in rec.channels)


def test_same_seed_gives_same_samples():
    a = generate_recording(channel_count=2, sampling_rate=64, duration_seconds=3, seed=42)
    b = generate_recording(channel_count=2, sampling_rate=64, duration_seconds=3, seed=42)
    for x, y in zip(a.signals, b.signals):
        assert np.array_equal(x, y)


def test_values_stay_inside_physical_range():
    rec = generate_recording(channel_count=2, sampling_rate=256, duration_seconds=2, seed=0)
    for index, channel in enumerate(rec.channels):
        physical = channel_to_physical(rec.signals[index], channel)
        assert physical.min() >= -1.1
        assert physical.max() <= 1.1


def test_mean_is_close_to_zero():
    rec = generate_recording(channel_count=4, sampling_rate=256, duration_seconds=10, seed=7)
    for index, channel in enumerate(rec.channels):
        assert abs(mean_physical_value(index, rec.signals, channel)) < 0.01


def test_each_channel_peaks_at_its_frequency():
    rate, seconds = 256, 10
    rec = generate_recording(channel_count=5, sampling_rate=rate, duration_seconds=seconds, seed=3)
    freqs = np.fft.rfftfreq(rate * seconds, d=1.0 / rate)
    for index in range(5):
        spectrum = np.abs(np.fft.rfft(rec.signals[index].astype(np.float64)))
        spectrum[0] = 0.0
        assert freqs[np.argmax(spectrum)] == pytest.approx(channel_frequency(index))


def test_channel_frequency_steps():
    assert channel_frequency(0) == pytest.approx(10.0)
    assert channel_frequency(3) == pytest.approx(11.5)


@pytest.mark.parametrize('kwargs', [
    {'channel_count': 0},
    {'sampling_rate': 0},
    {'duration_seconds': -1},
])
def test_invalid_arguments(kwargs):
    with pytest.raises(ValueError):
        generate_recording(**kwargs)
