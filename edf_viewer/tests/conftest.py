"""Pytest config: puts the repo root on sys.path and provides an EDF buffer builder.

The builder assembles EDF bytes field by field from the published layout so the
decoder is tested against the format itself rather than against its own tables.
"""
import os
import struct
import sys

import pytest

repo_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..', '..'))
if repo_root not in sys.path:
    sys.path.insert(0, repo_root)


def _field(value, width):
    return str(value).ljust(width)[:width].encode('ascii')


def build_edf(channels, labels=None, samples_per_record=1, record_duration=1,
              digital_min=-32768, digital_max=32767, physical_min=-100.0, physical_max=100.0,
              units='uV', start_date='18.10.26', start_time='09.30.00', header_bytes=None,
              record_count=None, overrides=None, signal_overrides=None):
    """Build an EDF byte buffer.

    channels: one list of raw int16 samples per channel
    samples_per_record, digital_min, ...: a single value or one value per channel
    overrides: {field_name: text} for fixed header fields
    signal_overrides: {(field_name, channel_index): text} for signal header fields
    """
    ns = len(channels)

    def per_channel(value):
        return list(value) if isinstance(value, (list, tuple)) else [value] * ns

    labels = labels if labels is not None else [f"EEG {i + 1}" for i in range(ns)]
    spr = per_channel(samples_per_record)
    if record_count is None:
        record_count = len(channels[0]) // spr[0] if ns else 0

    fixed = {
        'version': '0',
        'patient_id': 'X F 01-JAN-1980 Test',
        'recording_id': 'Startdate 18-OCT-2026 X X X',
        'start_date': start_date,
        'start_time': start_time,
        'header_bytes': 256 + 256 * ns if header_bytes is None else header_bytes,
        'reserved': '',
        'record_count': record_count,
        'record_duration': record_duration,
        'channel_count': ns,
    }
    fixed.update(overrides or {})
    widths = [('version', 8), ('patient_id', 80), ('recording_id', 80), ('start_date', 8),
              ('start_time', 8), ('header_bytes', 8), ('reserved', 44), ('record_count', 8),
              ('record_duration', 8), ('channel_count', 4)]
    out = b''.join(_field(fixed[name], width) for name, width in widths)

    signal = {
        'label': (labels, 16),
        'transducer': ([''] * ns, 80),
        'physical_dimension': (per_channel(units), 8),
        'physical_min': (per_channel(physical_min), 8),
        'physical_max': (per_channel(physical_max), 8),
        'digital_min': (per_channel(digital_min), 8),
        'digital_max': (per_channel(digital_max), 8),
        'prefiltering': ([''] * ns, 80),
        'samples_per_record': (spr, 8),
        'reserved': ([''] * ns, 32),
    }
    for name, (values, width) in signal.items():
        for k in range(ns):
            text = (signal_overrides or {}).get((name, k), values[k])
            out += _field(text, width)

    for r in range(record_count):
        for k in range(ns):
            block = channels[k][r * spr[k]:(r + 1) * spr[k]]
            out += struct.pack(f'<{len(block)}h', *block)
    return out


@pytest.fixture
def edf_builder():
    return build_edf
