"""
Decoder for European Data Format (EDF) recordings.

This module parses the fixed ASCII header and the per-signal header of an EDF
buffer and rebuilds one contiguous raw sample array per channel from the data
records. Every header field is described once in a layout table
(HEADER_FIELDS / SIGNAL_FIELDS) and read by the same routine.
"""
import logging
import math
import re
from datetime import datetime
from typing import NamedTuple, Optional, Tuple, Union

import numpy as np

from edf_viewer import constants as c
from edf_viewer.exceptions import MalformedHeaderError, TruncatedDataError
from edf_viewer.models.recording import (
    RecordingHeader, ChannelDescriptor, SignalMatrix, DecodedRecording,
)

logger = logging.getLogger(__name__)

# any C-contiguous object exposing the buffer protocol; sizes are counted in bytes
Buffer = Union[bytes, bytearray, memoryview]

_INTEGER_RE = re.compile(r'[+-]?\d+')
_FLOAT_RE = re.compile(r'[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?')


class FieldSpec(NamedTuple):
    """Location and type of one ASCII header field.

    For fixed header fields offset is absolute. For signal header fields it is
    the block offset, multiplied by the channel count to find the sub-array.
    """
    offset: int
    width: int
    kind: str  # 'text', 'int' or 'float'
    required: bool


HEADER_FIELDS = {
    'version': FieldSpec(c.VERSION_OFFSET, c.VERSION_WIDTH, 'text', False),
    'patient_id': FieldSpec(c.PATIENT_ID_OFFSET, c.PATIENT_ID_WIDTH, 'text', False),
    'recording_id': FieldSpec(c.RECORDING_ID_OFFSET, c.RECORDING_ID_WIDTH, 'text', False),
    'start_date': FieldSpec(c.START_DATE_OFFSET, c.START_DATE_WIDTH, 'text', False),
    'start_time': FieldSpec(c.START_TIME_OFFSET, c.START_TIME_WIDTH, 'text', False),
    'header_bytes': FieldSpec(c.HEADER_BYTES_OFFSET, c.HEADER_BYTES_WIDTH, 'int', False),
    'record_count': FieldSpec(c.RECORD_COUNT_OFFSET, c.RECORD_COUNT_WIDTH, 'int', True),
    'record_duration': FieldSpec(c.RECORD_DURATION_OFFSET, c.RECORD_DURATION_WIDTH, 'float', True),
    'channel_count': FieldSpec(c.CHANNEL_COUNT_OFFSET, c.CHANNEL_COUNT_WIDTH, 'int', True),
}

SIGNAL_FIELDS = {
    'label': FieldSpec(c.LABEL_BLOCK_OFFSET, c.LABEL_WIDTH, 'text', True),
    'transducer': FieldSpec(c.TRANSDUCER_BLOCK_OFFSET, c.TRANSDUCER_WIDTH, 'text', False),
    'physical_dimension': FieldSpec(c.PHYSICAL_DIMENSION_BLOCK_OFFSET, c.PHYSICAL_DIMENSION_WIDTH, 'text', False),
    'physical_min': FieldSpec(c.PHYSICAL_MIN_BLOCK_OFFSET, c.CALIBRATION_WIDTH, 'float', True),
    'physical_max': FieldSpec(c.PHYSICAL_MAX_BLOCK_OFFSET, c.CALIBRATION_WIDTH, 'float', True),
    'digital_min': FieldSpec(c.DIGITAL_MIN_BLOCK_OFFSET, c.CALIBRATION_WIDTH, 'int', True),
    'digital_max': FieldSpec(c.DIGITAL_MAX_BLOCK_OFFSET, c.CALIBRATION_WIDTH, 'int', True),
    'prefiltering': FieldSpec(c.PREFILTERING_BLOCK_OFFSET, c.PREFILTERING_WIDTH, 'text', False),
    'samples_per_record': FieldSpec(c.SAMPLES_PER_RECORD_BLOCK_OFFSET, c.SAMPLES_PER_RECORD_WIDTH, 'int', True),
}


def _byte_view(buffer: Buffer) -> memoryview:
    """Flat unsigned-byte view, so len() and slicing count bytes for any buffer."""
    view = memoryview(buffer)
    if view.format != 'B' or view.ndim != 1:
        view = view.cast('B')
    return view


def signal_field_offset(spec: FieldSpec, channel_count: int, channel_index: int) -> int:
    """Absolute byte offset of a signal header field for one channel."""
    return c.EDF_FIXED_HEADER_BYTES + spec.offset * channel_count + spec.width * channel_index


def read_field(buffer: Buffer, name: str, spec: FieldSpec, offset: Optional[int] = None,
               channel_index: Optional[int] = None):
    """Read one trimmed ASCII field and convert it to its kind.

    Args:
        buffer: Raw EDF bytes
        name: Field name, used in error messages
        spec: Field layout
        offset: Absolute offset, defaults to spec.offset
        channel_index: Channel the field belongs to (for error reporting)

    Returns:
        str, int or float; None for an optional numeric field that does not parse

    Raises:
        MalformedHeaderError: A required numeric field does not parse
    """
    start = spec.offset if offset is None else offset
    raw = bytes(buffer[start:start + spec.width]).decode('ascii', errors='replace')
    text = raw.strip()
    if spec.kind == 'text':
        return text

    value = _parse_number(text, spec.kind)
    if value is None:
        where = name if channel_index is None else f"{name} (channel {channel_index})"
        if spec.required:
            raise MalformedHeaderError(
                f"Header field {where} at byte {start} is not a valid {spec.kind}: {raw!r}",
                field_name=name, offset=start, raw_value=raw, channel_index=channel_index)
        logger.debug(f"Ignoring unparseable optional field {where}: {raw!r}")
    return value


def _parse_number(text: str, kind: str):
    if kind == 'int':
        if not _INTEGER_RE.fullmatch(text):
            return None
        return int(text)
    # plain ASCII decimal only: no '1_000', 'inf' or 'nan'
    if not _FLOAT_RE.fullmatch(text):
        return None
    value = float(text)
    if not math.isfinite(value):
        return None
    return value


def _parse_start_datetime(date_text: str, time_text: str) -> Optional[datetime]:
    """Parse 'dd.mm.yy' and 'hh.mm.ss' with the EDF two-digit year rule."""
    try:
        day, month, year = (int(p) for p in date_text.split('.'))
        hour, minute, second = (int(p) for p in time_text.split('.'))
        year += 1900 if year >= c.START_DATE_CLIP_YEAR else 2000
        return datetime(year, month, day, hour, minute, second)
    except ValueError:
        logger.debug(f"Unparseable start date/time: {date_text!r} {time_text!r}")
        return None


def _require(condition: bool, message: str, name: str, offset: int, raw_value, channel_index=None) -> None:
    if not condition:
        raise MalformedHeaderError(message, field_name=name, offset=offset,
                                   raw_value=str(raw_value), channel_index=channel_index)


def parse_header(buffer: Buffer) -> Tuple[RecordingHeader, Tuple[ChannelDescriptor, ...]]:
    """Parse the fixed header and the per-signal header.

    Args:
        buffer: Raw EDF bytes (at least the complete header)

    Returns:
        Tuple of (RecordingHeader, channel descriptors in file order)

    Raises:
        MalformedHeaderError: A required field is unparseable or out of range
        TruncatedDataError: The buffer ends inside the header
    """
    buffer = _byte_view(buffer)
    if len(buffer) < c.EDF_FIXED_HEADER_BYTES:
        raise TruncatedDataError(
            f"Buffer too short for EDF header: {len(buffer)} bytes, need {c.EDF_FIXED_HEADER_BYTES}",
            expected_bytes=c.EDF_FIXED_HEADER_BYTES, actual_bytes=len(buffer), section='header')

    fields = {name: read_field(buffer, name, spec) for name, spec in HEADER_FIELDS.items()}

    channel_count = fields['channel_count']
    _require(channel_count >= 1, f"Channel count must be >= 1, got {channel_count}",
             'channel_count', c.CHANNEL_COUNT_OFFSET, channel_count)
    _require(fields['record_count'] >= 0, f"Record count must be >= 0, got {fields['record_count']}",
             'record_count', c.RECORD_COUNT_OFFSET, fields['record_count'])
    _require(fields['record_duration'] > 0, f"Record duration must be > 0, got {fields['record_duration']}",
             'record_duration', c.RECORD_DURATION_OFFSET, fields['record_duration'])

    header_size = c.EDF_FIXED_HEADER_BYTES + c.EDF_SIGNAL_HEADER_BYTES * channel_count
    if len(buffer) < header_size:
        raise TruncatedDataError(
            f"Buffer too short for {channel_count} signal headers: {len(buffer)} bytes, need {header_size}",
            expected_bytes=header_size, actual_bytes=len(buffer), section='signal_header')

    channels = []
    for k in range(channel_count):
        values = {
            name: read_field(buffer, name, spec, signal_field_offset(spec, channel_count, k), channel_index=k)
            for name, spec in SIGNAL_FIELDS.items()
        }
        spr_spec = SIGNAL_FIELDS['samples_per_record']
        _require(values['samples_per_record'] >= 1,
                 f"Samples per record of channel {k} must be >= 1, got {values['samples_per_record']}",
                 'samples_per_record', signal_field_offset(spr_spec, channel_count, k),
                 values['samples_per_record'], channel_index=k)
        channels.append(ChannelDescriptor(**values))

    declared = fields['header_bytes']
    if declared is not None and declared != header_size:
        logger.warning(f"Header declares {declared} bytes but {channel_count} channels need {header_size}; "
                       f"using {header_size}")

    base_rate = channels[0].samples_per_record
    for k, channel in enumerate(channels[1:], start=1):
        if channel.samples_per_record != base_rate:
            logger.warning(f"Channel {k} ({channel.label!r}) has {channel.samples_per_record} samples per record, "
                           f"channel 0 has {base_rate}; header sampling rate follows channel 0")

    header = RecordingHeader(
        channel_count=channel_count,
        record_count=fields['record_count'],
        record_duration_seconds=fields['record_duration'],
        samples_per_record=base_rate,
        version=fields['version'],
        patient_id=fields['patient_id'],
        recording_id=fields['recording_id'],
        start_date=fields['start_date'],
        start_time=fields['start_time'],
        start_datetime=_parse_start_datetime(fields['start_date'], fields['start_time']),
        header_bytes=declared,
    )
    logger.debug(f"Parsed EDF header: {channel_count} channels, {header.record_count} records of "
                 f"{header.record_duration_seconds} s, labels={[ch.label for ch in channels]}")
    return header, tuple(channels)


def decode_samples(buffer: Buffer, header: RecordingHeader,
                   channels: Tuple[ChannelDescriptor, ...]) -> SignalMatrix:
    """Split the data records into one raw sample array per channel.

    Each record holds samples_per_record consecutive int16 samples for channel
    0, then for channel 1, and so on. Records are appended in file order.

    Raises:
        TruncatedDataError: The buffer holds fewer than record_count full records
    """
    buffer = _byte_view(buffer)
    counts = [ch.samples_per_record for ch in channels]
    record_samples = sum(counts)
    data_offset = header.computed_header_bytes
    total_samples = header.record_count * record_samples
    expected = data_offset + total_samples * c.SAMPLE_BYTES

    if len(buffer) < expected:
        raise TruncatedDataError(
            f"Buffer too short for {header.record_count} data records: {len(buffer)} bytes, need {expected}",
            expected_bytes=expected, actual_bytes=len(buffer), section='data')
    if len(buffer) > expected:
        logger.debug(f"Ignoring {len(buffer) - expected} trailing bytes after the last data record")

    if total_samples == 0:
        return SignalMatrix(np.empty(0, dtype=np.int16) for _ in channels)

    records = np.frombuffer(buffer, dtype=c.SAMPLE_DTYPE, count=total_samples, offset=data_offset)
    records = records.reshape(header.record_count, record_samples)
    bounds = np.cumsum([0] + counts)
    return SignalMatrix(
        np.array(records[:, bounds[k]:bounds[k + 1]], dtype=np.int16).reshape(-1)
        for k in range(len(channels))
    )


def decode(buffer: Buffer) -> DecodedRecording:
    """Decode a complete EDF buffer.

    Args:
        buffer: The whole file contents

    Returns:
        DecodedRecording with header, channel descriptors and raw samples

    Raises:
        MalformedHeaderError: A required header field is unusable
        TruncatedDataError: The buffer is shorter than the header implies
    """
    header, channels = parse_header(buffer)
    signals = decode_samples(buffer, header, channels)
    logger.info(f"Decoded EDF recording: {header.channel_count} channels, {header.record_count} records, "
                f"{header.sampling_rate_hz:g} Hz, {header.total_duration_seconds:g} s")
    return DecodedRecording(header=header, channels=channels, signals=signals)
