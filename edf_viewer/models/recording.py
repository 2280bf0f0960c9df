"""
Recording models produced by the EDF decoder.

All models are frozen: a recording is decoded once at load time and only read
afterwards, so instances can be shared between render calls without locking.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Tuple, Iterator

import numpy as np


@dataclass(frozen=True)
class RecordingHeader:
    """Recording-level fields from the fixed EDF header.

    Attributes:
        channel_count: Number of signals in the file (>= 1)
        record_count: Number of data records (>= 0)
        record_duration_seconds: Duration of one data record (> 0)
        samples_per_record: Samples per record of channel 0, used for the sampling rate
        version: Format version text
        patient_id: Local patient identification text
        recording_id: Local recording identification text
        start_date: Start date text as stored ('dd.mm.yy')
        start_time: Start time text as stored ('hh.mm.ss')
        start_datetime: Parsed start date/time, None if the text is not parseable
        header_bytes: Header size declared in the file, None if not parseable
    """
    channel_count: int
    record_count: int
    record_duration_seconds: float
    samples_per_record: int
    version: str = ''
    patient_id: str = ''
    recording_id: str = ''
    start_date: str = ''
    start_time: str = ''
    start_datetime: Optional[datetime] = None
    header_bytes: Optional[int] = None

    def __post_init__(self):
        """Validate header values."""
        if self.channel_count < 1:
            raise ValueError(f"channel_count must be >= 1, got {self.channel_count}")
        if self.record_count < 0:
            raise ValueError(f"record_count must be >= 0, got {self.record_count}")
        if self.record_duration_seconds <= 0:
            raise ValueError(f"record_duration_seconds must be > 0, got {self.record_duration_seconds}")
        if self.samples_per_record < 1:
            raise ValueError(f"samples_per_record must be >= 1, got {self.samples_per_record}")

    @property
    def sampling_rate_hz(self) -> float:
        return self.samples_per_record / self.record_duration_seconds

    @property
    def total_duration_seconds(self) -> float:
        return self.record_count * self.record_duration_seconds

    @property
    def computed_header_bytes(self) -> int:
        """Byte offset where the data section starts."""
        return 256 + 256 * self.channel_count


@dataclass(frozen=True)
class ChannelDescriptor:
    """Per-channel label and calibration from the signal header.

    Attributes:
        label: Trimmed channel label (duplicates are allowed)
        digital_min: Lowest digital code
        digital_max: Highest digital code
        physical_min: Physical value mapped to digital_min
        physical_max: Physical value mapped to digital_max
        samples_per_record: Samples of this channel in each data record
        transducer: Transducer type text
        physical_dimension: Physical unit text (e.g. 'uV')
        prefiltering: Prefiltering text
    """
    label: str
    digital_min: int
    digital_max: int
    physical_min: float
    physical_max: float
    samples_per_record: int = 1
    transducer: str = ''
    physical_dimension: str = ''
    prefiltering: str = ''

    @property
    def is_degenerate(self) -> bool:
        """True when the digital range is empty and no physical value is defined."""
        return self.digital_max == self.digital_min

    @property
    def unit(self) -> str:
        return self.physical_dimension

    def __str__(self) -> str:
        return f"{self.label} [{self.physical_min}..{self.physical_max} {self.physical_dimension}]"


class SignalMatrix:
    """Ordered per-channel raw sample arrays.

    Each channel is a read-only int16 numpy array. Indexing returns the array
    for one channel; iteration yields channels in file order.
    """

    def __init__(self, channels):
        arrays = []
        for samples in channels:
            array = np.asarray(samples, dtype=np.int16)
            if array.ndim != 1:
                raise ValueError(f"channel samples must be one-dimensional, got shape {array.shape}")
            array.flags.writeable = False
            arrays.append(array)
        self._channels: Tuple[np.ndarray, ...] = tuple(arrays)

    def __len__(self) -> int:
        return len(self._channels)

    def __getitem__(self, index: int) -> np.ndarray:
        return self._channels[index]

    def __iter__(self) -> Iterator[np.ndarray]:
        return iter(self._channels)

    def __repr__(self) -> str:
        lengths = [len(c) for c in self._channels]
        return f"SignalMatrix(channels={len(self._channels)}, lengths={lengths})"

    @property
    def channel_lengths(self) -> Tuple[int, ...]:
        return tuple(len(c) for c in self._channels)


@dataclass(frozen=True)
class DecodedRecording:
    """Result of decoding one EDF buffer."""
    header: RecordingHeader
    channels: Tuple[ChannelDescriptor, ...]
    signals: SignalMatrix

    def __post_init__(self):
        if len(self.channels) != self.header.channel_count:
            raise ValueError(f"expected {self.header.channel_count} channel descriptors, got {len(self.channels)}")
        if len(self.signals) != self.header.channel_count:
            raise ValueError(f"expected {self.header.channel_count} signal arrays, got {len(self.signals)}")

    @property
    def labels(self) -> Tuple[str, ...]:
        return tuple(c.label for c in self.channels)

    def channel_sampling_rate(self, channel_index: int) -> float:
        return self.channels[channel_index].samples_per_record / self.header.record_duration_seconds


@dataclass(frozen=True)
class ChannelSummary:
    """Diagnostic summary of one channel.

    Attributes:
        index: Channel index in file order
        label: Channel label
        unit: Physical unit text
        sample_count: Number of decoded samples
        sampling_rate_hz: Channel sampling rate
        raw_min: Lowest raw sample, None for an empty channel
        raw_max: Highest raw sample, None for an empty channel
        mean_physical: Mean value in physical units, None if calibration is degenerate
    """
    index: int
    label: str
    unit: str
    sample_count: int
    sampling_rate_hz: float
    raw_min: Optional[int]
    raw_max: Optional[int]
    mean_physical: Optional[float]

    def __str__(self) -> str:
        mean = 'n/a' if self.mean_physical is None else f"{self.mean_physical:.6g} {self.unit}".rstrip()
        return f"[{self.index}] {self.label}: {self.sample_count} samples @ {self.sampling_rate_hz:g} Hz, mean={mean}"
