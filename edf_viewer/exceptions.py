"""
Custom exception classes for the EDF viewer.

This module provides specific exception types for the failure modes of EDF
decoding, unit conversion, recording loading and configuration, so callers can
tell a malformed file apart from a short one or from a bad setting.
"""

from typing import Any, Optional


class EdfViewerException(Exception):
    """Base exception for all EDF viewer errors.

    All custom exceptions inherit from this class so callers can catch every
    package-specific error while preserving the hierarchy.
    """
    pass


class MalformedHeaderError(EdfViewerException):
    """Exception raised when a required EDF header field cannot be used.

    Raised when a numeric field is not parseable after trimming whitespace,
    or when a parsed value is outside the range the decoder needs (for
    example a channel count below 1).

    Attributes:
        field_name: Name of the header field (e.g. 'channel_count')
        offset: Absolute byte offset of the field in the buffer
        raw_value: Field text as read from the buffer
        channel_index: Channel the field belongs to, None for fixed header fields
    """

    def __init__(self, message: str, field_name: str = None, offset: int = None,
                 raw_value: str = None, channel_index: Optional[int] = None):
        """Initialize MalformedHeaderError.

        Args:
            message: Human-readable error message
            field_name: Header field name (optional)
            offset: Byte offset of the field (optional)
            raw_value: Raw field text (optional)
            channel_index: Channel index for per-signal fields (optional)
        """
        super().__init__(message)
        self.field_name = field_name
        self.offset = offset
        self.raw_value = raw_value
        self.channel_index = channel_index


class TruncatedDataError(EdfViewerException):
    """Exception raised when the buffer is shorter than the header implies.

    Attributes:
        expected_bytes: Minimum buffer size required
        actual_bytes: Size of the buffer that was supplied
        section: Which part was cut short ('header', 'signal_header' or 'data')
    """

    def __init__(self, message: str, expected_bytes: int = None, actual_bytes: int = None,
                 section: str = None):
        """Initialize TruncatedDataError.

        Args:
            message: Human-readable error message
            expected_bytes: Required size in bytes (optional)
            actual_bytes: Supplied size in bytes (optional)
            section: Truncated section name (optional)
        """
        super().__init__(message)
        self.expected_bytes = expected_bytes
        self.actual_bytes = actual_bytes
        self.section = section


class DegenerateCalibrationError(EdfViewerException):
    """Exception raised when a channel's digital range is empty.

    The digital-to-physical transform divides by (digital_max - digital_min),
    so a channel with digital_max == digital_min has no defined physical value.

    Attributes:
        channel_label: Label of the offending channel (if known)
        digital_value: The shared digital_min/digital_max value
    """

    def __init__(self, message: str, channel_label: str = None, digital_value: int = None):
        """Initialize DegenerateCalibrationError.

        Args:
            message: Human-readable error message
            channel_label: Channel label (optional)
            digital_value: Digital min/max value (optional)
        """
        super().__init__(message)
        self.channel_label = channel_label
        self.digital_value = digital_value


class RecordingLoadError(EdfViewerException):
    """Exception raised when a recording file cannot be read.

    Attributes:
        path: Path of the file that failed to load
        original_error: The underlying exception that caused this error
    """

    def __init__(self, message: str, path: str = None, original_error: Exception = None):
        """Initialize RecordingLoadError.

        Args:
            message: Human-readable error message
            path: File path (optional)
            original_error: Underlying exception (optional)
        """
        super().__init__(message)
        self.path = path
        self.original_error = original_error


class ConfigurationError(EdfViewerException):
    """Exception raised for invalid configuration values.

    Attributes:
        setting_name: Name of the setting that is invalid
        setting_value: The invalid value
        expected: Description of expected value
    """

    def __init__(self, message: str, setting_name: str = None, setting_value: Any = None,
                 expected: str = None):
        """Initialize ConfigurationError.

        Args:
            message: Human-readable error message
            setting_name: Name of invalid setting (optional)
            setting_value: Invalid value (optional)
            expected: Expected value description (optional)
        """
        super().__init__(message)
        self.setting_name = setting_name
        self.setting_value = setting_value
        self.expected = expected
