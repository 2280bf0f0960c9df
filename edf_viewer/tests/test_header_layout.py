"""Checks the header layout tables against the EDF specification."""
from edf_viewer.utils.edf_decoder import HEADER_FIELDS, SIGNAL_FIELDS, signal_field_offset


def test_fixed_header_offsets_match_edf_spec():
    expected = {
        'version': (0, 8),
        'patient_id': (8, 80),
        'recording_id': (88, 80),
        'start_date': (168, 8),
        'start_time': (176, 8),
        'header_bytes': (184, 8),
        'record_count': (236, 8),
        'record_duration': (244, 8),
        'channel_count': (252, 4),
    }
    assert {name: (s.offset, s.width) for name, s in HEADER_FIELDS.items()} == expected


def test_fixed_header_fields_end_at_256():
    spec = HEADER_FIELDS['channel_count']
    assert spec.offset + spec.width == 256


def test_signal_fields_are_contiguous_blocks():
    # 32 reserved bytes per channel follow the last field
    position = 0
    for name, spec in SIGNAL_FIELDS.items():
        assert spec.offset == position, name
        position += spec.width
    assert position + 32 == 256


def test_signal_field_offsets_for_channel():
    ns = 4
    assert signal_field_offset(SIGNAL_FIELDS['label'], ns, 0) == 256
    assert signal_field_offset(SIGNAL_FIELDS['label'], ns, 3) == 256 + 48
    assert signal_field_offset(SIGNAL_FIELDS['physical_min'], ns, 0) == 256 + 104 * ns
    assert signal_field_offset(SIGNAL_FIELDS['physical_max'], ns, 1) == 256 + 112 * ns + 8
    assert signal_field_offset(SIGNAL_FIELDS['digital_min'], ns, 2) == 256 + 120 * ns + 16
    assert signal_field_offset(SIGNAL_FIELDS['digital_max'], ns, 3) == 256 + 128 * ns + 24
    assert signal_field_offset(SIGNAL_FIELDS['samples_per_record'], ns, 0) == 256 + 216 * ns


def test_required_fields():
    required = {name for name, s in HEADER_FIELDS.items() if s.required}
    assert required == {'record_count', 'record_duration', 'channel_count'}
    required = {name for name, s in SIGNAL_FIELDS.items() if s.required}
    assert required == {'label', 'physical_min', 'physical_max', 'digital_min', 'digital_max',
                        'samples_per_record'}
