# ============================================================================
# FILE: tests/unit/test_measurement_record.py
# ============================================================================
"""
Unit tests for the record model
"""

import pytest

from bia_ingestion.core.context import (
    MeasurementRecord,
    Provenance,
    SegmentalValue,
)
from bia_ingestion.utils.exceptions import RecordFormatError


def test_defaults_are_empty():
    """Test a new record holds zeros and empty strings"""
    record = MeasurementRecord()

    assert record.weight == 0.0
    assert record.age == 0
    assert record.name == ""
    assert record.fat_left_leg == SegmentalValue(0.0, 0.0)
    assert record.provenance == {}


@pytest.mark.parametrize("fields,expected", [
    ({}, False),
    ({"weight": 172.0}, True),
    ({"body_fat_percentage": 15.7}, True),
    ({"fitness_score": 93.3}, True),
    ({"bmi": 23.2}, False),
])
def test_has_data(fields, expected):
    """Test a record needs weight, body fat or fitness score"""
    assert MeasurementRecord(**fields).has_data() is expected


def test_measured_at():
    """Test report date parsing"""
    assert MeasurementRecord(date="2026-01-07T08:00:00").measured_at().day == 7
    assert MeasurementRecord(date="").measured_at() is None
    assert MeasurementRecord(date="not a date").measured_at() is None


def test_clone_is_independent(previous_record):
    """Test clone copies and overrides"""
    copy = previous_record.clone(weight=180.0, provenance={"weight": Provenance.CORRECTED})

    assert copy.weight == 180.0
    assert previous_record.weight == 172.0
    assert copy.muscle_trunk == previous_record.muscle_trunk
    assert copy.provenance is not previous_record.provenance
    assert "weight" not in previous_record.provenance


def test_clone_rejects_unknown_fields(previous_record):
    """Test typos in override names"""
    with pytest.raises(TypeError):
        previous_record.clone(wieght=180.0)


def test_segmental_value_rejects_negative():
    """Test negative readings cannot be stored"""
    with pytest.raises(ValueError):
        SegmentalValue(pounds=-1.0, percent=50.0)


def test_segmental_value_from_parsed_clamps():
    """Test parsed negatives clamp to zero"""
    assert SegmentalValue.from_parsed(-2.0, 80.0) == SegmentalValue(0.0, 80.0)


def test_dict_roundtrip(previous_record):
    """Test to_dict/from_dict preserve the record"""
    record = previous_record.clone(provenance={"protein": Provenance.DERIVED})
    data = record.to_dict()

    assert data["muscle_trunk"] == {"pounds": 66.0, "percent": 108.0}
    assert data["provenance"] == {"protein": "derived"}
    assert MeasurementRecord.from_dict(data) == record


def test_from_dict_legacy_segment_shape():
    """Test the {"lb": ..., "percent": ...} segment shape"""
    record = MeasurementRecord.from_dict({"muscle_trunk": {"lb": 66.4, "percent": 108.2}})
    assert record.muscle_trunk == SegmentalValue(66.4, 108.2)


def test_from_dict_ignores_unknown_keys():
    """Test extra keys from other versions are dropped"""
    record = MeasurementRecord.from_dict({"weight": "172.0", "age": "35", "extra": 1})

    assert record.weight == 172.0
    assert record.age == 35


@pytest.mark.parametrize("payload", [
    [1, 2, 3],
    {"weight": "heavy"},
    {"muscle_trunk": 12},
    {"provenance": {"weight": "guessed"}},
])
def test_from_dict_rejects_bad_payloads(payload):
    """Test malformed stored records"""
    with pytest.raises(RecordFormatError):
        MeasurementRecord.from_dict(payload)
