# ============================================================================
# FILE: tests/unit/test_history_validator.py
# ============================================================================
"""
Unit tests for history validation
"""

import pytest

from bia_ingestion.core.context import SegmentalValue, Severity
from bia_ingestion.validators import HistoryValidator, validate_against_previous


def test_no_previous_record(make_record):
    """Test first entry is never flagged"""
    assert validate_against_previous(make_record(weight=172.0), None) == []


def test_identical_records(previous_record):
    """Test unchanged record has no issues"""
    assert validate_against_previous(previous_record.clone(), previous_record) == []


def test_small_change_passes(make_record):
    """Test weight 170 -> 172 is within tolerance"""
    issues = validate_against_previous(make_record(weight=172.0), make_record(weight=170.0))
    assert issues == []


@pytest.mark.parametrize("parsed,expected", [
    (110.0, None),
    (110.01, Severity.WARNING),
    (150.0, Severity.WARNING),
    (150.01, Severity.ERROR),
    (89.99, Severity.WARNING),
    (49.99, Severity.ERROR),
])
def test_severity_boundaries(make_record, parsed, expected):
    """Test warning above 10%, error above 50%"""
    issues = validate_against_previous(make_record(weight=parsed), make_record(weight=100.0))

    if expected is None:
        assert issues == []
    else:
        assert len(issues) == 1
        assert issues[0].severity == expected


def test_disappearing_value_is_error(make_record):
    """Test weight dropping to zero"""
    issues = validate_against_previous(make_record(weight=0.0), make_record(weight=170.0))

    assert len(issues) == 1
    issue = issues[0]
    assert issue.metric == "weight"
    assert issue.severity == Severity.ERROR
    assert issue.percent_change == pytest.approx(-100.0)
    assert issue.parsed_value == 0.0
    assert issue.previous_value == pytest.approx(170.0)


def test_new_value_is_not_flagged(make_record):
    """Test a metric appearing for the first time"""
    assert validate_against_previous(make_record(bmi=23.2), make_record(bmi=0.0)) == []


def test_issue_fields(make_record):
    """Test percent change and label on a flagged metric"""
    issues = validate_against_previous(make_record(visceral_fat=91.0), make_record(visceral_fat=9.0))

    assert len(issues) == 1
    issue = issues[0]
    assert issue.metric == "visceral_fat"
    assert issue.label == "Visceral Fat"
    assert issue.is_error
    assert issue.percent_change == pytest.approx(911.11, abs=0.01)
    assert issue.to_dict()["percent_change"] == pytest.approx(911.11)
    assert issue.to_dict()["severity"] == "error"


def test_new_segment_is_not_flagged(make_record):
    """Test segmental value appearing where the previous had none"""
    parsed = make_record(muscle_left_arm=SegmentalValue(9.6, 125.7))
    previous = make_record(muscle_left_arm=SegmentalValue(0.0, 0.0))

    assert validate_against_previous(parsed, previous) == []


def test_disappearing_segment_is_error(make_record):
    """Test segmental value dropping to zero"""
    parsed = make_record()
    previous = make_record(fat_trunk=SegmentalValue(14.1, 95.5))
    issues = validate_against_previous(parsed, previous)

    assert len(issues) == 1
    assert issues[0].metric == "fat_trunk"
    assert issues[0].severity == Severity.ERROR
    assert issues[0].percent_change == pytest.approx(-100.0)


def test_segment_compared_on_pounds_only(make_record):
    """Test percent column changes are ignored"""
    parsed = make_record(muscle_trunk=SegmentalValue(66.4, 150.0))
    previous = make_record(muscle_trunk=SegmentalValue(66.0, 100.0))

    assert validate_against_previous(parsed, previous) == []


def test_segment_drift_flagged(make_record):
    """Test segmental pounds drifting like a scalar"""
    parsed = make_record(muscle_trunk=SegmentalValue(80.0, 108.0))
    previous = make_record(muscle_trunk=SegmentalValue(66.0, 108.0))
    issues = validate_against_previous(parsed, previous)

    assert len(issues) == 1
    assert issues[0].severity == Severity.WARNING


def test_issues_in_metric_order(make_record):
    """Test scalar issues come before segmental ones, in report order"""
    parsed = make_record(
        weight=0.0,
        visceral_fat=91.0,
        muscle_left_arm=SegmentalValue(0.0, 0.0),
    )
    previous = make_record(
        weight=170.0,
        visceral_fat=9.0,
        muscle_left_arm=SegmentalValue(9.6, 125.0),
    )
    metrics = [issue.metric for issue in validate_against_previous(parsed, previous)]

    assert metrics == ["weight", "visceral_fat", "muscle_left_arm"]


def test_custom_thresholds(make_record):
    """Test thresholds passed to the validator"""
    validator = HistoryValidator(warning_threshold=0.01, error_threshold=0.02)
    issues = validator.validate(make_record(weight=172.0), make_record(weight=170.0))

    assert len(issues) == 1
    assert issues[0].severity == Severity.WARNING


def test_validation_logs_issues(make_record, caplog):
    """Test each issue is logged as a warning"""
    validate_against_previous(make_record(weight=0.0), make_record(weight=170.0))
    assert "weight" in caplog.text
