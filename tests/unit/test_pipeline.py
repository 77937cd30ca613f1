# ============================================================================
# FILE: tests/unit/test_pipeline.py
# ============================================================================
"""
Unit tests for the ingestion pipeline
"""

import pytest

from bia_ingestion import IngestionPipeline
from bia_ingestion.config import PipelineSettings
from bia_ingestion.core.context import MeasurementRecord, Provenance, Severity


@pytest.fixture
def pipeline():
    return IngestionPipeline()


def test_process_without_previous(pipeline, sample_report_text):
    """Test first report is extracted but not compared"""
    result = pipeline.process(sample_report_text)

    assert result.has_data
    assert not result.compared
    assert not result.has_issues
    assert len(result.record.id) == 36
    assert result.raw_text == sample_report_text


def test_each_process_assigns_new_id(pipeline, sample_report_text):
    """Test record ids are unique per run"""
    first = pipeline.process(sample_report_text).record
    second = pipeline.process(sample_report_text).record

    assert first.id != second.id


def test_process_empty_text(pipeline, caplog):
    """Test unreadable report is flagged as empty"""
    result = pipeline.process("")

    assert not result.has_data
    assert "No weight" in caplog.text


def test_process_clean_against_previous(pipeline, sample_report_text):
    """Test the same report twice compares clean"""
    previous = pipeline.process(sample_report_text).record
    result = pipeline.process(sample_report_text, previous)

    assert result.compared
    assert result.issues == []
    assert not result.corrected


def test_process_corrects_decimal_shift(pipeline, sample_report_text):
    """Test visceral fat 91 is repaired to 9.1"""
    previous = pipeline.process(sample_report_text).record
    text = sample_report_text.replace("Visceral Fat ~ 9", "Visceral Fat ~ 91")

    result = pipeline.process(text, previous)

    assert result.compared
    assert result.corrected
    assert result.record.visceral_fat == pytest.approx(9.1)
    assert result.record.provenance["visceral_fat"] == Provenance.CORRECTED
    assert result.issues == []
    assert [issue.metric for issue in result.initial_issues] == ["visceral_fat"]
    assert result.initial_issues[0].severity == Severity.ERROR


def test_uncorrectable_issues_are_kept(pipeline, sample_report_text):
    """Test genuine drift is reported when nothing can be repaired"""
    current = pipeline.process(sample_report_text).record
    previous = current.clone(weight=140.0)

    result = pipeline.process(sample_report_text, previous)

    assert not result.corrected
    assert [issue.metric for issue in result.issues] == ["weight"]
    assert result.issues == result.initial_issues


def test_auto_correction_disabled(sample_report_text):
    """Test correction can be switched off"""
    pipeline = IngestionPipeline(settings=PipelineSettings(ENABLE_AUTO_CORRECTION=False))
    previous = pipeline.process(sample_report_text).record
    text = sample_report_text.replace("Visceral Fat ~ 9", "Visceral Fat ~ 91")

    result = pipeline.process(text, previous)

    assert not result.corrected
    assert result.record.visceral_fat == pytest.approx(91.0)
    assert len(result.issues) == 1


def test_previous_outside_gap_is_not_compared(pipeline, sample_report_text):
    """Test records months apart are not validated"""
    previous = pipeline.process(sample_report_text).record.clone(
        date="2025-10-01T08:00:00",
        weight=120.0,
    )
    result = pipeline.process(sample_report_text, previous)

    assert not result.compared
    assert result.issues == []


def test_within_gap():
    """Test gap check, unknown dates count as comparable"""
    pipeline = IngestionPipeline(settings=PipelineSettings(MAX_PAIR_GAP_DAYS=30))
    jan = MeasurementRecord(date="2026-01-31T08:00:00")

    assert pipeline.within_gap(jan, MeasurementRecord(date="2026-01-01T08:00:00"))
    assert not pipeline.within_gap(jan, MeasurementRecord(date="2025-12-31T08:00:00"))
    assert pipeline.within_gap(jan, MeasurementRecord())


def test_gap_check_disabled():
    """Test None disables the gap check"""
    pipeline = IngestionPipeline(settings=PipelineSettings(MAX_PAIR_GAP_DAYS=None))
    assert pipeline.within_gap(
        MeasurementRecord(date="2026-01-31T08:00:00"),
        MeasurementRecord(date="2020-01-01T08:00:00"),
    )


def test_process_batch(pipeline, sample_report_text):
    """Test independent processing of several transcripts"""
    results = pipeline.process_batch([sample_report_text, ""])

    assert len(results) == 2
    assert results[0].has_data
    assert not results[1].has_data
    assert not any(result.compared for result in results)


def test_revalidate_history(pipeline):
    """Test backfill pairs each record with its predecessor"""
    newest = MeasurementRecord(id="c", date="2026-01-07T08:00:00", weight=200.0)
    middle = MeasurementRecord(id="b", date="2026-01-01T08:00:00", weight=172.0)
    oldest = MeasurementRecord(id="a", date="2025-06-01T08:00:00", weight=172.0)
    undated = MeasurementRecord(id="x", weight=172.0)

    checks = pipeline.revalidate_history([oldest, undated, newest, middle])

    assert [check.record.id for check in checks] == ["c", "b", "a", "x"]
    assert checks[0].previous is middle
    assert [issue.metric for issue in checks[0].issues] == ["weight"]
    assert checks[1].skipped_reason == "gap too large"
    assert checks[2].skipped_reason == "no earlier record"
    assert checks[3].skipped_reason == "no date"


def test_revalidate_history_corrects_decimal_shift(pipeline):
    """Test backfill repairs records and pairs with the stored older record"""
    newest = MeasurementRecord(id="c", date="2026-01-07T08:00:00", weight=172.0, visceral_fat=91.0)
    middle = MeasurementRecord(id="b", date="2026-01-04T08:00:00", weight=172.0, visceral_fat=90.0)
    oldest = MeasurementRecord(id="a", date="2026-01-01T08:00:00", weight=172.0, visceral_fat=9.0)

    checks = pipeline.revalidate_history([oldest, newest, middle])

    # 91 vs the stored 90 is stable, so the newest record is left alone
    assert checks[0].previous is middle
    assert not checks[0].corrected
    assert checks[0].record.visceral_fat == pytest.approx(91.0)

    assert checks[1].corrected
    assert checks[1].previous is oldest
    assert checks[1].record.id == "b"
    assert checks[1].record.visceral_fat == pytest.approx(9.0)
    assert checks[1].record.provenance["visceral_fat"] == Provenance.CORRECTED
    assert checks[1].issues == []
    assert [issue.metric for issue in checks[1].initial_issues] == ["visceral_fat"]

    assert checks[2].skipped_reason == "no earlier record"


def test_result_to_dict(pipeline, sample_report_text):
    """Test serialized result shape"""
    previous = pipeline.process(sample_report_text).record
    text = sample_report_text.replace("Visceral Fat ~ 9", "Visceral Fat ~ 91")
    data = pipeline.process(text, previous).to_dict()

    assert data["corrected"] is True
    assert data["compared"] is True
    assert data["has_data"] is True
    assert data["issues"] == []
    assert data["initial_issues"][0]["metric"] == "visceral_fat"
    assert data["record"]["provenance"]["visceral_fat"] == "corrected"
