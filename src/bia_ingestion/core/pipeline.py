# ============================================================================
# src/bia_ingestion/core/pipeline.py
# ============================================================================
"""
Ingestion Pipeline

Single entry point for turning OCR text into a checked record:

    text → extract → validate → (auto-correct → re-validate)

Also re-checks and repairs a whole history of records (backfill), pairing
each record with the one immediately before it in time. Pairs further apart
than MAX_PAIR_GAP_DAYS are not compared: large changes over long gaps are
real, not OCR errors.

Persistence and the confirm/skip/retry decision stay with the caller.
"""

import logging
import uuid
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Tuple

from ..config import pipeline_settings
from ..extractors import FieldExtractor
from ..utils.logging import log_performance
from ..validators import AutoCorrector, HistoryValidator
from .context import MeasurementRecord, ValidationIssue

logger = logging.getLogger(__name__)


@dataclass
class IngestionResult:
    """Outcome of processing one report."""
    record: MeasurementRecord
    raw_text: str
    issues: List[ValidationIssue] = field(default_factory=list)
    initial_issues: List[ValidationIssue] = field(default_factory=list)
    corrected: bool = False
    compared: bool = False  # False when no previous record was usable

    @property
    def has_issues(self) -> bool:
        return bool(self.issues)

    @property
    def has_data(self) -> bool:
        return self.record.has_data()

    def to_dict(self) -> dict:
        return {
            "record": self.record.to_dict(),
            "issues": [issue.to_dict() for issue in self.issues],
            "initial_issues": [issue.to_dict() for issue in self.initial_issues],
            "corrected": self.corrected,
            "compared": self.compared,
            "has_data": self.has_data,
        }


@dataclass
class HistoryCheck:
    """
    Validation of one stored record against its predecessor.

    record is the corrected copy when correction applied, previous is always
    the stored (uncorrected) next-older record.
    """
    record: MeasurementRecord
    previous: Optional[MeasurementRecord]
    issues: List[ValidationIssue] = field(default_factory=list)
    initial_issues: List[ValidationIssue] = field(default_factory=list)
    corrected: bool = False
    skipped_reason: Optional[str] = None


class IngestionPipeline:
    """
    Orchestrates extraction, validation and correction.

    All collaborators are stateless, so one pipeline can be shared.
    """

    def __init__(
        self,
        extractor: Optional[FieldExtractor] = None,
        validator: Optional[HistoryValidator] = None,
        corrector: Optional[AutoCorrector] = None,
        settings=None
    ):
        self.extractor = extractor or FieldExtractor()
        self.validator = validator or HistoryValidator()
        self.corrector = corrector or AutoCorrector()
        self.settings = settings or pipeline_settings

    @log_performance(logger, "BIA report ingestion")
    def process(
        self,
        text: str,
        previous: Optional[MeasurementRecord] = None
    ) -> IngestionResult:
        """
        Process one OCR transcript.

        Args:
            text: OCR output for one report image
            previous: User's most recent prior record, if any

        Returns:
            IngestionResult with the (possibly corrected) record and the
            issues still present after correction
        """
        record = self.extractor.extract(text)
        record = record.clone(id=str(uuid.uuid4()))

        if not record.has_data():
            logger.warning("No weight, body fat or fitness score found in report text")

        comparable = previous is not None and self.within_gap(record, previous)
        if not comparable:
            return IngestionResult(record=record, raw_text=text)

        checked, issues, initial_issues, corrected = self._check_pair(record, previous)
        return IngestionResult(
            record=checked,
            raw_text=text,
            issues=issues,
            initial_issues=initial_issues,
            corrected=corrected,
            compared=True,
        )

    def process_batch(self, texts: Iterable[str]) -> List[IngestionResult]:
        """Process transcripts independently (no history comparison)."""
        return [self.process(text) for text in texts]

    def revalidate_history(self, records: Iterable[MeasurementRecord]) -> List[HistoryCheck]:
        """
        Validate (and correct) every record against the one just before it.

        Records are ordered newest first. Each record is paired with the
        stored next-older record, never with that record's corrected copy.
        Undated records cannot be placed in time and are reported as skipped.

        Returns:
            One HistoryCheck per input record, newest first, undated last
        """
        records = list(records)
        dated = [r for r in records if r.measured_at() is not None]
        undated = [r for r in records if r.measured_at() is None]
        dated.sort(key=lambda r: r.measured_at(), reverse=True)

        checks: List[HistoryCheck] = []
        for index, record in enumerate(dated):
            previous = dated[index + 1] if index + 1 < len(dated) else None
            if previous is None:
                checks.append(HistoryCheck(record=record, previous=None, skipped_reason="no earlier record"))
            elif not self.within_gap(record, previous):
                checks.append(HistoryCheck(record=record, previous=previous, skipped_reason="gap too large"))
            else:
                checked, issues, initial_issues, corrected = self._check_pair(record, previous)
                checks.append(HistoryCheck(
                    record=checked,
                    previous=previous,
                    issues=issues,
                    initial_issues=initial_issues,
                    corrected=corrected,
                ))

        for record in undated:
            logger.warning(f"Record {record.id or '<no id>'} has no date, skipping history check")
            checks.append(HistoryCheck(record=record, previous=None, skipped_reason="no date"))

        return checks

    def _check_pair(
        self,
        record: MeasurementRecord,
        previous: MeasurementRecord
    ) -> Tuple[MeasurementRecord, List[ValidationIssue], List[ValidationIssue], bool]:
        """
        Validate, and when issues are found correct and re-validate.

        Returns:
            (record to keep, remaining issues, issues before correction, corrected)
        """
        issues = self.validator.validate(record, previous)
        if not issues or not self.settings.ENABLE_AUTO_CORRECTION:
            return record, issues, issues, False

        logger.info(f"Found {len(issues)} validation issues, attempting auto-correction")
        corrected = self.corrector.correct(record, previous)
        if corrected is None:
            return record, issues, issues, False

        remaining = self.validator.validate(corrected, previous)
        logger.info(f"After auto-correction: {len(remaining)} issues remaining")
        return corrected, remaining, issues, True

    def within_gap(self, record: MeasurementRecord, previous: MeasurementRecord) -> bool:
        """
        True when the two records are close enough in time to compare.

        Unknown dates on either side are treated as comparable.
        """
        max_days = self.settings.MAX_PAIR_GAP_DAYS
        if max_days is None:
            return True

        current_at = record.measured_at()
        previous_at = previous.measured_at()
        if current_at is None or previous_at is None:
            return True

        gap = abs((current_at - previous_at).days)
        if gap > max_days:
            logger.info(f"Skipping comparison: records are {gap} days apart (limit {max_days})")
            return False
        return True
