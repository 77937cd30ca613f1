# ============================================================================
# FILE: tests/conftest.py
# ============================================================================
"""
Pytest configuration and shared fixtures for testing.
"""

import pytest

from bia_ingestion.core.context import MeasurementRecord, SegmentalValue


# OCR transcript of a complete report. Glyph noise is deliberate:
# "Ib" for lb, "®"/"@®" for the segment markers.
SAMPLE_REPORT = """Body Composition Report
John Smith 35 Male 5'10"
01/07/2026 08:12
Health assessment 93.3points

Weight
172.0lb
BMI
(kg/m²)
23.2
Body Type Normal
Visceral Fat ~ 9

Body Composition
Body Water 45.2L
Fat Mass 15.7%
Protein 19.3%
Bone Mass 4.2%

Muscle balance
® 9.6lb MW 125.7%   HM 127.4% @9.8lb
@® 66.4lb MW 108.2%
@® 23.2Ib MW 107.4%   HM 108.2% @ 23.4lb

Segmental fat analysis
® 1.5lb MW 80.2%   HM 82.1% @1.6lb
@® 14.1lb MW 95.5%
@® 3.2lb MW 90.0%   HM 91.3% @ 3.3lb

Other Measurements
Fat-free Body Weight 144.8lb
Muscle Mass  137.8Ib
Muscle Mass Percentage 80.1%
Skeletal Muscle Percentage 54.4
Body Water Percentage 60.8
Subcutaneous Fat Percentage 13.8%
BMR  1790kcal
Metabolic Age 26
SMI 8.9
Waist-Hip Ratio (0.95

Weight Control
Normal weight 170.6lb
Weight Control -1.4lb
Fat mass control -1.4lb
Muscle control +0lb
"""


@pytest.fixture
def sample_report_text():
    """Full OCR transcript of one report"""
    return SAMPLE_REPORT


@pytest.fixture
def segmental_text():
    """Muscle balance block only"""
    return """Muscle balance
® 9.6lb MW 125.7%   HM 127.4% @9.8lb
@® 66.4lb MW 108.2%
@® 23.2Ib MW 107.4%   HM 108.2% @ 23.4lb
Segmental fat
"""


@pytest.fixture
def previous_record():
    """Earlier record for the same user"""
    return MeasurementRecord(
        id="prev-1",
        date="2026-01-01T08:00:00",
        weight=172.0,
        bmi=23.2,
        body_fat_percentage=15.5,
        visceral_fat=9.0,
        body_water=45.0,
        fitness_score=92.0,
        muscle_left_arm=SegmentalValue(pounds=9.6, percent=125.0),
        muscle_trunk=SegmentalValue(pounds=66.0, percent=108.0),
        fat_trunk=SegmentalValue(pounds=14.1, percent=95.5),
    )


@pytest.fixture
def make_record():
    """Factory for records with only the given fields set"""
    def _make(**fields) -> MeasurementRecord:
        return MeasurementRecord(**fields)
    return _make
