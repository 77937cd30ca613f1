# ============================================================================
# src/bia_ingestion/extractors/field_extractor.py
# ============================================================================
"""
Field Extractor

Parses the OCR transcript of one BIA scale report into a MeasurementRecord.

Each field owns an ordered cascade of patterns, most specific first:
1. Field label directly followed by the value and its unit glyph
2. Value located next to a more reliably printed neighbouring label

The first pattern that matches wins. Fields nothing matches stay at 0 / ''.

Mass fields (protein, bone mass, skeletal muscle, body fat mass) are never
read from text. Their percentages OCR far more reliably than the small
multi-digit absolute values, so they are recomputed from weight.
"""

import logging
import re
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional

from ..constants import (
    BODY_SHAPES,
    DERIVED_MASS_FIELDS,
    bmi_category,
    pbf_category,
)
from ..core.context import MeasurementRecord, Provenance, SegmentalValue
from ..utils.numbers import parse_number, round_half_up
from .patterns import LB, LB_GLYPH, NUM, PCT, SIGNED_NUM
from .segmental_parser import (
    SegmentalSection,
    find_fat_section,
    find_muscle_section,
    parse_segmental_section,
)

logger = logging.getLogger(__name__)


# ============================================================================
# TRACING
# ============================================================================

@dataclass(frozen=True)
class TraceEvent:
    """How one field was resolved. pattern is None when nothing matched or the value was computed."""
    field: str
    pattern: Optional[str]
    raw: Optional[str]
    value: Any


TraceCallback = Callable[[TraceEvent], None]


def logging_tracer(target: Optional[logging.Logger] = None) -> TraceCallback:
    """Trace callback that writes each resolved field to a logger at DEBUG level."""
    log = target or logger

    def trace(event: TraceEvent) -> None:
        if event.pattern:
            log.debug(f"{event.field}: {event.value!r} via '{event.pattern}' ({event.raw!r})")
        elif event.raw == "derived":
            log.debug(f"{event.field}: {event.value!r} (derived)")
        else:
            log.debug(f"{event.field}: no match")

    return trace


# ============================================================================
# VALUE CONVERTERS
# ============================================================================

def _float(match: re.Match) -> float:
    return parse_number(match.group(1))


def _int(match: re.Match) -> int:
    return int(match.group(1))


def _joined_decimal(match: re.Match) -> float:
    # "144 .8" or a dropped decimal point "1378" -> integer part + one digit
    return parse_number(f"{match.group(1)}.{match.group(2) or '0'}")


def _report_date(match: re.Match) -> str:
    month, day, year = (int(g) for g in match.groups())
    try:
        return datetime(year, month, day, 8, 0, 0).isoformat()
    except ValueError:
        return ""


def _height(match: re.Match) -> str:
    return f"{match.group(1)}'{match.group(2) or '0'}\""


def _gender(match: re.Match) -> str:
    return match.group(1).capitalize()


def _text(match: re.Match) -> str:
    return " ".join(match.group(1).split())


def _body_shape(match: re.Match) -> str:
    found = re.sub(r'\s+', '', match.group(1)).lower()
    for label in BODY_SHAPES:
        if label.replace(" ", "").lower() == found:
            return label
    return ""


# ============================================================================
# FIELD RULES
# ============================================================================

@dataclass(frozen=True)
class FieldRule:
    name: str
    pattern: re.Pattern
    convert: Callable[[re.Match], Any] = _float


def _rule(name: str, pattern: str, convert: Callable[[re.Match], Any] = _float, flags: int = re.IGNORECASE) -> FieldRule:
    return FieldRule(name=name, pattern=re.compile(pattern, flags), convert=convert)


_BODY_SHAPE_ALTERNATION = "|".join(label.replace(" ", r"\s*") for label in BODY_SHAPES)

_WEIGHT_LABEL_GUARD = (
    r'(?<![A-Za-z])'
    r'(?<!Normal\s)(?<!Normal\s\s)(?<!Normal\s\s\s)'
    r'(?<!Body\s)(?<!Body\s\s)(?<!Body\s\s\s)'
)

FIELD_RULES: Dict[str, List[FieldRule]] = {
    # ---- Header --------------------------------------------------------
    "date": [
        _rule("mm/dd/yyyy", r'(\d{2})/(\d{2})/(\d{4})', _report_date),
    ],
    "name": [
        _rule("name_before_age_gender", r'([A-Z][a-z]+[ \t]+[A-Z][a-z]+)[ \t]+\d+[ \t]+(?:Male|Female)', _text),
    ],
    "age": [
        _rule("age_before_gender", r'(\d{1,3})\s+(?:Male|Female)\b', _int),
    ],
    "gender": [
        _rule("gender", r'\b(Male|Female)\b', _gender),
    ],
    "height": [
        _rule("feet_inches", r"\b(\d)\s?['’]\s*(\d{1,2})?", _height),
    ],
    "fitness_score": [
        _rule("health_assessment_points", r'(?:Health\s*assessment|assessment)\s*(\d+(?:\.\d+)?)\s*points'),
        _rule("points", r'(\d+(?:\.\d+)?)\s*points'),
        _rule("out_of_100", r'(\d+(?:\.\d+)?)\s*/\s*100(?!\d)'),
    ],

    # ---- Core metrics --------------------------------------------------
    "weight": [
        # "Normal weight" belongs to the recommendations, "Body Weight" to fat-free mass.
        # OCR may drop or double the space, so "Normalweight" is blocked by the letter guard.
        _rule("weight_label", rf'{_WEIGHT_LABEL_GUARD}Weight\s*\n?\s*(\d{{2,3}}(?:\.\d)?)\s?{LB}'),
        _rule("before_fat_mass", rf'(\d{{3}}(?:\.\d)?)\s?{LB_GLYPH}\s*Fat\s*Mass'),
        _rule("body_composition_block", rf'Body\s*Composition[\s\S]{{0,50}}?(\d{{3}}(?:\.\d)?)\s?{LB}'),
    ],
    "bmi": [
        _rule("bmi_label", r'\bBMI\s*[\s\S]{0,30}?(\d{2}\.\d)(?!\d)'),
        _rule("kg_m2_unit", r'\(kg/m[²2?]?\)\s*[\s\S]{0,30}?(\d{2}\.\d)(?!\d)'),
        _rule("bmi_colon", r'\bBMI\s*[:\s]+(\d{1,2}\.\d)'),
    ],
    "body_fat_percentage": [
        _rule("fat_mass_percent", rf'Fat\s*Mass\s*(\d{{1,2}}\.\d)\s?{PCT}'),
        _rule("pbf_label", r'(?:PBF|Body\s*Fat\s*Percentage)\s*(\d{1,2}\.\d)'),
    ],
    "visceral_fat": [
        _rule("visceral_fat_label", r'Visceral\s*Fat[^\d]{0,25}?(\d+(?:\.\d)?)'),
    ],

    # ---- Body composition ----------------------------------------------
    "body_water": [
        _rule("body_water_litres", r'Body\s*Water\s*(\d{2}(?:\.\d)?)\s*L(?![bp|])'),
        _rule("litres_before_label", r'(\d{2}\.\d)\s*L(?![bp|])[^\n]*Body\s*Water'),
    ],
    "fat_free_mass": [
        _rule("split_decimal", rf'Fat[- ]?free\s*Body\s*Weight\s*(\d+)\s*\.\s*(\d)\s*{LB}', _joined_decimal),
        _rule("fat_free_body_weight", rf'Fat[- ]?free\s*Body\s*Weight\s*({NUM})\s*{LB}'),
    ],
    "soft_lean_mass": [
        _rule("muscle_mass_lb", rf'Muscle\s*Mass\s{{1,4}}(\d{{2,3}})\.?(\d?)\s?{LB}', _joined_decimal),
    ],

    # ---- Percentages ---------------------------------------------------
    "body_water_percentage": [
        _rule("percentage_label", rf'Body\s*Water\s*Percentage\s*({NUM})'),
        _rule("percent_glyph", rf'Body\s*Water\s*(\d{{2}}\.\d)\s?{PCT}'),
    ],
    "protein_percentage": [
        _rule("percentage_label", rf'Protein\s*Percentage\s*({NUM})'),
        _rule("percent_glyph", rf'Protein\s*(\d{{1,2}}\.\d)\s?{PCT}'),
    ],
    "bone_mass_percentage": [
        _rule("percentage_label", rf'Bone\s*Mass\s*Percentage\s*({NUM})'),
        _rule("percent_glyph", rf'Bone\s*Mass\s*(\d\.\d)\s?{PCT}'),
    ],
    "skeletal_muscle_percentage": [
        _rule("percentage_label", rf'Skeletal\s*Muscle\s*Percentage\s*({NUM})'),
        _rule("percent_glyph", rf'Skeletal\s*Muscle\s*(\d{{2}}\.\d)\s?{PCT}'),
    ],
    "muscle_mass_percentage": [
        _rule("percentage_label", rf'Muscle\s*Mass\s*Percentage\s*({NUM})'),
    ],
    "subcutaneous_fat_percentage": [
        _rule("percentage_label", rf'Subcutaneous\s*Fat\s*Percentage\s*({NUM})'),
        _rule("percent_glyph", rf'Subcutaneous\s*Fat\s*({NUM})\s?{PCT}'),
    ],

    # ---- Additional data -----------------------------------------------
    "bmr": [
        _rule("bmr_label", r'BMR\s{1,4}(\d{4})'),
        _rule("kcal_unit", r'(\d{4})\s*kcal'),
    ],
    "metabolic_age": [
        _rule("metabolic_age_label", r'Metabolic\s*Age\s*(\d{1,3})', _int),
    ],
    "smi": [
        _rule("smi_label", r'\bSMI\s*(\d+(?:\.\d+)?)'),
    ],
    "waist_hip_ratio": [
        _rule("waist_hip_label", r'Waist[- ]?Hip\s*Ratio\s*\(?(\d+(?:\.\d+)?)'),
    ],
    "body_shape": [
        _rule("body_type_label", rf'Body\s*Type\s*({_BODY_SHAPE_ALTERNATION})', _body_shape),
    ],

    # ---- Weight control ------------------------------------------------
    "normal_weight": [
        _rule("normal_weight_label", rf'Normal\s*weight\s*({NUM})\s?{LB}'),
    ],
    "weight_control": [
        _rule("weight_control_label", rf'Weight\s*Control\s*({SIGNED_NUM})\s?{LB}'),
    ],
    "fat_mass_control": [
        _rule("fat_mass_control_label", rf'Fat\s*mass\s*control\s*({SIGNED_NUM})\s?{LB}'),
    ],
    "muscle_control": [
        _rule("muscle_control_label", rf'Muscle\s*control\s*({SIGNED_NUM})\s?{LB}'),
    ],
}

_DEFAULTS = MeasurementRecord()

SEGMENT_FIELDS = {
    "muscle": {
        "left_upper": "muscle_left_arm",
        "right_upper": "muscle_right_arm",
        "trunk": "muscle_trunk",
        "left_lower": "muscle_left_leg",
        "right_lower": "muscle_right_leg",
    },
    "fat": {
        "left_upper": "fat_left_arm",
        "right_upper": "fat_right_arm",
        "trunk": "fat_trunk",
        "left_lower": "fat_left_leg",
        "right_lower": "fat_right_leg",
    },
}


class FieldExtractor:
    """
    Regex cascade extractor for BIA report transcripts.

    Stateless apart from the optional trace callback; one instance can
    serve any number of concurrent extract() calls.
    """

    def __init__(self, trace: Optional[TraceCallback] = None):
        self.trace = trace

    def extract(self, text: Optional[str]) -> MeasurementRecord:
        """
        Parse a report transcript.

        Args:
            text: OCR output for one report image

        Returns:
            MeasurementRecord with every unmatched field at 0 / ''
        """
        text = text or ""
        values: Dict[str, Any] = {}
        provenance: Dict[str, Provenance] = {}

        for field_name, rules in FIELD_RULES.items():
            values[field_name] = self._resolve(field_name, rules, text)

        # Percentages are trusted over absolute masses
        weight = values["weight"]
        for mass_field, percent_field in DERIVED_MASS_FIELDS.items():
            values[mass_field] = self._derive_mass(weight, values[percent_field])
            self._emit(TraceEvent(mass_field, None, "derived", values[mass_field]))
            if values[mass_field]:
                provenance[mass_field] = Provenance.DERIVED

        values["lbm"] = values["fat_free_mass"]
        if values["lbm"]:
            provenance["lbm"] = Provenance.DERIVED

        values["bmi_category"] = bmi_category(values["bmi"])
        values["pbf_category"] = pbf_category(values["body_fat_percentage"])

        values.update(self._segment_fields("muscle", parse_segmental_section(find_muscle_section(text))))
        values.update(self._segment_fields("fat", parse_segmental_section(find_fat_section(text))))

        record = MeasurementRecord(provenance=provenance, **values)
        logger.debug(
            f"Extracted record from {len(text)} chars: weight={record.weight}, "
            f"bmi={record.bmi}, body_fat={record.body_fat_percentage}"
        )
        return record

    def _resolve(self, field_name: str, rules: List[FieldRule], text: str) -> Any:
        for rule in rules:
            match = rule.pattern.search(text)
            if match:
                value = rule.convert(match)
                self._emit(TraceEvent(field_name, rule.name, match.group(0), value))
                return value

        default = getattr(_DEFAULTS, field_name)
        self._emit(TraceEvent(field_name, None, None, default))
        return default

    @staticmethod
    def _derive_mass(weight: float, percentage: float) -> float:
        if weight > 0 and percentage > 0:
            return round_half_up(weight * percentage / 100, 1)
        return 0.0

    def _segment_fields(self, kind: str, section: SegmentalSection) -> Dict[str, SegmentalValue]:
        mapped = {}
        for region, field_name in SEGMENT_FIELDS[kind].items():
            value = getattr(section, region)
            mapped[field_name] = value
            self._emit(TraceEvent(field_name, "segmental" if not value.is_empty else None, None, value))
        return mapped

    def _emit(self, event: TraceEvent) -> None:
        if self.trace is not None:
            self.trace(event)


# ============================================================================
# CONVENIENCE FUNCTIONS
# ============================================================================

def extract_measurements(text: Optional[str], trace: Optional[TraceCallback] = None) -> MeasurementRecord:
    """
    Quick extraction.

    Returns:
        MeasurementRecord parsed from text
    """
    return FieldExtractor(trace=trace).extract(text)
