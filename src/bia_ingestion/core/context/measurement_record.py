# ============================================================================
# src/bia_ingestion/core/context/measurement_record.py
# ============================================================================
"""
MeasurementRecord
- One parsed BIA report
- Flat scalar fields plus ten segmental (pounds, percent) pairs
- Per-field provenance for values that were not read directly from text
"""

from dataclasses import dataclass, field, fields
from datetime import datetime
from typing import Any, Dict, Mapping, Optional

from .enums import Provenance
from ...utils.exceptions import RecordFormatError


@dataclass(frozen=True)
class SegmentalValue:
    """Body-region reading: absolute pounds and the percentage printed beside it."""
    pounds: float = 0.0
    percent: float = 0.0

    def __post_init__(self):
        if self.pounds < 0 or self.percent < 0:
            raise ValueError(
                f"Segmental values must be non-negative, got {self.pounds} lb / {self.percent}%"
            )

    @classmethod
    def from_parsed(cls, pounds: float, percent: float) -> "SegmentalValue":
        return cls(pounds=max(0.0, pounds), percent=max(0.0, percent))

    @property
    def is_empty(self) -> bool:
        return self.pounds == 0 and self.percent == 0

    def to_dict(self) -> Dict[str, float]:
        return {"pounds": self.pounds, "percent": self.percent}


def _segment() -> SegmentalValue:
    return SegmentalValue()


@dataclass
class MeasurementRecord:
    """
    Complete BIA measurement entry.

    Unrecoverable fields stay at 0 / '' so downstream code never has to
    handle missing values.
    """
    id: str = ""
    date: str = ""

    # Header
    name: str = ""
    age: int = 0
    gender: str = ""
    height: str = ""
    fitness_score: float = 0.0

    # Core metrics
    weight: float = 0.0
    bmi: float = 0.0
    body_fat_percentage: float = 0.0
    visceral_fat: float = 0.0
    skeletal_muscle: float = 0.0

    # Body composition
    body_water: float = 0.0
    protein: float = 0.0
    bone_mass: float = 0.0
    body_fat_mass: float = 0.0
    soft_lean_mass: float = 0.0
    fat_free_mass: float = 0.0

    # Additional data
    lbm: float = 0.0
    bmr: float = 0.0
    metabolic_age: int = 0
    subcutaneous_fat_percentage: float = 0.0
    muscle_mass_percentage: float = 0.0
    skeletal_muscle_percentage: float = 0.0
    bone_mass_percentage: float = 0.0
    protein_percentage: float = 0.0
    body_water_percentage: float = 0.0
    smi: float = 0.0
    waist_hip_ratio: float = 0.0

    # Segmental muscle (soft lean mass)
    muscle_left_arm: SegmentalValue = field(default_factory=_segment)
    muscle_right_arm: SegmentalValue = field(default_factory=_segment)
    muscle_trunk: SegmentalValue = field(default_factory=_segment)
    muscle_left_leg: SegmentalValue = field(default_factory=_segment)
    muscle_right_leg: SegmentalValue = field(default_factory=_segment)

    # Segmental fat
    fat_left_arm: SegmentalValue = field(default_factory=_segment)
    fat_right_arm: SegmentalValue = field(default_factory=_segment)
    fat_trunk: SegmentalValue = field(default_factory=_segment)
    fat_left_leg: SegmentalValue = field(default_factory=_segment)
    fat_right_leg: SegmentalValue = field(default_factory=_segment)

    # Categories
    body_shape: str = ""
    bmi_category: str = ""
    pbf_category: str = ""

    # Weight control recommendations
    normal_weight: float = 0.0
    weight_control: float = 0.0
    fat_mass_control: float = 0.0
    muscle_control: float = 0.0

    # Fields not read directly from text; absent means parsed
    provenance: Dict[str, Provenance] = field(default_factory=dict)

    def has_data(self) -> bool:
        """True when the report yielded at least one headline number."""
        return self.weight > 0 or self.body_fat_percentage > 0 or self.fitness_score > 0

    def measured_at(self) -> Optional[datetime]:
        if not self.date:
            return None
        try:
            return datetime.fromisoformat(self.date)
        except ValueError:
            return None

    def clone(self, **overrides: Any) -> "MeasurementRecord":
        """
        Independent copy with selected fields replaced.

        Segmental values are immutable, so only the provenance map needs
        copying. A 'provenance' override is merged into the copied map.
        """
        provenance = dict(self.provenance)
        provenance.update(overrides.pop("provenance", {}))

        values = {f.name: getattr(self, f.name) for f in fields(self) if f.name != "provenance"}
        unknown = set(overrides) - set(values)
        if unknown:
            raise TypeError(f"Unknown MeasurementRecord fields: {sorted(unknown)}")
        values.update(overrides)
        return MeasurementRecord(provenance=provenance, **values)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, SegmentalValue):
                data[f.name] = value.to_dict()
            elif f.name == "provenance":
                data[f.name] = {key: p.value for key, p in value.items()}
            else:
                data[f.name] = value
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "MeasurementRecord":
        """
        Build a record from a to_dict() payload.

        Unknown keys are ignored and missing keys keep their defaults.
        Segmental entries also accept the legacy {"lb": ..., "percent": ...} shape.
        """
        if not isinstance(data, Mapping):
            raise RecordFormatError(f"Expected a mapping, got {type(data).__name__}")

        values: Dict[str, Any] = {}
        for f in fields(cls):
            if f.name not in data or data[f.name] is None:
                continue
            raw = data[f.name]
            try:
                if f.name == "provenance":
                    values[f.name] = {key: Provenance(p) for key, p in raw.items()}
                elif f.type is SegmentalValue:
                    values[f.name] = SegmentalValue(
                        pounds=float(raw.get("pounds", raw.get("lb", 0)) or 0),
                        percent=float(raw.get("percent", 0) or 0),
                    )
                elif f.type is int:
                    values[f.name] = int(float(raw))
                elif f.type is float:
                    values[f.name] = float(raw)
                else:
                    values[f.name] = str(raw)
            except (AttributeError, TypeError, ValueError) as e:
                raise RecordFormatError(f"Invalid value for '{f.name}': {raw!r}") from e

        return cls(**values)
