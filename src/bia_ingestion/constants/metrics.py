# ============================================================================
# src/bia_ingestion/constants/metrics.py
# ============================================================================
"""
Metric catalogue
- Display label per field
- Metrics tracked by the history validator
"""

from dataclasses import dataclass
from typing import Dict


@dataclass(frozen=True)
class MetricDefinition:
    key: str
    label: str


_DEFINITIONS = [
    # Header
    MetricDefinition("fitness_score", "Fitness Score"),

    # Core
    MetricDefinition("weight", "Weight"),
    MetricDefinition("body_fat_percentage", "Body Fat %"),
    MetricDefinition("bmi", "BMI"),
    MetricDefinition("visceral_fat", "Visceral Fat"),
    MetricDefinition("skeletal_muscle", "Skeletal Muscle"),

    # Body composition
    MetricDefinition("body_water", "Body Water"),
    MetricDefinition("protein", "Protein"),
    MetricDefinition("bone_mass", "Bone Mass"),
    MetricDefinition("body_fat_mass", "Body Fat Mass"),
    MetricDefinition("soft_lean_mass", "Soft Lean Mass"),
    MetricDefinition("fat_free_mass", "Fat Free Mass"),

    # Additional
    MetricDefinition("lbm", "LBM (Fat-free Body Weight)"),
    MetricDefinition("bmr", "BMR (Basal Metabolic Rate)"),
    MetricDefinition("metabolic_age", "Metabolic Age"),
    MetricDefinition("subcutaneous_fat_percentage", "Subcutaneous Fat %"),
    MetricDefinition("muscle_mass_percentage", "Muscle Mass %"),
    MetricDefinition("skeletal_muscle_percentage", "Skeletal Muscle %"),
    MetricDefinition("bone_mass_percentage", "Bone Mass %"),
    MetricDefinition("protein_percentage", "Protein %"),
    MetricDefinition("body_water_percentage", "Body Water %"),
    MetricDefinition("smi", "SMI"),
    MetricDefinition("waist_hip_ratio", "Waist-Hip Ratio"),

    # Segmental muscle
    MetricDefinition("muscle_left_arm", "Muscle Left Arm"),
    MetricDefinition("muscle_right_arm", "Muscle Right Arm"),
    MetricDefinition("muscle_trunk", "Muscle Trunk"),
    MetricDefinition("muscle_left_leg", "Muscle Left Leg"),
    MetricDefinition("muscle_right_leg", "Muscle Right Leg"),

    # Segmental fat
    MetricDefinition("fat_left_arm", "Fat Left Arm"),
    MetricDefinition("fat_right_arm", "Fat Right Arm"),
    MetricDefinition("fat_trunk", "Fat Trunk"),
    MetricDefinition("fat_left_leg", "Fat Left Leg"),
    MetricDefinition("fat_right_leg", "Fat Right Leg"),

    # Weight control (targets, not measurements)
    MetricDefinition("normal_weight", "Target Weight"),
    MetricDefinition("weight_control", "Weight Control"),
    MetricDefinition("fat_mass_control", "Fat Mass Control"),
    MetricDefinition("muscle_control", "Muscle Control"),
]

METRIC_DEFINITIONS: Dict[str, MetricDefinition] = {d.key: d for d in _DEFINITIONS}

# Compared against the previous record, in report order
TRACKED_SCALAR_METRICS = [
    "weight", "bmi", "body_fat_percentage", "visceral_fat", "skeletal_muscle",
    "body_water", "protein", "bone_mass", "body_fat_mass", "soft_lean_mass",
    "fat_free_mass", "lbm", "bmr", "metabolic_age",
    "subcutaneous_fat_percentage", "muscle_mass_percentage",
    "skeletal_muscle_percentage", "bone_mass_percentage", "protein_percentage",
    "body_water_percentage", "smi", "waist_hip_ratio", "fitness_score",
    "normal_weight", "weight_control", "fat_mass_control", "muscle_control",
]

SEGMENTAL_METRICS = [
    "muscle_left_arm", "muscle_right_arm", "muscle_trunk",
    "muscle_left_leg", "muscle_right_leg",
    "fat_left_arm", "fat_right_arm", "fat_trunk",
    "fat_left_leg", "fat_right_leg",
]

# mass field -> percentage field it is computed from
DERIVED_MASS_FIELDS = {
    "protein": "protein_percentage",
    "bone_mass": "bone_mass_percentage",
    "skeletal_muscle": "skeletal_muscle_percentage",
    "body_fat_mass": "body_fat_percentage",
}


def get_metric_label(key: str) -> str:
    definition = METRIC_DEFINITIONS.get(key)
    return definition.label if definition else key
