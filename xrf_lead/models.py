from __future__ import annotations
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional, Tuple
from .utils import load_json, norm_text, rules_path

AVERAGING_THRESHOLD = 40
POSITIVITY_THRESHOLD_PERCENT = 2.5
POSITIVE_MEASUREMENT_THRESHOLD = 1.0  # mg/cm2
POSITIVE_RESULT_TEXT = "Pos"
CALIBRATION_COMPONENT = "CALIBRATE"

LEAD_POSITIVE = "Positive"
LEAD_NEGATIVE = "Negative"


@dataclass(frozen=True)
class ClassificationPolicy:
    """Regulatory thresholds used by the classification engine.

    Attributes:
        averaging_threshold: Minimum valid shots for a component to be averaged.
        positivity_threshold_percent: Averaged components above this positive
            share are reported as Positive (strictly greater than).
        positive_measurement_threshold: Readings at or above this lead
            concentration count as positive whatever the result text says.
        positive_result_text: Lab result text that marks a positive shot.
        calibration_component: Component name of calibration shots.
    """

    averaging_threshold: int = AVERAGING_THRESHOLD
    positivity_threshold_percent: float = POSITIVITY_THRESHOLD_PERCENT
    positive_measurement_threshold: float = POSITIVE_MEASUREMENT_THRESHOLD
    positive_result_text: str = POSITIVE_RESULT_TEXT
    calibration_component: str = CALIBRATION_COMPONENT

    def is_positive(self, shot: "Shot") -> bool:
        if norm_text(shot.result_text) == norm_text(self.positive_result_text):
            return True
        return shot.measurement >= self.positive_measurement_threshold

    def is_calibration(self, shot: "Shot") -> bool:
        return norm_text(shot.component_raw) == norm_text(self.calibration_component)


DEFAULT_POLICY = ClassificationPolicy()


def load_policy(path: Optional[Path] = None) -> ClassificationPolicy:
    """
    Reads policy overrides from a JSON object (default: data/rules.json).
    Unknown keys are ignored, missing keys keep the defaults,
    an unreadable file gives DEFAULT_POLICY.
    """
    raw = load_json(path or rules_path(), {})
    if not isinstance(raw, dict):
        return DEFAULT_POLICY

    overrides: Dict[str, Any] = {}
    for f in fields(ClassificationPolicy):
        if f.name not in raw:
            continue
        default = getattr(DEFAULT_POLICY, f.name)
        try:
            overrides[f.name] = type(default)(raw[f.name])
        except (TypeError, ValueError):
            continue
    return replace(DEFAULT_POLICY, **overrides)


@dataclass(frozen=True)
class Shot:
    """One XRF reading as read from an inspection export."""

    reading: int = 0
    component_raw: str = ""
    measurement: float = 0.0
    result_text: str = ""
    side: str = ""
    color: str = ""
    substrate: str = ""
    condition: str = ""
    room_number: str = ""
    room_type: str = ""
    floor: str = ""

    @property
    def component_key(self) -> str:
        return norm_text(self.component_raw)

    @property
    def is_positive(self) -> bool:
        return DEFAULT_POLICY.is_positive(self)

    @property
    def is_calibration(self) -> bool:
        return DEFAULT_POLICY.is_calibration(self)


@dataclass(frozen=True)
class ComponentSummary:
    """Aggregated row of the averaged or uniform report."""

    component: str
    count: int
    negative_percentage: float
    positive_percentage: float
    lead_content: str


@dataclass(frozen=True)
class ProcessingResult:
    averaged: Tuple[ComponentSummary, ...] = ()
    uniform: Tuple[ComponentSummary, ...] = ()
    conflicting: Tuple[Shot, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not (self.averaged or self.uniform or self.conflicting)

    @property
    def valid_count(self) -> int:
        # every valid shot lands in exactly one bucket
        summarized = sum(s.count for s in self.averaged) + sum(s.count for s in self.uniform)
        return summarized + len(self.conflicting)
