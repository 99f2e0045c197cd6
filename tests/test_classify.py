"""Unit tests for the classification and aggregation engine."""

from __future__ import annotations

from dataclasses import replace

from xrf_lead.classify import classify_shots, summarize_component
from xrf_lead.models import ClassificationPolicy, ProcessingResult, Shot


def _shots(component: str, total: int, positive: int, start: int = 1) -> list[Shot]:
    return [
        Shot(
            reading=start + i,
            component_raw=component,
            result_text="Pos" if i < positive else "Neg",
            measurement=1.5 if i < positive else 0.2,
        )
        for i in range(total)
    ]


def test_averaged_component_scenario() -> None:
    """45 shots with 2 positive should average to a Positive result."""
    result = classify_shots(_shots("Door Jamb", 45, 2))

    assert result.uniform == () and result.conflicting == ()
    (summary,) = result.averaged
    assert summary.component == "Door Jamb"
    assert summary.count == 45
    assert summary.positive_percentage == 4.44
    assert summary.negative_percentage == 95.56
    assert summary.lead_content == "Positive"


def test_uniform_negative_scenario() -> None:
    """10 all-negative shots should give a uniform Negative summary."""
    result = classify_shots(_shots("Window Sill", 10, 0))

    (summary,) = result.uniform
    assert (summary.component, summary.count) == ("Window Sill", 10)
    assert summary.positive_percentage == 0.0
    assert summary.negative_percentage == 100.0
    assert summary.lead_content == "Negative"
    assert result.averaged == () and result.conflicting == ()


def test_uniform_positive_group() -> None:
    """A small all-positive group should give a uniform Positive summary."""
    (summary,) = classify_shots(_shots("Stair Tread", 3, 3)).uniform

    assert summary.lead_content == "Positive"
    assert summary.positive_percentage == 100.0


def test_conflicting_scenario_sorted_by_reading() -> None:
    """A mixed group below the threshold should list every raw shot by reading."""
    shots = [
        Shot(reading=5, component_raw="Wall", result_text="Pos"),
        Shot(reading=1, component_raw="Wall", result_text="Neg"),
        Shot(reading=4, component_raw="wall ", result_text="Neg"),
        Shot(reading=3, component_raw="WALL", measurement=2.0),
        Shot(reading=2, component_raw="Wall", result_text="Neg"),
    ]

    result = classify_shots(shots)

    assert result.averaged == () and result.uniform == ()
    assert [s.reading for s in result.conflicting] == [1, 2, 3, 4, 5]
    assert set(result.conflicting) == set(shots)


def test_calibration_and_blank_components_are_excluded() -> None:
    """Calibration shots and shots without a component never reach a bucket."""
    shots = [
        Shot(reading=1, component_raw="Calibrate", measurement=1.1),
        Shot(reading=2, component_raw="CALIBRATE", result_text="Neg"),
        Shot(reading=3, component_raw="   ", result_text="Pos"),
        Shot(reading=4, component_raw="", result_text="Neg"),
        *_shots("calibrate", 45, 45, start=10),
    ]

    assert classify_shots(shots) == ProcessingResult()


def test_averaging_threshold_boundary() -> None:
    """Exactly 40 shots are averaged, 39 mixed shots are conflicting."""
    at_threshold = classify_shots(_shots("Door", 40, 5))
    below = classify_shots(_shots("Door", 39, 5))

    assert len(at_threshold.averaged) == 1 and at_threshold.conflicting == ()
    assert below.averaged == () and len(below.conflicting) == 39


def test_positivity_threshold_is_strict() -> None:
    """1 positive out of 40 (2.5%) stays Negative, 2 of 40 is Positive."""
    (exact,) = classify_shots(_shots("Door", 40, 1)).averaged
    (above,) = classify_shots(_shots("Door", 40, 2)).averaged

    assert exact.positive_percentage == 2.5
    assert exact.lead_content == "Negative"
    assert above.lead_content == "Positive"


def test_grouping_is_case_insensitive_and_keeps_first_display_name() -> None:
    """Differently cased names form one group shown with the first spelling."""
    shots = [
        Shot(reading=1, component_raw="Door Jamb", result_text="Neg"),
        Shot(reading=2, component_raw="DOOR JAMB", result_text="Neg"),
        Shot(reading=3, component_raw=" door jamb", result_text="Neg"),
    ]

    (summary,) = classify_shots(shots).uniform

    assert summary.component == "Door Jamb"
    assert summary.count == 3


def test_summaries_are_sorted_by_display_name() -> None:
    """Averaged and uniform rows should be ordered by component name."""
    shots = _shots("Window", 2, 0) + _shots("Baseboard", 2, 0, start=10) + _shots("Door", 2, 2, start=20)

    names = [s.component for s in classify_shots(shots).uniform]

    assert names == ["Baseboard", "Door", "Window"]


def test_summary_order_ignores_case_first() -> None:
    """Lower-case names should sort among capitalized ones alphabetically."""
    shots = (
        _shots("Window", 2, 0)
        + _shots("baseboard", 2, 0, start=10)
        + _shots("door", 45, 0, start=20)
        + _shots("Ceiling", 45, 0, start=100)
    )

    result = classify_shots(shots)

    assert [s.component for s in result.uniform] == ["baseboard", "Window"]
    assert [s.component for s in result.averaged] == ["Ceiling", "door"]


def test_percentages_are_rounded_independently() -> None:
    """Positive and negative shares are each rounded to 2 decimals."""
    summary = summarize_component("Sash", _shots("Sash", 3, 1), averaged=False)

    assert summary.positive_percentage == 33.33
    assert summary.negative_percentage == 66.67


def test_partition_and_count_conservation() -> None:
    """Every valid shot lands in exactly one bucket."""
    shots = (
        _shots("Door Jamb", 45, 2)
        + _shots("Window Sill", 10, 0, start=100)
        + _shots("Wall", 5, 2, start=200)
        + [Shot(reading=300, component_raw="Calibrate")]
    )

    result = classify_shots(shots)

    assert result.valid_count == 60
    assert len(set(result.conflicting)) == len(result.conflicting) == 5


def test_classification_is_deterministic_and_idempotent() -> None:
    """Equal inputs should always produce equal results."""
    shots = _shots("Door", 41, 3) + _shots("Wall", 6, 2, start=50) + _shots("Sill", 4, 0, start=80)

    first = classify_shots(shots)
    second = classify_shots([replace(s) for s in shots])

    assert first == second
    assert classify_shots(shots) == first


def test_empty_input_gives_empty_result() -> None:
    """No shots is not an error: all three buckets are empty."""
    result = classify_shots([])

    assert result.is_empty
    assert result.valid_count == 0


def test_custom_policy_thresholds() -> None:
    """Thresholds come from the policy passed to the engine."""
    policy = ClassificationPolicy(averaging_threshold=5, positivity_threshold_percent=50.0)

    (summary,) = classify_shots(_shots("Wall", 6, 3), policy).averaged

    assert summary.positive_percentage == 50.0
    assert summary.lead_content == "Negative"
