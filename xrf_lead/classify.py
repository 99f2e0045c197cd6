from __future__ import annotations
import logging
from typing import Dict, Iterable, List
from .models import (
    DEFAULT_POLICY,
    LEAD_NEGATIVE,
    LEAD_POSITIVE,
    ClassificationPolicy,
    ComponentSummary,
    ProcessingResult,
    Shot,
)

logger = logging.getLogger(__name__)


def _percentages(positive: int, total: int):
    # rounded independently, the pair may not add up to 100.00
    pos_pct = 100.0 * positive / total
    neg_pct = 100.0 * (total - positive) / total
    return round(pos_pct, 2), round(neg_pct, 2), pos_pct


def summarize_component(
    display_name: str,
    shots: List[Shot],
    policy: ClassificationPolicy = DEFAULT_POLICY,
    *,
    averaged: bool,
) -> ComponentSummary:
    """
    Summary row for one component group (shots must be non-empty).
    averaged=True applies the positivity percentage threshold,
    otherwise the group is uniform and any positive shot makes it Positive.
    """
    total = len(shots)
    positive = sum(1 for s in shots if policy.is_positive(s))
    pos_pct, neg_pct, raw_pos_pct = _percentages(positive, total)

    if averaged:
        # strict '>': exactly the threshold share stays Negative
        positive_label = raw_pos_pct > policy.positivity_threshold_percent
    else:
        positive_label = positive > 0

    return ComponentSummary(
        component=display_name,
        count=total,
        negative_percentage=neg_pct,
        positive_percentage=pos_pct,
        lead_content=LEAD_POSITIVE if positive_label else LEAD_NEGATIVE,
    )


def _group_valid_shots(shots: Iterable[Shot], policy: ClassificationPolicy) -> Dict[str, List[Shot]]:
    groups: Dict[str, List[Shot]] = {}
    for s in shots:
        key = s.component_key
        if not key or policy.is_calibration(s):
            continue
        groups.setdefault(key, []).append(s)
    return groups


def classify_shots(
    shots: Iterable[Shot],
    policy: ClassificationPolicy = DEFAULT_POLICY,
) -> ProcessingResult:
    """
    Splits the pooled shots of one job into averaged, uniform and conflicting results.

    - calibration shots and shots without a component are dropped
    - groups by case-insensitive, trimmed component name
    - >= averaging_threshold shots: averaged summary
    - fewer shots, all positive or all negative: uniform summary
    - fewer shots, mixed: every raw shot goes to conflicting
    """
    averaged: List[ComponentSummary] = []
    uniform: List[ComponentSummary] = []
    conflicting: List[Shot] = []

    for group in _group_valid_shots(shots, policy).values():
        display_name = group[0].component_raw
        total = len(group)

        if total >= policy.averaging_threshold:
            averaged.append(summarize_component(display_name, group, policy, averaged=True))
            continue

        positive = sum(1 for s in group if policy.is_positive(s))
        if positive == 0 or positive == total:
            uniform.append(summarize_component(display_name, group, policy, averaged=False))
        else:
            conflicting.extend(group)

    # case-insensitive first, exact text breaks ties ("baseboard" before "Window")
    averaged.sort(key=lambda r: (r.component.casefold(), r.component))
    uniform.sort(key=lambda r: (r.component.casefold(), r.component))
    conflicting.sort(key=lambda s: s.reading)

    logger.debug(
        "Classified shots: %d averaged, %d uniform, %d conflicting shots",
        len(averaged), len(uniform), len(conflicting),
    )
    return ProcessingResult(
        averaged=tuple(averaged),
        uniform=tuple(uniform),
        conflicting=tuple(conflicting),
    )
