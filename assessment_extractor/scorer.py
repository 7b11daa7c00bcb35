"""Confidence scoring for extracted sections"""
from dataclasses import dataclass
from typing import Dict, Mapping, Sequence, Tuple

from .config import CONFIDENCE_BANDS


@dataclass(frozen=True)
class Weight:
    """
    One row of a section's confidence table.

    ``field`` earns ``weight`` when non-empty; ``alternates`` are fields that
    can stand in for it (e.g. age for date of birth). Lists earn full credit at
    ``saturate_at`` items and strings at ``saturate_at`` words; below that the
    credit is proportional.
    """
    field: str
    weight: float
    saturate_at: int = 1
    alternates: Tuple[str, ...] = ()


def clamp(score: float) -> float:
    """Clamp a score into [0, 1]"""
    return min(1.0, max(0.0, score))


def sub_score(value, saturate_at: int = 1) -> float:
    """Fraction [0, 1] of credit a single field value earns"""
    if not value:
        return 0.0
    if isinstance(value, (list, tuple, dict)):
        size = len(value)
    elif isinstance(value, str):
        size = len(value.split()) if saturate_at > 1 else 1
    else:
        size = 1
    return clamp(size / max(saturate_at, 1))


def weighted_confidence(values: Mapping[str, object],
                        weights: Sequence[Weight]) -> Tuple[float, Dict[str, float]]:
    """
    Score a record against its weight table

    Args:
        values: Record field name -> extracted value (absent fields omitted)
        weights: The section's weight table (weights sum to 1.0)

    Returns:
        Tuple of (section score, per-field sub-scores for every weighted field)
    """
    scores = []
    field_scores = {}

    for row in weights:
        fraction = 0.0
        for name in (row.field,) + row.alternates:
            own = sub_score(values.get(name), row.saturate_at)
            field_scores[name] = own
            fraction = max(fraction, own)
        scores.append((row.field, fraction, row.weight))

    # Rounded so a fully populated record scores exactly 1.0
    total_score = round(sum(weight * score for _, score, weight in scores), 6)
    return clamp(total_score), field_scores


def confidence_band(score: float) -> str:
    """Label a confidence score: low, medium, good or high"""
    for lower_bound, label in CONFIDENCE_BANDS:
        if score >= lower_bound:
            return label
    return CONFIDENCE_BANDS[-1][1]
