"""
Match scoring — reduces a layout and the order quantity to one 0–100 number.

Three independently capped components:
  - utilization      0–40
  - quantity cover   0–30
  - wastage penalty  0–30
"""
from dataclasses import dataclass

from lasermatch.config import (
    COVERAGE_EXCESS_MAX_PENALTY,
    COVERAGE_EXCESS_TOLERANCE,
    COVERAGE_EXCESS_WEIGHT,
    COVERAGE_MAX_POINTS,
    COVERAGE_SHORTFALL_MAX_POINTS,
    OPTIMAL_MIN_SCORE,
    OPTIMAL_MIN_UTILIZATION_PCT,
    UTILIZATION_MAX_POINTS,
    UTILIZATION_WEIGHT,
    WASTAGE_MAX_POINTS,
    WASTAGE_WEIGHT,
)
from lasermatch.services.layout_engine import Layout, round_half_up


@dataclass(frozen=True)
class ScoreBreakdown:
    utilization_points: float
    coverage_points: float
    wastage_points: float

    @property
    def raw_total(self) -> float:
        return self.utilization_points + self.coverage_points + self.wastage_points

    @property
    def match_score(self) -> int:
        return int(round_half_up(self.raw_total))


def utilization_points(layout: Layout) -> float:
    return min(layout.utilization_percent * UTILIZATION_WEIGHT, UTILIZATION_MAX_POINTS)


def coverage_points(total_parts: int, required_qty: int) -> float:
    """
    Full marks when one sheet holds the order with under 30 % spare; large
    excess is penalised down to 15 points; shortfall scores proportionally
    but never above 15.
    """
    if total_parts >= required_qty:
        excess_ratio = (total_parts - required_qty) / required_qty
        if excess_ratio < COVERAGE_EXCESS_TOLERANCE:
            return COVERAGE_MAX_POINTS
        return COVERAGE_MAX_POINTS - min(excess_ratio * COVERAGE_EXCESS_WEIGHT, COVERAGE_EXCESS_MAX_PENALTY)
    return (total_parts / required_qty) * COVERAGE_SHORTFALL_MAX_POINTS


def wastage_points(layout: Layout) -> float:
    return max(WASTAGE_MAX_POINTS - layout.wastage_percent * WASTAGE_WEIGHT, 0.0)


def score_breakdown(layout: Layout, required_qty: int) -> ScoreBreakdown:
    return ScoreBreakdown(
        utilization_points=utilization_points(layout),
        coverage_points=coverage_points(layout.total_parts, required_qty),
        wastage_points=wastage_points(layout),
    )


def calculate_match_score(layout: Layout, required_qty: int) -> int:
    """Composite 0–100 score, rounded half-up to an integer."""
    return score_breakdown(layout, required_qty).match_score


def is_optimal(layout: Layout, match_score: int, required_qty: int) -> bool:
    # Stricter than the score alone: a single sheet must cover the order.
    return (
        match_score >= OPTIMAL_MIN_SCORE
        and layout.total_parts >= required_qty
        and layout.utilization_percent >= OPTIMAL_MIN_UTILIZATION_PCT
    )
