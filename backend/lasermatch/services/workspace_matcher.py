"""
Workspace matcher — ranks candidate cutting-bed sizes for a workpiece.

For each candidate surface: best grid layout → composite score → plain-English
recommendations and warnings. Results come back best-first; equal scores keep
catalog order.

Pure and synchronous: no I/O, no shared mutable state.
"""
import logging
import math
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from lasermatch.config import (
    BATCH_CAPACITY_MULTIPLE,
    EXCELLENT_UTILIZATION_PCT,
    GOOD_UTILIZATION_PCT,
    HIGH_WASTAGE_PCT,
    LOW_UTILIZATION_PCT,
    MAX_MARGIN_MM,
    MAX_PART_DIMENSION_MM,
    MAX_QUANTITY,
)
from lasermatch.services.layout_engine import Layout, calculate_layout
from lasermatch.services.perf_monitor import timed, tracker
from lasermatch.services.scoring_engine import calculate_match_score, is_optimal
from lasermatch.services.units import METRIC, SUPPORTED_UNITS, to_mm
from lasermatch.services.workspace_catalog import (
    COMMON_WORKSPACE_SIZES,
    CandidateSurface,
    Workpiece,
)

logger = logging.getLogger("lasermatch.matcher")


class InvalidInput(ValueError):
    """One or more workpiece fields are out of bounds. ``errors`` lists them all."""

    def __init__(self, errors: List[str]):
        self.errors = list(errors)
        super().__init__("; ".join(self.errors))


@dataclass(frozen=True)
class ValidationResult:
    valid: bool
    errors: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"valid": self.valid, "errors": list(self.errors)}


@dataclass(frozen=True)
class MatchResult:
    workspace: CandidateSurface
    layout: Layout
    match_score: int
    is_optimal: bool
    recommendations: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "workspace": self.workspace.to_dict(),
            "layout": self.layout.to_dict(),
            "match_score": self.match_score,
            "is_optimal": self.is_optimal,
            "recommendations": list(self.recommendations),
            "warnings": list(self.warnings),
        }


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------

def _as_number(value: Any) -> Optional[float]:
    """Numeric value of ``value``, or None when missing, non-numeric or non-finite."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number


def validate_workspace_input(
    data: Union[Mapping[str, Any], Workpiece],
) -> ValidationResult:
    """
    Pre-flight check of a (possibly partial) workpiece.

    Every rule is evaluated; all violations are returned together. Linear
    limits apply after conversion to mm. Never raises.
    """
    if isinstance(data, Workpiece):
        data = data.to_dict()

    errors: List[str] = []

    unit = data.get("unit") or METRIC
    if unit not in SUPPORTED_UNITS:
        errors.append(f"Unit must be one of {list(SUPPORTED_UNITS)}")
        unit = METRIC

    for name in ("length", "width"):
        value = _as_number(data.get(name))
        label = name.capitalize()
        if value is None or value <= 0:
            errors.append(f"{label} must be greater than 0")
        elif to_mm(value, unit) > MAX_PART_DIMENSION_MM:
            errors.append(f"{label} exceeds maximum limit ({MAX_PART_DIMENSION_MM:.0f}mm)")

    quantity = _as_number(data.get("quantity"))
    if quantity is None or quantity <= 0:
        errors.append("Quantity must be at least 1")
    elif quantity != int(quantity):
        errors.append("Quantity must be a whole number")
    elif quantity > MAX_QUANTITY:
        errors.append(f"Quantity exceeds reasonable limit ({MAX_QUANTITY} parts)")

    margin = _as_number(data.get("margin"))
    if margin is None or margin < 0:
        errors.append("Margin must be 0 or greater")
    elif to_mm(margin, unit) > MAX_MARGIN_MM:
        errors.append(f"Margin seems excessive (>{MAX_MARGIN_MM:.0f}mm)")

    return ValidationResult(valid=not errors, errors=errors)


# ---------------------------------------------------------------------------
# Annotation
# ---------------------------------------------------------------------------

def build_recommendations(layout: Layout, required_qty: int) -> List[str]:
    recommendations: List[str] = []

    excess = layout.total_parts - required_qty
    if excess > 0:
        recommendations.append(
            f"Can fit {layout.total_parts} parts per sheet "
            f"({excess} extra beyond required {required_qty})"
        )

    if layout.utilization_percent >= EXCELLENT_UTILIZATION_PCT:
        recommendations.append("Excellent material utilization - minimal waste")
    elif layout.utilization_percent > GOOD_UTILIZATION_PCT:
        recommendations.append("Good material utilization")

    if layout.total_parts >= required_qty * BATCH_CAPACITY_MULTIPLE:
        recommendations.append("Consider batch processing - can fit multiple production runs")

    return recommendations


def build_warnings(layout: Layout, required_qty: int) -> List[str]:
    warnings: List[str] = []

    if layout.total_parts == 0:
        warnings.append("Part does not fit this workspace in any allowed orientation")
    elif layout.total_parts < required_qty:
        sheets = math.ceil(required_qty / layout.total_parts)
        warnings.append(f"Cannot fit required quantity in single sheet - need {sheets} sheets")

    if layout.utilization_percent < LOW_UTILIZATION_PCT:
        warnings.append("Low utilization - consider smaller workspace or nested layouts")

    if layout.wastage_percent > HIGH_WASTAGE_PCT:
        warnings.append("High material wastage - consider alternative part orientation")

    return warnings


# ---------------------------------------------------------------------------
# Orchestration
# ---------------------------------------------------------------------------

class WorkspaceMatcher:
    """
    Ranks cutting-bed sizes for a workpiece.

    Holds the catalog to match against (``COMMON_WORKSPACE_SIZES`` unless
    overridden); a per-call ``candidates`` list takes precedence. Keeps no
    state between calls.
    """

    def __init__(self, catalog: Optional[Sequence[CandidateSurface]] = None) -> None:
        self.catalog: List[CandidateSurface] = list(
            COMMON_WORKSPACE_SIZES if catalog is None else catalog
        )

    # ------------------------------------------------------------------
    # 1. Input preparation
    # ------------------------------------------------------------------

    def prepare(self, workpiece: Workpiece) -> Workpiece:
        """
        Validate ``workpiece`` and return it in mm with an integer quantity.

        Raises InvalidInput carrying every violated rule.
        """
        validation = validate_workspace_input(workpiece)
        if not validation.valid:
            tracker.record_validation_failure()
            logger.warning("workpiece rejected: %s", "; ".join(validation.errors))
            raise InvalidInput(validation.errors)
        return replace(workpiece.normalized(), quantity=int(workpiece.quantity))

    # ------------------------------------------------------------------
    # 2. Single candidate
    # ------------------------------------------------------------------

    def evaluate_candidate(self, workpiece: Workpiece, surface: CandidateSurface) -> MatchResult:
        """Layout, score and annotate one surface. ``workpiece`` must be prepared."""
        layout = calculate_layout(workpiece, surface)
        score = calculate_match_score(layout, workpiece.quantity)
        return MatchResult(
            workspace=surface,
            layout=layout,
            match_score=score,
            is_optimal=is_optimal(layout, score, workpiece.quantity),
            recommendations=build_recommendations(layout, workpiece.quantity),
            warnings=build_warnings(layout, workpiece.quantity),
        )

    # ------------------------------------------------------------------
    # 3. Ranking
    # ------------------------------------------------------------------

    def match(
        self,
        workpiece: Workpiece,
        candidates: Optional[Sequence[CandidateSurface]] = None,
    ) -> List[MatchResult]:
        """
        Rank ``candidates`` (default: this matcher's catalog) for ``workpiece``.

        Raises InvalidInput before any layout is computed. An empty candidate
        list returns an empty list.
        """
        prepared = self.prepare(workpiece)
        surfaces = self.catalog if candidates is None else list(candidates)

        results: List[MatchResult] = []
        for surface in surfaces:
            result = self.evaluate_candidate(prepared, surface)
            logger.debug(
                "candidate %s: %d parts, %.1f%% utilization, score %d",
                surface.common_name or f"{surface.length:g}x{surface.width:g}",
                result.layout.total_parts,
                result.layout.utilization_percent,
                result.match_score,
            )
            results.append(result)

        # sorted() is stable: equal scores stay in catalog order.
        ranked = sorted(results, key=lambda r: r.match_score, reverse=True)

        tracker.record_match(len(surfaces))
        logger.info(
            "workspace match complete",
            extra={
                "candidate_count": len(surfaces),
                "optimal_count": sum(1 for r in ranked if r.is_optimal),
            },
        )
        return ranked

    @staticmethod
    def select_recommended(results: Sequence[MatchResult]) -> Optional[MatchResult]:
        """First optimal result, else the best-scoring one, else None."""
        for result in results:
            if result.is_optimal:
                return result
        return results[0] if results else None


_DEFAULT_MATCHER = WorkspaceMatcher()


@timed
def match_workspace(
    workpiece: Workpiece,
    candidates: Optional[Sequence[CandidateSurface]] = None,
) -> List[MatchResult]:
    """Rank ``candidates`` (default: ``COMMON_WORKSPACE_SIZES``) for ``workpiece``."""
    return _DEFAULT_MATCHER.match(workpiece, candidates)


select_recommended = WorkspaceMatcher.select_recommended
