"""
Sheet cost estimator — turns a chosen workspace match into sheet count and
material area figures (m²), optionally priced per sheet.
"""
import logging
import math
from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional

from lasermatch.config import MM2_PER_M2
from lasermatch.services.perf_monitor import tracker
from lasermatch.services.workspace_matcher import MatchResult

logger = logging.getLogger("lasermatch.cost")


class ZeroCapacityLayout(ZeroDivisionError):
    """Raised when asked to cost a layout that fits no parts."""


@dataclass(frozen=True)
class CostEstimate:
    sheets_needed: int
    total_material_area: float    # m²
    used_material_area: float     # m²
    wasted_material_area: float   # m²
    estimated_cost_per_sheet: Optional[float] = None
    total_estimated_cost: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def calculate_sheets_needed(total_parts: int, parts_per_sheet: int) -> int:
    if parts_per_sheet <= 0:
        raise ZeroCapacityLayout(
            "Layout fits 0 parts per sheet; cannot compute sheets needed."
        )
    return math.ceil(total_parts / parts_per_sheet)


def calculate_cost_estimate(
    result: MatchResult,
    required_qty: int,
    cost_per_sheet: Optional[float] = None,
) -> CostEstimate:
    """
    Sheets and material area needed to cut ``required_qty`` parts with the
    layout in ``result``.

    ``total_estimated_cost`` is only set when ``cost_per_sheet`` is given;
    an unpriced estimate never reports a cost of zero.
    """
    if required_qty < 1:
        raise ValueError("Required quantity must be at least 1.")

    sheets_needed = calculate_sheets_needed(required_qty, result.layout.total_parts)

    sheet_area_m2 = result.workspace.area_mm2 / MM2_PER_M2
    total_material_area = sheets_needed * sheet_area_m2
    used_material_area = sheets_needed * result.layout.used_area / MM2_PER_M2

    total_cost = cost_per_sheet * sheets_needed if cost_per_sheet is not None else None

    tracker.record_cost_estimate()
    logger.debug(
        "cost estimate for %s: %d sheets",
        result.workspace.common_name, sheets_needed,
    )

    return CostEstimate(
        sheets_needed=sheets_needed,
        total_material_area=total_material_area,
        used_material_area=used_material_area,
        wasted_material_area=total_material_area - used_material_area,
        estimated_cost_per_sheet=cost_per_sheet,
        total_estimated_cost=total_cost,
    )
