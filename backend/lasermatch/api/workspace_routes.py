"""Workspace matcher API routes — catalog, validation, matching, sheet costing."""
import logging
from typing import List

from fastapi import APIRouter, HTTPException

from lasermatch.config import MM2_PER_M2
from lasermatch.models.workspace_schema import (
    CandidateSurfaceModel,
    CostEstimateModel,
    CostEstimateRequest,
    MatchRequest,
    MatchResponse,
    MatchResultModel,
    ValidationResponse,
    WorkpieceRequest,
)
from lasermatch.services.cost_estimator import (
    CostEstimate,
    ZeroCapacityLayout,
    calculate_cost_estimate,
)
from lasermatch.services.layout_engine import Layout
from lasermatch.services.units import format_area, format_dimension
from lasermatch.services.workspace_catalog import (
    COMMON_WORKSPACE_SIZES,
    CandidateSurface,
    Workpiece,
)
from lasermatch.services.workspace_matcher import (
    InvalidInput,
    MatchResult,
    match_workspace,
    select_recommended,
    validate_workspace_input,
)
router = APIRouter(prefix="/api/workspace", tags=["Workspace Matcher"])
logger = logging.getLogger("lasermatch.api")


# ── Conversions ─────────────────────────────────────────────────────────────

def _to_workpiece(req: WorkpieceRequest) -> Workpiece:
    quantity = req.quantity
    if quantity is not None and float(quantity).is_integer():
        quantity = int(quantity)
    return Workpiece(
        length=req.length,
        width=req.width,
        quantity=quantity,
        margin=req.margin,
        rotation_allowed=req.rotation_allowed,
        unit=req.unit,
    )


def _to_surface(model: CandidateSurfaceModel) -> CandidateSurface:
    return CandidateSurface(**model.model_dump())


def _to_match_result(model: MatchResultModel) -> MatchResult:
    return MatchResult(
        workspace=_to_surface(model.workspace),
        layout=Layout(**model.layout.model_dump()),
        match_score=model.match_score,
        is_optimal=model.is_optimal,
        recommendations=list(model.recommendations),
        warnings=list(model.warnings),
    )


def _result_model(result: MatchResult, unit: str) -> MatchResultModel:
    ws = result.workspace
    return MatchResultModel(
        **result.to_dict(),
        workspace_display=f"{format_dimension(ws.length, unit)} x {format_dimension(ws.width, unit)}",
    )


def _cost_model(estimate: CostEstimate, unit: str) -> CostEstimateModel:
    return CostEstimateModel(
        **estimate.to_dict(),
        area_display={
            "total": format_area(estimate.total_material_area * MM2_PER_M2, unit),
            "used": format_area(estimate.used_material_area * MM2_PER_M2, unit),
            "wasted": format_area(estimate.wasted_material_area * MM2_PER_M2, unit),
        },
    )


# ── Routes ──────────────────────────────────────────────────────────────────

@router.get("/sizes", response_model=List[CandidateSurfaceModel])
async def list_workspace_sizes():
    """Default catalog of common laser bed sizes (mm)."""
    return [CandidateSurfaceModel(**s.to_dict()) for s in COMMON_WORKSPACE_SIZES]


@router.post("/validate", response_model=ValidationResponse)
async def validate_workpiece(req: WorkpieceRequest):
    """Pre-flight check; always 200, problems are listed in ``errors``."""
    return validate_workspace_input(req.model_dump()).to_dict()


@router.post("/match", response_model=MatchResponse)
async def match_workpiece(req: MatchRequest):
    """
    Rank candidate surfaces (default catalog when none given) and cost the
    recommended one when it can hold at least one part.
    """
    workpiece = _to_workpiece(req.workpiece)
    candidates = None
    if req.candidates is not None:
        candidates = [_to_surface(c) for c in req.candidates]

    try:
        results = match_workspace(workpiece, candidates)
    except InvalidInput as e:
        raise HTTPException(status_code=422, detail={"errors": e.errors})

    unit = req.workpiece.unit
    recommended = select_recommended(results)

    recommended_cost = None
    if recommended is not None and recommended.layout.total_parts > 0:
        recommended_cost = _cost_model(
            calculate_cost_estimate(recommended, workpiece.quantity, req.cost_per_sheet),
            unit,
        )

    shown = results[: req.top_n] if req.top_n else results
    return MatchResponse(
        unit=unit,
        results=[_result_model(r, unit) for r in shown],
        recommended=_result_model(recommended, unit) if recommended else None,
        recommended_cost=recommended_cost,
    )


@router.post("/cost-estimate", response_model=CostEstimateModel)
async def estimate_sheet_cost(req: CostEstimateRequest):
    """Sheets and material area for a chosen match result."""
    try:
        estimate = calculate_cost_estimate(
            _to_match_result(req.match), req.required_quantity, req.cost_per_sheet
        )
    except ZeroCapacityLayout as e:
        logger.warning(f"Cost estimate refused: {e}")
        raise HTTPException(status_code=422, detail=str(e))
    return _cost_model(estimate, req.unit)
