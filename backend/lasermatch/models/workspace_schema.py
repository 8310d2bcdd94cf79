from pydantic import BaseModel, Field
from typing import Dict, List, Literal, Optional


class WorkpieceRequest(BaseModel):
    """
    Workpiece as submitted by the calculator form.

    Fields are optional so that range checks (and their messages) stay with
    the engine's validate_workspace_input, which reports every problem at once.
    """
    length: Optional[float] = Field(None, description="Part length in `unit`")
    width: Optional[float] = Field(None, description="Part width in `unit`")
    quantity: Optional[float] = Field(None, description="Parts required")
    margin: Optional[float] = Field(5.0, description="Spacing between parts in `unit`")
    rotation_allowed: bool = Field(True, description="Also evaluate the 90° orientation")
    unit: Literal["metric", "imperial"] = "metric"


class CandidateSurfaceModel(BaseModel):
    length: float = Field(..., gt=0, description="Bed length in mm")
    width: float = Field(..., gt=0, description="Bed width in mm")
    common_name: str = ""
    category: Literal["small", "medium", "large", "industrial"] = "medium"


class LayoutModel(BaseModel):
    parts_per_row: int
    rows: int
    total_parts: int
    utilization_percent: float
    used_area: float
    total_area: float
    wastage_percent: float
    rotated: bool = False


class MatchResultModel(BaseModel):
    workspace: CandidateSurfaceModel
    layout: LayoutModel
    match_score: int = Field(..., ge=0, le=100)
    is_optimal: bool
    recommendations: List[str] = []
    warnings: List[str] = []
    workspace_display: Optional[str] = None


class CostEstimateModel(BaseModel):
    sheets_needed: int
    total_material_area: float
    used_material_area: float
    wasted_material_area: float
    estimated_cost_per_sheet: Optional[float] = None
    total_estimated_cost: Optional[float] = None
    area_display: Dict[str, str] = {}


class MatchRequest(BaseModel):
    workpiece: WorkpieceRequest
    candidates: Optional[List[CandidateSurfaceModel]] = None
    top_n: Optional[int] = Field(None, ge=1, description="Return only the best N results")
    cost_per_sheet: Optional[float] = Field(None, ge=0)


class MatchResponse(BaseModel):
    unit: Literal["metric", "imperial"]
    results: List[MatchResultModel]
    recommended: Optional[MatchResultModel] = None
    recommended_cost: Optional[CostEstimateModel] = None


class CostEstimateRequest(BaseModel):
    match: MatchResultModel
    required_quantity: int = Field(..., ge=1)
    cost_per_sheet: Optional[float] = Field(None, ge=0)
    unit: Literal["metric", "imperial"] = "metric"


class ValidationResponse(BaseModel):
    valid: bool
    errors: List[str]
