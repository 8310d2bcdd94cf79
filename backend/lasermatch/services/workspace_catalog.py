"""
Workpiece and candidate-surface value types, plus the default catalog of
common laser bed sizes.
"""
from dataclasses import asdict, dataclass, replace
from typing import Any, Dict, List

from lasermatch.config import DEFAULT_MARGIN, DEFAULT_ROTATION_ALLOWED, DEFAULT_UNIT
from lasermatch.services.units import METRIC, to_mm


@dataclass(frozen=True)
class CandidateSurface:
    """One usable cutting-bed size. Dimensions are always in mm."""
    length: float
    width: float
    common_name: str = ""
    category: str = "medium"

    @property
    def area_mm2(self) -> float:
        return self.length * self.width

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class Workpiece:
    """
    A single rectangular part plus its order quantity and packing constraints.

    ``length``, ``width`` and ``margin`` are interpreted in ``unit``; call
    :meth:`normalized` to obtain the millimetre form used by the engine.
    """
    length: float
    width: float
    quantity: int
    margin: float = DEFAULT_MARGIN
    rotation_allowed: bool = DEFAULT_ROTATION_ALLOWED
    unit: str = DEFAULT_UNIT

    def normalized(self) -> "Workpiece":
        """Return a copy with every linear field converted to mm."""
        if self.unit == METRIC:
            return self
        return replace(
            self,
            length=to_mm(self.length, self.unit),
            width=to_mm(self.width, self.unit),
            margin=to_mm(self.margin, self.unit),
            unit=METRIC,
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


# ---------------------------------------------------------------------------
# Default catalog (mm)
# ---------------------------------------------------------------------------

COMMON_WORKSPACE_SIZES: List[CandidateSurface] = [
    CandidateSurface(600, 400, "600x400mm", "small"),
    CandidateSurface(900, 600, "900x600mm", "small"),
    CandidateSurface(1300, 900, "1300x900mm", "medium"),
    CandidateSurface(1500, 1000, "1500x1000mm", "medium"),
    CandidateSurface(2000, 1000, "2000x1000mm", "medium"),
    CandidateSurface(2500, 1300, "2500x1300mm", "medium"),
    CandidateSurface(3000, 1500, "3000x1500mm", "large"),
    CandidateSurface(4000, 2000, "4000x2000mm", "large"),
    CandidateSurface(6000, 2000, "6000x2000mm", "industrial"),
    CandidateSurface(8000, 2500, "8000x2500mm", "industrial"),
]
