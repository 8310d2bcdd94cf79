"""
Layout engine — uniform grid packing of one part type on one cutting bed.

Parts are laid out rows × columns, every cell the same size and orientation.
Margin is only required *between* parts, so n parts along an axis need
n × extent + (n − 1) × margin, which gives:

    parts_along_axis = floor((bed + margin) / (extent + margin))

Up to two orientations are evaluated (as drawn, and rotated 90° when allowed);
the orientation with the higher utilization wins and ties keep the unrotated
layout.
"""
import math
from dataclasses import asdict, dataclass
from typing import Any, Dict, List

from lasermatch.services.workspace_catalog import CandidateSurface, Workpiece


def round_half_up(value: float, ndigits: int = 0) -> float:
    """Round like a calculator (0.5 → 1), not banker's rounding."""
    factor = 10 ** ndigits
    return math.floor(value * factor + 0.5) / factor


@dataclass(frozen=True)
class Layout:
    parts_per_row: int
    rows: int
    total_parts: int
    utilization_percent: float   # 1 dp
    used_area: float             # mm²
    total_area: float            # mm²
    wastage_percent: float       # 1 dp
    rotated: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _parts_along(bed_mm: float, extent_mm: float, margin_mm: float) -> int:
    if extent_mm <= 0:
        return 0
    return max(math.floor((bed_mm + margin_mm) / (extent_mm + margin_mm)), 0)


def grid_layout(
    part_length: float,
    part_width: float,
    margin: float,
    surface: CandidateSurface,
    rotated: bool = False,
) -> Layout:
    """
    Pack one orientation. ``part_length`` runs along the surface length unless
    ``rotated`` is set, in which case the part is turned 90°.

    A part larger than the bed in either axis yields a valid zero-part layout.
    """
    along_length, along_width = (part_width, part_length) if rotated else (part_length, part_width)

    parts_per_row = _parts_along(surface.length, along_length, margin)
    rows = _parts_along(surface.width, along_width, margin)
    total_parts = parts_per_row * rows

    used_area = total_parts * part_length * part_width
    total_area = surface.length * surface.width

    return Layout(
        parts_per_row=parts_per_row,
        rows=rows,
        total_parts=total_parts,
        utilization_percent=round_half_up(used_area / total_area * 100, 1),
        used_area=used_area,
        total_area=total_area,
        wastage_percent=round_half_up((total_area - used_area) / total_area * 100, 1),
        rotated=rotated,
    )


def calculate_layout(workpiece: Workpiece, surface: CandidateSurface) -> Layout:
    """
    Best grid layout of a (millimetre-normalised) workpiece on ``surface``.
    """
    candidates: List[Layout] = [
        grid_layout(workpiece.length, workpiece.width, workpiece.margin, surface),
    ]
    if workpiece.rotation_allowed:
        candidates.append(
            grid_layout(workpiece.length, workpiece.width, workpiece.margin, surface, rotated=True)
        )

    best = candidates[0]
    for layout in candidates[1:]:
        if layout.utilization_percent > best.utilization_percent:
            best = layout
    return best
