"""
Workspace matching configuration — single source of truth for scoring weights,
gates, annotation thresholds and input limits.

Import from here in all services rather than hardcoding values.
"""
from __future__ import annotations

# ── Units ─────────────────────────────────────────────────────────────────────
MM_PER_INCH: float = 25.4
MM2_PER_M2: float = 1_000_000.0
SQIN_PER_SQFT: float = 144.0


# ── Match score components (points) ───────────────────────────────────────────

# Utilization: utilization% × weight, capped
UTILIZATION_WEIGHT: float = 0.4
UTILIZATION_MAX_POINTS: float = 40.0

# Quantity coverage
COVERAGE_MAX_POINTS: float = 30.0
COVERAGE_EXCESS_TOLERANCE: float = 0.3    # spare capacity below 30 % is free
COVERAGE_EXCESS_WEIGHT: float = 20.0      # points lost per 1.0 excess ratio
COVERAGE_EXCESS_MAX_PENALTY: float = 15.0
COVERAGE_SHORTFALL_MAX_POINTS: float = 15.0  # half marks at most when multi-sheet

# Wastage penalty: every 2 % of wastage costs 1 point
WASTAGE_MAX_POINTS: float = 30.0
WASTAGE_WEIGHT: float = 0.5


# ── Optimal gate ──────────────────────────────────────────────────────────────
OPTIMAL_MIN_SCORE: int = 70
OPTIMAL_MIN_UTILIZATION_PCT: float = 60.0


# ── Recommendation / warning thresholds ───────────────────────────────────────
EXCELLENT_UTILIZATION_PCT: float = 75.0
GOOD_UTILIZATION_PCT: float = 60.0
BATCH_CAPACITY_MULTIPLE: int = 2
LOW_UTILIZATION_PCT: float = 40.0
HIGH_WASTAGE_PCT: float = 50.0


# ── Input limits (canonical mm) ───────────────────────────────────────────────
MAX_PART_DIMENSION_MM: float = 10_000.0
MAX_QUANTITY: int = 10_000
MAX_MARGIN_MM: float = 100.0


# ── Workpiece defaults ────────────────────────────────────────────────────────
DEFAULT_MARGIN: float = 5.0
DEFAULT_ROTATION_ALLOWED: bool = True
DEFAULT_UNIT: str = "metric"
