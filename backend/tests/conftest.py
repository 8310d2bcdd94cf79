"""
conftest.py — Shared pytest fixtures for the workspace matcher test suite.

No database or external service fixtures are defined here. Engine tests are
pure unit tests; API tests drive the FastAPI app in-process via TestClient.

Import-path bootstrapping:
    The ``backend/`` directory is inserted into sys.path so that all
    ``lasermatch.*`` imports resolve correctly regardless of where pytest is
    invoked.
"""

import sys
import os
import pytest

# ---------------------------------------------------------------------------
# Ensure ``backend/`` is on the import path before any lasermatch imports occur.
# ---------------------------------------------------------------------------
_BACKEND_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if _BACKEND_DIR not in sys.path:
    sys.path.insert(0, _BACKEND_DIR)


# ---------------------------------------------------------------------------
# Workpiece fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def bracket_workpiece():
    """
    200 × 150 mm bracket, 10 off, 5 mm margin, no rotation (metric).

    On a 1300 × 900 bed: 6 per row × 5 rows = 30 parts.
    """
    from lasermatch.services.workspace_catalog import Workpiece
    return Workpiece(
        length=200.0, width=150.0, quantity=10, margin=5.0,
        rotation_allowed=False, unit="metric",
    )


@pytest.fixture
def oversized_workpiece():
    """5000 × 5000 mm plate, larger than every bed in the default catalog."""
    from lasermatch.services.workspace_catalog import Workpiece
    return Workpiece(length=5000.0, width=5000.0, quantity=1, margin=0.0)


# ---------------------------------------------------------------------------
# Surface fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def medium_bed():
    from lasermatch.services.workspace_catalog import CandidateSurface
    return CandidateSurface(1300.0, 900.0, "1300x900mm", "medium")


@pytest.fixture
def small_bed():
    from lasermatch.services.workspace_catalog import CandidateSurface
    return CandidateSurface(600.0, 400.0, "600x400mm", "small")


# ---------------------------------------------------------------------------
# Shared state
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def reset_match_tracker():
    """Counters are process-wide; start every test from zero."""
    from lasermatch.services.perf_monitor import tracker
    tracker.reset()
    yield
    tracker.reset()


@pytest.fixture(scope="session")
def api_client():
    """TestClient over the full app (middleware + routers)."""
    from fastapi.testclient import TestClient
    from lasermatch.main import app
    return TestClient(app)
