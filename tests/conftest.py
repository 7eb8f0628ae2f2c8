"""
Pytest fixtures for the tax comparison tests.
"""

import pytest
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from schedules import JURISDICTIONS, Bracket, get_exemption, get_schedule


@pytest.fixture(params=JURISDICTIONS)
def jurisdiction(request):
    """Each configured jurisdiction in turn."""
    return request.param


@pytest.fixture
def boundary_incomes(jurisdiction):
    """Gross incomes on and around every bracket edge, ascending."""
    exemption = get_exemption(jurisdiction)
    points = {0, 1, 500, 7_999, 8_000, 8_001, 50_000_000}
    for b in get_schedule(jurisdiction)[:-1]:
        edge = b.max + exemption
        points.update({edge - 1, edge, edge + 0.5, edge + 1, edge + 2})
    points.update(range(0, 30_000_000, 250_000))
    return sorted(points)


@pytest.fixture
def simple_brackets():
    """A small well-formed schedule."""
    return [
        Bracket(rate=1.0, min=0, max=1000),
        Bracket(rate=2.0, min=1001, max=5000),
        Bracket(rate=5.0, min=5001, max=999_999_999),
    ]
