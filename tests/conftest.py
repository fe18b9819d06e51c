"""Shared fixtures for school insights tests."""

import sys
from datetime import date
from pathlib import Path
from typing import Iterable, List

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from school_insights.models import SchoolRecord


class ScriptedRandom:
    """Random source replaying fixed draws, in call order per draw kind.

    ``randint`` falls back to the low bound and ``uniform`` to the high bound
    once their scripts run out.
    """

    def __init__(self, ints: Iterable[int] = (), floats: Iterable[float] = ()):
        self.ints: List[int] = list(ints)
        self.floats: List[float] = list(floats)
        self.randint_calls = []
        self.uniform_calls = []

    def randint(self, a: int, b: int) -> int:
        self.randint_calls.append((a, b))
        return self.ints.pop(0) if self.ints else a

    def uniform(self, a: float, b: float) -> float:
        self.uniform_calls.append((a, b))
        return self.floats.pop(0) if self.floats else b


@pytest.fixture
def fixed_today():
    """Clock pinned to Monday 19 October 2026."""
    return lambda: date(2026, 10, 19)


@pytest.fixture
def tunis_lycee():
    """Urban secondary school with authoritative teacher and student counts."""
    return SchoolRecord(
        id=101,
        name="Lycée Pilote de Tunis",
        name_ar="المعهد النموذجي بتونس",
        school_code="TN-0101",
        school_type="Lycée",
        delegation="Tunis",
        cre="Tunis 1",
        teachers=50,
        students=1000,
    )


@pytest.fixture
def rural_primary():
    """Rural primary school with no known counts."""
    return SchoolRecord(
        id=202,
        name="Ecole Primaire Oued Ellil",
        school_code="KS-0202",
        school_type="École primaire",
        delegation="Sbiba",
        cre="Kasserine",
    )


@pytest.fixture
def scripted_random():
    """Factory for ScriptedRandom sources."""
    return ScriptedRandom
