"""
Test fixtures for exercise-field-parser.

The engine is pure, so most fixtures are plain sample records. The API
client fixture wraps the FastAPI app for route tests.
"""

import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"

# Make src/ importable so tests can do `import exercise_field_parser...`
for p in {ROOT, SRC}:
    p_str = str(p)
    if p_str not in sys.path:
        sys.path.insert(0, p_str)

from exercise_field_parser.main import app
from exercise_field_parser.models import (
    Exercise,
    FieldSuggestion,
    SuggestionField,
    SuggestionSource,
)


# ---------------------------------------------------------------------------
# Core Test Client
# ---------------------------------------------------------------------------


@pytest.fixture
def client() -> TestClient:
    """Per-test FastAPI TestClient."""
    return TestClient(app)


# ---------------------------------------------------------------------------
# Sample Data Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def clean_exercise() -> Exercise:
    """Well-formed exercise that should validate without findings."""
    return Exercise(
        id="ex-1",
        name="Dumbbell Row",
        sets=4,
        reps="8-12",
        rest_period=60,
        parsing_status="parsed",
        parsing_confidence=0.9,
    )


@pytest.fixture
def bled_exercise() -> Exercise:
    """Exercise whose sets information ended up in the reps field."""
    return Exercise(
        id="ex-2",
        name="Single-Arm Dumbbell Row",
        sets=1,
        reps="4 sets x 8 reps",
        original_description="4 sets x 8 reps per arm",
    )


@pytest.fixture
def swapped_exercise() -> Exercise:
    """Exercise with sets and reps entered the wrong way around."""
    return Exercise(id="ex-3", name="Push-ups", sets=25, reps=5)


def make_suggestion(field, value, confidence, source=SuggestionSource.HEURISTIC_ANALYSIS):
    """Build a FieldSuggestion with a generic reason."""
    return FieldSuggestion(
        field=SuggestionField(field),
        current_value=None,
        suggested_value=value,
        confidence=confidence,
        reason=f"test suggestion for {field}",
        source=source,
    )


@pytest.fixture
def suggestion_factory():
    """Factory fixture for FieldSuggestion objects."""
    return make_suggestion
