"""
Tests for the exercise field endpoints.

Uses the conftest.py `client` fixture.
"""

import pytest

from exercise_field_parser.config import settings


class TestParseEndpoint:
    """POST /exercises/parse"""

    def test_parse_exercise(self, client):
        response = client.post("/exercises/parse", json={"text": "4 sets x 8 reps per arm, rest 60s"})

        assert response.status_code == 200
        data = response.json()
        assert data["parsed"]["sets"] == 4
        assert data["parsed"]["reps"] == "8"
        assert data["parsed"]["rest_period"] == 60
        assert data["matched_patterns"][0] == {"name": "SETS_X_REPS_DETAILED", "confidence": 0.95}
        assert data["has_issues"] is False
        assert data["formatted"] == "4 sets × 8 reps, 1:00 rest, per arm"

    def test_parse_empty_text(self, client):
        response = client.post("/exercises/parse", json={"text": "   "})

        assert response.status_code == 200
        data = response.json()
        assert data["confidence"] == 0
        assert data["suggestions"] == []
        assert data["formatted"] == ""

    def test_missing_text_is_rejected(self, client):
        assert client.post("/exercises/parse", json={}).status_code == 422

    def test_overlong_text_is_rejected(self, client):
        response = client.post("/exercises/parse", json={"text": "x" * (settings.MAX_TEXT_LENGTH + 1)})
        assert response.status_code == 422


class TestValidateEndpoint:
    """POST /exercises/validate"""

    def test_validate_field_bleed(self, client):
        response = client.post("/exercises/validate", json={
            "exercise": {"id": "ex-1", "name": "Row", "sets": 1, "reps": "4 sets x 8 reps", "isExpanded": True},
        })

        assert response.status_code == 200
        data = response.json()
        assert data["is_valid"] is True
        assert data["confidence"] == pytest.approx(0.3)
        assert [(s["field"], s["suggested_value"]) for s in data["suggestions"]] == [("sets", 4), ("reps", "8")]
        assert all(s["source"] == "field_analysis" for s in data["suggestions"])

    def test_validate_issue(self, client):
        response = client.post("/exercises/validate", json={
            "exercise": {"id": "ex-1", "name": "Row", "sets": 0, "reps": 10},
        })

        data = response.json()
        assert data["is_valid"] is False
        assert data["issues"] == ["Sets must be at least 1"]


class TestApplySuggestionsEndpoint:
    """POST /exercises/apply-suggestions"""

    def test_apply_swap(self, client):
        exercise = {"id": "ex-3", "name": "Push-ups", "sets": 25, "reps": 5}
        suggestions = client.post("/exercises/validate", json={"exercise": exercise}).json()["suggestions"]

        response = client.post("/exercises/apply-suggestions", json={
            "exercise": exercise,
            "suggestions": suggestions,
        })

        assert response.status_code == 200
        data = response.json()
        assert data["exercise"]["sets"] == 5
        assert data["exercise"]["reps"] == 25
        assert data["exercise"]["parsing_status"] == "parsed"
        assert data["exercise"]["parsing_confidence"] == pytest.approx(0.7)
        assert data["validation"]["is_valid"] is True

    def test_remaining_problems_flag_review(self, client):
        response = client.post("/exercises/apply-suggestions", json={
            "exercise": {"id": "ex-4", "name": "Row", "sets": 3, "reps": "10"},
            "suggestions": [{
                "field": "reps",
                "suggested_value": "12-8",
                "confidence": 0.6,
                "reason": "typo",
                "source": "heuristic_analysis",
            }],
        })

        data = response.json()
        assert data["validation"]["is_valid"] is False
        assert data["exercise"]["parsing_status"] == "needs_review"

    def test_mistyped_suggestion_is_rejected(self, client):
        response = client.post("/exercises/apply-suggestions", json={
            "exercise": {"id": "ex-4", "name": "Row", "sets": 3, "reps": 10},
            "suggestions": [{
                "field": "sets",
                "suggested_value": "three",
                "confidence": 0.6,
                "reason": "bad",
                "source": "heuristic_analysis",
            }],
        })
        assert response.status_code == 422


class TestAutoSuggestionsEndpoint:
    """POST /exercises/auto-suggestions"""

    def test_auto_suggestions(self, client):
        response = client.post("/exercises/auto-suggestions", json={"description": "3 sets of 10 reps, rest 90 seconds"})

        assert response.status_code == 200
        fields = [s["field"] for s in response.json()["suggestions"]]
        assert fields == ["sets", "reps", "rest_period"]


class TestFormatEndpoint:
    """POST /exercises/format"""

    def test_format(self, client):
        response = client.post("/exercises/format", json={"parsed": {"sets": 3, "reps": "8-12", "rest_period": 90}})

        assert response.status_code == 200
        assert response.json() == {"formatted": "3 sets × 8-12 reps, 1:30 rest"}


def test_health(client):
    assert client.get("/health").json() == {"status": "ok", "environment": settings.ENVIRONMENT}
