"""Unit tests for data models."""
import pytest
from pydantic import ValidationError

from exercise_field_parser.models import (
    Exercise,
    FieldValidationResult,
    ParsedExerciseData,
    ParsingStatus,
)


class TestModels:
    """Test cases for data models."""

    def test_exercise_creation(self):
        """Test Exercise model creation."""
        exercise = Exercise(id="1", name="Bench Press", sets=3, reps="8-12", rest_period=90)

        assert exercise.name == "Bench Press"
        assert exercise.sets == 3
        assert exercise.reps == "8-12"
        assert exercise.parsing_status is None

    def test_exercise_keeps_integer_reps(self):
        assert Exercise(id="1", name="Squat", reps=10).reps == 10

    def test_exercise_accepts_out_of_range_values(self):
        """Bad values are the validator's job, not a construction error."""
        exercise = Exercise(id="1", name="Squat", sets=0, reps=-1, rest_period=-30)
        assert exercise.sets == 0

    def test_exercise_ignores_ui_fields(self):
        exercise = Exercise(id="1", name="Squat", isExpanded=True)
        assert not hasattr(exercise, "isExpanded")

    def test_parsing_status_from_string(self):
        assert Exercise(id="1", parsing_status="needs_review").parsing_status == ParsingStatus.NEEDS_REVIEW

    def test_parsed_data_constraints(self):
        with pytest.raises(ValidationError):
            ParsedExerciseData(sets=0)
        with pytest.raises(ValidationError):
            ParsedExerciseData(rest_period=-1)
        with pytest.raises(ValidationError):
            ParsedExerciseData(confidence=1.2)

    def test_validation_result_needs_review(self):
        assert FieldValidationResult().needs_review is False
        assert FieldValidationResult(is_valid=False).needs_review is True
        assert FieldValidationResult(confidence=0.5).needs_review is True
