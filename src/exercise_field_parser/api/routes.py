"""
Exercise field endpoints

Stateless JSON wrappers around the parsing/validation/suggestion engine for
the workout editor. Nothing is stored here; the editor owns the exercise
records and sends them with every request.
"""

import logging
from typing import List

from fastapi import APIRouter
from pydantic import BaseModel, Field

from exercise_field_parser.config import settings
from exercise_field_parser.models import (
    Exercise,
    FieldSuggestion,
    FieldValidationResult,
    ParsedExerciseData,
    ParsingResult,
)
from exercise_field_parser.parsers.exercise_parser import format_parsed_data, parse_exercise_text
from exercise_field_parser.services.field_validator import suggest_from_description, validate_exercise
from exercise_field_parser.services.suggestion_applier import (
    apply_suggestions,
    rank_suggestions,
    status_after_validation,
)

logger = logging.getLogger(__name__)

router = APIRouter()


# ---------------------------------------------------------------------------
# Request/Response Models
# ---------------------------------------------------------------------------

class ParseExerciseRequest(BaseModel):
    """Request model for POST /exercises/parse"""
    text: str = Field(..., max_length=settings.MAX_TEXT_LENGTH, description="Exercise description to parse")


class ParseExerciseResponse(ParsingResult):
    """Parsing result plus its canonical rendering"""
    formatted: str = ""


class ValidateExerciseRequest(BaseModel):
    """Request model for POST /exercises/validate"""
    exercise: Exercise


class ApplySuggestionsRequest(BaseModel):
    """Request model for POST /exercises/apply-suggestions"""
    exercise: Exercise
    suggestions: List[FieldSuggestion] = Field(default_factory=list)


class ApplySuggestionsResponse(BaseModel):
    """Updated exercise and the validation run against it"""
    exercise: Exercise
    validation: FieldValidationResult


class AutoSuggestionsRequest(BaseModel):
    """Request model for POST /exercises/auto-suggestions"""
    description: str = Field(..., max_length=settings.MAX_TEXT_LENGTH)


class AutoSuggestionsResponse(BaseModel):
    suggestions: List[FieldSuggestion] = Field(default_factory=list)


class FormatRequest(BaseModel):
    """Request model for POST /exercises/format"""
    parsed: ParsedExerciseData


class FormatResponse(BaseModel):
    formatted: str


# ---------------------------------------------------------------------------
# API Endpoints
# ---------------------------------------------------------------------------

@router.get("/health")
async def health() -> dict:
    return {"status": "ok", "environment": settings.ENVIRONMENT}


@router.post("/exercises/parse", response_model=ParseExerciseResponse)
async def parse_exercise(request: ParseExerciseRequest) -> ParseExerciseResponse:
    """
    Parse an exercise description into sets, reps, rest period and notes.

    ## Request Body
    - **text**: e.g. "4 sets x 8 reps per arm, rest 60s"

    ## Response
    The parsing result (fields, confidence, matched patterns, suggestions,
    has_issues) and `formatted`, the canonical rendering of the parsed fields.
    """
    result = parse_exercise_text(request.text)
    return ParseExerciseResponse(
        **result.model_dump(),
        formatted=format_parsed_data(result.parsed),
    )


@router.post("/exercises/validate", response_model=FieldValidationResult)
async def validate(request: ValidateExerciseRequest) -> FieldValidationResult:
    """Run field heuristics against a stored exercise."""
    return validate_exercise(request.exercise)


@router.post("/exercises/apply-suggestions", response_model=ApplySuggestionsResponse)
async def apply(request: ApplySuggestionsRequest) -> ApplySuggestionsResponse:
    """
    Apply accepted suggestions (one for a single accept, several for "Apply All").

    The updated exercise is validated again; if problems remain its status
    moves from parsed to needs_review.
    """
    updated = apply_suggestions(request.exercise, request.suggestions)
    validation = validate_exercise(updated)
    status = status_after_validation(updated.parsing_status, validation)
    if status != updated.parsing_status:
        logger.info(f"Exercise {updated.id}: {updated.parsing_status} -> {status}")
        updated = updated.model_copy(update={"parsing_status": status})
    return ApplySuggestionsResponse(exercise=updated, validation=validation)


@router.post("/exercises/auto-suggestions", response_model=AutoSuggestionsResponse)
async def auto_suggestions(request: AutoSuggestionsRequest) -> AutoSuggestionsResponse:
    """Suggest field values parsed from an exercise's original description."""
    return AutoSuggestionsResponse(suggestions=rank_suggestions(suggest_from_description(request.description)))


@router.post("/exercises/format", response_model=FormatResponse)
async def format_exercise(request: FormatRequest) -> FormatResponse:
    """Render parsed exercise data in canonical form."""
    return FormatResponse(formatted=format_parsed_data(request.parsed))
