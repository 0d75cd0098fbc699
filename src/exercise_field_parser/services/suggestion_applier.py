"""
Suggestion Applier

Commits accepted field suggestions onto an exercise and keeps its parsing
status in step. Exercises are never modified in place; every function returns
a new copy.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional, Tuple

from exercise_field_parser.models import (
    Exercise,
    FieldSuggestion,
    FieldValidationResult,
    ParsingResult,
    ParsingStatus,
)
from exercise_field_parser.parsers.exercise_parser import REVIEW_CONFIDENCE_THRESHOLD

logger = logging.getLogger(__name__)

# Suggestions at or above this are shown expanded / highlighted by the editor
HIGH_PRIORITY_CONFIDENCE = 0.8


def rank_suggestions(suggestions: Iterable[FieldSuggestion]) -> List[FieldSuggestion]:
    """Sort suggestions by confidence, highest first. Ties keep their input order."""
    return sorted(suggestions, key=lambda s: s.confidence, reverse=True)


def confidence_level(confidence: float) -> str:
    """Bucket a confidence value into 'high', 'medium' or 'low'"""
    if confidence >= 0.9:
        return "high"
    if confidence >= 0.7:
        return "medium"
    return "low"


def split_by_priority(
    suggestions: Iterable[FieldSuggestion],
) -> Tuple[List[FieldSuggestion], List[FieldSuggestion]]:
    """Split ranked suggestions into (high priority, low priority) lists"""
    high, low = [], []
    for suggestion in rank_suggestions(suggestions):
        if suggestion.confidence >= HIGH_PRIORITY_CONFIDENCE:
            high.append(suggestion)
        else:
            low.append(suggestion)
    return high, low


def apply_suggestions(exercise: Exercise, suggestions: Iterable[FieldSuggestion]) -> Exercise:
    """
    Apply multiple suggestions at once with conflict resolution.

    Suggestions are walked in descending confidence order and only the first
    one per field is written, so each field receives its highest-confidence
    suggestion. When anything is applied the exercise is marked as parsed and
    its parsing confidence raised to the best applied confidence.

    Args:
        exercise: Exercise to update (left untouched)
        suggestions: Suggestions the user accepted

    Returns:
        Updated copy of the exercise
    """
    updates: Dict[str, Any] = {}
    applied: List[FieldSuggestion] = []

    for suggestion in rank_suggestions(suggestions):
        field_name = suggestion.field.value
        if field_name in updates:
            continue
        updates[field_name] = suggestion.suggested_value
        applied.append(suggestion)

    if not applied:
        return exercise.model_copy()

    best = max(s.confidence for s in applied)
    updates["parsing_status"] = ParsingStatus.PARSED
    updates["parsing_confidence"] = max(exercise.parsing_confidence or 0, best)

    logger.info(
        f"Exercise {exercise.id}: applied {len(applied)} suggestion(s) "
        f"to {sorted(s.field.value for s in applied)}"
    )
    return exercise.model_copy(update=updates)


def apply_suggestion(exercise: Exercise, suggestion: FieldSuggestion) -> Exercise:
    """Apply a single accepted suggestion"""
    return apply_suggestions(exercise, [suggestion])


def status_after_parse(current: Optional[ParsingStatus], result: ParsingResult) -> Optional[ParsingStatus]:
    """Move a manual/unset exercise to parsed when a parse is confident enough"""
    if current in (None, ParsingStatus.MANUAL) and result.confidence >= REVIEW_CONFIDENCE_THRESHOLD:
        return ParsingStatus.PARSED
    return current


def status_after_validation(
    current: Optional[ParsingStatus],
    validation: FieldValidationResult,
) -> Optional[ParsingStatus]:
    """Flag a parsed exercise for review when validation still finds problems"""
    if current == ParsingStatus.PARSED and validation.needs_review:
        return ParsingStatus.NEEDS_REVIEW
    return current
