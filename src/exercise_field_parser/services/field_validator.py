"""
Field Validator

Heuristic validation of exercise records that are already stored on the
editor side. The checks look only at the stored fields, not at the text the
fields were parsed from, so they also catch manual mis-entry and drift.
"""

import re
import logging
from typing import List, Optional

from exercise_field_parser.models import (
    Exercise,
    FieldSuggestion,
    FieldValidationResult,
    ParsedDataValidation,
    ParsedExerciseData,
    SuggestionField,
    SuggestionSource,
)
from exercise_field_parser.parsers.exercise_parser import (
    DEFAULT_SETS,
    REST_VALUE_PATTERN,
    SETS_IN_REPS_PATTERN,
    as_int,
    parse_exercise_text,
)
from exercise_field_parser.parsers.text_normalizer import clean_text

logger = logging.getLogger(__name__)

MAX_REASONABLE_SETS = 20
MAX_PARSED_SETS = 50
MAX_REASONABLE_REPS = 100
MAX_REASONABLE_REST = 600  # 10 minutes
MAX_NAME_LENGTH = 100

# Confidence caps applied when a heuristic fires
FIELD_BLEED_CONFIDENCE = 0.3
UNRECOGNIZED_REPS_CONFIDENCE = 0.5
MISSING_DATA_CONFIDENCE = 0.2

# Name parses scoring above this are surfaced as suggestions
NAME_PARSE_THRESHOLD = 0.5
NAME_SUGGESTION_SCALE = 0.8

# Description parses scoring above this become auto_parsing suggestions
AUTO_PARSE_THRESHOLD = 0.6

REST_WORDS_PATTERN = re.compile(r'rest|second|minute|pause|break', re.IGNORECASE)
STRUCTURE_WORDS_PATTERN = re.compile(r'sets?|rounds?|circuits?', re.IGNORECASE)
RANGE_PATTERN = re.compile(r'^(\d{1,6})-(\d{1,6})$')
RANGE_SPACING_PATTERN = re.compile(r'(?<=\d)\s*-\s*(?=\d)')

# Reps formats accepted as-is
VALID_REPS_PATTERNS = (
    re.compile(r'^\d+$'),                       # "12"
    re.compile(r'^\d+-\d+$'),                   # "8-12"
    re.compile(r'^(?:max|amrap)$', re.I),       # special formats
    re.compile(r'^\d+\+$'),                     # "12+"
    re.compile(r'^to\s+failure$', re.I),        # "to failure"
)


def clean_reps(reps: str) -> str:
    """Clean a reps string and close up range spacing ("8 - 12" -> "8-12")"""
    return RANGE_SPACING_PATTERN.sub('-', clean_text(reps))


def is_recognized_reps_format(reps: str) -> bool:
    """Check if a reps string is a simple, range or special format"""
    reps = reps.strip()
    return any(pattern.match(reps) for pattern in VALID_REPS_PATTERNS)


def _check_rep_range(reps: str, issues: List[str], warnings: List[str]) -> bool:
    """Apply range checks when reps is 'min-max'. Returns True if it was a range."""
    range_match = RANGE_PATTERN.match(reps)
    if not range_match:
        return False
    low, high = int(range_match.group(1)), int(range_match.group(2))
    if low >= high:
        issues.append("Rep range minimum must be less than maximum")
    if high > MAX_REASONABLE_REPS:
        warnings.append(f"Rep range maximum is unusually high (>{MAX_REASONABLE_REPS})")
    return True


class FieldValidator:
    """Real-time validation and suggestion system for exercise fields."""

    @staticmethod
    def validate_exercise(exercise: Exercise) -> FieldValidationResult:
        """
        Validate an entire exercise and provide comprehensive feedback.

        Every heuristic runs independently. The aggregate confidence is the
        lowest cap imposed by any heuristic that fired (1.0 when none did).
        The exercise itself is never modified.
        """
        suggestions: List[FieldSuggestion] = []
        issues: List[str] = []
        warnings: List[str] = []
        confidence = 1.0

        reps_text = clean_reps(exercise.reps) if isinstance(exercise.reps, str) else None
        numeric_reps = as_int(exercise.reps) if reps_text is None else as_int(reps_text)
        extracted_sets: Optional[int] = None

        if reps_text:
            # Sets information bled into the reps field
            bleed_match = SETS_IN_REPS_PATTERN.search(reps_text)
            if bleed_match:
                extracted_sets = int(bleed_match.group(1))
                if extracted_sets >= 1:
                    suggestions.append(FieldSuggestion(
                        field=SuggestionField.SETS,
                        current_value=exercise.sets,
                        suggested_value=extracted_sets,
                        confidence=0.95,
                        reason=f'Found "{bleed_match.group(0)}" in reps field - extract sets value',
                        source=SuggestionSource.FIELD_ANALYSIS,
                    ))
                suggestions.append(FieldSuggestion(
                    field=SuggestionField.REPS,
                    current_value=exercise.reps,
                    suggested_value=bleed_match.group(2),
                    confidence=0.95,
                    reason="Extract reps value from combined text",
                    source=SuggestionSource.FIELD_ANALYSIS,
                ))
                confidence = min(confidence, FIELD_BLEED_CONFIDENCE)
                logger.warning(f"Exercise {exercise.id}: sets found in reps field {exercise.reps!r}")

            # Rest information bled into the reps field
            if REST_WORDS_PATTERN.search(reps_text) and exercise.rest_period is None:
                rest_match = REST_VALUE_PATTERN.search(reps_text)
                if rest_match:
                    value = int(rest_match.group(1))
                    is_minutes = rest_match.group(2).lower().startswith('min')
                    suggestions.append(FieldSuggestion(
                        field=SuggestionField.REST_PERIOD,
                        current_value=exercise.rest_period,
                        suggested_value=value * 60 if is_minutes else value,
                        confidence=0.8,
                        reason=f'Found rest period "{rest_match.group(0)}" in reps field',
                        source=SuggestionSource.FIELD_ANALYSIS,
                    ))

        # Sets
        if exercise.sets is not None:
            if exercise.sets < 1:
                issues.append("Sets must be at least 1")
            elif exercise.sets == 1 and reps_text:
                # Sets may have defaulted to 1 while the real data sits in reps
                if len(reps_text) > 10 or STRUCTURE_WORDS_PATTERN.search(reps_text):
                    warnings.append("Sets is 1 but reps field contains complex text - check parsing")
                    if extracted_sets is None:
                        suggestions.append(FieldSuggestion(
                            field=SuggestionField.SETS,
                            current_value=exercise.sets,
                            suggested_value=DEFAULT_SETS,
                            confidence=0.6,
                            reason="Default sets value may need adjustment for complex exercise",
                            source=SuggestionSource.HEURISTIC_ANALYSIS,
                        ))
            elif exercise.sets > MAX_REASONABLE_SETS:
                warnings.append(f"Sets value is unusually high (>{MAX_REASONABLE_SETS})")
                if numeric_reps is not None and 1 <= numeric_reps < 10:
                    suggestions.append(FieldSuggestion(
                        field=SuggestionField.SETS,
                        current_value=exercise.sets,
                        suggested_value=numeric_reps,
                        confidence=0.7,
                        reason="Sets and reps values might be swapped",
                        source=SuggestionSource.SWAP_DETECTION,
                    ))
                    suggestions.append(FieldSuggestion(
                        field=SuggestionField.REPS,
                        current_value=exercise.reps,
                        suggested_value=exercise.sets,
                        confidence=0.7,
                        reason="Sets and reps values might be swapped",
                        source=SuggestionSource.SWAP_DETECTION,
                    ))

        # Reps
        if numeric_reps is not None:
            if numeric_reps < 1:
                issues.append("Reps must be at least 1")
            elif numeric_reps > MAX_REASONABLE_REPS:
                warnings.append(f"Reps value is unusually high (>{MAX_REASONABLE_REPS})")
        elif reps_text:
            if not _check_rep_range(reps_text, issues, warnings) and not is_recognized_reps_format(reps_text):
                warnings.append("Reps format may contain unparsed exercise data")
                confidence = min(confidence, UNRECOGNIZED_REPS_CONFIDENCE)

        # Rest period
        if exercise.rest_period is not None:
            if exercise.rest_period < 0:
                issues.append("Rest period cannot be negative")
            elif exercise.rest_period > MAX_REASONABLE_REST:
                warnings.append("Rest period is unusually long (>10 minutes)")

        # Exercise details crammed into the name
        if exercise.name and len(exercise.name) > MAX_NAME_LENGTH:
            warnings.append("Exercise name is very long - might contain exercise details")
            name_result = parse_exercise_text(exercise.name)
            if name_result.confidence > NAME_PARSE_THRESHOLD:
                scaled = name_result.confidence * NAME_SUGGESTION_SCALE
                if name_result.parsed.sets is not None:
                    suggestions.append(FieldSuggestion(
                        field=SuggestionField.SETS,
                        current_value=exercise.sets,
                        suggested_value=name_result.parsed.sets,
                        confidence=scaled,
                        reason="Found sets information in exercise name",
                        source=SuggestionSource.NAME_ANALYSIS,
                    ))
                if name_result.parsed.reps is not None:
                    suggestions.append(FieldSuggestion(
                        field=SuggestionField.REPS,
                        current_value=exercise.reps,
                        suggested_value=name_result.parsed.reps,
                        confidence=scaled,
                        reason="Found reps information in exercise name",
                        source=SuggestionSource.NAME_ANALYSIS,
                    ))

        # Nothing to work with
        if not exercise.sets and not exercise.reps:
            warnings.append("Exercise is missing both sets and reps values")
            confidence = min(confidence, MISSING_DATA_CONFIDENCE)

        return FieldValidationResult(
            is_valid=len(issues) == 0,
            has_warnings=len(warnings) > 0,
            suggestions=suggestions,
            issues=issues,
            warnings=warnings,
            confidence=confidence,
        )

    @staticmethod
    def validate_parsed_data(parsed: ParsedExerciseData) -> ParsedDataValidation:
        """Sanity check parsed exercise data before it is stored"""
        issues: List[str] = []
        warnings: List[str] = []

        if parsed.sets is not None:
            if parsed.sets < 1:
                issues.append("Sets must be at least 1")
            elif parsed.sets > MAX_PARSED_SETS:
                warnings.append(f"Sets value seems unusually high (>{MAX_PARSED_SETS})")

        if isinstance(parsed.reps, int):
            if parsed.reps < 1:
                issues.append("Reps must be at least 1")
        elif isinstance(parsed.reps, str):
            reps_text = clean_reps(parsed.reps)
            if not _check_rep_range(reps_text, issues, warnings) and as_int(reps_text) is None:
                warnings.append('Reps format not recognized, ensure it\'s a number or range (e.g., "8-12")')

        if parsed.rest_period is not None:
            if parsed.rest_period < 0:
                issues.append("Rest period cannot be negative")
            elif parsed.rest_period > MAX_REASONABLE_REST:
                warnings.append("Rest period seems unusually long (>10 minutes)")

        return ParsedDataValidation(is_valid=len(issues) == 0, issues=issues, warnings=warnings)

    @staticmethod
    def suggest_from_description(description: Optional[str]) -> List[FieldSuggestion]:
        """Turn a confident parse of an exercise description into suggestions"""
        if not description or not description.strip():
            return []

        result = parse_exercise_text(description)
        if result.confidence <= AUTO_PARSE_THRESHOLD:
            return []

        reason = f'Auto-parsed from: "{clean_text(description)}"'
        suggestions: List[FieldSuggestion] = []
        if result.parsed.sets is not None:
            suggestions.append(FieldSuggestion(
                field=SuggestionField.SETS,
                suggested_value=result.parsed.sets,
                confidence=result.confidence,
                reason=reason,
                source=SuggestionSource.AUTO_PARSING,
            ))
        if result.parsed.reps is not None:
            suggestions.append(FieldSuggestion(
                field=SuggestionField.REPS,
                suggested_value=result.parsed.reps,
                confidence=result.confidence,
                reason=reason,
                source=SuggestionSource.AUTO_PARSING,
            ))
        if result.parsed.rest_period is not None:
            suggestions.append(FieldSuggestion(
                field=SuggestionField.REST_PERIOD,
                suggested_value=result.parsed.rest_period,
                confidence=result.confidence,
                reason="Auto-parsed rest period from description",
                source=SuggestionSource.AUTO_PARSING,
            ))
        return suggestions


validate_exercise = FieldValidator.validate_exercise
validate_parsed_data = FieldValidator.validate_parsed_data
suggest_from_description = FieldValidator.suggest_from_description
