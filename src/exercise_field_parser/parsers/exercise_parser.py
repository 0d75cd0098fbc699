"""
Exercise Data Parser

Main parsing engine for extracting structured exercise data from AI-generated
text. Handles descriptions like "4 sets x 8 reps per arm, rest 60s" and
attaches a confidence score plus correction suggestions.
"""

import re
import logging
from typing import Any, Dict, List, Optional

from exercise_field_parser.models import (
    FieldSuggestion,
    ParsedExerciseData,
    ParsingResult,
    PatternHit,
    SuggestionField,
    SuggestionSource,
)
from exercise_field_parser.parsers.patterns import (
    EXERCISE_PATTERNS,
    REST_PATTERNS,
    find_instruction_keywords,
    strip_pattern_spans,
)
from exercise_field_parser.parsers.text_normalizer import (
    clean_text,
    collapse_whitespace,
    normalize_text,
)

logger = logging.getLogger(__name__)

# Once a pattern at or above this confidence matches, weaker exercise patterns
# are skipped so they cannot re-read a substring of the claimed text.
HIGH_CONFIDENCE_CUTOFF = 0.9

# Below this overall confidence a parse is flagged for review.
REVIEW_CONFIDENCE_THRESHOLD = 0.7

# Leftover text shorter than this is punctuation noise, not a note.
MIN_NOTE_LENGTH = 3

DEFAULT_SETS = 3

_RANGE_RE = re.compile(r'^(\d{1,6})-(\d{1,6})$')
_INT_RE = re.compile(r'^\d{1,6}$')
SETS_IN_REPS_PATTERN = re.compile(
    r'(?<!\d)(\d{1,6})\s*sets?\s*[x×]\s*(\d{1,6}(?:-\d{1,6})?)(?!\d)', re.IGNORECASE
)
REST_VALUE_PATTERN = re.compile(r'(?<!\d)(\d{1,6})\s*(seconds?|minutes?|secs?|mins?)\b', re.IGNORECASE)
_CLAUSE_BREAK_RE = re.compile(r'[!?,;]|\.(?!\d)')
_SPACE_BEFORE_PUNCT_RE = re.compile(r'\s+([,.;:!?])')
_EDGE_PUNCTUATION = ' ,.;:-!?'


def as_int(value: Any) -> Optional[int]:
    """Return value as int when it is an int or a short digit-only string"""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and _INT_RE.match(value.strip()):
        return int(value.strip())
    return None


def _tidy(text: str) -> str:
    """Collapse whitespace and trim punctuation left behind by span removal"""
    text = _SPACE_BEFORE_PUNCT_RE.sub(r'\1', collapse_whitespace(text))
    return text.strip(_EDGE_PUNCTUATION)


def _containing_clause(text: str, start: int, end: int) -> str:
    """Return the clause of text that contains the span [start, end)"""
    clause_start = 0
    for match in _CLAUSE_BREAK_RE.finditer(text):
        if match.end() <= start:
            clause_start = match.end()
        elif match.start() >= end:
            return text[clause_start:match.start()]
    return text[clause_start:]


def _add_note(notes: List[str], note: str) -> None:
    lowered = note.lower()
    if any(lowered in existing.lower() for existing in notes):
        return
    notes.append(note)


class ExerciseDataParser:
    """Pattern-driven parser for single exercise descriptions."""

    @staticmethod
    def _valid_fields(extracted: Dict[str, Any], pattern_name: str) -> Dict[str, Any]:
        """Drop extracted values that would violate ParsedExerciseData invariants."""
        fields = {}
        for key, value in extracted.items():
            if key == "sets" and value < 1:
                logger.debug(f"{pattern_name}: ignoring sets={value}")
                continue
            if key == "rest_period" and value < 0:
                logger.debug(f"{pattern_name}: ignoring rest_period={value}")
                continue
            if key == "reps":
                numeric = as_int(value)
                range_match = _RANGE_RE.match(value) if isinstance(value, str) else None
                if numeric is not None and numeric < 1:
                    logger.debug(f"{pattern_name}: ignoring reps={value}")
                    continue
                if range_match and int(range_match.group(1)) >= int(range_match.group(2)):
                    logger.debug(f"{pattern_name}: ignoring inverted rep range {value}")
                    continue
            fields[key] = value
        return fields

    @staticmethod
    def extract_notes(text: str, fields: Dict[str, Any], pattern_notes: Optional[str] = None) -> str:
        """
        Extract coaching notes from the original text.

        Leftover text (everything the patterns did not consume) comes first,
        followed by the clauses around instruction keywords. The qualifier
        captured by a pattern (e.g. "per arm") is used only when nothing else
        was found.
        """
        cleaned = clean_text(text)
        notes: List[str] = []

        if fields.get("sets") is not None or fields.get("reps") is not None:
            remaining = _tidy(strip_pattern_spans(cleaned))
            if len(remaining) > MIN_NOTE_LENGTH:
                notes.append(remaining)

        for keyword_match in find_instruction_keywords(cleaned):
            clause = _containing_clause(cleaned, keyword_match.start(), keyword_match.end())
            stripped = _tidy(strip_pattern_spans(clause))
            keyword = keyword_match.group(0)
            if keyword.lower() in stripped.lower():
                _add_note(notes, stripped)
            else:
                _add_note(notes, keyword)

        if not notes and pattern_notes:
            notes.append(pattern_notes)

        return ". ".join(notes).strip()

    @staticmethod
    def parse_exercise_text(text: Optional[str]) -> ParsingResult:
        """
        Parse exercise text and extract structured data.

        Exercise patterns are tried in table order. A field is written by the
        first pattern that yields it; a later pattern may only overwrite it
        with a strictly higher confidence, which the table order rules out,
        so in practice the first match wins per field. Rest patterns are
        independent and only the first match is used.

        Args:
            text: Raw exercise description

        Returns:
            ParsingResult with parsed fields, confidence and suggestions
        """
        if not text or not text.strip():
            return ParsingResult()

        original_text = text.strip()
        normalized = normalize_text(text)

        fields: Dict[str, Any] = {}
        field_confidence: Dict[str, float] = {}
        matched_patterns: List[PatternHit] = []
        contributing: List[float] = []

        for pattern_match in EXERCISE_PATTERNS:
            match = pattern_match.search(normalized)
            if not match:
                continue

            matched_patterns.append(PatternHit(name=pattern_match.name, confidence=pattern_match.confidence))
            extracted = ExerciseDataParser._valid_fields(pattern_match.parser(match), pattern_match.name)

            contributed = False
            for key, value in extracted.items():
                if key not in fields or pattern_match.confidence > field_confidence[key]:
                    fields[key] = value
                    field_confidence[key] = pattern_match.confidence
                    contributed = True

            if contributed:
                contributing.append(pattern_match.confidence)

            if pattern_match.confidence >= HIGH_CONFIDENCE_CUTOFF:
                break

        for rest_pattern in REST_PATTERNS:
            match = rest_pattern.search(normalized)
            if not match:
                continue
            extracted = ExerciseDataParser._valid_fields(rest_pattern.parser(match), rest_pattern.name)
            if "rest_period" in extracted:
                fields["rest_period"] = extracted["rest_period"]
                matched_patterns.append(PatternHit(name=rest_pattern.name, confidence=rest_pattern.confidence))
                contributing.append(rest_pattern.confidence)
                break

        pattern_notes = fields.pop("notes", None)
        notes = ExerciseDataParser.extract_notes(original_text, fields, pattern_notes)

        confidence = min(sum(contributing) / len(contributing), 1.0) if contributing else 0.0

        parsed = ParsedExerciseData(
            sets=fields.get("sets"),
            reps=fields.get("reps"),
            rest_period=fields.get("rest_period"),
            notes=notes or None,
            original_text=original_text,
            confidence=confidence,
        )

        suggestions = ExerciseDataParser.generate_suggestions(original_text, parsed)
        has_issues = confidence < REVIEW_CONFIDENCE_THRESHOLD or len(suggestions) > 0

        logger.debug(
            f"Parsed {original_text!r}: patterns={[hit.name for hit in matched_patterns]} "
            f"confidence={confidence:.2f} suggestions={len(suggestions)}"
        )

        return ParsingResult(
            parsed=parsed,
            confidence=confidence,
            matched_patterns=matched_patterns,
            suggestions=suggestions,
            has_issues=has_issues,
        )

    @staticmethod
    def generate_suggestions(original_text: str, parsed: ParsedExerciseData) -> List[FieldSuggestion]:
        """Generate suggestions for improving freshly parsed data"""
        suggestions: List[FieldSuggestion] = []
        normalized = normalize_text(original_text)
        numeric_reps = as_int(parsed.reps)

        # Sets unusually high with very low reps: probably swapped
        if parsed.sets and numeric_reps is not None:
            if parsed.sets > 20 and numeric_reps < 5:
                suggestions.append(FieldSuggestion(
                    field=SuggestionField.SETS,
                    current_value=parsed.sets,
                    suggested_value=numeric_reps,
                    confidence=0.8,
                    reason="Sets value seems unusually high, consider swapping with reps",
                    source=SuggestionSource.HEURISTIC_ANALYSIS,
                ))
                suggestions.append(FieldSuggestion(
                    field=SuggestionField.REPS,
                    current_value=parsed.reps,
                    suggested_value=parsed.sets,
                    confidence=0.8,
                    reason="Reps value seems unusually low, consider swapping with sets",
                    source=SuggestionSource.HEURISTIC_ANALYSIS,
                ))

        # Everything landed in reps
        sets_in_reps = None
        if not parsed.sets and isinstance(parsed.reps, str):
            sets_in_reps = SETS_IN_REPS_PATTERN.search(parsed.reps)
            if sets_in_reps:
                embedded_sets = int(sets_in_reps.group(1))
                if embedded_sets >= 1:
                    suggestions.append(FieldSuggestion(
                        field=SuggestionField.SETS,
                        current_value=parsed.sets,
                        suggested_value=embedded_sets,
                        confidence=0.9,
                        reason="Found sets information in reps field",
                        source=SuggestionSource.PATTERN_DETECTION,
                    ))
                suggestions.append(FieldSuggestion(
                    field=SuggestionField.REPS,
                    current_value=parsed.reps,
                    suggested_value=sets_in_reps.group(2),
                    confidence=0.9,
                    reason="Extract reps from combined sets/reps text",
                    source=SuggestionSource.PATTERN_DETECTION,
                ))

        # Reps without sets; AMRAP/max work is legitimately set-less
        if (
            not parsed.sets
            and parsed.reps
            and not sets_in_reps
            and 'amrap' not in normalized
            and 'max' not in normalized
        ):
            suggestions.append(FieldSuggestion(
                field=SuggestionField.SETS,
                current_value=parsed.sets,
                suggested_value=DEFAULT_SETS,
                confidence=0.6,
                reason="Most exercises have multiple sets, consider adding a sets value",
                source=SuggestionSource.DEFAULT_SUGGESTION,
            ))

        # Rest mentioned but no rest pattern matched
        if parsed.rest_period is None and any(word in normalized for word in ('rest', 'second', 'minute')):
            rest_match = REST_VALUE_PATTERN.search(normalized)
            if rest_match:
                value = int(rest_match.group(1))
                is_minutes = rest_match.group(2).startswith('min')
                suggestions.append(FieldSuggestion(
                    field=SuggestionField.REST_PERIOD,
                    current_value=None,
                    suggested_value=value * 60 if is_minutes else value,
                    confidence=0.7,
                    reason=f"Found rest period: {value} {'minutes' if is_minutes else 'seconds'}",
                    source=SuggestionSource.TEXT_ANALYSIS,
                ))

        return suggestions

    @staticmethod
    def format_parsed_data(parsed: ParsedExerciseData) -> str:
        """Render parsed data in canonical form, e.g. '4 sets × 8 reps, 1:00 rest, per arm'"""
        parts: List[str] = []

        if parsed.sets and parsed.reps:
            parts.append(f"{parsed.sets} sets × {parsed.reps} reps")
        elif parsed.sets:
            parts.append(f"{parsed.sets} sets")
        elif parsed.reps:
            parts.append(f"{parsed.reps} reps")

        if parsed.rest_period:
            if parsed.rest_period >= 60:
                minutes, seconds = divmod(parsed.rest_period, 60)
                parts.append(f"{minutes}:{seconds:02d} rest")
            else:
                parts.append(f"{parsed.rest_period}s rest")

        if parsed.notes:
            parts.append(parsed.notes)

        return ", ".join(parts)


parse_exercise_text = ExerciseDataParser.parse_exercise_text
generate_suggestions = ExerciseDataParser.generate_suggestions
format_parsed_data = ExerciseDataParser.format_parsed_data
