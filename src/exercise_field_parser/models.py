"""
Exercise Parsing Models

Pydantic models shared by the parser, the field validator and the
suggestion applier. Confidence values are always fractions in [0, 1].
"""

from enum import Enum
from typing import Any, List, Optional, Union

from pydantic import BaseModel, Field, model_validator


RepsValue = Union[int, str]


class SuggestionField(str, Enum):
    """Exercise fields a suggestion can target"""
    SETS = "sets"
    REPS = "reps"
    REST_PERIOD = "rest_period"
    NOTES = "notes"


class SuggestionSource(str, Enum):
    """Heuristic that produced a suggestion"""
    HEURISTIC_ANALYSIS = "heuristic_analysis"
    PATTERN_DETECTION = "pattern_detection"
    FIELD_ANALYSIS = "field_analysis"
    SWAP_DETECTION = "swap_detection"
    NAME_ANALYSIS = "name_analysis"
    AUTO_PARSING = "auto_parsing"
    TEXT_ANALYSIS = "text_analysis"
    DEFAULT_SUGGESTION = "default_suggestion"


class ParsingStatus(str, Enum):
    """Provenance of an exercise's sets/reps/rest fields"""
    MANUAL = "manual"
    PARSED = "parsed"
    NEEDS_REVIEW = "needs_review"


class ParsedExerciseData(BaseModel):
    """Structured fields extracted from a single exercise description"""
    sets: Optional[int] = Field(default=None, ge=1)
    reps: Optional[RepsValue] = Field(default=None, description="Int or string to preserve ranges like '8-12'")
    rest_period: Optional[int] = Field(default=None, ge=0, description="Rest in seconds")
    notes: Optional[str] = None
    original_text: Optional[str] = None
    confidence: float = Field(default=0, ge=0, le=1)

    class Config:
        frozen = True


class PatternHit(BaseModel):
    """A pattern that matched during parsing"""
    name: str
    confidence: float = Field(..., ge=0, le=1)


class FieldSuggestion(BaseModel):
    """Proposed correction for one exercise field"""
    field: SuggestionField
    current_value: Optional[Any] = None
    suggested_value: Union[int, str]
    confidence: float = Field(..., ge=0, le=1)
    reason: str
    source: SuggestionSource

    @model_validator(mode="after")
    def _check_value_type(self) -> "FieldSuggestion":
        # sets and rest_period are integers, notes is text, reps may be either
        value = self.suggested_value
        if self.field in (SuggestionField.SETS, SuggestionField.REST_PERIOD):
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"{self.field.value} suggestion must be an integer")
        elif self.field == SuggestionField.NOTES and not isinstance(value, str):
            raise ValueError("notes suggestion must be a string")
        return self


class Exercise(BaseModel):
    """
    Exercise record owned by the workout editor.

    Intentionally lenient: out-of-range values are reported by the
    validator as issues instead of failing construction.
    """
    id: Union[str, int]
    name: str = ""
    sets: Optional[int] = None
    reps: Optional[RepsValue] = None
    rest_period: Optional[int] = None
    notes: Optional[str] = None
    original_description: Optional[str] = None
    parsing_status: Optional[ParsingStatus] = None
    parsing_confidence: Optional[float] = Field(default=None, ge=0, le=1)

    class Config:
        extra = "ignore"  # Ignore UI-only fields like 'isExpanded'


class ParsingResult(BaseModel):
    """Result of parsing one exercise description"""
    parsed: ParsedExerciseData = Field(default_factory=ParsedExerciseData)
    confidence: float = Field(default=0, ge=0, le=1)
    matched_patterns: List[PatternHit] = Field(default_factory=list)
    suggestions: List[FieldSuggestion] = Field(default_factory=list)
    has_issues: bool = False


class FieldValidationResult(BaseModel):
    """Result of validating a stored exercise"""
    is_valid: bool = True
    has_warnings: bool = False
    suggestions: List[FieldSuggestion] = Field(default_factory=list)
    issues: List[str] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)
    confidence: float = Field(default=1.0, ge=0, le=1)

    @property
    def needs_review(self) -> bool:
        """Same threshold the parser uses for has_issues"""
        return not self.is_valid or bool(self.suggestions) or self.confidence < 0.7


class ParsedDataValidation(BaseModel):
    """Sanity check of freshly parsed data"""
    is_valid: bool = True
    issues: List[str] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)
