"""
Exercise Parsing Patterns

Ordered regex tables for extracting sets/reps and rest periods from
AI-generated exercise descriptions.

Both tables are sorted most-specific first. The parser relies on that order:
a fully qualified phrase ("4 sets x 8 reps per arm") has to be claimed by the
detailed pattern before "8 reps" can be picked up by a weaker one.
"""

import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple

# A number that does not start inside a larger number, decimal or range.
# Numbers are capped at six digits; longer runs are not exercise data.
_NUM = r'(?<![\d.-])'
_RANGE = r'(\d{1,6}(?:\s*-\s*\d{1,6})?)'
_REPS_WORD = r'(?:repetitions?|reps?)\b'
_SECONDS_WORD = r'(?:seconds?|secs?)\b'
_MINUTES_WORD = r'(?:minutes?|mins?)\b'
_REST_LEAD = r'(?P<lead>\brest:?\s+)?'
_REST_TAIL = r'(?:\s+rest\b)?'


def _rest_unit(word: str, letter: str) -> str:
    """
    Unit alternation for a rest pattern.

    A bare letter ("60s", "2m") only counts next to the word rest, so
    "400m run" or "10m sprint" is not read as a rest period.
    """
    return r'(?:' + word + r'|' + letter + r'\b(?(lead)|(?=\s+rest\b)))'


@dataclass(frozen=True)
class PatternMatch:
    """A compiled pattern with its confidence and field extractor"""
    pattern: re.Pattern
    name: str
    confidence: float
    parser: Callable[[re.Match], Dict[str, Any]]

    def search(self, text: str) -> Optional[re.Match]:
        return self.pattern.search(text)


def _compile(regex: str) -> re.Pattern:
    return re.compile(regex, re.IGNORECASE)


def _reps_text(raw: str) -> str:
    """'8 - 12' -> '8-12'"""
    return re.sub(r'\s+', '', raw)


def _sets_and_reps(match: re.Match) -> Dict[str, Any]:
    return {"sets": int(match.group(1)), "reps": _reps_text(match.group(2))}


def _detailed(match: re.Match) -> Dict[str, Any]:
    result = _sets_and_reps(match)
    if match.group(3):
        result["notes"] = match.group(3)
    return result


def _rounds(match: re.Match) -> Dict[str, Any]:
    return {"sets": int(match.group(1)), "reps": int(match.group(2))}


def _sets_only(match: re.Match) -> Dict[str, Any]:
    return {"sets": int(match.group(1))}


def _reps_only(match: re.Match) -> Dict[str, Any]:
    return {"reps": _reps_text(match.group(1))}


def _round_half_up(value: float) -> int:
    return int(value + 0.5)


def _rest_seconds(match: re.Match) -> Dict[str, Any]:
    return {"rest_period": int(match.group("value"))}


def _rest_minutes(match: re.Match) -> Dict[str, Any]:
    return {"rest_period": _round_half_up(float(match.group("value")) * 60)}


def _rest_range(match: re.Match) -> Dict[str, Any]:
    low, high = int(match.group(1)), int(match.group(2))
    return {"rest_period": _round_half_up((low + high) / 2)}


EXERCISE_PATTERNS: Tuple[PatternMatch, ...] = (
    # "4 sets x 8 reps per arm"
    PatternMatch(
        pattern=_compile(
            _NUM + r'(\d{1,6})\s*sets?\s*[x×]\s*' + _RANGE + r'\s*' + _REPS_WORD
            + r'(?:\s+(per\s+\w+))?'
        ),
        name="SETS_X_REPS_DETAILED",
        confidence=0.95,
        parser=_detailed,
    ),
    # "3 sets of 8-12 reps"
    PatternMatch(
        pattern=_compile(_NUM + r'(\d{1,6})\s*sets?\s+of\s+' + _RANGE + r'\s*' + _REPS_WORD),
        name="SETS_OF_REPS",
        confidence=0.90,
        parser=_sets_and_reps,
    ),
    # "Perform 4 rounds of 8 repetitions"
    PatternMatch(
        pattern=_compile(
            r'(?:perform\s+)?' + _NUM + r'(\d{1,6})\s*(?:rounds?|circuits?)\s+of\s+(\d{1,6})\s*' + _REPS_WORD
        ),
        name="ROUNDS_FORMAT",
        confidence=0.85,
        parser=_rounds,
    ),
    # "3x12", "3 × 8-10" (whole text only, too ambiguous inside a sentence)
    PatternMatch(
        pattern=_compile(r'^(\d{1,6})\s*[x×]\s*' + _RANGE + r'$'),
        name="SHORT_FORMAT",
        confidence=0.80,
        parser=_sets_and_reps,
    ),
    # "Do 4 sets, 8-12 reps each"
    PatternMatch(
        pattern=_compile(
            r'(?:do\s+)?' + _NUM + r'(\d{1,6})\s*sets?\s*,\s*' + _RANGE + r'\s*' + _REPS_WORD + r'\s+each\b'
        ),
        name="SETS_COMMA_REPS",
        confidence=0.75,
        parser=_sets_and_reps,
    ),
    # "4 sets"
    PatternMatch(
        pattern=_compile(_NUM + r'(\d{1,6})\s*sets?\b(?!\s*(?:[x×]|of\b))'),
        name="SETS_ONLY",
        confidence=0.60,
        parser=_sets_only,
    ),
    # "8-12 reps"
    PatternMatch(
        pattern=_compile(_NUM + _RANGE + r'\s*' + _REPS_WORD),
        name="REPS_ONLY",
        confidence=0.60,
        parser=_reps_only,
    ),
)

REST_PATTERNS: Tuple[PatternMatch, ...] = (
    # "Rest 60 seconds", "60s rest"
    PatternMatch(
        pattern=_compile(
            _REST_LEAD + _NUM + r'(?P<value>\d{1,6})\s*' + _rest_unit(_SECONDS_WORD, 's') + _REST_TAIL
        ),
        name="REST_SECONDS",
        confidence=0.90,
        parser=_rest_seconds,
    ),
    # "1 minute rest", "rest 1.5 min", "2m rest"
    PatternMatch(
        pattern=_compile(
            _REST_LEAD + _NUM + r'(?P<value>\d{1,6}(?:\.\d{1,6})?)\s*' + _rest_unit(_MINUTES_WORD, 'm') + _REST_TAIL
        ),
        name="REST_MINUTES",
        confidence=0.85,
        parser=_rest_minutes,
    ),
    # "30-60 seconds rest"
    PatternMatch(
        pattern=_compile(_NUM + r'(\d{1,6})\s*-\s*(\d{1,6})\s*(?:' + _SECONDS_WORD + r'|s\b)\s*rest\b'),
        name="REST_RANGE",
        confidence=0.70,
        parser=_rest_range,
    ),
)

# Phrases that carry coaching instructions worth keeping as notes
INSTRUCTION_KEYWORDS: Tuple[str, ...] = (
    'per arm', 'per leg', 'per side', 'each arm', 'each leg', 'each side',
    'alternating', 'hold', 'pause', 'slow', 'controlled', 'explosive',
    'tempo', 'form', 'technique', 'focus on', 'keep', 'maintain',
    'squeeze', 'contract', 'stretch', 'full range', 'partial',
    'isometric', 'static', 'dynamic', 'pulsing', 'drop set',
    'superset', 'circuit', 'AMRAP', 'EMOM', 'tabata',
)

_KEYWORD_PATTERNS: Tuple[Tuple[str, re.Pattern], ...] = tuple(
    (keyword, _compile(r'\b' + r'\s+'.join(re.escape(w) for w in keyword.split()) + r'\b'))
    for keyword in INSTRUCTION_KEYWORDS
)


def find_instruction_keywords(text: str) -> List[re.Match]:
    """Return the first occurrence of every instruction keyword, in table order"""
    matches = []
    for _, pattern in _KEYWORD_PATTERNS:
        match = pattern.search(text)
        if match:
            matches.append(match)
    return matches


def strip_pattern_spans(text: str) -> str:
    """Remove the first match of every exercise and rest pattern from text"""
    for pattern_match in EXERCISE_PATTERNS + REST_PATTERNS:
        text = pattern_match.pattern.sub('', text, count=1)
    return text
