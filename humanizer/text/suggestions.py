"""Ranked improvement hints derived from an analysis."""

import random
from typing import Iterable, List, Optional, Tuple

from humanizer.text.lexicon import (
    GENERAL_SUGGESTIONS,
    LONG_SENTENCE_SUGGESTION,
    SHORT_TEXT_SUGGESTION,
    TRIGGER_SUGGESTIONS,
    VARIANCE_SUGGESTION,
)

MAX_SUGGESTIONS = 5
VARIANCE_HINT_THRESHOLD = 15
LONG_SENTENCE_THRESHOLD = 25
SHORT_TEXT_THRESHOLD = 20


def build_suggestions(
    flagged_phrases: Iterable,
    avg_len: float,
    variance: float,
    word_count: int,
    rng: Optional[random.Random] = None,
) -> Tuple[str, ...]:
    """Build at most five unique suggestions, most specific first.

    Trigger-specific advice comes first, then hints about sentence structure
    and text length, then generic style advice drawn at random until five
    suggestions are collected.

    Args:
        flagged_phrases: FlaggedPhrase objects (or plain strings) in scan order
        avg_len: Mean words per sentence
        variance: Sentence-length variance
        word_count: Total words in the text
        rng: Random source for the generic backfill

    Returns:
        Tuple of suggestion strings
    """
    suggestions: List[str] = []

    def add(suggestion: Optional[str]) -> None:
        if suggestion and suggestion not in suggestions and len(suggestions) < MAX_SUGGESTIONS:
            suggestions.append(suggestion)

    for flagged in flagged_phrases:
        phrase = getattr(flagged, "phrase", flagged)
        add(TRIGGER_SUGGESTIONS.get(phrase.lower()))

    if variance < VARIANCE_HINT_THRESHOLD:
        add(VARIANCE_SUGGESTION)
    if avg_len > LONG_SENTENCE_THRESHOLD:
        add(LONG_SENTENCE_SUGGESTION)
    if word_count < SHORT_TEXT_THRESHOLD:
        add(SHORT_TEXT_SUGGESTION)

    if len(suggestions) < MAX_SUGGESTIONS:
        pool = list(GENERAL_SUGGESTIONS)
        (rng or random.Random()).shuffle(pool)
        for suggestion in pool:
            if len(suggestions) >= MAX_SUGGESTIONS:
                break
            add(suggestion)

    return tuple(suggestions)
