"""AI-likelihood and readability scoring.

The score combines two signals: how densely the text uses vocabulary that is
typical of machine-generated prose, and how uniform its sentence lengths are.
Neither is a trained classifier; the weights below are empirical.
"""

import logging
import math
import random
import re
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from humanizer.text.analyzer import TextAnalyzer
from humanizer.text.lexicon import AI_TRIGGER_WORDS
from humanizer.text.suggestions import build_suggestions

logger = logging.getLogger(__name__)

TRIGGER_REASON = "Commonly overused by AI-generated text."

TRIGGER_PATTERNS = tuple(
    (word, re.compile(r"\b" + re.escape(word) + r"\b", re.IGNORECASE))
    for word in AI_TRIGGER_WORDS
)


@dataclass(frozen=True)
class ScoringParameters:
    """Weights and thresholds used by the scorer."""

    trigger_weight: float = 15.0
    density_weight: float = 1000.0

    # Sentence-length variance bands, checked from most uniform upwards.
    robotic_variance: float = 5.0
    robotic_adjustment: float = 30.0
    uniform_variance: float = 12.0
    uniform_adjustment: float = 15.0
    human_variance: float = 50.0
    human_adjustment: float = -20.0
    humanish_variance: float = 35.0
    humanish_adjustment: float = -10.0

    short_text_word_count: int = 30
    score_min: int = 5
    score_max: int = 99

    readability_sentence_weight: float = 2.0
    readability_min: int = 10
    readability_max: int = 100


DEFAULT_PARAMETERS = ScoringParameters()


@dataclass(frozen=True)
class FlaggedPhrase:
    """A trigger term found in the text."""

    phrase: str
    reason: str = TRIGGER_REASON

    def to_dict(self) -> Dict[str, str]:
        return {"phrase": self.phrase, "reason": self.reason}


@dataclass(frozen=True)
class AnalysisResult:
    """Structured result of a single analysis call."""

    ai_score: int
    readability_score: int
    word_count: int
    sentence_count: int
    suggestions: Tuple[str, ...] = ()
    flagged_phrases: Tuple[FlaggedPhrase, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        """Convert analysis result to dictionary with camelCase keys."""
        return {
            "aiScore": self.ai_score,
            "readabilityScore": self.readability_score,
            "wordCount": self.word_count,
            "sentenceCount": self.sentence_count,
            "suggestions": list(self.suggestions),
            "flaggedPhrases": [phrase.to_dict() for phrase in self.flagged_phrases],
        }


EMPTY_RESULT = AnalysisResult(
    ai_score=0,
    readability_score=100,
    word_count=0,
    sentence_count=0,
)


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going towards +inf."""
    return int(math.floor(value + 0.5))


def clamp(value: float, lower: float, upper: float) -> float:
    return min(max(value, lower), upper)


def find_triggers(text: str) -> Tuple[int, List[FlaggedPhrase]]:
    """Scan text for trigger terms.

    Args:
        text: The text to scan

    Returns:
        Tuple of (total occurrences, one FlaggedPhrase per distinct term)
    """
    total = 0
    flagged: List[FlaggedPhrase] = []
    for word, pattern in TRIGGER_PATTERNS:
        hits = len(pattern.findall(text))
        if hits:
            total += hits
            flagged.append(FlaggedPhrase(phrase=word))
    return total, flagged


class TextDiagnosis:
    """Scores a text for AI-likelihood and readability.

    Uses a TextAnalyzer instance for counts and sentence-length dispersion.
    """

    def __init__(
        self,
        analyzer: TextAnalyzer,
        parameters: Optional[ScoringParameters] = None,
        rng: Optional[random.Random] = None,
    ):
        """Initialize with a TextAnalyzer instance.

        Args:
            analyzer: TextAnalyzer instance providing text metrics
            parameters: Scoring weights, DEFAULT_PARAMETERS when omitted
            rng: Random source for the generic suggestion backfill
        """
        self.analyzer = analyzer
        self.parameters = parameters or DEFAULT_PARAMETERS
        self.rng = rng

    def _variance_adjustment(self, variance: float) -> float:
        p = self.parameters
        if variance < p.robotic_variance:
            return p.robotic_adjustment
        elif variance < p.uniform_variance:
            return p.uniform_adjustment
        elif variance > p.human_variance:
            return p.human_adjustment
        elif variance > p.humanish_variance:
            return p.humanish_adjustment
        return 0.0

    def ai_score(self, trigger_count: int) -> int:
        """Compute the 0-99 AI-likelihood score.

        Args:
            trigger_count: Total trigger occurrences in the text

        Returns:
            Score clamped to [score_min, score_max], or 0 when the text is
            too short to judge and has no triggers
        """
        p = self.parameters
        word_count = self.analyzer.word_count

        raw = trigger_count * p.trigger_weight
        raw += (trigger_count / word_count) * p.density_weight
        raw += self._variance_adjustment(self.analyzer.sentence_length_variance)

        if word_count < p.short_text_word_count and trigger_count == 0:
            return 0

        return int(clamp(round_half_up(raw), p.score_min, p.score_max))

    def readability_score(self) -> int:
        p = self.parameters
        raw = 100 - self.analyzer.avg_sentence_length * p.readability_sentence_weight
        return round_half_up(clamp(raw, p.readability_min, p.readability_max))

    def diagnose(self, with_suggestions: bool = True) -> AnalysisResult:
        """Generate the analysis result for the analyzed text.

        Args:
            with_suggestions: Build the suggestion list. Batch scoring turns
                this off since the generic backfill is random.

        Returns:
            AnalysisResult, EMPTY_RESULT when the text has no words
        """
        analyzer = self.analyzer
        if analyzer.word_count == 0:
            return EMPTY_RESULT

        trigger_count, flagged = find_triggers(analyzer.text)
        ai_score = self.ai_score(trigger_count)
        suggestions: Tuple[str, ...] = ()
        if with_suggestions:
            suggestions = build_suggestions(
                flagged,
                analyzer.avg_sentence_length,
                analyzer.sentence_length_variance,
                analyzer.word_count,
                rng=self.rng,
            )

        logger.debug(
            "Scored %d words: %d triggers, variance %.2f, ai_score %d",
            analyzer.word_count,
            trigger_count,
            analyzer.sentence_length_variance,
            ai_score,
        )

        return AnalysisResult(
            ai_score=ai_score,
            readability_score=self.readability_score(),
            word_count=analyzer.word_count,
            sentence_count=analyzer.sentence_count,
            suggestions=suggestions,
            flagged_phrases=tuple(flagged),
        )


def analyze(
    text: str,
    parameters: Optional[ScoringParameters] = None,
    rng: Optional[random.Random] = None,
) -> AnalysisResult:
    """Analyze text for AI-likelihood, readability and improvement hints.

    Args:
        text: Raw text to analyze
        parameters: Optional scoring weights
        rng: Optional random source, seed it for reproducible suggestions

    Returns:
        AnalysisResult for the text
    """
    return TextDiagnosis(TextAnalyzer(text), parameters=parameters, rng=rng).diagnose()
