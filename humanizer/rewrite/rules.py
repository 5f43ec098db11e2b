"""Randomised lexical rewrite engine.

This module implements the heuristic rewrite used when no generative model
is available: dictionary-driven synonym substitution, filler or transition
phrases inserted at sentence starts, and contraction folding. Every random
choice is drawn from an injected ``random.Random`` so that a fixed seed
reproduces a rewrite exactly.
"""

import logging
import random
import re
from dataclasses import dataclass
from typing import List, Mapping, Optional, Pattern, Sequence, Tuple

from humanizer.options import HumanizationLevel, WritingMode
from humanizer.text.lexicon import (
    CONTRACTIONS,
    GENERAL_FILLERS,
    GENERAL_SYNONYMS,
    PROFESSIONAL_SYNONYMS,
    PROFESSIONAL_TRANSITIONS,
)

logger = logging.getLogger(__name__)

SENTENCE_JOINER = ". "


def _whole_word(term: str) -> Pattern[str]:
    return re.compile(r"\b" + re.escape(term) + r"\b", re.IGNORECASE)


def _compile_dictionary(dictionary: Mapping[str, str]) -> Tuple[Tuple[Pattern[str], str], ...]:
    return tuple((_whole_word(source), target) for source, target in dictionary.items())


SYNONYM_PATTERNS = {
    WritingMode.GENERAL: _compile_dictionary(GENERAL_SYNONYMS),
    WritingMode.PROFESSIONAL: _compile_dictionary(PROFESSIONAL_SYNONYMS),
}

CONTRACTION_PATTERNS = tuple(
    (_whole_word(phrase), contraction) for phrase, contraction in CONTRACTIONS
)


@dataclass(frozen=True)
class RewriteParameters:
    """Probabilities and thresholds used by the rewrite engine."""

    light_probability: float = 0.3
    medium_probability: float = 0.6
    heavy_probability: float = 0.9

    general_insertion_probability: float = 0.25
    general_min_chunk_length: int = 10
    professional_insertion_probability: float = 0.2
    professional_min_chunk_length: int = 15

    def replacement_probability(self, level: HumanizationLevel) -> float:
        return {
            HumanizationLevel.LIGHT: self.light_probability,
            HumanizationLevel.MEDIUM: self.medium_probability,
            HumanizationLevel.HEAVY: self.heavy_probability,
        }[level]

    def insertion_rule(self, mode: WritingMode) -> Tuple[float, int, Sequence[str]]:
        """Return (probability, minimum chunk length, phrase pool) for mode."""
        if mode == WritingMode.PROFESSIONAL:
            return (
                self.professional_insertion_probability,
                self.professional_min_chunk_length,
                PROFESSIONAL_TRANSITIONS,
            )
        return (
            self.general_insertion_probability,
            self.general_min_chunk_length,
            GENERAL_FILLERS,
        )


DEFAULT_PARAMETERS = RewriteParameters()


def substitute_words(
    text: str,
    patterns: Sequence[Tuple[Pattern[str], str]],
    probability: float,
    rng: random.Random,
) -> Tuple[str, int]:
    """Replace dictionary words, deciding each occurrence independently.

    Args:
        text: The text to rewrite
        patterns: Compiled (whole-word pattern, replacement) pairs
        probability: Chance that a single occurrence is replaced
        rng: Random source

    Returns:
        Tuple of (rewritten text, number of occurrences replaced)
    """
    replaced = 0

    def maybe_replace(match: "re.Match[str]") -> str:
        nonlocal replaced
        if rng.random() < probability:
            replaced += 1
            return target
        return match.group(0)

    for pattern, target in patterns:
        text = pattern.sub(maybe_replace, text)

    return text, replaced


def insert_openers(
    text: str,
    phrases: Sequence[str],
    probability: float,
    min_length: int,
    rng: random.Random,
) -> str:
    """Prefix some sentence chunks with a filler or transition phrase.

    Text is split on ". " rather than on full sentence boundaries, so only
    chunks following a period and a space are candidates besides the first.

    Args:
        text: The text to rewrite
        phrases: Pool of opener phrases
        probability: Chance that an eligible chunk gets an opener
        min_length: Chunks this long or shorter are left alone
        rng: Random source

    Returns:
        Rewritten text
    """
    chunks: List[str] = []
    for chunk in text.split(SENTENCE_JOINER):
        if len(chunk) > min_length and rng.random() < probability:
            opener = rng.choice(phrases)
            chunk = f"{opener} {chunk[0].lower()}{chunk[1:]}"
        chunks.append(chunk)
    return SENTENCE_JOINER.join(chunks)


def apply_contractions(text: str) -> str:
    """Fold formal constructions such as "do not" into contractions."""
    for pattern, contraction in CONTRACTION_PATTERNS:
        text = pattern.sub(contraction, text)
    return text


class RewriteEngine:
    """Rewrites text toward a more natural register.

    The engine never calls the scorer; callers that want a before/after
    comparison run the analysis themselves.
    """

    def __init__(
        self,
        level: HumanizationLevel = HumanizationLevel.MEDIUM,
        mode: WritingMode = WritingMode.GENERAL,
        rng: Optional[random.Random] = None,
        parameters: Optional[RewriteParameters] = None,
    ):
        """Initialize the engine.

        Args:
            level: Rewrite intensity
            mode: Target register, selects the synonym table
            rng: Random source, a fresh unseeded generator when omitted
            parameters: Probabilities and thresholds
        """
        self.level = HumanizationLevel(level)
        self.mode = WritingMode(mode)
        self.rng = rng or random.Random()
        self.parameters = parameters or DEFAULT_PARAMETERS
        self.substitutions = 0

    def rewrite(self, text: str) -> str:
        """Apply every rule enabled by the engine's level and mode.

        Args:
            text: Raw text

        Returns:
            Rewritten text
        """
        probability = self.parameters.replacement_probability(self.level)
        result, self.substitutions = substitute_words(
            text, SYNONYM_PATTERNS[self.mode], probability, self.rng
        )

        if self.level == HumanizationLevel.HEAVY:
            insertion_probability, min_length, phrases = self.parameters.insertion_rule(self.mode)
            result = insert_openers(result, phrases, insertion_probability, min_length, self.rng)

        if self.mode == WritingMode.GENERAL:
            result = apply_contractions(result)

        logger.debug(
            "Rewrote %d chars at %s/%s with %d substitutions",
            len(text),
            self.level.value,
            self.mode.value,
            self.substitutions,
        )
        return result


def humanize(
    text: str,
    level: HumanizationLevel = HumanizationLevel.MEDIUM,
    mode: WritingMode = WritingMode.GENERAL,
    rng: Optional[random.Random] = None,
) -> str:
    """Rewrite text toward a more natural, human-sounding register."""
    return RewriteEngine(level, mode, rng=rng).rewrite(text)
