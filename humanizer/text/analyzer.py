"""Word, sentence and character statistics shared by every analysis step."""

import re
from dataclasses import dataclass
from typing import Dict, List, Optional

# Ideographs and kana are written without spaces between words, so each
# character is counted as one word.
LOGOGRAPHIC_PATTERN = re.compile(r"[\u3040-\u30ff\u3400-\u4dbf\u4e00-\u9fff\uf900-\ufaff]")
SENTENCE_BOUNDARY_PATTERN = re.compile(r"[.!?。！？]+")
WHITESPACE_PATTERN = re.compile(r"\s+")


def count_words(text: str) -> int:
    """Count words in text, treating each logographic character as a word.

    Args:
        text: The text to count words in

    Returns:
        Number of words (0 for empty or whitespace-only text)
    """
    stripped = text.strip()
    if not stripped:
        return 0

    logographs = LOGOGRAPHIC_PATTERN.findall(stripped)
    if not logographs:
        return len(WHITESPACE_PATTERN.split(stripped))

    remainder = LOGOGRAPHIC_PATTERN.sub(" ", stripped).strip()
    spaced = len(WHITESPACE_PATTERN.split(remainder)) if remainder else 0
    return len(logographs) + spaced


def split_sentences(text: str) -> List[str]:
    """Split text on terminal punctuation, dropping empty fragments.

    Args:
        text: The text to split

    Returns:
        List of trimmed sentence strings
    """
    fragments = SENTENCE_BOUNDARY_PATTERN.split(text)
    return [fragment.strip() for fragment in fragments if fragment.strip()]


@dataclass(frozen=True)
class TextStats:
    """Character, word and sentence counts for a piece of text."""

    char_count: int
    word_count: int
    sentence_count: int

    def to_dict(self) -> Dict[str, int]:
        """Convert stats to dictionary."""
        return {
            "chars": self.char_count,
            "words": self.word_count,
            "sentences": self.sentence_count,
        }


class TextAnalyzer:
    """Computes text statistics and sentence-length dispersion.

    Every property is computed on first access and cached, so an analyzer
    can be shared between the scorer and the suggestion builder without
    re-tokenising the text.
    """

    def __init__(self, text: str):
        """Initialize with text to analyze.

        Args:
            text: The text string to analyze
        """
        self.text = text
        self._word_count: Optional[int] = None
        self._sentences: Optional[List[str]] = None
        self._sentence_lengths: Optional[List[int]] = None

    @property
    def char_count(self) -> int:
        """Number of characters, whitespace included."""
        return len(self.text)

    @property
    def word_count(self) -> int:
        """Total number of words in the text."""
        if self._word_count is None:
            self._word_count = count_words(self.text)
        return self._word_count

    @property
    def sentences(self) -> List[str]:
        """List of sentences extracted from the text."""
        if self._sentences is None:
            self._sentences = split_sentences(self.text) if self.text.strip() else []
        return self._sentences

    @property
    def sentence_count(self) -> int:
        """Number of sentences in the text."""
        return len(self.sentences)

    @property
    def sentence_lengths(self) -> List[int]:
        """Word count of each sentence."""
        if self._sentence_lengths is None:
            self._sentence_lengths = [count_words(s) for s in self.sentences]
        return self._sentence_lengths

    @property
    def avg_sentence_length(self) -> float:
        """Mean words per sentence, 0.0 when there are no sentences."""
        lengths = self.sentence_lengths
        return sum(lengths) / (len(lengths) or 1)

    @property
    def sentence_length_variance(self) -> float:
        """Population variance of sentence lengths.

        Low values mean every sentence has nearly the same number of words,
        which the scorer treats as a sign of machine-generated prose.
        """
        lengths = self.sentence_lengths
        mean = self.avg_sentence_length
        return sum((length - mean) ** 2 for length in lengths) / (len(lengths) or 1)

    def stats(self) -> TextStats:
        """Collect the counts into a TextStats value."""
        return TextStats(
            char_count=self.char_count,
            word_count=self.word_count,
            sentence_count=self.sentence_count,
        )


def text_stats(text: str) -> TextStats:
    """Compute character, word and sentence counts for text."""
    return TextAnalyzer(text).stats()
