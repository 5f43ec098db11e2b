"""Humanizer: offline heuristics for scoring and rewriting AI-sounding text.

Typical use::

    import random
    from humanizer import analyze, humanize, render_changes, HumanizationLevel

    result = analyze(text)
    rewritten = humanize(text, HumanizationLevel.HEAVY, rng=random.Random(7))
    changes = render_changes(text, rewritten)

Scoring and rewriting are independent; the caller decides whether to score
the original, the rewrite, or both.
"""

from humanizer.options import EmotionIntensity, HumanizationLevel, LengthMode, WritingMode
from humanizer.rewrite.diff import DiffSegment, SegmentKind, render_changes
from humanizer.rewrite.rules import RewriteEngine, humanize
from humanizer.text.analyzer import TextAnalyzer, TextStats, text_stats
from humanizer.text.diagnosis import AnalysisResult, FlaggedPhrase, ScoringParameters, analyze

__version__ = "0.1.0"

__all__ = [
    "AnalysisResult",
    "DiffSegment",
    "EmotionIntensity",
    "FlaggedPhrase",
    "HumanizationLevel",
    "LengthMode",
    "RewriteEngine",
    "ScoringParameters",
    "SegmentKind",
    "TextAnalyzer",
    "TextStats",
    "WritingMode",
    "analyze",
    "humanize",
    "render_changes",
    "text_stats",
]
