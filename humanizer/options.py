"""Caller-selected options shared by the rewrite engine and the model prompts."""

from enum import Enum


class HumanizationLevel(str, Enum):
    """How aggressively text is rewritten."""

    LIGHT = "Light"
    MEDIUM = "Medium"
    HEAVY = "Heavy"


class WritingMode(str, Enum):
    """Target register of the rewrite."""

    GENERAL = "General"
    PROFESSIONAL = "Professional"


class LengthMode(str, Enum):
    """Length constraint passed to a generative rewrite."""

    SHORTEN = "Shorten"
    ORIGINAL = "Original"
    EXPANSION = "Expansion"


class EmotionIntensity(str, Enum):
    """Emotional tone requested from a generative rewrite."""

    NEUTRAL = "Neutral"
    MOODY = "Moody"
    PASSIONATE = "Passionate"
