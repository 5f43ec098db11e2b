import random

import pytest

from humanizer.options import HumanizationLevel, WritingMode
from humanizer.rewrite.rules import (
    SYNONYM_PATTERNS,
    RewriteEngine,
    RewriteParameters,
    apply_contractions,
    humanize,
    insert_openers,
    substitute_words,
)
from humanizer.text.lexicon import GENERAL_FILLERS, PROFESSIONAL_TRANSITIONS

ALWAYS = RewriteParameters(light_probability=1.0, medium_probability=1.0, heavy_probability=1.0)
NEVER = RewriteParameters(light_probability=0.0, medium_probability=0.0, heavy_probability=0.0)

FORMAL_TEXT = " ".join(["We utilize the tools."] * 20)


class TestSubstitution:
    def test_heavy_replaces_more_than_light(self):
        rng = random.Random(123)
        patterns = SYNONYM_PATTERNS[WritingMode.GENERAL]
        light = sum(substitute_words(FORMAL_TEXT, patterns, 0.3, rng)[1] for _ in range(50))
        heavy = sum(substitute_words(FORMAL_TEXT, patterns, 0.9, rng)[1] for _ in range(50))
        assert light < heavy

    def test_engine_counts_follow_level(self):
        light = RewriteEngine(HumanizationLevel.LIGHT, rng=random.Random(5))
        heavy = RewriteEngine(HumanizationLevel.HEAVY, rng=random.Random(5))
        light_total = heavy_total = 0
        for _ in range(30):
            light.rewrite(FORMAL_TEXT)
            light_total += light.substitutions
            heavy.rewrite(FORMAL_TEXT)
            heavy_total += heavy.substitutions
        assert light_total < heavy_total

    def test_case_insensitive_whole_word(self):
        engine = RewriteEngine(HumanizationLevel.LIGHT, WritingMode.PROFESSIONAL, parameters=ALWAYS)
        assert engine.rewrite("Use USE use users") == "leverage leverage leverage users"

    def test_probability_zero_keeps_words(self):
        engine = RewriteEngine(HumanizationLevel.MEDIUM, WritingMode.PROFESSIONAL, parameters=NEVER)
        assert engine.rewrite("We need to fix this fast.") == "We need to fix this fast."
        assert engine.substitutions == 0

    def test_modes_use_different_tables(self):
        general = RewriteEngine(HumanizationLevel.LIGHT, WritingMode.GENERAL, parameters=ALWAYS)
        professional = RewriteEngine(HumanizationLevel.LIGHT, WritingMode.PROFESSIONAL, parameters=ALWAYS)
        assert general.rewrite("leverage") == "use"
        assert professional.rewrite("use") == "leverage"
        assert professional.rewrite("leverage") == "leverage"


class TestOpeners:
    def test_prefixes_long_chunks_only(self):
        text = "The first sentence is long. Short. The third sentence is long too."
        result = insert_openers(text, GENERAL_FILLERS, 1.0, 10, random.Random(0))
        chunks = result.split(". ")
        assert len(chunks) == 3
        assert any(chunks[0] == f"{f} the first sentence is long" for f in GENERAL_FILLERS)
        assert chunks[1] == "Short"
        assert any(chunks[2] == f"{f} the third sentence is long too." for f in GENERAL_FILLERS)

    def test_professional_threshold(self):
        text = "Tiny chunk. Short chunk here"
        result = insert_openers(text, PROFESSIONAL_TRANSITIONS, 1.0, 15, random.Random(0))
        chunks = result.split(". ")
        assert chunks[0] == "Tiny chunk"
        assert chunks[1].endswith("short chunk here")

    def test_light_and_medium_never_insert(self):
        text = "This sentence is long enough. So is this second sentence."
        for level in (HumanizationLevel.LIGHT, HumanizationLevel.MEDIUM):
            result = RewriteEngine(level, WritingMode.PROFESSIONAL, rng=random.Random(9), parameters=NEVER).rewrite(text)
            assert result == text


class TestContractions:
    def test_general_mode_contracts(self):
        text = "We are sure it is fine. They cannot go. Do not wait. This is not it."
        result = humanize(text, HumanizationLevel.LIGHT, WritingMode.GENERAL, rng=random.Random(1))
        assert result == "we're sure it's fine. They can't go. don't wait. This isn't it."

    def test_professional_mode_keeps_formal_constructions(self):
        engine = RewriteEngine(HumanizationLevel.LIGHT, WritingMode.PROFESSIONAL, parameters=NEVER)
        assert engine.rewrite("They are here and it is late.") == "They are here and it is late."

    def test_apply_contractions(self):
        assert apply_contractions("THEY ARE done") == "they're done"


class TestRewriteEngine:
    def test_seed_makes_rewrite_reproducible(self):
        text = "We utilize robust tools. Moreover, we obtain approximately ten results each day."
        first = humanize(text, HumanizationLevel.HEAVY, WritingMode.GENERAL, rng=random.Random(42))
        second = humanize(text, HumanizationLevel.HEAVY, WritingMode.GENERAL, rng=random.Random(42))
        assert first == second

    @pytest.mark.parametrize("level", ["Light", "Medium", "Heavy"])
    def test_accepts_string_options(self, level):
        engine = RewriteEngine(level, "Professional")
        assert engine.level == HumanizationLevel(level)
        assert engine.mode == WritingMode.PROFESSIONAL

    def test_empty_text(self):
        assert humanize("", HumanizationLevel.HEAVY) == ""
