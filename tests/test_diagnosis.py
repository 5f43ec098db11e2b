import random

import pytest

from humanizer.text.analyzer import TextAnalyzer
from humanizer.text.diagnosis import (
    AnalysisResult,
    ScoringParameters,
    TextDiagnosis,
    TRIGGER_REASON,
    analyze,
    find_triggers,
    round_half_up,
)

UNIFORM_TEXT = " ".join(["The cat sat right here."] * 6)

HIGH_VARIANCE_TEXT = (
    "Stop now. Go home. Eat food. "
    "We spent the whole afternoon walking along the river talking about old friends "
    "and the strange robust little boat that once carried our family across the water "
    "every single summer."
)

# Sentence lengths 2, 8, 2, 8, 2, 8: variance 9, 30 words, no triggers.
UNIFORM_BAND_TEXT = " ".join(["Go now.", "We walked to the old shop for bread."] * 3)

# Sentence lengths 4, 16, 4, 16: variance 36, 40 words, one trigger.
HUMANISH_BAND_TEXT = (
    "Go home right now. "
    "We spent the robust afternoon walking by the river and talking about old friends there today. "
    "Then we ate dinner. "
    "They sat on the porch and watched the rain fall over the quiet hills until dark."
)

SAMPLE_TEXTS = [
    "",
    "Hi.",
    "We must leverage this opportunity.",
    UNIFORM_TEXT,
    HIGH_VARIANCE_TEXT,
    "Moreover, the paradigm is robust. Furthermore, it is crucial. " * 10,
    "一个句子。另一个句子！",
]


class TestEmptyInput:
    @pytest.mark.parametrize("text", ["", "   ", "\n\t"])
    def test_returns_neutral_result(self, text):
        result = analyze(text)
        assert result.ai_score == 0
        assert result.readability_score == 100
        assert result.word_count == 0
        assert result.sentence_count == 0
        assert result.suggestions == ()
        assert result.flagged_phrases == ()


class TestTriggers:
    def test_single_trigger_is_flagged(self):
        result = analyze("We must leverage this opportunity.")
        assert [p.phrase for p in result.flagged_phrases] == ["leverage"]
        assert result.flagged_phrases[0].reason == TRIGGER_REASON

    def test_repeated_trigger_counts_each_hit_but_flags_once(self):
        count, flagged = find_triggers("Leverage leverage LEVERAGE.")
        assert count == 3
        assert [p.phrase for p in flagged] == ["leverage"]

    def test_whole_word_only(self):
        count, flagged = find_triggers("The company utilized its leverageable assets.")
        assert count == 0
        assert flagged == []

    def test_trigger_heavy_sentence_scores_high(self):
        text = "The company utilized a comprehensive approach to delve into the paramount issue."
        result = analyze(text)
        phrases = {p.phrase for p in result.flagged_phrases}
        assert {"comprehensive", "delve", "paramount"} <= phrases
        assert result.ai_score >= 40

        plain = analyze("The company used a simple approach to look into the main issue here.")
        assert plain.ai_score < result.ai_score


class TestAiScore:
    def test_short_text_without_triggers_is_zero(self):
        assert analyze("The cat sat on the mat.").ai_score == 0

    def test_uniform_sentences_add_robotic_bonus(self):
        result = analyze(UNIFORM_TEXT)
        assert result.word_count == 30
        assert result.ai_score == 30

    def test_high_variance_offsets_trigger(self):
        result = analyze(HIGH_VARIANCE_TEXT)
        assert result.word_count == 36
        assert [p.phrase for p in result.flagged_phrases] == ["robust"]
        assert result.ai_score == 23
        assert result.readability_score == 82

    def test_uniform_band_adjustment(self):
        analyzer = TextAnalyzer(UNIFORM_BAND_TEXT)
        assert analyzer.sentence_lengths == [2, 8, 2, 8, 2, 8]
        assert analyzer.sentence_length_variance == 9
        assert analyze(UNIFORM_BAND_TEXT).ai_score == 15

    def test_humanish_band_adjustment(self):
        analyzer = TextAnalyzer(HUMANISH_BAND_TEXT)
        assert analyzer.sentence_lengths == [4, 16, 4, 16]
        assert analyzer.sentence_length_variance == 36
        result = analyze(HUMANISH_BAND_TEXT)
        assert [p.phrase for p in result.flagged_phrases] == ["robust"]
        # 1 * 15 + 1 / 40 * 1000 - 10
        assert result.ai_score == 30

    @pytest.mark.parametrize(
        "variance, adjustment",
        [
            (0.0, 30),
            (4.99, 30),
            (5.0, 15),
            (11.99, 15),
            (12.0, 0),
            (35.0, 0),
            (35.01, -10),
            (50.0, -10),
            (50.01, -20),
        ],
    )
    def test_variance_band_boundaries(self, variance, adjustment):
        diagnosis = TextDiagnosis(TextAnalyzer(""))
        assert diagnosis._variance_adjustment(variance) == adjustment

    def test_negative_raw_score_clamps_to_floor(self):
        long_sentence = " ".join(["word"] * 197 + ["robust"]) + "."
        result = analyze("Stop now. " + long_sentence)
        assert result.word_count == 200
        assert result.ai_score == 5

    def test_score_is_capped(self):
        assert analyze("We must leverage this opportunity.").ai_score == 99

    def test_custom_parameters(self):
        params = ScoringParameters(robotic_adjustment=0.0)
        assert analyze(UNIFORM_TEXT, parameters=params).ai_score == 5

    @pytest.mark.parametrize("text", SAMPLE_TEXTS)
    def test_score_range(self, text):
        result = analyze(text)
        if result.word_count == 0:
            assert result.ai_score == 0
        else:
            assert result.ai_score == 0 or 5 <= result.ai_score <= 99


class TestReadability:
    def test_long_sentence_floors_at_ten(self):
        text = " ".join(["word"] * 60)
        assert analyze(text).readability_score == 10

    @pytest.mark.parametrize("text", SAMPLE_TEXTS)
    def test_readability_range(self, text):
        assert 10 <= analyze(text).readability_score <= 100


class TestResult:
    @pytest.mark.parametrize("text", SAMPLE_TEXTS)
    def test_suggestions_are_bounded_and_unique(self, text):
        suggestions = analyze(text, rng=random.Random(3)).suggestions
        assert len(suggestions) <= 5
        assert len(suggestions) == len(set(suggestions))

    def test_seeded_suggestions_are_reproducible(self):
        first = analyze(UNIFORM_TEXT, rng=random.Random(11))
        second = analyze(UNIFORM_TEXT, rng=random.Random(11))
        assert first == second

    def test_to_dict_shape(self):
        result = analyze("We must leverage this opportunity.")
        data = result.to_dict()
        assert set(data) == {
            "aiScore",
            "readabilityScore",
            "wordCount",
            "sentenceCount",
            "suggestions",
            "flaggedPhrases",
        }
        assert data["flaggedPhrases"] == [{"phrase": "leverage", "reason": TRIGGER_REASON}]

    def test_result_is_frozen(self):
        result = analyze("Hi.")
        assert isinstance(result, AnalysisResult)
        with pytest.raises(AttributeError):
            result.ai_score = 50


def test_round_half_up():
    assert round_half_up(2.5) == 3
    assert round_half_up(-2.5) == -2
    assert round_half_up(2.4) == 2
