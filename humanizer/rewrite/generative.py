"""Interface to an optional generative-model rewriter.

Nothing here loads or runs a model. A caller supplies a client satisfying
``ChatClient``; this module builds the prompts, consumes the streamed reply
while reporting progress, and strips the chatter models tend to wrap around
their answer. The result is plain text that ``render_changes`` accepts like
any other rewrite.
"""

import json
import logging
import math
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Optional, Protocol, Sequence, runtime_checkable

from humanizer.options import EmotionIntensity, HumanizationLevel, LengthMode, WritingMode
from humanizer.text.analyzer import WHITESPACE_PATTERN
from humanizer.text.diagnosis import round_half_up

logger = logging.getLogger(__name__)

Message = Dict[str, str]
ProgressCallback = Callable[[int], None]

MAX_TOKENS = 2048
TOKENS_PER_WORD = 1.3

HUMANIZE_TEMPERATURES = {
    HumanizationLevel.LIGHT: 0.6,
    HumanizationLevel.MEDIUM: 0.7,
    HumanizationLevel.HEAVY: 0.85,
}
FORMALIZE_TEMPERATURE = 0.3
ANALYSIS_TEMPERATURE = 0.1

HUMANIZE_PREAMBLES = (
    "Here is the rewritten text:",
    "Here is a rewritten version:",
    "Here's a rewritten version:",
    "Rewritten Text:",
    "Sure, here is the text:",
    "Here is the text:",
)
FORMALIZE_PREAMBLES = (
    "Here is the formal version:",
    "Here is the rewritten text:",
    "Formal Rewritten Text:",
)

HUMANIZE_SYSTEM_PROMPT = """You are an expert human writer and editor. Rewrite the provided text so it sounds natural and authentic, as if a real person wrote it from scratch.

Instructions:
1. Understand the core meaning, intent and emotional tone of the original text before rewriting. Do not just swap synonyms.
2. Write from a human perspective. Personal stories should feel personal; professional text should sound authoritative but not robotic.
3. Remove AI patterns such as "In conclusion", "It is important to note", "delve", "tapestry" and perfectly uniform sentence lengths.
4. Configuration:
   - Level: {level}
     - Light: polish the text but keep the structure.
     - Medium: rephrase sentences for better flow.
     - Heavy: rework structure and vocabulary freely.
   - Mode: {mode}
     - General: use contractions, idioms and a conversational tone.
     - Professional: clear, direct business or academic language.
   - Length: {length}
     - Original: keep the word count within 5% of the input (about {words} words). Add no new information.
     - Expansion: expand the text by 60-80% with details and examples.
     - Shorten: cut the text to about {short_words} words, keeping only the core message.
   - Emotion intensity: {emotion}
     - Neutral: balanced, objective and calm.
     - Moody: add warmth, empathy or enthusiasm where it fits.
     - Passionate: strong, evocative language with clear conviction.
5. Output only the rewritten text. No quotes, no introduction, no explanation.
"""

FORMALIZE_SYSTEM_PROMPT = """You are an AI writing assistant. Rewrite the user's text to sound professional, structured, precise and polished.

Guidelines:
- Use formal, academic or business vocabulary.
- Use correct grammar and syntax.
- Structure the text logically with clear transitions.
- Keep the tone objective, authoritative and efficient.
- Output only the rewritten text. No introduction or closing remarks.
"""

ANALYSIS_SYSTEM_PROMPT = """You are an AI content detector and writing analyst. Analyze the following text.
Respond with JSON containing:
- aiProbability: number (0-100)
- readabilityScore: number (0-100)
- suggestions: string[] (three specific improvements)
- toneAnalysis: string (brief description of the tone)

Output only valid JSON, without markdown formatting."""


class GenerationError(RuntimeError):
    """Raised when the model client fails to produce a rewrite."""


@runtime_checkable
class ChatClient(Protocol):
    """A chat-completion backend, such as a local model runtime."""

    def stream_chat(
        self, messages: List[Message], *, temperature: float, max_tokens: int
    ) -> Iterable[str]: ...

    def complete_json(self, messages: List[Message], *, temperature: float) -> str: ...


@dataclass(frozen=True)
class ModelStatus:
    """Loading state of a model backend, for display."""

    state: str = "idle"
    message: str = ""
    progress: float = 0.0


def loading_status(report: str) -> ModelStatus:
    """Estimate model loading progress from a loader's report text."""
    value = 0.1
    if "Fetching" in report:
        value = 0.3
    if "Loading" in report:
        value = 0.6
    if "Finish" in report:
        value = 1.0
    return ModelStatus(state="loading", message=report, progress=value)


def ready_status(message: str = "Model ready") -> ModelStatus:
    return ModelStatus(state="ready", message=message, progress=1.0)


def error_status(message: str) -> ModelStatus:
    return ModelStatus(state="error", message=message, progress=0.0)


def _word_count(text: str) -> int:
    # Matches a plain whitespace split, which counts "" as one word.
    return len(WHITESPACE_PATTERN.split(text))


def humanize_messages(
    text: str,
    level: HumanizationLevel,
    mode: WritingMode,
    length_mode: LengthMode = LengthMode.ORIGINAL,
    emotion: EmotionIntensity = EmotionIntensity.NEUTRAL,
) -> List[Message]:
    """Build the chat messages requesting a humanized rewrite."""
    words = _word_count(text)
    short_words = math.ceil(words * 0.5)
    system = HUMANIZE_SYSTEM_PROMPT.format(
        level=HumanizationLevel(level).value,
        mode=WritingMode(mode).value,
        length=LengthMode(length_mode).value,
        emotion=EmotionIntensity(emotion).value,
        words=words,
        short_words=short_words,
    )

    if length_mode == LengthMode.ORIGINAL:
        user = (
            f'Original Text ({words} words):\n"{text}"\n\n'
            f"Rewritten Text (Constraint: Keep word count close to {words}. Do not add new details.):"
        )
    elif length_mode == LengthMode.SHORTEN:
        user = (
            f'Original Text ({words} words):\n"{text}"\n\n'
            f"Rewritten Text (Constraint: Shorten to approx {short_words} words. Be concise.):"
        )
    else:
        user = f'Original Text:\n"{text}"\n\nRewritten Text:'

    return [{"role": "system", "content": system}, {"role": "user", "content": user}]


def formalize_messages(text: str) -> List[Message]:
    """Build the chat messages requesting a formal, machine-styled rewrite."""
    user = f'Original Text:\n"{text}"\n\nFormal Rewritten Text:'
    return [
        {"role": "system", "content": FORMALIZE_SYSTEM_PROMPT},
        {"role": "user", "content": user},
    ]


def analysis_messages(text: str) -> List[Message]:
    return [
        {"role": "system", "content": ANALYSIS_SYSTEM_PROMPT},
        {"role": "user", "content": text},
    ]


def expected_output_tokens(text: str, factor: float = 1.0) -> int:
    """Estimate how many tokens a rewrite of text will take."""
    input_tokens = math.ceil(_word_count(text) * TOKENS_PER_WORD)
    return max(1, math.ceil(input_tokens * factor))


def length_factor(length_mode: LengthMode) -> float:
    if length_mode == LengthMode.EXPANSION:
        return 1.7
    if length_mode == LengthMode.SHORTEN:
        return 0.5
    return 1.0


def _strip_quotes(content: str) -> str:
    if len(content) >= 2 and content.startswith('"') and content.endswith('"'):
        return content[1:-1]
    return content


def clean_model_output(
    content: str,
    preambles: Sequence[str] = HUMANIZE_PREAMBLES,
    strip_footer: bool = True,
    unquote_result: bool = True,
) -> str:
    """Remove quotes, preambles and trailing notes from a model reply.

    Args:
        content: Raw model output
        preambles: First-line prefixes to drop, matched case-insensitively
        strip_footer: Drop a final line wrapped in parentheses
        unquote_result: Also strip quotes that wrap the text left after
            the preamble and footer are removed

    Returns:
        Cleaned text
    """
    content = _strip_quotes(content.strip())

    lines = content.split("\n")
    first_line = lines[0].strip().lower()
    for preamble in preambles:
        if first_line.startswith(preamble.lower()):
            lines.pop(0)
            break

    if strip_footer and lines:
        last_line = lines[-1].strip()
        if last_line.startswith("(") and last_line.endswith(")"):
            lines.pop()

    content = "\n".join(lines).strip()
    if unquote_result:
        content = _strip_quotes(content)
    return content


def collect_stream(
    deltas: Iterable[str],
    expected_tokens: int,
    on_progress: Optional[ProgressCallback] = None,
) -> str:
    """Concatenate streamed deltas, reporting percent complete.

    Each non-empty delta counts as one token. Progress stays at or below 99
    until the stream ends, then 100 is reported.
    """
    parts: List[str] = []
    generated = 0
    for delta in deltas:
        if not delta:
            continue
        parts.append(delta)
        generated += 1
        if on_progress:
            on_progress(min(round_half_up(generated / expected_tokens * 100), 99))
    if on_progress:
        on_progress(100)
    return "".join(parts)


class ModelRewriter:
    """Runs rewrite and analysis requests against a ChatClient."""

    def __init__(self, client: ChatClient):
        self.client = client

    def _generate(
        self,
        messages: List[Message],
        temperature: float,
        expected_tokens: int,
        on_progress: Optional[ProgressCallback],
    ) -> str:
        try:
            deltas = self.client.stream_chat(
                messages, temperature=temperature, max_tokens=MAX_TOKENS
            )
            return collect_stream(deltas, expected_tokens, on_progress)
        except Exception as e:
            logger.error(f"Generation error: {e}")
            raise GenerationError("Failed to generate text.") from e

    def humanize(
        self,
        text: str,
        level: HumanizationLevel = HumanizationLevel.MEDIUM,
        mode: WritingMode = WritingMode.GENERAL,
        length_mode: LengthMode = LengthMode.ORIGINAL,
        emotion: EmotionIntensity = EmotionIntensity.NEUTRAL,
        on_progress: Optional[ProgressCallback] = None,
    ) -> str:
        """Ask the model for a humanized rewrite of text."""
        level = HumanizationLevel(level)
        length_mode = LengthMode(length_mode)
        content = self._generate(
            humanize_messages(text, level, mode, length_mode, emotion),
            HUMANIZE_TEMPERATURES[level],
            expected_output_tokens(text, length_factor(length_mode)),
            on_progress,
        )
        return clean_model_output(content, HUMANIZE_PREAMBLES, strip_footer=True)

    def formalize(self, text: str, on_progress: Optional[ProgressCallback] = None) -> str:
        """Ask the model for a formal rewrite of text."""
        content = self._generate(
            formalize_messages(text),
            FORMALIZE_TEMPERATURE,
            expected_output_tokens(text, 1.2),
            on_progress,
        )
        return clean_model_output(content, FORMALIZE_PREAMBLES, strip_footer=False, unquote_result=False)

    def analyze(self, text: str) -> Dict[str, Any]:
        """Ask the model for its own analysis, parsed from JSON."""
        try:
            raw = self.client.complete_json(analysis_messages(text), temperature=ANALYSIS_TEMPERATURE)
        except Exception as e:
            logger.error(f"Analysis error: {e}")
            raise GenerationError("Failed to analyze text.") from e

        try:
            return json.loads(raw or "{}")
        except json.JSONDecodeError as e:
            raise GenerationError(f"Model returned invalid JSON: {e}") from e
