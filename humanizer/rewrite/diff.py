"""Word-level change highlighting between a text and its rewrite.

Removed words are used for alignment only and never reported: the output
shows the rewritten text split into runs that were kept and runs that are
new, which is what a reader needs to spot what a rewrite changed.
"""

import difflib
import re
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List

TOKEN_PATTERN = re.compile(r"\s+|\w+|[^\w\s]")


class SegmentKind(str, Enum):
    UNCHANGED = "unchanged"
    ADDED = "added"


@dataclass(frozen=True)
class DiffSegment:
    """A contiguous run of rewritten text."""

    kind: SegmentKind
    text: str

    def to_dict(self) -> Dict[str, str]:
        return {"kind": self.kind.value, "text": self.text}


def tokenize(text: str) -> List[str]:
    """Split text into word, whitespace and punctuation tokens.

    Joining the tokens gives back the original text.
    """
    return TOKEN_PATTERN.findall(text)


def render_changes(original: str, rewritten: str) -> List[DiffSegment]:
    """Align rewritten against original and label each run of it.

    Args:
        original: Source text
        rewritten: Rewritten text, from the rule engine or a language model

    Returns:
        Ordered segments whose texts concatenate to ``rewritten``
    """
    if not rewritten:
        return []
    if not original:
        return [DiffSegment(SegmentKind.UNCHANGED, rewritten)]

    before = tokenize(original)
    after = tokenize(rewritten)
    matcher = difflib.SequenceMatcher(None, before, after, autojunk=False)

    segments: List[DiffSegment] = []
    for tag, _i1, _i2, j1, j2 in matcher.get_opcodes():
        if tag == "delete":
            continue
        kind = SegmentKind.UNCHANGED if tag == "equal" else SegmentKind.ADDED
        text = "".join(after[j1:j2])
        if segments and segments[-1].kind == kind:
            # Runs separated only by a deletion read as one run.
            segments[-1] = DiffSegment(kind, segments[-1].text + text)
        else:
            segments.append(DiffSegment(kind, text))
    return segments
