"""
Shared fixtures: sample texts and a dictionary-driven POS tagger so the
grammatical metrics can be tested without NLTK data.
"""

import re
import sys
from pathlib import Path

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from fingerprint.tagging import TaggedSentence  # noqa: E402


EXAMPLE_TEXT = "The cat sat. However, the dog ran quickly and happily."

# Uniform, connector-heavy prose: flat sentence lengths
AI_TEXT = (
    "Artificial intelligence has transformed many modern industries today. "
    "Machine learning models can process large amounts of data quickly. "
    "These systems provide valuable insights for many organizations now. "
    "Furthermore, automation improves the efficiency of routine business tasks. "
    "Consequently, companies invest heavily in these emerging digital technologies."
)

# Irregular pacing, first person, contractions
HUMAN_TEXT = (
    "I've been thinking about this for weeks. Honestly? It scares me. "
    "Not because robots will take over, which is movie stuff, but because my "
    "professor last semester couldn't tell the difference between a real essay "
    "and one that was basically just a prompt. Wild. "
    "We're living in strange times, I think, and nobody really knows what comes next."
)


_TAGS = {
    "the": "DT", "a": "DT", "an": "DT", "this": "DT", "these": "DT", "that": "IN",
    "i": "PRP", "you": "PRP", "he": "PRP", "she": "PRP", "it": "PRP", "we": "PRP",
    "they": "PRP", "me": "PRP", "him": "PRP", "us": "PRP", "them": "PRP", "my": "PRP$",
    "is": "VBZ", "are": "VBP", "am": "VBP", "was": "VBD", "were": "VBD", "be": "VB",
    "been": "VBN", "has": "VBZ", "have": "VBP", "had": "VBD", "will": "MD", "can": "MD",
    "sat": "VBD", "ran": "VBD", "run": "VB", "went": "VBD", "gave": "VBD", "give": "VB",
    "wrote": "VBD", "written": "VBN", "think": "VBP", "know": "VBP", "knows": "VBZ",
    "walks": "VBZ", "eats": "VBZ", "seems": "VBZ", "made": "VBN", "take": "VB",
    "in": "IN", "on": "IN", "of": "IN", "with": "IN", "by": "IN", "for": "IN",
    "from": "IN", "to": "TO", "about": "IN", "and": "CC", "or": "CC", "but": "CC",
    "big": "JJ", "small": "JJ", "red": "JJ", "happy": "JJ", "quick": "JJ", "new": "JJ",
    "however": "RB", "not": "RB", "very": "RB", "up": "RP",
}


class StubTagger:
    """Tags words from a small dictionary; -ly is RB, -ed is VBD, else NN."""

    TOKEN_RE = re.compile(r"[A-Za-z]+(?:'[a-z]+)?|[^\sA-Za-z]")

    def __init__(self):
        self.calls = 0

    def tag(self, sentence: str) -> TaggedSentence:
        self.calls += 1
        tokens = self.TOKEN_RE.findall(sentence)
        tags = []
        for token in tokens:
            word = token.lower()
            if not word[0].isalpha():
                tags.append(".")
            elif word in _TAGS:
                tags.append(_TAGS[word])
            elif word.endswith("ly"):
                tags.append("RB")
            elif word.endswith("ed"):
                tags.append("VBD")
            else:
                tags.append("NN")
        return TaggedSentence(
            text=sentence,
            tokens=tuple(tokens),
            tags=tuple(tags),
            boundaries=((0, len(tokens)),) if tokens else (),
        )


class FailingTagger:
    """An oracle that is configured but breaks on every call."""

    def tag(self, sentence: str) -> TaggedSentence:
        raise RuntimeError("tagger crashed")


@pytest.fixture
def stub_tagger():
    return StubTagger()


@pytest.fixture
def failing_tagger():
    return FailingTagger()


@pytest.fixture
def tag_all(stub_tagger):
    """Tag a list of sentences with the stub tagger."""
    return lambda sentences: [stub_tagger.tag(s) for s in sentences]
