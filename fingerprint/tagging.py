"""
POS oracle used by the grammatical-category features.

The engine only talks to the ``PosTagger`` protocol, so any tagger that
returns Penn Treebank tags can be injected (tests use a stub). The default
implementation wraps NLTK's averaged perceptron tagger; its model is
downloaded on first use.

Tags are treated as estimates: the downstream metrics are heuristic, not
ground truth.
"""

import logging
from dataclasses import dataclass, field
from typing import Protocol

import nltk
from nltk.tokenize import TreebankWordTokenizer

import config

logger = logging.getLogger(__name__)


class TaggerUnavailable(RuntimeError):
    """The POS oracle could not be loaded or failed on an input."""


# Penn Treebank prefixes grouped into coarse classes
NOUN_PREFIX = "NN"
VERB_PREFIX = "VB"
ADJECTIVE_PREFIX = "JJ"
ADVERB_PREFIX = "RB"
PRONOUN_TAGS = frozenset(["PRP", "PRP$", "WP", "WP$"])
PAST_TAGS = frozenset(["VBD"])
PRESENT_TAGS = frozenset(["VBZ", "VBP"])


def coarse_pos(tag: str) -> str:
    """Map a Penn tag onto noun / verb / adj / adv / other."""
    if tag.startswith(NOUN_PREFIX):
        return "noun"
    if tag.startswith(VERB_PREFIX):
        return "verb"
    if tag.startswith(ADJECTIVE_PREFIX):
        return "adj"
    if tag.startswith(ADVERB_PREFIX):
        return "adv"
    return "other"


def _is_word(token: str) -> bool:
    return any(ch.isalpha() for ch in token)


@dataclass(frozen=True)
class TaggedSentence:
    """
    One sentence as seen by the oracle.

    ``boundaries`` holds (start, end) token spans of the sentences the oracle
    found inside ``text``; for input that already went through the Segmenter
    this is normally a single span covering every token.
    """

    text: str
    tokens: tuple
    tags: tuple
    boundaries: tuple = field(default=())

    def words(self) -> list[tuple[str, str]]:
        """(lower-cased token, tag) pairs, punctuation dropped."""
        return [(tok.lower(), tag) for tok, tag in zip(self.tokens, self.tags) if _is_word(tok)]

    def _with_prefix(self, prefix: str) -> list[str]:
        return [tok for tok, tag in self.words() if tag.startswith(prefix)]

    def nouns(self) -> list[str]:
        return self._with_prefix(NOUN_PREFIX)

    def verbs(self) -> list[str]:
        return self._with_prefix(VERB_PREFIX)

    def adjectives(self) -> list[str]:
        return self._with_prefix(ADJECTIVE_PREFIX)

    def adverbs(self) -> list[str]:
        return self._with_prefix(ADVERB_PREFIX)

    def pronouns(self) -> list[str]:
        return [tok for tok, tag in self.words() if tag in PRONOUN_TAGS]

    def content_words(self) -> list[str]:
        return [tok for tok, tag in self.words() if coarse_pos(tag) != "other"]

    def word_count(self) -> int:
        return len(self.words())

    def coarse_sequence(self) -> list[str]:
        return [coarse_pos(tag) for _, tag in self.words()]


class PosTagger(Protocol):
    def tag(self, sentence: str) -> TaggedSentence:
        ...


class NltkTagger:
    """Penn Treebank tagger backed by ``nltk.pos_tag``."""

    def __init__(self, resource: str = config.NLTK_TAGGER_RESOURCE,
                 package: str = config.NLTK_TAGGER_PACKAGE):
        # Download tagger data (needed once)
        try:
            nltk.data.find(resource)
        except LookupError:
            logger.info("Downloading NLTK resource %s", package)
            nltk.download(package, quiet=True)
            try:
                nltk.data.find(resource)
            except LookupError as e:
                raise TaggerUnavailable(f"NLTK resource '{package}' is not available") from e

        self._tokenizer = TreebankWordTokenizer()

    def tag(self, sentence: str) -> TaggedSentence:
        tokens = self._tokenizer.tokenize(sentence)
        try:
            tagged = nltk.pos_tag(tokens) if tokens else []
        except LookupError as e:
            raise TaggerUnavailable(str(e)) from e

        return TaggedSentence(
            text=sentence,
            tokens=tuple(tok for tok, _ in tagged),
            tags=tuple(tag for _, tag in tagged),
            boundaries=((0, len(tagged)),) if tagged else (),
        )


def load_default_tagger() -> NltkTagger | None:
    """Build the NLTK tagger, or None (with a warning) when it cannot load."""
    try:
        return NltkTagger()
    except TaggerUnavailable as e:
        logger.warning("POS tagger unavailable, grammatical features will be omitted: %s", e)
        return None
