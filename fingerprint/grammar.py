"""
Grammatical-category features and micro-syntactic alternations.

Most of these need the POS oracle: they take the tagged sentences produced
by ``fingerprint.tagging`` and read Penn tags off them. A handful
(determiners, pied-piping, adjective order, shell nouns, idioms) only need
tokens or sentence text.
"""

from collections import Counter

import numpy as np

from fingerprint.lexicons import (
    COLOR_ADJECTIVES,
    DATIVE_VERBS,
    HALLIDAYAN_PROCESSES,
    IDIOMS,
    IRREGULAR_VERB_ROOTS,
    RELATIVE_PREPOSITIONS,
    SHELL_NOUN_CATEGORIES,
    SIZE_ADJECTIVES,
)
from fingerprint.segmenter import tokenize
from fingerprint.tagging import PAST_TAGS, PRESENT_TAGS, coarse_pos

DETERMINERS = frozenset(["the", "a", "an"])
FUTURE_MODALS = frozenset(["will", "shall"])
RELATIVE_WORDS = frozenset(["whom", "which", "whose"])
STRANDING_RELATIVES = frozenset(["who", "which", "that"])


def _all_words(tagged) -> list[tuple[str, str]]:
    return [pair for s in tagged for pair in s.words()]


def _ratio(numerator: float, denominator: float) -> float:
    return numerator / denominator if denominator else 0.0


# --- Content vs function ---

def lexical_density(tagged) -> float:
    """% of words that are nouns, verbs, adjectives or adverbs."""
    words = sum(s.word_count() for s in tagged)
    content = sum(len(s.content_words()) for s in tagged)
    return _ratio(content, words) * 100


def content_function_ratio(tagged) -> float:
    words = sum(s.word_count() for s in tagged)
    content = sum(len(s.content_words()) for s in tagged)
    return _ratio(content, words - content)


def open_class_ttr(tagged) -> float:
    """TTR restricted to open-class (content) words."""
    content = [w for s in tagged for w in s.content_words()]
    return _ratio(len(set(content)), len(content))


def nominal_verbal_ratio(tagged) -> float:
    nouns = sum(len(s.nouns()) for s in tagged)
    verbs = sum(len(s.verbs()) for s in tagged)
    return _ratio(nouns, verbs)


def grammatical_ratios(tagged) -> dict:
    nouns = sum(len(s.nouns()) for s in tagged)
    verbs = sum(len(s.verbs()) for s in tagged)
    adjectives = sum(len(s.adjectives()) for s in tagged)
    adverbs = sum(len(s.adverbs()) for s in tagged)
    return {
        "noun_verb": _ratio(nouns, verbs),
        "adj_noun": _ratio(adjectives, nouns),
        "adv_verb": _ratio(adverbs, verbs),
    }


def lexical_density_variability(tagged) -> float:
    """Population std of per-sentence lexical density; needs two sentences."""
    if len(tagged) < 2:
        return 0.0
    densities = [_ratio(len(s.content_words()), s.word_count()) * 100 for s in tagged]
    return float(np.std(densities))


def determiner_ratio(tokens) -> float:
    """Articles per 100 tokens."""
    return _ratio(sum(1 for t in tokens if t in DETERMINERS), len(tokens)) * 100


def preposition_distribution(tagged) -> dict:
    """Counts per preposition (Penn tag IN), most frequent first."""
    counts = Counter(tok for tok, tag in _all_words(tagged) if tag == "IN")
    return dict(counts.most_common())


# --- Hallidayan processes and tense ---

def verb_root(word: str) -> str:
    """Crude lemma: irregular lookup, then -ing / -ed / -s stripping."""
    if word in IRREGULAR_VERB_ROOTS:
        return IRREGULAR_VERB_ROOTS[word]
    for suffix in ("ing", "ed", "s"):
        if word.endswith(suffix) and len(word) - len(suffix) >= 2:
            return word[: -len(suffix)]
    return word


def _process_of(verb: str):
    root = verb_root(verb)
    for process, roots in HALLIDAYAN_PROCESSES.items():
        # "writing" -> "writ", "making" -> "mak": accept the bare stem of an -e root
        if root in roots or root + "e" in roots:
            return process
    return None


def hallidayan_processes(tagged) -> dict:
    """
    Material / mental / relational verb counts.

    ``total`` is floored at 1 so shares can always be computed from it.
    """
    counts = {"material": 0, "mental": 0, "relational": 0}
    for s in tagged:
        for verb in s.verbs():
            process = _process_of(verb)
            if process:
                counts[process] += 1
    counts["total"] = max(1, counts["material"] + counts["mental"] + counts["relational"])
    return counts


def dynamic_stative_ratio(processes: dict) -> float:
    """Material over mental + relational; 10 when only dynamic verbs occur."""
    dynamic = processes["material"]
    stative = processes["mental"] + processes["relational"]
    if stative > 0:
        return dynamic / stative
    return 10.0 if dynamic > 0 else 0.0


def present_perfect_ratio(tagged) -> float:
    """have/has followed by a past participle, per 100 sentences."""
    if not tagged:
        return 0.0
    count = 0
    for s in tagged:
        words = s.words()
        for (tok, _), (_, next_tag) in zip(words, words[1:]):
            if tok in ("have", "has") and next_tag in ("VBN", "VBD"):
                count += 1
    return count / len(tagged) * 100


def sentence_tense(sentence) -> str | None:
    tags = [tag for _, tag in sentence.words()]
    if any(tag in PAST_TAGS for tag in tags):
        return "past"
    if any(tag in PRESENT_TAGS for tag in tags):
        return "present"
    if any(tok in FUTURE_MODALS and tag == "MD" for tok, tag in sentence.words()):
        return "future"
    return None


def tense_shift_inconsistency(paragraphs_tagged) -> float:
    """
    Tense changes between consecutive tensed sentences inside a paragraph,
    per 100 sentences. Sentences with no finite verb are skipped.
    """
    shifts = 0
    total = 0
    for paragraph in paragraphs_tagged:
        total += len(paragraph)
        previous = None
        for sentence in paragraph:
            current = sentence_tense(sentence)
            if current and previous and current != previous:
                shifts += 1
            if current:
                previous = current
    return _ratio(shifts, total) * 100


# --- Alternations ---

def genitive_alternation(tagged) -> float:
    """% of genitives realised as 's rather than an of-phrase."""
    s_genitive = 0
    of_genitive = 0
    for s in tagged:
        pairs = list(zip(s.tokens, s.tags))
        for i in range(len(pairs) - 2):
            (_, t0), (w1, t1), (w2, t2) = pairs[i], pairs[i + 1], pairs[i + 2]
            if t0.startswith("NN") and t1 == "POS" and t2.startswith("NN"):
                s_genitive += 1
            if (
                i + 3 < len(pairs)
                and t0.startswith("NN")
                and w1.lower() == "of"
                and w2.lower() in DETERMINERS
                and pairs[i + 3][1].startswith("NN")
            ):
                of_genitive += 1
    return _ratio(s_genitive, s_genitive + of_genitive) * 100


def dative_alternation(tagged) -> float:
    """% of datives in double-object form ("give him the book")."""
    double_object = 0
    prepositional = 0
    for s in tagged:
        words = s.words()
        for i, (tok, _) in enumerate(words):
            if tok not in DATIVE_VERBS:
                continue
            following = [coarse_pos(tag) if tag not in ("PRP", "PRP$") else "pron"
                         for _, tag in words[i + 1:i + 4]]
            if following[:1] == ["pron"] and any(c == "noun" for c in following[1:3]):
                double_object += 1
            elif (
                len(words) > i + 3
                and coarse_pos(words[i + 1][1]) == "noun"
                and words[i + 2][0] == "to"
                and words[i + 3][1] in ("PRP", "PRP$")
            ):
                prepositional += 1
    return _ratio(double_object, double_object + prepositional) * 100


def pied_piping_score(sentences) -> float:
    """
    % of prepositional relatives with a fronted preposition ("to whom")
    rather than a stranded one ("who ... to").
    """
    pied = 0
    stranded = 0
    for sentence in sentences:
        words = tokenize(sentence)
        pied += sum(
            1 for a, b in zip(words, words[1:])
            if a in RELATIVE_PREPOSITIONS and b in RELATIVE_WORDS
        )
        if words and words[-1] in RELATIVE_PREPOSITIONS and STRANDING_RELATIVES & set(words[:-1]):
            stranded += 1
    return _ratio(pied, pied + stranded) * 100


def adjective_ordering_violations(sentences) -> int:
    """Colour adjective directly before a size adjective ("red big")."""
    violations = 0
    for sentence in sentences:
        lower = sentence.lower()
        for color in COLOR_ADJECTIVES:
            for size in SIZE_ADJECTIVES:
                if f"{color} {size}" in lower:
                    violations += 1
    return violations


# --- Lexical provenance ---

def shell_noun_variety(tokens) -> int:
    """Number of shell-noun categories (0-4) represented in the text."""
    present = set(tokens)
    return sum(1 for words in SHELL_NOUN_CATEGORIES.values() if present.intersection(words))


def idiom_ratio(text: str, tokens) -> float:
    """Distinct idioms found, per 1k tokens."""
    lower = text.lower()
    found = sum(1 for idiom in IDIOMS if idiom in lower)
    return _ratio(found, len(tokens)) * 1000
