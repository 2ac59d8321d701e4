"""
Discourse feature extractor.

Metadiscourse (Hyland 2005) is the Tier-1 signal: six closed word lists
matched token by token, reported as a density per 1,000 tokens. The rest of
this module covers the extended metadiscourse categories (phrase matching
over raw text), cohesion between adjacent sentences, paragraph structure,
stance markers and academic-genre cues.
"""

import re

import numpy as np

from fingerprint.lexicons import (
    BOOSTER_PHRASES,
    BOOSTER_WORDS,
    CITATION_SHELL_NOUNS,
    DISCOURSE_MARKERS,
    EPISTEMIC_ADVERBS,
    EXTENDED_METADISCOURSE,
    FUNCTION_WORD_SET,
    GENRE_MOVES,
    HEDGES,
    METADISCOURSE_CATEGORIES,
    REPORTING_VERBS,
)
from fingerprint.segmenter import split_sentences, tokenize

_METADISCOURSE_SETS = {cat: frozenset(words) for cat, words in METADISCOURSE_CATEGORIES.items()}


def _phrase_pattern(phrase: str) -> re.Pattern:
    # Edges must not touch a word character; plain \b would reject "e.g."
    return re.compile(r"(?<!\w)" + re.escape(phrase) + r"(?!\w)")


_EXTENDED_PATTERNS = {
    cat: [_phrase_pattern(p) for p in phrases]
    for cat, phrases in EXTENDED_METADISCOURSE.items()
}

ANAPHORIC_DEMONSTRATIVE_RE = re.compile(r"\b(?:this|that|these|those)\s+\w+", re.IGNORECASE)
IMPERSONAL_RES = [
    re.compile(r"\bit\s+(?:seems|appears|looks|sounds|feels)", re.IGNORECASE),
    re.compile(r"\bit\s+is\s+(?:likely|possible|probable|clear|obvious|evident)", re.IGNORECASE),
    re.compile(r"\bone\s+(?:must|should|can|could|may|might)", re.IGNORECASE),
    re.compile(r"\bthere\s+(?:is|are|seems|appears)", re.IGNORECASE),
]
CONTRACTION_RE = re.compile(r"\b\w+'(?:s|t|m|d|re|ve|ll)\b", re.IGNORECASE)
BOOSTER_PHRASE_RES = [_phrase_pattern(p) for p in BOOSTER_PHRASES]

# (Author, 2020) / (Author and Other 2020) and Author et al. (2020)
PARENTHETICAL_CITATION_RE = re.compile(
    r"\([A-Z][a-z]+(?:\s+et al\.|\s+(?:&|and)\s+[A-Z][a-z]+)?,?\s+\d{4}\)"
)
NARRATIVE_CITATION_RE = re.compile(
    r"[A-Z][a-z]+(?:\s+et al\.|\s+(?:&|and)\s+[A-Z][a-z]+)?\s+\(\d{4}\)"
)
SHELL_NOUN_RE = re.compile(
    r"\b(?:this|these)\s+(?:" + "|".join(CITATION_SHELL_NOUNS) + r")\s+that\b",
    re.IGNORECASE,
)


def _per_1k(count: float, tokens) -> float:
    return count / len(tokens) * 1000 if tokens else 0.0


def _pct(count: float, total: int) -> float:
    return count / total * 100 if total else 0.0


# --- Metadiscourse ---

def metadiscourse(tokens) -> dict:
    """
    Hyland metadiscourse profile.

    A token counts once for every category list it appears in.

    Returns:
        dict with "counts" (per category), "total" and "density" (per 1k tokens)
    """
    counts = {cat: 0 for cat in _METADISCOURSE_SETS}
    for token in tokens:
        for cat, words in _METADISCOURSE_SETS.items():
            if token in words:
                counts[cat] += 1

    total = sum(counts.values())
    return {"counts": counts, "total": total, "density": _per_1k(total, tokens)}


def extended_metadiscourse(text: str, tokens) -> dict:
    """Phrase-level categories matched over the lower-cased raw text."""
    lower = text.lower()
    counts = {
        cat: sum(len(p.findall(lower)) for p in patterns)
        for cat, patterns in _EXTENDED_PATTERNS.items()
    }
    return {
        "counts": counts,
        "densities": {cat: _per_1k(count, tokens) for cat, count in counts.items()},
    }


def discourse_marker_density(tokens) -> float:
    return _per_1k(sum(1 for t in tokens if t in DISCOURSE_MARKERS), tokens)


# --- Cohesion ---

def _content_sets(sentences) -> list[set]:
    return [{t for t in tokenize(s) if t not in FUNCTION_WORD_SET} for s in sentences]


def lexical_chain_continuity(sentences) -> float:
    """% of adjacent sentence pairs sharing at least one content word."""
    if len(sentences) < 2:
        return 0.0
    sets = _content_sets(sentences)
    linked = sum(1 for a, b in zip(sets, sets[1:]) if a & b)
    return linked / (len(sentences) - 1) * 100


def jaccard_cohesion(sentences) -> float:
    """Mean Jaccard overlap of content-word sets over adjacent pairs."""
    if len(sentences) < 2:
        return 0.0
    sets = _content_sets(sentences)
    total = 0.0
    for a, b in zip(sets, sets[1:]):
        if a and b:
            total += len(a & b) / len(a | b)
    return total / (len(sentences) - 1)


def anaphoric_demonstrative_density(text: str, tokens) -> float:
    """Demonstrative + word sequences per 1k tokens."""
    return _per_1k(len(ANAPHORIC_DEMONSTRATIVE_RE.findall(text)), tokens)


# --- Paragraphs and openers ---

def paragraph_stats(paragraphs) -> dict:
    """
    Paragraph count (a proxy for topic shifts) with the mean and population
    std of paragraph length in sentences. The std needs two paragraphs.
    """
    if not paragraphs:
        return {"topic_shifts": 0, "paragraph_length": 0.0, "paragraph_length_variation": 0.0}

    lengths = np.array([len(split_sentences(p)) for p in paragraphs], dtype=np.float64)
    return {
        "topic_shifts": len(paragraphs),
        "paragraph_length": float(np.mean(lengths)),
        "paragraph_length_variation": float(np.std(lengths)) if len(paragraphs) >= 2 else 0.0,
    }


def sentence_opener_diversity(sentences) -> float:
    """% of distinct first words among sentence openers."""
    openers = []
    for sentence in sentences:
        words = sentence.split()
        opener = re.sub(r"[^a-z]", "", words[0].lower()) if words else ""
        if opener:
            openers.append(opener)
    return _pct(len(set(openers)), len(openers))


# --- Stance ---

def impersonal_constructions(text: str, tokens) -> float:
    count = sum(len(p.findall(text)) for p in IMPERSONAL_RES)
    return _per_1k(count, tokens)


def contraction_ratio(text: str, tokens) -> float:
    """Contractions per 100 tokens."""
    return _pct(len(CONTRACTION_RE.findall(text)), len(tokens))


def hedging_ratio(tokens) -> float:
    return _pct(sum(1 for t in tokens if t in HEDGES), len(tokens))


def boosting_ratio(text: str, tokens) -> float:
    """Single-word boosters plus booster phrases, per 100 tokens."""
    count = sum(1 for t in tokens if t in BOOSTER_WORDS)
    lower = text.lower()
    count += sum(len(p.findall(lower)) for p in BOOSTER_PHRASE_RES)
    return _pct(count, len(tokens))


def stance_adverbs(tagged) -> float:
    """Epistemic stance adverbs (tagged RB*) per 1k tagged words."""
    words = sum(s.word_count() for s in tagged)
    count = sum(1 for s in tagged for adv in s.adverbs() if adv in EPISTEMIC_ADVERBS)
    return count / words * 1000 if words else 0.0


# --- Academic genre ---

def reporting_verbs_density(tokens) -> float:
    return _per_1k(sum(1 for t in tokens if t in REPORTING_VERBS), tokens)


def citation_patterns(text: str) -> dict:
    parenthetical = len(PARENTHETICAL_CITATION_RE.findall(text))
    narrative = len(NARRATIVE_CITATION_RE.findall(text))
    return {
        "parenthetical": parenthetical,
        "narrative": narrative,
        "total": parenthetical + narrative,
    }


def genre_moves(text: str) -> dict:
    """
    CARS-model move cues (Swales): how many distinct cue phrases of each move
    occur anywhere in the text.
    """
    lower = text.lower()
    moves = {
        move: sum(1 for cue in cues if cue in lower)
        for move, cues in GENRE_MOVES.items()
    }
    moves["total"] = sum(moves.values())
    return moves


def citation_shell_nouns(text: str) -> int:
    """Count "this/these <shell noun> that" constructions."""
    return len(SHELL_NOUN_RE.findall(text))
