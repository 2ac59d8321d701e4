"""
Readability & stylometric index calculator.

Classic readability formulas driven by a vowel-cluster syllable estimate
(no pronunciation dictionary), plus the closed-list stylometric profiles:
function words, pronoun person, frequency bands, academic vocabulary and
Germanic-core provenance. Burrows' Delta compares two samples.

Percentages are 0, never NaN, when their denominator is 0.
"""

import re
from collections import Counter

import numpy as np

import config
from fingerprint.lexicons import (
    ACADEMIC_WORDS,
    FUNCTION_WORDS,
    FUNCTION_WORD_SET,
    GERMANIC_CORE,
    NOMINALIZATION_SUFFIXES,
    PRONOUNS,
)

SYLLABLE_SUFFIX_RE = re.compile(r"(?:[^laeiouy]es|ed|[^laeiouy]e)$")
VOWEL_GROUP_RE = re.compile(r"[aeiouy]{1,2}")


def estimate_syllables(word: str) -> int:
    word = word.lower()
    if len(word) <= 3:
        return 1
    word = SYLLABLE_SUFFIX_RE.sub("", word)
    word = re.sub(r"^y", "", word)
    return len(VOWEL_GROUP_RE.findall(word)) or 1


def _pct(count: float, total: int) -> float:
    return count / total * 100 if total else 0.0


# --- Readability indices ---

def readability_indices(text: str, tokens, sentences) -> dict:
    """
    Flesch Reading Ease, Flesch-Kincaid grade, Gunning Fog, Coleman-Liau
    and ARI. Every index is 0 when there are no tokens or no sentences.

    Coleman-Liau counts letters of the raw text; ARI counts letters and digits.
    """
    if not tokens or not sentences:
        return {
            "flesch_reading_ease": 0.0,
            "flesch_kincaid_grade": 0.0,
            "gunning_fog": 0.0,
            "coleman_liau": 0.0,
            "ari": 0.0,
        }

    n_words = len(tokens)
    n_sentences = len(sentences)
    syllables = [estimate_syllables(t) for t in tokens]

    asl = n_words / n_sentences
    asw = sum(syllables) / n_words
    complex_words = sum(1 for s in syllables if s >= 3)

    letters = len(re.sub(r"[^a-zA-Z]", "", text))
    alnum = len(re.sub(r"[^a-zA-Z0-9]", "", text))
    L = letters / n_words * 100
    S = n_sentences / n_words * 100

    return {
        "flesch_reading_ease": 206.835 - 1.015 * asl - 84.6 * asw,
        "flesch_kincaid_grade": 0.39 * asl + 11.8 * asw - 15.59,
        "gunning_fog": 0.4 * (asl + complex_words / n_words * 100),
        "coleman_liau": 0.0588 * L - 0.296 * S - 15.8,
        "ari": 4.71 * (alnum / n_words) + 0.5 * asl - 21.43,
    }


# --- Stylometric profiles ---

def function_word_profile(tokens, top_n: int = config.FUNCTION_WORD_TOP_N) -> dict:
    """% of tokens matching each of the first ``top_n`` function words."""
    targets = FUNCTION_WORDS[:top_n]
    wanted = set(targets)
    counts = Counter(t for t in tokens if t in wanted)
    return {word: _pct(counts[word], len(tokens)) for word in targets}


def function_word_ranking(profile: dict, limit: int = config.FUNCTION_WORD_RANKING) -> list[dict]:
    """Most frequent function words; ties keep list order."""
    ranked = sorted(profile.items(), key=lambda item: item[1], reverse=True)
    return [{"word": word, "frequency": freq} for word, freq in ranked[:limit]]


def pronoun_distribution(tokens) -> dict:
    counts = {person: sum(1 for t in tokens if t in words) for person, words in PRONOUNS.items()}
    total = sum(counts.values())
    return {
        "counts": counts,
        "total": total,
        "percentages": {person: _pct(count, total) for person, count in counts.items()},
    }


def frequency_bands(tokens) -> dict:
    """
    Coverage of the common band (function words), the academic band, and
    tokens in neither list.
    """
    common = sum(1 for t in tokens if t in FUNCTION_WORD_SET)
    academic = sum(1 for t in tokens if t in ACADEMIC_WORDS)
    off_list = sum(1 for t in tokens if t not in FUNCTION_WORD_SET and t not in ACADEMIC_WORDS)
    return {
        "common": _pct(common, len(tokens)),
        "academic": _pct(academic, len(tokens)),
        "off_list": _pct(off_list, len(tokens)),
    }


def awl_coverage(tokens) -> float:
    return _pct(sum(1 for t in tokens if t in ACADEMIC_WORDS), len(tokens))


def germanic_core_ratio(tokens) -> float:
    """% of tokens that are listed high-frequency core words or at most 4 letters."""
    return _pct(sum(1 for t in tokens if t in GERMANIC_CORE or len(t) <= 4), len(tokens))


def multi_syllabic_ratio(tokens) -> float:
    return _pct(sum(1 for t in tokens if estimate_syllables(t) >= 3), len(tokens))


def nominalization_density(tokens) -> float:
    """-tion/-ness/-ment/... nouns per 1k tokens."""
    if not tokens:
        return 0.0
    return sum(1 for t in tokens if t.endswith(NOMINALIZATION_SUFFIXES)) / len(tokens) * 1000


def burrows_delta(tokens_a, tokens_b, top_n: int = config.BURROWS_DELTA_TOP_N) -> float:
    """
    Mean absolute difference of relative frequencies over the ``top_n`` most
    frequent words of both samples combined. 0 when either sample is empty.
    """
    if not tokens_a or not tokens_b:
        return 0.0

    freq_a = Counter(tokens_a)
    freq_b = Counter(tokens_b)
    # Ties broken alphabetically so the vocabulary does not depend on argument order
    ranked = sorted((freq_a + freq_b).items(), key=lambda kv: (-kv[1], kv[0]))
    vocabulary = [word for word, _ in ranked[:top_n]]

    diffs = np.array([
        abs(freq_a[word] / len(tokens_a) - freq_b[word] / len(tokens_b))
        for word in vocabulary
    ])
    return float(np.mean(diffs))
