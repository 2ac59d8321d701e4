"""
Syntactic feature extractor.

Three families of estimates:
  - Burstiness and sentence-length spread (from sentence lengths only)
  - Marker-based complexity composites: subordinators plus non-finite
    markers (to-infinitives, -ing forms), no tagger needed
  - Regex constructions (clefts, existential there, inversion, light verbs)
    and POS-based clause metrics computed from tagged sentences

All values are heuristic estimates; degenerate input yields 0.
"""

import re

import numpy as np

import config
from fingerprint.lexicons import (
    BE_FORMS,
    COMPLEX_MARKERS,
    COORDINATORS,
    CORRELATIVE_PAIRS,
    DEMONSTRATIVES,
    PHRASAL_PARTICLES,
    SUBORDINATORS,
)


def _word_pattern(word: str) -> re.Pattern:
    return re.compile(r"\b" + re.escape(word) + r"\b")


# Each list entry is matched on its own, so "even though" also counts as "though"
SUBORDINATOR_RES = [_word_pattern(w) for w in SUBORDINATORS]
COMPLEX_MARKER_RES = [_word_pattern(w) for w in COMPLEX_MARKERS]
COORDINATOR_RES = [_word_pattern(w) for w in COORDINATORS]
CORRELATIVE_RES = [
    re.compile(rf"\b{first}\b.*?\b{second}\b", re.IGNORECASE)
    for first, second in CORRELATIVE_PAIRS
]

TO_INFINITIVE_RE = re.compile(r"\bto\s+\w+")
ING_FORM_RE = re.compile(r"\b\w+ing\b")

PASSIVE_AGENT_RE = re.compile(r"\b(?:is|are|was|were|been|be)\s+\w+ed\s+by\s+", re.IGNORECASE)
LIGHT_VERB_RES = [
    re.compile(r"\bmake\s+a\s+(?:decision|choice|mistake|attempt|effort)\b", re.IGNORECASE),
    re.compile(r"\btake\s+a\s+(?:look|break|chance|step|walk)\b", re.IGNORECASE),
    re.compile(r"\bgive\s+a\s+(?:presentation|talk|speech|lecture)\b", re.IGNORECASE),
    re.compile(r"\bhave\s+a\s+(?:discussion|conversation|meeting|chat)\b", re.IGNORECASE),
    re.compile(r"\bdo\s+a\s+(?:favor|job|task)\b", re.IGNORECASE),
]
IT_CLEFT_RE = re.compile(r"\bit(?:\s+(?:is|was)|'s)\s+\w+\s+that\b", re.IGNORECASE)
WH_CLEFT_RE = re.compile(r"\b(?:what|where|when|why|how)\s+\w+\s+(?:is|was|are|were)\b", re.IGNORECASE)
EXISTENTIAL_THERE_RE = re.compile(r"\bthere\s+(?:is|are|was|were|has|have|been)\b", re.IGNORECASE)
NEGATIVE_INVERSION_RES = [
    re.compile(r"\bnever\s+(?:have|has|had|do|does|did|can|could|will|would)\b", re.IGNORECASE),
    re.compile(r"\bseldom\s+(?:have|has|had|do|does|did)\b", re.IGNORECASE),
    re.compile(r"\brarely\s+(?:have|has|had|do|does|did)\b", re.IGNORECASE),
    re.compile(r"\bhardly\s+(?:have|has|had|do|does|did)\b", re.IGNORECASE),
    re.compile(r"\bscarcely\s+(?:have|has|had|do|does|did)\b", re.IGNORECASE),
]


def _count(patterns, text: str) -> int:
    return sum(len(p.findall(text)) for p in patterns)


def _per_sentence_pct(count: int, sentences) -> float:
    return count / len(sentences) * 100 if sentences else 0.0


# --- Sentence length statistics ---

def burstiness(sentence_lengths) -> float:
    """Coefficient of variation (population std / mean) of sentence lengths."""
    if len(sentence_lengths) == 0:
        return 0.0
    lengths = np.asarray(sentence_lengths, dtype=np.float64)
    mean = float(np.mean(lengths))
    if mean == 0:
        return 0.0
    return float(np.std(lengths)) / mean


def sentence_length_std(sentence_lengths) -> float:
    if len(sentence_lengths) == 0:
        return 0.0
    return float(np.std(np.asarray(sentence_lengths, dtype=np.float64)))


# --- Marker-based complexity ---

def subordinator_count(sentence: str) -> int:
    return _count(SUBORDINATOR_RES, sentence.lower())


def nonfinite_markers(sentence: str) -> float:
    """Capped contribution of to-infinitives and -ing forms."""
    lower = sentence.lower()
    to_inf = len(TO_INFINITIVE_RE.findall(lower))
    ing_forms = len(ING_FORM_RE.findall(lower))
    return min(to_inf, 2) + min(ing_forms * 0.3, 1.0)


def sentence_complexity(sentences) -> dict:
    """Simple / compound / complex sentence counts and percentages."""
    counts = {"simple": 0, "compound": 0, "complex": 0}
    for sentence in sentences:
        lower = sentence.lower()
        if _count(COMPLEX_MARKER_RES, lower):
            counts["complex"] += 1
        elif _count(COORDINATOR_RES, lower):
            counts["compound"] += 1
        else:
            counts["simple"] += 1

    total = len(sentences)
    return {
        "counts": counts,
        "percentages": {k: (v / total * 100 if total else 0.0) for k, v in counts.items()},
    }


def subordination_depth(sentences) -> float:
    """Mean subordinator matches per sentence."""
    if not sentences:
        return 0.0
    return sum(subordinator_count(s) for s in sentences) / len(sentences)


def dependent_clause_ratio(sentences) -> float:
    """% of clauses (one main clause plus one per subordinator) that are dependent."""
    dependent = sum(subordinator_count(s) for s in sentences)
    total_clauses = len(sentences) + dependent
    return dependent / total_clauses * 100 if total_clauses else 0.0


def subordinate_clause_ratio(sentences) -> float:
    """Finite plus non-finite subordinate clauses per sentence, as a percentage."""
    subordinate = sum(subordinator_count(s) + nonfinite_markers(s) for s in sentences)
    return _per_sentence_pct(subordinate, sentences)


def marker_clauses_per_sentence(sentences) -> float:
    """One main clause plus every subordinate marker, averaged over sentences."""
    if not sentences:
        return 0.0
    clauses = sum(1 + subordinator_count(s) + nonfinite_markers(s) for s in sentences)
    return clauses / len(sentences)


def t_unit_length(tokens, sentences) -> float:
    return len(tokens) / len(sentences) if sentences else 0.0


def syntactic_complexity_index(tokens, sentences) -> float:
    """
    Bounded 0-100 composite.

    Sentence length, clauses per sentence and subordination depth are each
    min-clamped to their cap before summing.
    """
    if not sentences:
        return 0.0

    asl = len(tokens) / len(sentences)
    clauses = marker_clauses_per_sentence(sentences)
    depth = subordination_depth(sentences)

    length_score = min(asl / config.COMPLEXITY_LENGTH_SATURATION, 1.0) * config.COMPLEXITY_LENGTH_POINTS
    clause_score = min(clauses / config.COMPLEXITY_CLAUSE_SATURATION, 1.0) * config.COMPLEXITY_CLAUSE_POINTS
    subordination_score = min(depth, 1.0) * config.COMPLEXITY_SUBORDINATION_POINTS
    return length_score + clause_score + subordination_score


# --- Regex constructions ---

def passive_agent_retention(text: str, sentences) -> float:
    """By-phrase passives per 100 sentences."""
    return _per_sentence_pct(len(PASSIVE_AGENT_RE.findall(text)), sentences)


def light_verb_ratio(text: str, tokens) -> float:
    """Light-verb constructions per 1k tokens."""
    return _count(LIGHT_VERB_RES, text) / len(tokens) * 1000 if tokens else 0.0


def it_cleft_frequency(text: str, sentences) -> float:
    return _per_sentence_pct(len(IT_CLEFT_RE.findall(text)), sentences)


def wh_cleft_frequency(text: str, sentences) -> float:
    return _per_sentence_pct(len(WH_CLEFT_RE.findall(text)), sentences)


def existential_there_density(text: str, sentences) -> float:
    return _per_sentence_pct(len(EXISTENTIAL_THERE_RE.findall(text)), sentences)


def negative_inversion(text: str, sentences) -> float:
    return _per_sentence_pct(_count(NEGATIVE_INVERSION_RES, text), sentences)


def conjunction_types(text: str) -> dict:
    lower = text.lower()
    return {
        "coordinating": _count(COORDINATOR_RES, lower),
        "subordinating": _count(SUBORDINATOR_RES, lower),
        "correlative": _count(CORRELATIVE_RES, text),
    }


# --- POS-based clause metrics (tagged sentences) ---

def clauses_per_sentence(tagged) -> float:
    """Verbs per sentence as a clause proxy, at least one clause each."""
    if not tagged:
        return 0.0
    return sum(max(1, len(s.verbs())) for s in tagged) / len(tagged)


def clause_length(tagged) -> float:
    """Mean words per verb (words per sentence when it has no verb)."""
    if not tagged:
        return 0.0
    lengths = []
    for s in tagged:
        verbs = len(s.verbs())
        lengths.append(s.word_count() / verbs if verbs else s.word_count())
    return float(np.mean(lengths))


def branching_depth(tagged) -> dict:
    """
    Left depth: words before the first verb.
    Right depth: words after the last verb.
    Sentences without a verb contribute 0 to both.
    """
    if not tagged:
        return {"left": 0.0, "right": 0.0}

    left, right = [], []
    for s in tagged:
        coarse = s.coarse_sequence()
        verb_positions = [i for i, c in enumerate(coarse) if c == "verb"]
        if not verb_positions:
            left.append(0)
            right.append(0)
            continue
        left.append(verb_positions[0])
        right.append(len(coarse) - verb_positions[-1] - 1)

    return {"left": float(np.mean(left)), "right": float(np.mean(right))}


def passive_voice_density(tagged) -> float:
    """% of sentences holding a form of "be" plus a past participle."""
    if not tagged:
        return 0.0
    passive = 0
    for s in tagged:
        words = s.words()
        has_be = any(tok in BE_FORMS for tok, _ in words)
        has_participle = any(tag == "VBN" for _, tag in words)
        if has_be and has_participle:
            passive += 1
    return passive / len(tagged) * 100


def multi_word_verb_ratio(tagged) -> float:
    """Verb + particle pairs (phrasal verbs) per 100 words."""
    pairs = 0
    total = 0
    for s in tagged:
        words = s.words()
        total += len(words)
        for (_, tag), (next_tok, _) in zip(words, words[1:]):
            if tag.startswith("VB") and next_tok in PHRASAL_PARTICLES:
                pairs += 1
    return pairs / total * 100 if total else 0.0


def repetitive_patterns(tagged) -> float:
    """% of sentences whose coarse POS sequence repeats the previous one."""
    if len(tagged) < 2:
        return 0.0
    sequences = [tuple(s.coarse_sequence()) for s in tagged]
    repeats = sum(1 for a, b in zip(sequences, sequences[1:]) if a == b)
    return repeats / len(tagged) * 100


def sentence_opener_pos(tagged) -> dict:
    """Coarse part of speech of each sentence's first word."""
    counts = {"noun": 0, "verb": 0, "adj": 0, "adv": 0, "other": 0}
    for s in tagged:
        coarse = s.coarse_sequence()
        counts[coarse[0] if coarse else "other"] += 1
    return counts


def reference_chains(tagged) -> int:
    """Pronouns plus demonstratives: a rough count of referring expressions."""
    total = 0
    for s in tagged:
        total += len(s.pronouns())
        total += sum(1 for tok, _ in s.words() if tok in DEMONSTRATIVES)
    return total
