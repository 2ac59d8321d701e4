"""
Lexical Diversity Engine.

Type-token statistics under several windowing strategies:
  - STTR: mean TTR over consecutive 100-token blocks
  - MATTR: moving-average TTR over a sliding window
  - MTLD: mean length of sequential runs that keep TTR above 0.72
  - VOCD-D: random-subsample curve-fit surrogate (seedable)
  - Hapax / dis legomena, vocabulary growth curve, first-appearance trace

Every ratio is 0 for an empty token sequence.
"""

from collections import Counter

import numpy as np

import config
from fingerprint.lexicons import ACADEMIC_WORDS, FUNCTION_WORD_SET


def ttr(tokens) -> float:
    """Plain type/token ratio."""
    if not tokens:
        return 0.0
    return len(set(tokens)) / len(tokens)


def sttr(tokens, block_size: int = config.STTR_BLOCK_SIZE) -> float:
    """
    Standardized TTR.

    Under one block the plain TTR is returned; otherwise the trailing
    remainder shorter than a block is discarded.
    """
    if len(tokens) < block_size:
        return ttr(tokens)

    ttrs = [
        len(set(tokens[i:i + block_size])) / block_size
        for i in range(0, len(tokens) - block_size + 1, block_size)
    ]
    return float(np.mean(ttrs))


def mattr(tokens, window: int = config.MATTR_WINDOW) -> float:
    """Moving-average TTR; degrades to plain TTR below one window."""
    if len(tokens) < window:
        return ttr(tokens)

    # Incremental window counts, one slide at a time
    counts = Counter(tokens[:window])
    total = len(counts)
    for i in range(window, len(tokens)):
        outgoing = tokens[i - window]
        counts[outgoing] -= 1
        if counts[outgoing] == 0:
            del counts[outgoing]
        counts[tokens[i]] += 1
        total += len(counts)

    windows = len(tokens) - window + 1
    return total / (windows * window)


def _mtld_factors(tokens, threshold: float) -> float:
    factors = 0.0
    types = set()
    run_length = 0

    for token in tokens:
        types.add(token)
        run_length += 1
        if len(types) / run_length <= threshold:
            factors += 1
            types = set()
            run_length = 0

    # Partial factor for the trailing run
    if run_length > 0:
        factors += (1 - len(types) / run_length) / (1 - threshold)
    return factors


def mtld(tokens, threshold: float = config.MTLD_THRESHOLD) -> float:
    """
    Measure of Textual Lexical Diversity.

    Forward and backward factor counts are averaged; the result is the token
    count divided by that average. 0 under the minimum length.
    """
    if len(tokens) < config.MTLD_MIN_TOKENS:
        return 0.0

    forward = _mtld_factors(tokens, threshold)
    backward = _mtld_factors(list(reversed(tokens)), threshold)
    mean_factors = (forward + backward) / 2
    return len(tokens) / mean_factors if mean_factors > 0 else 0.0


def vocd_d(tokens, seed: int | None = None,
           rng: np.random.Generator | None = None) -> float:
    """
    Approximate VOCD-D.

    For each sample size, draws subsamples without replacement and applies
    the surrogate D = types^2 / (2 * (size - types + 1)). The generator is
    local to the call so parallel runs never share random state.
    """
    if len(tokens) < config.VOCD_MIN_TOKENS:
        return 0.0

    if rng is None:
        rng = np.random.default_rng(seed)

    estimates = []
    for size in config.VOCD_SAMPLE_SIZES:
        if size > len(tokens):
            continue
        for _ in range(config.VOCD_TRIALS):
            picks = rng.choice(len(tokens), size=size, replace=False)
            types = len({tokens[i] for i in picks})
            estimates.append(types * types / (2 * (size - types + 1)))

    return float(np.mean(estimates)) if estimates else 0.0


def legomena_ratios(tokens) -> dict:
    """Types occurring exactly once / twice, divided by the token count."""
    if not tokens:
        return {"hapax_ratio": 0.0, "dis_ratio": 0.0}

    freq = Counter(tokens).values()
    hapax = sum(1 for count in freq if count == 1)
    dis = sum(1 for count in freq if count == 2)
    return {
        "hapax_ratio": hapax / len(tokens),
        "dis_ratio": dis / len(tokens),
    }


def growth_curve(tokens, step: int = config.GROWTH_CURVE_STEP) -> list[tuple[int, float]]:
    """(position, types so far / position) at every multiple of ``step``."""
    curve = []
    seen = set()
    for idx, token in enumerate(tokens, start=1):
        seen.add(token)
        if idx % step == 0:
            curve.append((idx, len(seen) / idx))
    return curve


def first_appearances(tokens) -> list[tuple[int, str]]:
    """(index, token) for the first occurrence of every type."""
    seen = set()
    trace = []
    for idx, token in enumerate(tokens):
        if token not in seen:
            seen.add(token)
            trace.append((idx, token))
    return trace


def ttr_decay(tokens, windows=config.TTR_DECAY_WINDOWS) -> float:
    """
    Slope of prefix TTR across growing prefixes, scaled by 1000.

    Expected to be negative; 0 when the text is shorter than the largest prefix.
    """
    if len(tokens) < windows[-1]:
        return 0.0

    first = ttr(tokens[:windows[0]])
    last = ttr(tokens[:windows[-1]])
    return (last - first) / (windows[-1] - windows[0]) * 1000


def rare_word_ratio(tokens) -> float:
    """% of tokens longer than 3 letters in neither the common nor the academic list."""
    if not tokens:
        return 0.0
    rare = [
        t for t in tokens
        if len(t) > 3 and t not in FUNCTION_WORD_SET and t not in ACADEMIC_WORDS
    ]
    return len(rare) / len(tokens) * 100


def lexical_repetition(tokens) -> float:
    """% of content tokens whose type occurs more than once."""
    content = [t for t in tokens if t not in FUNCTION_WORD_SET]
    if not content:
        return 0.0
    repeated = sum(count for count in Counter(content).values() if count > 1)
    return repeated / len(content) * 100


def average_word_length(tokens) -> float:
    if not tokens:
        return 0.0
    return sum(len(t) for t in tokens) / len(tokens)
