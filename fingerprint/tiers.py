"""
Tier registry.

Every metric the engine can compute, grouped into six escalating tiers:
  - tier1: classifier triad (burstiness, STTR, metadiscourse) and traces
  - tier2: stylometric profile, sophistication, syntax, extended metadiscourse, cohesion
  - tier3: advanced lexical diversity, POS style ratios, academic moves, readability
  - tier4: clause-level analysis, syntactic patterns, discourse, paragraphs
  - tier5: discourse patterns, stance, Hallidayan processes, tense, grammatical ratios
  - tier6: readability/provenance and micro-syntactic alternations

A metric is a name plus a function of the analysis context. Metrics marked
``needs_tags`` call the POS oracle and are omitted when it is unavailable.
"""

from dataclasses import dataclass
from typing import Any, Callable

from fingerprint import discourse, grammar, lexical, readability, syntax


@dataclass(frozen=True)
class Metric:
    name: str
    compute: Callable[[Any], Any]
    needs_tags: bool = False


def _tagged(name, compute):
    return Metric(name, compute, needs_tags=True)


def _readability(key):
    return lambda ctx: ctx.memo(
        "readability", lambda: readability.readability_indices(ctx.text, ctx.tokens, ctx.sentences)
    )[key]


def _branching(side):
    return lambda ctx: ctx.memo("branching", lambda: syntax.branching_depth(ctx.tagged()))[side]


def _paragraphs(key):
    return lambda ctx: ctx.memo("paragraphs", lambda: discourse.paragraph_stats(ctx.paragraphs))[key]


def _hallidayan(ctx):
    return ctx.memo("hallidayan", lambda: grammar.hallidayan_processes(ctx.tagged()))


def _metadiscourse(ctx):
    return ctx.memo("metadiscourse", lambda: discourse.metadiscourse(ctx.tokens))


def _legomena(ctx):
    return ctx.memo("legomena", lambda: lexical.legomena_ratios(ctx.tokens))


def _function_words(ctx):
    return ctx.memo("function_words", lambda: readability.function_word_profile(ctx.tokens))


TIER1 = [
    Metric("word_count", lambda ctx: len(ctx.tokens)),
    Metric("sentence_count", lambda ctx: len(ctx.sentences)),
    Metric("avg_sentence_length", lambda ctx: syntax.t_unit_length(ctx.tokens, ctx.sentences)),
    Metric("sttr", lambda ctx: lexical.sttr(ctx.tokens)),
    Metric("burstiness", lambda ctx: syntax.burstiness(ctx.sentence_lengths)),
    Metric("metadiscourse", _metadiscourse),
    Metric("metadiscourse_density", lambda ctx: _metadiscourse(ctx)["density"]),
    Metric("growth_curve", lambda ctx: lexical.growth_curve(ctx.tokens)),
    Metric("first_appearance", lambda ctx: lexical.first_appearances(ctx.tokens)),
]

TIER2 = [
    # Stylometric
    Metric("function_word_profile", lambda ctx: readability.function_word_ranking(_function_words(ctx))),
    Metric("pronoun_distribution", lambda ctx: readability.pronoun_distribution(ctx.tokens)),
    Metric("hapax_ratio", lambda ctx: _legomena(ctx)["hapax_ratio"]),
    Metric("dis_ratio", lambda ctx: _legomena(ctx)["dis_ratio"]),
    # Lexical sophistication
    Metric("awl_coverage", lambda ctx: readability.awl_coverage(ctx.tokens)),
    Metric("word_frequency_bands", lambda ctx: readability.frequency_bands(ctx.tokens)),
    _tagged("lexical_density", lambda ctx: grammar.lexical_density(ctx.tagged())),
    Metric("avg_word_length", lambda ctx: lexical.average_word_length(ctx.tokens)),
    Metric("multi_syllabic_ratio", lambda ctx: readability.multi_syllabic_ratio(ctx.tokens)),
    # Syntactic complexity
    Metric("sentence_length_std", lambda ctx: syntax.sentence_length_std(ctx.sentence_lengths)),
    Metric("sentence_complexity", lambda ctx: syntax.sentence_complexity(ctx.sentences)),
    Metric("subordination_depth", lambda ctx: syntax.subordination_depth(ctx.sentences)),
    _tagged("clauses_per_sentence", lambda ctx: syntax.clauses_per_sentence(ctx.tagged())),
    Metric("t_unit_length", lambda ctx: syntax.t_unit_length(ctx.tokens, ctx.sentences)),
    Metric("dependent_clause_ratio", lambda ctx: syntax.dependent_clause_ratio(ctx.sentences)),
    # Extended metadiscourse
    Metric("extended_metadiscourse", lambda ctx: discourse.extended_metadiscourse(ctx.text, ctx.tokens)),
    # Cohesion
    Metric("lexical_repetition", lambda ctx: lexical.lexical_repetition(ctx.tokens)),
    _tagged("reference_chains", lambda ctx: syntax.reference_chains(ctx.tagged())),
    Metric("lexical_chains", lambda ctx: discourse.lexical_chain_continuity(ctx.sentences)),
]

TIER3 = [
    # Advanced lexical diversity
    Metric("vocd_d", lambda ctx: lexical.vocd_d(ctx.tokens, rng=ctx.rng)),
    Metric("mattr", lambda ctx: lexical.mattr(ctx.tokens)),
    Metric("mtld", lambda ctx: lexical.mtld(ctx.tokens)),
    Metric("rare_word_ratio", lambda ctx: lexical.rare_word_ratio(ctx.tokens)),
    _tagged("content_function_ratio", lambda ctx: grammar.content_function_ratio(ctx.tagged())),
    # POS-based style
    _tagged("open_class_ttr", lambda ctx: grammar.open_class_ttr(ctx.tagged())),
    Metric("nominalization_density", lambda ctx: readability.nominalization_density(ctx.tokens)),
    _tagged("nominal_verbal_ratio", lambda ctx: grammar.nominal_verbal_ratio(ctx.tagged())),
    _tagged("passive_voice_density", lambda ctx: syntax.passive_voice_density(ctx.tagged())),
    # Academic writing
    Metric("reporting_verbs_density", lambda ctx: discourse.reporting_verbs_density(ctx.tokens)),
    Metric("citation_patterns", lambda ctx: discourse.citation_patterns(ctx.text)),
    Metric("genre_moves", lambda ctx: discourse.genre_moves(ctx.text)),
    Metric("shell_noun_patterns", lambda ctx: discourse.citation_shell_nouns(ctx.text)),
    # Readability
    Metric("flesch_reading_ease", _readability("flesch_reading_ease")),
    Metric("flesch_kincaid_grade", _readability("flesch_kincaid_grade")),
    Metric("gunning_fog", _readability("gunning_fog")),
]

TIER4 = [
    # Clause level
    _tagged("clause_length", lambda ctx: syntax.clause_length(ctx.tagged())),
    Metric("subordinate_clause_ratio", lambda ctx: syntax.subordinate_clause_ratio(ctx.sentences)),
    _tagged("left_branching_depth", _branching("left")),
    _tagged("right_branching_depth", _branching("right")),
    Metric("marker_clauses_per_sentence", lambda ctx: syntax.marker_clauses_per_sentence(ctx.sentences)),
    Metric("syntactic_complexity_index", lambda ctx: syntax.syntactic_complexity_index(ctx.tokens, ctx.sentences)),
    # Syntactic patterns
    Metric("passive_agent_retention", lambda ctx: syntax.passive_agent_retention(ctx.text, ctx.sentences)),
    Metric("light_verb_ratio", lambda ctx: syntax.light_verb_ratio(ctx.text, ctx.tokens)),
    _tagged("multi_word_verb_ratio", lambda ctx: syntax.multi_word_verb_ratio(ctx.tagged())),
    # Clefts and inversion
    Metric("it_cleft_frequency", lambda ctx: syntax.it_cleft_frequency(ctx.text, ctx.sentences)),
    Metric("wh_cleft_frequency", lambda ctx: syntax.wh_cleft_frequency(ctx.text, ctx.sentences)),
    Metric("existential_there_density", lambda ctx: syntax.existential_there_density(ctx.text, ctx.sentences)),
    Metric("negative_inversion", lambda ctx: syntax.negative_inversion(ctx.text, ctx.sentences)),
    # Discourse
    Metric("conjunction_types", lambda ctx: syntax.conjunction_types(ctx.text)),
    Metric("discourse_markers_density", lambda ctx: discourse.discourse_marker_density(ctx.tokens)),
    Metric("anaphoric_demonstrative_density",
           lambda ctx: discourse.anaphoric_demonstrative_density(ctx.text, ctx.tokens)),
    # Paragraphs
    Metric("topic_shifts", _paragraphs("topic_shifts")),
    Metric("paragraph_length", _paragraphs("paragraph_length")),
    Metric("paragraph_length_variation", _paragraphs("paragraph_length_variation")),
    Metric("sentence_opener_diversity", lambda ctx: discourse.sentence_opener_diversity(ctx.sentences)),
]

TIER5 = [
    # Discourse patterns
    _tagged("repetitive_patterns", lambda ctx: syntax.repetitive_patterns(ctx.tagged())),
    _tagged("sentence_opener_pos", lambda ctx: syntax.sentence_opener_pos(ctx.tagged())),
    Metric("jaccard_cohesion", lambda ctx: discourse.jaccard_cohesion(ctx.sentences)),
    # Stance and rhetoric
    Metric("impersonal_constructions", lambda ctx: discourse.impersonal_constructions(ctx.text, ctx.tokens)),
    Metric("contraction_ratio", lambda ctx: discourse.contraction_ratio(ctx.text, ctx.tokens)),
    Metric("determiner_ratio", lambda ctx: grammar.determiner_ratio(ctx.tokens)),
    _tagged("preposition_distribution", lambda ctx: grammar.preposition_distribution(ctx.tagged())),
    Metric("hedging_ratio", lambda ctx: discourse.hedging_ratio(ctx.tokens)),
    Metric("boosting_ratio", lambda ctx: discourse.boosting_ratio(ctx.text, ctx.tokens)),
    _tagged("stance_adverbs", lambda ctx: discourse.stance_adverbs(ctx.tagged())),
    # Hallidayan processes
    _tagged("hallidayan", _hallidayan),
    _tagged("dynamic_stative_ratio", lambda ctx: grammar.dynamic_stative_ratio(_hallidayan(ctx))),
    _tagged("present_perfect_ratio", lambda ctx: grammar.present_perfect_ratio(ctx.tagged())),
    # Tense and aspect
    _tagged("tense_shift_inconsistency",
            lambda ctx: grammar.tense_shift_inconsistency(ctx.tagged_paragraphs())),
    # Grammatical ratios
    _tagged("grammatical_ratios", lambda ctx: grammar.grammatical_ratios(ctx.tagged())),
    _tagged("lexical_density_variability", lambda ctx: grammar.lexical_density_variability(ctx.tagged())),
]

TIER6 = [
    # Readability and provenance
    Metric("coleman_liau", _readability("coleman_liau")),
    Metric("ari", _readability("ari")),
    Metric("germanic_core_ratio", lambda ctx: readability.germanic_core_ratio(ctx.tokens)),
    Metric("shell_noun_variety", lambda ctx: grammar.shell_noun_variety(ctx.tokens)),
    Metric("idiom_ratio", lambda ctx: grammar.idiom_ratio(ctx.text, ctx.tokens)),
    Metric("ttr_decay", lambda ctx: lexical.ttr_decay(ctx.tokens)),
    # Micro-syntax and alternations
    _tagged("genitive_alternation", lambda ctx: grammar.genitive_alternation(ctx.tagged())),
    _tagged("dative_alternation", lambda ctx: grammar.dative_alternation(ctx.tagged())),
    Metric("pied_piping_score", lambda ctx: grammar.pied_piping_score(ctx.sentences)),
    Metric("adj_ordering_violations", lambda ctx: grammar.adjective_ordering_violations(ctx.sentences)),
]

TIERS = {
    "tier1": TIER1,
    "tier2": TIER2,
    "tier3": TIER3,
    "tier4": TIER4,
    "tier5": TIER5,
    "tier6": TIER6,
}

# The classifier triad lives here; it cannot be switched off
REQUIRED_TIER = "tier1"


def resolve(names=None) -> list[str]:
    """
    Validate requested tier names and return them in registry order.

    None selects every tier. The required tier is always included.

    Raises:
        ValueError: on a name that is not in the registry.
    """
    if names is None:
        return list(TIERS)

    unknown = sorted(set(names) - set(TIERS))
    if unknown:
        raise ValueError(f"Unknown tier(s): {', '.join(unknown)}. Available: {', '.join(TIERS)}")

    wanted = set(names) | {REQUIRED_TIER}
    return [name for name in TIERS if name in wanted]
