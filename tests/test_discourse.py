"""
Unit tests for metadiscourse, cohesion, paragraphs and stance features.

Usage:
    python -m pytest tests/test_discourse.py -v
"""

import pytest

from conftest import EXAMPLE_TEXT


class TestMetadiscourse:

    def test_example_density(self):
        from fingerprint.discourse import metadiscourse
        from fingerprint.segmenter import tokenize
        result = metadiscourse(tokenize(EXAMPLE_TEXT))
        assert result["counts"]["transitions"] == 1
        assert result["total"] == 1
        assert result["density"] == pytest.approx(100.0)

    def test_token_counts_once_per_category(self):
        from fingerprint.discourse import metadiscourse
        # "think" is an engagement marker; "i" a self-mention
        result = metadiscourse(["i", "think", "so"])
        assert result["counts"]["self_mention"] == 1
        assert result["counts"]["engagement_markers"] == 1
        assert result["total"] == 2

    def test_empty(self):
        from fingerprint.discourse import metadiscourse
        result = metadiscourse([])
        assert result["total"] == 0
        assert result["density"] == 0.0

    def test_extended_phrase_matching(self):
        from fingerprint.discourse import extended_metadiscourse
        text = "Fruit, e.g. apples, is sweet. In other words, you should eat it."
        tokens = ["w"] * 10
        result = extended_metadiscourse(text, tokens)
        assert result["counts"]["code_glosses"] == 2
        assert result["counts"]["reader_pronouns"] == 1
        assert result["densities"]["code_glosses"] == pytest.approx(200.0)

    def test_extended_respects_word_edges(self):
        from fingerprint.discourse import extended_metadiscourse
        # "seen" and "youth" must not match "see" / "you"
        result = extended_metadiscourse("The youth had seen it.", ["w"] * 5)
        assert result["counts"]["directives"] == 0
        assert result["counts"]["reader_pronouns"] == 0


class TestCohesion:

    def test_lexical_chain_continuity(self):
        from fingerprint.discourse import lexical_chain_continuity
        sentences = ["The cat slept", "The cat woke", "A dog barked"]
        assert lexical_chain_continuity(sentences) == pytest.approx(50.0)

    def test_jaccard_excludes_function_words(self):
        from fingerprint.discourse import jaccard_cohesion
        # Only "the" is shared, and it is a function word
        assert jaccard_cohesion(["The cat slept", "The dog barked"]) == 0.0
        assert jaccard_cohesion(["Cats sleep", "Cats sleep"]) == pytest.approx(1.0)

    def test_single_sentence(self):
        from fingerprint.discourse import jaccard_cohesion, lexical_chain_continuity
        assert jaccard_cohesion(["Only one"]) == 0.0
        assert lexical_chain_continuity(["Only one"]) == 0.0


class TestParagraphs:

    def test_paragraph_stats(self):
        from fingerprint.discourse import paragraph_stats
        result = paragraph_stats(["One. Two.", "Three. Four. Five. Six."])
        assert result["topic_shifts"] == 2
        assert result["paragraph_length"] == pytest.approx(3.0)
        assert result["paragraph_length_variation"] == pytest.approx(1.0)

    def test_single_paragraph_has_no_variation(self):
        from fingerprint.discourse import paragraph_stats
        assert paragraph_stats(["One. Two."])["paragraph_length_variation"] == 0.0

    def test_opener_diversity(self):
        from fingerprint.discourse import sentence_opener_diversity
        assert sentence_opener_diversity(["The cat", "The dog", "A bird", "So it goes"]) == pytest.approx(75.0)


class TestStance:

    def test_contractions(self):
        from fingerprint.discourse import contraction_ratio
        text = "I don't know, it's fine and we'll see."
        assert contraction_ratio(text, ["w"] * 10) == pytest.approx(30.0)

    def test_hedging_ratio(self):
        from fingerprint.discourse import hedging_ratio
        assert hedging_ratio(["it", "might", "perhaps", "rain"]) == pytest.approx(50.0)

    def test_boosting_counts_phrases(self):
        from fingerprint.discourse import boosting_ratio
        text = "Results clearly show that it works"
        tokens = ["results", "clearly", "show", "that", "it", "works"]
        assert boosting_ratio(text, tokens) == pytest.approx(2 / 6 * 100)

    def test_impersonal(self):
        from fingerprint.discourse import impersonal_constructions
        assert impersonal_constructions("It seems fine. One must wait.", ["w"] * 10) == pytest.approx(200.0)

    def test_stance_adverbs(self, tag_all):
        from fingerprint.discourse import stance_adverbs
        tagged = tag_all(["It really works", "Arguably it fails"])
        # 2 epistemic adverbs over 6 words
        assert stance_adverbs(tagged) == pytest.approx(2 / 6 * 1000)


class TestAcademicGenre:

    def test_citation_patterns(self):
        from fingerprint.discourse import citation_patterns
        text = "This was shown (Smith, 2020). Jones et al. (2019) disagree."
        result = citation_patterns(text)
        assert result["parenthetical"] == 1
        assert result["narrative"] == 1
        assert result["total"] == 2

    def test_genre_moves(self):
        from fingerprint.discourse import genre_moves
        result = genre_moves("Previous work exists. However, this study fills a gap.")
        assert result["territory"] == 1
        assert result["niche"] == 2
        assert result["purpose"] == 1
        assert result["total"] == 4

    def test_citation_shell_nouns(self):
        from fingerprint.discourse import citation_shell_nouns
        assert citation_shell_nouns("This claim that X holds is weak. These findings that") == 1

    def test_reporting_verbs(self):
        from fingerprint.discourse import reporting_verbs_density
        assert reporting_verbs_density(["she", "argues", "they", "found"]) == pytest.approx(500.0)
