"""
Unit tests for grammatical-category features and alternations.

The POS-based metrics run against the dictionary stub tagger from conftest.

Usage:
    python -m pytest tests/test_grammar.py -v
"""

import pytest


class TestContentRatios:

    def test_lexical_density(self, tag_all):
        from fingerprint.grammar import content_function_ratio, lexical_density
        tagged = tag_all(["The big cat sat"])
        assert lexical_density(tagged) == pytest.approx(75.0)
        assert content_function_ratio(tagged) == pytest.approx(3.0)

    def test_grammatical_ratios(self, tag_all):
        from fingerprint.grammar import grammatical_ratios, nominal_verbal_ratio
        tagged = tag_all(["The big cat sat"])
        assert nominal_verbal_ratio(tagged) == pytest.approx(1.0)
        assert grammatical_ratios(tagged) == {"noun_verb": 1.0, "adj_noun": 1.0, "adv_verb": 0.0}

    def test_empty(self):
        from fingerprint.grammar import lexical_density, lexical_density_variability, open_class_ttr
        assert lexical_density([]) == 0.0
        assert open_class_ttr([]) == 0.0
        assert lexical_density_variability([]) == 0.0

    def test_determiners_and_prepositions(self, tag_all):
        from fingerprint.grammar import determiner_ratio, preposition_distribution
        assert determiner_ratio(["the", "a", "cat", "an"]) == pytest.approx(75.0)
        tagged = tag_all(["The cat in the hat with the bat in the box"])
        assert preposition_distribution(tagged) == {"in": 2, "with": 1}


class TestProcesses:

    @pytest.mark.parametrize("word,root", [
        ("went", "go"),
        ("is", "be"),
        ("walking", "walk"),
        ("played", "play"),
        ("runs", "run"),
    ])
    def test_verb_root(self, word, root):
        from fingerprint.grammar import verb_root
        assert verb_root(word) == root

    def test_hallidayan_processes(self, tag_all):
        from fingerprint.grammar import hallidayan_processes
        tagged = tag_all(["I think he walks and she is happy"])
        assert hallidayan_processes(tagged) == {
            "material": 1, "mental": 1, "relational": 1, "total": 3,
        }

    def test_hallidayan_total_floor(self):
        from fingerprint.grammar import hallidayan_processes
        assert hallidayan_processes([])["total"] == 1

    def test_dynamic_stative_ratio(self):
        from fingerprint.grammar import dynamic_stative_ratio
        assert dynamic_stative_ratio({"material": 2, "mental": 0, "relational": 0}) == 10.0
        assert dynamic_stative_ratio({"material": 2, "mental": 1, "relational": 0}) == 2.0
        assert dynamic_stative_ratio({"material": 0, "mental": 0, "relational": 0}) == 0.0


class TestTense:

    def test_present_perfect(self, tag_all):
        from fingerprint.grammar import present_perfect_ratio
        assert present_perfect_ratio(tag_all(["I have written it", "I wrote it"])) == pytest.approx(50.0)

    def test_sentence_tense(self, stub_tagger):
        from fingerprint.grammar import sentence_tense
        assert sentence_tense(stub_tagger.tag("I wrote it")) == "past"
        assert sentence_tense(stub_tagger.tag("He knows")) == "present"
        assert sentence_tense(stub_tagger.tag("I will run")) == "future"
        assert sentence_tense(stub_tagger.tag("The cat")) is None

    def test_tense_shift(self, tag_all):
        from fingerprint.grammar import tense_shift_inconsistency
        paragraph = tag_all(["I wrote it", "He knows it", "She knows it"])
        assert tense_shift_inconsistency([paragraph]) == pytest.approx(100 / 3)

    def test_shifts_do_not_cross_paragraphs(self, tag_all):
        from fingerprint.grammar import tense_shift_inconsistency
        paragraphs = [tag_all(["I wrote it"]), tag_all(["He knows it"])]
        assert tense_shift_inconsistency(paragraphs) == 0.0


class TestAlternations:

    def test_genitive(self):
        from fingerprint.grammar import genitive_alternation
        from fingerprint.tagging import TaggedSentence
        sentence = TaggedSentence(
            text="John's book of the house",
            tokens=("John", "'s", "book", "of", "the", "house"),
            tags=("NNP", "POS", "NN", "IN", "DT", "NN"),
        )
        assert genitive_alternation([sentence]) == pytest.approx(50.0)

    def test_dative(self, tag_all):
        from fingerprint.grammar import dative_alternation
        tagged = tag_all(["We gave him the book", "We gave books to him"])
        assert dative_alternation(tagged) == pytest.approx(50.0)

    def test_pied_piping(self):
        from fingerprint.grammar import pied_piping_score
        sentences = ["The man to whom I spoke", "The man who I spoke to"]
        assert pied_piping_score(sentences) == pytest.approx(50.0)
        assert pied_piping_score([]) == 0.0

    def test_adjective_ordering(self):
        from fingerprint.grammar import adjective_ordering_violations
        assert adjective_ordering_violations(["A red big ball", "A big red ball"]) == 1


class TestProvenance:

    def test_shell_noun_variety(self):
        from fingerprint.grammar import shell_noun_variety
        assert shell_noun_variety(["fact", "idea", "cat"]) == 2

    def test_idiom_ratio(self):
        from fingerprint.grammar import idiom_ratio
        assert idiom_ratio("It was a piece of cake", ["w"] * 10) == pytest.approx(100.0)
        assert idiom_ratio("", []) == 0.0
