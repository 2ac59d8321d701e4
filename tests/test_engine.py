"""
Unit tests for the fingerprint engine, labels and sample records.

Usage:
    python -m pytest tests/test_engine.py -v
"""

import pytest

from conftest import AI_TEXT, EXAMPLE_TEXT, HUMAN_TEXT, FailingTagger, StubTagger


class TestLabel:

    @pytest.mark.parametrize("value,expected", [
        ("H", "Human"),
        ("human", "Human"),
        ("AI", "Machine"),
        ("M", "Machine"),
        ("?", "Unknown"),
        ("", "Unknown"),
        (None, "Unknown"),
    ])
    def test_parse(self, value, expected):
        from fingerprint.engine import Label
        assert Label.parse(value).value == expected

    def test_parse_rejects_garbage(self):
        from fingerprint.engine import Label
        with pytest.raises(ValueError):
            Label.parse("robot")


class TestFingerprintEngine:

    def test_example_tier1(self):
        from fingerprint.engine import FingerprintEngine
        engine = FingerprintEngine(tagger=StubTagger(), seed=1)
        sample = engine.analyze(EXAMPLE_TEXT, name="example")

        tier1 = sample.features["tier1"]
        assert tier1["word_count"] == 10
        assert tier1["sentence_count"] == 2
        assert tier1["burstiness"] == pytest.approx(0.4)
        assert tier1["metadiscourse_density"] == pytest.approx(100.0)
        assert sample.sentence_lengths == (3, 7)

    def test_all_tiers_present(self):
        from fingerprint.engine import FingerprintEngine
        sample = FingerprintEngine(tagger=StubTagger(), seed=1).analyze(AI_TEXT)
        assert list(sample.features) == ["tier1", "tier2", "tier3", "tier4", "tier5", "tier6"]
        assert sample.partial is False
        assert "lexical_density" in sample.features["tier2"]

    def test_tier_subset_keeps_tier1(self):
        from fingerprint.engine import FingerprintEngine
        engine = FingerprintEngine(tagger=StubTagger(), tiers=["tier3"])
        assert engine.tiers == ["tier1", "tier3"]
        assert list(engine.analyze(AI_TEXT).features) == ["tier1", "tier3"]

    def test_unknown_tier(self):
        from fingerprint.engine import FingerprintEngine
        with pytest.raises(ValueError):
            FingerprintEngine(tiers=["tier9"])

    def test_failing_tagger_gives_partial_sample(self):
        from fingerprint.engine import FingerprintEngine
        sample = FingerprintEngine(tagger=FailingTagger(), seed=1).analyze(HUMAN_TEXT)

        assert sample.partial is True
        assert "tier2.lexical_density" in sample.omitted_metrics
        assert "lexical_density" not in sample.features["tier2"]
        # POS-free metrics are still there
        assert "hapax_ratio" in sample.features["tier2"]
        assert sample.burstiness > 0

    def test_tagging_disabled(self):
        from fingerprint.engine import FingerprintEngine
        engine = FingerprintEngine(use_tagger=False)
        assert engine.tagger is None
        sample = engine.analyze(AI_TEXT)
        assert sample.partial is True
        assert sample.features["tier1"]["word_count"] > 0

    def test_sentences_are_tagged_once(self):
        from fingerprint.engine import FingerprintEngine
        tagger = StubTagger()
        sample = FingerprintEngine(tagger=tagger, seed=1).analyze(AI_TEXT)
        # Sentence-level and paragraph-level metrics share one cache
        assert tagger.calls == sample.sentence_count

    def test_degenerate_input(self):
        from fingerprint.engine import FingerprintEngine
        sample = FingerprintEngine(tagger=StubTagger(), seed=1).analyze("")
        assert sample.word_count == 0
        assert sample.burstiness == 0.0
        assert sample.diversity == 0.0
        assert sample.metadiscourse_density == 0.0

    def test_seeded_vocd_is_reproducible(self):
        from fingerprint.engine import FingerprintEngine
        text = AI_TEXT + "\n\n" + HUMAN_TEXT
        engine = FingerprintEngine(tagger=StubTagger(), tiers=["tier3"], seed=7)
        first = engine.analyze(text).features["tier3"]["vocd_d"]
        second = engine.analyze(text).features["tier3"]["vocd_d"]
        assert first > 0
        assert first == second

    def test_label_is_parsed(self):
        from fingerprint.engine import FingerprintEngine, Label
        sample = FingerprintEngine(tagger=StubTagger()).analyze(EXAMPLE_TEXT, label="H")
        assert sample.external_label is Label.HUMAN


class TestRecords:

    def test_flat_record(self):
        from fingerprint.engine import FingerprintEngine
        sample = FingerprintEngine(tagger=StubTagger(), seed=1).analyze(EXAMPLE_TEXT, name="example")
        flat = sample.flat_record(risk={"veto": False}, z_scores={"z_cv": 1.0})

        assert flat["name"] == "example"
        assert flat["tier1.burstiness"] == pytest.approx(0.4)
        assert flat["tier1.metadiscourse.density"] == pytest.approx(100.0)
        assert flat["risk.veto"] is False
        assert flat["z.z_cv"] == 1.0
        # List-valued traces are not tabular
        assert "tier1.growth_curve" not in flat
        assert all(not isinstance(v, (dict, list, tuple)) for v in flat.values())

    def test_to_record(self):
        from fingerprint.engine import FingerprintEngine
        sample = FingerprintEngine(tagger=StubTagger()).analyze(EXAMPLE_TEXT, name="example")
        record = sample.to_record()
        assert record["name"] == "example"
        assert record["external_label"] == "Unknown"
        assert "risk" not in record
        assert record["features"]["tier1"]["word_count"] == 10
