"""
Unit tests for the corpus calibrator.

Samples are built directly from Tier-1 values so every statistic can be
checked by hand.

Usage:
    python -m pytest tests/test_calibration.py -v
"""

import pytest

import config
from conftest import AI_TEXT, HUMAN_TEXT, StubTagger


def make_sample(burstiness, diversity, density, label="?", name="s", tokens=("the", "cat")):
    from fingerprint.engine import Label, TextSample
    return TextSample(
        name=name,
        tokens=tuple(tokens),
        sentences=("The cat.",),
        sentence_lengths=(len(tokens),),
        features={"tier1": {
            "burstiness": burstiness,
            "sttr": diversity,
            "metadiscourse_density": density,
        }},
        external_label=Label.parse(label),
    )


def make_corpus(*samples, **thresholds):
    from fingerprint.calibration import Corpus
    from fingerprint.risk import ThresholdConfig
    corpus = Corpus(ThresholdConfig(**thresholds))
    for sample in samples:
        corpus.add(sample)
    return corpus


def separable_corpus():
    """Machine texts are only caught by the burstiness veto."""
    return make_corpus(
        make_sample(0.40, 0.6, 10.0, "H"),
        make_sample(0.35, 0.6, 10.0, "H"),
        make_sample(0.10, 0.6, 10.0, "AI"),
        make_sample(0.15, 0.6, 10.0, "AI"),
    )


class TestStats:

    def test_mean_and_population_std(self):
        corpus = make_corpus(make_sample(0.1, 0.5, 4.0), make_sample(0.5, 0.5, 8.0))
        stats = corpus.stats()
        assert stats["count"] == 2
        assert stats["total_words"] == 4
        assert stats["mean_burstiness"] == pytest.approx(0.3)
        assert stats["std_burstiness"] == pytest.approx(0.2)
        assert stats["std_diversity"] == 0.0
        assert stats["mean_metadiscourse_density"] == pytest.approx(6.0)

    def test_empty_corpus(self):
        corpus = make_corpus()
        assert corpus.stats()["mean_burstiness"] == 0.0
        assert corpus.insight() == "No samples analyzed yet."
        assert corpus.methods_paragraph() == ""
        assert corpus.outliers() == []


class TestZScores:

    def test_sign_follows_threshold(self):
        corpus = make_corpus(make_sample(0.1, 0.5, 4.0), make_sample(0.5, 0.5, 8.0))
        high = corpus.z_scores(corpus[1])
        low = corpus.z_scores(corpus[0])
        assert high["z_cv"] == pytest.approx((0.5 - 0.25) / 0.2)
        assert low["z_cv"] == pytest.approx((0.1 - 0.25) / 0.2)
        assert high["z_cv"] > 0 > low["z_cv"]

    def test_zero_std_gives_zero(self):
        corpus = make_corpus(make_sample(0.4, 0.5, 9.0), make_sample(0.4, 0.5, 9.0))
        assert corpus.z_scores(corpus[0]) == {"z_cv": 0.0, "z_sttr": 0.0, "z_md": 0.0}

    def test_follow_threshold_changes(self):
        corpus = make_corpus(make_sample(0.1, 0.5, 4.0), make_sample(0.5, 0.5, 8.0))
        corpus.thresholds.cv_threshold = 0.5
        assert corpus.z_scores(corpus[1])["z_cv"] == 0.0

    def test_outlier_ordering(self):
        corpus = make_corpus(
            make_sample(0.1, 0.5, 9.0, name="low"),
            make_sample(0.5, 0.5, 9.0, name="high"),
        )
        ranked = corpus.outliers()
        assert [r["name"] for r in ranked] == ["high", "low"]
        assert ranked[0]["max_abs_z"] == pytest.approx(1.25)
        assert len(corpus.outliers(top_k=1)) == 1


class TestConfusion:

    def test_one_of_each_cell(self):
        corpus = make_corpus(
            make_sample(0.10, 0.5, 10.0, "H"),    # vetoed human -> FN
            make_sample(0.40, 0.6, 10.0, "H"),    # TP
            make_sample(0.40, 0.6, 10.0, "AI"),   # FP
            make_sample(0.10, 0.3, 1.0, "AI"),    # TN
            make_sample(0.40, 0.6, 10.0, "?"),    # unlabelled, ignored
        )
        c = corpus.confusion()
        assert (c["tp"], c["fp"], c["tn"], c["fn"]) == (1, 1, 1, 1)
        assert c["labelled"] == 4
        assert c["sensitivity"] == pytest.approx(0.5)
        assert c["specificity"] == pytest.approx(0.5)
        assert c["youden_j"] == pytest.approx(0.0)

    def test_cells_sum_to_labelled(self):
        c = separable_corpus().confusion()
        assert c["tp"] + c["fp"] + c["tn"] + c["fn"] == c["labelled"] == 4
        assert 0.0 <= c["sensitivity"] <= 1.0
        assert 0.0 <= c["specificity"] <= 1.0

    def test_no_labels(self):
        c = make_corpus(make_sample(0.4, 0.6, 10.0)).confusion()
        assert c["labelled"] == 0
        assert c["youden_j"] == -1

    def test_relabel_updates_confusion(self):
        corpus = make_corpus(make_sample(0.40, 0.6, 10.0, "H"))
        assert corpus.confusion()["tp"] == 1
        corpus.set_label(0, "AI")
        assert corpus.confusion()["fp"] == 1

    def test_set_label_errors(self):
        corpus = make_corpus(make_sample(0.4, 0.6, 10.0))
        with pytest.raises(IndexError):
            corpus.set_label(3, "H")
        with pytest.raises(ValueError):
            corpus.set_label(0, "robot")


class TestVerdicts:

    def test_distribution_and_veto_count(self):
        corpus = separable_corpus()
        distribution = corpus.verdict_distribution()
        assert sum(distribution.values()) == 4
        assert distribution[config.VERDICT_VETO] == 2
        assert distribution[config.VERDICT_HUMAN] == 2
        assert corpus.veto_count() == 2

    def test_insight_mentions_high_risk(self):
        corpus = make_corpus(
            make_sample(0.40, 0.6, 10.0),
            make_sample(0.45, 0.6, 10.0),
            make_sample(0.10, 0.6, 10.0),
        )
        insight = corpus.insight()
        assert insight.startswith("Corpus averages are human-like")
        assert "1 text drives CV down" in insight
        assert "1 file flagged as HIGH RISK" in insight


class TestSweep:

    def test_finds_best_cv_threshold(self):
        corpus = separable_corpus()
        result = corpus.sweep_threshold("cv_threshold", [0.05, 0.2, 0.3, 0.5])
        assert [r["youden_j"] for r in result["results"]] == pytest.approx([0.0, 1.0, 1.0, 0.0])
        assert result["best_value"] == pytest.approx(0.2)
        assert result["best_youden_j"] == pytest.approx(1.0)

    def test_does_not_touch_thresholds(self):
        corpus = separable_corpus()
        corpus.sweep_threshold("cv_threshold")
        assert corpus.thresholds.cv_threshold == 0.25

    def test_default_grid(self):
        result = separable_corpus().sweep_threshold("sttr_threshold")
        assert len(result["results"]) == len(config.SWEEP_GRIDS["sttr_threshold"])

    def test_unlabelled_has_no_best(self):
        corpus = make_corpus(make_sample(0.4, 0.6, 10.0))
        result = corpus.sweep_threshold("cv_threshold", [0.1, 0.2])
        assert result["best_value"] is None

    def test_unknown_threshold(self):
        with pytest.raises(ValueError):
            separable_corpus().sweep_threshold("bogus")


class TestReporting:

    def test_methods_paragraph(self):
        text = separable_corpus().methods_paragraph()
        assert "($N$=4)" in text
        assert "Youden's $J$=1.00" in text
        assert "CV$<$0.25" in text

    def test_methods_paragraph_without_labels(self):
        text = make_corpus(make_sample(0.4, 0.6, 10.0)).methods_paragraph()
        assert "$J$=N/A" in text

    def test_summary_keys(self):
        summary = separable_corpus().summary(top_k=2)
        assert set(summary) == {
            "thresholds", "stats", "confusion", "outliers", "verdict_distribution",
            "veto_count", "insight", "methods_paragraph",
        }
        assert len(summary["outliers"]) == 2

    def test_sample_records(self):
        records = separable_corpus().sample_records(flat=True)
        assert len(records) == 4
        assert records[2]["risk.veto"] is True
        assert "z.z_cv" in records[0]

    def test_compare(self):
        corpus = make_corpus(
            make_sample(0.4, 0.6, 10.0, name="a", tokens=("the", "cat", "sat")),
            make_sample(0.4, 0.6, 10.0, name="b", tokens=("the", "cat", "sat")),
        )
        result = corpus.compare(0, 1)
        assert result["burrows_delta"] == 0.0
        assert result["b"]["name"] == "b"


class TestCorpusAnalysis:

    def test_add_text_names_and_labels(self):
        from fingerprint.calibration import Corpus
        from fingerprint.engine import FingerprintEngine, Label
        corpus = Corpus(engine=FingerprintEngine(tagger=StubTagger(), tiers=["tier1"]))
        first = corpus.add_text("The cat sat. The dog ran away quickly.", label="H")
        second = corpus.add_text("Another text here.")
        assert first.name == "Pasted Text 1"
        assert second.name == "Pasted Text 2"
        assert first.external_label is Label.HUMAN
        assert len(corpus) == 2

    def test_compare_is_symmetric(self):
        from fingerprint.calibration import Corpus
        from fingerprint.engine import FingerprintEngine
        corpus = Corpus(engine=FingerprintEngine(tagger=StubTagger(), tiers=["tier1"]))
        corpus.add_text(AI_TEXT)
        corpus.add_text(HUMAN_TEXT)
        forward = corpus.compare(0, 1)["burrows_delta"]
        assert forward > 0
        assert forward == pytest.approx(corpus.compare(1, 0)["burrows_delta"])
