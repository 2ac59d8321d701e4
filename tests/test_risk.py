"""
Unit tests for the risk classifier and threshold configuration.

Usage:
    python -m pytest tests/test_risk.py -v
"""

import pytest
from pydantic import ValidationError

import config


class TestThresholdConfig:

    def test_defaults(self):
        from fingerprint.risk import ThresholdConfig
        t = ThresholdConfig()
        assert (t.cv_threshold, t.sttr_threshold, t.metadiscourse_threshold) == (0.25, 0.45, 8.0)

    def test_negative_rejected_on_construction(self):
        from fingerprint.risk import ThresholdConfig
        with pytest.raises(ValidationError):
            ThresholdConfig(cv_threshold=-0.1)

    def test_assignment_is_validated(self):
        from fingerprint.risk import ThresholdConfig
        t = ThresholdConfig()
        with pytest.raises(ValidationError):
            t.sttr_threshold = -1
        with pytest.raises(ValidationError):
            t.sttr_threshold = 1.5
        assert t.sttr_threshold == 0.45

    def test_independent_assignment(self):
        from fingerprint.risk import ThresholdConfig
        t = ThresholdConfig()
        t.metadiscourse_threshold = 12.0
        assert t.metadiscourse_threshold == 12.0
        assert t.cv_threshold == 0.25


class TestClassify:

    def test_veto_overrides_other_signals(self):
        from fingerprint.risk import ThresholdConfig, classify
        result = classify(0.10, 0.90, 50.0, ThresholdConfig())
        assert result.overall_risk == "AI/HIGH-RISK"
        assert result.veto is True
        assert result.burstiness_status == "AI-like"
        # The other two statuses still follow the normal rule
        assert result.diversity_status == "Human-like"
        assert result.metadiscourse_status == "Human-like"

    def test_majority_human(self):
        from fingerprint.risk import ThresholdConfig, classify
        result = classify(0.35, 0.55, 2.0, ThresholdConfig())
        assert result.burstiness_status == "Human-like"
        assert result.diversity_status == "Human-like"
        assert result.metadiscourse_status == "AI-like"
        assert result.overall_risk == config.VERDICT_HUMAN
        assert result.veto is False

    def test_majority_ai(self):
        from fingerprint.risk import ThresholdConfig, classify
        # Burstiness clears the veto but sits in the ambiguous band
        result = classify(0.26, 0.30, 1.0, ThresholdConfig())
        assert result.burstiness_status == "Ambiguous"
        assert result.overall_risk == config.VERDICT_AI

    def test_mixed(self):
        from fingerprint.risk import ThresholdConfig, classify
        result = classify(0.35, 0.30, 6.0, ThresholdConfig())
        assert [result.burstiness_status, result.diversity_status, result.metadiscourse_status] == [
            "Human-like", "AI-like", "Ambiguous",
        ]
        assert result.overall_risk == config.VERDICT_MIXED

    def test_bands_are_strict(self):
        from fingerprint.risk import ThresholdConfig, classify
        # Exactly on the cutoffs: no veto, every status ambiguous
        result = classify(0.30, 0.45, 8.0, ThresholdConfig(cv_threshold=0.30))
        assert result.veto is False
        assert result.diversity_status == "Ambiguous"
        assert result.metadiscourse_status == "Ambiguous"
        assert result.burstiness_status == "Ambiguous"

    def test_threshold_change_applies_immediately(self):
        from fingerprint.risk import ThresholdConfig, classify
        t = ThresholdConfig()
        assert classify(0.28, 0.6, 10.0, t).veto is False
        t.cv_threshold = 0.3
        assert classify(0.28, 0.6, 10.0, t).veto is True

    def test_human_prediction_flag(self):
        from fingerprint.risk import ThresholdConfig, classify
        t = ThresholdConfig()
        assert classify(0.35, 0.55, 20.0, t).is_human_prediction is True
        assert classify(0.10, 0.55, 20.0, t).is_human_prediction is False

    def test_to_dict(self):
        from fingerprint.risk import ThresholdConfig, classify
        d = classify(0.35, 0.55, 20.0, ThresholdConfig()).to_dict()
        assert set(d) == {
            "burstiness_status", "diversity_status", "metadiscourse_status", "overall_risk", "veto",
        }
