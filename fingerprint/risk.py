"""
Risk Classifier: veto rule, then majority vote over the Tier-1 triad.

1. Veto: burstiness below the CV threshold short-circuits to AI/HIGH-RISK.
2. Per-metric status: Human-like / AI-like / Ambiguous against fixed bands
   (burstiness) or the configurable floors (diversity, metadiscourse).
3. Aggregate: two Human-like -> likely human; two AI-like -> likely AI;
   otherwise mixed.

Classification is a pure function of the features and the thresholds passed
in; nothing is cached, so threshold edits take effect on the next call.
"""

from dataclasses import asdict, dataclass

from pydantic import BaseModel, ConfigDict, Field

import config


class ThresholdConfig(BaseModel):
    """
    Operator-adjustable thresholds, shared by reference within a session.

    Values are validated on construction and on every assignment, so an
    out-of-range value is rejected before it is stored.
    """

    model_config = ConfigDict(validate_assignment=True)

    cv_threshold: float = Field(
        config.DEFAULT_CV_THRESHOLD, ge=0.0, le=config.CV_THRESHOLD_MAX,
        description="Burstiness veto cutoff",
    )
    sttr_threshold: float = Field(
        config.DEFAULT_STTR_THRESHOLD, ge=0.0, le=config.STTR_THRESHOLD_MAX,
        description="Diversity human-like floor",
    )
    metadiscourse_threshold: float = Field(
        config.DEFAULT_METADISCOURSE_THRESHOLD, ge=0.0, le=config.METADISCOURSE_THRESHOLD_MAX,
        description="Metadiscourse density (per 1k tokens) human-like floor",
    )


@dataclass(frozen=True)
class RiskAssessment:
    burstiness_status: str
    diversity_status: str
    metadiscourse_status: str
    overall_risk: str
    veto: bool

    @property
    def is_human_prediction(self) -> bool:
        """Predicted-positive in the calibrator's sense: the verdict mentions "human"."""
        return "human" in self.overall_risk.lower()

    def to_dict(self) -> dict:
        return asdict(self)


def _band(value: float, human_above: float, ai_below: float) -> str:
    if value > human_above:
        return config.STATUS_HUMAN
    if value < ai_below:
        return config.STATUS_AI
    return config.STATUS_AMBIGUOUS


def classify(burstiness: float, diversity: float, density: float,
             thresholds: ThresholdConfig) -> RiskAssessment:
    """Classify a Tier-1 triad against the given thresholds."""
    diversity_status = _band(diversity, thresholds.sttr_threshold, config.STTR_AI_BAND)
    metadiscourse_status = _band(density, thresholds.metadiscourse_threshold, config.METADISCOURSE_AI_BAND)

    # --- Veto: burstiness collapse overrides the other two signals ---
    if burstiness < thresholds.cv_threshold:
        return RiskAssessment(
            burstiness_status=config.STATUS_AI,
            diversity_status=diversity_status,
            metadiscourse_status=metadiscourse_status,
            overall_risk=config.VERDICT_VETO,
            veto=True,
        )

    burstiness_status = _band(burstiness, config.CV_HUMAN_BAND, config.CV_AI_BAND)
    statuses = [burstiness_status, diversity_status, metadiscourse_status]

    if statuses.count(config.STATUS_HUMAN) >= 2:
        overall = config.VERDICT_HUMAN
    elif statuses.count(config.STATUS_AI) >= 2:
        overall = config.VERDICT_AI
    else:
        overall = config.VERDICT_MIXED

    return RiskAssessment(
        burstiness_status=burstiness_status,
        diversity_status=diversity_status,
        metadiscourse_status=metadiscourse_status,
        overall_risk=overall,
        veto=False,
    )


def assess(sample, thresholds: ThresholdConfig) -> RiskAssessment:
    """Classify a TextSample using the thresholds as they are right now."""
    return classify(sample.burstiness, sample.diversity, sample.metadiscourse_density, thresholds)
