"""
Pydantic models for request/response validation in the REST API.
"""

from typing import Any

from pydantic import BaseModel, Field, field_validator

import config
from fingerprint.engine import Label


def _check_label(value: str | None) -> str | None:
    if value is not None:
        Label.parse(value)
    return value


class AnalyzeTextRequest(BaseModel):
    """Request model for single text analysis."""

    text: str = Field(
        ...,
        min_length=1,
        max_length=config.API_MAX_TEXT_CHARS,
        description=f"Text to analyze (max {config.API_MAX_TEXT_CHARS:,} characters)"
    )
    name: str | None = Field(
        default=None,
        max_length=200,
        description="Display name for the sample"
    )
    label: str | None = Field(
        default=None,
        description="External label: Human/H, Machine/AI or Unknown/?"
    )

    @field_validator('text')
    @classmethod
    def text_not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Text cannot be empty or whitespace only")
        return v

    @field_validator('label')
    @classmethod
    def label_known(cls, v: str | None) -> str | None:
        return _check_label(v)


class AddSamplesRequest(BaseModel):
    """Request model for adding several pasted texts to the corpus."""

    samples: list[AnalyzeTextRequest] = Field(
        ...,
        min_length=1,
        max_length=config.API_MAX_BATCH_SIZE,
        description=f"Texts to analyze and add (max {config.API_MAX_BATCH_SIZE} items)"
    )


class LabelUpdate(BaseModel):
    """Request model for relabelling one corpus sample."""

    label: str = Field(..., description="Human/H, Machine/AI or Unknown/?")

    @field_validator('label')
    @classmethod
    def label_known(cls, v: str) -> str:
        return _check_label(v)


class ThresholdUpdate(BaseModel):
    """Partial threshold update; omitted fields keep their current value."""

    cv_threshold: float | None = Field(
        default=None, ge=0.0, le=config.CV_THRESHOLD_MAX,
        description="Burstiness veto cutoff"
    )
    sttr_threshold: float | None = Field(
        default=None, ge=0.0, le=config.STTR_THRESHOLD_MAX,
        description="Diversity human-like floor"
    )
    metadiscourse_threshold: float | None = Field(
        default=None, ge=0.0, le=config.METADISCOURSE_THRESHOLD_MAX,
        description="Metadiscourse density human-like floor (per 1k tokens)"
    )


class ThresholdsResponse(BaseModel):
    """Current threshold configuration."""

    cv_threshold: float
    sttr_threshold: float
    metadiscourse_threshold: float


class RiskResponse(BaseModel):
    """Risk classification of one sample."""

    burstiness_status: str
    diversity_status: str
    metadiscourse_status: str
    overall_risk: str
    veto: bool


class SampleResponse(BaseModel):
    """Per-sample record: features grouped by tier, risk and z-scores."""

    index: int | None = Field(default=None, description="Position in the corpus, if stored")
    name: str
    external_label: str
    partial: bool = Field(..., description="True when POS-dependent metrics were omitted")
    omitted_metrics: list[str] = Field(default_factory=list)
    features: dict[str, dict[str, Any]] = Field(..., description="Metric values keyed by tier")
    risk: RiskResponse
    z_scores: dict[str, float] | None = None


class IngestionFailure(BaseModel):
    """A file that could not be turned into text."""

    filename: str
    reason: str


class AddSamplesResponse(BaseModel):
    """Response model for corpus additions."""

    added: list[SampleResponse]
    failures: list[IngestionFailure] = Field(default_factory=list)
    corpus_size: int
    processing_time_seconds: float = Field(..., ge=0.0)


class SampleListResponse(BaseModel):
    """All corpus samples, in insertion order."""

    samples: list[SampleResponse]
    total: int


class SummaryResponse(BaseModel):
    """Corpus-level record."""

    thresholds: ThresholdsResponse
    stats: dict[str, Any]
    confusion: dict[str, Any]
    outliers: list[dict[str, Any]]
    verdict_distribution: dict[str, int]
    veto_count: int
    insight: str
    methods_paragraph: str


class SweepPoint(BaseModel):
    value: float
    youden_j: float
    sensitivity: float
    specificity: float


class SweepResponse(BaseModel):
    """Youden's J across candidate values of one threshold."""

    threshold: str
    current_value: float
    results: list[SweepPoint]
    best_value: float | None = Field(default=None, description="None when no sample is labelled")
    best_youden_j: float | None = None


class CompareResponse(BaseModel):
    """Burrows' Delta between two corpus samples."""

    a: dict[str, Any]
    b: dict[str, Any]
    burrows_delta: float


class HealthResponse(BaseModel):
    """Response model for health check endpoint."""

    status: str = Field(default="healthy")
    engine_loaded: bool = Field(default=False)
    pos_tagging_enabled: bool = Field(default=False)
    corpus_size: int = Field(default=0)
    version: str = Field(default="1.0.0")


class InfoResponse(BaseModel):
    """Response model for API info endpoint."""

    version: str
    tiers: list[str]
    thresholds: ThresholdsResponse
    classifier_bands: dict[str, float]
    supported_file_types: list[str]
    limits: dict[str, int]


class ErrorResponse(BaseModel):
    """Standard error response model."""

    error: str = Field(..., description="Error type/category")
    detail: str = Field(..., description="Detailed error message")
    status_code: int = Field(..., description="HTTP status code")
