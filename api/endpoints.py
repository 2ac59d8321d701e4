"""
API route handlers for the Stylistic Fingerprint REST API.
"""

import time
from concurrent.futures import ThreadPoolExecutor
from typing import Any

from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, UploadFile

from api.models import (
    AnalyzeTextRequest,
    AddSamplesRequest,
    AddSamplesResponse,
    CompareResponse,
    HealthResponse,
    InfoResponse,
    LabelUpdate,
    SampleListResponse,
    SampleResponse,
    SummaryResponse,
    SweepResponse,
    ThresholdUpdate,
    ThresholdsResponse,
)
from api.auth import verify_api_key
from api.utils import read_upload
from fingerprint.calibration import Corpus
from fingerprint.engine import FingerprintEngine, Label, TextSample
from fingerprint.ingest import IngestionError
from fingerprint.risk import assess
import config

API_VERSION = "1.0.0"


# Create API router
router = APIRouter(prefix="/api/v1", tags=["Stylistic Fingerprint"])


# Global engine and session corpus (set by main app during lifespan)
_engine: FingerprintEngine | None = None
_corpus: Corpus | None = None


def get_engine() -> FingerprintEngine:
    """Get the global engine instance."""
    if _engine is None:
        raise HTTPException(
            status_code=503,
            detail="Engine not initialized. Please wait for the server to fully start."
        )
    return _engine


def get_corpus() -> Corpus:
    """Get the session corpus."""
    if _corpus is None:
        raise HTTPException(
            status_code=503,
            detail="Corpus not initialized. Please wait for the server to fully start."
        )
    return _corpus


def set_engine(engine: FingerprintEngine, corpus: Corpus | None = None):
    """Set the global engine and a fresh corpus (called during app startup)."""
    global _engine, _corpus
    _engine = engine
    _corpus = corpus if corpus is not None else Corpus(engine=engine)


def is_initialized() -> bool:
    return _engine is not None


def sample_record(sample: TextSample, index: int | None = None,
                  z_scores: dict | None = None) -> dict[str, Any]:
    """Record for one sample, classified against the current thresholds."""
    record = sample.to_record(
        risk=assess(sample, get_corpus().thresholds).to_dict(),
        z_scores=z_scores,
    )
    record["index"] = index
    return record


def _add_to_corpus(documents: list[tuple[str, str, Label]]) -> list[dict[str, Any]]:
    """Analyze (name, text, label) triples in parallel, then append in order."""
    engine = get_engine()
    corpus = get_corpus()

    def analyze_single(doc: tuple[str, str, Label]) -> TextSample:
        name, text, label = doc
        return engine.analyze(text, name=name, label=label)

    if not documents:
        return []

    with ThreadPoolExecutor(max_workers=min(len(documents), config.API_BATCH_WORKERS)) as executor:
        samples = list(executor.map(analyze_single, documents))

    indices = [corpus.add(sample) for sample in samples]
    stats = corpus.stats()
    return [
        sample_record(sample, index, corpus.z_scores(sample, stats))
        for sample, index in zip(samples, indices)
    ]


@router.post("/analyze", response_model=SampleResponse)
async def analyze_text(
    request: AnalyzeTextRequest,
    _: str = Depends(verify_api_key)
) -> dict[str, Any]:
    """
    Fingerprint a single text without adding it to the corpus.

    **Authentication**: Requires valid API key in `X-API-Key` header.

    **Returns**:
    - `features`: metric values grouped by tier (`tier1` .. `tier6`)
    - `risk`: per-metric statuses and overall verdict under the current thresholds
    - `partial`: true when POS-dependent metrics were omitted
    """
    engine = get_engine()
    sample = engine.analyze(
        request.text,
        name=request.name or "Pasted Text",
        label=request.label,
    )
    return sample_record(sample)


@router.post("/corpus/samples", response_model=AddSamplesResponse)
async def add_samples(
    request: AddSamplesRequest,
    _: str = Depends(verify_api_key)
) -> dict[str, Any]:
    """
    Analyze pasted texts in parallel and append them to the corpus.

    **Authentication**: Requires valid API key in `X-API-Key` header.

    Unnamed texts are called "Pasted Text N" after their corpus position.
    """
    start_time = time.time()
    corpus = get_corpus()

    documents = [
        (item.name or f"Pasted Text {len(corpus) + offset + 1}", item.text, Label.parse(item.label))
        for offset, item in enumerate(request.samples)
    ]
    added = _add_to_corpus(documents)

    return {
        "added": added,
        "failures": [],
        "corpus_size": len(corpus),
        "processing_time_seconds": round(time.time() - start_time, 3),
    }


@router.post("/corpus/files", response_model=AddSamplesResponse)
async def add_files(
    files: list[UploadFile] = File(...),
    label: str | None = Form(None),
    _: str = Depends(verify_api_key)
) -> dict[str, Any]:
    """
    Upload TXT, PDF or DOCX documents and append them to the corpus.

    **Authentication**: Requires valid API key in `X-API-Key` header.

    **Parameters**:
    - `files`: one or more files (max 10MB each)
    - `label`: optional external label applied to every file

    **Errors**:
    - A single unreadable file fails the request (400, or 413 when too large)
    - In a multi-file upload each unreadable file is reported under `failures`
      and the rest are still added

    **Example**:
    ```bash
    curl -X POST "http://localhost:8000/api/v1/corpus/files" \\
      -H "X-API-Key: your-key" \\
      -F "files=@essay.pdf" -F "files=@notes.docx" -F "label=H"
    ```
    """
    start_time = time.time()
    if len(files) > config.API_MAX_BATCH_SIZE:
        raise HTTPException(
            status_code=400,
            detail=f"Too many files ({len(files)}). Maximum per request: {config.API_MAX_BATCH_SIZE}"
        )

    try:
        parsed_label = Label.parse(label)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))

    strict = len(files) == 1
    documents = []
    failures = []
    for upload in files:
        try:
            filename, text = await read_upload(upload, strict=strict)
        except IngestionError as e:
            failures.append({"filename": e.filename, "reason": e.reason})
            continue
        documents.append((filename, text, parsed_label))

    added = _add_to_corpus(documents)

    return {
        "added": added,
        "failures": failures,
        "corpus_size": len(get_corpus()),
        "processing_time_seconds": round(time.time() - start_time, 3),
    }


@router.get("/corpus/samples", response_model=SampleListResponse)
async def list_samples(_: str = Depends(verify_api_key)) -> dict[str, Any]:
    """All corpus samples with risk and z-scores under the current thresholds."""
    records = get_corpus().sample_records()
    for index, record in enumerate(records):
        record["index"] = index
    return {"samples": records, "total": len(records)}


@router.put("/corpus/samples/{index}/label", response_model=SampleResponse)
async def update_label(
    index: int,
    update: LabelUpdate,
    _: str = Depends(verify_api_key)
) -> dict[str, Any]:
    """Change the external label of one sample; the sample itself is unchanged."""
    corpus = get_corpus()
    try:
        sample = corpus.set_label(index, update.label)
    except IndexError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return sample_record(sample, index, corpus.z_scores(sample))


@router.get("/corpus/summary", response_model=SummaryResponse)
async def corpus_summary(
    top_k: int = Query(config.OUTLIER_TOP_K, ge=1, le=100),
    _: str = Depends(verify_api_key)
) -> dict[str, Any]:
    """
    Corpus record: statistics, confusion matrix, outliers and verdict distribution.

    The confusion matrix only counts samples labelled Human or Machine.
    """
    return get_corpus().summary(top_k=top_k)


@router.get("/corpus/sweep", response_model=SweepResponse)
async def sweep_threshold(
    threshold: str = Query(..., description="cv_threshold, sttr_threshold or metadiscourse_threshold"),
    _: str = Depends(verify_api_key)
) -> dict[str, Any]:
    """Youden's J over the configured grid for one threshold; the live thresholds are unchanged."""
    try:
        return get_corpus().sweep_threshold(threshold)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/corpus/compare", response_model=CompareResponse)
async def compare_samples(
    a: int = Query(..., ge=0),
    b: int = Query(..., ge=0),
    _: str = Depends(verify_api_key)
) -> dict[str, Any]:
    """Burrows' Delta between samples ``a`` and ``b``."""
    corpus = get_corpus()
    for index in (a, b):
        if index >= len(corpus):
            raise HTTPException(status_code=404, detail=f"No sample at index {index}")
    return corpus.compare(a, b)


@router.get("/thresholds", response_model=ThresholdsResponse)
async def get_thresholds(_: str = Depends(verify_api_key)) -> dict[str, Any]:
    """Current threshold configuration."""
    return get_corpus().thresholds.model_dump()


@router.put("/thresholds", response_model=ThresholdsResponse)
async def update_thresholds(
    update: ThresholdUpdate,
    _: str = Depends(verify_api_key)
) -> dict[str, Any]:
    """
    Set any of the three thresholds; omitted fields keep their value.

    Every later verdict, z-score and confusion matrix uses the new values.
    """
    thresholds = get_corpus().thresholds
    for name, value in update.model_dump(exclude_none=True).items():
        setattr(thresholds, name, value)
    return thresholds.model_dump()


@router.get("/health", response_model=HealthResponse)
async def health_check() -> dict[str, Any]:
    """
    Health check endpoint.

    **Authentication**: Not required.
    """
    if not is_initialized():
        return {
            "status": "unhealthy",
            "engine_loaded": False,
            "pos_tagging_enabled": False,
            "corpus_size": 0,
            "version": API_VERSION,
        }
    return {
        "status": "healthy",
        "engine_loaded": True,
        "pos_tagging_enabled": get_engine().use_tagger,
        "corpus_size": len(get_corpus()),
        "version": API_VERSION,
    }


@router.get("/info", response_model=InfoResponse)
async def api_info() -> dict[str, Any]:
    """
    Engine configuration, thresholds and limits.

    **Authentication**: Not required.
    """
    engine = get_engine()
    return {
        "version": API_VERSION,
        "tiers": engine.tiers,
        "thresholds": get_corpus().thresholds.model_dump(),
        "classifier_bands": {
            "cv_human_band": config.CV_HUMAN_BAND,
            "cv_ai_band": config.CV_AI_BAND,
            "sttr_ai_band": config.STTR_AI_BAND,
            "metadiscourse_ai_band": config.METADISCOURSE_AI_BAND,
        },
        "supported_file_types": list(config.SUPPORTED_EXTENSIONS),
        "limits": {
            "max_text_chars": config.API_MAX_TEXT_CHARS,
            "max_batch_size": config.API_MAX_BATCH_SIZE,
            "max_file_size_mb": config.API_MAX_FILE_SIZE_MB,
        },
    }
