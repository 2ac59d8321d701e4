"""
Stylistic Fingerprint REST API

FastAPI-based REST API for stylometric fingerprinting and corpus calibration.

Features:
- Single text fingerprinting (six metric tiers)
- Session corpus built from pasted texts or uploaded files (TXT, PDF, DOCX)
- Operator-adjustable thresholds with immediate re-classification
- Confusion matrix, Youden's J, outliers and threshold sweeps
- API key authentication
- Auto-generated OpenAPI documentation at /docs

Usage:
    uvicorn server:app --host 0.0.0.0 --port 8000 --reload
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError

from fingerprint.engine import FingerprintEngine
from api import endpoints
from api.endpoints import router, API_VERSION
from api.models import ErrorResponse
import config


def _format_errors(errors) -> str:
    messages = []
    for error in errors:
        field = " -> ".join(str(x) for x in error["loc"])
        messages.append(f"{field}: {error['msg']}")
    return "; ".join(messages)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup and shutdown events.
    Builds the engine (and loads the POS tagger) on startup.
    """
    print("=" * 60)
    print("🚀 Starting Stylistic Fingerprint API...")
    print("=" * 60)

    try:
        if not endpoints.is_initialized():
            endpoints.set_engine(FingerprintEngine())

        engine = endpoints.get_engine()
        tagger = engine.tagger
        thresholds = endpoints.get_corpus().thresholds

        print("✓ Engine ready")
        print(f"  - Tiers: {', '.join(engine.tiers)}")
        if tagger is not None:
            print(f"  - POS tagger: {type(tagger).__name__}")
        else:
            print("⚠ POS tagger unavailable, grammatical metrics will be omitted")
        print(f"  - Thresholds: CV<{thresholds.cv_threshold}, "
              f"STTR>{thresholds.sttr_threshold}, MD>{thresholds.metadiscourse_threshold}")
        print("=" * 60)
        print("✓ API ready to accept requests")
        print(f"📖 Documentation: http://localhost:{config.API_PORT}/docs")
        print(f"🏥 Health check: http://localhost:{config.API_PORT}/api/v1/health")
        print("=" * 60)

    except Exception as e:
        print(f"❌ Failed to start engine: {e}")
        raise

    yield

    print("\n" + "=" * 60)
    print("🛑 Shutting down API server...")
    print("=" * 60)


app = FastAPI(
    title="Stylistic Fingerprint API",
    description="""
    REST API for stylometric fingerprinting of texts and corpus-level calibration.

    ## Features

    - **Fingerprinting**: burstiness, lexical diversity, metadiscourse, syntax,
      discourse, readability and grammatical metrics in six tiers
    - **Risk Classifier**: burstiness veto, then a majority vote over the
      burstiness / STTR / metadiscourse triad
    - **Corpus Calibration**: z-scores, confusion matrix, Youden's J, outliers,
      threshold sweeps
    - **File Upload**: TXT, PDF and DOCX

    ## Authentication

    All corpus and analysis endpoints require an API key passed via the `X-API-Key` header.
    """,
    version=API_VERSION,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# CORS middleware - allow requests from any origin (configure as needed for production)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Global exception handlers
@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle request validation errors with detailed messages."""
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=ErrorResponse(
            error="ValidationError",
            detail=_format_errors(exc.errors()),
            status_code=422,
        ).model_dump()
    )


@app.exception_handler(ValidationError)
async def threshold_validation_handler(request: Request, exc: ValidationError):
    """Out-of-range values rejected by a model after the request was parsed."""
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=ErrorResponse(
            error="ValidationError",
            detail=_format_errors(exc.errors()),
            status_code=422,
        ).model_dump()
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=ErrorResponse(
            error="InternalServerError",
            detail=str(exc),
            status_code=500,
        ).model_dump()
    )


# Include API routes
app.include_router(router)


@app.get("/", tags=["Root"])
async def root():
    """API root endpoint with basic information and links."""
    return {
        "message": "Stylistic Fingerprint API",
        "version": API_VERSION,
        "documentation": "/docs",
        "health_check": "/api/v1/health",
        "api_info": "/api/v1/info",
        "endpoints": {
            "analyze_text": "POST /api/v1/analyze",
            "add_samples": "POST /api/v1/corpus/samples",
            "add_files": "POST /api/v1/corpus/files",
            "list_samples": "GET /api/v1/corpus/samples",
            "update_label": "PUT /api/v1/corpus/samples/{index}/label",
            "summary": "GET /api/v1/corpus/summary",
            "sweep": "GET /api/v1/corpus/sweep",
            "compare": "GET /api/v1/corpus/compare",
            "thresholds": "GET|PUT /api/v1/thresholds",
        }
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "server:app",
        host=config.API_HOST,
        port=config.API_PORT,
        reload=True,
        log_level="info"
    )
