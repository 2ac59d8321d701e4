"""
Document ingestion: plain text, PDF and DOCX to a decoded string.

Extraction happens at the boundary; the engine only ever sees text. A
document that cannot be read fails on its own with an ``IngestionError``
naming the file, and batch helpers carry on with the rest.
"""

import io
import logging
from pathlib import Path

import config

logger = logging.getLogger(__name__)


class IngestionError(Exception):
    """A single document could not be turned into text."""

    def __init__(self, filename: str, reason: str):
        self.filename = filename
        self.reason = reason
        super().__init__(f"{filename}: {reason}")


def _extract_pdf(content: bytes) -> str:
    import pdfplumber

    with pdfplumber.open(io.BytesIO(content)) as pdf:
        pages = [page.extract_text() or "" for page in pdf.pages]
    return "\n\n".join(pages)


def _extract_docx(content: bytes) -> str:
    from docx import Document

    doc = Document(io.BytesIO(content))
    paragraphs = [p.text for p in doc.paragraphs if p.text.strip()]
    return "\n\n".join(paragraphs)


def extract_text(filename: str, content: bytes) -> str:
    """
    Extract text from a TXT, PDF or DOCX payload.

    Args:
        filename: Original file name; its extension selects the extractor.
        content: Raw file bytes.

    Returns:
        The extracted text (never empty).

    Raises:
        IngestionError: unsupported extension, corrupt file, or no text.
    """
    suffix = Path(filename or "").suffix.lower()
    if suffix not in config.SUPPORTED_EXTENSIONS:
        raise IngestionError(
            filename,
            f"Unsupported file type '{suffix or '(none)'}'. Supported: {', '.join(config.SUPPORTED_EXTENSIONS)}",
        )

    try:
        if suffix == ".txt":
            text = content.decode("utf-8", errors="replace")
        elif suffix == ".pdf":
            text = _extract_pdf(content)
        else:
            text = _extract_docx(content)
    except ImportError as e:
        raise IngestionError(filename, f"Missing extraction dependency: {e.name}") from e
    except Exception as e:
        raise IngestionError(filename, f"Failed to extract text: {e}") from e

    if not text.strip():
        raise IngestionError(filename, "No extractable text")
    return text


def ingest_files(paths) -> tuple[list[tuple[str, str]], list[IngestionError]]:
    """
    Read and extract several files.

    Returns:
        (documents, failures): ``documents`` holds (file name, text) pairs in
        input order; every file that failed is reported in ``failures``.
    """
    documents = []
    failures = []
    for path in map(Path, paths):
        try:
            content = path.read_bytes()
        except OSError as e:
            failures.append(IngestionError(path.name, f"Cannot read file: {e.strerror or e}"))
            continue
        try:
            documents.append((path.name, extract_text(path.name, content)))
        except IngestionError as e:
            logger.warning("Skipping %s", e)
            failures.append(e)
    return documents, failures
