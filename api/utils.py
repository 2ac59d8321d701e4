"""
Upload helpers for the corpus file endpoint.
Extraction itself lives in fingerprint.ingest; this module adapts it to
FastAPI UploadFile handling and HTTP errors.
"""

from fastapi import UploadFile, HTTPException

import config
from fingerprint.ingest import IngestionError, extract_text


def validate_file_size(file_size: int, max_size_mb: int = config.API_MAX_FILE_SIZE_MB) -> None:
    """
    Validate uploaded file size.

    Raises:
        HTTPException: 413 if file exceeds size limit
    """
    max_bytes = max_size_mb * 1024 * 1024
    if file_size > max_bytes:
        raise HTTPException(
            status_code=413,
            detail=f"File size ({file_size / 1024 / 1024:.2f}MB) exceeds maximum allowed size ({max_size_mb}MB)"
        )


async def read_upload(file: UploadFile, strict: bool) -> tuple[str, str]:
    """
    Read one uploaded file and extract its text.

    Args:
        file: FastAPI UploadFile object
        strict: Raise HTTP errors (single upload) instead of IngestionError
            (batch upload, where each failure is reported per file)

    Returns:
        (filename, text)

    Raises:
        HTTPException: 413 / 400 when ``strict``
        IngestionError: otherwise
    """
    filename = file.filename or "upload"
    content = await file.read()

    if strict:
        validate_file_size(len(content))
        try:
            return filename, extract_text(filename, content)
        except IngestionError as e:
            raise HTTPException(status_code=400, detail=str(e))

    if len(content) > config.API_MAX_FILE_SIZE_MB * 1024 * 1024:
        raise IngestionError(filename, f"File exceeds maximum allowed size ({config.API_MAX_FILE_SIZE_MB}MB)")
    return filename, extract_text(filename, content)
