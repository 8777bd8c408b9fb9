from __future__ import annotations
from pathlib import Path
from typing import Optional

from config.settings import (
    MAX_FILE_SIZE,
    ALLOWED_EXTENSIONS,
    XLSX_MIME_TYPE,
)


def validate_file_size(size: int) -> bool:
    return size <= MAX_FILE_SIZE


def validate_extension(filename: str) -> bool:
    return Path(filename).suffix.lower() in ALLOWED_EXTENSIONS


def validate_mime_type(mime_type: Optional[str]) -> bool:
    return (mime_type or "").strip().lower() == XLSX_MIME_TYPE


def validate_upload(filename: str, mime_type: Optional[str], size: int) -> Optional[str]:
    """Check an upload before any parse attempt; returns a message for the user or None."""
    if not (validate_mime_type(mime_type) or validate_extension(filename)):
        return "Tipe file tidak didukung. Silakan upload file Excel (.xlsx)"
    if not validate_file_size(size):
        return f"Ukuran file terlalu besar (maksimal {MAX_FILE_SIZE // (1024 * 1024)} MB)."
    return None
