"""Validation utilities."""
from pathlib import Path

from fastapi import HTTPException


def validate_file_name(value: str) -> str:
    """Validate library file name (no path traversal, markdown only)."""
    if not isinstance(value, str):
        raise HTTPException(status_code=400, detail="File name is required")
    cleaned = value.strip()
    if not cleaned:
        raise HTTPException(status_code=400, detail="File name is required")
    if Path(cleaned).name != cleaned or "/" in cleaned or "\\" in cleaned:
        raise HTTPException(status_code=400, detail="Invalid file name")
    if cleaned in {".", ".."} or not cleaned.endswith(".md"):
        raise HTTPException(status_code=400, detail="Invalid file name")
    return cleaned
