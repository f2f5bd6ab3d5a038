"""
Multipart form helpers shared by the content routers.

Array fields arrive as JSON-encoded strings and booleans as "true"/"false".
"""

import json
from typing import Any, Dict, List, Optional

from fastapi import UploadFile

from common.utils.exceptions import BadRequestException
from portfolio.services.media import UploadedFile


def parse_json_list(value: Optional[str], field: str) -> Optional[List[Any]]:
    """
    Decode a JSON-encoded array form field.

    Returns None when the field was not submitted.
    """
    if value is None:
        return None
    if not value.strip():
        return []

    try:
        parsed = json.loads(value)
    except json.JSONDecodeError:
        raise BadRequestException(f"{field} must be valid JSON", code="VALIDATION_ERROR")

    if not isinstance(parsed, list):
        raise BadRequestException(f"{field} must be an array", code="VALIDATION_ERROR")
    return parsed


def parse_bool(value: Optional[str]) -> Optional[bool]:
    """Only the string "true" is truthy."""
    if value is None:
        return None
    return value.strip().lower() == "true"


def parse_string_list(values: Optional[List[str]], field: str) -> Optional[List[str]]:
    """
    Accept repeated form fields, a single string, or one JSON-encoded array.
    """
    if values is None:
        return None
    if len(values) == 1 and values[0].strip().startswith("["):
        return parse_json_list(values[0], field)
    return [v.strip() for v in values if v.strip()]


def submitted(**fields: Any) -> Dict[str, Any]:
    """Drop fields that were not submitted."""
    return {key: value for key, value in fields.items() if value is not None}


async def read_uploads(files: Optional[List[UploadFile]]) -> List[UploadedFile]:
    """Read multipart uploads into memory, skipping empty file parts."""
    uploads = []
    for file in files or []:
        if not file.filename:
            continue
        uploads.append(
            UploadedFile(
                filename=file.filename,
                content_type=file.content_type or "application/octet-stream",
                data=await file.read(),
            )
        )
    return uploads
