"""
Helpers for admin multipart forms: a `data` JSON field plus file parts.
"""

import json
from typing import Any

from fastapi import HTTPException, UploadFile, status

from teamsite.components.content import UploadedFile


def parse_data_field(raw: str | None) -> dict[str, Any]:
    """Decode the `data` form field; it must be a JSON object."""
    if not raw:
        return {}
    try:
        value = json.loads(raw)
    except json.JSONDecodeError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"message": "Field 'data' is not valid JSON", "errors": []},
        ) from e
    if not isinstance(value, dict):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"message": "Field 'data' must be a JSON object", "errors": []},
        )
    return value


def read_upload(upload: UploadFile) -> UploadedFile:
    return UploadedFile(
        filename=upload.filename or "file",
        data=upload.file.read(),
        content_type=upload.content_type,
    )


def read_uploads(files: list[UploadFile] | None) -> list[UploadedFile]:
    # Browsers send an empty part when no file was chosen
    return [read_upload(f) for f in files or [] if f.filename]
