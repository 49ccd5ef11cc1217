"""
Content component input models.

Uploads arrive as already-read bytes. The HTTP layer reads multipart parts
and hands them to the service as `UploadedFile` values.
"""

from __future__ import annotations

import mimetypes
from dataclasses import dataclass, field

from teamsite.domain.results import ServiceError, validation_error


@dataclass(frozen=True)
class UploadedFile:
    """A file attached to a create/update call."""

    filename: str
    data: bytes
    content_type: str | None = None

    @property
    def resolved_content_type(self) -> str | None:
        if self.content_type and self.content_type != "application/octet-stream":
            return self.content_type
        guessed, _ = mimetypes.guess_type(self.filename)
        return guessed or self.content_type

    @property
    def size(self) -> int:
        return len(self.data)


@dataclass(frozen=True)
class UploadPolicy:
    """Size and type limits applied before any upload starts."""

    max_bytes: int = 10 * 1024 * 1024
    allowed_content_types: frozenset[str] = field(default_factory=frozenset)

    def check(self, files: list[UploadedFile]) -> list[ServiceError]:
        errors: list[ServiceError] = []
        for index, upload in enumerate(files):
            where = f"files.{index}"
            if upload.size == 0:
                errors.append(validation_error("file_empty", f"'{upload.filename}' is empty", where))
            elif upload.size > self.max_bytes:
                errors.append(
                    validation_error(
                        "file_too_large",
                        f"'{upload.filename}' exceeds {self.max_bytes} bytes",
                        where,
                    )
                )
            content_type = upload.resolved_content_type
            if self.allowed_content_types and content_type not in self.allowed_content_types:
                errors.append(
                    validation_error(
                        "file_type_not_allowed",
                        f"'{upload.filename}' has unsupported type {content_type or 'unknown'}",
                        where,
                    )
                )
        return errors
