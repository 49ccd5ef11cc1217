"""
Content component - document lifecycle for every entity in the catalog.

Every write follows the same ordering:

    sanitize -> validate -> slug -> derived fields -> upload -> write document

Validation failures return before any I/O. Uploads and the document write
are not atomic; if the write fails, the assets uploaded for it are deleted
best-effort (compensation), and the failure is returned.

Delete removes referenced assets first (best-effort, failures logged) and
then the document. An asset that fails to delete is orphaned rather than
blocking the document delete.

Operations never raise; they return a ServiceResult.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from teamsite.core.ports.db import DocumentNotFoundError, Query, StoreError
from teamsite.core.ports.storage import StorageError
from teamsite.core.ports.time import to_timestamp
from teamsite.domain.results import (
    ServiceError,
    ServiceResult,
    errors_from_pydantic,
    validation_error,
)
from teamsite.domain.sanitize import sanitize, validate_email, validate_phone
from teamsite.domain.slug import slugify

from .catalog import EntitySpec
from .models import UploadedFile, UploadPolicy
from .ports import AssetStorePort, DocumentStorePort, TimePort

logger = logging.getLogger(__name__)

# Fields the service owns; callers can never write them directly
SERVER_FIELDS = ("id", "createdAt", "updatedAt")


# --- Dotted-path helpers (nested form fields such as personalInfo.email) ---


def _get_path(doc: dict[str, Any], path: str) -> Any:
    value: Any = doc
    for part in path.split("."):
        if not isinstance(value, dict):
            return None
        value = value.get(part)
    return value


def _set_path(doc: dict[str, Any], path: str, value: Any) -> None:
    parts = path.split(".")
    target = doc
    for part in parts[:-1]:
        nested = target.get(part)
        if not isinstance(nested, dict):
            return
        target = nested
    if parts[-1] in target:
        target[parts[-1]] = value


def sanitize_fields(data: dict[str, Any], fields: tuple[str, ...]) -> None:
    """Sanitize the listed string fields in place. Missing fields are skipped."""
    for path in fields:
        value = _get_path(data, path)
        if isinstance(value, str):
            _set_path(data, path, sanitize(value))


def check_formats(data: dict[str, Any], spec: EntitySpec) -> list[ServiceError]:
    """Email and phone format checks on fields that are present and non-empty."""
    errors: list[ServiceError] = []
    for path in spec.email_fields:
        value = _get_path(data, path)
        if value and not validate_email(str(value)):
            errors.append(validation_error("invalid_email", "Invalid email address", path))
    for path in spec.phone_fields:
        value = _get_path(data, path)
        if value and not validate_phone(str(value)):
            errors.append(
                validation_error(
                    "invalid_phone",
                    "Phone may contain digits, spaces, +, - and parentheses, "
                    "with at least 7 digits",
                    path,
                )
            )
    return errors


def _copy_input(data: dict[str, Any]) -> dict[str, Any]:
    # Shallow copy plus nested dicts, so sanitizing never mutates the caller's payload
    return {
        k: dict(v) if isinstance(v, dict) else v
        for k, v in data.items()
        if k not in SERVER_FIELDS
    }


class ContentService:
    """CRUD pipeline for one entity type."""

    def __init__(
        self,
        spec: EntitySpec,
        store: DocumentStorePort,
        assets: AssetStorePort | None,
        clock: TimePort,
        upload_policy: UploadPolicy | None = None,
    ):
        self.spec = spec
        self.store = store
        self.assets = assets
        self.clock = clock
        self.upload_policy = upload_policy or UploadPolicy()

    # --- Helpers ---

    def _now(self) -> str:
        return to_timestamp(self.clock.now_utc())

    def _store_failure(self, action: str, exc: StoreError) -> ServiceResult:
        logger.error("%s failed in %s: %s", action, self.spec.collection, exc)
        return ServiceResult.fail(
            ServiceError(
                kind="store",
                code=f"{action}_failed",
                message=f"Failed to {action} {self.spec.name}",
            )
        )

    def _not_found(self, key: str) -> ServiceResult:
        return ServiceResult.fail(
            ServiceError(
                kind="not_found",
                code="not_found",
                message=f"No {self.spec.name} found for '{key}'",
            )
        )

    def _validate(self, doc: dict[str, Any]) -> tuple[dict[str, Any] | None, list[ServiceError]]:
        try:
            model = self.spec.model.model_validate(doc)
        except PydanticValidationError as e:
            return None, errors_from_pydantic(e)
        return model.to_document(), []

    def _check_files(self, files: list[UploadedFile]) -> list[ServiceError]:
        if not files:
            return []
        if self.spec.image_mode == "none" or self.assets is None:
            return [validation_error("files_not_allowed", f"{self.spec.name} takes no files", "files")]
        if self.spec.image_mode == "single" and len(files) > 1:
            return [validation_error("too_many_files", f"{self.spec.name} takes one image", "files")]
        return self.upload_policy.check(files)

    def _upload_all(self, files: list[UploadedFile]) -> tuple[list[str], ServiceError | None]:
        """Upload in order. On failure, already-uploaded objects are deleted."""
        assets, prefix = self.assets, self.spec.asset_prefix
        if assets is None or prefix is None:
            return [], validation_error("files_not_allowed", f"{self.spec.name} takes no files", "files")
        urls: list[str] = []
        for upload in files:
            try:
                urls.append(
                    assets.upload(
                        upload.data,
                        upload.filename,
                        prefix=prefix,
                        content_type=upload.resolved_content_type,
                    )
                )
            except StorageError as e:
                logger.error("Upload of %s to %s failed: %s", upload.filename, self.spec.asset_prefix, e)
                self._discard_assets(urls)
                return [], ServiceError(
                    kind="storage",
                    code="upload_failed",
                    message=f"Failed to upload '{upload.filename}'",
                    field="files",
                )
        return urls, None

    def _discard_assets(self, urls: list[str]) -> None:
        """Best-effort asset removal. Failures are logged and otherwise ignored."""
        if self.assets is None:
            return
        for url in urls:
            try:
                self.assets.delete_by_url(url)
            except StorageError as e:
                logger.warning("Could not delete asset %s: %s", url, e)

    def _apply_images(self, doc: dict[str, Any], urls: list[str]) -> None:
        if self.spec.image_mode == "multi":
            doc["images"] = urls
            doc["featuredImage"] = urls[0] if urls else None
        elif self.spec.image_mode == "single" and urls:
            doc[self.spec.image_field] = urls[0]

    def _assign_slug(
        self,
        patch: dict[str, Any],
        existing: dict[str, Any] | None,
    ) -> ServiceError | None:
        if not self.spec.slugged:
            return None
        if patch.get("slug"):
            return None
        title = patch.get("title")
        if existing is not None and (title is None or title == existing.get("title")):
            # Title unchanged: keep the stored slug
            patch.pop("slug", None)
            return None
        slug = slugify(title or "")
        if not slug:
            return validation_error(
                "slug_empty",
                "Title must contain at least one letter or digit to form a slug",
                "title",
            )
        patch["slug"] = slug
        return None

    # --- Operations ---

    def create(
        self,
        data: dict[str, Any],
        files: list[UploadedFile] | None = None,
    ) -> ServiceResult:
        spec = self.spec
        files = files or []
        doc = _copy_input(data)
        doc.update(spec.create_defaults)

        sanitize_fields(doc, spec.sanitized_fields)
        errors = check_formats(doc, spec)
        slug_error = self._assign_slug(doc, None)
        if slug_error:
            errors.append(slug_error)
        errors.extend(self._check_files(files))
        if errors:
            return ServiceResult.fail(*errors)

        now = self._now()
        if spec.prepare:
            spec.prepare(doc, None, now)

        validated, errors = self._validate(doc)
        if errors or validated is None:
            return ServiceResult.fail(*errors)

        urls: list[str] = []
        if files:
            urls, upload_error = self._upload_all(files)
            if upload_error:
                return ServiceResult.fail(upload_error)
            self._apply_images(validated, urls)
        elif spec.image_mode == "multi":
            self._apply_images(validated, validated.get("images") or [])

        validated["createdAt"] = now
        validated["updatedAt"] = now
        try:
            new_id = self.store.create(spec.collection, validated)
        except StoreError as e:
            self._discard_assets(urls)
            return self._store_failure("create", e)

        logger.info("Created %s/%s", spec.collection, new_id)
        return ServiceResult.ok(id=new_id, data={"id": new_id, **validated})

    def list(self, where: dict[str, Any] | None = None) -> ServiceResult:
        query = Query(
            where=dict(where or {}),
            order_by=self.spec.order_by,
            direction=self.spec.direction,
        )
        try:
            docs = self.store.query(self.spec.collection, query)
        except StoreError as e:
            return self._store_failure("list", e)
        return ServiceResult.ok(data=docs)

    def list_public(self) -> ServiceResult:
        return self.list(self.spec.public_where)

    def get_by_id(self, doc_id: str) -> ServiceResult:
        try:
            doc = self.store.get(self.spec.collection, doc_id)
        except StoreError as e:
            return self._store_failure("read", e)
        if doc is None:
            return self._not_found(doc_id)
        return ServiceResult.ok(id=doc_id, data=doc)

    def get_by_slug(self, slug_or_id: str) -> ServiceResult:
        """
        Resolve a public path segment.

        Tries slug equality first (oldest document wins when slugs collide),
        then falls back to a direct id lookup.
        """
        if not self.spec.slugged:
            return self.get_by_id(slug_or_id)
        try:
            matches = self.store.query(
                self.spec.collection,
                Query(where={"slug": slug_or_id}, order_by="createdAt", direction="asc"),
            )
        except StoreError as e:
            return self._store_failure("read", e)
        if matches:
            return ServiceResult.ok(id=matches[0]["id"], data=matches[0])
        return self.get_by_id(slug_or_id)

    def get_public(self, slug_or_id: str) -> ServiceResult:
        """Like get_by_slug, but hides documents that are not publicly visible."""
        result = self.get_by_slug(slug_or_id)
        if not result.success:
            return result
        doc = result.data
        if any(doc.get(k) != v for k, v in self.spec.public_where.items()):
            return self._not_found(slug_or_id)
        return result

    def update(
        self,
        doc_id: str,
        data: dict[str, Any],
        files: list[UploadedFile] | None = None,
    ) -> ServiceResult:
        spec = self.spec
        files = files or []
        patch = _copy_input(data)

        if spec.mutable_fields is not None:
            frozen = sorted(k for k in patch if k not in spec.mutable_fields)
            if frozen:
                return ServiceResult.fail(
                    *(
                        validation_error("field_immutable", f"'{k}' cannot be changed", k)
                        for k in frozen
                    )
                )

        try:
            existing = self.store.get(spec.collection, doc_id)
        except StoreError as e:
            return self._store_failure("read", e)
        if existing is None:
            return self._not_found(doc_id)

        sanitize_fields(patch, spec.sanitized_fields)
        errors = check_formats(patch, spec)
        slug_error = self._assign_slug(patch, existing)
        if slug_error:
            errors.append(slug_error)
        errors.extend(self._check_files(files))
        if errors:
            return ServiceResult.fail(*errors)

        now = self._now()
        if spec.prepare:
            spec.prepare(patch, existing, now)

        validated, errors = self._validate({**existing, **patch})
        if errors or validated is None:
            return ServiceResult.fail(*errors)
        changes = {k: validated[k] for k in patch if k in validated}

        old_refs = spec.asset_refs(existing)
        urls: list[str] = []
        if files:
            urls, upload_error = self._upload_all(files)
            if upload_error:
                return ServiceResult.fail(upload_error)
            self._apply_images(changes, urls)
        elif spec.image_mode == "multi" and ("images" in changes or "featuredImage" in changes):
            # featuredImage only ever mirrors images[0]
            self._apply_images(changes, changes.get("images", existing.get("images")) or [])

        changes["updatedAt"] = now
        try:
            self.store.update(spec.collection, doc_id, changes)
        except DocumentNotFoundError:
            self._discard_assets(urls)
            return self._not_found(doc_id)
        except StoreError as e:
            self._discard_assets(urls)
            return self._store_failure("update", e)

        merged = {**existing, **changes}
        kept = set(spec.asset_refs(merged))
        self._discard_assets([url for url in old_refs if url not in kept])

        logger.info("Updated %s/%s", spec.collection, doc_id)
        return ServiceResult.ok(id=doc_id, data=merged)

    def delete(self, doc_id: str, asset_refs: list[str] | None = None) -> ServiceResult:
        """
        Delete referenced assets, then the document.

        When `asset_refs` is None the references are read from the stored
        document. Asset failures never block the document delete.
        """
        if asset_refs is None:
            try:
                existing = self.store.get(self.spec.collection, doc_id)
            except StoreError as e:
                return self._store_failure("read", e)
            if existing is None:
                return self._not_found(doc_id)
            asset_refs = self.spec.asset_refs(existing)

        self._discard_assets(list(dict.fromkeys(asset_refs)))

        try:
            self.store.delete(self.spec.collection, doc_id)
        except DocumentNotFoundError:
            return self._not_found(doc_id)
        except StoreError as e:
            return self._store_failure("delete", e)

        logger.info("Deleted %s/%s (%d assets)", self.spec.collection, doc_id, len(asset_refs))
        return ServiceResult.ok(id=doc_id)
