"""
Settings component - singleton settings read/write.

`get` returns the stored document or `data=None`; absence is a valid state
that callers resolve with defaults. `get_effective` does that resolution
server-side.

`update` has no native upsert to lean on, so it runs a two-state machine:

    UPDATING --DocumentNotFoundError--> CREATING
       |                                   |
    success                             success

`createdAt` is stamped only in CREATING, together with `updatedAt`, so a
singleton's creation time never moves after its first write.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from teamsite.components.content.models import UploadedFile, UploadPolicy
from teamsite.core.ports.db import DocumentExistsError, DocumentNotFoundError, StoreError
from teamsite.core.ports.storage import StorageError
from teamsite.core.ports.time import to_timestamp
from teamsite.domain.collections import COLLECTION_SETTINGS, PREFIX_AUDIO
from teamsite.domain.entities import SettingsDocument
from teamsite.domain.results import (
    ServiceError,
    ServiceResult,
    errors_from_pydantic,
    validation_error,
)

from .models import AUDIO_FIELD, AUDIO_KEY, SETTINGS_MODELS, UpsertState
from .ports import AssetStorePort, DocumentStorePort, TimePort

logger = logging.getLogger(__name__)

SERVER_FIELDS = ("id", "createdAt", "updatedAt")


def get_default_settings(key: str) -> SettingsDocument:
    """Typed defaults for a singleton, used when no document exists."""
    return SETTINGS_MODELS[key]()


class SettingsService:
    def __init__(
        self,
        store: DocumentStorePort,
        clock: TimePort,
        assets: AssetStorePort | None = None,
        upload_policy: UploadPolicy | None = None,
    ):
        self.store = store
        self.clock = clock
        self.assets = assets
        self.upload_policy = upload_policy or UploadPolicy()

    def _unknown_key(self, key: str) -> ServiceResult:
        return ServiceResult.fail(
            ServiceError(
                kind="not_found",
                code="unknown_settings_key",
                message=f"Unknown settings key '{key}'",
            )
        )

    def _store_failure(self, action: str, key: str, exc: StoreError) -> ServiceResult:
        logger.error("Settings %s failed for %s: %s", action, key, exc)
        return ServiceResult.fail(
            ServiceError(
                kind="store",
                code=f"settings_{action}_failed",
                message=f"Failed to {action} {key} settings",
            )
        )

    def get(self, key: str) -> ServiceResult:
        if key not in SETTINGS_MODELS:
            return self._unknown_key(key)
        try:
            doc = self.store.get(COLLECTION_SETTINGS, key)
        except StoreError as e:
            return self._store_failure("read", key, e)
        return ServiceResult.ok(id=key, data=doc)

    def get_effective(self, key: str) -> ServiceResult:
        """Defaults overlaid with whatever is stored."""
        result = self.get(key)
        if not result.success:
            return result
        model = SETTINGS_MODELS[key]
        stored = result.data or {}
        try:
            effective = model.model_validate(stored)
        except PydanticValidationError as e:
            logger.warning("Stored %s settings are invalid, using defaults: %s", key, e)
            effective = model()
        return ServiceResult.ok(id=key, data=effective.model_dump(by_alias=True, exclude={"id"}))

    def get_model(self, key: str) -> SettingsDocument:
        """Effective settings as a typed model (defaults on any failure)."""
        result = self.get_effective(key)
        if not result.success:
            return get_default_settings(key)
        return SETTINGS_MODELS[key].model_validate(result.data)

    def _upload_audio(
        self,
        audio: UploadedFile,
    ) -> tuple[str | None, list[ServiceError]]:
        if self.assets is None:
            return None, [validation_error("files_not_allowed", "Uploads are not configured", "file")]
        errors = self.upload_policy.check([audio])
        content_type = audio.resolved_content_type or ""
        if not content_type.startswith("audio/"):
            errors.append(
                validation_error("file_type_not_allowed", "Click sound must be an audio file", "file")
            )
        if errors:
            return None, errors
        try:
            url = self.assets.upload(
                audio.data,
                f"click-sound-{audio.filename}",
                prefix=PREFIX_AUDIO,
                content_type=content_type,
            )
        except StorageError as e:
            logger.error("Click sound upload failed: %s", e)
            return None, [
                ServiceError(
                    kind="storage",
                    code="upload_failed",
                    message="Failed to upload click sound",
                    field="file",
                )
            ]
        return url, []

    def _discard(self, url: str | None) -> None:
        if not url or self.assets is None:
            return
        try:
            self.assets.delete_by_url(url)
        except StorageError as e:
            logger.warning("Could not delete asset %s: %s", url, e)

    def update(
        self,
        key: str,
        patch: dict[str, Any],
        audio: UploadedFile | None = None,
    ) -> ServiceResult:
        """
        Merge `patch` into the singleton, creating it if absent.

        Args:
            key: Settings key (welcome, seo, joinTeam, donations, ui, sitemap)
            patch: Fields to write; unspecified fields are left untouched
            audio: Optional click sound (welcome only)

        Returns:
            ServiceResult with the written fields
        """
        if key not in SETTINGS_MODELS:
            return self._unknown_key(key)
        if audio is not None and key != AUDIO_KEY:
            return ServiceResult.fail(
                validation_error("files_not_allowed", f"{key} settings take no file", "file")
            )

        model = SETTINGS_MODELS[key]
        fields = {k: v for k, v in patch.items() if k not in SERVER_FIELDS}
        try:
            validated = model.model_validate(fields).model_dump(by_alias=True, exclude={"id"})
        except PydanticValidationError as e:
            return ServiceResult.fail(*errors_from_pydantic(e))
        changes = {k: validated[k] for k in fields if k in validated}

        previous_sound = None
        uploaded = None
        if audio is not None:
            try:
                current = self.store.get(COLLECTION_SETTINGS, key)
            except StoreError as e:
                return self._store_failure("read", key, e)
            previous_sound = (current or {}).get(AUDIO_FIELD)
            uploaded, errors = self._upload_audio(audio)
            if errors:
                return ServiceResult.fail(*errors)
            changes[AUDIO_FIELD] = uploaded

        now = to_timestamp(self.clock.now_utc())
        state = UpsertState.UPDATING
        written: dict[str, Any] = {}
        try:
            while True:
                if state is UpsertState.UPDATING:
                    try:
                        written = {**changes, "updatedAt": now}
                        self.store.update(COLLECTION_SETTINGS, key, written)
                        break
                    except DocumentNotFoundError:
                        logger.info("Settings %s missing, creating", key)
                        state = UpsertState.CREATING
                else:
                    written = {**changes, "createdAt": now, "updatedAt": now}
                    self.store.create(COLLECTION_SETTINGS, written, doc_id=key)
                    break
        except DocumentExistsError as e:
            # Another writer created the singleton between our two attempts
            self._discard(uploaded)
            logger.warning("Settings %s created concurrently: %s", key, e)
            return ServiceResult.fail(
                ServiceError(
                    kind="conflict",
                    code="settings_conflict",
                    message=f"{key} settings were created concurrently, retry the update",
                )
            )
        except StoreError as e:
            self._discard(uploaded)
            return self._store_failure("update", key, e)

        if uploaded and previous_sound and previous_sound != uploaded:
            self._discard(previous_sound)

        logger.info("Settings %s written (%s)", key, state.value)
        return ServiceResult.ok(id=key, data=written)
