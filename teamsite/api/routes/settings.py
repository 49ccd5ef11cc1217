from typing import Any

from fastapi import APIRouter, Body, Depends, File, Form, UploadFile

from teamsite.api.deps import get_current_admin, get_settings_service, get_sitemap_synthesizer
from teamsite.api.errors import raise_for_result
from teamsite.api.multipart import parse_data_field, read_upload
from teamsite.api.schemas import MutationResponse, SettingsResponse
from teamsite.components.settings import SettingsService
from teamsite.components.sitemap import SitemapSynthesizer

public_router = APIRouter()
admin_router = APIRouter(dependencies=[Depends(get_current_admin)])


@public_router.get("/{key}", response_model=SettingsResponse)
def get_settings_document(
    key: str,
    service: SettingsService = Depends(get_settings_service),
) -> SettingsResponse:
    """Stored singleton, or `data: null` when it was never saved."""
    result = service.get(key)
    if not result.success:
        raise_for_result(result)
    return SettingsResponse(data=result.data)


@public_router.get("/{key}/effective", response_model=SettingsResponse)
def get_effective_settings(
    key: str,
    service: SettingsService = Depends(get_settings_service),
) -> SettingsResponse:
    """Defaults overlaid with the stored singleton."""
    result = service.get_effective(key)
    if not result.success:
        raise_for_result(result)
    return SettingsResponse(data=result.data)


@admin_router.put("/settings/{key}", response_model=MutationResponse)
def update_settings(
    key: str,
    data: str = Form("{}"),
    file: UploadFile | None = File(None),
    service: SettingsService = Depends(get_settings_service),
) -> MutationResponse:
    audio = read_upload(file) if file is not None and file.filename else None
    result = service.update(key, parse_data_field(data), audio)
    if not result.success:
        raise_for_result(result)
    return MutationResponse(id=result.id, data=result.data)


@admin_router.post("/sitemap/regenerate", response_model=MutationResponse)
def regenerate_sitemap(
    overrides: dict[str, Any] | None = Body(None),
    synthesizer: SitemapSynthesizer = Depends(get_sitemap_synthesizer),
) -> MutationResponse:
    result = synthesizer.regenerate(overrides)
    if not result.success:
        raise_for_result(result)
    return MutationResponse(id=result.id, data=result.data)
