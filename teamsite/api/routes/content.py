"""
Content routes: public reads and admin CRUD for every catalogued entity.

Public:  GET /api/{entity}, GET /api/{entity}/{slug_or_id}
Admin:   GET|POST /api/admin/{entity}, GET|PUT|DELETE /api/admin/{entity}/{doc_id}
"""

from enum import Enum
from typing import Any

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status

from teamsite.api.deps import get_content_services, get_current_admin
from teamsite.api.errors import raise_for_result
from teamsite.api.multipart import parse_data_field, read_uploads
from teamsite.api.schemas import MutationResponse
from teamsite.components.content import INBOX_ENTITIES, ContentService

public_router = APIRouter()
admin_router = APIRouter(dependencies=[Depends(get_current_admin)])


class PublicEntity(str, Enum):
    team_members = "team-members"
    hackathons = "hackathons"
    achievements = "achievements"
    projects = "projects"
    blogs = "blogs"


class AdminEntity(str, Enum):
    team_members = "team-members"
    hackathons = "hackathons"
    achievements = "achievements"
    projects = "projects"
    blogs = "blogs"
    applications = "applications"
    contact_messages = "contact-messages"


# Inbound submissions are created through the public form routes only
_NO_ADMIN_CREATE = {AdminEntity(name) for name in INBOX_ENTITIES}


# --- Public ---


@public_router.get("/{entity}")
def list_public(
    entity: PublicEntity,
    services: dict[str, ContentService] = Depends(get_content_services),
) -> list[dict[str, Any]]:
    result = services[entity.value].list_public()
    if not result.success:
        raise_for_result(result)
    return result.data


@public_router.get("/{entity}/{slug_or_id}")
def get_public(
    entity: PublicEntity,
    slug_or_id: str,
    services: dict[str, ContentService] = Depends(get_content_services),
) -> dict[str, Any]:
    result = services[entity.value].get_public(slug_or_id)
    if not result.success:
        raise_for_result(result)
    return result.data


# --- Admin ---


@admin_router.get("/{entity}")
def admin_list(
    entity: AdminEntity,
    services: dict[str, ContentService] = Depends(get_content_services),
) -> list[dict[str, Any]]:
    result = services[entity.value].list()
    if not result.success:
        raise_for_result(result)
    return result.data


@admin_router.get("/{entity}/{doc_id}")
def admin_get(
    entity: AdminEntity,
    doc_id: str,
    services: dict[str, ContentService] = Depends(get_content_services),
) -> dict[str, Any]:
    result = services[entity.value].get_by_id(doc_id)
    if not result.success:
        raise_for_result(result)
    return result.data


@admin_router.post(
    "/{entity}",
    status_code=status.HTTP_201_CREATED,
    response_model=MutationResponse,
)
def admin_create(
    entity: AdminEntity,
    data: str = Form("{}"),
    files: list[UploadFile] | None = File(None),
    services: dict[str, ContentService] = Depends(get_content_services),
) -> MutationResponse:
    if entity in _NO_ADMIN_CREATE:
        raise HTTPException(
            status_code=status.HTTP_405_METHOD_NOT_ALLOWED,
            detail={"message": "Method not allowed", "errors": []},
        )
    result = services[entity.value].create(parse_data_field(data), read_uploads(files))
    if not result.success:
        raise_for_result(result)
    return MutationResponse(id=result.id, data=result.data)


@admin_router.put("/{entity}/{doc_id}", response_model=MutationResponse)
def admin_update(
    entity: AdminEntity,
    doc_id: str,
    data: str = Form("{}"),
    files: list[UploadFile] | None = File(None),
    services: dict[str, ContentService] = Depends(get_content_services),
) -> MutationResponse:
    result = services[entity.value].update(doc_id, parse_data_field(data), read_uploads(files))
    if not result.success:
        raise_for_result(result)
    return MutationResponse(id=result.id, data=result.data)


@admin_router.delete("/{entity}/{doc_id}", response_model=MutationResponse)
def admin_delete(
    entity: AdminEntity,
    doc_id: str,
    services: dict[str, ContentService] = Depends(get_content_services),
) -> MutationResponse:
    result = services[entity.value].delete(doc_id)
    if not result.success:
        raise_for_result(result)
    return MutationResponse(id=result.id)
