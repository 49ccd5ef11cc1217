"""
Public form submissions: contact messages and team applications.

The document is stored first; the notification relay runs after. A relay
failure is reported as `emailSent: false` and never undoes the stored
submission.
"""

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, Request, status

from teamsite.api.deps import (
    client_address,
    get_content_services,
    get_notification_relay,
    get_rate_limiter,
)
from teamsite.api.errors import raise_for_result, rate_limited
from teamsite.api.rate_limit import RateLimiter
from teamsite.api.schemas import SubmissionResponse
from teamsite.components.content import ContentService
from teamsite.components.notifications import NotificationRelay

logger = logging.getLogger(__name__)

router = APIRouter()


def _submit(
    service: ContentService,
    relay: NotificationRelay,
    kind: str,
    payload: dict[str, Any],
) -> SubmissionResponse:
    result = service.create(payload)
    if not result.success:
        raise_for_result(result)

    relayed = relay.send(kind, result.data)
    if not relayed.success:
        logger.error("Stored %s %s but notification failed: %s", kind, result.id, relayed.error)
    return SubmissionResponse(id=result.id, email_sent=relayed.success)


@router.post("/contact", status_code=status.HTTP_201_CREATED, response_model=SubmissionResponse)
def submit_contact(
    request: Request,
    payload: dict[str, Any] = Body(...),
    services: dict[str, ContentService] = Depends(get_content_services),
    relay: NotificationRelay = Depends(get_notification_relay),
    limiter: RateLimiter = Depends(get_rate_limiter),
) -> SubmissionResponse:
    if not limiter.check_contact(client_address(request)):
        raise rate_limited("contact")
    return _submit(services["contact-messages"], relay, "contact", payload)


@router.post(
    "/applications", status_code=status.HTTP_201_CREATED, response_model=SubmissionResponse
)
def submit_application(
    request: Request,
    payload: dict[str, Any] = Body(...),
    services: dict[str, ContentService] = Depends(get_content_services),
    relay: NotificationRelay = Depends(get_notification_relay),
    limiter: RateLimiter = Depends(get_rate_limiter),
) -> SubmissionResponse:
    if not limiter.check_application(client_address(request)):
        raise rate_limited("application")
    return _submit(services["applications"], relay, "application", payload)
