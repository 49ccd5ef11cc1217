"""
POST /api/send-email - relay a contact or application form by email.

Public bodies:
    405 {message: "Method not allowed"}
    400 {message: "Missing required fields"}        (no type/data)
    400 {message: "Invalid email type"}
    400 {message: ..., errors: [...]}               (missing kind-specific fields)
    500 {success: false, message: "Failed to send email", error: <code>}
    200 {success: true, message: "Emails sent successfully"}
"""

import json
import logging

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from teamsite.api.deps import get_notification_relay
from teamsite.components.notifications import RELAY_KINDS, NotificationRelay

logger = logging.getLogger(__name__)

router = APIRouter()

ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def _message(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message})


@router.api_route("/api/send-email", methods=ALL_METHODS, include_in_schema=False)
async def send_email(
    request: Request,
    relay: NotificationRelay = Depends(get_notification_relay),
) -> Response:
    if request.method == "OPTIONS":
        return Response(status_code=status.HTTP_200_OK)
    if request.method != "POST":
        return _message(status.HTTP_405_METHOD_NOT_ALLOWED, "Method not allowed")

    try:
        body = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        body = None
    if not isinstance(body, dict) or not body.get("type") or not body.get("data"):
        return _message(status.HTTP_400_BAD_REQUEST, "Missing required fields")

    kind = body["type"]
    data = body["data"]
    if kind not in RELAY_KINDS:
        return _message(status.HTTP_400_BAD_REQUEST, "Invalid email type")
    if not isinstance(data, dict):
        return _message(status.HTTP_400_BAD_REQUEST, "Missing required fields")

    # SMTP sends block; keep them off the event loop
    result = await run_in_threadpool(relay.send, kind, data)
    if result.success:
        return JSONResponse(content={"success": True, "message": "Emails sent successfully"})

    error = result.error
    if error is not None and error.kind == "validation":
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                "message": f"Missing {kind} form fields",
                "errors": [e.to_dict() for e in result.errors],
            },
        )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "success": False,
            "message": "Failed to send email",
            "error": error.code if error else "send_failed",
        },
    )
