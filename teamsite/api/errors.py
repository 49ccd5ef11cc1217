"""
ServiceResult -> HTTP mapping, shared by every route.

Bodies carry stable error codes only; the underlying exception text stays in
the server log.
"""

from typing import NoReturn

from fastapi import HTTPException, status

from teamsite.domain.results import ServiceResult

STATUS_BY_KIND = {
    "validation": status.HTTP_400_BAD_REQUEST,
    "not_found": status.HTTP_404_NOT_FOUND,
    "rate_limited": status.HTTP_429_TOO_MANY_REQUESTS,
    "conflict": status.HTTP_500_INTERNAL_SERVER_ERROR,
    "store": status.HTTP_500_INTERNAL_SERVER_ERROR,
    "storage": status.HTTP_500_INTERNAL_SERVER_ERROR,
    "email": status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def status_for(result: ServiceResult) -> int:
    error = result.error
    if error is None:
        return status.HTTP_500_INTERNAL_SERVER_ERROR
    return STATUS_BY_KIND.get(error.kind, status.HTTP_500_INTERNAL_SERVER_ERROR)


def raise_for_result(result: ServiceResult) -> NoReturn:
    """Raise the HTTPException for a failed result."""
    error = result.error
    raise HTTPException(
        status_code=status_for(result),
        detail={
            "message": error.message if error else "Request failed",
            "errors": [e.to_dict() for e in result.errors],
        },
    )


def rate_limited(action: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        detail={
            "message": "Too many requests, try again later",
            "errors": [
                {
                    "kind": "rate_limited",
                    "code": f"{action}_rate_limited",
                    "field": None,
                    "message": "Too many requests",
                }
            ],
        },
    )
