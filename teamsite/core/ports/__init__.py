# teamsite: Ports (Protocol Interfaces)
# Abstract interfaces for adapters; no implementations here

from teamsite.core.ports.db import (
    DocumentExistsError,
    DocumentNotFoundError,
    DocumentStorePort,
    Query,
    StoreError,
)
from teamsite.core.ports.email import (
    EmailAddress,
    EmailError,
    EmailMessage,
    EmailPort,
    EmailResult,
    EmailStatus,
    EmailValidationError,
)
from teamsite.core.ports.storage import (
    AssetNotFoundError,
    AssetOwnershipError,
    AssetStorePort,
    StorageError,
)
from teamsite.core.ports.time import TimePort

__all__ = [
    # Document store (P1)
    "DocumentExistsError",
    "DocumentNotFoundError",
    "DocumentStorePort",
    "Query",
    "StoreError",
    # Asset store (P2)
    "AssetNotFoundError",
    "AssetOwnershipError",
    "AssetStorePort",
    "StorageError",
    # Time (P3)
    "TimePort",
    # Email (P4)
    "EmailAddress",
    "EmailError",
    "EmailMessage",
    "EmailPort",
    "EmailResult",
    "EmailStatus",
    "EmailValidationError",
]
