"""
Content component port definitions.

The content service needs a document store, an asset store and a clock.
They are the shared core ports; re-exported here so callers depend on the
component rather than on `teamsite.core`.
"""

from teamsite.core.ports.db import DocumentStorePort
from teamsite.core.ports.storage import AssetStorePort
from teamsite.core.ports.time import TimePort

__all__ = ["AssetStorePort", "DocumentStorePort", "TimePort"]
