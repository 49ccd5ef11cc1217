"""
Settings component port definitions.
"""

from teamsite.core.ports.db import DocumentStorePort
from teamsite.core.ports.storage import AssetStorePort
from teamsite.core.ports.time import TimePort

__all__ = ["AssetStorePort", "DocumentStorePort", "TimePort"]
