from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import FileResponse

from teamsite.adapters.local_storage import LocalAssetStore
from teamsite.api.deps import get_asset_store
from teamsite.core.ports.storage import StorageError

router = APIRouter()


@router.get("/{key:path}")
def serve_upload(
    key: str,
    assets: LocalAssetStore = Depends(get_asset_store),
) -> FileResponse:
    """Serve an uploaded asset by storage key."""
    try:
        path = assets.resolve(key)
    except StorageError as e:
        # Missing keys and traversal attempts alike
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Asset not found") from e
    return FileResponse(path, headers={"Cache-Control": "public, max-age=31536000, immutable"})
