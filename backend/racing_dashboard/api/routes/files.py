"""Files — upload/delete forwarded to the file-handler function.

Invariants:
    - Both routes are identity-scoped; the user id travels with the upstream call
    - Upstream failure maps to 500 with a generic message (no partial mode)
"""

from fastapi import APIRouter, Depends, File, UploadFile

from racing_dashboard.api.dependencies import get_current_user_id, get_upstreams
from racing_dashboard.core.domain_types import UserId
from racing_dashboard.core.errors import RequestValidationFailed
from racing_dashboard.infrastructure.upstreams import UpstreamClients
from racing_dashboard.schemas.files import FileDeleteResult, FileUploadResult

router = APIRouter(prefix="/files", tags=["files"])


@router.post("/upload", response_model=FileUploadResult)
async def upload_file(
    file: UploadFile = File(...),
    user_id: UserId = Depends(get_current_user_id),
    upstreams: UpstreamClients = Depends(get_upstreams),
):
    if not file.filename:
        raise RequestValidationFailed("A filename is required", "file")
    content = await file.read()
    if not content:
        raise RequestValidationFailed("Uploaded file is empty", "file")
    return await upstreams.files.upload(content, file.filename, user_id)


@router.delete("/{file_id}", response_model=FileDeleteResult)
async def delete_file(
    file_id: str,
    user_id: UserId = Depends(get_current_user_id),
    upstreams: UpstreamClients = Depends(get_upstreams),
):
    return await upstreams.files.delete(file_id, user_id)
