"""File Storage Client — upload/delete through the file-handler function.

Invariants:
    - Both actions POST JSON to the same endpoint, discriminated by `action`
    - Uploads use their own (longer) timeout; deletes use the read timeout
    - Failure always propagates: file state is never guessed
"""

import base64
import logging

import httpx
from pydantic import ValidationError

from racing_dashboard.config import UpstreamEndpoint
from racing_dashboard.infrastructure.upstream_http import UpstreamClient
from racing_dashboard.schemas.files import FileDeleteResult, FileUploadResult

logger = logging.getLogger(__name__)


class FileStorageClient(UpstreamClient):
    failure_message = "Failed to process file"
    failure_status = 500

    def __init__(
        self,
        http: httpx.AsyncClient,
        endpoint: UpstreamEndpoint,
        upload_timeout_seconds: float = 30.0,
    ):
        super().__init__(http, endpoint)
        self.upload_timeout_seconds = upload_timeout_seconds

    async def upload(
        self, content: bytes, filename: str, user_id: str,
    ) -> FileUploadResult:
        body = await self._request(
            "POST",
            json={
                "action": "upload",
                "file": base64.b64encode(content).decode("ascii"),
                "filename": filename,
                "userId": user_id,
            },
            timeout=self.upload_timeout_seconds,
        )
        try:
            result = FileUploadResult.model_validate(body)
        except ValidationError as e:
            raise self._failure(f"malformed upload result: {e.error_count()} errors") from e
        logger.info(
            f"Uploaded {filename} ({len(content)} bytes)",
            extra={"upstream": self.name, "user_id": user_id},
        )
        return result

    async def delete(self, file_key: str, user_id: str) -> FileDeleteResult:
        await self._request(
            "POST",
            json={"action": "delete", "fileKey": file_key, "userId": user_id},
        )
        logger.info(
            f"Deleted file {file_key}",
            extra={"upstream": self.name, "user_id": user_id},
        )
        return FileDeleteResult()
