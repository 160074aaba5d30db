"""File Schemas — results of file-handler upload/delete calls."""

from pydantic import AliasChoices, Field

from racing_dashboard.schemas.base import CamelModel


class FileUploadResult(CamelModel):
    """Upload outcome; the file handler may name the key fileId or fileKey."""
    message: str = "File uploaded successfully"
    file_id: str = Field(
        validation_alias=AliasChoices("fileId", "fileKey", "file_id"),
    )
    url: str


class FileDeleteResult(CamelModel):
    message: str = "File deleted successfully"
