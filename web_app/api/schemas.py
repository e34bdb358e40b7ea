"""Pydantic schemas for API requests and responses."""

from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime


class CreateLinkRequest(BaseModel):
    """Request to create a link."""

    url: str = Field(..., description="Redirect target", min_length=1, max_length=2048)
    alias: Optional[str] = Field(None, description="Optional custom alias")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"url": "https://example.com/very/long/path/to/resource", "alias": None},
                {"url": "https://github.com/user/repo", "alias": "myrepo"},
            ]
        }
    }


class CreateFileAssetRequest(BaseModel):
    """Request to register an uploaded file."""

    blob_location: str = Field(..., description="Location returned by the blob store", min_length=1)
    file_name: str = Field(..., description="Original file name", min_length=1)
    size_bytes: int = Field(..., description="File size in bytes", ge=0)
    mime_type: Optional[str] = Field(None, description="Content type")
    alias: Optional[str] = Field(None, description="Optional custom alias")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "blob_location": "https://blobs.example.com/uploads/1700000000_report.pdf",
                    "file_name": "report.pdf",
                    "size_bytes": 183042,
                    "mime_type": "application/pdf",
                    "alias": "q3-report",
                }
            ]
        }
    }


class CreateResponse(BaseModel):
    """Response after creating a link or file asset."""

    id: int = Field(..., description="Allocated identifier")
    alias: Optional[str] = Field(None, description="Reserved alias")
    kind: str = Field(..., description="'link' or 'file_asset'")
    short_url: str = Field(..., description="The complete short URL")
    created_at: datetime = Field(..., description="Creation timestamp")


class LinkInfo(BaseModel):
    """Stored link."""

    kind: str = "link"
    id: int
    target_url: str
    alias: Optional[str] = None
    created_at: datetime
    visit_count: int


class FileAssetInfo(BaseModel):
    """Stored file asset."""

    kind: str = "file_asset"
    id: int
    blob_location: str
    file_name: str
    size_bytes: int
    mime_type: str
    alias: Optional[str] = None
    created_at: datetime
    download_count: int


class LinkListResponse(BaseModel):
    count: int
    links: List[LinkInfo]


class FileAssetListResponse(BaseModel):
    count: int
    files: List[FileAssetInfo]


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(..., description="Overall status")
    database: str = Field(..., description="Database status")
    cache: str = Field(..., description="Cache status")
    timestamp: datetime = Field(..., description="Check timestamp")


class ErrorResponse(BaseModel):
    """Error response."""

    error: str = Field(..., description="Error message")
    detail: Optional[str] = Field(None, description="Detailed error information")


class StatisticsResponse(BaseModel):
    """Statistics response."""

    total_links: int
    total_files: int
    total_visits: int
    total_downloads: int
    database: str
    cache_enabled: bool
    custom_aliases_enabled: bool
