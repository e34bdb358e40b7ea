"""API routes implementation."""

from fastapi import APIRouter, Request, HTTPException, Query, status
from datetime import datetime, timezone
from typing import Any, Dict, Union

from .schemas import (
    CreateLinkRequest,
    CreateFileAssetRequest,
    CreateResponse,
    FileAssetInfo,
    FileAssetListResponse,
    LinkInfo,
    LinkListResponse,
    HealthResponse,
    ErrorResponse,
    StatisticsResponse,
)
from shortlinks.common.url_builder import build_short_url
from shortlinks.common.headers import parse_forwarded, public_base_url
from shortlinks.database.models import ResourceKind

router = APIRouter()

CREATE_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Invalid request"},
    409: {"model": ErrorResponse, "description": "Alias already taken"},
    503: {"model": ErrorResponse, "description": "Store unavailable"},
}


def _creation_response(request: Request, result: Dict[str, Any]) -> CreateResponse:
    config = request.app.state.config
    forwarded = getattr(request.state, "forwarded", None) or parse_forwarded(request.headers)

    base_url = public_base_url(
        forwarded,
        fallback_base_url=config.base_url,
        request_scheme=request.url.scheme,
        request_host=request.headers.get("host"),
    )

    return CreateResponse(
        id=result["id"],
        alias=result["alias"],
        kind=result["kind"].value,
        short_url=build_short_url(
            resource_id=result["id"],
            base_url=base_url,
            alias=result["alias"],
            # Prefix stripped by a proxy wins over the configured one
            path_prefix=forwarded.prefix or config.path_prefix,
        ),
        created_at=result["created_at"],
    )


def _resource_info(record) -> Union[LinkInfo, FileAssetInfo]:
    if record.kind is ResourceKind.LINK:
        return LinkInfo(**record.to_dict())
    return FileAssetInfo(**record.to_dict())


@router.post(
    "/links",
    response_model=CreateResponse,
    status_code=status.HTTP_201_CREATED,
    responses=CREATE_RESPONSES,
    summary="Create link",
    description="Create a short link. Optionally provide a custom alias.",
)
async def create_link(request: Request, body: CreateLinkRequest):
    """Create a short link."""
    service = request.app.state.service

    result = await service.create_link(target_url=body.url, alias=body.alias)
    return _creation_response(request, result)


@router.post(
    "/files",
    response_model=CreateResponse,
    status_code=status.HTTP_201_CREATED,
    responses=CREATE_RESPONSES,
    summary="Register file asset",
    description="Register a file already stored in the blob store.",
)
async def create_file_asset(request: Request, body: CreateFileAssetRequest):
    """Register an uploaded file."""
    service = request.app.state.service

    result = await service.create_file_asset(
        blob_location=body.blob_location,
        file_name=body.file_name,
        size_bytes=body.size_bytes,
        mime_type=body.mime_type,
        alias=body.alias,
    )
    return _creation_response(request, result)


@router.get("/links", response_model=LinkListResponse, summary="List links")
async def list_links(request: Request, limit: int = Query(100, ge=1, le=1000)):
    """List links, newest first."""
    links = await request.app.state.service.list_links(limit)
    return LinkListResponse(count=len(links), links=[_resource_info(r) for r in links])


@router.get("/files", response_model=FileAssetListResponse, summary="List file assets")
async def list_file_assets(request: Request, limit: int = Query(100, ge=1, le=1000)):
    """List file assets, newest first."""
    files = await request.app.state.service.list_file_assets(limit)
    return FileAssetListResponse(count=len(files), files=[_resource_info(r) for r in files])


@router.get(
    "/resources/{identifier}",
    response_model=Union[LinkInfo, FileAssetInfo],
    responses={
        404: {"model": ErrorResponse, "description": "Identifier not found"},
    },
    summary="Get resource information",
    description="Get a link or file asset by id or alias without counting a visit.",
)
async def get_resource_info(request: Request, identifier: str):
    """Get information about a resource."""
    service = request.app.state.service

    record = await service.get_resource_info(identifier)

    if record is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Identifier '{identifier}' not found",
        )

    return _resource_info(record)


@router.get(
    "/stats",
    response_model=StatisticsResponse,
    summary="Get statistics",
    description="Get service-wide statistics.",
)
async def get_statistics(request: Request):
    """Get service statistics."""
    stats = await request.app.state.service.get_statistics()
    return StatisticsResponse(**stats)


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Check if the service is healthy.",
)
async def health_check(request: Request):
    """Health check endpoint for proxies and monitoring."""
    health = await request.app.state.service.health_check()

    return HealthResponse(
        status="healthy" if health["overall"] else "unhealthy",
        database="healthy" if health["database"] else "unhealthy",
        cache="healthy" if health["cache"] else "unhealthy",
        timestamp=datetime.now(timezone.utc),
    )
