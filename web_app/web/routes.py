"""Public resolution routes."""

from fastapi import APIRouter, Request, HTTPException, status
from fastapi.responses import RedirectResponse

from shortlinks.database.models import ResourceKind, NotFound

router = APIRouter()


@router.get("/{identifier}", include_in_schema=False)
async def resolve_identifier(request: Request, identifier: str):
    """Redirect to the link target or the file's blob location."""
    # Resolution counts the visit or download
    record = await request.app.state.service.resolve(identifier)

    if record is NotFound:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Not found",
        )

    if record.kind is ResourceKind.LINK:
        location = record.target_url
    else:
        location = record.blob_location

    # 302 so repeat visits keep reaching the server and get counted
    return RedirectResponse(url=location, status_code=status.HTTP_302_FOUND)
