"""
Crawler files served from the static UI directory with explicit content types.
"""

from pathlib import Path

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import FileResponse

router = APIRouter(tags=["static"])


def _static_file(request: Request, name: str, media_type: str) -> FileResponse:
    path = Path(request.app.state.settings.STATIC_DIR) / name
    if not path.is_file():
        raise HTTPException(status_code=404, detail=f"{name} not found")
    return FileResponse(path, media_type=media_type)


@router.get("/robots.txt", include_in_schema=False)
async def robots(request: Request):
    return _static_file(request, "robots.txt", "text/plain")


@router.get("/sitemap.xml", include_in_schema=False)
async def sitemap(request: Request):
    return _static_file(request, "sitemap.xml", "application/xml")
