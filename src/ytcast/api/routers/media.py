"""Media endpoint.

- GET /media/{video_id}: the downloaded video file
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from starlette.responses import FileResponse

from ytcast.api.deps import get_container
from ytcast.container import Container

router = APIRouter(tags=["media"])


@router.get(
    "/media/{video_id}",
    responses={
        200: {"content": {"video/mp4": {}}, "description": "Video file"},
        404: {"description": "Video not found"},
    },
    response_class=FileResponse,
)
async def get_media(
    video_id: str,
    container: Container = Depends(get_container),
) -> FileResponse:
    """Serve a video, downloading it into the cache on first request."""
    path = await container.podcast_service.get_media(video_id)
    return FileResponse(path, media_type="video/mp4")
