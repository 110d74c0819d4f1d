from datetime import UTC, datetime

from fastapi import APIRouter, Depends

from local_crud.config import Settings, get_settings
from local_crud.schemas import PingResponse

router = APIRouter(tags=["health"])


@router.get("/ping", response_model=PingResponse)
def ping(settings: Settings = Depends(get_settings)) -> PingResponse:
    return PingResponse(
        status="ok",
        plugin=settings.plugin_name,
        version=settings.plugin_version,
        hostVersion=settings.host_version,
        timestamp=datetime.now(UTC).isoformat(),
        libraryID=settings.library_id,
    )
