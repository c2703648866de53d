# controller/presentation_controller.py
import logging
from pathlib import Path
from uuid import uuid4
from fastapi import APIRouter, status
from fastapi.responses import FileResponse, RedirectResponse
from config.settings import settings
from util.constants import InternalURIs
from util.enums import ErrorMessage
from util.errors import AppError

logger = logging.getLogger(__name__)

presentation_router = APIRouter()


def _index_file() -> Path:
    return Path(settings.CLIENT_BUILD_DIR) / "index.html"


@presentation_router.get(InternalURIs.ROOT)
async def new_namespace() -> RedirectResponse:
    # Each visit to the root lands on a fresh, unclaimed namespace
    target = f"/{uuid4()}"
    logger.debug("presentation.redirect target=%s", target)
    return RedirectResponse(target, status_code=status.HTTP_301_MOVED_PERMANENTLY)


@presentation_router.get(InternalURIs.PAGE)
async def page(path: str) -> FileResponse:
    """
    Every other GET belongs to the client bundle, at any depth, UUID or not.
    Rendering lives in the client; without a build there is nothing to serve.
    """
    index = _index_file()
    if not index.is_file():
        raise AppError.of(ErrorMessage.NOT_FOUND)
    return FileResponse(index, media_type="text/html")
