# controller/namespace_controller.py
from typing import Optional
from fastapi import APIRouter, Depends, Request, status
from model.api import (
    BearerResponse,
    ContentResponse,
    DeleteResponse,
    ErrorResponse,
    StatusResponse,
)
from model.log_record import LogRecord
from service.namespace_service import NamespaceService
from util.constants import InternalURIs
from controller.controller_dependencies import (
    get_bearer,
    get_namespace_service,
    rate_limit_dependencies,
    read_content_body,
)

namespace_router = APIRouter(responses={400: {"model": ErrorResponse}})
mutating_router = APIRouter(
    dependencies=rate_limit_dependencies(),
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        413: {"model": ErrorResponse},
    },
)


@namespace_router.get(InternalURIs.STATUS, response_model=StatusResponse)
async def namespace_status(
    namespace_id: str,
    bearer: Optional[str] = Depends(get_bearer),
    service: NamespaceService = Depends(get_namespace_service),
) -> StatusResponse:
    return await service.status(namespace_id, bearer)


@namespace_router.get(InternalURIs.CONTENT, response_model=ContentResponse)
async def namespace_content(
    namespace_id: str,
    service: NamespaceService = Depends(get_namespace_service),
) -> ContentResponse:
    return ContentResponse(content=await service.list(namespace_id))


@mutating_router.post(
    InternalURIs.BEARER,
    response_model=BearerResponse,
    status_code=status.HTTP_200_OK,
)
async def issue_bearer(
    namespace_id: str,
    service: NamespaceService = Depends(get_namespace_service),
) -> BearerResponse:
    return BearerResponse(bearer=await service.issue_bearer(namespace_id))


@mutating_router.post(InternalURIs.NAMESPACE, response_model=LogRecord)
async def append_content(
    namespace_id: str,
    request: Request,
    bearer: Optional[str] = Depends(get_bearer),
    service: NamespaceService = Depends(get_namespace_service),
) -> LogRecord:
    # Id and token first: rejected requests never cost a body read
    service.authorize(namespace_id, bearer)
    content = await read_content_body(request)
    return await service.append(namespace_id, bearer, content)


@mutating_router.delete(InternalURIs.NAMESPACE, response_model=DeleteResponse)
async def destroy_namespace(
    namespace_id: str,
    bearer: Optional[str] = Depends(get_bearer),
    service: NamespaceService = Depends(get_namespace_service),
) -> DeleteResponse:
    await service.destroy(namespace_id, bearer)
    return DeleteResponse()
