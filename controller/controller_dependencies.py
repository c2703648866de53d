# controller/controller_dependencies.py
import json
from functools import lru_cache
from typing import List, Optional
from fastapi import Depends, Header, Request
from fastapi.params import Depends as DependsParam
from fastapi_limiter.depends import RateLimiter
from config.settings import settings
from core.capability_token import CapabilityTokenService
from core.identifiers import extract_bearer
from repository.tenant_repository import TenantRepository
from service.namespace_service import NamespaceService
from util.enums import ErrorMessage
from util.errors import AppError


@lru_cache(maxsize=1)
def get_token_service() -> CapabilityTokenService:
    # Secret is read once here and handed to the service; never rotated at runtime
    return CapabilityTokenService(settings.SECRET_KEY)


@lru_cache(maxsize=1)
def get_tenant_repository() -> TenantRepository:
    # Built once: the data dir is created at first use, not per request
    return TenantRepository(settings.DATA_DIR, settings.SQLITE_BUSY_TIMEOUT_MS)


def get_namespace_service(
    tokens: CapabilityTokenService = Depends(get_token_service),
    tenants: TenantRepository = Depends(get_tenant_repository),
) -> NamespaceService:
    return NamespaceService(tokens, tenants)


def get_bearer(authorization: Optional[str] = Header(default=None)) -> Optional[str]:
    return extract_bearer(authorization)


def rate_limit_dependencies() -> List[DependsParam]:
    if not settings.RATE_LIMIT_ENABLED:
        return []
    return [
        Depends(
            RateLimiter(
                times=settings.RATE_LIMIT_TIMES, seconds=settings.RATE_LIMIT_SECONDS
            )
        )
    ]


def _is_json(content_type: str) -> bool:
    media = content_type.split(";", 1)[0].strip().lower()
    return media == "application/json" or media.endswith("+json")


def decode_content(raw: bytes, content_type: str) -> str:
    """
    - Any body is accepted as text.
    - JSON objects/arrays are stored in compact serialized form.
    - Anything else (including JSON scalars and invalid JSON) is stored verbatim.
    - A lone surrogate escape ("\\ud800") is valid JSON but not encodable as
      UTF-8; such documents keep their \\u escapes instead.
    """
    text = raw.decode("utf-8", errors="replace")
    if _is_json(content_type):
        try:
            parsed = json.loads(text)
        except ValueError:
            return text
        if isinstance(parsed, (dict, list)):
            compact = json.dumps(parsed, separators=(",", ":"), ensure_ascii=False)
            try:
                compact.encode("utf-8")
            except UnicodeEncodeError:
                return json.dumps(parsed, separators=(",", ":"), ensure_ascii=True)
            return compact
    return text


async def read_content_body(request: Request) -> str:
    max_bytes = settings.MAX_BODY_MB * 1024 * 1024
    # Fast pre-check via Content-Length if present
    cl = request.headers.get("content-length")
    if cl and cl.isdigit() and int(cl) > max_bytes:
        raise AppError.of(ErrorMessage.PAYLOAD_TOO_LARGE)

    # Hard cap while streaming (works even if no Content-Length)
    chunks: List[bytes] = []
    size = 0
    async for chunk in request.stream():
        size += len(chunk)
        if size > max_bytes:
            raise AppError.of(ErrorMessage.PAYLOAD_TOO_LARGE)
        chunks.append(chunk)

    return decode_content(b"".join(chunks), request.headers.get("content-type", ""))
