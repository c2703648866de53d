# service/namespace_service.py
import logging
import sqlite3
from typing import List, Optional
from starlette.concurrency import run_in_threadpool
from core.capability_token import CapabilityTokenService
from core.identifiers import canonical_namespace_id, is_valid_namespace_id
from model.api import StatusResponse
from model.log_record import LogRecord
from repository.tenant_repository import TenantRepository
from util.enums import ErrorMessage
from util.errors import AppError

logger = logging.getLogger(__name__)

STORAGE_ERRORS = (sqlite3.Error, OSError)


class NamespaceService:
    """
    Gateway between HTTP and the two core pieces:
    - identifier syntax first (no storage access on a malformed id),
    - then token checks for mutating calls,
    - then the tenant store, off the event loop.

    Ownership is "holds a token that decrypts to this id". issue_bearer is
    gated on "no log exists yet", not on "no token issued yet": every caller
    that asks before the first append gets its own valid token.

    Storage failures surface as STORAGE_ERROR and are not retried. Retrying an
    append whose failure arrived after the commit will duplicate the record.
    """

    def __init__(self, tokens: CapabilityTokenService, tenants: TenantRepository) -> None:
        self._tokens = tokens
        self._tenants = tenants

    @staticmethod
    def _canonical(namespace_id: str) -> str:
        if not is_valid_namespace_id(namespace_id):
            logger.info("namespace.invalid_format")
            raise AppError.of(ErrorMessage.INVALID_FORMAT)
        return canonical_namespace_id(namespace_id)

    def _authorize(self, ns: str, token: Optional[str]) -> None:
        if not self._tokens.validate(token, ns):
            logger.warning("namespace.unauthorized ns=%s has_token=%s", ns, bool(token))
            raise AppError.of(ErrorMessage.UNAUTHORIZED)

    def authorize(self, namespace_id: str, token: Optional[str]) -> str:
        """Syntax + token check without touching storage; returns the canonical id."""
        ns = self._canonical(namespace_id)
        self._authorize(ns, token)
        return ns

    async def status(self, namespace_id: str, token: Optional[str] = None) -> StatusResponse:
        ns = self._canonical(namespace_id)
        try:
            exists = await run_in_threadpool(self._tenants.exists, ns)
        except STORAGE_ERRORS:
            logger.error("namespace.status.error ns=%s", ns, exc_info=True)
            raise AppError.of(ErrorMessage.STORAGE_ERROR)
        is_owner = bool(token) and self._tokens.validate(token, ns)
        return StatusResponse(exists=exists, isOwner=is_owner, canGenerateBearer=not exists)

    async def issue_bearer(self, namespace_id: str) -> str:
        ns = self._canonical(namespace_id)
        try:
            exists = await run_in_threadpool(self._tenants.exists, ns)
        except STORAGE_ERRORS:
            logger.error("namespace.bearer.error ns=%s", ns, exc_info=True)
            raise AppError.of(ErrorMessage.STORAGE_ERROR)
        if exists:
            logger.info("namespace.bearer.forbidden ns=%s", ns)
            raise AppError.of(ErrorMessage.FORBIDDEN)
        bearer = self._tokens.issue(ns)
        logger.info("namespace.bearer.issued ns=%s", ns)
        return bearer

    async def append(self, namespace_id: str, token: Optional[str], content: str) -> LogRecord:
        ns = self.authorize(namespace_id, token)
        try:
            record = await run_in_threadpool(self._tenants.append, ns, content)
        except STORAGE_ERRORS:
            # Commit state unknown to the caller; a retry may duplicate.
            logger.error("namespace.append.error ns=%s", ns, exc_info=True)
            raise AppError.of(ErrorMessage.STORAGE_ERROR)
        logger.info(
            "namespace.append.ok ns=%s record=%d chars=%d", ns, record.id, len(content)
        )
        return record

    async def list(self, namespace_id: str) -> List[LogRecord]:
        ns = self._canonical(namespace_id)
        try:
            return await run_in_threadpool(self._tenants.list, ns)
        except STORAGE_ERRORS:
            logger.error("namespace.list.error ns=%s", ns, exc_info=True)
            raise AppError.of(ErrorMessage.STORAGE_ERROR)

    async def destroy(self, namespace_id: str, token: Optional[str]) -> bool:
        ns = self.authorize(namespace_id, token)
        try:
            existed = await run_in_threadpool(self._tenants.destroy, ns)
        except STORAGE_ERRORS:
            logger.error("namespace.destroy.error ns=%s", ns, exc_info=True)
            raise AppError.of(ErrorMessage.STORAGE_ERROR)
        logger.info("namespace.destroy.ok ns=%s existed=%s", ns, existed)
        return existed
