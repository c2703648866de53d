# repository/tenant_repository.py
import logging
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Final, Iterator, List, Optional
from config.settings import settings
from core.identifiers import is_valid_namespace_id
from model.log_record import LogRecord
from repository.namespaces import CONTENT_TABLE, SIDE_FILE_SUFFIXES
from util.constants import DB_SUFFIX
from util.timing import timed

logger = logging.getLogger(__name__)

CREATE_TABLE_SQL: Final[str] = f"""
    CREATE TABLE IF NOT EXISTS {CONTENT_TABLE} (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        created TEXT NOT NULL,
        content TEXT NOT NULL
    )
"""

# Fixed-width UTC ISO-8601 (ms), so lexical order == chronological order
NOW_SQL: Final[str] = "strftime('%Y-%m-%dT%H:%M:%fZ', 'now')"


class TenantRepository:
    """
    One SQLite file per namespace: <data_dir>/<namespace-id>.db.

    Flow:
    - The file existing IS the namespace existing; there is no shared index.
    - append() lazily creates file + table ("create if absent"); racing first
      appends converge on one schema because SQLite serializes the DDL.
    - list() opens read-only so a read never provisions a namespace.
    - destroy() unlinks the whole log; a later append starts ids at 1 again.
    - Every call takes its own connection and releases it on every exit path.
      Blocking calls; the service layer runs them in the thread pool.

    Known race: destroy() unlinks <id>.db, then its -journal/-wal/-shm. An
    append that starts between the two creates a fresh <id>.db and may have
    its brand-new journal removed mid-transaction. Nothing here coordinates
    destroy with a concurrent append on the same namespace.
    """

    def __init__(
        self,
        data_dir: str | Path = settings.DATA_DIR,
        busy_timeout_ms: int = settings.SQLITE_BUSY_TIMEOUT_MS,
    ) -> None:
        self._root = Path(data_dir)
        self._root.mkdir(parents=True, exist_ok=True)
        self._timeout = max(0, busy_timeout_ms) / 1000.0

    def _path(self, namespace_id: str) -> Path:
        # Guard the filesystem: only canonical ids ever become file names
        if not is_valid_namespace_id(namespace_id) or namespace_id != namespace_id.lower():
            raise ValueError("namespace id must be a canonical lowercase UUID")
        return self._root / f"{namespace_id}{DB_SUFFIX}"

    @contextmanager
    def _conn(self, path: Path, *, read_only: bool = False) -> Iterator[sqlite3.Connection]:
        if read_only:
            conn = sqlite3.connect(
                f"{path.resolve().as_uri()}?mode=ro", uri=True, timeout=self._timeout
            )
        else:
            # IMMEDIATE: take the write lock up front so the timestamp below is
            # assigned in commit order
            conn = sqlite3.connect(path, timeout=self._timeout, isolation_level="IMMEDIATE")
        conn.row_factory = sqlite3.Row
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    # ---------------- Core operations ----------------

    def exists(self, namespace_id: str) -> bool:
        return self._path(namespace_id).is_file()

    def append(self, namespace_id: str, content: str) -> LogRecord:
        path = self._path(namespace_id)
        with timed(logger, "tenant.append", ns=namespace_id):
            with self._conn(path) as conn:
                conn.execute(CREATE_TABLE_SQL)
                cur = conn.execute(
                    f"INSERT INTO {CONTENT_TABLE} (created, content) "
                    f"VALUES ({NOW_SQL}, ?)",
                    (content,),
                )
                record_id = int(cur.lastrowid)
                row = conn.execute(
                    f"SELECT created FROM {CONTENT_TABLE} WHERE id = ?", (record_id,)
                ).fetchone()
        return LogRecord(id=record_id, created=row["created"], content=content)

    def list(self, namespace_id: str) -> List[LogRecord]:
        path = self._path(namespace_id)
        if not path.is_file():
            return []
        with timed(logger, "tenant.list", ns=namespace_id):
            rows = self._select(
                path,
                f"SELECT id, created, content FROM {CONTENT_TABLE} "
                "ORDER BY created DESC, id DESC",
            )
        if rows is None:
            return []
        return [
            LogRecord(id=row["id"], created=row["created"], content=row["content"])
            for row in rows
        ]

    def destroy(self, namespace_id: str) -> bool:
        path = self._path(namespace_id)
        try:
            path.unlink()
        except FileNotFoundError:
            return False
        for suffix in SIDE_FILE_SUFFIXES:
            path.with_name(path.name + suffix).unlink(missing_ok=True)
        logger.info("tenant.destroy ns=%s", namespace_id)
        return True

    # ---------------- Helpers ----------------

    def _select(self, path: Path, sql: str) -> Optional[List[sqlite3.Row]]:
        """
        Run a read query against an existing log.
        None when the file is gone or its table is not created yet
        (a first append is mid-flight, or destroy won the race).
        """
        try:
            with self._conn(path, read_only=True) as conn:
                return conn.execute(sql).fetchall()
        except sqlite3.OperationalError as e:
            msg = str(e).lower()
            if msg.startswith("no such table") or "unable to open" in msg:
                logger.debug("tenant.select.absent path=%s", path.name)
                return None
            raise
