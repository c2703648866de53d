# repository/namespaces.py
from typing import Final, Tuple

CONTENT_TABLE: Final[str] = "content"

# SQLite companions that belong to a log file and go with it on destroy
SIDE_FILE_SUFFIXES: Final[Tuple[str, ...]] = ("-journal", "-wal", "-shm")
