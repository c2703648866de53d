from typing import Final

UUID_PATTERN: Final[str] = (
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$"
)
BEARER_PREFIX: Final[str] = "bearer "
DB_SUFFIX: Final[str] = ".db"


class InternalURIs:
    ROOT = "/"
    HEALTHZ = "/healthz"
    NAMESPACE = "/{namespace_id}"
    STATUS = NAMESPACE + "/status"
    BEARER = NAMESPACE + "/bearer"
    CONTENT = NAMESPACE + "/content"
    PAGE = "/{path:path}"
