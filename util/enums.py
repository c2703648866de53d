# util/enums.py
from enum import Enum
from typing import NamedTuple
from fastapi import status


class Color(str, Enum):
    RESET = "\033[0m"
    RED = "\033[31m"
    GREEN = "\033[32m"
    BLUE = "\033[34m"

    def __str__(self):
        return self.value


class Environment(str, Enum):
    DEV = "dev"
    PROD = "prod"


class ErrorInfo(NamedTuple):
    message: str
    http_status: int


class ErrorMessage(Enum):
    INVALID_FORMAT = ErrorInfo("Invalid UUID format", status.HTTP_400_BAD_REQUEST)
    UNAUTHORIZED = ErrorInfo(
        "Invalid or missing bearer token", status.HTTP_401_UNAUTHORIZED
    )
    FORBIDDEN = ErrorInfo(
        "Bearer token can only be generated for new UUIDs", status.HTTP_403_FORBIDDEN
    )
    NOT_FOUND = ErrorInfo("Not Found", status.HTTP_404_NOT_FOUND)
    PAYLOAD_TOO_LARGE = ErrorInfo(
        "Request body too large", status.HTTP_413_REQUEST_ENTITY_TOO_LARGE
    )
    STORAGE_ERROR = ErrorInfo("Database error", status.HTTP_500_INTERNAL_SERVER_ERROR)
