# config/settings.py
import os
import sys
from typing import Optional
from dotenv import load_dotenv
from pydantic import ValidationError, Field
from pydantic_settings import BaseSettings
from util.enums import Environment

if os.getenv("APP_ENV", Environment.DEV) == Environment.DEV:
    load_dotenv()


class Settings(BaseSettings):
    # App
    APP_ENV: str = Field(default=Environment.DEV.value, validation_alias="APP_ENV")
    HOST: str = Field(default="0.0.0.0", validation_alias="HOST")
    PORT: int = Field(default=3001, validation_alias="PORT")

    # Capability tokens: loaded once at startup, never rotated while running
    SECRET_KEY: str = Field(..., min_length=1, validation_alias="SECRET_KEY")

    # Tenant storage
    DATA_DIR: str = Field(default="dbs", validation_alias="DATA_DIR")
    SQLITE_BUSY_TIMEOUT_MS: int = Field(
        default=5000, validation_alias="SQLITE_BUSY_TIMEOUT_MS"
    )

    # CORS & Limits
    ALLOWED_ORIGIN: str = Field(default="*", validation_alias="ALLOWED_ORIGIN")
    MAX_BODY_MB: int = Field(default=10, validation_alias="MAX_BODY_MB")
    RATE_LIMIT_ENABLED: bool = Field(default=False, validation_alias="RATE_LIMIT_ENABLED")
    REDIS_URL: str = Field(
        default="redis://localhost:6379/0", validation_alias="REDIS_URL"
    )
    RATE_LIMIT_TIMES: int = Field(default=60, validation_alias="RATE_LIMIT_TIMES")
    RATE_LIMIT_SECONDS: int = Field(default=60, validation_alias="RATE_LIMIT_SECONDS")
    TRUST_PROXY: bool = Field(default=False, validation_alias="TRUST_PROXY")

    # Presentation layer (built client bundle)
    CLIENT_BUILD_DIR: str = Field(
        default="client/build", validation_alias="CLIENT_BUILD_DIR"
    )

    # Logging knobs
    LOGGER_NAME: str = "dropspace"
    LOG_LEVEL: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    LOG_COLOR: Optional[bool] = Field(default=None, validation_alias="LOG_COLOR")
    LOG_TO_FILE: bool = Field(default=False, validation_alias="LOG_TO_FILE")
    LOG_DIR: str = Field(default="logs", validation_alias="LOG_DIR")
    LOG_FILE_NAME: str = Field(default="app.log", validation_alias="LOG_FILE_NAME")
    LOG_MAX_BYTES: int = Field(
        default=50 * 1024 * 1024, validation_alias="LOG_MAX_BYTES"
    )
    LOG_BACKUP_COUNT: int = Field(default=5, validation_alias="LOG_BACKUP_COUNT")


try:
    settings = Settings()
except ValidationError as e:
    print("❌ Missing/invalid environment variables:", file=sys.stderr)
    for err in e.errors():
        loc = ".".join(str(x) for x in err.get("loc", []))
        msg = err.get("msg", "")
        print(f" - {loc}: {msg}", file=sys.stderr)
    sys.exit(1)
except Exception as e:
    print(f"❌ Settings initialization failed: {e}", file=sys.stderr)
    sys.exit(1)
