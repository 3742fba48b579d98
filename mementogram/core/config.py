# mementogram/core/config.py

import json
import logging
import os
from typing import Any, Dict, List, Optional, Union

from google.api_core.exceptions import NotFound
from google.cloud import secretmanager
from pydantic import Field, SecretStr, ValidationInfo, field_validator
from pydantic_settings import BaseSettings
from sqlalchemy.engine import URL

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

SECRET_IDS = [
    "DATABASE_URL",
    "SECRET_KEY",
    "POSTGRES_SERVER",
    "POSTGRES_USER",
    "POSTGRES_PASSWORD",
    "POSTGRES_DB",
]


def get_secrets() -> Optional[Dict[str, str]]:
    project_id = os.getenv("GOOGLE_CLOUD_PROJECT")
    if not project_id:
        return None

    client = secretmanager.SecretManagerServiceClient()
    secrets = {}
    for secret_id in SECRET_IDS:
        try:
            name = f"projects/{project_id}/secrets/{secret_id}/versions/latest"
            response = client.access_secret_version(request={"name": name})
            secrets[secret_id] = response.payload.data.decode("UTF-8")
        except NotFound:
            logger.warning(f"Secret {secret_id} not found in GCP Secret Manager.")
        except Exception as e:
            logger.error(f"Error retrieving secret {secret_id}: {e}")

    return secrets


class Settings(BaseSettings):
    API_V1_STR: str = "/api/v1"
    PROJECT_NAME: str = "Mementogram"
    ENVIRONMENT: str = Field(default="development")

    BACKEND_CORS_ORIGINS: Union[List[str], str] = [
        "http://localhost:3000",
        "http://localhost:5173",
    ]

    GOOGLE_CLOUD_PROJECT: Optional[str] = None

    POSTGRES_SERVER: str = "localhost"
    POSTGRES_USER: str = "mementogram"
    POSTGRES_PASSWORD: str = ""
    POSTGRES_DB: str = "mementogram"
    POSTGRES_PORT: int = Field(default=5432)
    DATABASE_URL: Optional[str] = Field(default=None, validate_default=True)

    SECRET_KEY: SecretStr = Field(default=SecretStr(""))
    ALGORITHM: str = "HS256"
    # 1 day
    ACCESS_TOKEN_EXPIRE_MINUTES: int = Field(default=60 * 24)

    DEFAULT_PAGE_SIZE: int = Field(default=20)
    MAX_PAGE_SIZE: int = Field(default=100)
    # Upper bound on followed authors pulled into a feed
    FEED_FOLLOWING_LIMIT: int = Field(default=1000)

    @field_validator("DATABASE_URL", mode="before")
    @classmethod
    def assemble_db_connection(cls, v: Optional[str], info: ValidationInfo) -> Any:
        if isinstance(v, str) and v:
            return v
        data = info.data
        # URL.create escapes reserved characters in the credentials
        return URL.create(
            drivername="postgresql",
            username=data.get("POSTGRES_USER") or None,
            password=data.get("POSTGRES_PASSWORD") or None,
            host=data.get("POSTGRES_SERVER"),
            port=int(data.get("POSTGRES_PORT", 5432)),
            database=data.get("POSTGRES_DB") or None,
        ).render_as_string(hide_password=False)

    @field_validator("BACKEND_CORS_ORIGINS", mode="before")
    @classmethod
    def assemble_cors_origins(cls, v: Union[str, List[str]]) -> Union[List[str], str]:
        if isinstance(v, str):
            try:
                return json.loads(v)
            except json.JSONDecodeError:
                return [i.strip() for i in v.split(",") if i.strip()]
        return v

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "allow"

    @classmethod
    def from_gcp_secrets(cls) -> "Settings":
        secrets = get_secrets()
        if secrets:
            return cls(**secrets)
        return cls()


def get_settings() -> Settings:
    env = os.getenv("ENVIRONMENT", "development")
    if env == "production":
        return Settings.from_gcp_secrets()
    return Settings()


settings = get_settings()

logger.info("Settings loaded:")
for field, value in settings.model_dump().items():
    if isinstance(value, SecretStr) or field in ("DATABASE_URL", "POSTGRES_PASSWORD"):
        logger.info(f"{field}: [REDACTED]")
    else:
        logger.info(f"{field}: {value}")
