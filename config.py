import os
from typing import List

from pydantic import BaseModel


class Settings(BaseModel):
    app_title: str = "REST Controller Factory"
    app_version: str = "0.1.0"
    api_prefix: str = "/api/v1"
    allowed_origins: List[str] = []
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        raw_origins = os.getenv("ALLOWED_ORIGINS", "")
        allowed_origins = [origin.strip() for origin in raw_origins.split(",") if origin.strip()]
        return cls(
            app_title=os.getenv("APP_TITLE", "REST Controller Factory"),
            app_version=os.getenv("APP_VERSION", "0.1.0"),
            api_prefix=os.getenv("API_PREFIX", "/api/v1").rstrip("/"),
            allowed_origins=allowed_origins,
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )

# Create a single, shared instance for the whole application to use
settings = Settings.from_env()
