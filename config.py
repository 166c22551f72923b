import os
from typing import List, Optional

import yaml
from pydantic import BaseModel

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")


class ApplicationConfig(BaseModel):
    DB_URI: str = "sqlite+aiosqlite:///./app.db"
    DB_TIMEOUT_SECONDS: float = 5
    API_PREFIX: str = "/api"
    API_PORT: int = 8000
    API_HOST: str = "0.0.0.0"
    CORS_ORIGINS: List[str] = ["http://localhost:5173"]
    CORS_ALLOW_CREDENTIALS: bool = True
    LOG_LEVEL: str = "INFO"
    ENVIRONMENT: str = "development"
    JWT_SECRET: str = "dev-secret-key-change-in-production"
    SESSION_TTL_DAYS: int = 7
    BCRYPT_ROUNDS: int = 10
    FRONTEND_URL: str = "http://localhost:5173"
    SMTP_HOST: Optional[str] = None
    SMTP_PORT: int = 587
    SMTP_USER: Optional[str] = None
    SMTP_PASSWORD: Optional[str] = None
    SMTP_FROM: Optional[str] = None
    RATE_LIMIT_ENABLED: bool = True
    AUTH_RATE_LIMIT: str = "5/15minute"

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"


def load_config(path: str = CONFIG_FILE_PATH) -> ApplicationConfig:
    if os.path.exists(path):
        with open(path, "r") as r_file:
            data = yaml.safe_load(r_file) or dict()
    else:
        data = dict()
    return ApplicationConfig(**data)
