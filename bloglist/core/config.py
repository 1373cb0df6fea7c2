# bloglist/core/config.py

import os
from dataclasses import dataclass
from dotenv import load_dotenv


DEFAULT_DATABASE_URL = "sqlite:///./data/app.db"
DEFAULT_TEST_DATABASE_URL = "sqlite:///./data/test.db"
DEFAULT_PORT = 3003
TOKEN_TTL_SECONDS = 60 * 60


@dataclass(frozen=True)
class Settings:
    """
    Process configuration, read once at startup and handed to the app factory.
    """
    secret_key: str
    database_url: str = DEFAULT_DATABASE_URL
    port: int = DEFAULT_PORT
    environment: str = "development"
    algorithm: str = "HS256"
    token_ttl_seconds: int = TOKEN_TTL_SECONDS
    cors_origins: tuple[str, ...] = ("*",)

    @property
    def is_test(self) -> bool:
        return self.environment == "test"


def load_settings() -> Settings:
    load_dotenv()

    secret_key = os.getenv("JWT_SECRET_KEY")
    if not secret_key:
        raise RuntimeError("JWT_SECRET_KEY must be set to sign login tokens")

    environment = os.getenv("APP_ENV", "development")
    if environment == "test":
        database_url = os.getenv("TEST_DATABASE_URL", DEFAULT_TEST_DATABASE_URL)
    else:
        database_url = os.getenv("DATABASE_URL", DEFAULT_DATABASE_URL)

    return Settings(
        secret_key=secret_key,
        database_url=database_url,
        port=int(os.getenv("PORT", DEFAULT_PORT)),
        environment=environment,
    )
