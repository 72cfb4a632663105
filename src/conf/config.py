import os
from typing import List
from pydantic_settings import BaseSettings, SettingsConfigDict
dotenv_path = os.path.abspath(os.path.join(os.path.dirname(__file__), '../../.env'))


class Settings(BaseSettings):
    database_url: str = "sqlite+aiosqlite:///./contacts.sqlite3"
    database_test_url: str = "sqlite+aiosqlite:///./test_db.sqlite3"

    secret_key: str = "change-me-in-production"
    algorithm: str = "HS256"
    access_token_minutes: int = 60 * 24

    api_base_url: str = "http://localhost:8000"
    cors_origins: List[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

    debug: bool = False

    model_config = SettingsConfigDict(env_file=dotenv_path, extra="ignore")

settings = Settings()
