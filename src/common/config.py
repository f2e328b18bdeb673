import os
from typing import Annotated, List
from dotenv import load_dotenv
from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode

# Load environment variables from the correct .env file
env_file = ".env" if os.getenv("APP_ENV", "development") == "development" else ".env.production"
load_dotenv(env_file)

class Settings(BaseSettings):
    APP_ENV: str = "development"
    DEBUG: bool = False
    DATABASE_URL: str = "sqlite+aiosqlite:///./hospital.db"
    JWT_SECRET: str = "change-me"
    JWT_ALGORITHM: str = "HS256"
    ALLOWED_ORIGINS: Annotated[List[str], NoDecode] = ["*"]
    LOG_LEVEL: str = "info"

    # Document store call policy
    STORE_TIMEOUT_SECONDS: float = 10.0
    STORE_READ_RETRIES: int = 2

    # Doctor recommendations
    DOCTOR_FETCH_LIMIT: int = 10
    DOCTOR_TOP_N: int = 3

    @field_validator("ALLOWED_ORIGINS", mode="before")
    def split_origins(cls, value):
        if isinstance(value, str):
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value

settings = Settings()
