from typing import List, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, model_validator
import os

# Load .env automatically
load_dotenv()


def _bool_env(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


class Settings(BaseModel):
    environment: str = os.getenv("ENVIRONMENT", "development")
    database_url: str = os.getenv("DATABASE_URL", "sqlite:///./fintrack.db")
    database_echo: bool = _bool_env("DATABASE_ECHO")
    jwt_secret: Optional[str] = os.getenv("JWT_SECRET") or None
    jwt_algorithm: str = os.getenv("JWT_ALGORITHM", "HS256")
    access_token_expire_minutes: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "30"))
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    cors_origins: List[str] = [
        o.strip()
        for o in os.getenv(
            "CORS_ORIGINS",
            "http://localhost:5173,http://127.0.0.1:5173,http://localhost:3000,http://127.0.0.1:3000",
        ).split(",")
        if o.strip()
    ]
    groq_api_key: Optional[str] = os.getenv("GROQ_API_KEY") or None
    groq_model: str = os.getenv("GROQ_MODEL", "llama-3.1-8b-instant")
    groq_base_url: str = os.getenv("GROQ_BASE_URL", "https://api.groq.com/openai/v1")

    @model_validator(mode="after")
    def _require_jwt_secret(self):
        if not self.jwt_secret:
            raise ValueError("JWT_SECRET must be set")
        return self


# Global settings instance
settings = Settings()
