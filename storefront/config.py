from pydantic_settings import BaseSettings
from typing import List

class Settings(BaseSettings):
    API_BASE_URL: str = "http://localhost:5000/api"
    REQUEST_TIMEOUT_SECONDS: float = 10.0
    SESSION_STORE_URL: str = "sqlite:///./session.db"
    DATABASE_URL: str = "sqlite:///./dev.db"
    FRONTEND_ORIGINS: List[str] = ["http://localhost:5173"]
    FEATURED_PRODUCTS_LIMIT: int = 8
    CART_MUTATION_STRATEGY: str = "optimistic"  # optimistic | rollback
    USE_FALLBACK_DATA: bool = True
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"

settings = Settings()
