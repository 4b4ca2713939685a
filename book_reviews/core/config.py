from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    PROJECT_NAME: str = "Book Reviews API"
    VERSION: str = "v1"
    DESCRIPTION: str = "A Rest API for books and their reviews"

    BOOKS_PREFIX: str = "/books"

    # --- Database ---
    DATABASE_URL: str = "sqlite+aiosqlite:///./book_reviews.db"
    DB_ECHO: bool = False

    # --- Redis Configuration ---
    REDIS_URL: str = "redis://localhost:6379/0"
    REDIS_SOCKET_TIMEOUT: float = 1.0
    REDIS_CONNECT_TIMEOUT: float = 1.0

    # --- Cache ---
    CACHE_ENABLED: bool = True
    CACHE_TTL_SECONDS: int = 3600
    CACHE_OPERATION_TIMEOUT: float = 1.5
    CACHE_KEY_PREFIX: str = "bookreviews"

    # --- HTTP ---
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: str = "http://localhost:3000,http://localhost:8000"
    MAX_REQUEST_SIZE: int = 1024 * 1024
    LOGGING_EXCLUDE_PATHS: set[str] = {"/health", "/favicon.ico"}

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


settings = Settings()
