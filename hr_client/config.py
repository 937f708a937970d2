"""Client configuration via environment variables."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Client settings loaded from environment variables."""

    # Backend
    HR_API_BASE_URL: str = "http://localhost:8081"
    HR_API_PREFIX: str = "/api/v1"
    HTTP_TIMEOUT_SECONDS: float = 15.0

    # App
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "info"

    # Listing
    DEFAULT_PAGE_SIZE: int = 10

    # Leave form
    CONFLICT_CHECK_PAGE_SIZE: int = 100
    CONFLICT_CHECK_DEBOUNCE_SECONDS: float = 0.5
    MAX_LEAVE_DAYS: int = 365

    @property
    def api_root(self) -> str:
        """Base URL joined with the versioned API prefix."""
        return self.HR_API_BASE_URL.rstrip("/") + "/" + self.HR_API_PREFIX.strip("/")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True


settings = Settings()
