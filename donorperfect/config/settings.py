from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from donorperfect.protocol.request_builder import DEFAULT_BASE_URL, ApiKeyAuth, Auth, UserPassAuth

MAX_APP_NAME_LENGTH = 20
DEFAULT_APP_NAME = "python-donorperfect"


class Settings(BaseSettings):
    """
    DonorPerfect client configuration using Pydantic BaseSettings.
    Loads environment variables and the .env file automatically.
    """

    DONORPERFECT_BASE_URL: str = Field(DEFAULT_BASE_URL, description="DonorPerfect XML API endpoint")
    DONORPERFECT_API_KEY: str | None = Field(None, description="API key (takes precedence over login/pass)")
    DONORPERFECT_LOGIN: str | None = Field(None, description="API login name")
    DONORPERFECT_PASS: str | None = Field(None, description="API password")
    DONORPERFECT_APP_NAME: str = Field(
        DEFAULT_APP_NAME, description="Name recorded as user_id on audited records (max 20 chars)"
    )
    DONORPERFECT_TIMEOUT: float = Field(30.0, description="Request timeout in seconds")
    DONORPERFECT_PAGE_SIZE: int = Field(500, description="Rows per page for paginated queries")

    model_config = SettingsConfigDict(
        case_sensitive=True,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    @field_validator("DONORPERFECT_APP_NAME")
    @classmethod
    def validate_app_name(cls, v):
        if len(v) > MAX_APP_NAME_LENGTH:
            raise ValueError(f"DONORPERFECT_APP_NAME must be at most {MAX_APP_NAME_LENGTH} characters")
        return v

    @field_validator("DONORPERFECT_TIMEOUT")
    @classmethod
    def validate_timeout(cls, v):
        if v <= 0:
            raise ValueError("DONORPERFECT_TIMEOUT must be greater than 0")
        return v

    @field_validator("DONORPERFECT_PAGE_SIZE")
    @classmethod
    def validate_page_size(cls, v):
        if v < 1:
            raise ValueError("DONORPERFECT_PAGE_SIZE must be at least 1")
        return v

    @property
    def auth(self) -> Auth:
        """Credentials built from the environment, API key first."""
        if self.DONORPERFECT_API_KEY:
            return ApiKeyAuth(self.DONORPERFECT_API_KEY)
        if self.DONORPERFECT_LOGIN and self.DONORPERFECT_PASS:
            return UserPassAuth(self.DONORPERFECT_LOGIN, self.DONORPERFECT_PASS)
        raise ValueError(
            "DonorPerfect credentials not configured: set DONORPERFECT_API_KEY "
            "or DONORPERFECT_LOGIN and DONORPERFECT_PASS"
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Return a cached settings instance.
    Avoids loading the environment multiple times.
    """
    return Settings()
