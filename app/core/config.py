from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

# Resolve .env from the project root so it loads regardless of cwd
_BACKEND_ROOT = Path(__file__).resolve().parent.parent.parent
_ENV_FILE = _BACKEND_ROOT / ".env"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=(str(_ENV_FILE), ".env", "../.env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Database
    database_url: str

    # JWT (tokens are issued by the identity service, verified here)
    secret_key: str
    access_token_expire_minutes: int = 60 * 24
    algorithm: str = "HS256"

    # CORS
    cors_origins: str = "http://localhost:3000"

    # Personal training business rules
    personal_session_minutes: int = 60
    booking_buffer_minutes: int = 30
    latest_session_end_hour: int = 22  # no personal session may end after this
    availability_start_hour: int = 6
    # Recurring group sessions are created for this many consecutive weeks
    recurring_session_weeks: int = 8

    # Env
    env: str = "development"

    @property
    def cors_origins_list(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    @property
    def latest_session_end_minutes(self) -> int:
        return self.latest_session_end_hour * 60


settings = Settings()
