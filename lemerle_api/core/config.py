from pathlib import Path
from zoneinfo import ZoneInfo

from pydantic_settings import BaseSettings, SettingsConfigDict

# Resolve .env from the project root so it loads regardless of cwd
_PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=(str(_ENV_FILE), ".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Database
    database_url: str
    database_ssl: bool = False
    auto_create_tables: bool = False

    # CORS
    cors_origins: str = "http://localhost:3000"

    # Booking business rules (hours are in business_timezone, close hours exclusive)
    business_timezone: str = "Africa/Tunis"
    weekday_open_hour: int = 8
    weekday_close_hour: int = 17
    saturday_open_hour: int = 8
    saturday_close_hour: int = 12
    slot_step_minutes: int = 30

    # Locale used when a request carries no ?lang=
    default_locale: str = "fr"

    # Env
    env: str = "development"

    # Chat widget (Replicate). Leave the token empty to disable the endpoint.
    replicate_api_token: str = ""
    replicate_api_url: str = "https://api.replicate.com/v1"
    chat_model: str = "openai/gpt-4.1-nano"
    chat_timeout_seconds: float = 60.0

    # Branding
    site_name: str = "Le Merle Assistance Médicale"

    @property
    def cors_origins_list(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    @property
    def chat_enabled(self) -> bool:
        return bool(self.replicate_api_token)

    @property
    def tz(self) -> ZoneInfo:
        return ZoneInfo(self.business_timezone)


settings = Settings()
