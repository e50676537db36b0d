from pydantic_settings import BaseSettings, SettingsConfigDict

from models import ShowTimesFormat


class Settings(BaseSettings):
    PROJECT_NAME: str = "Movie Booking Client"
    API_BASE_URL: str = "http://localhost:8080/api/v1.0/moviebooking"
    REQUEST_TIMEOUT: float = 10.0
    LOG_LEVEL: str = "INFO"

    # Which outbound show_times shape the backend expects; older
    # deployments stored flat "<date> <time>" strings
    SHOW_TIMES_FORMAT: ShowTimesFormat = "structured"

    model_config = SettingsConfigDict(
        env_prefix="TICKETING_",
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )


settings = Settings()
