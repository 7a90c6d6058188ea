from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    DATABASE_URL: str = "sqlite:///./habitlab.db"
    APP_ENV: str = "development"

    # Comma-separated allowed origins, or "*" to allow all.
    CORS_ORIGINS: str = "*"

    LOG_LEVEL: str = "INFO"
    # Optional rotating log file; stdout only when unset.
    LOG_FILE: Optional[str] = None

    # Keys in the key-value store
    HABITS_STORAGE_KEY: str = "@habits"
    SLEEP_STORAGE_KEY: str = "@sleepData"
    MEDITATION_STORAGE_KEY: str = "@meditationData"
    USER_NAME_STORAGE_KEY: str = "user_name"

    @property
    def cors_origins_list(self) -> list[str]:
        if self.CORS_ORIGINS.strip() == "*":
            return ["*"]
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]


settings = Settings()
