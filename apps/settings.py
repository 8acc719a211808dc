from pydantic_settings import BaseSettings, SettingsConfigDict


class AppConfig(BaseSettings):
    model_config = SettingsConfigDict(case_sensitive=True, env_prefix="APP_")

    APP_NAME: str = "Parking Reservation API"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    API_PREFIX: str = "/api"
    CORS_ORIGINS: list[str] | str = "*"

    # in-memory URL gets a scratch file removed on shutdown; nothing outlives the process
    DATABASE_URL: str = "sqlite+aiosqlite://"
    SEED_DEMO_DATA: bool = True

    @property
    def cors_origins(self) -> list[str]:
        if isinstance(self.CORS_ORIGINS, str):
            return [
                origin.strip()
                for origin in self.CORS_ORIGINS.split(",")
                if origin.strip()
            ]
        return self.CORS_ORIGINS


settings = AppConfig()
