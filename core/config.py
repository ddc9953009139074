from datetime import timedelta

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Database
    database_user: str
    database_password: str
    database_host: str
    database_name: str

    # Cache
    cache_host: str
    cache_password: str = ""

    # Auth
    jwt_secret: str
    jwt_duration: timedelta = timedelta(hours=6)
    domain_name: str

    # GeoIP
    geoip_endpoint: str = "http://api.ipapi.com/api"
    geoip_api_key: str

    # Server
    port: int = 3000
    log_level: str = "INFO"
    debug_enabled: bool = False

    # Environment
    environment: str = "development"

    @property
    def database_url(self) -> str:
        return (
            f"postgresql+asyncpg://{self.database_user}:{self.database_password}"
            f"@{self.database_host}/{self.database_name}"
        )

    @property
    def redis_url(self) -> str:
        if self.cache_password:
            return f"redis://:{self.cache_password}@{self.cache_host}/0"
        return f"redis://{self.cache_host}/0"


settings = Settings()
