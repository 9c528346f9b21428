from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    APP_NAME: str = "Iglesia 360"
    APP_VERSION: str = "1.0.0"
    ENVIRONMENT: str = "development"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    PORT: int = 8080

    CORS_ORIGINS: str = "http://localhost:8080,http://localhost:5173"
    PING_MESSAGE: str = "ping"

    DEFAULT_CURRENCY: str = "PEN"
    DEFAULT_PAGE_SIZE: int = 10

    # Second approver becomes mandatory strictly above this amount
    APPROVAL_THRESHOLD: float = 5000.0
    TREASURER_ROLE: str = "tesorero"
    TREASURER_USER_ID: int = 2

    # Stand-ins for the logged-in user when no X-User-Id header is sent
    MOCK_REQUESTER_ID: int = 5
    MOCK_APPROVER_ID: int = 2
    DEMO_PASSWORD: str = "password"

    SEED_DEMO_DATA: bool = True

    @property
    def cors_origins_list(self) -> list[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",")]

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"


@lru_cache()
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
