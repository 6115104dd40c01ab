from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # FastAPI
    APP_NAME: str = "Gradebook"
    API_VERSION: str = "v1"
    DEBUG: bool = False

    # Logging
    LOG_LEVEL: str = "INFO"

    # Database
    DB_URL: str = "sqlite:///./gradebook.db"

    class Config:
        env_file = ".env"


settings = Settings()
