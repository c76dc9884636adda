from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    database_url: str
    jwt_secret_key: str = "your-secret-key-change-in-production"  # Default for development
    access_token_expire_minutes: int = 60 * 24

    # Bounds how long a request waits to reach the database before a 503
    db_connect_timeout_seconds: int = 10

    cors_origins: str = ""
    log_level: str = "INFO"

    class Config:
        env_file = ".env"

settings = Settings()
