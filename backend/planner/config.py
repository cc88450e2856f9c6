from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    DEFAULT_HORIZON_MONTHS: int = 60
    MAX_HORIZON_MONTHS: int = 1200
    AUDIT_TRAIL_SIZE: int = 100
    CORS_ORIGINS: list[str] = ["http://localhost:3000"]

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
