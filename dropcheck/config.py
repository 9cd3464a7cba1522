from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    database_url: str = "sqlite:///./dropcheck.db"
    app_env: str = "dev"
    app_host: str = "0.0.0.0"
    app_port: int = 8000
    log_level: str = "INFO"

    openai_api_key: str | None = None
    recommendation_model: str = "gpt-4o-mini"
    recommendation_temperature: float = 0.3
    recommendation_timeout_seconds: float = 60.0
    # The recommendation flow has no retry policy of its own; keep 0 unless deliberately enabling one.
    recommendation_max_retries: int = 0

    allowed_origins: str = "http://localhost:9002"
    seed_demo_history: bool = False


settings = Settings()
