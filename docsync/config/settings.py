from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    db_host: str = "localhost"
    db_port: int = 5432
    db_database: str = "docsync"
    db_username: str = "docsync"
    db_password: str = "secret"
    db_connect_timeout_seconds: float = 10.0

    store_backend: str = "postgres"
    user_id: str = ""

    docx_engine: str = "python-docx"
    default_tone: str = "formal"

    upload_tick_seconds: float = 0.1
    upload_max_progress_step: float = 15.0
    upload_clear_delay_seconds: float = 2.0
