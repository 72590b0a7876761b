from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    log_level: str = "INFO"

    max_file_size_bytes: int = 20 * 1024 * 1024

    analysis_provider: str = "openai"
    analysis_api_key: str = ""
    analysis_model_name: str = "gpt-4o-mini"
    analysis_base_url: str = ""
    analysis_timeout_seconds: int = 120
    analysis_temperature: float = 0.2
    chat_temperature: float = 0.4
    chat_context_max_chars: int = 500_000

    history_store: str = "file"
    history_key: str = "smartdoc_history"
    history_file_path: str = ".smartdoc/history.json"
    history_max_entries: int = 10

    db_host: str = "localhost"
    db_port: int = 5432
    db_database: str = "smartdoc"
    db_username: str = "smartdoc"
    db_password: str = "secret"
