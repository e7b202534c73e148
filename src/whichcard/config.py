from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_host: str = "0.0.0.0"
    app_port: int = 8000
    card_settings_file: str = "data/card_settings.json"

    log_level: str = "INFO"
    log_format: str = "standard"

    telegram_bot_token: str = ""

    # Supabase project receiving card_requests rows; logging is skipped when unset.
    usage_log_url: str = ""
    usage_log_service_key: str = ""
    usage_log_table: str = "card_requests"
    usage_log_timeout_seconds: float = 5.0

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


settings = Settings()
