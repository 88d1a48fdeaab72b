from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # Development placeholder; deployments supply DATABASE_URL.
    database_url: str = "postgresql+psycopg2://postgres@localhost:5432/postgres"

    # HTTP listener
    host: str = "0.0.0.0"
    port: int = 8000
    cors_allow_origins: list[str] = ["*"]

    log_level: str = "INFO"


settings = Settings()
