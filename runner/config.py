"""Runner configuration settings."""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runner configuration loaded from environment variables."""

    # AnkiConnect
    anki_connect_url: str = "http://127.0.0.1:8765"
    request_timeout: float = 30.0
    max_retries: int = 3

    # Cards
    default_deck: str = "Default"
    global_tags: list[str] = ["obsidian"]

    # Vault used for media lookup and Source backlinks
    vault_root: Path | None = None
    vault_name: str | None = None

    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="NOTES2ANKI_",
        env_file=".env",
        env_file_encoding="utf-8",
    )


settings = Settings()
