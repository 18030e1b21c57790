"""Application configuration loaded from environment variables."""

from __future__ import annotations

from pathlib import Path

from pydantic_settings import BaseSettings

from extralife.core.constants import DEFAULT_PRIZE_COLLECTION

BUNDLED_SEED_PATH = Path(__file__).resolve().parent.parent / "data" / "seed_prizes.json"


class Settings(BaseSettings):
    """Extra Life prize store settings."""

    # App
    app_env: str = "development"
    log_level: str = "INFO"
    log_format: str = "text"  # "text" or "json"

    # Oracle Database
    oracle_dsn: str = "localhost:1521/FREEPDB1"
    oracle_user: str = "extralife"
    oracle_password: str = "change-me"
    oracle_pool_min: int = 1
    oracle_pool_max: int = 4
    oracle_pool_increment: int = 1
    oracle_client_lib_dir: str | None = None
    oracle_call_timeout_ms: int = 10_000

    # Prize collection
    prize_collection: str = DEFAULT_PRIZE_COLLECTION
    seed_data_path: str | None = None
    prize_id_unique_index: bool = True

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}

    @property
    def is_testing(self) -> bool:
        return self.app_env == "testing"

    @property
    def seed_path(self) -> Path:
        """Seed file location; falls back to the JSON bundled with the package."""
        if self.seed_data_path:
            return Path(self.seed_data_path)
        return BUNDLED_SEED_PATH


def get_settings() -> Settings:
    """Return a settings instance built from the environment."""
    return Settings()
