"""Application settings, read from the environment and an optional .env file."""

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .models.check_in import CheckoutAdvance
from .models.session import CompletionRule

# Default data directory (repo root / data)
DATA_DIR = Path(__file__).parent.parent.parent / "data"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="GYM_LOGBOOK_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    data_dir: Path = DATA_DIR
    db_filename: str = "gym_logbook.db"

    # "always": check-out advances the plan day whatever was logged.
    # "never": session completion is the only trigger.
    checkout_advance: CheckoutAdvance = CheckoutAdvance.ALWAYS
    completion_rule: CompletionRule = CompletionRule.COUNT
    # Only reuse an open session if it was started today
    session_same_day_only: bool = False

    log_level: str = "INFO"

    # Account created by `gym-logbook init`
    owner_name: str = "Owner"
    owner_password: str = Field(default="admin", repr=False)

    @property
    def db_path(self) -> Path:
        return self.data_dir / self.db_filename


@lru_cache
def get_settings() -> Settings:
    """Process-wide settings; tests call ``get_settings.cache_clear()``."""
    return Settings()
