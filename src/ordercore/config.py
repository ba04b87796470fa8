"""Application configuration via pydantic-settings.

Settings are read from environment variables prefixed with ORDERCORE_
and optionally from a ``.env`` file at the project root.
Business thresholds (discounts, free shipping) are deliberately not here.
"""

from __future__ import annotations

from decimal import Decimal
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_PROJECT_ROOT = Path(__file__).resolve().parents[2]
_ENV_FILE = _PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    """Runtime settings.

    Example: ``ORDERCORE_DATA_DIR=/var/lib/ordercore``
    """

    model_config = SettingsConfigDict(
        env_prefix="ORDERCORE_",
        env_file=_ENV_FILE if _ENV_FILE.exists() else ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Storage
    data_dir: Path = Field(default=Path("data"))

    # Pricing
    default_currency: str = Field(default="USD", min_length=3, max_length=3)
    flat_shipping_cost: Decimal = Field(default=Decimal("9.99"), ge=0)

    # Logging (stderr + rotating JSON file)
    log_level: str = Field(default="INFO")
    log_file: Path = Field(default=Path("logs/ordercore.log"))
    log_rotation_size: str = Field(default="10 MB")
    log_retention_count: int = Field(default=5, ge=1)

    @field_validator("data_dir", "log_file", mode="before")
    @classmethod
    def expand_path(cls, v: str | Path) -> Path:
        return Path(v).expanduser()

    @field_validator("default_currency")
    @classmethod
    def upper_currency(cls, v: str) -> str:
        return v.upper()


def get_settings() -> Settings:
    return Settings()
