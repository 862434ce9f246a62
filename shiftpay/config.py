import os
from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .earnings import RateMultipliers
from .schedule import MAX_PERIODS

BASE_DIR = Path.cwd()


class Settings(BaseSettings):
    env: str = Field(default="dev", description="Deployment environment")
    app_name: str = "ShiftPay"
    data_path: Path = Field(default=Path("data/shiftpay.json"), description="JSON store location")
    log_level: str = "INFO"
    theme_color: str = "Blue"
    regular_multiplier: float = 1.0
    overtime_multiplier: float = 1.5
    holiday_multiplier: float = 2.0
    max_schedule_periods: int = Field(default=MAX_PERIODS, gt=0)
    upcoming_pay_dates: int = Field(default=5, gt=0)
    upcoming_horizon_months: int = Field(default=6, gt=0)
    recurrence_horizon_days: int = Field(default=90, ge=0)

    model_config = SettingsConfigDict(env_prefix="SHIFTPAY_", extra="ignore")

    @field_validator("regular_multiplier", "overtime_multiplier", "holiday_multiplier")
    @classmethod
    def non_negative(cls, value: float) -> float:
        if value < 0:
            raise ValueError("pay multipliers cannot be negative")
        return value

    @property
    def multipliers(self) -> RateMultipliers:
        return RateMultipliers(
            regular=self.regular_multiplier,
            overtime=self.overtime_multiplier,
            holiday=self.holiday_multiplier,
        )


@lru_cache
def get_settings() -> Settings:
    return Settings(_env_file=get_settings_env_file())


def get_settings_env_file() -> str | None:
    """Resolve environment-specific env file if it exists."""
    env = os.getenv("SHIFTPAY_ENV", "dev")
    env_file = BASE_DIR / f".env.{env}"
    default_file = BASE_DIR / ".env"
    if env_file.exists():
        return str(env_file)
    if default_file.exists():
        return str(default_file)
    return None
