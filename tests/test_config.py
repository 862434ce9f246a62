from pathlib import Path

import pytest
from pydantic import ValidationError

from shiftpay import config
from shiftpay.config import Settings, get_settings
from shiftpay.earnings import RateMultipliers


@pytest.fixture(autouse=True)
def fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_defaults():
    settings = Settings(_env_file=None)

    assert settings.multipliers == RateMultipliers(regular=1.0, overtime=1.5, holiday=2.0)
    assert settings.data_path == Path("data/shiftpay.json")
    assert settings.upcoming_pay_dates == 5


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("SHIFTPAY_OVERTIME_MULTIPLIER", "1.75")
    monkeypatch.setenv("SHIFTPAY_DATA_PATH", "/tmp/payroll.json")

    settings = get_settings()

    assert settings.multipliers.overtime == 1.75
    assert settings.data_path == Path("/tmp/payroll.json")


def test_negative_multiplier_is_rejected(monkeypatch):
    monkeypatch.setenv("SHIFTPAY_HOLIDAY_MULTIPLIER", "-2")

    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_env_file_selection(tmp_path, monkeypatch):
    monkeypatch.setattr(config, "BASE_DIR", tmp_path)
    monkeypatch.setenv("SHIFTPAY_ENV", "test")
    assert config.get_settings_env_file() is None

    (tmp_path / ".env").write_text("SHIFTPAY_APP_NAME=Default\n")
    assert config.get_settings_env_file() == str(tmp_path / ".env")

    (tmp_path / ".env.test").write_text("SHIFTPAY_APP_NAME=Testing\n")
    assert config.get_settings_env_file() == str(tmp_path / ".env.test")
    assert get_settings().app_name == "Testing"
