"""
Unit tests for application settings.

Usage:
    pytest tests/unit/config/test_settings.py
"""

import pytest
from eth_account import Account
from pydantic import ValidationError

from comptoir.config.settings import (
    Settings,
    get_settings,
    load_config,
    override_settings,
    reset_settings,
)

ADMIN_KEY = "11" * 32


class TestSettings:
    """Unit tests for Settings validation."""

    def test_defaults(self):
        settings = Settings(ADMIN_PRIVATE_KEY=ADMIN_KEY)

        assert settings.CHAIN_ID == 56
        assert settings.API_PORT == 3000
        assert settings.KEEP_ALIVE_INTERVAL_SECONDS == 300
        assert settings.REQUIRE_PAYMENT_PROOF is True
        assert settings.STABLECOIN_ADDRESS == "0x55d398326f99059fF775485246999027B3197955"

    @pytest.mark.parametrize(
        "key",
        [
            "0x" + ADMIN_KEY,
            ADMIN_KEY[:-2],
            ADMIN_KEY + "11",
            ADMIN_KEY + "\n",
            "zz" * 32,
            "",
        ],
    )
    def test_malformed_private_key_rejected(self, key):
        with pytest.raises(ValidationError) as exc_info:
            Settings(ADMIN_PRIVATE_KEY=key)

        assert "64 hexadecimal characters" in str(exc_info.value)

    def test_private_key_is_not_echoed(self):
        settings = Settings(ADMIN_PRIVATE_KEY=ADMIN_KEY)

        assert ADMIN_KEY not in repr(settings)
        assert ADMIN_KEY not in str(settings.ADMIN_PRIVATE_KEY)

    def test_admin_address_derived_from_key(self):
        settings = Settings(ADMIN_PRIVATE_KEY=ADMIN_KEY)

        assert settings.admin_address == Account.from_key("0x" + ADMIN_KEY).address

    def test_receiver_defaults_to_admin(self):
        settings = Settings(ADMIN_PRIVATE_KEY=ADMIN_KEY)
        assert settings.receiver_address == settings.admin_address

    def test_receiver_override_is_checksummed(self):
        settings = Settings(
            ADMIN_PRIVATE_KEY=ADMIN_KEY,
            RECEIVER_ADDRESS="0x55d398326f99059ff775485246999027b3197955",
        )

        assert settings.receiver_address == "0x55d398326f99059fF775485246999027B3197955"

    def test_invalid_contract_address_rejected(self):
        with pytest.raises(ValidationError):
            Settings(ADMIN_PRIVATE_KEY=ADMIN_KEY, PAYOUT_TOKEN_ADDRESS="0x1234")

    def test_invalid_log_level_rejected(self):
        with pytest.raises(ValidationError):
            Settings(ADMIN_PRIVATE_KEY=ADMIN_KEY, LOG_LEVEL="LOUD")

    def test_keep_alive_url_default(self):
        settings = Settings(ADMIN_PRIVATE_KEY=ADMIN_KEY, API_PORT=8080)
        assert settings.keep_alive_url == "http://localhost:8080/api/health"

    def test_settings_are_frozen(self):
        settings = Settings(ADMIN_PRIVATE_KEY=ADMIN_KEY)

        with pytest.raises(ValidationError):
            settings.CHAIN_ID = 97


class TestLoadConfig:
    """Unit tests for YAML + environment loading."""

    @pytest.fixture(autouse=True)
    def _isolate(self, monkeypatch):
        monkeypatch.setenv("ADMIN_PRIVATE_KEY", ADMIN_KEY)
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        monkeypatch.delenv("KEEP_ALIVE_ENABLED", raising=False)
        yield
        reset_settings()

    def test_development_yaml_applied(self):
        settings = load_config(env="development", env_file=".env.missing")

        assert settings.ENV == "development"
        assert settings.LOG_LEVEL == "DEBUG"
        assert settings.KEEP_ALIVE_ENABLED is False

    def test_environment_wins_over_yaml(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "ERROR")

        settings = load_config(
            env="development",
            env_file=".env.missing",
            config_file="development.yaml",
        )

        assert settings.LOG_LEVEL == "ERROR"

    def test_missing_key_fails(self, monkeypatch):
        monkeypatch.delenv("ADMIN_PRIVATE_KEY")

        with pytest.raises(ValidationError):
            load_config(env="development", env_file=".env.missing")

    def test_override_and_reset(self):
        custom = Settings(ADMIN_PRIVATE_KEY=ADMIN_KEY, NETWORK="Testnet")

        override_settings(custom)
        assert get_settings() is custom

        reset_settings()
        assert get_settings() is not custom
