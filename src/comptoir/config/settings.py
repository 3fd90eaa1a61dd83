"""
Application settings with environment-based configuration.

Priority (highest to lowest):
1. Environment variables (from .env or system)
2. Environment-specific YAML config file (development.yaml, production.yaml)
3. Default YAML config file (default.yaml)
4. Pydantic defaults
"""

import os
import re
from pathlib import Path
from typing import List, Optional

import yaml
from dotenv import load_dotenv
from eth_account import Account
from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from web3 import Web3

from comptoir.utils.validation import is_evm_address

PRIVATE_KEY_PATTERN = re.compile(r"[0-9a-fA-F]{64}")


class Settings(BaseSettings):
    """
    Application settings with environment variable support.

    The admin signing key must come from the environment, never from YAML.
    Instances are frozen: build once at startup and pass values down.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
        frozen=True,
    )

    # Application
    APP_NAME: str = "Comptoir"
    APP_VERSION: str = "0.1.0"
    ENV: str = Field(default="development", description="Environment name")
    DEBUG: bool = Field(default=False, description="Debug mode")

    # API Server
    API_HOST: str = Field(default="0.0.0.0")
    API_PORT: int = Field(default=3000, ge=1, le=65535)
    API_RELOAD: bool = Field(default=False)

    # CORS Configuration
    CORS_ORIGINS: List[str] = Field(
        default=["*"],
        description="Allowed CORS origins",
    )

    # Chain
    RPC_URL: str = Field(
        default="https://bsc-dataseed.binance.org/",
        description="JSON-RPC endpoint of the chain node",
    )
    CHAIN_ID: int = Field(default=56, ge=1)
    NETWORK: str = Field(default="BNB Smart Chain")

    # Tokens
    STABLECOIN_ADDRESS: str = Field(
        default="0x55d398326f99059fF775485246999027B3197955",
        description="Stablecoin accepted as payment",
    )
    STABLECOIN_SYMBOL: str = Field(default="USDT")
    PAYOUT_TOKEN_ADDRESS: str = Field(
        default="0x49F4a728BD98480E92dBfc6a82d595DA9d1F7b83",
        description="Token paid out to buyers from the treasury",
    )
    PAYOUT_TOKEN_SYMBOL: str = Field(default="MZLx")

    # Treasury (from environment - REQUIRED)
    ADMIN_PRIVATE_KEY: SecretStr = Field(
        ...,
        description="Treasury signing key, 64 hex characters without 0x",
    )
    RECEIVER_ADDRESS: Optional[str] = Field(
        default=None,
        description="Address receiving stablecoin payments (default: admin)",
    )

    # Purchase flow
    REQUIRE_PAYMENT_PROOF: bool = Field(
        default=True,
        description="Require a stablecoin transfer hash with each purchase",
    )

    # Resilience - Timeouts
    RPC_TIMEOUT_SECONDS: float = Field(default=15.0, gt=0)
    RECEIPT_TIMEOUT_SECONDS: float = Field(default=180.0, gt=0)
    RECEIPT_POLL_INTERVAL_SECONDS: float = Field(default=2.0, gt=0)

    # Resilience - Retry
    RETRY_MAX_ATTEMPTS: int = Field(
        default=3,
        ge=1,
        description="Maximum attempts for read-only chain calls",
    )

    # Redis (purchase ledger)
    REDIS_ENABLED: bool = Field(default=False)
    REDIS_HOST: str = Field(default="localhost")
    REDIS_PORT: int = Field(default=6379, ge=1, le=65535)
    REDIS_DB: int = Field(default=0, ge=0, le=15)
    REDIS_PASSWORD: Optional[SecretStr] = Field(default=None)
    LEDGER_KEY_PREFIX: str = Field(default="comptoir:purchase:")

    # Keep-alive
    KEEP_ALIVE_ENABLED: bool = Field(default=True)
    KEEP_ALIVE_INTERVAL_SECONDS: float = Field(default=300.0, gt=0)
    KEEP_ALIVE_URL: Optional[str] = Field(default=None)

    # Informational page for GET /
    INFO_PAGE_URL: Optional[str] = Field(default=None)

    # Observability
    METRICS_ENABLED: bool = Field(default=True)
    LOG_LEVEL: str = Field(default="INFO")

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        allowed = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in allowed:
            raise ValueError(f"Invalid LOG_LEVEL. Must be one of: {allowed}")
        return v_upper

    @field_validator("ADMIN_PRIVATE_KEY")
    @classmethod
    def validate_private_key(cls, v: SecretStr) -> SecretStr:
        """Reject anything but 64 hex characters without 0x prefix."""
        if not PRIVATE_KEY_PATTERN.fullmatch(v.get_secret_value()):
            raise ValueError(
                "Private key should be 64 hexadecimal characters without 0x prefix"
            )
        return v

    @field_validator("STABLECOIN_ADDRESS", "PAYOUT_TOKEN_ADDRESS", "RECEIVER_ADDRESS")
    @classmethod
    def validate_address(cls, v: Optional[str]) -> Optional[str]:
        """Validate and checksum contract and receiver addresses."""
        if v is None:
            return v
        if not is_evm_address(v):
            raise ValueError(f"Invalid address: {v}")
        return Web3.to_checksum_address(v)

    @property
    def admin_address(self) -> str:
        """Address derived from the admin signing key."""
        return Account.from_key("0x" + self.ADMIN_PRIVATE_KEY.get_secret_value()).address

    @property
    def receiver_address(self) -> str:
        """Treasury receiving address for stablecoin payments."""
        return self.RECEIVER_ADDRESS or self.admin_address

    @property
    def keep_alive_url(self) -> str:
        """URL pinged by the keep-alive loop."""
        return self.KEEP_ALIVE_URL or f"http://localhost:{self.API_PORT}/api/health"


def load_config(
    config_file: Optional[str] = None,
    env_file: Optional[str] = None,
    env: Optional[str] = None,
) -> Settings:
    """
    Load configuration from YAML files and environment variables.

    Priority: ENV vars > environment-specific YAML > default YAML > defaults

    Args:
        config_file: Optional YAML config filename override
        env_file: Optional .env filename (e.g., ".env.development")
        env: Optional environment name override (e.g., "development", "test")

    Returns:
        Settings instance

    Raises:
        ValidationError: If required fields are missing or malformed
    """
    current_file = Path(__file__).resolve()
    project_root = current_file.parent.parent.parent.parent
    config_dir = project_root / "config"

    environment = env or os.getenv("ENV", "production")

    env_map = {
        "production": (".env.production", "production.yaml"),
        "development": (".env.development", "development.yaml"),
        "test": (".env.test", "test.yaml"),
    }

    default_env_file, default_config_file = env_map.get(
        environment, (".env.production", "production.yaml")
    )
    if env_file is None:
        env_file = default_env_file
    if config_file is None:
        config_file = default_config_file

    env_file_path = project_root / env_file
    if env_file_path.exists():
        load_dotenv(env_file_path, override=True)

    default_config_path = config_dir / "default.yaml"
    merged_config = {}

    if default_config_path.exists():
        with open(default_config_path, "r") as f:
            loaded = yaml.safe_load(f)
            if loaded:
                merged_config = loaded

    if config_file:
        env_config_path = config_dir / config_file
        if env_config_path.exists():
            with open(env_config_path, "r") as f:
                loaded = yaml.safe_load(f)
                if loaded:
                    merged_config.update(loaded)

    # Environment variables win over YAML values
    for key in list(merged_config):
        if key in os.environ:
            merged_config.pop(key)

    return Settings(**merged_config)


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get or initialize global settings singleton."""
    global _settings
    if _settings is None:
        _settings = load_config()
    return _settings


def override_settings(new_settings: Settings) -> None:
    """Override global settings (for testing)."""
    global _settings
    _settings = new_settings


def reset_settings() -> None:
    """Reset settings to force re-initialization (for testing)."""
    global _settings
    _settings = None
