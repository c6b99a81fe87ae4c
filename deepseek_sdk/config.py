"""Configuration management using Pydantic settings."""
from pathlib import Path
from typing import Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

SDK_VERSION = "0.1.0"
USER_AGENT = f"deepseek-sdk-python/{SDK_VERSION}"

DEFAULT_BASE_URL = "https://api.deepseek.com"
DEFAULT_CHAT_COMPLETION_TIMEOUT = 45.0
DEFAULT_FIM_COMPLETION_TIMEOUT = 60.0
DEFAULT_MAX_RETRIES = 3
DEFAULT_RETRY_BACKOFF = 1.0
DEFAULT_MAX_CONNECTIONS = 100


class JsonConfig(BaseModel):
    """Tuning for the JSON codec."""
    model_config = ConfigDict(frozen=True)

    pretty_print: bool = False
    lenient: bool = True
    explicit_nulls: bool = False


class ClientSettings(BaseSettings):
    """Connection settings, read from ``DEEPSEEK_*`` environment variables or ``.env``."""
    model_config = SettingsConfigDict(
        env_prefix="DEEPSEEK_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    api_key: Optional[SecretStr] = None
    base_url: str = DEFAULT_BASE_URL

    # Per call-class timeouts, in seconds
    chat_completion_timeout: float = Field(default=DEFAULT_CHAT_COMPLETION_TIMEOUT, gt=0)
    fim_completion_timeout: float = Field(default=DEFAULT_FIM_COMPLETION_TIMEOUT, gt=0)

    # HTTP Client
    max_retries: int = Field(default=DEFAULT_MAX_RETRIES, ge=0)
    retry_backoff: float = Field(default=DEFAULT_RETRY_BACKOFF, ge=0)
    http_max_connections: int = Field(default=DEFAULT_MAX_CONNECTIONS, ge=1)

    log_level: str = "info"

    def token(self) -> Optional[str]:
        """The bearer token in clear text, or ``None`` when unauthenticated."""
        return self.api_key.get_secret_value() if self.api_key else None


def load_yaml_config(config_path: Union[str, Path]) -> ClientSettings:
    """Load client settings from a YAML file; environment variables fill the gaps."""
    config_file = Path(config_path)
    if not config_file.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_file, "r", encoding="utf-8") as f:
        config_data = yaml.safe_load(f) or {}

    return ClientSettings(**config_data)
