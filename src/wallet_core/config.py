import os
from pathlib import Path

import orjson
from pydantic import BaseModel, Field, ValidationError

from src.wallet_core.exceptions import ConfigurationError

APP_DATA_DIR = Path.home() / ".walletmon"
CONFIG_ENV_VAR = "WALLETMON_CONFIG"


class AppConfig(BaseModel):
    """Static application settings, read once at startup."""
    image_server_cdn_url: str = Field(default="https://images.evetech.net/")
    image_server_base_url: str = Field(default="https://image.eveonline.com/")
    icon_size: int = Field(default=64, gt=0)
    request_timeout: float = Field(default=10.0, gt=0)
    max_retries: int = Field(default=3, ge=1)
    journal_file: Path = Field(default=APP_DATA_DIR / "wallet_journal.json")
    log_level: str = Field(default="INFO")
    log_file: Path | None = Field(default=None)


def default_config_path() -> Path:
    env_path = os.environ.get(CONFIG_ENV_VAR)
    return Path(env_path) if env_path else APP_DATA_DIR / "config.json"


def load_config(path: Path | None = None) -> AppConfig:
    """Loads the config file, or returns defaults if there is none.

    A file that exists but is not a valid config raises ConfigurationError,
    unlike the persisted UI state which silently falls back to defaults.
    """
    path = path or default_config_path()
    if not path.exists():
        return AppConfig()
    try:
        with path.open("rb") as f:
            data = orjson.loads(f.read())
        return AppConfig(**data)
    except (orjson.JSONDecodeError, TypeError, ValidationError, OSError) as e:
        raise ConfigurationError(
            f"Invalid configuration file: {path}", {"error": str(e)}
        ) from e
