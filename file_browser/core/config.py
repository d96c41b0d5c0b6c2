"""Application configuration management."""
import json
import os
import secrets
import tempfile
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

CONFIG_ENV_VAR = "FILE_BROWSER_CONFIG"
DEFAULT_FILES_URL_PREFIX = "/files"


class AppConfig(BaseModel):
    """Settings stored in app.json."""

    model_config = {"extra": "ignore"}

    host: str = Field("0.0.0.0", description="Application bind address")
    port: int = Field(5000, description="Application bind port")
    log_level: str = Field("INFO", description="Root logging level")
    root_directory: str = Field(
        default_factory=lambda: str(Path.home()),
        description="Directory new sessions start in and file URLs are served from",
    )
    files_url_prefix: str = Field(
        DEFAULT_FILES_URL_PREFIX,
        description="Public URL prefix mapped onto root_directory",
    )
    session_secret: Optional[str] = Field(
        default=None,
        description="Secret used to sign session cookies",
    )
    session_idle_timeout: int = Field(
        86400,
        description="Seconds before an idle browser session is dropped (0 disables)",
    )
    session_sweep_interval: int = Field(
        300,
        description="Seconds between idle session sweeps",
    )
    confine_to_root: bool = Field(
        False,
        description="Reject navigation and moves that leave root_directory",
    )


class ConfigFile(BaseModel):
    """Root configuration file structure."""

    app_settings: AppConfig = Field(default_factory=AppConfig)


class Settings(BaseSettings):
    """Resolved settings; FILE_BROWSER_* environment variables win over app.json."""

    model_config = SettingsConfigDict(env_prefix="FILE_BROWSER_", extra="ignore")

    host: str = "0.0.0.0"
    port: int = 5000
    log_level: str = "INFO"
    root_directory: Path = Field(default_factory=Path.home)
    files_url_prefix: str = DEFAULT_FILES_URL_PREFIX
    session_secret: str = Field(default_factory=lambda: secrets.token_urlsafe(32))
    session_idle_timeout: int = 86400
    session_sweep_interval: int = 300
    confine_to_root: bool = False

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls,
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        return env_settings, init_settings, file_secret_settings

    @property
    def root(self) -> Path:
        return Path(os.path.abspath(self.root_directory.expanduser()))


def _get_config_file_path() -> Path:
    """Get the absolute path to the app.json configuration file."""
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override).expanduser()
    project_root = Path(__file__).parent.parent.parent
    return project_root / "app.json"


def _persist_config(config: ConfigFile, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    try:
        with tempfile.NamedTemporaryFile(
            "w",
            encoding="utf-8",
            delete=False,
            dir=path.parent,
            suffix=".tmp",
        ) as tmp_file:
            json.dump(config.model_dump(mode="json"), tmp_file, indent=2, ensure_ascii=False)
            tmp_name = Path(tmp_file.name)
        os.replace(tmp_name, path)
    except Exception as exc:  # noqa: BLE001
        raise RuntimeError(f"Failed to persist configuration to {path}: {exc}") from exc


def _ensure_config_file() -> Path:
    path = _get_config_file_path()
    if path.exists():
        return path

    _persist_config(ConfigFile(), path)
    return path


def _load_config_from_json() -> ConfigFile:
    """Load app.json, creating it and filling in a session secret when missing."""
    config_path = _ensure_config_file()

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            config_data = json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in {config_path}: {e}")
    except OSError as e:
        raise RuntimeError(f"Error loading configuration from {config_path}: {e}")

    config = ConfigFile(**config_data)
    if not config.app_settings.session_secret:
        config.app_settings.session_secret = secrets.token_urlsafe(32)
        _persist_config(config, config_path)
    return config


def get_app_config() -> AppConfig:
    """Return the settings as stored in app.json."""

    return _load_config_from_json().app_settings


@lru_cache(maxsize=None)
def get_settings() -> Settings:
    """Return a cached Settings instance (blocking, use at startup only)."""

    app_config = get_app_config()
    return Settings(**app_config.model_dump(exclude_none=True))
