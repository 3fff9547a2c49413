"""Settings for directory-bookmarks.

Loads settings from ~/.directory_bookmarks/config.yaml (or the file named by
``DIRECTORY_BOOKMARKS_CONFIG``).  Falls back to defaults if the file doesn't
exist or is invalid.  Creates a default file on first run so users can
discover and edit it.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from .log import logger

CONFIG_ENV = "DIRECTORY_BOOKMARKS_CONFIG"
HOME_DIR = Path.home() / ".directory_bookmarks"
CONFIG_PATH = HOME_DIR / "config.yaml"
DEFAULT_STORE_PATH = HOME_DIR / "preferences.json"

_DEFAULT_YAML = """\
# Directory Bookmarks settings
# Delete this file to reset to defaults.

store:
  path: ""                       # preference file (empty = ~/.directory_bookmarks/preferences.json)
  key: bookmarked_directory      # key holding the bookmarked path

web:
  host: "127.0.0.1"              # HTTP bridge bind address
  port: 8765                     # HTTP bridge port

logging:
  level: WARNING                 # DEBUG, INFO, WARNING, ERROR
"""


@dataclass
class StoreSettings:
    """Where the bookmark is persisted."""

    path: str = ""
    key: str = "bookmarked_directory"

    @property
    def resolved_path(self) -> Path:
        return Path(self.path).expanduser() if self.path else DEFAULT_STORE_PATH


@dataclass
class WebSettings:
    """HTTP bridge bind settings."""

    host: str = "127.0.0.1"
    port: int = 8765


@dataclass
class LoggingSettings:
    level: str = "WARNING"


@dataclass
class Settings:
    """Top-level settings."""

    store: StoreSettings = field(default_factory=StoreSettings)
    web: WebSettings = field(default_factory=WebSettings)
    logging: LoggingSettings = field(default_factory=LoggingSettings)


def default_config_path() -> Path:
    """Config path, honoring the ``DIRECTORY_BOOKMARKS_CONFIG`` override."""
    override = os.environ.get(CONFIG_ENV)
    return Path(override).expanduser() if override else CONFIG_PATH


def load_settings(path: Path | None = None) -> Settings:
    """Load settings from YAML file.

    Falls back to defaults if the file doesn't exist or is invalid.
    Creates a default settings file on first run.
    """
    path = path or default_config_path()
    settings = Settings()

    if path.exists():
        try:
            data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
            if isinstance(data.get("store"), dict):
                sdata = data["store"]
                if "path" in sdata:
                    settings.store.path = str(sdata["path"] or "")
                if sdata.get("key"):
                    settings.store.key = str(sdata["key"])
            if isinstance(data.get("web"), dict):
                wdata = data["web"]
                if wdata.get("host"):
                    settings.web.host = str(wdata["host"])
                if "port" in wdata:
                    settings.web.port = int(wdata["port"])
            if isinstance(data.get("logging"), dict):
                ldata = data["logging"]
                if ldata.get("level"):
                    settings.logging.level = str(ldata["level"]).upper()
        except (OSError, yaml.YAMLError, AttributeError, TypeError, ValueError):
            logger.debug("invalid settings file %s, using defaults", path, exc_info=True)
            return Settings()
    else:
        # Create default file for user to customize
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(_DEFAULT_YAML, encoding="utf-8")
        except OSError:
            logger.debug("could not write default settings to %s", path, exc_info=True)

    return settings
