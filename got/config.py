"""Configuration handling for got"""

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from got.exceptions import ConfigError
from got.logging_config import get_logger

logger = get_logger(__name__)

# Value shipped in example config files; treated as "no token"
PLACEHOLDER_TOKEN = "your_github_token_here"

CONFIG_ENV_VAR = "GOT_CONFIG"


@dataclass
class Config:
    """Configuration for got with validation."""

    # GitHub integration
    github_token: Optional[str] = None
    hosting_domain: str = "github.com"
    ssh_remote: bool = True  # Rewrite HTTPS clone URLs to the SSH form for origin

    def __post_init__(self):
        """Validate configuration after initialization."""
        self._validate_hosting_domain()
        self._validate_github_token()

    def _validate_hosting_domain(self):
        """Validate hosting_domain is a bare host name."""
        if not self.hosting_domain or not self.hosting_domain.strip():
            raise ValueError("hosting_domain cannot be empty")
        if "/" in self.hosting_domain:
            raise ValueError(f"hosting_domain must be a host name, got '{self.hosting_domain}'")
        self.hosting_domain = self.hosting_domain.strip()

    def _validate_github_token(self):
        """Validate github_token is a string when set."""
        if self.github_token is not None and not isinstance(self.github_token, str):
            raise ValueError("github_token must be a string")

    @property
    def usable_token(self) -> Optional[str]:
        """The stored token, or None when it is empty or the placeholder."""
        token = (self.github_token or "").strip()
        if not token or token == PLACEHOLDER_TOKEN:
            return None
        return token

    def to_dict(self) -> dict:
        """Convert config to the persisted dictionary form."""
        return {
            "github_token": self.github_token,
            "hosting_domain": self.hosting_domain,
            "ssh_remote": self.ssh_remote,
        }

    def get(self, key: str, default=None):
        """Get config value by key."""
        return getattr(self, key, default)

    @classmethod
    def from_dict(cls, config_dict: dict) -> "Config":
        """Create Config from dictionary."""
        known_fields = {
            "github_token",
            "hosting_domain",
            "ssh_remote",
        }

        filtered = {k: v for k, v in config_dict.items() if k in known_fields}
        return cls(**filtered)


def get_config_path() -> Path:
    """Location of the per-user configuration file."""
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override).expanduser()

    base = os.environ.get("XDG_CONFIG_HOME")
    config_dir = Path(base) if base else Path.home() / ".config"
    return config_dir / "got" / "config.json"


def load_config(path: Optional[Union[str, Path]] = None) -> Config:
    """Load the configuration file.

    A missing file is an empty configuration, not an error.

    Raises:
        ConfigError: If the file exists but cannot be read or parsed
    """
    config_path = Path(path) if path else get_config_path()

    if not config_path.exists():
        logger.debug(f"No config file at {config_path}")
        return Config()

    try:
        with open(config_path, "r") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Failed to parse config file {config_path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config file {config_path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Config file {config_path} must contain a JSON object")

    try:
        config = Config.from_dict(data)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid config file {config_path}: {e}") from e

    logger.debug(f"Loaded config from {config_path}")
    return config


def save_config(config: Config, path: Optional[Union[str, Path]] = None) -> Path:
    """Write the configuration file, readable by the owner only.

    Raises:
        ConfigError: If the file cannot be written
    """
    config_path = Path(path) if path else get_config_path()

    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        fd = os.open(config_path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        with os.fdopen(fd, "w") as f:
            json.dump(config.to_dict(), f, indent=2)
    except OSError as e:
        raise ConfigError(f"Failed to write config file {config_path}: {e}") from e

    logger.info(f"Saved config to {config_path}")
    return config_path
