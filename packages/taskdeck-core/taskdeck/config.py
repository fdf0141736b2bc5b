"""
Taskdeck Configuration

Loads settings from ~/.taskdeck/config.yaml with environment variable overrides.
"""

from __future__ import annotations
from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Optional
import os
import logging

import yaml

logger = logging.getLogger(__name__)

CONFIG_DIR = Path.home() / ".taskdeck"
CONFIG_FILE = CONFIG_DIR / "config.yaml"

DEFAULT_SQLITE_PATH = "~/.taskdeck/taskdeck.db"


@dataclass
class StorageConfig:
    """Storage backend settings."""

    type: str = "sqlite"  # "sqlite" or "memory"
    sqlite_path: str = DEFAULT_SQLITE_PATH


@dataclass
class TaskdeckConfig:
    """
    Complete Taskdeck configuration.

    Loaded from ~/.taskdeck/config.yaml with environment variable overrides.
    """

    storage: StorageConfig = field(default_factory=StorageConfig)

    def to_dict(self) -> dict:
        """Convert to dictionary for display."""
        return asdict(self)


def _parse_storage_config(data: dict) -> StorageConfig:
    """Parse storage configuration from YAML data."""
    storage_data = data.get("storage") or {}

    sqlite_config = storage_data.get("sqlite") or {}

    return StorageConfig(
        type=storage_data.get("type", "sqlite"),
        sqlite_path=sqlite_config.get("path", DEFAULT_SQLITE_PATH),
    )


def load_config(config_path: Optional[Path] = None) -> TaskdeckConfig:
    """
    Load configuration from file with environment variable overrides.

    Args:
        config_path: Optional path to config file. Defaults to ~/.taskdeck/config.yaml

    Returns:
        TaskdeckConfig instance
    """
    config_file = config_path or CONFIG_FILE
    config = TaskdeckConfig()

    if config_file.exists():
        try:
            with open(config_file, 'r') as f:
                data = yaml.safe_load(f) or {}

            if not isinstance(data, dict):
                raise ValueError("top level must be a mapping")

            config.storage = _parse_storage_config(data)

        except yaml.YAMLError as e:
            logger.warning(f"Could not parse config file at {config_file}: {e}")
        except (OSError, ValueError, AttributeError) as e:
            logger.warning(f"Ignoring invalid config at {config_file}: {e}")

    # Environment variable overrides
    if os.environ.get("TASKDECK_STORAGE"):
        config.storage.type = os.environ["TASKDECK_STORAGE"]

    if os.environ.get("TASKDECK_DB_PATH"):
        config.storage.type = "sqlite"
        config.storage.sqlite_path = os.environ["TASKDECK_DB_PATH"]

    return config


def save_config(config: TaskdeckConfig, config_path: Optional[Path] = None) -> None:
    """
    Save configuration to file.

    Args:
        config: TaskdeckConfig instance to save
        config_path: Optional path to config file. Defaults to ~/.taskdeck/config.yaml
    """
    config_file = config_path or CONFIG_FILE

    config_file.parent.mkdir(parents=True, exist_ok=True)

    data = {
        "storage": {
            "type": config.storage.type,
        },
    }

    if config.storage.type == "sqlite":
        data["storage"]["sqlite"] = {"path": config.storage.sqlite_path}

    with open(config_file, 'w') as f:
        yaml.dump(data, f, default_flow_style=False, sort_keys=False)

    # Readable only by owner
    config_file.chmod(0o600)

    logger.info(f"Configuration saved to {config_file}")

