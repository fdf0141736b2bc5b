"""
Tests for taskdeck configuration.
"""

import pytest
from pathlib import Path


def test_default_config():
    """Test default configuration values."""
    from taskdeck.config import TaskdeckConfig

    config = TaskdeckConfig()

    assert config.storage.type == "sqlite"
    assert config.storage.sqlite_path == "~/.taskdeck/taskdeck.db"


def test_load_config_without_file(monkeypatch):
    """Test loading config when no file exists."""
    from taskdeck.config import load_config

    monkeypatch.delenv("TASKDECK_STORAGE", raising=False)
    monkeypatch.delenv("TASKDECK_DB_PATH", raising=False)

    config = load_config(Path("/nonexistent/config.yaml"))

    assert config.storage.type == "sqlite"


def test_load_config_from_file(tmp_path, monkeypatch):
    """Test reading storage settings from YAML."""
    from taskdeck.config import load_config

    monkeypatch.delenv("TASKDECK_STORAGE", raising=False)
    monkeypatch.delenv("TASKDECK_DB_PATH", raising=False)

    config_file = tmp_path / "config.yaml"
    config_file.write_text("storage:\n  type: sqlite\n  sqlite:\n    path: /tmp/tasks.db\n")

    config = load_config(config_file)

    assert config.storage.sqlite_path == "/tmp/tasks.db"


def test_load_config_invalid_yaml(tmp_path, monkeypatch, caplog):
    """Test that unparseable YAML falls back to defaults."""
    from taskdeck.config import load_config

    monkeypatch.delenv("TASKDECK_STORAGE", raising=False)
    monkeypatch.delenv("TASKDECK_DB_PATH", raising=False)

    config_file = tmp_path / "config.yaml"
    config_file.write_text("storage: [unclosed\n")

    config = load_config(config_file)

    assert config.storage.type == "sqlite"
    assert "Could not parse" in caplog.text


def test_load_config_with_env_override(monkeypatch):
    """Test environment variable overrides."""
    from taskdeck.config import load_config

    monkeypatch.delenv("TASKDECK_DB_PATH", raising=False)
    monkeypatch.setenv("TASKDECK_STORAGE", "memory")

    config = load_config(Path("/nonexistent/config.yaml"))

    assert config.storage.type == "memory"

    monkeypatch.setenv("TASKDECK_DB_PATH", "/tmp/override.db")

    config = load_config(Path("/nonexistent/config.yaml"))

    assert config.storage.type == "sqlite"
    assert config.storage.sqlite_path == "/tmp/override.db"


def test_save_and_reload(tmp_path, monkeypatch):
    """Test that a saved config loads back the same."""
    from taskdeck.config import StorageConfig, TaskdeckConfig, load_config, save_config

    monkeypatch.delenv("TASKDECK_STORAGE", raising=False)
    monkeypatch.delenv("TASKDECK_DB_PATH", raising=False)

    config_file = tmp_path / "sub" / "config.yaml"
    config = TaskdeckConfig(storage=StorageConfig(sqlite_path="/data/tasks.db"))

    save_config(config, config_file)

    assert config_file.stat().st_mode & 0o777 == 0o600
    assert load_config(config_file).to_dict() == config.to_dict()


class TestAdapterFactory:
    """Tests for create_adapter()."""

    def test_sqlite_adapter(self, tmp_path):
        """Test the sqlite type builds a SQLite store at the configured path."""
        from taskdeck.config import StorageConfig, TaskdeckConfig
        from taskdeck.storage.factory import create_adapter
        from taskdeck.storage.sqlite import SQLiteKeyValueStore

        config = TaskdeckConfig(storage=StorageConfig(sqlite_path=str(tmp_path / "t.db")))

        adapter = create_adapter(config)

        assert isinstance(adapter, SQLiteKeyValueStore)
        assert adapter.db_path == tmp_path / "t.db"

    def test_memory_adapter(self):
        """Test the memory type."""
        from taskdeck.config import StorageConfig, TaskdeckConfig
        from taskdeck.storage.factory import create_adapter
        from taskdeck.storage.memory import MemoryKeyValueStore

        adapter = create_adapter(TaskdeckConfig(storage=StorageConfig(type="Memory")))

        assert isinstance(adapter, MemoryKeyValueStore)

    def test_unknown_type(self):
        """Test that an unknown storage type raises ValueError."""
        from taskdeck.config import StorageConfig, TaskdeckConfig
        from taskdeck.storage.factory import create_adapter

        with pytest.raises(ValueError) as exc:
            create_adapter(TaskdeckConfig(storage=StorageConfig(type="postgres")))

        assert "Unknown storage type" in str(exc.value)
