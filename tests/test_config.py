"""Tests for configuration loading and saving"""
import json
import os
import stat
import pytest

from got.config import (
    CONFIG_ENV_VAR,
    PLACEHOLDER_TOKEN,
    Config,
    get_config_path,
    load_config,
    save_config,
)
from got.exceptions import ConfigError


class TestConfig:
    """Test the Config dataclass."""

    def test_defaults(self):
        config = Config()
        assert config.github_token is None
        assert config.hosting_domain == "github.com"
        assert config.ssh_remote is True

    def test_usable_token(self):
        assert Config(github_token=" ghp_abc ").usable_token == "ghp_abc"

    @pytest.mark.parametrize("token", [None, "", "   ", PLACEHOLDER_TOKEN])
    def test_unusable_token(self, token):
        assert Config(github_token=token).usable_token is None

    def test_hosting_domain_must_be_host(self):
        with pytest.raises(ValueError):
            Config(hosting_domain="https://github.com/")

    def test_empty_hosting_domain(self):
        with pytest.raises(ValueError):
            Config(hosting_domain=" ")

    def test_from_dict_ignores_unknown_keys(self):
        config = Config.from_dict({"github_token": "t", "theme": "dark", "verbose": True})
        assert config.github_token == "t"

    def test_get(self):
        assert Config(ssh_remote=False).get("ssh_remote", True) is False
        assert Config().get("missing", "fallback") == "fallback"


class TestConfigPath:
    """Test where the config file lives."""

    def test_env_override(self, monkeypatch, temp_dir):
        monkeypatch.setenv(CONFIG_ENV_VAR, str(temp_dir / "custom.json"))
        assert get_config_path() == temp_dir / "custom.json"

    def test_xdg_config_home(self, monkeypatch, temp_dir):
        monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
        monkeypatch.setenv("XDG_CONFIG_HOME", str(temp_dir))
        assert get_config_path() == temp_dir / "got" / "config.json"

    def test_default_location(self, monkeypatch):
        monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
        monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
        path = get_config_path()
        assert path.parts[-3:] == (".config", "got", "config.json")


class TestLoadAndSave:
    """Test persistence of the credential store."""

    def test_missing_file_is_empty_config(self, temp_dir):
        assert load_config(temp_dir / "absent.json") == Config()

    def test_save_then_load(self, config_path):
        save_config(Config(github_token="ghp_saved", ssh_remote=False), config_path)

        loaded = load_config(config_path)

        assert loaded.github_token == "ghp_saved"
        assert loaded.ssh_remote is False

    def test_saved_file_is_private(self, config_path):
        save_config(Config(github_token="ghp_saved"), config_path)

        mode = stat.S_IMODE(os.stat(config_path).st_mode)
        assert mode == 0o600

    def test_saved_record_format(self, config_path):
        save_config(Config(github_token="ghp_saved"), config_path)

        data = json.loads(config_path.read_text())
        assert data["github_token"] == "ghp_saved"
        assert set(data) == {"github_token", "hosting_domain", "ssh_remote"}

    def test_invalid_json(self, temp_dir):
        path = temp_dir / "config.json"
        path.write_text("{not json")

        with pytest.raises(ConfigError):
            load_config(path)

    def test_not_an_object(self, temp_dir):
        path = temp_dir / "config.json"
        path.write_text("[1, 2]")

        with pytest.raises(ConfigError):
            load_config(path)

    def test_invalid_value(self, temp_dir):
        path = temp_dir / "config.json"
        path.write_text(json.dumps({"github_token": 42}))

        with pytest.raises(ConfigError):
            load_config(path)

    def test_placeholder_token_loads_as_unset(self, temp_dir):
        path = temp_dir / "config.json"
        path.write_text(json.dumps({"github_token": PLACEHOLDER_TOKEN}))

        assert load_config(path).usable_token is None
