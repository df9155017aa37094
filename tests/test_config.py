"""Tests for xrplbot.config: TOML file, environment and override layering."""
import os

import pytest

from xrplbot.config import (
    BUNDLED_ACCOUNT_NAMES,
    DEFAULT_MENTION,
    DEFAULT_RPC_URL,
    BotConfig,
    load_config,
)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch, tmp_path):
    for name in list(os.environ):
        if name.startswith("XRPLBOT_"):
            monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)


@pytest.fixture()
def config_file(tmp_path):
    path = tmp_path / "bot.toml"
    path.write_text(
        "[xrplbot]\n"
        'mention = "@ledger-helper"\n'
        'rpc_url = "https://s1.ripple.com:51234/"\n'
        "require_adjacent_mention = false\n"
        'colour = "blue"\n'
    )
    return path


# -- Tests: defaults ---------------------------------------------------------

class TestDefaults:
    def test_defaults_without_file(self):
        config = load_config()
        assert config.mention == DEFAULT_MENTION
        assert config.rpc_url == DEFAULT_RPC_URL
        assert config.require_adjacent_mention is True
        assert config.github_token is None
        assert config.account_names_path == str(BUNDLED_ACCOUNT_NAMES)

    def test_missing_explicit_file_is_skipped(self, tmp_path):
        config = load_config(str(tmp_path / "absent.toml"))
        assert config.mention == DEFAULT_MENTION

    def test_bundled_dataset_exists(self):
        assert BUNDLED_ACCOUNT_NAMES.exists()


# -- Tests: layering ---------------------------------------------------------

class TestLayering:
    def test_file_values(self, config_file):
        config = load_config(str(config_file))
        assert config.mention == "@ledger-helper"
        assert config.rpc_url == "https://s1.ripple.com:51234/"
        assert config.require_adjacent_mention is False

    def test_default_file_in_working_directory(self, tmp_path):
        (tmp_path / "xrplbot.toml").write_text('[xrplbot]\nbot_login = "helper[bot]"\n')
        assert load_config().bot_login == "helper[bot]"

    def test_environment_beats_file(self, config_file, monkeypatch):
        monkeypatch.setenv("XRPLBOT_RPC_URL", "https://env.example/")
        monkeypatch.setenv("XRPLBOT_REQUIRE_ADJACENT", "yes")
        config = load_config(str(config_file))
        assert config.rpc_url == "https://env.example/"
        assert config.require_adjacent_mention is True
        assert config.mention == "@ledger-helper"

    def test_overrides_beat_environment(self, config_file, monkeypatch):
        monkeypatch.setenv("XRPLBOT_RPC_URL", "https://env.example/")
        config = load_config(str(config_file), rpc_url="https://cli.example/")
        assert config.rpc_url == "https://cli.example/"

    def test_environment_without_file(self, monkeypatch):
        monkeypatch.setenv("XRPLBOT_GITHUB_TOKEN", "secret")
        monkeypatch.setenv("XRPLBOT_REQUIRE_ADJACENT", "0")
        config = BotConfig()
        assert config.github_token == "secret"
        assert config.require_adjacent_mention is False
