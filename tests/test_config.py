import json

import pytest

from casino.config import AppConfig, get_env_bool, get_env_int, load_config, save_config

OVERRIDES = ("LOG_LEVEL", "LOG_TO_FILE", "LOG_FORMATTER", "ROUND_TTL_SECONDS", "STARTING_BALANCE")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in OVERRIDES:
        monkeypatch.delenv(key, raising=False)


def test_defaults_without_file(tmp_path):
    config = load_config(tmp_path / "missing.json")

    assert config.games.dice.house_edge == 0.02
    assert config.games.crash.house_edge == 0.03
    assert config.games.crash.max_multiplier == 100
    assert config.games.roulette.min_bet == 0.01
    assert config.sessions.round_ttl_seconds == 300
    assert config.economy.starting_balance == 1000


def test_file_values(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({
        "games": {"slots": {"enabled": False, "max_bet": 50}},
        "economy": {"starting_balance": 250},
    }))

    config = load_config(path)

    assert config.games.slots.enabled is False
    assert config.games.slots.max_bet == 50
    assert config.games.dice.enabled is True
    assert config.economy.starting_balance == 250


def test_env_overrides_file(tmp_path, monkeypatch):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"sessions": {"round_ttl_seconds": 60}}))
    monkeypatch.setenv("ROUND_TTL_SECONDS", "30")
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("LOG_TO_FILE", "yes")

    config = load_config(path)

    assert config.sessions.round_ttl_seconds == 30
    assert config.logging.level == "DEBUG"
    assert config.logging.log_to_file is True


def test_extra_game_settings_are_kept(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"games": {"roulette": {"table_name": "vip"}}}))

    config = load_config(path)

    assert config.games.roulette.model_dump()["table_name"] == "vip"


def test_save_round_trip(tmp_path):
    path = tmp_path / "config.json"
    config = AppConfig()
    config.games.crash.max_multiplier = 50.0

    save_config(config, path)

    saved = json.loads(path.read_text())
    assert "paths" not in saved
    assert load_config(path).games.crash.max_multiplier == 50.0


def test_env_helpers(monkeypatch):
    monkeypatch.setenv("CASINO_FLAG", "off")
    monkeypatch.setenv("CASINO_NUMBER", "not-a-number")

    assert get_env_bool("CASINO_FLAG", True) is False
    assert get_env_int("CASINO_NUMBER", 7) == 7
    assert get_env_int("CASINO_UNSET", 3) == 3
