from decimal import Decimal

import orjson
import pytest

from src.wallet_core.config import CONFIG_ENV_VAR, AppConfig, default_config_path, load_config
from src.wallet_core.exceptions import ConfigurationError
from src.wallet_core.state_manager import AppState, StateManager


class TestStateManager:
    def test_defaults_when_file_missing(self, tmp_path):
        manager = StateManager(tmp_path / "state.json")
        assert manager.current_state == AppState()

    def test_updates_are_persisted(self, tmp_path):
        path = tmp_path / "nested" / "state.json"
        manager = StateManager(path)
        manager.update_character(42)
        manager.update_mineral_price("Tritanium", Decimal("4.25"))
        manager.update_prices_locked(True)

        reloaded = StateManager(path).current_state
        assert reloaded.last_character_id == 42
        assert reloaded.mineral_prices == {"Tritanium": "4.25"}
        assert reloaded.prices_locked is True

    def test_corrupt_file_falls_back_to_defaults(self, tmp_path):
        path = tmp_path / "state.json"
        path.write_bytes(b"\x00garbage")
        assert StateManager(path).current_state == AppState()


class TestConfig:
    def test_defaults_without_file(self, tmp_path):
        config = load_config(tmp_path / "missing.json")
        assert config == AppConfig()
        assert config.icon_size == 64

    def test_values_from_file(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_bytes(orjson.dumps({"icon_size": 32, "log_level": "DEBUG"}))

        config = load_config(path)

        assert config.icon_size == 32
        assert config.log_level == "DEBUG"

    @pytest.mark.parametrize("content", [b"[", b'{"icon_size": -1}', b"[1, 2]"])
    def test_invalid_file_raises(self, tmp_path, content):
        path = tmp_path / "config.json"
        path.write_bytes(content)
        with pytest.raises(ConfigurationError):
            load_config(path)

    def test_env_var_selects_file(self, tmp_path, monkeypatch):
        monkeypatch.setenv(CONFIG_ENV_VAR, str(tmp_path / "custom.json"))
        assert default_config_path() == tmp_path / "custom.json"
