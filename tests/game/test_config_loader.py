"""
Tests for battle configuration loading.
"""
import pytest

from src.core.errors import ConfigErrorKind, ConfigurationError
from src.game.config_loader import PROJECT_ROOT, GameConfig, load_config, parse_log_level
from src.game.managers.log_manager import LogLevel
from tests.conftest import write_yaml


class TestLoadConfig:
    """Test reading battle.yaml files."""

    def test_missing_file_uses_defaults(self, tmp_path, capsys):
        config = load_config(str(tmp_path / "absent.yaml"))

        assert config == GameConfig()
        assert "Warning" in capsys.readouterr().out

    def test_full_file(self, tmp_path):
        path = write_yaml(tmp_path / "battle.yaml", {
            "catalog": {"actors": "data/a.yaml", "spells": "data/s.yaml"},
            "battle": {"player_id": "mage", "opponent_id": "slime", "seed": 99},
            "display": {"width": 80, "height": 20, "title": "Duel"},
            "log": {"level": "debug", "max_messages": 50},
        })

        config = load_config(path)

        assert config.actors_path == "data/a.yaml"
        assert config.spells_path == "data/s.yaml"
        assert config.player_id == "mage"
        assert config.opponent_id == "slime"
        assert config.seed == 99
        assert (config.display_width, config.display_height) == (80, 20)
        assert config.display_title == "Duel"
        assert config.log_level == LogLevel.DEBUG
        assert config.max_log_messages == 50

    def test_partial_file_keeps_defaults(self, tmp_path):
        path = write_yaml(tmp_path / "battle.yaml", {"battle": {"opponent_id": "slime"}})

        config = load_config(path)

        assert config.opponent_id == "slime"
        assert config.player_id == GameConfig().player_id
        assert config.seed is None

    def test_empty_file_is_defaults(self, tmp_path):
        path = tmp_path / "battle.yaml"
        path.write_text("", encoding="utf-8")

        assert load_config(str(path)) == GameConfig()

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "battle.yaml"
        path.write_text("battle: {seed: [", encoding="utf-8")

        with pytest.raises(ConfigurationError) as exc_info:
            load_config(str(path))

        assert exc_info.value.kind == ConfigErrorKind.SOURCE_UNAVAILABLE

    def test_non_mapping(self, tmp_path):
        path = write_yaml(tmp_path / "battle.yaml", [1, 2, 3])

        with pytest.raises(ConfigurationError):
            load_config(path)

    def test_bad_values(self, tmp_path):
        path = write_yaml(tmp_path / "battle.yaml", {"log": {"level": "loud"}})

        with pytest.raises(ConfigurationError) as exc_info:
            load_config(path)

        assert "Malformed" in exc_info.value.message

    def test_shipped_config_loads(self):
        config = load_config()

        assert config.player_id == "initplayer"
        assert config.opponent_id == "bot"
        assert config.actors_file.exists()
        assert config.spells_file.exists()


class TestGameConfig:
    """Test path resolution and level parsing."""

    def test_relative_paths_resolve_against_project_root(self):
        config = GameConfig(actors_path="assets/data/actors.yaml")
        assert config.actors_file == PROJECT_ROOT / "assets/data/actors.yaml"

    def test_absolute_paths_are_kept(self, tmp_path):
        config = GameConfig(spells_path=str(tmp_path / "spells.yaml"))
        assert config.spells_file == tmp_path / "spells.yaml"

    @pytest.mark.parametrize("raw,level", [
        ("INFO", LogLevel.INFO),
        ("warning", LogLevel.WARNING),
        (LogLevel.ERROR, LogLevel.ERROR),
    ])
    def test_parse_log_level(self, raw, level: LogLevel):
        assert parse_log_level(raw) == level

    def test_parse_unknown_log_level(self):
        with pytest.raises(ValueError):
            parse_log_level("verbose")
