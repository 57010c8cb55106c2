"""Tests for CoachConfig and its JSON loader."""

import json
import logging
from pathlib import Path

import pytest

from holdem_coach.strategy.coach_config import CoachConfig, load_coach_config
from holdem_coach.utils.constants import HandCategory, Position


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    return tmp_path / "coach_config.json"


def _write(path: Path, data) -> Path:
    path.write_text(json.dumps(data))
    return path


class TestCoachConfig:
    def test_frozen(self):
        config = CoachConfig()
        with pytest.raises(AttributeError):
            config.match_bonus = 1.0  # type: ignore[misc]

    def test_mappings_read_only(self):
        config = CoachConfig()
        with pytest.raises(TypeError):
            config.positional_bonus[Position.UTG] = 9.0  # type: ignore[index]

    def test_equal_by_value_but_unhashable(self):
        assert CoachConfig() == CoachConfig()
        assert CoachConfig.__hash__ is None
        with pytest.raises(TypeError, match="unhashable"):
            hash(CoachConfig())

    def test_equity_table_covers_every_category(self):
        config = CoachConfig()
        assert set(config.base_equity) == set(HandCategory)
        assert set(config.made_hand_boost) == set(HandCategory)


class TestLoadCoachConfig:
    def test_missing_file_gives_defaults(self, tmp_path):
        assert load_coach_config(tmp_path / "nope.json") == CoachConfig()

    def test_scalar_overrides(self, config_file):
        _write(config_file, {"match_bonus": 12, "max_reasons": 4})
        config = load_coach_config(config_file)
        assert config.match_bonus == 12.0
        assert config.max_reasons == 4
        assert isinstance(config.max_reasons, int)

    def test_mapping_overrides_merge(self, config_file):
        _write(config_file, {"positional_bonus": {"btn": 5, "UTG": -1}})
        config = load_coach_config(config_file)
        assert config.positional_bonus[Position.BTN] == 5.0
        assert config.positional_bonus[Position.UTG] == -1.0
        assert config.positional_bonus[Position.CO] == 4.0

    def test_unknown_key_logged(self, config_file, caplog):
        _write(config_file, {"not_a_field": 1, "match_bonus": 10})
        with caplog.at_level(logging.WARNING, logger="holdem_coach.config"):
            config = load_coach_config(config_file)
        assert "Unknown coach config key: not_a_field" in caplog.text
        assert config.match_bonus == 10.0

    def test_bad_value_skipped(self, config_file, caplog):
        _write(config_file, {"match_bonus": "lots", "base_equity": {"NOT_A_HAND": 5}})
        with caplog.at_level(logging.WARNING, logger="holdem_coach.config"):
            config = load_coach_config(config_file)
        assert config == CoachConfig()
        assert "Invalid value" in caplog.text

    def test_invalid_json(self, config_file, caplog):
        config_file.write_text("{not json")
        with caplog.at_level(logging.WARNING, logger="holdem_coach.config"):
            assert load_coach_config(config_file) == CoachConfig()
        assert "Failed to read coach config" in caplog.text

    def test_non_object_json(self, config_file):
        _write(config_file, [1, 2, 3])
        assert load_coach_config(config_file) == CoachConfig()
