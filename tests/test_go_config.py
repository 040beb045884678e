"""
Pytest tests for rules configuration loading.
"""

import logging

import pytest

from go_config import RulesConfig, configure_logging
from go_rules import EMPTY, BLACK, WHITE, MoveError


class TestRulesConfig:

    @pytest.mark.unit
    def test_defaults(self):
        config = RulesConfig()
        assert config.board_size == 19
        assert config.first_player_color == BLACK
        assert config.log_level == "WARNING"

    @pytest.mark.unit
    def test_missing_file_gives_defaults(self, tmp_path):
        assert RulesConfig.load_from_toml(str(tmp_path / "missing.toml")) == RulesConfig()

    @pytest.mark.unit
    def test_load_rules_table(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text(
            '[rules]\n'
            'board_size = 9\n'
            'first_player = "white"\n'
            'log_level = "debug"\n'
            'komi = 6.5\n'
        )
        config = RulesConfig.load_from_toml(str(path))
        assert config.board_size == 9
        assert config.first_player_color == WHITE
        assert config.log_level == "debug"

    @pytest.mark.unit
    @pytest.mark.parametrize("kwargs", [
        {"board_size": 0},
        {"board_size": "19"},
        {"first_player": "red"},
        {"log_level": "LOUD"},
    ])
    def test_invalid_values(self, kwargs):
        with pytest.raises(ValueError):
            RulesConfig(**kwargs)

    @pytest.mark.unit
    def test_configure_logging(self):
        configure_logging(RulesConfig(log_level="debug"))
        assert logging.getLogger("go_rules").level == logging.DEBUG
        assert logging.getLogger("go_setup").level == logging.DEBUG
        configure_logging(RulesConfig())
        assert logging.getLogger("go_rules").level == logging.WARNING

    @pytest.mark.unit
    def test_bool_board_size_rejected(self):
        with pytest.raises(ValueError):
            RulesConfig(board_size=True)

    @pytest.mark.unit
    def test_rules_must_be_a_table(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text("rules = 5\n")
        with pytest.raises(ValueError):
            RulesConfig.load_from_toml(str(path))


class TestConfiguredReplay:

    @pytest.mark.integration
    def test_replay_from_loaded_toml(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text('[rules]\nboard_size = 9\nfirst_player = "W"\n')
        config = RulesConfig.load_from_toml(str(path))

        replay = config.replay_problem(
            {'stones': [{'x': 0, 'y': 0, 'color': 'B'}]},
            [{'x': 1, 'y': 0}, {'x': 8, 'y': 8}, {'x': 0, 'y': 1}],
        )
        assert replay.ok
        assert replay.board.shape == (9, 9)
        assert replay.board[0, 0] == EMPTY
        assert replay.board[8, 8] == BLACK
        assert replay.captures == {BLACK: 0, WHITE: 1}
        assert replay.next_player == BLACK

    @pytest.mark.integration
    def test_stored_size_and_first_player_win(self):
        config = RulesConfig(board_size=9, first_player="W")
        replay = config.replay_problem({'size': 13, 'first_player': 'B'}, [(12, 12)])
        assert replay.board.shape == (13, 13)
        assert replay.board[12, 12] == BLACK

    @pytest.mark.integration
    def test_default_size_bounds_moves(self):
        replay = RulesConfig(board_size=9).replay_problem({}, [(9, 0)])
        assert replay.error == MoveError.OUT_OF_RANGE
        assert replay.failed_index == 0
