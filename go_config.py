# go_config.py
from dataclasses import dataclass
import logging
import os
import tomllib

from go_setup import ReplayResult, parse_color, replay_problem

LOGGER_NAMES = ("go_rules", "go_setup")


@dataclass
class RulesConfig:
    board_size: int = 19  # used when a stored problem has no size
    first_player: str = "B"  # used when a stored problem has no first player
    log_level: str = "WARNING"

    def __post_init__(self):
        if (isinstance(self.board_size, bool) or not isinstance(self.board_size, int)
                or self.board_size < 1):
            raise ValueError(f"board_size must be a positive integer, got {self.board_size!r}")
        parse_color(self.first_player)
        if not isinstance(logging.getLevelName(str(self.log_level).upper()), int):
            raise ValueError(f"Unknown log level: {self.log_level!r}")

    @property
    def first_player_color(self) -> int:
        return parse_color(self.first_player)

    def replay_problem(self, setup, raw_moves) -> ReplayResult:
        return replay_problem(setup, raw_moves, default_size=self.board_size,
                              first_player=self.first_player_color)

    @staticmethod
    def load_from_toml(path: str = "config.toml") -> "RulesConfig":
        if not os.path.exists(path):
            return RulesConfig()
        with open(path, "rb") as f:
            data = tomllib.load(f)
        section = data.get("rules", {})
        if not isinstance(section, dict):
            raise ValueError(f"[rules] in {path} must be a table, got {section!r}")
        known = {k: v for k, v in section.items() if k in RulesConfig.__dataclass_fields__}
        return RulesConfig(**known)


def configure_logging(config: RulesConfig) -> None:
    level = logging.getLevelName(config.log_level.upper())
    for name in LOGGER_NAMES:
        logging.getLogger(name).setLevel(level)
