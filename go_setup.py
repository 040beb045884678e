"""
Decoding of stored problem setups and replay of stored move lists.

A problem is persisted as ``{"size": N, "stones": [{"x", "y", "color"}]}``
and an answer as an ordered list of ``{"x", "y"}`` points without colors.
Colors alternate from the problem's first player.
"""
import logging
import math
from dataclasses import dataclass, field
from numbers import Integral, Real
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional

import numpy as np

from go_rules import (
    BLACK, EMPTY, WHITE, MoveError, MoveResult, Point,
    apply_move, create_empty_board, freeze_board, get_opponent,
)

logger = logging.getLogger(__name__)

COLOR_NAMES = {
    'b': BLACK,
    'black': BLACK,
    'w': WHITE,
    'white': WHITE,
}


class SetupError(ValueError):
    """Stored board setup cannot be turned into a board"""


def parse_color(value: Any) -> int:
    """Convert 'B'/'W', 'black'/'white' or an int constant to a color"""
    if isinstance(value, str):
        color = COLOR_NAMES.get(value.strip().lower())
        if color is None:
            raise SetupError(f"Unknown stone color: {value!r}")
        return color
    if isinstance(value, Integral) and not isinstance(value, bool) and int(value) in (BLACK, WHITE):
        return int(value)
    raise SetupError(f"Unknown stone color: {value!r}")


def color_name(color: int) -> str:
    return 'B' if color == BLACK else 'W'


def _as_int(value: Any) -> Optional[int]:
    """Integer coordinate, or None when the value is not a finite whole number"""
    if isinstance(value, bool):
        return None
    if isinstance(value, Integral):
        return int(value)
    if isinstance(value, str):
        try:
            value = float(value)
        except ValueError:
            return None
    if isinstance(value, Real) and math.isfinite(value) and float(value).is_integer():
        return int(value)
    return None


def decode_setup(setup: Mapping[str, Any], default_size: Optional[int] = None) -> np.ndarray:
    """Build the starting board of a problem from its stored setup"""
    raw_size = setup.get('size')
    size = _as_int(default_size if raw_size is None else raw_size)
    if size is None or size < 1:
        raise SetupError(f"Invalid board size: {raw_size!r}")

    board = create_empty_board(size)
    for stone in setup.get('stones') or []:
        if not isinstance(stone, Mapping):
            raise SetupError(f"Stone entry must be a mapping: {stone!r}")
        x = _as_int(stone.get('x'))
        y = _as_int(stone.get('y'))
        if x is None or y is None or not (0 <= x < size and 0 <= y < size):
            raise SetupError(f"Stone outside a {size}x{size} board: {stone!r}")
        if board[y, x] != EMPTY:
            raise SetupError(f"Two stones on the same point ({x}, {y})")
        board[y, x] = parse_color(stone.get('color'))

    return freeze_board(board)


def encode_board(board: np.ndarray) -> Dict[str, Any]:
    """Inverse of decode_setup"""
    stones = []
    for y, x in np.argwhere(board != EMPTY):
        stones.append({'x': int(x), 'y': int(y), 'color': color_name(board[y, x])})
    return {'size': int(board.shape[0]), 'stones': stones}


def normalize_moves(raw: Any) -> List[Point]:
    """
    Clean a submitted move list.

    Entries may be ``{"x", "y"}`` mappings or ``(x, y)`` pairs. Entries
    whose coordinates are not whole numbers are dropped; anything that is
    not a list yields no moves.
    """
    if not isinstance(raw, (list, tuple)):
        return []

    moves = []
    for entry in raw:
        if isinstance(entry, Mapping):
            x, y = _as_int(entry.get('x')), _as_int(entry.get('y'))
        elif isinstance(entry, (list, tuple)) and len(entry) == 2:
            x, y = _as_int(entry[0]), _as_int(entry[1])
        else:
            continue
        if x is not None and y is not None:
            moves.append((x, y))
    return moves


def move_color(index: int, first_player: int = BLACK) -> int:
    """Color of the index-th move when play alternates from first_player"""
    return first_player if index % 2 == 0 else get_opponent(first_player)


@dataclass
class ReplayResult:
    board: np.ndarray
    ko_point: Optional[Point] = None
    captures: Dict[int, int] = field(default_factory=lambda: {BLACK: 0, WHITE: 0})
    applied: int = 0
    first_player: int = BLACK
    error: Optional[MoveError] = None
    failed_index: Optional[int] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def next_player(self) -> int:
        return move_color(self.applied, self.first_player)


def replay_positions(board: np.ndarray, moves: Iterable[Point], first_player: int = BLACK,
                     ko_point: Optional[Point] = None) -> Iterator[MoveResult]:
    """Yield the outcome of each move in turn, ending after the first illegal one"""
    for index, (x, y) in enumerate(moves):
        result = apply_move(board, x, y, move_color(index, first_player), ko_point)
        yield result
        if not result.legal:
            return
        board, ko_point = result.board, result.next_ko_point


def replay_moves(board: np.ndarray, moves: Iterable[Point], first_player: int = BLACK,
                 ko_point: Optional[Point] = None) -> ReplayResult:
    """
    Apply a move list to a starting board.

    Board and ko point are carried from each move to the next. Replay stops
    at the first illegal move; the result then holds the last legal
    position along with the reason and index of the rejected move.
    """
    replay = ReplayResult(board=board, ko_point=ko_point, first_player=first_player)

    for index, result in enumerate(replay_positions(board, moves, first_player, ko_point)):
        if not result.legal:
            replay.error = result.error
            replay.failed_index = index
            logger.info("Replay stopped at move %d: %s", index, result.error.value)
            break
        replay.board = result.board
        replay.ko_point = result.next_ko_point
        replay.captures[move_color(index, first_player)] += len(result.captured)
        replay.applied += 1

    return replay


def replay_problem(setup: Mapping[str, Any], raw_moves: Any, default_size: Optional[int] = None,
                   first_player: int = BLACK) -> ReplayResult:
    """
    Replay a submitted answer on a stored problem.

    ``default_size`` applies when the setup stores no size. A
    ``first_player`` stored on the setup takes precedence over the argument.
    """
    board = decode_setup(setup, default_size)
    if setup.get('first_player') is not None:
        first_player = parse_color(setup['first_player'])
    return replay_moves(board, normalize_moves(raw_moves), first_player)
