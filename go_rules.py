"""
Go board rules engine: stone placement, captures, suicide and simple ko.

Boards are square numpy int8 arrays indexed ``board[y, x]``. Every call
treats its input board as read-only and returns a fresh snapshot, so a
position can be shared freely between callers and threads.
"""
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Set, Tuple

import numpy as np

logger = logging.getLogger(__name__)

# Constants for board representation
EMPTY = 0
BLACK = 1
WHITE = 2

Point = Tuple[int, int]


class MoveError(str, Enum):
    """Reasons a stone placement is rejected"""
    OUT_OF_RANGE = 'OUT_OF_RANGE'
    OCCUPIED = 'OCCUPIED'
    KO = 'KO'
    SUICIDE = 'SUICIDE'


REASON_MESSAGES = {
    MoveError.OUT_OF_RANGE: 'That point is outside the board.',
    MoveError.OCCUPIED: 'There is already a stone on that point.',
    MoveError.KO: 'Ko: you cannot retake immediately. Play elsewhere first.',
    MoveError.SUICIDE: 'That move would leave your own stones without liberties.',
}


@dataclass(frozen=True)
class MoveResult:
    board: np.ndarray
    captured: List[Point] = field(default_factory=list)
    next_ko_point: Optional[Point] = None
    legal: bool = True
    error: Optional[MoveError] = None

    @property
    def message(self) -> Optional[str]:
        """Default user-facing text for a rejected move"""
        return REASON_MESSAGES[self.error] if self.error else None


def create_empty_board(size: int) -> np.ndarray:
    """Create an empty size x size board"""
    if size < 1:
        raise ValueError(f"Board size must be positive, got {size}")
    return np.zeros((size, size), dtype=np.int8)


def clone_board(board: np.ndarray) -> np.ndarray:
    """Writable copy of a board"""
    return np.array(board, dtype=np.int8, copy=True)


def freeze_board(board: np.ndarray) -> np.ndarray:
    board.flags.writeable = False
    return board


def get_opponent(color: int) -> int:
    """Get opponent color"""
    return WHITE if color == BLACK else BLACK


def get_neighbors(size: int, x: int, y: int) -> List[Point]:
    """Orthogonal neighbors of (x, y) that lie on the board"""
    neighbors = []
    if x > 0:
        neighbors.append((x - 1, y))
    if x < size - 1:
        neighbors.append((x + 1, y))
    if y > 0:
        neighbors.append((x, y - 1))
    if y < size - 1:
        neighbors.append((x, y + 1))
    return neighbors


def get_group(board: np.ndarray, x: int, y: int) -> Tuple[List[Point], Set[Point]]:
    """
    Flood fill the group containing (x, y).

    Returns the group's stones in visit order and its set of liberties.
    An empty start point has no group.
    """
    color = board[y, x]
    if color == EMPTY:
        return [], set()

    size = board.shape[0]
    stones = []
    visited = set()
    liberties = set()
    stack = [(x, y)]

    while stack:
        cx, cy = stack.pop()
        if (cx, cy) in visited:
            continue
        visited.add((cx, cy))
        stones.append((cx, cy))

        for nx, ny in get_neighbors(size, cx, cy):
            value = board[ny, nx]
            if value == EMPTY:
                liberties.add((nx, ny))
            elif value == color and (nx, ny) not in visited:
                stack.append((nx, ny))

    return stones, liberties


def as_point(value) -> Point:
    """Ko point as an (x, y) tuple; stored points may be {"x", "y"} mappings"""
    if isinstance(value, Mapping):
        return int(value["x"]), int(value["y"])
    x, y = value
    return int(x), int(y)


def _reject(board: np.ndarray, ko_point: Optional[Point], error: MoveError) -> MoveResult:
    logger.debug("Move rejected: %s", error.value)
    return MoveResult(board=board, captured=[], next_ko_point=ko_point,
                      legal=False, error=error)


def apply_move(board: np.ndarray, x: int, y: int, color: int,
               ko_point: Optional[Point] = None) -> MoveResult:
    """
    Place a stone of ``color`` at (x, y) and resolve the consequences.

    Checks run in order and short-circuit: range, occupancy, ko, then
    captures of adjacent enemy groups, then suicide on the post-capture
    board. A rejected move returns the input board untouched together with
    the ko point it was given. A legal move returns a new read-only board,
    the captured points and the ko point for the next move.
    """
    if color not in (BLACK, WHITE):
        raise ValueError(f"Stone color must be BLACK or WHITE, got {color!r}")
    if ko_point is not None:
        ko_point = as_point(ko_point)

    size = board.shape[0]
    if not (0 <= x < size and 0 <= y < size):
        return _reject(board, ko_point, MoveError.OUT_OF_RANGE)

    if board[y, x] != EMPTY:
        return _reject(board, ko_point, MoveError.OCCUPIED)

    if ko_point == (x, y):
        return _reject(board, ko_point, MoveError.KO)

    # Tentative placement
    next_board = clone_board(board)
    next_board[y, x] = color

    # Liberties of every neighboring enemy group are measured before any removal
    opponent = get_opponent(color)
    captured = []
    checked = set()
    for nx, ny in get_neighbors(size, x, y):
        if next_board[ny, nx] != opponent or (nx, ny) in checked:
            continue
        stones, liberties = get_group(next_board, nx, ny)
        checked.update(stones)
        if not liberties:
            captured.extend(stones)

    for cx, cy in captured:
        next_board[cy, cx] = EMPTY

    own_stones, own_liberties = get_group(next_board, x, y)
    if not own_liberties:
        return _reject(board, ko_point, MoveError.SUICIDE)

    next_ko_point = None
    if len(captured) == 1 and len(own_stones) == 1 and len(own_liberties) == 1:
        next_ko_point = captured[0]

    if captured:
        logger.debug("Move at (%d, %d) captured %d stone(s)", x, y, len(captured))

    return MoveResult(board=freeze_board(next_board), captured=captured,
                      next_ko_point=next_ko_point, legal=True, error=None)


def is_legal_move(board: np.ndarray, x: int, y: int, color: int,
                  ko_point: Optional[Point] = None) -> bool:
    """Check if move is legal"""
    return apply_move(board, x, y, color, ko_point).legal


def get_legal_moves(board: np.ndarray, color: int,
                    ko_point: Optional[Point] = None) -> List[Point]:
    """All legal placements for ``color``, row by row"""
    legal_moves = []

    # Use NumPy to find empty positions
    empty_positions = np.argwhere(board == EMPTY)

    for y, x in empty_positions:
        x, y = int(x), int(y)
        if is_legal_move(board, x, y, color, ko_point):
            legal_moves.append((x, y))

    return legal_moves
