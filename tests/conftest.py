"""Shared pytest fixtures and configuration for all tests."""

import pytest
import sys
import os
import numpy as np

# Add parent directory to path so we can import modules
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from go_rules import create_empty_board, BLACK, WHITE


def build_board(size, black=(), white=()):
    """Board with the given (x, y) stones placed."""
    board = create_empty_board(size)
    for x, y in black:
        board[y, x] = BLACK
    for x, y in white:
        board[y, x] = WHITE
    return board


@pytest.fixture
def make_board():
    """Factory fixture wrapping build_board."""
    return build_board


@pytest.fixture
def empty_board_9x9():
    """Fixture for empty 9x9 board."""
    return create_empty_board(9)


@pytest.fixture
def empty_board_19x19():
    """Fixture for empty 19x19 board."""
    return create_empty_board(19)


@pytest.fixture
def capture_position():
    """White stone in the corner with two liberties."""
    return build_board(19, white=[(0, 0)])


@pytest.fixture
def ko_position():
    """Fixture for a ko situation.

    Black to play at (2, 1) captures the white stone at (1, 1):

        . B W . .
        B W . W .
        . B W . .
    """
    return build_board(
        19,
        black=[(1, 0), (0, 1), (1, 2)],
        white=[(1, 1), (2, 0), (3, 1), (2, 2)],
    )


@pytest.fixture
def random_seed():
    """Fixture to set random seeds for reproducibility."""
    seed = 42
    np.random.seed(seed)
    return seed


@pytest.fixture
def small_board_size():
    """Small board size for quick tests."""
    return 7
