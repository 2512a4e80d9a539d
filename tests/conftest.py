# tests/conftest.py
import random
import sys
from pathlib import Path

import pytest

# Add project root to sys.path so the sudoku_* modules can be imported in tests
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

# Grille complète valide de référence
SOLUTION = [
    [5, 3, 4, 6, 7, 8, 9, 1, 2],
    [6, 7, 2, 1, 9, 5, 3, 4, 8],
    [1, 9, 8, 3, 4, 2, 5, 6, 7],
    [8, 5, 9, 7, 6, 1, 4, 2, 3],
    [4, 2, 6, 8, 5, 3, 7, 9, 1],
    [7, 1, 3, 9, 2, 4, 8, 5, 6],
    [9, 6, 1, 5, 3, 7, 2, 8, 4],
    [2, 8, 7, 4, 1, 9, 6, 3, 5],
    [3, 4, 5, 2, 8, 6, 1, 7, 9],
]


def puzzle_without(cells):
    """Copie de SOLUTION avec les cases `cells` vidées."""
    grid = [list(row) for row in SOLUTION]
    for r, c in cells:
        grid[r][c] = 0
    return grid


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def solution():
    return [list(row) for row in SOLUTION]


@pytest.fixture
def make_puzzle():
    return puzzle_without
