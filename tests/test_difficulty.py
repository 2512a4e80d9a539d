# tests/test_difficulty.py
import pytest

from sudoku_core import GridConfigError, count_empty, is_valid_solution
from sudoku_difficulty import (
    DEFAULT_DIFFICULTY,
    DifficultyProfile,
    PROFILES,
    generate_puzzle_for_profile,
    get_profile,
)


def test_presets():
    assert {name: p.cells_to_remove for name, p in PROFILES.items()} == {
        "easy": 40,
        "medium": 50,
        "hard": 60,
    }
    assert DEFAULT_DIFFICULTY == "medium"
    assert PROFILES["easy"].givens == 41


def test_get_profile_by_name_and_instance():
    assert get_profile("hard") is PROFILES["hard"]
    custom = DifficultyProfile("expert", 64)
    assert get_profile(custom) is custom


@pytest.mark.parametrize("bad", ["extreme", "", None, 3])
def test_unknown_difficulty_fails_fast(bad):
    with pytest.raises(GridConfigError):
        get_profile(bad)


def test_negative_custom_profile_rejected():
    with pytest.raises(GridConfigError):
        get_profile(DifficultyProfile("broken", -5))


@pytest.mark.parametrize("name", ["easy", "medium", "hard"])
def test_generate_puzzle_for_profile(name, rng):
    puzzle, solution = generate_puzzle_for_profile(name, rng)
    assert is_valid_solution(solution)
    assert count_empty(puzzle) == PROFILES[name].cells_to_remove
    for r in range(9):
        for c in range(9):
            if puzzle[r][c]:
                assert puzzle[r][c] == solution[r][c]


def test_profile_removing_more_than_grid_is_clamped(rng):
    puzzle, _ = generate_puzzle_for_profile(DifficultyProfile("all", 200), rng)
    assert count_empty(puzzle) == 81
