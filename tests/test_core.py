# tests/test_core.py
import random

import pytest

from sudoku_core import (
    GridConfigError,
    PEERS,
    UNITS,
    check_grid_shape,
    compute_conflicts,
    count_empty,
    count_solutions,
    derive_puzzle,
    empty_grid,
    generate_full_grid,
    has_unique_solution,
    is_filled,
    is_valid_solution,
)


def test_units_and_peers_shape():
    assert len(UNITS) == 27
    assert all(len(u) == 9 for u in UNITS)
    assert all(len(p) == 20 for p in PEERS.values())
    assert (0, 0) not in PEERS[(0, 0)]
    assert (2, 2) in PEERS[(0, 0)]


@pytest.mark.parametrize("seed", range(5))
def test_generated_grid_is_valid(seed):
    grid = generate_full_grid(random.Random(seed))
    assert is_filled(grid)
    assert is_valid_solution(grid)
    for unit in UNITS:
        assert sorted(grid[r][c] for r, c in unit) == list(range(1, 10))


def test_generation_is_reproducible_with_seed():
    assert generate_full_grid(random.Random(7)) == generate_full_grid(random.Random(7))


def test_generation_varies_across_seeds():
    grids = {str(generate_full_grid(random.Random(s))) for s in range(4)}
    assert len(grids) > 1


def test_generate_rejects_other_sizes():
    with pytest.raises(GridConfigError):
        generate_full_grid(size=16)


@pytest.mark.parametrize("n", [0, 1, 40, 60, 81, 100])
def test_derive_puzzle_clears_exact_count(solution, rng, n):
    puzzle = derive_puzzle(solution, n, rng)
    assert count_empty(puzzle) == min(n, 81)
    assert 81 - count_empty(puzzle) == 81 - min(n, 81)


def test_derive_puzzle_givens_match_solution(solution, rng):
    puzzle = derive_puzzle(solution, 50, rng)
    for r in range(9):
        for c in range(9):
            if puzzle[r][c]:
                assert puzzle[r][c] == solution[r][c]


def test_derive_puzzle_does_not_touch_solution(solution, rng):
    before = [list(row) for row in solution]
    derive_puzzle(solution, 81, rng)
    assert solution == before


def test_derive_puzzle_rejects_negative_count(solution):
    with pytest.raises(GridConfigError):
        derive_puzzle(solution, -1)


def test_derive_puzzle_rejects_malformed_solution(solution):
    with pytest.raises(GridConfigError):
        derive_puzzle(solution[:8], 10)
    broken = [list(row) for row in solution]
    broken[0][0], broken[0][1] = broken[0][1], broken[0][0]
    with pytest.raises(GridConfigError):
        derive_puzzle(broken, 10)


def test_check_grid_shape_rejects_out_of_range_value(solution):
    solution[4][4] = 10
    with pytest.raises(GridConfigError):
        check_grid_shape(solution)


def test_no_conflicts_on_valid_or_empty_grid(solution):
    assert compute_conflicts(solution) == set()
    assert compute_conflicts(empty_grid()) == set()


def test_conflicts_row_column_box():
    grid = empty_grid()
    grid[0][0] = 4
    grid[0][8] = 4   # ligne
    grid[5][0] = 7
    grid[8][0] = 7   # colonne
    grid[3][3] = 2
    grid[5][5] = 2   # bloc
    grid[7][7] = 9   # isolé
    assert compute_conflicts(grid) == {
        (0, 0), (0, 8), (5, 0), (8, 0), (3, 3), (5, 5),
    }


def test_conflicts_are_symmetric(solution):
    grid = [list(row) for row in solution]
    grid[0][0] = 3
    grid[4][4] = 1
    grid[8][2] = 0
    conflicts = compute_conflicts(grid)
    assert conflicts
    for (r, c) in conflicts:
        v = grid[r][c]
        partners = {p for p in PEERS[(r, c)] if grid[p[0]][p[1]] == v}
        assert partners
        assert partners <= conflicts


def test_count_solutions(solution):
    assert count_solutions(solution) == 1
    assert count_solutions(empty_grid()) == 2
    assert count_solutions(empty_grid(), limit=1) == 1


def test_count_solutions_conflicting_grid_has_none(solution):
    solution[0][0] = solution[0][1]
    assert count_solutions(solution) == 0


def test_has_unique_solution(solution):
    solution[4][4] = 0
    solution[0][0] = 0
    assert has_unique_solution(solution)
    assert not has_unique_solution(empty_grid())
