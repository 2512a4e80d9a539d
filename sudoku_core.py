# sudoku_core.py
"""
Moteur Sudoku commun :
- grille 9x9 (0 = case vide)
- génération d'une grille complète par backtracking aléatoire
- dérivation d'un puzzle par retrait de cases
- détection des conflits ligne / colonne / bloc
- comptage de solutions (diagnostic uniquement)
"""

from __future__ import annotations
import logging
import random
from copy import deepcopy
from typing import List, Tuple, Dict, Set, Optional

logger = logging.getLogger(__name__)

Grid = List[List[int]]
Pos = Tuple[int, int]

GRID_SIZE = 9
BOX_SIZE = 3
N_CELLS = GRID_SIZE * GRID_SIZE
DIGITS = tuple(range(1, GRID_SIZE + 1))


class GridConfigError(ValueError):
    """Grille ou paramètre hors du modèle 9x9 / chiffres 1..9."""


# ---------- UNITS & PEERS communs ----------

UNITS: List[List[Pos]] = []
PEERS: Dict[Pos, Set[Pos]] = {}

# Lignes
for r in range(9):
    UNITS.append([(r, c) for c in range(9)])
# Colonnes
for c in range(9):
    UNITS.append([(r, c) for r in range(9)])
# Blocs 3x3
for br in range(0, 9, 3):
    for bc in range(0, 9, 3):
        UNITS.append([(br + dr, bc + dc) for dr in range(3) for dc in range(3)])

# Voisins de chaque case
for r in range(9):
    for c in range(9):
        peers = set()
        peers |= {(r, cc) for cc in range(9) if cc != c}
        peers |= {(rr, c) for rr in range(9) if rr != r}
        br, bc = 3 * (r // 3), 3 * (c // 3)
        peers |= {
            (br + dr, bc + dc)
            for dr in range(3)
            for dc in range(3)
            if (br + dr, bc + dc) != (r, c)
        }
        PEERS[(r, c)] = peers


# ---------- Utilitaires ----------

def empty_grid() -> Grid:
    return [[0] * GRID_SIZE for _ in range(GRID_SIZE)]


def copy_grid(grid: Grid) -> Grid:
    return [list(row) for row in grid]


def count_empty(grid: Grid) -> int:
    return sum(1 for row in grid for v in row if v == 0)


def is_filled(grid: Grid) -> bool:
    return all(v != 0 for row in grid for v in row)


def check_grid_shape(grid: Grid) -> None:
    """
    Vérifie qu'une grille respecte le modèle 9x9, valeurs 0..9.
    Lève GridConfigError sinon.
    """
    if not isinstance(grid, (list, tuple)) or len(grid) != GRID_SIZE:
        raise GridConfigError(f"La grille doit avoir {GRID_SIZE} lignes.")
    for r, row in enumerate(grid):
        if not isinstance(row, (list, tuple)) or len(row) != GRID_SIZE:
            raise GridConfigError(f"La ligne {r} doit avoir {GRID_SIZE} cases.")
        for c, v in enumerate(row):
            if not isinstance(v, int) or isinstance(v, bool) or not 0 <= v <= GRID_SIZE:
                raise GridConfigError(f"Valeur invalide en ({r}, {c}) : {v!r}")


def is_valid_solution(grid: Grid) -> bool:
    """Vrai si chaque ligne, colonne et bloc est une permutation de 1..9."""
    expected = set(DIGITS)
    return all({grid[r][c] for (r, c) in unit} == expected for unit in UNITS)


def _can_place(grid: Grid, r: int, c: int, v: int) -> bool:
    if any(grid[r][x] == v for x in range(9)):
        return False
    if any(grid[x][c] == v for x in range(9)):
        return False
    br, bc = 3 * (r // 3), 3 * (c // 3)
    return all(
        grid[rr][cc] != v
        for rr in range(br, br + 3)
        for cc in range(bc, bc + 3)
    )


# ---------- Génération ----------

def generate_full_grid(rng: Optional[random.Random] = None, size: int = GRID_SIZE) -> Grid:
    """
    Génère une grille complète valide (9x9).

    Parcours ligne par ligne ; pour chaque case vide, les chiffres 1..9
    sont essayés dans un ordre mélangé par `rng`, ce qui donne la variété
    des grilles. Un `rng` initialisé avec une graine rend la génération
    reproductible.
    """
    if size != GRID_SIZE:
        raise GridConfigError(f"Seules les grilles {GRID_SIZE}x{GRID_SIZE} sont supportées (reçu {size}).")
    if rng is None:
        rng = random.Random()

    grid: Grid = empty_grid()
    steps = 0

    def backtrack(idx: int = 0) -> bool:
        nonlocal steps
        if idx == N_CELLS:
            return True
        r, c = divmod(idx, GRID_SIZE)
        if grid[r][c] != 0:
            return backtrack(idx + 1)
        vals = list(DIGITS)
        rng.shuffle(vals)
        for v in vals:
            if _can_place(grid, r, c, v):
                grid[r][c] = v
                steps += 1
                if backtrack(idx + 1):
                    return True
                grid[r][c] = 0
        return False

    backtrack()
    logger.debug("Grille complète générée en %d placements", steps)
    return grid


def derive_puzzle(
    solution: Grid,
    cells_to_remove: int,
    rng: Optional[random.Random] = None,
) -> Grid:
    """
    Copie la solution puis vide `min(cells_to_remove, 81)` cases choisies
    au hasard. Aucune vérification d'unicité : le puzzle obtenu peut
    admettre plusieurs solutions.
    """
    check_grid_shape(solution)
    if not is_valid_solution(solution):
        raise GridConfigError("La solution fournie n'est pas une grille complète valide.")
    if isinstance(cells_to_remove, bool) or not isinstance(cells_to_remove, int):
        raise GridConfigError(f"Nombre de cases à retirer invalide : {cells_to_remove!r}")
    if cells_to_remove < 0:
        raise GridConfigError(f"Nombre de cases à retirer négatif : {cells_to_remove}")
    if rng is None:
        rng = random.Random()

    puzzle = copy_grid(solution)
    positions = [(r, c) for r in range(GRID_SIZE) for c in range(GRID_SIZE)]
    rng.shuffle(positions)

    n = min(cells_to_remove, N_CELLS)
    for r, c in positions[:n]:
        puzzle[r][c] = 0

    logger.debug("Puzzle dérivé : %d cases retirées, %d indices", n, N_CELLS - n)
    return puzzle


# ---------- Conflits ----------

def compute_conflicts(grid: Grid) -> Set[Pos]:
    """
    Ensemble des cases en conflit : pour chaque case remplie, tout voisin
    (ligne, colonne, bloc) portant le même chiffre ajoute les deux cases.
    Recalcul complet à chaque appel.
    """
    conflicts: Set[Pos] = set()
    for r in range(9):
        for c in range(9):
            v = grid[r][c]
            if v == 0:
                continue
            for (pr, pc) in PEERS[(r, c)]:
                if grid[pr][pc] == v:
                    conflicts.add((r, c))
                    conflicts.add((pr, pc))
    return conflicts


# ---------- Backtracking / unicité (diagnostic) ----------

FULL_MASK = (1 << 9) - 1  # 9 bits


def _box_idx(r: int, c: int) -> int:
    return (r // 3) * 3 + (c // 3)


def _init_masks_bitset(grid: Grid):
    row_used = [0] * 9
    col_used = [0] * 9
    box_used = [0] * 9
    empties = []
    for r in range(9):
        for c in range(9):
            v = grid[r][c]
            if v:
                b = 1 << (v - 1)
                row_used[r] |= b
                col_used[c] |= b
                box_used[_box_idx(r, c)] |= b
            else:
                empties.append((r, c))
    return row_used, col_used, box_used, empties


def _allowed_mask(row_used, col_used, box_used, r: int, c: int) -> int:
    return FULL_MASK ^ (row_used[r] | col_used[c] | box_used[_box_idx(r, c)])


def count_solutions(grid: Grid, limit: int = 2) -> int:
    """
    Compte les solutions de la grille (backtracking sur bitsets),
    s'arrête dès qu'on atteint 'limit'.
    Une grille contenant déjà un conflit n'a aucune solution.
    """
    if compute_conflicts(grid):
        return 0
    row_used, col_used, box_used, empties = _init_masks_bitset(deepcopy(grid))

    def mrv_key(rc):
        r, c = rc
        return (bin(_allowed_mask(row_used, col_used, box_used, r, c)).count("1"), r, c)

    empties.sort(key=mrv_key)
    sols = 0

    def dfs(k: int = 0):
        nonlocal sols
        if sols >= limit:
            return
        if k == len(empties):
            sols += 1
            return
        r, c = empties[k]
        cand = _allowed_mask(row_used, col_used, box_used, r, c)
        if cand == 0:
            return
        bidx = _box_idx(r, c)
        x = cand
        while x:
            lsb = x & -x
            x ^= lsb
            row_used[r] |= lsb
            col_used[c] |= lsb
            box_used[bidx] |= lsb
            dfs(k + 1)
            row_used[r] ^= lsb
            col_used[c] ^= lsb
            box_used[bidx] ^= lsb
            if sols >= limit:
                return

    dfs(0)
    return sols


def has_unique_solution(grid: Grid) -> bool:
    return count_solutions(grid, limit=2) == 1
