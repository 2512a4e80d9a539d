# sudoku_session.py
"""
Session de jeu Sudoku (un seul joueur, une seule partie active).

La session détient la solution, le puzzle, la grille de travail du
joueur et l'état dérivé : conflits, complétion, erreurs, indices,
chronomètre. Toutes les modifications passent par ses méthodes ;
les entrées invalides sont ignorées (aucune exception en cours de jeu).

Le chronomètre n'a pas d'horloge interne : l'appelant invoque `tick()`
une fois par seconde.
"""

from __future__ import annotations

import logging
import random
from typing import Any, Dict, Optional, Set, Union

from sudoku_core import (
    Grid,
    Pos,
    GridConfigError,
    GRID_SIZE,
    N_CELLS,
    check_grid_shape,
    compute_conflicts,
    copy_grid,
    count_empty,
    has_unique_solution,
    is_filled,
    is_valid_solution,
)
from sudoku_difficulty import (
    DEFAULT_DIFFICULTY,
    DifficultyProfile,
    generate_puzzle_for_profile,
    get_profile,
)

logger = logging.getLogger(__name__)


def _in_range(row: int, col: int) -> bool:
    return 0 <= row < GRID_SIZE and 0 <= col < GRID_SIZE


class SudokuSession:
    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng if rng is not None else random.Random()
        self.difficulty: str = DEFAULT_DIFFICULTY

        self._solution: Optional[Grid] = None
        self._puzzle: Optional[Grid] = None
        self._grid: Optional[Grid] = None

        self.conflicts: Set[Pos] = set()
        self.selected: Optional[Pos] = None
        self.mistakes = 0
        self.hints_used = 0
        self.elapsed_seconds = 0
        self.timer_running = False
        self.completed = False

        self.generating = False
        self._pending_profile: Optional[DifficultyProfile] = None

    # ---------- Grilles exposées (copies) ----------

    @property
    def solution(self) -> Optional[Grid]:
        return copy_grid(self._solution) if self._solution is not None else None

    @property
    def puzzle(self) -> Optional[Grid]:
        return copy_grid(self._puzzle) if self._puzzle is not None else None

    @property
    def grid(self) -> Optional[Grid]:
        return copy_grid(self._grid) if self._grid is not None else None

    @property
    def has_game(self) -> bool:
        return self._grid is not None

    # ---------- Nouvelle partie ----------

    def new_game(self, difficulty: Union[str, DifficultyProfile, None] = None) -> "SudokuSession":
        """Génère et installe une nouvelle partie (seule opération qui remplace solution et puzzle)."""
        self.begin_new_game(difficulty)
        self.finish_new_game()
        return self

    def begin_new_game(self, difficulty: Union[str, DifficultyProfile, None] = None) -> None:
        """
        Première moitié de `new_game` : valide la difficulté et passe en
        mode "génération en cours". L'appelant peut afficher un indicateur
        d'attente avant d'appeler `finish_new_game`.
        """
        profile = get_profile(difficulty if difficulty is not None else self.difficulty)
        self._pending_profile = profile
        self.generating = True
        self.timer_running = False
        logger.debug("Génération demandée (%s)", profile.name)

    def finish_new_game(self) -> None:
        if not self.generating or self._pending_profile is None:
            logger.debug("finish_new_game ignoré : aucune génération en attente")
            return
        profile = self._pending_profile
        puzzle, solution = generate_puzzle_for_profile(profile, self.rng)
        self.start_game(puzzle, solution, difficulty=profile.name)

    def start_game(self, puzzle: Grid, solution: Grid, difficulty: Optional[str] = None) -> None:
        """Installe une paire (puzzle, solution) explicite et remet l'état de jeu à zéro."""
        check_grid_shape(puzzle)
        check_grid_shape(solution)
        if not is_valid_solution(solution):
            raise GridConfigError("La solution n'est pas une grille complète valide.")
        for r in range(GRID_SIZE):
            for c in range(GRID_SIZE):
                if puzzle[r][c] and puzzle[r][c] != solution[r][c]:
                    raise GridConfigError(
                        f"L'indice en ({r}, {c}) ne correspond pas à la solution."
                    )

        self._solution = copy_grid(solution)
        self._puzzle = copy_grid(puzzle)
        if difficulty is not None:
            self.difficulty = difficulty
        self._pending_profile = None
        self.generating = False
        self._restart_play_state()
        logger.info(
            "Nouvelle partie (%s) : %d cases à remplir",
            self.difficulty,
            count_empty(self._puzzle),
        )

    def _restart_play_state(self) -> None:
        self._grid = copy_grid(self._puzzle)
        self.conflicts = set()
        self.selected = None
        self.mistakes = 0
        self.hints_used = 0
        self.elapsed_seconds = 0
        self.completed = False
        self.timer_running = True

    # ---------- Actions du joueur ----------

    def _playable(self) -> bool:
        return self._grid is not None and not self.generating

    def select(self, row: int, col: int) -> None:
        if not self._playable() or not _in_range(row, col):
            logger.debug("Sélection ignorée : (%s, %s)", row, col)
            return
        if self._puzzle[row][col] != 0:
            return  # indice : non sélectionnable
        self.selected = (row, col)

    def place(self, digit: Optional[int]) -> None:
        """
        Écrit `digit` (1..9) dans la case sélectionnée, ou l'efface si
        `digit` vaut None ou 0. Un chiffre différent de la solution compte
        immédiatement comme une erreur.
        """
        if not self._playable() or self.selected is None:
            logger.debug("Saisie ignorée : aucune case sélectionnée")
            return
        if digit is None:
            digit = 0
        if isinstance(digit, bool) or not isinstance(digit, int) or not 0 <= digit <= GRID_SIZE:
            logger.debug("Saisie ignorée : valeur invalide %r", digit)
            return
        r, c = self.selected
        if self._puzzle[r][c] != 0:
            return

        self._grid[r][c] = digit
        if digit and digit != self._solution[r][c]:
            self.mistakes += 1
            logger.debug("Erreur en (%d, %d) : %d (total %d)", r, c, digit, self.mistakes)
        self._refresh()

    def clear(self) -> None:
        self.place(None)

    def check(self) -> None:
        """Revalidation à la demande ; idempotente."""
        if not self._playable():
            return
        self._refresh()

    def hint(self) -> None:
        """Révèle la solution dans une case vide tirée au hasard."""
        if not self.can_hint():
            logger.debug("Indice ignoré")
            return
        eligible = [
            (r, c)
            for r in range(GRID_SIZE)
            for c in range(GRID_SIZE)
            if self._puzzle[r][c] == 0 and self._grid[r][c] == 0
        ]
        if not eligible:
            return
        r, c = self.rng.choice(eligible)
        self._grid[r][c] = self._solution[r][c]
        self.selected = (r, c)
        self.hints_used += 1
        logger.debug("Indice en (%d, %d) : %d", r, c, self._solution[r][c])
        self._refresh()

    def auto_solve(self) -> None:
        """Abandon : affiche la solution générée. Ne compte ni erreur ni indice."""
        if not self._playable():
            return
        self._grid = copy_grid(self._solution)
        self.conflicts = set()
        self.completed = True
        self.selected = None
        self.timer_running = False
        logger.info("Solution affichée (%s)", self.difficulty)

    def reset(self) -> None:
        """Remet la grille de travail au puzzle initial, sans régénérer."""
        if not self._playable():
            return
        self._restart_play_state()
        logger.info("Partie réinitialisée")

    def tick(self) -> None:
        if self.timer_running and not self.completed and not self.generating:
            self.elapsed_seconds += 1

    def _refresh(self) -> None:
        self.conflicts = compute_conflicts(self._grid)
        was_completed = self.completed
        self.completed = is_filled(self._grid) and not self.conflicts
        if self.completed:
            self.timer_running = False
            if not was_completed:
                logger.info(
                    "Grille terminée en %s (%d erreurs, %d indices)",
                    self.formatted_time(),
                    self.mistakes,
                    self.hints_used,
                )

    # ---------- Requêtes ----------

    def cells_remaining(self) -> int:
        if self._grid is None:
            return 0
        return count_empty(self._grid)

    def completion_percentage(self) -> int:
        if self._grid is None:
            return 0
        return round(100 * (N_CELLS - self.cells_remaining()) / N_CELLS)

    def can_hint(self) -> bool:
        return (
            self._grid is not None
            and self.cells_remaining() > 0
            and not self.completed
            and not self.generating
        )

    def is_given(self, row: int, col: int) -> bool:
        return self._puzzle is not None and _in_range(row, col) and self._puzzle[row][col] != 0

    def has_conflict(self, row: int, col: int) -> bool:
        return (row, col) in self.conflicts

    def formatted_time(self) -> str:
        minutes, seconds = divmod(self.elapsed_seconds, 60)
        return f"{minutes:02d}:{seconds:02d}"

    def is_unique(self) -> bool:
        # diagnostic : jamais utilisé pour filtrer les puzzles
        return self._puzzle is not None and has_unique_solution(self._puzzle)

    def snapshot(self) -> Dict[str, Any]:
        return {
            "difficulty": self.difficulty,
            "puzzle": self.puzzle,
            "solution": self.solution,
            "grid": self.grid,
            "conflicts": sorted(self.conflicts),
            "selected": self.selected,
            "completed": self.completed,
            "mistakes": self.mistakes,
            "hints_used": self.hints_used,
            "elapsed_seconds": self.elapsed_seconds,
            "timer_running": self.timer_running,
            "generating": self.generating,
            "cells_remaining": self.cells_remaining(),
            "completion_percentage": self.completion_percentage(),
            "can_hint": self.can_hint(),
        }
