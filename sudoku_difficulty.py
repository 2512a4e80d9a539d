# sudoku_difficulty.py
"""
Profils de difficulté.

Une difficulté se résume au nombre de cases retirées de la grille
complète (sur 81). Le puzzle et sa solution sont toujours créés
ensemble par `generate_puzzle_for_profile`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple, Optional, Union
import logging
import random

from sudoku_core import (
    Grid,
    GridConfigError,
    N_CELLS,
    generate_full_grid,
    derive_puzzle,
)

logger = logging.getLogger(__name__)


# ====================================================
#   PROFILS
# ====================================================

@dataclass(frozen=True)
class DifficultyProfile:
    name: str
    cells_to_remove: int

    @property
    def givens(self) -> int:
        return N_CELLS - min(self.cells_to_remove, N_CELLS)


# profils concrets
EASY_PROFILE = DifficultyProfile("easy", 40)
MEDIUM_PROFILE = DifficultyProfile("medium", 50)
HARD_PROFILE = DifficultyProfile("hard", 60)

PROFILES: Dict[str, DifficultyProfile] = {
    EASY_PROFILE.name: EASY_PROFILE,
    MEDIUM_PROFILE.name: MEDIUM_PROFILE,
    HARD_PROFILE.name: HARD_PROFILE,
}

DEFAULT_DIFFICULTY = MEDIUM_PROFILE.name


def get_profile(difficulty: Union[str, DifficultyProfile]) -> DifficultyProfile:
    """Retrouve un profil par son nom (ou le renvoie tel quel)."""
    if isinstance(difficulty, DifficultyProfile):
        if difficulty.cells_to_remove < 0:
            raise GridConfigError(
                f"Profil {difficulty.name} : nombre de cases à retirer négatif ({difficulty.cells_to_remove})"
            )
        return difficulty
    try:
        return PROFILES[difficulty]
    except (KeyError, TypeError):
        raise GridConfigError(
            f"Difficulté inconnue : {difficulty!r} (attendu : {', '.join(PROFILES)})"
        ) from None


# ====================================================
#   GÉNÉRATION D'UN PUZZLE
# ====================================================

def generate_puzzle_for_profile(
    difficulty: Union[str, DifficultyProfile],
    rng: Optional[random.Random] = None,
) -> Tuple[Grid, Grid]:
    """
    Génère une paire (puzzle, solution) pour un profil donné.
    Aucune garantie d'unicité de la solution.
    """
    profile = get_profile(difficulty)
    if rng is None:
        rng = random.Random()

    solution = generate_full_grid(rng)
    puzzle = derive_puzzle(solution, profile.cells_to_remove, rng)
    logger.debug("[%s] puzzle généré (%d indices)", profile.name, profile.givens)
    return puzzle, solution
