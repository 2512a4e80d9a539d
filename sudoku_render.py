# sudoku_render.py
"""
Export imprimable (PDF, PNG...) de l'état d'une session.

- les indices sont dessinés dans la couleur "given",
- les chiffres du joueur (ou révélés par indice) dans la couleur "added",
- les cases en conflit sont grisées en rouge clair.
"""

from __future__ import annotations
import logging
from typing import Optional, Set

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
from matplotlib.backends.backend_pdf import PdfPages

from sudoku_core import Grid, Pos
from sudoku_session import SudokuSession

logger = logging.getLogger(__name__)

TRIM_W_DEFAULT = 6.0
TRIM_H_DEFAULT = 7.0

DEFAULT_GIVEN_COLOR = "black"
DEFAULT_ADDED_COLOR = "#1f5fbf"

BLOCK_SHADE_COLOR = "#e9e9e9"   # gris clair
BLOCK_SHADE_ALPHA = 1.0        # 1.0 = opaque
CONFLICT_SHADE_COLOR = "#f4b6b6"

DIFFICULTY_LABEL_FR = {"easy": "facile", "medium": "moyen", "hard": "difficile"}


# ---------- Dessin d'une grille de session ----------

def draw_session_grid_at(
    ax,
    grid: Grid,
    left: float,
    bottom: float,
    size: float,
    puzzle_grid: Optional[Grid] = None,
    conflicts: Optional[Set[Pos]] = None,
    given_color: str = DEFAULT_GIVEN_COLOR,
    added_color: str = DEFAULT_ADDED_COLOR,
):
    cell = size / 9.0
    block = size / 3.0
    conflicts = conflicts or set()

    # --- Fond alterné par bloc 3x3 ---
    for br in range(3):
        for bc in range(3):
            if (br + bc) % 2 == 0:
                ax.add_patch(
                    plt.Rectangle(
                        (left + bc * block, bottom + br * block),
                        block,
                        block,
                        facecolor=BLOCK_SHADE_COLOR,
                        edgecolor="none",
                        alpha=BLOCK_SHADE_ALPHA,
                        zorder=0,
                    )
                )

    # Cases en conflit (au-dessus du fond de bloc)
    for (r, c) in conflicts:
        ax.add_patch(
            plt.Rectangle(
                (left + c * cell, bottom + (8 - r) * cell),
                cell,
                cell,
                facecolor=CONFLICT_SHADE_COLOR,
                edgecolor="none",
                zorder=1,
            )
        )

    # Cadre extérieur
    ax.add_patch(
        plt.Rectangle((left, bottom), size, size, fill=False, linewidth=3, color="k", zorder=3)
    )

    # Lignes internes
    for i in range(1, 9):
        lw = 2 if i % 3 == 0 else 0.8
        ax.plot(
            [left + i * cell, left + i * cell],
            [bottom, bottom + size],
            linewidth=lw,
            color="k",
            zorder=2,
        )
        ax.plot(
            [left, left + size],
            [bottom + i * cell, bottom + i * cell],
            linewidth=lw,
            color="k",
            zorder=2,
        )

    # Chiffres
    font_pts = cell * 0.5 * 72
    for r in range(9):
        for c in range(9):
            v = grid[r][c]
            if not v:
                continue
            x = left + c * cell + cell / 2
            y = bottom + (8 - r) * cell + cell * 0.47

            if puzzle_grid is not None and puzzle_grid[r][c] == 0:
                color = added_color
                weight = "normal"
            else:
                color = given_color
                weight = "bold"

            ax.text(
                x,
                y,
                str(v),
                ha="center",
                va="center",
                fontsize=font_pts,
                fontweight=weight,
                color=color,
                zorder=4,
            )


def draw_session_figure(
    session: SudokuSession,
    trim_w: float = TRIM_W_DEFAULT,
    trim_h: float = TRIM_H_DEFAULT,
    title: Optional[str] = None,
    given_color: str = DEFAULT_GIVEN_COLOR,
    added_color: str = DEFAULT_ADDED_COLOR,
):
    if not session.has_game:
        raise ValueError("Aucune partie en cours à exporter.")

    plt.rcParams["font.family"] = "DejaVu Sans"
    fig = plt.figure(figsize=(trim_w, trim_h))
    ax = fig.gca()
    ax.set_xlim(0, trim_w)
    ax.set_ylim(0, trim_h)
    ax.axis("off")

    margin_x = 0.5
    margin_y = 0.8
    size = min(trim_w - 2 * margin_x, trim_h - 2 * margin_y)
    left = (trim_w - size) / 2
    bottom = (trim_h - size) / 2

    draw_session_grid_at(
        ax,
        session.grid,
        left,
        bottom,
        size,
        puzzle_grid=session.puzzle,
        conflicts=session.conflicts,
        given_color=given_color,
        added_color=added_color,
    )

    if title is None:
        title = f"Sudoku - {DIFFICULTY_LABEL_FR.get(session.difficulty, session.difficulty)}"
    ax.text(
        trim_w / 2,
        trim_h - 0.3,
        title,
        ha="center",
        va="top",
        fontsize=12,
        fontweight="bold",
    )

    status = "terminée" if session.completed else f"{session.completion_percentage()} %"
    footer = (
        f"Temps {session.formatted_time()}  |  Erreurs {session.mistakes}  |  "
        f"Indices {session.hints_used}  |  {status}"
    )
    ax.text(
        trim_w / 2,
        0.3,
        footer,
        ha="center",
        va="bottom",
        fontsize=9,
    )

    return fig


def save_session_snapshot(session: SudokuSession, output_path: str, **kwargs) -> str:
    """
    Enregistre la grille courante. Le format suit l'extension du fichier
    (PDF via PdfPages, sinon savefig : PNG, SVG...).
    """
    fig = draw_session_figure(session, **kwargs)
    try:
        if output_path.lower().endswith(".pdf"):
            with PdfPages(output_path) as pdf:
                pdf.savefig(fig)
        else:
            fig.savefig(output_path, dpi=150)
    finally:
        plt.close(fig)
    logger.info("Grille exportée : %s", output_path)
    return output_path
