# sudoku_gui.py
"""
Interface CustomTkinter pour jouer au Sudoku.

La fenêtre ne contient aucune règle du jeu : elle transmet les clics et
les touches à la SudokuSession, appelle `tick()` chaque seconde et
redessine la grille à partir de l'état de la session.
"""

from __future__ import annotations
import logging
import os

import customtkinter as ctk
from tkinter import filedialog, messagebox

from sudoku_difficulty import PROFILES, DEFAULT_DIFFICULTY
from sudoku_session import SudokuSession

logger = logging.getLogger(__name__)

# ---------------------------
# Libellés FR pour l'UI
# ---------------------------
DIFF_KEY_TO_LABEL_FR = {
    "easy": "facile",
    "medium": "moyen",
    "hard": "difficile",
}
DIFF_LABEL_FR_TO_KEY = {v: k for k, v in DIFF_KEY_TO_LABEL_FR.items()}


def diff_key_to_label_fr(key: str) -> str:
    return DIFF_KEY_TO_LABEL_FR.get(key, key)


def diff_label_fr_to_key(label: str) -> str:
    return DIFF_LABEL_FR_TO_KEY.get(label, label)


# Config par défaut
TICK_MS = 1000
GENERATION_DELAY_MS = 100
CELL_PX = 44

COLOR_CELL = ("#ffffff", "#2b2b2b")
COLOR_BLOCK = ("#e9e9e9", "#333a44")
COLOR_SELECTED = ("#bcd7ff", "#1f538d")
COLOR_CONFLICT = ("#f4b6b6", "#8a2c2c")
COLOR_GIVEN_TEXT = ("#000000", "#ffffff")
COLOR_ADDED_TEXT = ("#1f5fbf", "#7fb2ff")

KEY_CLEAR = ("BackSpace", "Delete")


def key_to_digit(keysym: str):
    """
    Traduit une touche en saisie : 1..9 -> chiffre, effacement -> 0,
    sinon None (touche ignorée).
    """
    if keysym in KEY_CLEAR:
        return 0
    if len(keysym) == 1 and keysym in "123456789":
        return int(keysym)
    return None


def launch_gui():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")

    ctk.set_appearance_mode("system")
    ctk.set_default_color_theme("blue")

    app = ctk.CTk()
    app.title("Sudoku")

    session = SudokuSession()
    font_given = ctk.CTkFont(size=18, weight="bold")
    font_added = ctk.CTkFont(size=18)

    difficulty_var = ctk.StringVar(value=diff_key_to_label_fr(DEFAULT_DIFFICULTY))
    status_var = ctk.StringVar(value="Prêt.")
    stats_var = ctk.StringVar(value="")

    # ----- Haut : difficulté -----
    frame_top = ctk.CTkFrame(app)
    frame_top.grid(row=0, column=0, padx=10, pady=(10, 5), sticky="ew")

    ctk.CTkLabel(
        frame_top,
        text="Sudoku",
        font=ctk.CTkFont(size=20, weight="bold"),
    ).grid(row=0, column=0, padx=10, pady=5, sticky="w")

    ctk.CTkLabel(frame_top, text="Difficulté").grid(row=0, column=1, padx=5, pady=5)
    ctk.CTkOptionMenu(
        frame_top,
        values=[diff_key_to_label_fr(k) for k in PROFILES.keys()],
        variable=difficulty_var,
        command=lambda _label: on_new_game(),
    ).grid(row=0, column=2, padx=5, pady=5)

    # ----- Grille -----
    frame_board = ctk.CTkFrame(app)
    frame_board.grid(row=1, column=0, padx=10, pady=5)

    cells = {}
    for r in range(9):
        for c in range(9):
            btn = ctk.CTkButton(
                frame_board,
                text="",
                width=CELL_PX,
                height=CELL_PX,
                corner_radius=0,
                font=font_added,
                command=lambda rr=r, cc=c: on_cell_click(rr, cc),
            )
            # espacement plus large entre les blocs 3x3
            padx = (3 if c % 3 == 0 else 1, 3 if c == 8 else 0)
            pady = (3 if r % 3 == 0 else 1, 3 if r == 8 else 0)
            btn.grid(row=r, column=c, padx=padx, pady=pady)
            cells[(r, c)] = btn

    # ----- Pavé numérique -----
    frame_pad = ctk.CTkFrame(app)
    frame_pad.grid(row=2, column=0, padx=10, pady=5)

    for d in range(1, 10):
        ctk.CTkButton(
            frame_pad,
            text=str(d),
            width=CELL_PX,
            command=lambda dd=d: on_digit(dd),
        ).grid(row=0, column=d - 1, padx=2, pady=4)
    ctk.CTkButton(
        frame_pad,
        text="×",
        width=CELL_PX,
        command=lambda: on_digit(0),
    ).grid(row=0, column=9, padx=2, pady=4)

    # ----- Commandes -----
    frame_controls = ctk.CTkFrame(app)
    frame_controls.grid(row=3, column=0, padx=10, pady=5)

    buttons = {}
    for col, (key, label) in enumerate(
        [
            ("new", "Nouvelle partie"),
            ("check", "Vérifier"),
            ("hint", "Indice"),
            ("solve", "Solution"),
            ("reset", "Recommencer"),
            ("export", "Exporter"),
        ]
    ):
        b = ctk.CTkButton(frame_controls, text=label, width=110)
        b.grid(row=0, column=col, padx=4, pady=5)
        buttons[key] = b

    # ----- Bas : statut -----
    frame_bottom = ctk.CTkFrame(app)
    frame_bottom.grid(row=4, column=0, padx=10, pady=(5, 10), sticky="ew")
    frame_bottom.grid_columnconfigure(0, weight=1)

    ctk.CTkLabel(frame_bottom, textvariable=stats_var, anchor="w").grid(
        row=0, column=0, padx=10, pady=2, sticky="w"
    )
    ctk.CTkLabel(frame_bottom, textvariable=status_var, anchor="w").grid(
        row=1, column=0, padx=10, pady=2, sticky="w"
    )

    # ==========================
    #   RENDU
    # ==========================

    def refresh():
        grid = session.grid
        for (r, c), btn in cells.items():
            if not session.has_game:
                btn.configure(text="", state="disabled")
                continue
            v = grid[r][c]
            given = session.is_given(r, c)
            if session.has_conflict(r, c):
                fg = COLOR_CONFLICT
            elif session.selected == (r, c):
                fg = COLOR_SELECTED
            elif ((r // 3) + (c // 3)) % 2 == 0:
                fg = COLOR_BLOCK
            else:
                fg = COLOR_CELL
            btn.configure(
                text=str(v) if v else "",
                fg_color=fg,
                hover_color=COLOR_SELECTED,
                text_color=COLOR_GIVEN_TEXT if given else COLOR_ADDED_TEXT,
                font=font_given if given else font_added,
                state="disabled" if session.generating else "normal",
            )

        if session.has_game:
            stats_var.set(
                f"⏱ {session.formatted_time()}   Erreurs : {session.mistakes}   "
                f"Indices : {session.hints_used}   Restantes : {session.cells_remaining()} "
                f"({session.completion_percentage()} %)"
            )
        buttons["hint"].configure(state="normal" if session.can_hint() else "disabled")
        buttons["new"].configure(state="disabled" if session.generating else "normal")

        if session.generating:
            status_var.set("Génération de la grille...")
        elif session.completed:
            status_var.set("🎉 Grille terminée !")

    # ==========================
    #   ACTIONS
    # ==========================

    def on_new_game():
        if session.generating:
            return
        try:
            session.begin_new_game(diff_label_fr_to_key(difficulty_var.get()))
        except ValueError as e:
            status_var.set("❌ Difficulté invalide.")
            messagebox.showerror("Erreur", f"Une erreur est survenue : {e}")
            return
        refresh()
        app.after(GENERATION_DELAY_MS, finish_new_game)

    def finish_new_game():
        session.finish_new_game()
        status_var.set(f"Partie {diff_key_to_label_fr(session.difficulty)} prête.")
        refresh()

    def on_cell_click(r, c):
        session.select(r, c)
        refresh()

    def on_digit(d):
        session.place(d)
        refresh()

    def on_check():
        session.check()
        if not session.completed:
            n = len(session.conflicts)
            status_var.set(f"{n} case(s) en conflit." if n else "Aucun conflit pour l'instant.")
        refresh()

    def on_hint():
        session.hint()
        refresh()

    def on_solve():
        session.auto_solve()
        refresh()

    def on_reset():
        session.reset()
        status_var.set("Grille remise à zéro.")
        refresh()

    def on_export():
        if not session.has_game:
            return
        output_file = filedialog.asksaveasfilename(
            defaultextension=".pdf",
            initialfile=f"sudoku_{session.difficulty}.pdf",
            filetypes=[("PDF", "*.pdf"), ("PNG", "*.png")],
        )
        if not output_file:
            return
        try:
            # import local : matplotlib n'est chargé qu'à l'export
            from sudoku_render import save_session_snapshot

            save_session_snapshot(session, output_file)
            status_var.set(f"✅ Export : {os.path.basename(output_file)}")
        except Exception as e:
            logger.exception("Échec de l'export")
            status_var.set("❌ Erreur lors de l'export.")
            messagebox.showerror("Erreur", f"Une erreur est survenue : {e}")

    def on_key(event):
        d = key_to_digit(event.keysym)
        if d is None or session.selected is None:
            return
        on_digit(d)

    def on_tick():
        session.tick()
        if session.timer_running and not session.completed:
            refresh()
        app.after(TICK_MS, on_tick)

    buttons["new"].configure(command=on_new_game)
    buttons["check"].configure(command=on_check)
    buttons["hint"].configure(command=on_hint)
    buttons["solve"].configure(command=on_solve)
    buttons["reset"].configure(command=on_reset)
    buttons["export"].configure(command=on_export)

    app.bind("<Key>", on_key)

    on_new_game()
    app.after(TICK_MS, on_tick)
    app.mainloop()


if __name__ == "__main__":
    launch_gui()
