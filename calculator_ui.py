"""
Interfaz gráfica de la calculadora científica.

Usa tkinter. Cada botón o tecla se entrega como token a
CalculatorSession, que actualiza el estado y avisa para repintar.
"""

import tkinter as tk
from tkinter import font as tkfont

from calculator_session import (
    CLEAR,
    DELETE,
    EQUALS,
    TOGGLE_ANGLE_MODE,
    CalculatorSession,
)


class CalculatorApp:
    """Ventana principal de la calculadora científica."""

    # ── Paleta de colores ────────────────────────────────────────
    C = {
        "bg":         "#1E1E2E",
        "display_bg": "#181825",
        "num":        "#313244",
        "num_fg":     "#CDD6F4",
        "op":         "#F38BA8",
        "op_fg":      "#1E1E2E",
        "func":       "#45475A",
        "func_fg":    "#CDD6F4",
        "special":    "#585B70",
        "special_fg": "#CDD6F4",
        "equals":     "#89B4FA",
        "equals_fg":  "#1E1E2E",
        "history_fg": "#BAC2DE",
        "result_fg":  "#A6E3A1",
    }

    # ── Funciones científicas: (texto, token) ────────────────────

    SCIENCE_BUTTONS = [
        [("sin", "sin"), ("cos", "cos"), ("tan", "tan"),
         ("√", "sqrt"), ("log", "log")],
        [("sin⁻¹", "asin"), ("cos⁻¹", "acos"),
         ("tan⁻¹", "atan"), ("x²", "x²"), ("ln", "ln")],
    ]

    # ── Teclado principal ────────────────────────────────────────
    #  Cada fila es una lista de (texto, token, tipo_color)

    KEYPAD = [
        [("!",  "!",  "func"),  ("^", "^", "func"),
         ("π", "π", "func"), ("e", "e", "func"),
         ("EXP", "exp", "func")],

        [("AC", CLEAR, "special"), ("⌫", DELETE, "special"),
         ("(",  "(",  "func"),    (")", ")", "func"),
         ("÷", "/", "op")],

        [("7",  "7",  "num"), ("8", "8", "num"),
         ("9",  "9",  "num"), ("×", "*", "op")],

        [("4",  "4",  "num"), ("5", "5", "num"),
         ("6",  "6",  "num"), ("−", "-", "op")],

        [("1",  "1",  "num"), ("2", "2", "num"),
         ("3",  "3",  "num"), ("+", "+", "op")],

        [("0",  "0",  "num"), (".",  ".",  "num"),
         ("=",  EQUALS, "equals")],
    ]

    # keysym de tkinter -> nombre de tecla que entiende la sesión
    KEYSYMS = {
        "Return": "Enter",
        "KP_Enter": "Enter",
        "Escape": "Escape",
        "BackSpace": "Backspace",
    }

    # ────────────────────────────────────────────────────────────

    def __init__(self, root: tk.Tk, session: CalculatorSession = None):
        self.root = root
        self.root.title("Calculadora Científica")
        self.root.configure(bg=self.C["bg"])
        self.root.resizable(False, False)

        self.session = session if session is not None else CalculatorSession()
        self.session.accumulator.on_change = lambda _state: self._refresh()

        self._init_fonts()
        self._create_display()
        self._create_toggle_bar()
        self._create_science_panel()
        self._create_keypad()
        self._bind_keyboard()
        self._refresh()

    # ── Fuentes ──────────────────────────────────────────────────

    def _init_fonts(self):
        self._f_history = tkfont.Font(family="Consolas", size=14)
        self._f_result  = tkfont.Font(family="Consolas", size=22, weight="bold")
        self._f_btn     = tkfont.Font(family="Segoe UI", size=15)
        self._f_func    = tkfont.Font(family="Segoe UI", size=12)
        self._f_small   = tkfont.Font(family="Segoe UI", size=11)

    # ── Pantalla ─────────────────────────────────────────────────

    def _create_display(self):
        frame = tk.Frame(self.root, bg=self.C["display_bg"], padx=12, pady=8)
        frame.pack(fill="x", padx=6, pady=(6, 2))

        # Historial: la última expresión evaluada
        self.history_var = tk.StringVar()
        tk.Label(
            frame, textvariable=self.history_var, anchor="e",
            font=self._f_history, bg=self.C["display_bg"],
            fg=self.C["history_fg"],
        ).pack(fill="x", pady=(4, 0))

        self.display_var = tk.StringVar(value="0")
        tk.Label(
            frame, textvariable=self.display_var, anchor="e",
            font=self._f_result, bg=self.C["display_bg"],
            fg=self.C["result_fg"],
        ).pack(fill="x", pady=(2, 4))

    # ── Barra de toggles (DEG/RAD) ───────────────────────────────

    def _create_toggle_bar(self):
        frame = tk.Frame(self.root, bg=self.C["bg"])
        frame.pack(fill="x", padx=6, pady=(2, 2))

        self.angle_btn = tk.Button(
            frame, text=self.session.angle_label, font=self._f_small, width=6,
            bg=self.C["op"], fg=self.C["op_fg"],
            activebackground=self.C["special"], relief="flat",
            command=lambda: self._on_token(TOGGLE_ANGLE_MODE),
        )
        self.angle_btn.pack(side="left", padx=(0, 4))

    # ── Panel de funciones científicas ───────────────────────────

    def _create_science_panel(self):
        frame = tk.Frame(self.root, bg=self.C["bg"])
        frame.pack(fill="x", padx=6, pady=2)
        for col in range(5):
            frame.columnconfigure(col, weight=1, uniform="sci")

        for r, row_def in enumerate(self.SCIENCE_BUTTONS):
            for col, (text, token) in enumerate(row_def):
                tk.Button(
                    frame, text=text, font=self._f_func,
                    bg=self.C["func"], fg=self.C["func_fg"],
                    activebackground=self.C["special"], relief="flat",
                    command=lambda t=token: self._on_token(t),
                ).grid(row=r, column=col, sticky="nsew", padx=2, pady=2,
                       ipady=6)

    # ── Teclado numérico / operadores ────────────────────────────

    def _create_keypad(self):
        frame = tk.Frame(self.root, bg=self.C["bg"])
        frame.pack(fill="both", expand=True, padx=6, pady=(2, 6))

        # Determinar el ancho máximo de las filas
        max_cols = max(len(row) for row in self.KEYPAD)
        for c in range(max_cols):
            frame.columnconfigure(c, weight=1, uniform="key")

        for r, row_def in enumerate(self.KEYPAD):
            spans = self._compute_spans(len(row_def), max_cols)
            col_pos = 0
            for idx, (text, token, kind) in enumerate(row_def):
                btn = tk.Button(
                    frame, text=text, font=self._f_btn,
                    bg=self.C[kind], fg=self.C[f"{kind}_fg"],
                    activebackground=self.C["special"], relief="flat",
                    command=lambda t=token: self._on_token(t),
                )
                btn.grid(row=r, column=col_pos, columnspan=spans[idx],
                         sticky="nsew", padx=2, pady=2, ipady=8)
                col_pos += spans[idx]

        for r in range(len(self.KEYPAD)):
            frame.rowconfigure(r, weight=1)

    @staticmethod
    def _compute_spans(cols_in_row: int, max_cols: int) -> list[int]:
        """Reparte max_cols entre cols_in_row botones."""
        base, extra = divmod(max_cols, cols_in_row)
        spans = [base] * cols_in_row
        # Asignar columnas extra al último botón (generalmente '=')
        spans[-1] += extra
        return spans

    # ── Atajos de teclado ────────────────────────────────────────

    def _bind_keyboard(self):
        self.root.bind("<Key>", self._on_keypress)

    def _on_keypress(self, event):
        key = self.KEYSYMS.get(event.keysym, event.char)
        if key and self.session.handle_key(key):
            return "break"
        return None

    # ── Acciones ─────────────────────────────────────────────────

    def _on_token(self, token: str):
        self.session.press(token)

    def _refresh(self):
        self.display_var.set(self.session.display)
        self.history_var.set(self.session.history)
        self.angle_btn.config(text=self.session.angle_label)
