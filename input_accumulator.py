"""Acumulador de entrada: construye la expresión a partir de tokens."""

import math
from dataclasses import dataclass

from formula_evaluator import AngleMode


DEFAULT_EXPRESSION = "0"

FUNCTION_TOKENS = ("sin", "cos", "tan", "asin", "acos", "atan", "sqrt", "log", "ln")

# Tokens cuyo texto insertado difiere del propio token
SPECIAL_TOKENS = {
    "^": "^",
    "x²": "^2",
    "!": "!",
    "exp": "e",
    "π": str(math.pi),
    "e": str(math.e),
}


@dataclass
class CalculatorState:
    """Estado propio de una calculadora: expresión, historial y modo angular."""

    expression: str = DEFAULT_EXPRESSION
    history: str = ""
    angle_mode: AngleMode = AngleMode.DEGREES


class InputAccumulator:
    """Modifica el estado en respuesta a los tokens del usuario.

    Cada operación avisa al listener (si lo hay) para refrescar la pantalla.
    """

    def __init__(self, state: CalculatorState = None, on_change=None):
        self.state = state if state is not None else CalculatorState()
        self.on_change = on_change

    @property
    def expression(self) -> str:
        return self.state.expression

    def _notify(self):
        if self.on_change is not None:
            self.on_change(self.state)

    @staticmethod
    def text_for(token: str) -> str:
        if token in FUNCTION_TOKENS:
            return token + "("
        return SPECIAL_TOKENS.get(token, token)

    def append(self, token: str):
        current = self.state.expression
        if current == DEFAULT_EXPRESSION and token != ".":
            current = ""
        self.state.expression = current + self.text_for(token)
        self._notify()

    def delete(self):
        if len(self.state.expression) > 1:
            self.state.expression = self.state.expression[:-1]
        else:
            self.state.expression = DEFAULT_EXPRESSION
        self._notify()

    def clear(self):
        self.state.expression = DEFAULT_EXPRESSION
        self.state.history = ""
        self._notify()

    def toggle_angle_mode(self) -> AngleMode:
        self.state.angle_mode = self.state.angle_mode.toggled()
        self._notify()
        return self.state.angle_mode

    def set_result(self, result: str):
        """Mueve la expresión evaluada al historial y muestra el resultado."""
        self.state.history = self.state.expression
        self.state.expression = result
        self._notify()
