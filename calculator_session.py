"""
Sesión de la calculadora: une el acumulador de entrada y el motor.

La interfaz solo entrega tokens (botones) o nombres de tecla (teclado)
y vuelve a pintar cuando el estado cambia. Todo se procesa de forma
síncrona, un evento cada vez.
"""

from calculator_engine import CalculatorEngine
from formula_evaluator import AngleMode
from input_accumulator import CalculatorState, InputAccumulator


CLEAR = "clear"
DELETE = "delete"
EQUALS = "equals"
TOGGLE_ANGLE_MODE = "toggle-angle-mode"

CONTROL_TOKENS = (CLEAR, DELETE, EQUALS, TOGGLE_ANGLE_MODE)

# Teclas que equivalen a un token literal
_LITERAL_KEYS = set("0123456789.+-*/()")

_CONTROL_KEYS = {
    "Enter": EQUALS,
    "=": EQUALS,
    "Escape": CLEAR,
    "Backspace": DELETE,
}


def token_for_key(key: str):
    """Traduce el nombre de una tecla a un token, o None si no aplica."""
    if key in _LITERAL_KEYS:
        return key
    return _CONTROL_KEYS.get(key)


class CalculatorSession:
    """Una calculadora completa sin interfaz gráfica.

    El modo angular vive solo en el estado; sin angle_mode explícito se
    toma el del motor al crear la sesión.
    """

    def __init__(self, engine: CalculatorEngine = None, angle_mode=None,
                 on_change=None):
        self.engine = engine if engine is not None else CalculatorEngine()
        if angle_mode is None:
            angle_mode = self.engine.angle_mode
        self.state = CalculatorState(angle_mode=AngleMode(angle_mode))
        self.accumulator = InputAccumulator(self.state, on_change=on_change)

    # ── Salidas ──────────────────────────────────────────────────

    @property
    def display(self) -> str:
        return self.state.expression

    @property
    def history(self) -> str:
        return self.state.history

    @property
    def angle_mode(self) -> AngleMode:
        return self.state.angle_mode

    @property
    def angle_label(self) -> str:
        return self.state.angle_mode.label

    # ── Entradas ─────────────────────────────────────────────────

    def press(self, token: str):
        if token == CLEAR:
            self.accumulator.clear()
        elif token == DELETE:
            self.accumulator.delete()
        elif token == EQUALS:
            self.calculate()
        elif token == TOGGLE_ANGLE_MODE:
            self.accumulator.toggle_angle_mode()
        else:
            self.accumulator.append(token)

    def handle_key(self, key: str) -> bool:
        token = token_for_key(key)
        if token is None:
            return False
        self.press(token)
        return True

    def calculate(self) -> str:
        result = self.engine.evaluate(self.state.expression, self.state.angle_mode)
        self.accumulator.set_result(result)
        return result
