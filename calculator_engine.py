"""
Motor de cálculo para la calculadora científica.

Este módulo provee la clase CalculatorEngine, frontera de evaluación
entre la interfaz y el evaluador de fórmulas. El proveedor matemático
puede reemplazarse (e.g., MPMathProvider con precisión de trabajo
extendida) sin cambiar el contrato.

Contrato de interfaz:
    - evaluate(expression: str, angle_mode=None) -> str  ("Error" si falla)
    - evaluate_value(expression: str, angle_mode=None) -> float
    - angle_mode: propiedad AngleMode.DEGREES | AngleMode.RADIANS
"""

import logging
import math

from formula_evaluator import AngleMode, FormulaEvaluator, PythonMathProvider

logger = logging.getLogger(__name__)


class CalculatorEngine:
    """Evalúa expresiones y normaliza el resultado a texto."""

    ERROR = "Error"
    RESULT_DECIMALS = 10

    # ArithmeticError cubre ZeroDivisionError y OverflowError;
    # RecursionError llega con paréntesis anidados muy profundos
    EVALUATION_ERRORS = (
        ValueError,
        ArithmeticError,
        TypeError,
        RecursionError,
    )

    def __init__(self, provider=None, angle_mode=AngleMode.DEGREES):
        self._provider = provider if provider is not None else PythonMathProvider()
        self._evaluator = FormulaEvaluator(self._provider)
        self._angle_mode = AngleMode(angle_mode)

    # ── Propiedad: modo angular ──────────────────────────────────

    @property
    def angle_mode(self) -> AngleMode:
        return self._angle_mode

    @angle_mode.setter
    def angle_mode(self, mode):
        try:
            self._angle_mode = AngleMode(mode)
        except ValueError:
            raise ValueError("El modo debe ser 'rad' o 'deg'") from None

    # ── Evaluación principal ─────────────────────────────────────

    def evaluate_value(self, expression: str, angle_mode=None) -> float:
        """Evalúa la expresión y devuelve el valor redondeado.

        Raises:
            ValueError: expresión inválida, función desconocida o
                resultado NaN.
            ZeroDivisionError: división por cero.
            OverflowError: resultado infinito o demasiado grande.
        """
        mode = self._angle_mode if angle_mode is None else AngleMode(angle_mode)
        value = self._evaluator.evaluate(expression, mode)

        if math.isnan(value):
            raise ValueError("Resultado no numérico")
        if math.isinf(value):
            raise OverflowError("Resultado infinito")

        return round(value, self.RESULT_DECIMALS)

    def evaluate(self, expression: str, angle_mode=None) -> str:
        """Evalúa la expresión; cualquier fallo se devuelve como "Error"."""
        try:
            value = self.evaluate_value(expression, angle_mode)
        except self.EVALUATION_ERRORS as exc:
            logger.debug("Evaluación fallida de %r: %s", expression, exc)
            return self.ERROR
        return self._format_result(value)

    # ── Formato del resultado ────────────────────────────────────

    @classmethod
    def _format_result(cls, value: float) -> str:
        # Decimal plano, sin notación científica: el texto vuelve a evaluarse igual
        if value == int(value):
            return str(int(value))
        text = format(value, f".{cls.RESULT_DECIMALS}f").rstrip("0").rstrip(".")
        return "0" if text == "-0" else text
