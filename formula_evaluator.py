"""Evaluación del árbol de expresiones para la calculadora científica."""

import contextlib
import math
from enum import Enum

from expression_parser import (
    BinaryOp,
    Call,
    Constant,
    Factorial,
    Literal,
    UnaryOp,
    parse_expression,
)


class AngleMode(str, Enum):
    """Unidad angular de los argumentos de sin/cos/tan y de asin/acos/atan."""

    DEGREES = "deg"
    RADIANS = "rad"

    @property
    def label(self) -> str:
        return "DEG" if self is AngleMode.DEGREES else "RAD"

    def toggled(self) -> "AngleMode":
        if self is AngleMode.DEGREES:
            return AngleMode.RADIANS
        return AngleMode.DEGREES


class PythonMathProvider:
    """Provee números, funciones y constantes sobre float y el módulo math."""

    # 171! ya no cabe en un float
    MAX_FACTORIAL = 170

    def precision_context(self):
        return contextlib.nullcontext()

    @staticmethod
    def number(text: str):
        return float(text)

    @staticmethod
    def to_float(value) -> float:
        return float(value)

    @staticmethod
    def power(base, exponent):
        return math.pow(base, exponent)

    def factorial(self, x):
        if math.isnan(x) or math.isinf(x):
            raise ValueError("factorial no admite infinito o NaN")
        if x < 0:
            return math.nan
        if x != math.floor(x):
            raise ValueError("factorial requiere entero no negativo")

        n = int(x)
        if n > self.MAX_FACTORIAL:
            raise OverflowError("factorial demasiado grande")
        if n in (0, 1):
            return 1.0

        result = 1
        for i in range(2, n + 1):
            result *= i
        return float(result)

    def build_namespace(self, angle_mode: AngleMode) -> dict:
        degrees = AngleMode(angle_mode) is AngleMode.DEGREES

        def _trig(fn):
            def w(x):
                return fn(math.radians(x) if degrees else x)

            return w

        def _inv_trig(fn):
            def w(x):
                r = fn(x)
                return math.degrees(r) if degrees else r

            return w

        return {
            "sin": _trig(math.sin),
            "cos": _trig(math.cos),
            "tan": _trig(math.tan),
            "asin": _inv_trig(math.asin),
            "acos": _inv_trig(math.acos),
            "atan": _inv_trig(math.atan),
            "ln": math.log,
            "log": math.log10,
            "sqrt": math.sqrt,
            "exp": math.exp,
            "π": math.pi,
            "pi": math.pi,
            "e": math.e,
        }


class FormulaEvaluator:
    """Recorre el árbol de la expresión con el modo angular como contexto."""

    def __init__(self, provider=None):
        self._provider = provider if provider is not None else PythonMathProvider()

    @property
    def provider(self):
        return self._provider

    def evaluate(self, expression: str, angle_mode: AngleMode = AngleMode.RADIANS) -> float:
        """Evalúa la expresión y devuelve un float sin redondear.

        Raises:
            ValueError: expresión vacía, mal formada o fuera de dominio.
            ZeroDivisionError: división por cero.
            OverflowError: resultado demasiado grande.
        """
        tree = parse_expression(expression)

        with self._provider.precision_context():
            namespace = self._provider.build_namespace(angle_mode)
            value = self._eval(tree, namespace)
            return self._provider.to_float(value)

    def _eval(self, node, namespace: dict):
        p = self._provider

        if isinstance(node, Literal):
            return p.number(node.text)

        if isinstance(node, Constant):
            return namespace[node.name]

        if isinstance(node, UnaryOp):
            operand = self._eval(node.operand, namespace)
            return -operand if node.op == "-" else operand

        if isinstance(node, Factorial):
            return p.factorial(self._eval(node.operand, namespace))

        if isinstance(node, BinaryOp):
            left = self._eval(node.left, namespace)
            right = self._eval(node.right, namespace)
            if node.op == "+":
                return left + right
            if node.op == "-":
                return left - right
            if node.op == "*":
                return left * right
            if node.op == "/":
                return left / right
            if node.op == "^":
                return p.power(left, right)
            raise ValueError(f"Operador desconocido: {node.op}")

        if isinstance(node, Call):
            if node.name not in namespace or not callable(namespace[node.name]):
                raise ValueError(f"Función desconocida: {node.name}")
            return namespace[node.name](self._eval(node.argument, namespace))

        raise ValueError(f"Nodo desconocido: {type(node).__name__}")
