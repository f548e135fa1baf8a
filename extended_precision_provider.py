"""Proveedor matemático con precisión de trabajo extendida (mpmath).

Los pasos intermedios se calculan con MP_WORKING_DIGITS dígitos; el valor
final se convierte a float antes de redondear, de modo que el resultado
visible tiene la misma forma que con PythonMathProvider.
"""

from __future__ import annotations

from formula_evaluator import AngleMode

try:
    from mpmath import mp
except ImportError as exc:  # pragma: no cover
    raise ImportError(
        "mpmath no está instalado. Instala con: pip install mpmath"
    ) from exc


class MPMathProvider:
    """Proveedor matemático basado en mpmath."""

    def __init__(self, working_digits: int = 30):
        self._working_digits = max(16, working_digits)

    @property
    def working_digits(self) -> int:
        return self._working_digits

    def precision_context(self):
        return mp.workdps(self._working_digits)

    @staticmethod
    def number(text: str):
        return mp.mpf(text)

    @staticmethod
    def to_float(value) -> float:
        return float(MPMathProvider._real(value))

    @staticmethod
    def _real(value):
        # Un resultado complejo es un argumento fuera de dominio: sqrt(-1), asin(2)
        if isinstance(value, mp.mpc):
            if value.imag == 0:
                return value.real
            return mp.nan
        return value

    @staticmethod
    def power(base, exponent):
        return MPMathProvider._real(mp.power(base, exponent))

    @staticmethod
    def factorial(x):
        if not mp.isfinite(x):
            raise ValueError("factorial no admite infinito o NaN")
        if x < 0:
            return mp.nan
        if mp.floor(x) != x:
            raise ValueError("factorial requiere entero no negativo")

        n = int(x)
        if n <= 5000:
            return mp.factorial(n)

        return mp.exp(mp.loggamma(n + 1))

    def _real_fn(self, fn):
        def wrapped(x):
            return self._real(fn(x))

        return wrapped

    def build_namespace(self, angle_mode: AngleMode) -> dict:
        degrees = AngleMode(angle_mode) is AngleMode.DEGREES

        def _trig(fn):
            def wrapped(x):
                value = mp.radians(x) if degrees else x
                return fn(value)

            return wrapped

        def _inv_trig(fn):
            def wrapped(x):
                result = self._real(fn(x))
                if degrees and mp.isfinite(result):
                    return mp.degrees(result)
                return result

            return wrapped

        return {
            "sin": _trig(mp.sin),
            "cos": _trig(mp.cos),
            "tan": _trig(mp.tan),
            "asin": _inv_trig(mp.asin),
            "acos": _inv_trig(mp.acos),
            "atan": _inv_trig(mp.atan),
            "ln": self._real_fn(mp.log),
            "log": self._real_fn(mp.log10),
            "sqrt": self._real_fn(mp.sqrt),
            "exp": mp.exp,
            "π": mp.mpf(mp.pi),
            "pi": mp.mpf(mp.pi),
            "e": mp.mpf(mp.e),
        }
