"""Punto de entrada de la calculadora científica."""

import logging
import tkinter as tk

from calculator_engine import CalculatorEngine
from calculator_session import CalculatorSession
from calculator_ui import CalculatorApp
from formula_evaluator import AngleMode


USE_EXTENDED_PRECISION = False
MP_WORKING_DIGITS = 30
DEFAULT_ANGLE_MODE = AngleMode.DEGREES
LOG_LEVEL = logging.WARNING


def build_engine() -> CalculatorEngine:
    if USE_EXTENDED_PRECISION:
        from extended_precision_provider import MPMathProvider

        return CalculatorEngine(
            provider=MPMathProvider(working_digits=MP_WORKING_DIGITS),
            angle_mode=DEFAULT_ANGLE_MODE,
        )
    return CalculatorEngine(angle_mode=DEFAULT_ANGLE_MODE)


def main():
    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
    )
    root = tk.Tk()
    root.geometry("420x620")
    root.minsize(380, 580)
    session = CalculatorSession(engine=build_engine(), angle_mode=DEFAULT_ANGLE_MODE)
    CalculatorApp(root, session=session)
    root.mainloop()


if __name__ == "__main__":
    main()
