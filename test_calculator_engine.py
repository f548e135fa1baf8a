import math
import unittest

from calculator_engine import CalculatorEngine
from formula_evaluator import AngleMode, FormulaEvaluator, PythonMathProvider


def make_engine(angle_mode=AngleMode.DEGREES) -> CalculatorEngine:
    return CalculatorEngine(angle_mode=angle_mode)


class TestFormulaEvaluator(unittest.TestCase):

    def setUp(self):
        self.evaluator = FormulaEvaluator(PythonMathProvider())

    def test_arithmetic(self):
        self.assertAlmostEqual(self.evaluator.evaluate("2*(3+4)"), 14.0)
        self.assertAlmostEqual(self.evaluator.evaluate("-2^2"), -4.0)
        self.assertAlmostEqual(self.evaluator.evaluate("2^-1"), 0.5)

    def test_constants(self):
        self.assertAlmostEqual(self.evaluator.evaluate("π"), math.pi)
        self.assertAlmostEqual(self.evaluator.evaluate("2e"), 2 * math.e)
        self.assertAlmostEqual(self.evaluator.evaluate("exp(1)"), math.e)

    def test_angle_mode_is_explicit_context(self):
        self.assertAlmostEqual(self.evaluator.evaluate("sin(30)", AngleMode.DEGREES), 0.5)
        self.assertAlmostEqual(self.evaluator.evaluate("sin(30)", AngleMode.RADIANS), math.sin(30))
        self.assertAlmostEqual(self.evaluator.evaluate("atan(1)", AngleMode.DEGREES), 45.0)
        self.assertAlmostEqual(self.evaluator.evaluate("atan(1)", AngleMode.RADIANS), math.pi / 4)

    def test_factorial(self):
        self.assertEqual(self.evaluator.evaluate("5!"), 120.0)
        self.assertEqual(self.evaluator.evaluate("1!"), 1.0)
        self.assertTrue(math.isnan(self.evaluator.evaluate("(-1)!")))
        with self.assertRaises(ValueError):
            self.evaluator.evaluate("2.5!")
        with self.assertRaises(OverflowError):
            self.evaluator.evaluate("171!")

    def test_domain_errors_raise(self):
        with self.assertRaises(ValueError):
            self.evaluator.evaluate("sqrt(-4)")
        with self.assertRaises(ZeroDivisionError):
            self.evaluator.evaluate("1/0")


class TestCalculatorEngine(unittest.TestCase):

    def test_basic_results(self):
        eng = make_engine()
        self.assertEqual(eng.evaluate("2+2"), "4")
        self.assertEqual(eng.evaluate("2^3"), "8")
        self.assertEqual(eng.evaluate("7/2"), "3.5")
        self.assertEqual(eng.evaluate("1-3"), "-2")

    def test_errors(self):
        eng = make_engine()
        for expr in ("10/0", "sqrt(-1)", "(-3)!", "2.5!", "acos(2)", "log(0)",
                     "ln(-1)", "10^400", "10^300*10^300", "2+", "(1", "abc", ""):
            with self.subTest(expr=expr):
                self.assertEqual(eng.evaluate(expr), CalculatorEngine.ERROR)

    def test_boundary_catches_arithmetic_and_recursion_errors(self):
        eng = make_engine()
        self.assertEqual(eng.evaluate("1/0"), "Error")
        self.assertEqual(eng.evaluate("exp(1000)"), "Error")
        self.assertEqual(eng.evaluate("(" * 5000 + "1" + ")" * 5000), "Error")

    def test_factorial(self):
        eng = make_engine()
        self.assertEqual(eng.evaluate("5!"), "120")
        self.assertEqual(eng.evaluate("0!"), "1")
        self.assertEqual(eng.evaluate("3!!"), "720")

    def test_sin_degrees_and_radians(self):
        self.assertEqual(make_engine(AngleMode.DEGREES).evaluate("sin(90)"), "1")
        self.assertEqual(make_engine(AngleMode.RADIANS).evaluate("sin(90)"), "0.8939966636")

    def test_explicit_angle_mode_overrides_default(self):
        eng = make_engine(AngleMode.RADIANS)
        self.assertEqual(eng.evaluate("sin(90)", AngleMode.DEGREES), "1")
        self.assertEqual(eng.angle_mode, AngleMode.RADIANS)

    def test_angle_mode_setter(self):
        eng = make_engine()
        eng.angle_mode = "rad"
        self.assertIs(eng.angle_mode, AngleMode.RADIANS)
        with self.assertRaises(ValueError):
            eng.angle_mode = "grad"

    def test_floating_point_noise_is_rounded(self):
        eng = make_engine()
        self.assertEqual(eng.evaluate("0.1+0.2"), "0.3")
        self.assertEqual(eng.evaluate("cos(90)"), "0")

    def test_nested_function_calls(self):
        eng = make_engine()
        self.assertEqual(eng.evaluate("sqrt(sin(90)+3)"), "2")
        self.assertEqual(eng.evaluate("log(10^(2+1))"), "3")

    def test_result_is_idempotent(self):
        eng = make_engine()
        for expr in ("3*3", "1/3", "-7/4", "2^60", "10^16", "1/100000",
                     "1/20000", "sin(1)", "-1/3"):
            with self.subTest(expr=expr):
                first = eng.evaluate(expr)
                self.assertEqual(eng.evaluate(first), first)

    def test_results_are_plain_decimals(self):
        eng = make_engine()
        self.assertEqual(eng.evaluate("1/20000"), "0.00005")
        self.assertEqual(eng.evaluate("10^16"), "10000000000000000")
        self.assertEqual(eng.evaluate("2^60"), "1152921504606846976")
        self.assertEqual(eng.evaluate("-1/8"), "-0.125")
        self.assertEqual(eng.evaluate("-1/10^12"), "0")
        for expr in ("1/20000", "10^16", "10^-7", "2^100"):
            with self.subTest(expr=expr):
                self.assertNotIn("e", eng.evaluate(expr))

    def test_e_after_digits_is_euler_number(self):
        eng = make_engine()
        self.assertEqual(eng.evaluate("2e3"), eng.evaluate("2*e*3"))
        self.assertNotEqual(eng.evaluate("2e3"), "2000")

    def test_evaluate_value_raises(self):
        eng = make_engine()
        self.assertEqual(eng.evaluate_value("1/4"), 0.25)
        with self.assertRaises(OverflowError):
            eng.evaluate_value("10^300*10^300")
        with self.assertRaises(ValueError):
            eng.evaluate_value("(-2)!")

    def test_toggling_angle_mode_changes_trig_results(self):
        eng = make_engine()
        degrees = eng.evaluate("tan(45)", AngleMode.DEGREES)
        radians = eng.evaluate("tan(45)", AngleMode.RADIANS)
        self.assertNotEqual(degrees, radians)
        self.assertEqual(
            eng.evaluate("sin(0)", AngleMode.DEGREES),
            eng.evaluate("sin(0)", AngleMode.RADIANS),
        )


if __name__ == "__main__":
    unittest.main(verbosity=2)
