import math
import unittest

from formula_evaluator import AngleMode
from input_accumulator import CalculatorState, InputAccumulator


class TestInputAccumulator(unittest.TestCase):

    def setUp(self):
        self.changes = []
        self.acc = InputAccumulator(on_change=self.changes.append)

    def feed(self, *tokens):
        for tok in tokens:
            self.acc.append(tok)
        return self.acc.expression

    def test_starts_at_default_zero(self):
        self.assertEqual(self.acc.expression, "0")
        self.assertEqual(self.acc.state.history, "")
        self.assertIs(self.acc.state.angle_mode, AngleMode.DEGREES)

    def test_digit_replaces_default_zero(self):
        self.assertEqual(self.feed("5"), "5")

    def test_decimal_point_concatenates_to_default_zero(self):
        self.assertEqual(self.feed("."), "0.")
        self.assertEqual(self.feed("5"), "0.5")

    def test_concatenates_after_first_token(self):
        self.assertEqual(self.feed("1", "2", "+", "3"), "12+3")

    def test_function_tokens_open_a_call(self):
        self.assertEqual(self.feed("sin"), "sin(")
        self.assertEqual(self.feed("sqrt"), "sin(sqrt(")

    def test_special_tokens(self):
        self.assertEqual(self.feed("2", "x²"), "2^2")
        self.assertEqual(self.feed("!"), "2^2!")
        self.assertEqual(self.feed("^"), "2^2!^")
        self.assertEqual(self.feed("exp"), "2^2!^e")

    def test_constants_are_baked_as_decimals(self):
        self.assertEqual(self.feed("π"), str(math.pi))
        self.acc.clear()
        self.assertEqual(self.feed("e"), "2.718281828459045")

    def test_delete(self):
        self.feed("1", "2")
        self.acc.delete()
        self.assertEqual(self.acc.expression, "1")
        self.acc.delete()
        self.assertEqual(self.acc.expression, "0")
        self.acc.delete()
        self.assertEqual(self.acc.expression, "0")

    def test_clear_resets_expression_and_history(self):
        self.feed("9")
        self.acc.set_result("9")
        self.acc.clear()
        self.assertEqual(self.acc.expression, "0")
        self.assertEqual(self.acc.state.history, "")

    def test_set_result_moves_expression_to_history(self):
        self.feed("2", "+", "2")
        self.acc.set_result("4")
        self.assertEqual(self.acc.expression, "4")
        self.assertEqual(self.acc.state.history, "2+2")

    def test_toggle_angle_mode(self):
        self.assertIs(self.acc.toggle_angle_mode(), AngleMode.RADIANS)
        self.assertIs(self.acc.toggle_angle_mode(), AngleMode.DEGREES)

    def test_every_operation_notifies(self):
        self.acc.append("1")
        self.acc.delete()
        self.acc.clear()
        self.acc.toggle_angle_mode()
        self.acc.set_result("1")
        self.assertEqual(len(self.changes), 5)
        self.assertIs(self.changes[-1], self.acc.state)

    def test_shares_state_passed_in(self):
        state = CalculatorState(expression="7", angle_mode=AngleMode.RADIANS)
        acc = InputAccumulator(state)
        acc.append("1")
        self.assertEqual(state.expression, "71")


if __name__ == "__main__":
    unittest.main(verbosity=2)
