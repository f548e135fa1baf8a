from calculator_engine import CalculatorEngine
from calculator_session import CalculatorSession
from expression_parser import parse_expression, tokenize
from extended_precision_provider import MPMathProvider
from formula_evaluator import AngleMode
import sys


def _engines():
	return [
		("float", CalculatorEngine()),
		("mpmath", CalculatorEngine(provider=MPMathProvider(working_digits=30))),
	]


def _type(session: CalculatorSession, *tokens: str) -> str:
	for tok in tokens:
		session.press(tok)
	return session.display


def inspect_expression(expr: str, *, mode: str = "deg") -> None:
	"""Imprime tokens, árbol y resultado de cada motor para una expresión."""
	print("Expression inspection")
	print(f"expr:   {expr}")
	print(f"mode:   {mode}")

	try:
		tokens = tokenize(expr)
		print("tokens: " + " ".join(tok.text for tok in tokens))
		print(f"tree:   {parse_expression(expr)}")
	except ValueError as exc:
		print(f"parse:  {exc}")

	for name, engine in _engines():
		print(f"{name + ':':8}{engine.evaluate(expr, AngleMode(mode))}")


def run_regressions() -> None:
	checks: list[tuple[str, bool]] = []
	expected_actual: list[tuple[str, str, str]] = []

	for name, engine in _engines():
		for expr, mode, expected in (
			("2+2", AngleMode.DEGREES, "4"),
			("10/0", AngleMode.DEGREES, "Error"),
			("sqrt(-1)", AngleMode.DEGREES, "Error"),
			("sin(90)", AngleMode.DEGREES, "1"),
			("sin(90)", AngleMode.RADIANS, "0.8939966636"),
			("5!", AngleMode.DEGREES, "120"),
			("0!", AngleMode.DEGREES, "1"),
			("(-3)!", AngleMode.DEGREES, "Error"),
			("2.5!", AngleMode.DEGREES, "Error"),
			("2^3", AngleMode.DEGREES, "8"),
			("asin(1)", AngleMode.DEGREES, "90"),
			("acos(2)", AngleMode.DEGREES, "Error"),
			("log(1000)", AngleMode.DEGREES, "3"),
			("ln(0)", AngleMode.DEGREES, "Error"),
			("sqrt(sin(90)+3)", AngleMode.DEGREES, "2"),
			("1/20000", AngleMode.DEGREES, "0.00005"),
			("10^16", AngleMode.DEGREES, "10000000000000000"),
		):
			actual = engine.evaluate(expr, mode)
			expected_actual.append((f"[{name}] {expr} ({mode.label})", expected, actual))

		first = engine.evaluate("3*3")
		checks.append((
			f"[{name}] re-evaluating a result is idempotent",
			engine.evaluate(first) == first,
		))
		checks.append((
			f"[{name}] angle mode changes trig results",
			engine.evaluate("cos(60)", AngleMode.DEGREES)
			!= engine.evaluate("cos(60)", AngleMode.RADIANS),
		))

	session = CalculatorSession()
	checks.append(("digit replaces default 0", _type(session, "7") == "7"))
	session.press("clear")
	checks.append(("decimal point keeps default 0", _type(session, ".") == "0."))
	session.press("clear")
	_type(session, "9")
	session.press("delete")
	checks.append(("delete on one character resets to 0", session.display == "0"))
	session.press("clear")
	_type(session, "sin", "3", "0", ")", "equals")
	expected_actual.append(("typed sin(30) in DEG", "0.5", session.display))
	checks.append(("history keeps evaluated expression", session.history == "sin(30)"))

	failed = [name for name, ok in checks if not ok]
	failed += [label for label, expected, actual in expected_actual if expected != actual]
	for name, ok in checks:
		print(f"{name}: {'OK' if ok else 'FAIL'}")

	print("\nExpected vs Actual:")
	for label, expected, actual in expected_actual:
		status = "OK" if expected == actual else "FAIL"
		print(f"- {label}: {status}")
		print(f"  expected: {expected}")
		print(f"  actual:   {actual}")

	if failed:
		print("\nFAILED CHECKS:")
		for name in failed:
			print(f"- {name}")
		raise SystemExit(1)

	print("\nAll regression checks passed.")


if __name__ == "__main__":
	# Uso rápido:
	#   python regression_checks.py
	#   python regression_checks.py --inspect "sqrt(sin(90)+3)"
	#   python regression_checks.py --inspect "sin(90)" --mode rad
	if "--inspect" in sys.argv:
		try:
			expr = sys.argv[sys.argv.index("--inspect") + 1]
		except (ValueError, IndexError):
			raise SystemExit("Missing expression after --inspect")

		mode = "deg"
		if "--mode" in sys.argv:
			try:
				mode = sys.argv[sys.argv.index("--mode") + 1]
				AngleMode(mode)
			except (ValueError, IndexError):
				raise SystemExit("Invalid value for --mode")

		inspect_expression(expr, mode=mode)
	else:
		run_regressions()
