"""
Tokenizador y parser descendente recursivo para expresiones de la calculadora.

El resultado es un árbol con nodos tipados que luego recorre
FormulaEvaluator. Nada del texto del usuario llega nunca a eval().

Gramática:
    expression := term (("+" | "-") term)*
    term       := unary (("*" | "/") unary | <implícita> power)*
    unary      := ("+" | "-") unary | power
    power      := postfix (("^" | "**") unary)?
    postfix    := primary "!"*
    primary    := NUMBER | CONST | FUNC "(" expression ")" | "(" expression ")"
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Union


FUNCTION_NAMES = (
    "sin",
    "cos",
    "tan",
    "asin",
    "acos",
    "atan",
    "sqrt",
    "log",
    "ln",
    "exp",
)
CONSTANT_NAMES = ("pi", "π", "e")

# Los nombres más largos primero: "asin" antes que "sin", "exp" antes que "e".
_NAMES_BY_LENGTH = sorted(FUNCTION_NAMES + CONSTANT_NAMES, key=len, reverse=True)

_NUMBER_RE = re.compile(r"\d+(?:\.\d*)?|\.\d+")
_GLYPHS = {"×": "*", "÷": "/", "−": "-"}
_OPERATORS = "+-*/^()!"


# ── Tokens ───────────────────────────────────────────────────────


@dataclass(frozen=True)
class Token:
    kind: str   # NUMBER | FUNC | CONST | OP
    text: str
    pos: int


def _normalize_number(text: str) -> str:
    if text.startswith("."):
        text = "0" + text
    if text.endswith("."):
        text += "0"
    return text


def tokenize(expression: str) -> list[Token]:
    """Divide la expresión en tokens; rechaza cualquier carácter ajeno."""
    tokens: list[Token] = []
    i = 0
    n = len(expression)

    while i < n:
        ch = _GLYPHS.get(expression[i], expression[i])

        if ch.isspace():
            i += 1
            continue

        if ch.isdigit() or ch == ".":
            match = _NUMBER_RE.match(expression, i)
            if match is None:
                raise ValueError(f"Número mal formado en la posición {i}")
            tokens.append(Token("NUMBER", _normalize_number(match.group()), i))
            i = match.end()
            continue

        if ch.isalpha():
            for name in _NAMES_BY_LENGTH:
                if expression.startswith(name, i):
                    kind = "FUNC" if name in FUNCTION_NAMES else "CONST"
                    tokens.append(Token(kind, name, i))
                    i += len(name)
                    break
            else:
                raise ValueError(f"Identificador no permitido en la posición {i}")
            continue

        if expression.startswith("**", i):
            tokens.append(Token("OP", "**", i))
            i += 2
            continue

        if ch in _OPERATORS:
            tokens.append(Token("OP", ch, i))
            i += 1
            continue

        raise ValueError(f"Carácter no permitido: {expression[i]!r}")

    return tokens


# ── Nodos del árbol ──────────────────────────────────────────────


@dataclass(frozen=True)
class Literal:
    text: str


@dataclass(frozen=True)
class Constant:
    name: str


@dataclass(frozen=True)
class UnaryOp:
    op: str
    operand: "Node"


@dataclass(frozen=True)
class BinaryOp:
    op: str
    left: "Node"
    right: "Node"


@dataclass(frozen=True)
class Factorial:
    operand: "Node"


@dataclass(frozen=True)
class Call:
    name: str
    argument: "Node"


Node = Union[Literal, Constant, UnaryOp, BinaryOp, Factorial, Call]


# ── Parser ───────────────────────────────────────────────────────


class ExpressionParser:
    """Parser descendente recursivo sobre la lista de tokens."""

    def __init__(self, tokens: list[Token]):
        self._tokens = tokens
        self._pos = 0

    def parse(self) -> Node:
        if not self._tokens:
            raise ValueError("Expresión vacía")
        node = self._expression()
        if self._peek() is not None:
            raise ValueError(f"Error de sintaxis cerca de {self._peek().text!r}")
        return node

    def _peek(self) -> Token | None:
        if self._pos < len(self._tokens):
            return self._tokens[self._pos]
        return None

    def _peek_op(self, *ops: str) -> bool:
        tok = self._peek()
        return tok is not None and tok.kind == "OP" and tok.text in ops

    def _advance(self) -> Token:
        tok = self._peek()
        if tok is None:
            raise ValueError("Error de sintaxis: expresión incompleta")
        self._pos += 1
        return tok

    def _expect(self, op: str):
        if not self._peek_op(op):
            raise ValueError(f"Se esperaba '{op}'")
        self._advance()

    def _expression(self) -> Node:
        node = self._term()
        while self._peek_op("+", "-"):
            op = self._advance().text
            node = BinaryOp(op, node, self._term())
        return node

    def _term(self) -> Node:
        node = self._unary()
        while True:
            if self._peek_op("*", "/"):
                op = self._advance().text
                node = BinaryOp(op, node, self._unary())
            elif self._implicit_multiplication():
                node = BinaryOp("*", node, self._power())
            else:
                return node

    def _implicit_multiplication(self) -> bool:
        """2(3), 2π, )(, π2: operando completo seguido de otro operando."""
        if self._pos == 0:
            return False
        prev = self._tokens[self._pos - 1]
        nxt = self._peek()
        if nxt is None:
            return False

        closes_operand = prev.kind in ("NUMBER", "CONST") or (
            prev.kind == "OP" and prev.text in (")", "!")
        )
        if not closes_operand:
            return False

        if nxt.kind in ("FUNC", "CONST") or (nxt.kind == "OP" and nxt.text == "("):
            return True
        return nxt.kind == "NUMBER" and (
            prev.kind == "CONST" or (prev.kind == "OP" and prev.text == ")")
        )

    def _unary(self) -> Node:
        if self._peek_op("+", "-"):
            op = self._advance().text
            return UnaryOp(op, self._unary())
        return self._power()

    def _power(self) -> Node:
        base = self._postfix()
        if self._peek_op("^", "**"):
            self._advance()
            return BinaryOp("^", base, self._unary())
        return base

    def _postfix(self) -> Node:
        node = self._primary()
        while self._peek_op("!"):
            self._advance()
            node = Factorial(node)
        return node

    def _primary(self) -> Node:
        tok = self._advance()

        if tok.kind == "NUMBER":
            return Literal(tok.text)

        if tok.kind == "CONST":
            return Constant(tok.text)

        if tok.kind == "FUNC":
            if not self._peek_op("("):
                raise ValueError(f"Falta '(' después de {tok.text}")
            self._advance()
            argument = self._expression()
            self._expect(")")
            return Call(tok.text, argument)

        if tok.text == "(":
            node = self._expression()
            self._expect(")")
            return node

        raise ValueError(f"Error de sintaxis cerca de {tok.text!r}")


def parse_expression(expression: str) -> Node:
    if not expression or not expression.strip():
        raise ValueError("Expresión vacía")
    return ExpressionParser(tokenize(expression)).parse()
