"""
Arithmetic expression evaluator

Recursive-descent parser over a fixed grammar:

    expr    := term (('+' | '-') term)*
    term    := unary (('*' | '/' | '%') unary)*
    unary   := ('+' | '-') unary | power
    power   := primary ('^' unary)?
    primary := NUMBER | '(' expr ')'

`^` is exponentiation and binds tighter than unary minus on its left
(-2^2 == -4) and is right associative (2^3^2 == 512).
"""
from decimal import Decimal
from typing import List, Tuple
import math
import re

from app.agent.errors import EvaluationError

_TOKEN_RE = re.compile(r"\s*(?:(\d+\.?\d*|\.\d+)|(\S))")

# Number display follows JavaScript: positional between these bounds,
# exponent form (1e-7, 1.5e+21) outside them
_INTEGER_DISPLAY_LIMIT = 1e21
_SMALL_DISPLAY_LIMIT = 1e-6

Token = Tuple[str, str]


def tokenize(expression: str) -> List[Token]:
    tokens: List[Token] = []
    for number, op in _TOKEN_RE.findall(expression):
        if number:
            tokens.append(("num", number))
        elif op:
            if op not in "+-*/%^()":
                raise EvaluationError(f"Unexpected character '{op}'")
            tokens.append(("op", op))
    return tokens


class _Parser:
    def __init__(self, tokens: List[Token]):
        self.tokens = tokens
        self.pos = 0

    def peek(self) -> str:
        if self.pos < len(self.tokens):
            return self.tokens[self.pos][1]
        return ""

    def take(self) -> Token:
        token = self.tokens[self.pos]
        self.pos += 1
        return token

    def parse(self) -> float:
        if not self.tokens:
            raise EvaluationError("Empty expression")
        value = self.expr()
        if self.pos != len(self.tokens):
            raise EvaluationError(f"Unexpected token '{self.peek()}'")
        return value

    def expr(self) -> float:
        value = self.term()
        while self.peek() in ("+", "-"):
            op = self.take()[1]
            right = self.term()
            value = value + right if op == "+" else value - right
        return value

    def term(self) -> float:
        value = self.unary()
        while self.peek() in ("*", "/", "%"):
            op = self.take()[1]
            right = self.unary()
            if op == "*":
                value = value * right
            elif right == 0:
                raise EvaluationError("Division by zero" if op == "/" else "Modulo by zero")
            elif op == "/":
                value = value / right
            else:
                # Sign follows the dividend
                value = math.fmod(value, right)
        return value

    def unary(self) -> float:
        if self.peek() == "-":
            self.take()
            return -self.unary()
        if self.peek() == "+":
            self.take()
            return self.unary()
        return self.power()

    def power(self) -> float:
        base = self.primary()
        if self.peek() == "^":
            self.take()
            exponent = self.unary()
            try:
                return math.pow(base, exponent)
            except OverflowError:
                raise EvaluationError("Result is too large")
            except (ValueError, ZeroDivisionError):
                raise EvaluationError("Result is not a real number")
        return base

    def primary(self) -> float:
        if self.pos >= len(self.tokens):
            raise EvaluationError("Unexpected end of expression")
        kind, text = self.take()
        if kind == "num":
            return float(text)
        if text == "(":
            value = self.expr()
            if self.peek() != ")":
                raise EvaluationError("Missing closing parenthesis")
            self.take()
            return value
        raise EvaluationError(f"Unexpected token '{text}'")


def evaluate(expression: str) -> float:
    """Evaluate an arithmetic expression, raising EvaluationError on failure"""
    value = _Parser(tokenize(expression)).parse()
    if not math.isfinite(value):
        raise EvaluationError("Result is not a finite number")
    return value


def format_number(value: float) -> str:
    if value.is_integer() and abs(value) < _INTEGER_DISPLAY_LIMIT:
        return str(int(value))

    text = repr(value)
    if abs(value) >= _INTEGER_DISPLAY_LIMIT or abs(value) < _SMALL_DISPLAY_LIMIT:
        mantissa, _, exponent = text.partition("e")
        power = int(exponent)
        return f"{mantissa}e{'+' if power >= 0 else '-'}{abs(power)}"
    return format(Decimal(text), "f")
