import pytest

from app.agent.tool_registry import ToolContext
from app.agent.tools import calculator_tool
from app.agent.tools.calculator_tool import CalculatorTool, is_safe_math_expression

from conftest import run

CTX = ToolContext(task="crunch numbers")


def calc(expression):
    return run(CalculatorTool().execute(expression, CTX))


def test_simple_addition():
    result = calc("2+2")
    assert result.success
    assert result.output == "Result: 4"
    assert result.error is None
    assert result.tool == "calculator"
    assert result.input == "2+2"


@pytest.mark.parametrize("expression, expected", [
    ("(2 + 3) * 4", "Result: 20"),
    ("10 / 4", "Result: 2.5"),
    ("7 % 3", "Result: 1"),
    ("2^10", "Result: 1024"),
    ("2^3^2", "Result: 512"),
    ("-2^2", "Result: -4"),
    (".5 * 4", "Result: 2"),
    ("0.1 + 0.2", "Result: 0.30000000000000004"),
    ("  12 -  -3 ", "Result: 15"),
    ("1 / 10000000", "Result: 1e-7"),
    ("1 / 100000", "Result: 0.00001"),
])
def test_arithmetic(expression, expected):
    result = calc(expression)
    assert result.success, result.error
    assert result.output == expected


@pytest.mark.parametrize("expression", ["", "   ", "\n\t"])
def test_empty_expression_is_missing_input(expression):
    result = calc(expression)
    assert not result.success
    assert result.error == "Expression required for calculator tool."
    assert result.output == "No expression provided."


@pytest.mark.parametrize("expression", [
    "2+a",
    "__import__('os').system('ls')",
    "Math.max(1, 2)",
    "1; 2",
    "2 ** 3 == 8",
    "Use the calculator to work through the core numeric components of the request.",
])
def test_unsafe_characters_are_rejected_before_evaluation(expression, monkeypatch):
    def explode(_):
        raise AssertionError("expression must not be evaluated")

    monkeypatch.setattr(calculator_tool, "evaluate", explode)
    result = calc(expression)
    assert not result.success
    assert result.error == "Expression contains unsupported characters."
    assert result.output == ""


@pytest.mark.parametrize("expression", ["1/0", "5 % 0", "(1+2", "2 3", "2**3", "*", "()"])
def test_evaluation_errors(expression):
    result = calc(expression)
    assert not result.success
    assert result.error
    assert result.output == ""


def test_whitelist():
    assert is_safe_math_expression("(1 + 2.5) * 3 % 2 ^ 4 / 5 - 6")
    assert not is_safe_math_expression("1e3")
    assert not is_safe_math_expression("1,000")
