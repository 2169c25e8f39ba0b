"""
Calculator Tool - Evaluates arithmetic expressions as an agent tool.

Input is checked against a character whitelist before it reaches the
parser in app.agent.tools.arithmetic; nothing is ever passed to eval().
"""
import re

from app.agent.errors import MissingInput, UnsafeExpression
from app.agent.tool_registry import Tool, ToolContext
from app.agent.tools.arithmetic import evaluate, format_number

SAFE_EXPRESSION = re.compile(r"^[0-9+\-*/().%\s^]*$")


def is_safe_math_expression(expression: str) -> bool:
    return SAFE_EXPRESSION.match(expression) is not None


class CalculatorTool(Tool):
    """Solve arithmetic expressions"""

    def __init__(self):
        super().__init__(
            name="calculator",
            description="Solve mathematical expressions including +, -, *, /, %, and ^.",
        )

    async def invoke(self, input_text: str, context: ToolContext) -> str:
        if not input_text.strip():
            raise MissingInput("Expression required for calculator tool.", output="No expression provided.")

        if not is_safe_math_expression(input_text):
            raise UnsafeExpression("Expression contains unsupported characters.")

        return f"Result: {format_number(evaluate(input_text))}"
