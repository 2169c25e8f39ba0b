"""
Agent error taxonomy

Tool-level errors are caught by Tool.execute and become failed ToolExecution
records. Upstream errors abort a run and become a failed AgentOutcome.
"""


class AgentError(Exception):
    """Base exception for all agent errors"""
    pass


class ToolError(AgentError):
    """Raised inside a tool; `output` is the text reported alongside the error"""

    def __init__(self, message: str, output: str = ""):
        super().__init__(message)
        self.output = output


class MissingInput(ToolError):
    """Raised when a required tool input is empty"""
    pass


class UnsafeExpression(ToolError):
    """Raised when a calculator expression contains disallowed characters"""
    pass


class EvaluationError(ToolError):
    """Raised when an arithmetic expression cannot be evaluated"""
    pass


class NetworkError(ToolError):
    """Raised on transport failures or non-2xx responses from an external API"""
    pass


class UnregisteredTool(ToolError):
    """Raised when a plan step names a tool that is not in the registry"""

    def __init__(self, name: str):
        super().__init__(f"Tool {name} is not registered.", output="Tool not available.")
        self.name = name


class UpstreamFailure(AgentError):
    """Raised when an LLM-backed phase of a run fails"""
    pass


class UpstreamPlanningFailure(UpstreamFailure):
    """Planner call failed or returned a response of the wrong shape"""
    pass


class UpstreamSummaryFailure(UpstreamFailure):
    """Summarizer call failed or returned no text"""
    pass
