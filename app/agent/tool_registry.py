"""
Tool Registry - Central registry for agent-executable tools

Each tool is a self-describing, executable unit that the planner
can discover and the executor can invoke. The built-in set is fixed:
webSearch, calculator, knowledgeBase (in that order).
"""
from typing import Dict, Any, List, Optional
from dataclasses import dataclass, field
import logging
import time
import uuid

from app.agent.errors import ToolError

logger = logging.getLogger(__name__)


def new_id() -> str:
    return str(uuid.uuid4())


@dataclass(frozen=True)
class ToolContext:
    """Context handed to every tool invocation"""
    task: str


@dataclass
class ToolExecution:
    """Result of a single tool invocation. `error` is set iff `success` is False."""
    tool: str
    input: str
    output: str
    success: bool
    error: Optional[str] = None
    id: str = field(default_factory=new_id)

    @classmethod
    def failed(cls, tool: str, input: str, error: str, output: str = "") -> "ToolExecution":
        return cls(tool=tool, input=input, output=output, success=False, error=error or "Unknown error")

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "id": self.id,
            "tool": self.tool,
            "input": self.input,
            "output": self.output,
            "success": self.success,
        }
        if self.error is not None:
            data["error"] = self.error
        return data


class Tool:
    """
    Base class for all agent tools.

    Subclasses implement `invoke()`, returning the output text or raising
    a ToolError. `execute()` turns that into a ToolExecution and never raises.
    """

    def __init__(self, name: str, description: str):
        self.name = name
        self.description = description

    def resolve_input(self, input_text: str, context: ToolContext) -> str:
        """Pick the text actually sent to the tool"""
        return input_text

    async def invoke(self, input_text: str, context: ToolContext) -> str:
        raise NotImplementedError(f"Tool '{self.name}' must implement invoke()")

    async def execute(self, input_text: str, context: ToolContext) -> ToolExecution:
        resolved = self.resolve_input(input_text or "", context)
        start_time = time.time()
        try:
            output = await self.invoke(resolved, context)
            execution = ToolExecution(tool=self.name, input=resolved, output=output, success=True)
        except ToolError as e:
            execution = ToolExecution.failed(self.name, resolved, str(e), output=e.output)
        except Exception as e:
            execution = ToolExecution.failed(self.name, resolved, str(e) or type(e).__name__)

        latency_ms = int((time.time() - start_time) * 1000)
        if execution.success:
            logger.debug(f"{self.name} finished in {latency_ms}ms")
        else:
            logger.warning(f"⚠️ {self.name} failed after {latency_ms}ms: {execution.error}")
        return execution

    def to_schema(self) -> Dict[str, Any]:
        """Catalog entry shown to the planner and the API"""
        return {"name": self.name, "description": self.description}


class ToolRegistry:
    """
    Lookup table of tools, keyed case-insensitively by name.

    Usage:
        registry = ToolRegistry()
        registry.register(MyTool())
        tool = registry.get("mytool")
    """

    def __init__(self):
        self._tools: Dict[str, Tool] = {}

    def register(self, tool: Tool) -> None:
        """Register a tool in the registry"""
        key = tool.name.lower()
        if key in self._tools:
            raise ValueError(f"Tool '{tool.name}' is already registered")
        self._tools[key] = tool
        logger.info(f"🔧 Registered tool: {tool.name}")

    def get(self, name: str) -> Optional[Tool]:
        """Get a tool by name, ignoring case"""
        if not isinstance(name, str):
            return None
        return self._tools.get(name.lower())

    def list_tools(self) -> List[Tool]:
        """All tools in registration order"""
        return list(self._tools.values())

    def list_names(self) -> List[str]:
        """List all registered tool names"""
        return [tool.name for tool in self._tools.values()]

    def catalog(self) -> List[Dict[str, Any]]:
        return [tool.to_schema() for tool in self._tools.values()]

    def count(self) -> int:
        """Number of registered tools"""
        return len(self._tools)


# ─── Singleton ───────────────────────────────────────────────────────────────

_registry: Optional[ToolRegistry] = None


def get_tool_registry() -> ToolRegistry:
    """Get or create the global tool registry"""
    global _registry
    if _registry is None:
        _registry = build_tool_registry()
    return _registry


def build_tool_registry(**search_options) -> ToolRegistry:
    """Create a registry holding the built-in tools"""
    from app.agent.tools.search_tool import WebSearchTool
    from app.agent.tools.calculator_tool import CalculatorTool
    from app.agent.tools.knowledge_base_tool import KnowledgeBaseTool

    registry = ToolRegistry()
    registry.register(WebSearchTool(**search_options))
    registry.register(CalculatorTool())
    registry.register(KnowledgeBaseTool())

    logger.info(f"✅ {registry.count()} built-in tools registered")
    return registry
