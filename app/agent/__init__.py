"""
Agent package - plan-then-execute pipeline

Components:
- ToolRegistry: Register and look up the built-in tools
- Planners: LLM-backed and heuristic plan generation
- Summarizers: LLM-backed and static final answers
- AgentRunner: Execution engine
"""
from app.agent.tool_registry import ToolRegistry, Tool, ToolContext, ToolExecution
from app.agent.planner import PlanItem, PlanPayload, LLMPlanner, HeuristicPlanner
from app.agent.summarizer import LLMSummarizer, StaticSummarizer
from app.agent.executor import AgentRunner, AgentOutcome, execute_plan

__all__ = [
    "ToolRegistry", "Tool", "ToolContext", "ToolExecution",
    "PlanItem", "PlanPayload", "LLMPlanner", "HeuristicPlanner",
    "LLMSummarizer", "StaticSummarizer",
    "AgentRunner", "AgentOutcome", "execute_plan",
]
