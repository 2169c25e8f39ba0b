"""
Planner - turns a task into an ordered list of tool steps

Two implementations share one interface (`async create_plan(task)`):
- LLMPlanner: asks the model for a JSON plan constrained by a schema,
  then validates it. Any failure raises UpstreamPlanningFailure.
- HeuristicPlanner: keyword rules, used when no LLM key is configured.
"""
from typing import Any, Dict, List
import logging
import re

from pydantic import BaseModel, Field, ValidationError

from app.agent.errors import UpstreamPlanningFailure
from app.agent.tool_registry import ToolRegistry, new_id

logger = logging.getLogger(__name__)

MIN_PLAN_STEPS = 2
MAX_PLAN_STEPS = 4
FALLBACK_PLAN_LIMIT = 3


class PlanItem(BaseModel):
    """A single step in a plan"""
    id: str = Field(default_factory=new_id)
    title: str
    description: str
    tool: str


class PlanPayload(BaseModel):
    """Reasoning plus an ordered plan"""
    reasoning: str
    plan: List[PlanItem]


class LLMPlanPayload(PlanPayload):
    """Shape required from the model"""
    plan: List[PlanItem] = Field(..., min_length=MIN_PLAN_STEPS, max_length=MAX_PLAN_STEPS)


def build_plan_schema(tool_names: List[str]) -> Dict[str, Any]:
    """JSON schema handed to the model for structured output"""
    return {
        "name": "AgentPlan",
        "schema": {
            "type": "object",
            "properties": {
                "reasoning": {
                    "type": "string",
                    "description": "Short paragraph summarizing the strategy before executing tools.",
                },
                "plan": {
                    "type": "array",
                    "description": "2-4 steps describing how to solve the task by invoking available tools.",
                    "items": {
                        "type": "object",
                        "properties": {
                            "id": {"type": "string", "description": "Stable identifier for the step."},
                            "title": {"type": "string"},
                            "description": {"type": "string"},
                            "tool": {"type": "string", "enum": list(tool_names)},
                        },
                        "required": ["id", "title", "description", "tool"],
                        "additionalProperties": False,
                    },
                    "minItems": MIN_PLAN_STEPS,
                    "maxItems": MAX_PLAN_STEPS,
                },
            },
            "required": ["reasoning", "plan"],
            "additionalProperties": False,
        },
    }


class LLMPlanner:
    """Plan generation through an LLM provider"""

    SYSTEM_PROMPT = (
        "You are an autonomous planner. Build a concise tool-usage plan for the task "
        "using the provided toolkit. Avoid narration, return JSON only."
    )

    def __init__(self, provider, registry: ToolRegistry):
        self.provider = provider
        self.registry = registry

    async def create_plan(self, task: str) -> PlanPayload:
        tool_lines = "\n".join(f"- {tool.name}: {tool.description}" for tool in self.registry.list_tools())
        prompt = f"Task: {task}\nAvailable tools:\n{tool_lines}"

        try:
            result = await self.provider.generate(
                system=self.SYSTEM_PROMPT,
                user=prompt,
                json_schema=build_plan_schema(self.registry.list_names()),
            )
        except Exception as e:
            raise UpstreamPlanningFailure(f"Planning request failed: {e}") from e

        payload = self.parse_plan(result.get("text", ""))
        logger.info(f"📋 LLM plan: {len(payload.plan)} steps ({result.get('latency_ms', 0)}ms)")
        return payload

    @staticmethod
    def parse_plan(text: str) -> PlanPayload:
        """Validate the model's JSON against the plan contract"""
        try:
            return LLMPlanPayload.model_validate_json(text or "")
        except ValidationError as e:
            problems = "; ".join(
                f"{'.'.join(str(part) for part in err['loc']) or 'response'}: {err['msg']}"
                for err in e.errors()
            )
            raise UpstreamPlanningFailure(f"Plan response did not match the expected shape: {problems}") from e


class HeuristicPlanner:
    """Keyword-driven plan generation (no LLM required)"""

    ANALYSIS_PATTERN = re.compile(r"(analy\w+|calculate|percent|growth|increase|decrease|budget|roi)")
    RESEARCH_PATTERN = re.compile(r"(research|find|latest|current|news|market)")

    REASONING = "Generated plan via heuristic fallback because the OpenAI API key is not configured."

    def build_plan(self, task: str) -> PlanPayload:
        lower_task = task.lower()
        plan: List[PlanItem] = []

        if self.ANALYSIS_PATTERN.search(lower_task):
            plan.append(PlanItem(
                title="Quantify key numbers",
                description="Use the calculator to work through the core numeric components of the request.",
                tool="calculator",
            ))

        if self.RESEARCH_PATTERN.search(lower_task):
            plan.append(PlanItem(
                title="Collect live context",
                description="Pull quick snippets from the web to augment knowledge with recent information.",
                tool="webSearch",
            ))

        plan.append(PlanItem(
            title="Reference built-in playbooks",
            description="Consult the knowledge base for strategic or evergreen guidance.",
            tool="knowledgeBase",
        ))

        return PlanPayload(reasoning=self.REASONING, plan=plan[:FALLBACK_PLAN_LIMIT])

    async def create_plan(self, task: str) -> PlanPayload:
        return self.build_plan(task)

