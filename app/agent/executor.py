"""
Executor - Agent execution engine

Takes a task and runs it through the configured strategy:
1. Plan (LLM or heuristic)
2. Execute each plan step against the tool registry, in order
3. Summarize plan + tool outputs into a final answer
4. Return one AgentOutcome

Tool failures stay inside their ToolExecution record. Planning or
summarizing failures end the run with success=False.
"""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Dict, Any, List, Optional
import logging

from app.agent.errors import AgentError, UnregisteredTool
from app.agent.planner import PlanItem
from app.agent.tool_registry import ToolContext, ToolExecution, ToolRegistry

logger = logging.getLogger(__name__)


class RunPhase(str, Enum):
    PLANNING = "planning"
    EXECUTING = "executing"
    SUMMARIZING = "summarizing"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def format_timestamp(value: datetime) -> str:
    return value.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass
class AgentOutcome:
    """Final result of one agent run"""
    success: bool
    started_at: datetime
    completed_at: datetime
    plan: List[PlanItem] = field(default_factory=list)
    steps: List[ToolExecution] = field(default_factory=list)
    final: str = ""
    reasoning: str = ""
    error: Optional[str] = None

    @property
    def duration_ms(self) -> int:
        return max(0, int((self.completed_at - self.started_at).total_seconds() * 1000))

    @classmethod
    def failure(cls, error: str, started_at: Optional[datetime] = None) -> "AgentOutcome":
        """Empty outcome carrying only an error message"""
        now = utcnow()
        return cls(success=False, started_at=started_at or now, completed_at=now, error=error)

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "success": self.success,
            "plan": [item.model_dump() for item in self.plan],
            "steps": [step.to_dict() for step in self.steps],
            "final": self.final,
            "reasoning": self.reasoning,
            "meta": {
                "startedAt": format_timestamp(self.started_at),
                "completedAt": format_timestamp(self.completed_at),
                "durationMs": self.duration_ms,
            },
        }
        if self.error is not None:
            data["error"] = self.error
        return data


async def execute_plan(plan: List[PlanItem], task: str, registry: ToolRegistry) -> List[ToolExecution]:
    """Run each step in order; one execution record per step"""
    context = ToolContext(task=task)
    executions: List[ToolExecution] = []

    for index, step in enumerate(plan, 1):
        tool = registry.get(step.tool)
        if tool is None:
            missing = UnregisteredTool(step.tool)
            logger.warning(f"  ❌ Step {index}: {missing}")
            executions.append(ToolExecution.failed(step.tool, "", str(missing), output=missing.output))
            continue

        logger.info(f"  🔧 Step {index}: {tool.name} - {step.title}")
        execution = await tool.execute(step.description, context)
        executions.append(execution)

        status = "✅" if execution.success else "❌"
        logger.info(f"  {status} Step {index} done")

    return executions


class AgentRunner:
    """
    Core agent execution engine.

    Orchestrates: Plan → Execute Tools → Summarize → Respond
    """

    def __init__(self, registry: ToolRegistry, strategy):
        self.registry = registry
        self.strategy = strategy

    async def run(self, task: str) -> AgentOutcome:
        """
        Process a task through the full agent pipeline.

        Args:
            task: The user's natural language request

        Returns:
            AgentOutcome with plan, steps, final answer and timing
        """
        started_at = utcnow()
        phase = RunPhase.PLANNING

        try:
            logger.info(f"📋 Planning ({self.strategy.name}) for: {task[:80]}")
            payload = await self.strategy.planner.create_plan(task)
            logger.info(f"✅ Plan: {len(payload.plan)} steps | {payload.reasoning[:120]}")

            phase = RunPhase.EXECUTING
            steps = await execute_plan(payload.plan, task, self.registry)

            phase = RunPhase.SUMMARIZING
            final = await self.strategy.summarizer.summarize(task, payload.plan, steps)
        except Exception as e:
            message = str(e) or "Unknown error"
            if isinstance(e, AgentError):
                logger.error(f"❌ Run failed while {phase.value}: {message}")
            else:
                logger.exception(f"❌ Unexpected error while {phase.value}")
            return AgentOutcome.failure(message, started_at=started_at)

        outcome = AgentOutcome(
            success=True,
            started_at=started_at,
            completed_at=utcnow(),
            plan=payload.plan,
            steps=steps,
            final=final,
            reasoning=payload.reasoning,
            error=self.strategy.notice,
        )
        logger.info(f"🏁 Agent run complete: {outcome.duration_ms}ms | {len(steps)} steps")
        return outcome
