"""
Summarizer - turns a finished plan and its tool outputs into a final answer
"""
from typing import List
import json
import logging

from app.agent.errors import UpstreamSummaryFailure
from app.agent.planner import PlanItem
from app.agent.tool_registry import ToolExecution

logger = logging.getLogger(__name__)

FALLBACK_FINAL = (
    "The live LLM backend is not configured, but here is an offline plan and "
    "tool output you can use as a starting point."
)


def build_summary_input(task: str, plan: List[PlanItem], steps: List[ToolExecution]) -> str:
    return json.dumps({
        "task": task,
        "plan": [item.model_dump() for item in plan],
        "steps": [step.to_dict() for step in steps],
    })


class LLMSummarizer:
    """Final answer synthesis through an LLM provider"""

    SYSTEM_PROMPT = (
        "You are an expert AI agent. Summarize the results of the completed plan for the user. "
        "Highlight insights, make recommendations, and keep it concise but actionable."
    )

    def __init__(self, provider):
        self.provider = provider

    async def summarize(self, task: str, plan: List[PlanItem], steps: List[ToolExecution]) -> str:
        try:
            result = await self.provider.generate(
                system=self.SYSTEM_PROMPT,
                user=build_summary_input(task, plan, steps),
            )
        except Exception as e:
            raise UpstreamSummaryFailure(f"Summary request failed: {e}") from e

        text = result.get("text")
        if not isinstance(text, str):
            raise UpstreamSummaryFailure("Summary response contained no text")

        logger.info(f"📝 Summary ready ({result.get('latency_ms', 0)}ms)")
        return text


class StaticSummarizer:
    """Fixed answer used when no LLM is available"""

    def __init__(self, message: str = FALLBACK_FINAL):
        self.message = message

    async def summarize(self, task: str, plan: List[PlanItem], steps: List[ToolExecution]) -> str:
        return self.message
