"""
Strategy selection for agent runs

An AgentStrategy bundles the planner and summarizer a runner uses.
It is chosen once when the application is built:
1. LLM strategy → OpenAI planner + OpenAI summarizer
2. Heuristic strategy → keyword planner + static summary, with a notice
   explaining the missing key
"""
from dataclasses import dataclass
from typing import Any, Optional
import logging

from app.agent.planner import HeuristicPlanner, LLMPlanner
from app.agent.summarizer import LLMSummarizer, StaticSummarizer
from app.agent.tool_registry import ToolRegistry

logger = logging.getLogger(__name__)

STRATEGY_LLM = "llm"
STRATEGY_HEURISTIC = "heuristic"

MISSING_KEY_NOTICE = "OpenAI API key missing. Configure OPENAI_API_KEY to enable full agentic reasoning."


@dataclass
class AgentStrategy:
    """Planner + summarizer pair. `notice` is reported as the outcome error on success."""
    name: str
    planner: Any
    summarizer: Any
    notice: Optional[str] = None

    @property
    def is_fallback(self) -> bool:
        return self.notice is not None


def build_llm_strategy(provider, registry: ToolRegistry) -> AgentStrategy:
    return AgentStrategy(
        name=STRATEGY_LLM,
        planner=LLMPlanner(provider, registry),
        summarizer=LLMSummarizer(provider),
    )


def build_heuristic_strategy() -> AgentStrategy:
    return AgentStrategy(
        name=STRATEGY_HEURISTIC,
        planner=HeuristicPlanner(),
        summarizer=StaticSummarizer(),
        notice=MISSING_KEY_NOTICE,
    )


def select_strategy(config, registry: ToolRegistry) -> AgentStrategy:
    """Pick the strategy from configuration"""
    if not config.llm_configured:
        logger.warning("⚠️ OPENAI_API_KEY not set - using heuristic planner")
        return build_heuristic_strategy()

    from app.orchestrator.openai_provider import OpenAIProvider

    provider = OpenAIProvider(
        api_key=config.OPENAI_API_KEY,
        model=config.OPENAI_MODEL,
        base_url=config.OPENAI_BASE_URL or None,
    )
    logger.info(f"🧠 Using LLM strategy with {provider.model}")
    return build_llm_strategy(provider, registry)
