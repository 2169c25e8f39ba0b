"""Orchestrator package initialization"""
from app.orchestrator.strategies import AgentStrategy, select_strategy, build_llm_strategy, build_heuristic_strategy

__all__ = [
    "AgentStrategy", "select_strategy",
    "build_llm_strategy", "build_heuristic_strategy",
]
