from app.agent.planner import HeuristicPlanner, LLMPlanner
from app.agent.summarizer import LLMSummarizer, StaticSummarizer
from app.config import Settings
from app.orchestrator.strategies import MISSING_KEY_NOTICE, select_strategy


def test_missing_key_selects_heuristic(registry):
    strategy = select_strategy(Settings(OPENAI_API_KEY="   "), registry)
    assert strategy.name == "heuristic"
    assert strategy.is_fallback
    assert strategy.notice == MISSING_KEY_NOTICE
    assert isinstance(strategy.planner, HeuristicPlanner)
    assert isinstance(strategy.summarizer, StaticSummarizer)


def test_key_selects_llm(registry):
    strategy = select_strategy(Settings(OPENAI_API_KEY="sk-test", OPENAI_MODEL="gpt-test"), registry)
    assert strategy.name == "llm"
    assert not strategy.is_fallback
    assert isinstance(strategy.planner, LLMPlanner)
    assert isinstance(strategy.summarizer, LLMSummarizer)
    assert strategy.planner.provider.model == "gpt-test"
    assert strategy.planner.registry is registry


def test_cors_origins_list():
    assert Settings(CORS_ORIGINS="http://a.test, http://b.test,").cors_origins_list == ["http://a.test", "http://b.test"]
