import json

from app.agent.errors import NetworkError
from app.agent.executor import AgentOutcome, AgentRunner, execute_plan
from app.agent.planner import PlanItem
from app.agent.summarizer import FALLBACK_FINAL
from app.orchestrator.strategies import MISSING_KEY_NOTICE, build_heuristic_strategy, build_llm_strategy

from conftest import FakeProvider, plan_json, run


def step(tool, description):
    return PlanItem(title=tool, description=description, tool=tool)


class TestExecutePlan:

    def test_unregistered_tool_does_not_stop_plan(self, registry):
        plan = [step("calculator", "1+1"), step("nope", "x"), step("knowledgeBase", "agentic")]
        steps = run(execute_plan(plan, "task", registry))

        assert [s.tool for s in steps] == ["calculator", "nope", "knowledgeBase"]
        assert steps[0].success and steps[2].success
        missing = steps[1]
        assert not missing.success
        assert missing.error == "Tool nope is not registered."
        assert missing.output == "Tool not available."
        assert missing.input == ""

    def test_tool_names_ignore_case(self, registry):
        steps = run(execute_plan([step("CALCULATOR", "2+2")], "task", registry))
        assert steps[0].output == "Result: 4"

    def test_steps_get_task_context(self, registry):
        steps = run(execute_plan([step("knowledgeBase", "")], "Plan a product launch", registry))
        assert steps[0].input == "Plan a product launch"

    def test_failed_step_keeps_going(self, registry):
        plan = [step("calculator", "1/0"), step("calculator", "3*3")]
        steps = run(execute_plan(plan, "task", registry))
        assert not steps[0].success
        assert steps[1].output == "Result: 9"


class TestAgentRunner:

    def test_heuristic_run(self, registry):
        outcome = run(AgentRunner(registry, build_heuristic_strategy()).run("Plan a product launch"))

        assert outcome.success
        assert outcome.plan
        assert len(outcome.steps) == len(outcome.plan)
        assert outcome.error == MISSING_KEY_NOTICE
        assert outcome.final == FALLBACK_FINAL
        assert "heuristic" in outcome.reasoning

        data = outcome.to_dict()
        assert data["error"] == MISSING_KEY_NOTICE
        assert data["meta"]["startedAt"].endswith("Z")
        assert isinstance(data["meta"]["durationMs"], int)

    def test_heuristic_run_with_search(self, registry, search_requests):
        outcome = run(AgentRunner(registry, build_heuristic_strategy()).run("Find current trends"))
        assert outcome.success
        assert [s.tool for s in outcome.steps] == ["webSearch", "knowledgeBase"]
        assert outcome.steps[0].output == "No search snippets returned."
        assert len(search_requests) == 1

    def test_llm_run(self, registry):
        provider = FakeProvider([
            plan_json(("calculator", "(120 - 100) * 100 / 100"), ("knowledgeBase", "data storytelling")),
            "Growth was 20%.",
        ])
        outcome = run(AgentRunner(registry, build_llm_strategy(provider, registry)).run("What is the growth?"))

        assert outcome.success
        assert outcome.error is None
        assert "error" not in outcome.to_dict()
        assert outcome.final == "Growth was 20%."
        assert outcome.steps[0].output == "Result: 20"

        summary_input = json.loads(provider.calls[1]["user"])
        assert summary_input["task"] == "What is the growth?"
        assert [p["tool"] for p in summary_input["plan"]] == ["calculator", "knowledgeBase"]
        assert summary_input["steps"][0]["output"] == "Result: 20"
        assert provider.calls[1]["json_schema"] is None

    def test_planning_failure(self, registry):
        provider = FakeProvider(["{}"])
        outcome = run(AgentRunner(registry, build_llm_strategy(provider, registry)).run("task"))

        assert not outcome.success
        assert outcome.plan == [] and outcome.steps == [] and outcome.final == ""
        assert outcome.error.startswith("Plan response did not match")
        assert len(provider.calls) == 1

    def test_summary_failure(self, registry):
        provider = FakeProvider(
            [plan_json(("calculator", "1+1"), ("calculator", "2+2"))],
            error=NetworkError("OpenAI API error: 502"),
            fail_on_call=2,
        )
        outcome = run(AgentRunner(registry, build_llm_strategy(provider, registry)).run("task"))

        assert not outcome.success
        assert outcome.steps == []
        assert "Summary request failed" in outcome.error
        assert "502" in outcome.error


def test_failure_outcome_shape():
    data = AgentOutcome.failure("Task is required.").to_dict()
    assert data["success"] is False
    assert data["plan"] == [] and data["steps"] == []
    assert data["final"] == "" and data["reasoning"] == ""
    assert data["meta"]["durationMs"] == 0
    assert data["error"] == "Task is required."
