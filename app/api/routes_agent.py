"""
Agent API routes

Endpoints:
- POST /api/agent          Submit a task to the agent
- GET  /api/agent/tools    List all registered tools
"""
import logging

from flask import Blueprint, current_app, jsonify, request
from pydantic import ValidationError

from app.agent.executor import AgentOutcome
from app.api.models import TaskRequest, ToolInfo

logger = logging.getLogger(__name__)

bp = Blueprint("agent", __name__, url_prefix="/api/agent")

TASK_REQUIRED = "Task is required."


def _failure(message: str, status: int):
    return jsonify(AgentOutcome.failure(message).to_dict()), status


@bp.route("", methods=["POST"])
async def agent_run():
    """
    Submit a task to the agent.

    Body: {"task": "your task here"}
    Returns: the agent outcome; 200 on success, 500 on failure
    """
    try:
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            return _failure(TASK_REQUIRED, 400)

        try:
            task = TaskRequest.model_validate(data).task
        except ValidationError:
            return _failure(TASK_REQUIRED, 400)

        if not task:
            return _failure(TASK_REQUIRED, 400)

        max_length = current_app.config["MAX_TASK_LENGTH"]
        if len(task) > max_length:
            return _failure(f"Task too long (max {max_length} chars).", 400)

        runner = current_app.extensions["agent_runner"]
        outcome = await runner.run(task)
        return jsonify(outcome.to_dict()), 200 if outcome.success else 500

    except Exception as e:
        logger.exception("❌ Agent request failed")
        return _failure(str(e) or "Unknown error", 500)


@bp.route("/tools", methods=["GET"])
async def list_tools():
    """List all registered agent tools"""
    registry = current_app.extensions["agent_runner"].registry
    tools = [ToolInfo(**entry).model_dump() for entry in registry.catalog()]
    return jsonify({"tools": tools, "count": len(tools)})
