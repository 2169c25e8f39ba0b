import logging

from flask import Flask, jsonify, render_template
from flask_cors import CORS
from asgiref.wsgi import WsgiToAsgi

from app.config import Settings, settings as default_settings
from app.agent.executor import AgentRunner
from app.agent.tool_registry import get_tool_registry
from app.orchestrator.strategies import select_strategy


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def create_app(config: Settings = None, runner: AgentRunner = None) -> Flask:
    """Build the Flask app. The agent strategy is fixed here for the app's lifetime."""
    config = config or default_settings
    configure_logging(config.LOG_LEVEL)

    app = Flask(__name__)
    app.config["MAX_TASK_LENGTH"] = config.MAX_TASK_LENGTH
    app.config["DEBUG"] = config.DEBUG
    CORS(app, origins=config.cors_origins_list)

    if runner is None:
        registry = get_tool_registry()
        runner = AgentRunner(registry, select_strategy(config, registry))
    app.extensions["agent_runner"] = runner

    @app.route("/")
    async def home():
        return render_template("index.html", app_name=config.APP_NAME)

    @app.route("/health")
    async def health():
        return jsonify({
            "name": config.APP_NAME,
            "version": config.APP_VERSION,
            "status": "running",
            "strategy": runner.strategy.name,
        })

    # Blueprints
    from app.api.routes_agent import bp as agent_bp

    app.register_blueprint(agent_bp)
    return app


app = create_app()

# WsgiToAsgi wrapper for Uvicorn
asgi_app = WsgiToAsgi(app)
