"""
Run Script

Usage:
    python run.py serve    # Start server
    python run.py tools    # List registered tools
"""

import sys
import uvicorn
from app.config import settings


def serve():
    """Start the ASGI server"""
    print(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}...")
    print(f"LLM configured: {settings.llm_configured}")
    uvicorn.run(
        "app.main:asgi_app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
    )


def tools():
    """Print the tool catalog"""
    from app.agent.tool_registry import get_tool_registry

    for entry in get_tool_registry().catalog():
        print(f"- {entry['name']}: {entry['description']}")


if __name__ == "__main__":
    if len(sys.argv) < 2:
        print("Usage: python run.py [serve|tools]")
        sys.exit(1)

    command = sys.argv[1]
    if command == "serve":
        serve()
    elif command == "tools":
        tools()
    else:
        print(f"Unknown command: {command}")
        sys.exit(1)
