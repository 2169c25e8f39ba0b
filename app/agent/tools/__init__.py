"""Built-in tools package for the agent"""
from app.agent.tools.search_tool import WebSearchTool
from app.agent.tools.calculator_tool import CalculatorTool
from app.agent.tools.knowledge_base_tool import KnowledgeBaseTool

__all__ = ["WebSearchTool", "CalculatorTool", "KnowledgeBaseTool"]
