"""
Knowledge Base Tool - keyword lookup over a small built-in document set.

A document scores one point per distinct query keyword found anywhere in
its lower-cased title and content. The best two non-zero matches are
returned. This tool has no failure mode.
"""
from dataclasses import dataclass
from typing import List, Set, Tuple
import re

from app.agent.tool_registry import Tool, ToolContext

MAX_RESULTS = 2
NO_MATCHES = "No relevant knowledge snippets found."


@dataclass(frozen=True)
class KnowledgeDocument:
    title: str
    content: str


KNOWLEDGE_BASE: Tuple[KnowledgeDocument, ...] = (
    KnowledgeDocument(
        title="Agentic AI definition",
        content=(
            "Agentic AI systems combine reasoning, planning, and tool usage to "
            "autonomously achieve goals across multiple steps."
        ),
    ),
    KnowledgeDocument(
        title="Product launch checklist",
        content=(
            "A successful launch involves defining target personas, crafting messaging, "
            "creating assets, scheduling announcements, and preparing success metrics."
        ),
    ),
    KnowledgeDocument(
        title="Data storytelling",
        content=(
            "Transform raw analysis into narratives by highlighting the question, "
            "methodology, insights, and actionable recommendations."
        ),
    ),
)


def extract_keywords(query: str) -> Set[str]:
    return {word for word in re.split(r"[^a-z0-9]+", query.lower()) if word}


def score_document(query: str, doc: KnowledgeDocument) -> int:
    text = f"{doc.title} {doc.content}".lower()
    return sum(1 for word in extract_keywords(query) if word in text)


def search_knowledge_base(query: str, documents=KNOWLEDGE_BASE) -> List[KnowledgeDocument]:
    """Top matches by descending score; ties keep document order"""
    scored = [(score_document(query, doc), doc) for doc in documents]
    ranked = sorted((entry for entry in scored if entry[0] > 0), key=lambda entry: entry[0], reverse=True)
    return [doc for _, doc in ranked[:MAX_RESULTS]]


class KnowledgeBaseTool(Tool):
    """Query snippets from the curated strategy and AI knowledge base"""

    def __init__(self):
        super().__init__(
            name="knowledgeBase",
            description="Query snippets from a curated strategy and AI knowledge base.",
        )

    def resolve_input(self, input_text: str, context: ToolContext) -> str:
        return input_text or context.task

    async def invoke(self, input_text: str, context: ToolContext) -> str:
        matches = search_knowledge_base(input_text)
        if not matches:
            return NO_MATCHES
        return "\n".join(f"• {doc.title}: {doc.content}" for doc in matches)
