"""
Web Search Tool - DuckDuckGo instant answer API as an agent tool.

Returns the abstract text plus related-topic snippets (first four).
An empty result set is still a successful search.
"""
from typing import Any, Dict, List, Optional
import httpx

from app.agent.errors import MissingInput, NetworkError
from app.agent.tool_registry import Tool, ToolContext
from app.config import settings

MAX_SNIPPETS = 4
NO_RESULTS = "No search snippets returned."


def extract_snippets(data: Dict[str, Any]) -> List[str]:
    """Flatten AbstractText and both RelatedTopics shapes into one list"""
    snippets: List[str] = []
    if not isinstance(data, dict):
        return snippets

    abstract = data.get("AbstractText")
    if isinstance(abstract, str) and abstract:
        snippets.append(abstract)

    for topic in data.get("RelatedTopics") or []:
        if not isinstance(topic, dict):
            continue
        text = topic.get("Text")
        if isinstance(text, str) and text:
            snippets.append(text)
        # Grouped topics nest their entries one level down
        for sub in topic.get("Topics") or []:
            if isinstance(sub, dict) and isinstance(sub.get("Text"), str) and sub["Text"]:
                snippets.append(sub["Text"])
    return snippets


class WebSearchTool(Tool):
    """Live web search using the DuckDuckGo instant answer API"""

    def __init__(
        self,
        api_url: Optional[str] = None,
        user_agent: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        super().__init__(
            name="webSearch",
            description="Live web search using DuckDuckGo instant answer API.",
        )
        self.api_url = api_url or settings.SEARCH_API_URL
        self.user_agent = user_agent or settings.SEARCH_USER_AGENT
        self.timeout = timeout if timeout is not None else settings.SEARCH_TIMEOUT_SECONDS
        self.transport = transport

    def resolve_input(self, input_text: str, context: ToolContext) -> str:
        return input_text or context.task

    async def invoke(self, input_text: str, context: ToolContext) -> str:
        if not input_text.strip():
            raise MissingInput("The search tool requires a query string.", output="Search input missing.")

        data = await self._fetch(input_text)
        snippets = extract_snippets(data)
        return "\n".join(snippets[:MAX_SNIPPETS]) or NO_RESULTS

    async def _fetch(self, query: str) -> Dict[str, Any]:
        params = {
            "q": query,
            "format": "json",
            "no_html": "1",
            "skip_disambig": "1",
        }
        headers = {"User-Agent": self.user_agent}

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.get(self.api_url, params=params, headers=headers)
                if not response.is_success:
                    raise NetworkError(f"HTTP {response.status_code}", output="Search failed.")
                return response.json()
        except NetworkError:
            raise
        except (httpx.HTTPError, ValueError) as e:
            raise NetworkError(str(e) or type(e).__name__, output="Search failed.") from e
