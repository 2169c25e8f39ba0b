"""
OpenAI LLM provider wrapper (Responses API)

Used by the planner (JSON-schema constrained output) and the
summarizer (free text). Both calls are awaited; no retries.

A client lives for exactly one call; each HTTP request runs on its own
event loop.
"""
from openai import AsyncOpenAI, OpenAIError
from typing import Optional, Dict, Any
import time
import httpx

from app.agent.errors import NetworkError
from app.config import settings


class OpenAIProvider:
    """OpenAI API wrapper using the async client"""

    DEFAULT_MODEL = "gpt-4o-mini"

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        base_url: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Store credentials; clients are created per call"""
        self.api_key = api_key or settings.OPENAI_API_KEY
        if not self.api_key:
            raise ValueError("OpenAI API key not configured")

        self.model = model or settings.OPENAI_MODEL or self.DEFAULT_MODEL
        self.base_url = base_url or settings.OPENAI_BASE_URL or None
        self.transport = transport

    def _client(self) -> AsyncOpenAI:
        http_client = httpx.AsyncClient(transport=self.transport) if self.transport else None
        return AsyncOpenAI(
            api_key=self.api_key,
            base_url=self.base_url,
            max_retries=0,
            http_client=http_client,
        )

    async def generate(
        self,
        system: str,
        user: str,
        json_schema: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """
        Generate a response.

        Args:
            system: System instructions
            user: User message text
            json_schema: Optional {"name": ..., "schema": ...} to constrain output

        Returns:
            Dict with response text, model, latency and token count
        """
        start_time = time.time()

        request: Dict[str, Any] = {
            "model": self.model,
            "input": [
                {"role": "system", "content": system},
                {"role": "user", "content": [{"type": "input_text", "text": user}]},
            ],
        }
        if json_schema:
            request["text"] = {
                "format": {
                    "type": "json_schema",
                    "name": json_schema["name"],
                    "schema": json_schema["schema"],
                }
            }

        try:
            async with self._client() as client:
                response = await client.responses.create(**request)
        except OpenAIError as e:
            raise NetworkError(f"OpenAI API error: {str(e)}") from e

        latency_ms = int((time.time() - start_time) * 1000)
        response_text = response.output_text or ""

        return {
            "text": response_text,
            "model": self.model,
            "latency_ms": latency_ms,
            "tokens_used": self._count_tokens(response, system + user, response_text),
        }

    def _count_tokens(self, response, prompt: str, text: str) -> int:
        usage = getattr(response, "usage", None)
        total = getattr(usage, "total_tokens", None)
        if isinstance(total, int):
            return total
        # Rough estimate (~4 chars per token)
        return (len(prompt) + len(text)) // 4

