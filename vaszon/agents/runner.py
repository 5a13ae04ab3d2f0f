"""
AI Agent runner for Vászon.

This module handles communication with the Gemini generative language API and
implements the text extraction, summary and suggestion capabilities used by
the canvas core.
"""

import httpx
import json
import time
from typing import Any, Dict, List, Optional
import logging

from ..config import config
from ..errors import AgentError, AINotConfiguredError
from .registry import AgentRegistry


class AgentRunner:
    """
    Manages communication with the Gemini API and runs AI agents.
    """

    def __init__(self, api_key: Optional[str] = None, model: Optional[str] = None,
                 base_url: Optional[str] = None, timeout: Optional[float] = None,
                 registry: Optional[AgentRegistry] = None,
                 client: Optional[httpx.AsyncClient] = None):
        """
        Initialize the agent runner.

        Args:
            api_key: API key (defaults to config value / environment)
            model: The model name to use for inference (defaults to config value)
            base_url: Base URL of the API (defaults to config value)
            timeout: HTTP timeout in seconds (defaults to config value)
            registry: Agent prompts (defaults to the registry built from config)
            client: Optional pre-built HTTP client, mainly for tests

        Raises:
            AINotConfiguredError: If no API key is available
        """
        self.api_key = api_key if api_key is not None else config.api_key
        if not self.api_key:
            raise AINotConfiguredError("No API key configured for the AI service")
        self.model = model or config.model_name
        self.base_url = (base_url or config.ai_base_url).rstrip("/")
        self.registry = registry or AgentRegistry(config.agent_definitions)
        self.client = client or httpx.AsyncClient(
            timeout=timeout if timeout is not None else config.ai_timeout
        )

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.aclose()

    async def aclose(self) -> None:
        await self.client.aclose()

    async def _call_gemini(self, parts: List[Dict[str, Any]], system_prompt: str = "",
                           agent_name: str = "unknown", response_mime_type: Optional[str] = None,
                           timeout: Optional[float] = None) -> str:
        """
        Make a generateContent request.

        Args:
            parts: Content parts of the single user turn
            system_prompt: Optional system instruction for the agent persona
            agent_name: Name of the agent making the call, for logging
            response_mime_type: Optional MIME type the model should answer in
            timeout: Per-request timeout in seconds (None keeps the client timeout)

        Returns:
            The concatenated text of the first candidate

        Raises:
            AgentError: If the request fails or the response has no text
        """
        start_time = time.time()
        payload: Dict[str, Any] = {
            "contents": [{"role": "user", "parts": parts}]
        }
        if system_prompt:
            payload["systemInstruction"] = {"parts": [{"text": system_prompt}]}
        if response_mime_type:
            payload["generationConfig"] = {"responseMimeType": response_mime_type}

        try:
            response = await self.client.post(
                f"{self.base_url}/models/{self.model}:generateContent",
                headers={"x-goog-api-key": self.api_key},
                json=payload,
                timeout=timeout if timeout is not None else httpx.USE_CLIENT_DEFAULT
            )
            response.raise_for_status()
            result = response.json()

        except httpx.HTTPStatusError as e:
            raise AgentError(f"Gemini request failed: {e}") from e
        except httpx.RequestError as e:
            raise AgentError(f"Failed to connect to Gemini: {e}") from e
        except ValueError as e:
            raise AgentError(f"Gemini returned invalid JSON: {e}") from e
        finally:
            execution_time_ms = int((time.time() - start_time) * 1000)
            logging.debug(f"Agent {agent_name} call finished in {execution_time_ms} ms")

        return self._extract_response_text(result)

    @staticmethod
    def _extract_response_text(result: Dict[str, Any]) -> str:
        candidates = result.get("candidates") or []
        if not candidates:
            feedback = result.get("promptFeedback", {})
            raise AgentError(f"Gemini returned no candidates (feedback: {feedback})")

        parts = (candidates[0].get("content") or {}).get("parts") or []
        text = "".join(part.get("text", "") for part in parts if isinstance(part, dict))
        if not text.strip():
            raise AgentError("Gemini returned an empty response")
        return text

    async def extract_text(self, base64_content: str, mime_type: str) -> str:
        """
        Run the Extractor Agent on a base64-encoded document.

        Args:
            base64_content: The document bytes, base64-encoded
            mime_type: Declared MIME type of the document

        Returns:
            The extracted plain text
        """
        agent = self.registry.require_agent("extractor")
        parts = [
            {"inline_data": {"mime_type": mime_type, "data": base64_content}},
            {"text": agent.render(mime_type=mime_type)},
        ]
        text = await self._call_gemini(
            parts, agent.system_prompt, agent_name=agent.name, timeout=agent.timeout
        )
        return text.strip()

    async def generate_summary(self, full_concept: str, canvas_digest: str) -> str:
        """
        Run the Summarizer Agent.

        Args:
            full_concept: The business concept including the attached document
            canvas_digest: The non-empty blocks as titled bullet lists

        Returns:
            The summary text
        """
        agent = self.registry.require_agent("summarizer")
        prompt = agent.render(full_concept=full_concept, canvas_digest=canvas_digest)
        text = await self._call_gemini(
            [{"text": prompt}], agent.system_prompt, agent_name=agent.name, timeout=agent.timeout
        )
        return text.strip()

    async def generate_suggestions(self, block_title: str, block_description: str,
                                   full_concept: str) -> List[str]:
        """
        Run the Suggester Agent for one block.

        Args:
            block_title: Title of the block
            block_description: Guiding question of the block
            full_concept: The business concept including the attached document

        Returns:
            Suggested item texts in the order the model produced them

        Raises:
            AgentError: If the response is not a JSON array of strings
        """
        agent = self.registry.require_agent("suggester")
        prompt = agent.render(
            block_title=block_title,
            block_description=block_description,
            full_concept=full_concept
        )
        response = await self._call_gemini(
            [{"text": prompt}], agent.system_prompt,
            agent_name=agent.name, response_mime_type="application/json",
            timeout=agent.timeout
        )
        return parse_suggestions(response)


def parse_suggestions(response: str) -> List[str]:
    """
    Parse a model response into a list of suggestion strings.

    Args:
        response: Raw model output, optionally wrapped in a code fence

    Returns:
        Non-empty, stripped suggestion texts

    Raises:
        AgentError: If the response is not a JSON array
    """
    response = response.strip()

    # Remove any markdown code block formatting if present
    if response.startswith("```json"):
        response = response[7:]
    if response.startswith("```"):
        response = response[3:]
    if response.endswith("```"):
        response = response[:-3]

    try:
        parsed = json.loads(response.strip())
    except json.JSONDecodeError as e:
        logging.warning(f"Failed to parse Suggester Agent JSON response: {e}")
        logging.warning(f"Raw response: {response}")
        raise AgentError(f"Suggestion response is not valid JSON: {e}") from e

    if not isinstance(parsed, list):
        raise AgentError(f"Suggestion response must be a JSON array, got {type(parsed).__name__}")

    return [str(item).strip() for item in parsed if str(item).strip()]
