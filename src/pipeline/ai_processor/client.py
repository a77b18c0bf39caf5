"""ai_processor.client module.

This module is the networking boundary for all outbound text generation
requests in the district report pipeline. It has two layers:

- :class:`AIAPIClient` posts a chat completions payload to the configured
  endpoint and returns a ``(ok, content, raw)`` tuple. It never raises:
  configuration problems, network errors, timeouts, HTTP errors and malformed
  responses are all reported in the tuple with an ``error_type`` or
  ``status_code`` discriminator.
- :class:`ChatCompletionGenerator` adapts the client to the
  :class:`TextGenerator` capability used by the pipeline stages: prompt text
  and :class:`GenerationParams` in, generated text out, or
  :class:`src.exceptions.GenerationError`.

Each call is a single attempt. The pipeline awaits one call at a time, so the
session is never shared by concurrent requests.

Examples
--------
>>> import aiohttp
>>> from src.pipeline.ai_processor.client import (
...     AIAPIClient, ChatCompletionGenerator, GenerationParams)
>>> async def main(config):
...     async with aiohttp.ClientSession() as session:
...         generator = ChatCompletionGenerator(AIAPIClient(config), session)
...         return await generator.generate("Hello", GenerationParams())
>>> # import asyncio; asyncio.run(main(OpenAIConfig()))
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Protocol

import aiohttp
from aiolimiter import AsyncLimiter

from src.config import AI_PAYLOAD_MAX_TOKENS, AI_TEMPERATURE
from src.exceptions import GenerationError

logger = logging.getLogger(__name__)

_RESPONSE_FORMAT_TYPES = {"text": "text", "structured": "json_object"}


@dataclass(frozen=True)
class GenerationParams:
    """Sampling parameters sent with every generation request."""

    temperature: float = AI_TEMPERATURE
    response_format: str = "text"
    max_tokens: int = AI_PAYLOAD_MAX_TOKENS


class TextGenerator(Protocol):
    """Capability used by the analysis and synthesis stages."""

    async def generate(self, prompt: str, params: GenerationParams) -> str:
        """Return generated text for ``prompt`` or raise ``GenerationError``."""
        ...


class AIAPIClient:
    r"""Asynchronous client for sending requests to a chat completions endpoint.

    Attributes
    ----------
    config : Any
        The configuration object (e.g., `OpenAIConfig`) providing the API key,
        endpoint and request timeout. Accessed via getattr for optional
        attributes.

    See Also
    --------
    ChatCompletionGenerator : Adapter raising ``GenerationError`` on failure.
    """

    def __init__(self, config: Any) -> None:
        self.config = config

    async def process_content(
        self, session: aiohttp.ClientSession, payload: dict[str, Any]
    ) -> tuple[bool, str | None, dict[str, Any] | None]:
        r"""Send a payload to the external AI API and return a normalized result or error.

        This is the sole method for performing an outbound model call.
        It handles:
          * Configuration errors (no endpoint supplied)
          * Network issues (aiohttp.ClientError) and timeouts
          * Malformed responses (invalid JSON, missing "choices" or content)
          * HTTP error status codes (surfaced with the response body)

        Parameters
        ----------
        session : aiohttp.ClientSession
            The aiohttp session for HTTP requests. Used and not closed by this method.
        payload : dict[str, Any]
            The JSON-serializable payload to send to the AI endpoint.

        Returns
        -------
        tuple[bool, str or None, dict[str, Any] or None]
            Tuple of three elements:
              - ok : bool
                  True if valid content was extracted, otherwise False.
              - content : str or None
                  The generated text exactly as returned, or None on failure.
              - raw_response : dict or None
                  The parsed JSON response if returned, or a dict describing
                  error metadata.

        Notes
        -----
        No exceptions will propagate to the caller; inspect the returned tuple
        for 'ok' and error type.
        """
        endpoint = getattr(self.config, "chat_endpoint", "")
        if not endpoint:
            return (
                False,
                None,
                {
                    "error_type": "ConfigurationError",
                    "message": "Chat completions endpoint not set.",
                },
            )

        headers = {
            "Content-Type": "application/json",
            "api-key": str(getattr(self.config, "api_key", "")),
        }
        try:
            async with session.post(
                endpoint,
                json=payload,
                headers=headers,
                timeout=aiohttp.ClientTimeout(
                    total=getattr(self.config, "request_timeout", 300)
                ),
            ) as response:
                status = response.status
                text = await response.text()
        except aiohttp.ClientError as e:
            return False, None, {"error_type": "ClientError", "message": str(e)}
        except TimeoutError:
            return False, None, {"error_type": "TimeoutError"}
        except Exception as err:
            # Unexpected exceptions keep a stable 'Exception' discriminator.
            return False, None, {"error_type": "Exception", "message": str(err)}

        if status != 200:
            return False, None, {"status_code": status, "error_body": text}

        try:
            data = json.loads(text)
        except json.JSONDecodeError:
            return False, None, {"raw_response_text": text}
        if not isinstance(data, dict):
            return False, None, {"raw_response_text": text}

        choices = data.get("choices", [])
        if not isinstance(choices, list) or not choices:
            return False, None, data
        content = (
            choices[0].get("message", {}).get("content", "")
            if isinstance(choices[0], dict)
            else ""
        )
        if not content or not isinstance(content, str):
            return False, None, data
        return True, content, data


def build_chat_payload(prompt: str, params: GenerationParams) -> dict[str, Any]:
    """Create the chat completions request body for a single user prompt."""
    response_type = _RESPONSE_FORMAT_TYPES.get(params.response_format)
    if response_type is None:
        raise ValueError(f"Unsupported response format {params.response_format!r}")
    return {
        "messages": [{"role": "user", "content": prompt}],
        "max_tokens": params.max_tokens,
        "temperature": params.temperature,
        "response_format": {"type": response_type},
    }


def describe_failure(raw: dict[str, Any] | None) -> str:
    """Summarize an error tuple's raw payload for log and exception messages."""
    if not raw:
        return "no response"
    if "error_type" in raw:
        message = raw.get("message")
        return f"{raw['error_type']}: {message}" if message else str(raw["error_type"])
    if "status_code" in raw:
        return f"HTTP {raw['status_code']}"
    if "raw_response_text" in raw:
        return "response was not valid JSON"
    return "response contained no generated content"


class ChatCompletionGenerator:
    """:class:`TextGenerator` backed by :class:`AIAPIClient` and one session.

    Parameters
    ----------
    client : AIAPIClient
        HTTP boundary used for every request.
    session : aiohttp.ClientSession
        Session held for the whole run; owned by the caller.
    rate_limiter : AsyncLimiter or None, optional
        Paces requests when the service enforces a requests-per-minute quota.
    """

    def __init__(
        self,
        client: AIAPIClient,
        session: aiohttp.ClientSession,
        rate_limiter: AsyncLimiter | None = None,
    ) -> None:
        self.client = client
        self.session = session
        self.rate_limiter = rate_limiter

    async def generate(self, prompt: str, params: GenerationParams) -> str:
        payload = build_chat_payload(prompt, params)
        logger.debug("Sending generation request (%d prompt characters)", len(prompt))
        if self.rate_limiter is not None:
            async with self.rate_limiter:
                ok, content, raw = await self.client.process_content(
                    self.session, payload
                )
        else:
            ok, content, raw = await self.client.process_content(self.session, payload)
        if not ok or content is None:
            raise GenerationError(
                f"Text generation failed: {describe_failure(raw)}",
                context={"response": raw or {}},
            )
        return content
