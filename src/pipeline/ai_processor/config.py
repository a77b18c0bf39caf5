"""Configuration and environment loader for the text generation client.

This module provides OpenAIConfig, which loads, validates, and exposes
all configuration required to reach an Azure OpenAI (or compatible)
chat completions endpoint.

Role in Architecture
--------------------
- Forms the boundary between process runtime/CI/developer environments and
  the pipeline's runtime config.
- Provides a single source of truth for the endpoint URI, request pacing,
  timeout and response format.
- No business or client logic: only configuration loading, structuring, and validation.

Examples
--------
>>> from src.pipeline.ai_processor.config import OpenAIConfig
>>> cfg = OpenAIConfig()  # doctest: +SKIP
>>> cfg.response_format  # doctest: +SKIP
'text'
"""

import os
from pathlib import Path

from dotenv import load_dotenv

import src.config as _project_config
from src.config import (
    AI_RESPONSE_FORMATS,
    DEFAULT_API_VERSION,
    DEFAULT_DEPLOYMENT_NAME,
    DEFAULT_REQUEST_TIMEOUT,
    DEFAULT_TARGET_RPM,
)


class OpenAIConfig:
    r"""Configuration loader and validator for Azure/OpenAI service parameters.

    Loads and validates configuration from environment variables and an optional
    `.env` file at the project root.

    Attributes
    ----------
    api_key : str | None
        The API key used to authenticate with the service.
    endpoint_base : str | None
        The base endpoint URI for Azure OpenAI service (if applicable).
    deployment_name : str
        The configured deployment name for the language model.
    api_version : str
        The API version used for Azure OpenAI endpoints.
    target_rpm : int
        Upper bound on requests per minute for the sequential calls.
    request_timeout : int
        Timeout (seconds) for individual requests.
    response_format : str
        ``"text"`` or ``"structured"``; declared output format of generations.
    chat_endpoint : str
        Complete endpoint URI to submit completion requests (may be empty).

    Notes
    -----
    Instantiate once at process start. No runtime mutation is intended.
    """

    def __init__(self) -> None:
        r"""Initialize an OpenAIConfig with validation of required environment variables.

        Raises
        ------
        ValueError
            If no OpenAI/Azure API key is detected.
        ValueError
            If Azure credentials are set but the endpoint base is missing.
        ValueError
            If ``RESPONSE_FORMAT`` is not a supported value.
        ValueError
            If ``TARGET_RPM`` or ``REQUEST_TIMEOUT`` is not a positive integer.
        """
        # Resolve project root dynamically from src.config so tests can
        # monkeypatch ``src.config.PROJECT_ROOT``.
        env_path = Path(_project_config.PROJECT_ROOT) / ".env"
        if env_path.exists():
            load_dotenv(env_path, override=True)
        self.api_key: str | None = os.getenv("API_KEY") or os.getenv("AZURE_API_KEY")
        azure_key = os.getenv("AZURE_API_KEY")
        self.endpoint_base: str | None = os.getenv("AZURE_ENDPOINT_BASE")
        self.deployment_name: str = os.getenv(
            "GPT4O_DEPLOYMENT_NAME", DEFAULT_DEPLOYMENT_NAME
        )
        self.api_version: str = os.getenv("AZURE_API_VERSION", DEFAULT_API_VERSION)
        self.target_rpm = int(os.getenv("TARGET_RPM", DEFAULT_TARGET_RPM))
        self.request_timeout = int(os.getenv("REQUEST_TIMEOUT", DEFAULT_REQUEST_TIMEOUT))
        self.response_format: str = os.getenv("RESPONSE_FORMAT", "text").lower()
        if not self.api_key:
            raise ValueError("Missing API key for OpenAI/Azure OpenAI configuration")
        if self.target_rpm <= 0:
            raise ValueError(f"TARGET_RPM must be positive, got {self.target_rpm}")
        if self.request_timeout <= 0:
            raise ValueError(
                f"REQUEST_TIMEOUT must be positive, got {self.request_timeout}"
            )
        if self.response_format not in AI_RESPONSE_FORMATS:
            raise ValueError(
                f"Unsupported RESPONSE_FORMAT {self.response_format!r}; "
                f"expected one of {AI_RESPONSE_FORMATS}"
            )
        override = os.getenv("CHAT_COMPLETIONS_ENDPOINT", "")
        if (
            azure_key
            and not os.getenv("API_KEY")
            and not self.endpoint_base
            and not override
        ):
            raise ValueError(
                "Missing AZURE_ENDPOINT_BASE for Azure OpenAI configuration"
            )
        if override:
            self.chat_endpoint = override
        elif self.endpoint_base:
            self.chat_endpoint = f"{self.endpoint_base.rstrip('/')}/openai/deployments/{self.deployment_name}/chat/completions?api-version={self.api_version}"
        else:
            self.chat_endpoint = ""
