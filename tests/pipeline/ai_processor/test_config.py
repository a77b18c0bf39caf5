"""Configuration-related tests for the generation service config."""

from pathlib import Path

import pytest

import src.config as project_config
from src.pipeline.ai_processor.config import OpenAIConfig

ENV_KEYS = [
    "API_KEY",
    "AZURE_API_KEY",
    "AZURE_ENDPOINT_BASE",
    "GPT4O_DEPLOYMENT_NAME",
    "AZURE_API_VERSION",
    "CHAT_COMPLETIONS_ENDPOINT",
    "TARGET_RPM",
    "REQUEST_TIMEOUT",
    "RESPONSE_FORMAT",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path: Path):
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    # Point PROJECT_ROOT away from the real repo to avoid loading a real .env
    monkeypatch.setattr(project_config, "PROJECT_ROOT", tmp_path)


def test_missing_api_key(monkeypatch):
    with pytest.raises(ValueError):
        OpenAIConfig()


def test_azure_key_without_endpoint(monkeypatch):
    monkeypatch.setenv("AZURE_API_KEY", "k")
    with pytest.raises(ValueError):
        OpenAIConfig()


def test_non_azure_without_endpoint_leaves_it_empty(monkeypatch):
    monkeypatch.setenv("API_KEY", "k")
    cfg = OpenAIConfig()
    assert cfg.chat_endpoint == ""
    assert cfg.response_format == "text"


def test_azure_endpoint_is_composed(monkeypatch):
    monkeypatch.setenv("AZURE_API_KEY", "k")
    monkeypatch.setenv("AZURE_ENDPOINT_BASE", "https://api.example.com/")
    monkeypatch.setenv("GPT4O_DEPLOYMENT_NAME", "gpt-4o")
    monkeypatch.setenv("AZURE_API_VERSION", "2024-05-01-preview")
    monkeypatch.setenv("TARGET_RPM", "30")
    monkeypatch.setenv("REQUEST_TIMEOUT", "5")
    cfg = OpenAIConfig()
    assert cfg.chat_endpoint == (
        "https://api.example.com/openai/deployments/gpt-4o/chat/completions"
        "?api-version=2024-05-01-preview"
    )
    assert cfg.target_rpm == 30
    assert cfg.request_timeout == 5


def test_endpoint_override(monkeypatch):
    monkeypatch.setenv("AZURE_API_KEY", "k")
    monkeypatch.setenv("CHAT_COMPLETIONS_ENDPOINT", "https://proxy.local/chat")
    assert OpenAIConfig().chat_endpoint == "https://proxy.local/chat"


def test_response_format_validation(monkeypatch):
    monkeypatch.setenv("API_KEY", "k")
    monkeypatch.setenv("RESPONSE_FORMAT", "Structured")
    assert OpenAIConfig().response_format == "structured"
    monkeypatch.setenv("RESPONSE_FORMAT", "xml")
    with pytest.raises(ValueError):
        OpenAIConfig()


@pytest.mark.parametrize(
    "name, value",
    [
        ("TARGET_RPM", "0"),
        ("TARGET_RPM", "-5"),
        ("REQUEST_TIMEOUT", "0"),
        ("REQUEST_TIMEOUT", "-1"),
    ],
)
def test_non_positive_pacing_values_are_rejected(monkeypatch, name, value):
    monkeypatch.setenv("API_KEY", "k")
    monkeypatch.setenv(name, value)
    with pytest.raises(ValueError) as excinfo:
        OpenAIConfig()
    assert name in str(excinfo.value)


def test_dotenv_file_is_loaded(monkeypatch, tmp_path: Path):
    # Registered with monkeypatch so values written by load_dotenv are undone.
    monkeypatch.setenv("API_KEY", "placeholder")
    monkeypatch.setenv("CHAT_COMPLETIONS_ENDPOINT", "placeholder")
    (tmp_path / ".env").write_text(
        "API_KEY=from-dotenv\nCHAT_COMPLETIONS_ENDPOINT=https://dotenv.local\n",
        encoding="utf-8",
    )
    cfg = OpenAIConfig()
    assert cfg.api_key == "from-dotenv"
    assert cfg.chat_endpoint == "https://dotenv.local"
