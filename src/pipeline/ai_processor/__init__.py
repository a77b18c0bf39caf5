"""The ai_processor package holds the text generation stages of the pipeline.

It encapsulates the asynchronous chat completions client, configuration
parsing, the per-district analysis stage, the cross-district synthesis stage
and the helpers that persist intermediate analyses. Every stage receives its
generation capability as an explicit :class:`TextGenerator` dependency, so
tests can substitute a double that returns canned text.

The package does not expose any user-facing commands or entrypoints;
execution should always occur via the district report runner or CLI.

Modules exported
----------------
AIAPIClient, ChatCompletionGenerator, GenerationParams, TextGenerator
    HTTP boundary and the generation capability adapter.
OpenAIConfig
    Service configuration loaded from the environment.
DistrictAnalyzer, ReportSynthesizer
    The two generation stages.
save_district_analysis
    Persist one district analysis to disk.

Examples
--------
>>> from src.pipeline.ai_processor import DistrictAnalyzer, ReportSynthesizer
>>> analyzer = DistrictAnalyzer(generator)  # doctest: +SKIP
>>> synthesizer = ReportSynthesizer(generator)  # doctest: +SKIP
"""

from __future__ import annotations

from .analyzer import (
    AnalysisRun,
    DistrictAnalysis,
    DistrictAnalyzer,
    DistrictFailure,
    build_district_prompt,
)
from .client import (
    AIAPIClient,
    ChatCompletionGenerator,
    GenerationParams,
    TextGenerator,
    build_chat_payload,
)
from .config import OpenAIConfig
from .file_handler import district_filename, save_district_analysis
from .synthesizer import ReportSynthesizer, build_synthesis_prompt, combine_analyses

__all__ = [
    "AIAPIClient",
    "AnalysisRun",
    "ChatCompletionGenerator",
    "DistrictAnalysis",
    "DistrictAnalyzer",
    "DistrictFailure",
    "GenerationParams",
    "OpenAIConfig",
    "ReportSynthesizer",
    "TextGenerator",
    "build_chat_payload",
    "build_district_prompt",
    "build_synthesis_prompt",
    "combine_analyses",
    "district_filename",
    "save_district_analysis",
]
