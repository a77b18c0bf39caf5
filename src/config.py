"""Global configuration constants for the project.

Defines paths, column names, prompt templates and filenames used across the
district report pipeline.
"""

from __future__ import annotations

from pathlib import Path

# Project directories
PROJECT_ROOT: Path = Path(__file__).resolve().parents[1]
SRC_DIR: Path = PROJECT_ROOT / "src"
LOG_DIR: Path = PROJECT_ROOT / "logs"

# AI / Azure defaults
DEFAULT_API_VERSION: str = "2024-05-01-preview"
DEFAULT_DEPLOYMENT_NAME: str = "gpt-4o"
DEFAULT_TARGET_RPM: int = 60
DEFAULT_REQUEST_TIMEOUT: int = 300

# Both generation stages run with maximally deterministic sampling
AI_TEMPERATURE: float = 0.0
AI_PAYLOAD_MAX_TOKENS: int = 2048
AI_RESPONSE_FORMATS: tuple[str, ...] = ("text", "structured")

# Source table columns
COLUMN_DISTRICT: str = "UIP: District Name"
COLUMN_STEP: str = "Improvement Action Step"
COLUMN_DESCRIPTION: str = "Description of Action Step"
COLUMN_START: str = "Start Date"
COLUMN_TARGET: str = "Target Date"
COLUMN_STRATEGY: str = "Major Improvement Strategy"
COLUMN_RESOURCES: str = "Resources"
REQUIRED_COLUMNS: list[str] = [
    COLUMN_DISTRICT,
    COLUMN_STEP,
    COLUMN_DESCRIPTION,
    COLUMN_START,
    COLUMN_TARGET,
    COLUMN_STRATEGY,
    COLUMN_RESOURCES,
]
DEFAULT_CSV_DELIMITER: str = ","
RECORD_PREVIEW_COUNT: int = 4

# Prompt templates
DISTRICT_DATA_PLACEHOLDER: str = "{district_data}"
DISTRICT_ANALYSIS_PROMPT: str = (
    "Analyze this school district data and identify patterns: {district_data}"
)
ANALYSES_PLACEHOLDER: str = "{district_analyses}"
SYNTHESIS_PROMPT: str = (
    "Write a single cohesive report, in essay form with no bullet points and "
    "about one page long if single-spaced, that synthesizes the common "
    "patterns, notable differences and overall themes found in these "
    "district pattern analyses: {district_analyses}"
)
DISTRICT_SEPARATOR: str = "\n\n---DISTRICT SEPARATOR---\n\n"

# District ordering
DISTRICT_ORDER_FIRST_SEEN: str = "first-seen"
DISTRICT_ORDER_LEXICOGRAPHIC: str = "lexicographic"
DISTRICT_ORDERS: tuple[str, ...] = (
    DISTRICT_ORDER_FIRST_SEEN,
    DISTRICT_ORDER_LEXICOGRAPHIC,
)

# Input and output locations
ORIGINAL_CSV_PATH: Path = PROJECT_ROOT / "data" / "ActionSteps.csv"
OUTPUT_REPORT_FILE: Path = PROJECT_ROOT / "output" / "district_synthesis_report.txt"
DISTRICT_ANALYSIS_FILENAME_SUFFIX: str = ".analysis.md"

# CLI defaults and logging
LOG_FILENAME_DISTRICT_REPORT: str = "district_report.log"
LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
