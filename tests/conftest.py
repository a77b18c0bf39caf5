"""Pytest configuration for test environment setup.

- Forces ``DISABLE_FILE_LOGS=1`` to avoid writing log files during tests.
- Ensures the project root is available on ``sys.path`` for imports.
- Provides a fake text generator and a CSV writer for pipeline tests.
"""

import csv
import os
import sys

os.environ.setdefault("DISABLE_FILE_LOGS", "1")  # Avoid creating log files during tests
from pathlib import Path

import pytest

# Ensure project root is on sys.path
ROOT = Path(__file__).resolve().parents[1]
root_str = str(ROOT)
if root_str not in sys.path:
    sys.path.insert(0, root_str)

from src.config import REQUIRED_COLUMNS  # noqa: E402
from src.exceptions import GenerationError  # noqa: E402

DISTRICT_PROMPT_PREFIX = "Analyze this school district data"


class FakeGenerator:
    """In-memory TextGenerator returning canned text.

    District prompts get ``"analysis <n>"`` (1-based call order); the
    synthesis prompt gets ``synthesis_text``. Any prompt containing one of
    ``fail_on`` raises ``GenerationError``, as does the synthesis prompt when
    ``fail_synthesis`` is set.
    """

    def __init__(self, fail_on=(), fail_synthesis=False, synthesis_text="FINAL REPORT"):
        self.fail_on = tuple(fail_on)
        self.fail_synthesis = fail_synthesis
        self.synthesis_text = synthesis_text
        self.prompts: list[str] = []
        self.params: list = []

    @property
    def district_prompts(self) -> list[str]:
        return [p for p in self.prompts if p.startswith(DISTRICT_PROMPT_PREFIX)]

    @property
    def synthesis_prompts(self) -> list[str]:
        return [p for p in self.prompts if not p.startswith(DISTRICT_PROMPT_PREFIX)]

    async def generate(self, prompt, params):
        self.prompts.append(prompt)
        self.params.append(params)
        if any(marker in prompt for marker in self.fail_on):
            raise GenerationError("service unavailable")
        if prompt.startswith(DISTRICT_PROMPT_PREFIX):
            return f"analysis {len(self.district_prompts)}"
        if self.fail_synthesis:
            raise GenerationError("synthesis unavailable")
        return self.synthesis_text


@pytest.fixture
def fake_generator():
    """Return the FakeGenerator class so tests can configure failures."""
    return FakeGenerator


@pytest.fixture
def write_csv(tmp_path: Path):
    """Write an action step CSV and return its path.

    Rows are sequences ordered like ``header``; ``header`` defaults to
    ``REQUIRED_COLUMNS``.
    """

    def _write(rows, header=None, name="ActionSteps.csv", delimiter=","):
        path = tmp_path / name
        with path.open("w", encoding="utf-8", newline="") as fh:
            writer = csv.writer(fh, delimiter=delimiter)
            writer.writerow(list(header or REQUIRED_COLUMNS))
            for row in rows:
                writer.writerow(row)
        return path

    return _write
