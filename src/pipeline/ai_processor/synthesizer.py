"""Cross-district synthesis stage.

Joins the successful district analyses with ``DISTRICT_SEPARATOR`` and asks
the generation service, in a single call, for one cohesive essay-style report
across all districts. An empty analysis list still produces a call, with an
empty analyses section.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import replace

from src.config import ANALYSES_PLACEHOLDER, DISTRICT_SEPARATOR, SYNTHESIS_PROMPT

from .client import GenerationParams, TextGenerator

logger = logging.getLogger(__name__)


def combine_analyses(analyses: Sequence[str]) -> str:
    """Join analysis texts with the district separator."""
    return DISTRICT_SEPARATOR.join(analyses)


def build_synthesis_prompt(combined_analyses: str) -> str:
    """Embed the combined analyses into the synthesis instruction."""
    return SYNTHESIS_PROMPT.replace(ANALYSES_PLACEHOLDER, combined_analyses)


class ReportSynthesizer:
    """Produce the final report from district analyses.

    Parameters
    ----------
    generator : TextGenerator
        Generation capability shared with the analysis stage.
    params : GenerationParams, optional
        Sampling parameters; defaults to temperature 0 text output. The report
        is prose, so a structured response format is downgraded to text.
    """

    def __init__(
        self, generator: TextGenerator, params: GenerationParams | None = None
    ) -> None:
        self.generator = generator
        self.params = replace(params or GenerationParams(), response_format="text")

    async def synthesize(self, analyses: Sequence[str]) -> str:
        """Issue the single synthesis call.

        Raises
        ------
        GenerationError
            Propagated unchanged; the caller decides that no report exists.
        """
        if not analyses:
            logger.warning("No district analyses succeeded; synthesizing from none")
        logger.info("Synthesizing report from %d district analyses", len(analyses))
        prompt = build_synthesis_prompt(combine_analyses(analyses))
        return await self.generator.generate(prompt, self.params)
