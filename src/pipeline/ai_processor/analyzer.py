"""Per-district analysis stage.

:class:`DistrictAnalyzer` turns each :class:`DistrictBatch` into one
natural-language analysis by embedding the serialized batch in the district
analysis prompt and calling the injected :class:`TextGenerator`.

Districts are processed strictly one after another. A district whose batch
cannot be serialized, or whose generation call fails, is logged and skipped;
the remaining districts are still processed and the failed one contributes
nothing downstream.

Examples
--------
>>> analyzer = DistrictAnalyzer(generator)  # doctest: +SKIP
>>> run = await analyzer.analyze_all(batches)  # doctest: +SKIP
>>> run.texts  # doctest: +SKIP
['District A shows ...', 'District B ...']
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from src.config import DISTRICT_ANALYSIS_PROMPT, DISTRICT_DATA_PLACEHOLDER
from src.exceptions import AppError, GenerationError, SerializationError
from src.pipeline.action_steps.batch_builder import DistrictBatch, serialize_batch

from .client import GenerationParams, TextGenerator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DistrictAnalysis:
    """Generated analysis text for one district."""

    district: str
    text: str


@dataclass(frozen=True)
class DistrictFailure:
    """A district that was skipped, with the error that caused it."""

    district: str
    error: AppError


@dataclass
class AnalysisRun:
    """Outcome of analyzing every batch, in processing order."""

    analyses: list[DistrictAnalysis] = field(default_factory=list)
    failures: list[DistrictFailure] = field(default_factory=list)

    @property
    def texts(self) -> list[str]:
        """Successful analysis texts, in the order districts were processed."""
        return [analysis.text for analysis in self.analyses]


def build_district_prompt(serialized_batch: str) -> str:
    """Embed a serialized batch into the district analysis instruction."""
    return DISTRICT_ANALYSIS_PROMPT.replace(DISTRICT_DATA_PLACEHOLDER, serialized_batch)


class DistrictAnalyzer:
    """Run the district analysis prompt for each batch.

    Parameters
    ----------
    generator : TextGenerator
        Generation capability shared with the synthesis stage.
    params : GenerationParams, optional
        Sampling parameters; defaults to temperature 0 text output.
    """

    def __init__(
        self, generator: TextGenerator, params: GenerationParams | None = None
    ) -> None:
        self.generator = generator
        self.params = params or GenerationParams()

    async def analyze_batch(self, batch: DistrictBatch) -> str:
        """Analyze one batch.

        Raises
        ------
        SerializationError
            If the batch cannot be rendered to its document form.
        GenerationError
            If the generation call fails.
        """
        prompt = build_district_prompt(serialize_batch(batch))
        return await self.generator.generate(prompt, self.params)

    async def analyze_all(self, batches: Sequence[DistrictBatch]) -> AnalysisRun:
        """Analyze every batch sequentially, skipping failed districts.

        Parameters
        ----------
        batches : Sequence[DistrictBatch]
            Batches in the order they should be processed.

        Returns
        -------
        AnalysisRun
            Successful analyses and skipped districts, each in processing
            order.
        """
        run = AnalysisRun()
        total = len(batches)
        for index, batch in enumerate(batches, start=1):
            district = batch.district_name
            logger.info("[%d/%d] Analyzing district '%s'", index, total, district)
            try:
                text = await self.analyze_batch(batch)
            except (SerializationError, GenerationError) as error:
                logger.error(
                    "[%d/%d] FAILED district '%s': %s", index, total, district, error
                )
                run.failures.append(DistrictFailure(district, error))
                continue
            logger.info("[%d/%d] OK district '%s'", index, total, district)
            run.analyses.append(DistrictAnalysis(district, text))
        logger.info(
            "District analysis finished: %d succeeded, %d failed",
            len(run.analyses),
            len(run.failures),
        )
        return run
