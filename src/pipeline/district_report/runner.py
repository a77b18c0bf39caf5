"""Run the district report pipeline end to end.

This module is the headless boundary between the CLI and the pipeline
stages. It loads the action step table, partitions it by district, builds
one batch per district, analyzes the batches one at a time, synthesizes the
final report in a single call and publishes it.

Failure semantics per stage:

- Loading the source table is all-or-nothing; ``SourceLoadError`` propagates
  to the caller before any generation happens.
- A district that fails serialization or generation is skipped and recorded
  in :attr:`PipelineResult.failed_districts`.
- A failed synthesis call ends the run in ``SYNTHESIS_FAILED`` and no output
  file is written or overwritten.
- A failed write ends the run in ``PUBLISH_FAILED``; the report text is kept
  on the result and has already been echoed to the console.

Usage Examples
--------------
Programmatic usage with an injected generator::

    from src.pipeline.district_report.runner import run_from_config
    result = run_from_config(Path("ActionSteps.csv"), generator=my_generator)
    assert result.state is PipelineState.PUBLISHED
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from pathlib import Path

import aiohttp
from aiolimiter import AsyncLimiter
from rich.console import Console

from src.config import (
    DEFAULT_CSV_DELIMITER,
    DISTRICT_ORDER_FIRST_SEEN,
    ORIGINAL_CSV_PATH,
    OUTPUT_REPORT_FILE,
)
from src.exceptions import AppError, ConfigurationError, GenerationError, PublishError
from src.pipeline.action_steps import (
    build_batches,
    load_action_steps,
    log_record_preview,
    partition_by_district,
)
from src.pipeline.ai_processor import (
    AIAPIClient,
    AnalysisRun,
    ChatCompletionGenerator,
    DistrictAnalyzer,
    DistrictFailure,
    GenerationParams,
    OpenAIConfig,
    ReportSynthesizer,
    TextGenerator,
    save_district_analysis,
)

from .publisher import echo_report, write_report
from .status import PipelineState

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_SETUP_FAILED = 1
EXIT_SYNTHESIS_FAILED = 2
EXIT_PUBLISH_FAILED = 3


@dataclass
class PipelineResult:
    """Summary of one pipeline invocation."""

    state: PipelineState = PipelineState.PENDING
    total_districts: int = 0
    analyzed_districts: list[str] = field(default_factory=list)
    failed_districts: list[DistrictFailure] = field(default_factory=list)
    report: str | None = None
    output_file: Path | None = None
    error: AppError | None = None

    @property
    def exit_code(self) -> int:
        """Process exit code; a run that never reached a terminal state is 1."""
        if self.state is PipelineState.PUBLISHED:
            return EXIT_OK
        if self.state is PipelineState.SYNTHESIS_FAILED:
            return EXIT_SYNTHESIS_FAILED
        if self.state is PipelineState.PUBLISH_FAILED:
            return EXIT_PUBLISH_FAILED
        return EXIT_SETUP_FAILED

    def advance(self, state: PipelineState) -> None:
        logger.debug("Pipeline state: %s -> %s", self.state.value, state.value)
        self.state = state


def _save_analyses(run: AnalysisRun, analyses_dir: Path) -> None:
    """Persist intermediate analyses; failures here never affect the run."""
    for index, analysis in enumerate(run.analyses, start=1):
        try:
            path = save_district_analysis(
                index, analysis.district, analysis.text, analyses_dir
            )
            logger.debug("Saved analysis for '%s' to %s", analysis.district, path)
        except OSError:
            logger.exception(
                "Failed to save analysis for district '%s'", analysis.district
            )


async def run_pipeline(
    csv_path: Path,
    output_file: Path,
    generator: TextGenerator,
    *,
    params: GenerationParams | None = None,
    delimiter: str = DEFAULT_CSV_DELIMITER,
    district_order: str = DISTRICT_ORDER_FIRST_SEEN,
    analyses_dir: Path | None = None,
    echo: bool = True,
    console: Console | None = None,
) -> PipelineResult:
    """Run every stage once with the given generation capability.

    Parameters
    ----------
    csv_path : Path
        Action step table to load.
    output_file : Path
        Where the final report is written.
    generator : TextGenerator
        Capability used for the district calls and the synthesis call.
    params : GenerationParams, optional
        Sampling parameters for both stages.
    delimiter : str, optional
        Source table field delimiter.
    district_order : str, optional
        ``"first-seen"`` or ``"lexicographic"``.
    analyses_dir : Path, optional
        When set, each successful district analysis is also saved here.
    echo : bool, optional
        Print the report to the console before writing it.
    console : rich.console.Console, optional
        Console used for the echo.

    Returns
    -------
    PipelineResult
        Terminal state plus everything produced along the way.

    Raises
    ------
    SourceLoadError
        If the source table cannot be loaded completely.
    """
    result = PipelineResult()
    records = load_action_steps(Path(csv_path), delimiter)
    log_record_preview(records)
    result.advance(PipelineState.LOADED)

    groups = partition_by_district(records, district_order)
    result.total_districts = len(groups)
    logger.info("Partitioned %d records into %d districts", len(records), len(groups))
    result.advance(PipelineState.PARTITIONED)

    batches = build_batches(groups)
    result.advance(PipelineState.BATCHED)

    result.advance(PipelineState.ANALYZING)
    run = await DistrictAnalyzer(generator, params).analyze_all(batches)
    result.analyzed_districts = [analysis.district for analysis in run.analyses]
    result.failed_districts = list(run.failures)
    if analyses_dir is not None:
        _save_analyses(run, Path(analyses_dir))

    result.advance(PipelineState.SYNTHESIZING)
    try:
        report = await ReportSynthesizer(generator, params).synthesize(run.texts)
    except GenerationError as error:
        logger.error("Synthesis failed; no report will be written: %s", error)
        result.error = error
        result.advance(PipelineState.SYNTHESIS_FAILED)
        return result
    result.report = report

    if echo:
        echo_report(report, console)
    try:
        result.output_file = write_report(report, Path(output_file))
    except PublishError as error:
        logger.error("%s", error)
        result.error = error
        result.advance(PipelineState.PUBLISH_FAILED)
        return result
    result.advance(PipelineState.PUBLISHED)
    return result


async def _run_with_service(
    csv_path: Path, output_file: Path, **options
) -> PipelineResult:
    """Create the service session once and run the pipeline inside it."""
    try:
        config = OpenAIConfig()
    except ValueError as exc:
        raise ConfigurationError(str(exc)) from exc
    params = GenerationParams(response_format=config.response_format)
    async with aiohttp.ClientSession() as session:
        generator = ChatCompletionGenerator(
            AIAPIClient(config), session, AsyncLimiter(config.target_rpm, 60)
        )
        return await run_pipeline(
            csv_path, output_file, generator, params=params, **options
        )


def run_from_config(
    csv_path: Path | None = None,
    output_file: Path | None = None,
    *,
    generator: TextGenerator | None = None,
    delimiter: str = DEFAULT_CSV_DELIMITER,
    district_order: str = DISTRICT_ORDER_FIRST_SEEN,
    analyses_dir: Path | None = None,
    echo: bool = True,
    console: Console | None = None,
) -> PipelineResult:
    """Run the pipeline using provided paths or defaults from config.

    When ``generator`` is ``None`` an :class:`OpenAIConfig` is loaded and a
    single ``aiohttp`` session backs every generation call for the run.

    Returns
    -------
    PipelineResult

    Raises
    ------
    SourceLoadError
        If the source table cannot be loaded.
    ConfigurationError
        If the generation service is not configured.
    """
    csv_path = Path(csv_path) if csv_path is not None else ORIGINAL_CSV_PATH
    output_file = Path(output_file) if output_file is not None else OUTPUT_REPORT_FILE
    options = {
        "delimiter": delimiter,
        "district_order": district_order,
        "analyses_dir": analyses_dir,
        "echo": echo,
        "console": console,
    }
    if generator is not None:
        return asyncio.run(run_pipeline(csv_path, output_file, generator, **options))
    return asyncio.run(_run_with_service(csv_path, output_file, **options))


__all__ = [
    "EXIT_OK",
    "EXIT_PUBLISH_FAILED",
    "EXIT_SETUP_FAILED",
    "EXIT_SYNTHESIS_FAILED",
    "PipelineResult",
    "run_from_config",
    "run_pipeline",
]
