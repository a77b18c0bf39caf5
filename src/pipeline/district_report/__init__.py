"""District report orchestration package.

Wires the action step and AI processor stages into a single sequential run
and publishes the final report. Entry points live in :mod:`.runner`; the CLI
is ``src/program_district_report.py``.
"""

from .publisher import echo_report, write_report
from .runner import PipelineResult, run_from_config, run_pipeline
from .status import PipelineState, render_run_summary

__all__ = [
    "PipelineResult",
    "PipelineState",
    "echo_report",
    "render_run_summary",
    "run_from_config",
    "run_pipeline",
    "write_report",
]
