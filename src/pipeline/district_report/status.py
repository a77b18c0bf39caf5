"""Pipeline states and the end-of-run summary table.

The pipeline moves forward through :class:`PipelineState` exactly once per
invocation::

    LOADED -> PARTITIONED -> BATCHED -> ANALYZING -> SYNTHESIZING
           -> PUBLISHED | SYNTHESIS_FAILED | PUBLISH_FAILED
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

from rich.markup import escape
from rich.table import Table

if TYPE_CHECKING:
    from .runner import PipelineResult


class PipelineState(str, Enum):
    PENDING = "pending"
    LOADED = "loaded"
    PARTITIONED = "partitioned"
    BATCHED = "batched"
    ANALYZING = "analyzing"
    SYNTHESIZING = "synthesizing"
    PUBLISHED = "published"
    SYNTHESIS_FAILED = "synthesis_failed"
    PUBLISH_FAILED = "publish_failed"

    @property
    def is_terminal(self) -> bool:
        return self in TERMINAL_STATES


TERMINAL_STATES = frozenset(
    {
        PipelineState.PUBLISHED,
        PipelineState.SYNTHESIS_FAILED,
        PipelineState.PUBLISH_FAILED,
    }
)


def _status_label(state: PipelineState) -> str:
    """Return a console label for a pipeline state.

    Examples
    --------
    >>> _status_label(PipelineState.PUBLISHED)
    '✅ Published'
    """
    labels = {
        PipelineState.PUBLISHED: "✅ Published",
        PipelineState.SYNTHESIS_FAILED: "❌ Synthesis failed",
        PipelineState.PUBLISH_FAILED: "❌ Publish failed",
    }
    return labels.get(state, f"▶️  {state.value.replace('_', ' ').capitalize()}")


def render_run_summary(result: PipelineResult) -> Table:
    """Build a table summarising one pipeline run.

    Parameters
    ----------
    result : PipelineResult
        Outcome returned by the runner.

    Returns
    -------
    rich.table.Table
        Two-column table ready for ``Console.print``.
    """
    table = Table(title="District Report Run", show_header=True)
    table.add_column("Item", style="bold")
    table.add_column("Value")
    table.add_row("Status", _status_label(result.state))
    table.add_row("Districts", str(result.total_districts))
    table.add_row("Analyzed", str(len(result.analyzed_districts)))
    failed = ", ".join(
        f"{escape(failure.district)} ({failure.error.code})"
        for failure in result.failed_districts
    )
    table.add_row("Skipped", failed or "-")
    table.add_row(
        "Output", str(result.output_file) if result.output_file is not None else "-"
    )
    if result.error is not None:
        table.add_row("Error", escape(str(result.error)))
    return table
