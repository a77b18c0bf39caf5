"""Publish the synthesized district report.

The report is written verbatim to a single plain-text file. Its content is
free-form prose, never a JSON document, and it is not wrapped in any
structured envelope. Before writing, the runner echoes the report to the
console with :func:`echo_report`, so a failed write never loses the text.
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path

from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from src.exceptions import PublishError

logger = logging.getLogger(__name__)


def write_report(report: str, output_file: Path) -> Path:
    r"""Write the report text to disk, creating parent directories automatically.

    Parameters
    ----------
    report : str
        Synthesized report text, written exactly as given.
    output_file : Path
        Destination file path.

    Returns
    -------
    Path
        The path that was written.

    Raises
    ------
    PublishError
        If the directory cannot be created or the file cannot be written.

    Examples
    --------
    >>> import tempfile
    >>> from pathlib import Path
    >>> path = Path(tempfile.gettempdir()) / "district_report_example.txt"
    >>> write_report("Across districts ...", path) == path
    True
    """
    output_file = Path(output_file)
    tmp_name: str | None = None
    try:
        output_file.parent.mkdir(parents=True, exist_ok=True)
        # Write beside the target and swap it in so a failed write never
        # truncates a previous report.
        with tempfile.NamedTemporaryFile(
            mode="w",
            encoding="utf-8",
            dir=output_file.parent,
            prefix=f".{output_file.name}.",
            suffix=".tmp",
            delete=False,
        ) as handle:
            tmp_name = handle.name
            handle.write(report)
        os.replace(tmp_name, output_file)
        tmp_name = None
    except OSError as exc:
        if tmp_name is not None:
            Path(tmp_name).unlink(missing_ok=True)
        raise PublishError(
            f"Could not write report to {output_file}: {exc}",
            context={"output_file": str(output_file)},
        ) from exc
    logger.info("Report written to %s (%d characters)", output_file, len(report))
    return output_file


def echo_report(report: str, console: Console | None = None) -> None:
    """Print the report inside a panel on the console.

    ``Text`` is used so square brackets in generated prose are never read as
    rich markup.
    """
    console = console or Console()
    console.print(
        Panel(Text(report), title="District Synthesis Report", expand=True)
    )
