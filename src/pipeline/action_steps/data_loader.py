"""Data loader for the action step CSV input.

This module is the record store of the district report pipeline: it reads
the delimited action step table with pandas and turns each row into an
immutable :class:`ActionStepRecord`. Columns are located by header name,
never by position, so column order in the file is irrelevant.

Values are passed through exactly as they appear in the file. No trimming,
placeholder substitution or validation is applied, and empty fields stay
empty strings. Any failure to produce the complete record list is reported
as :class:`src.exceptions.SourceLoadError`; there is no partial load.

Examples
--------
>>> from pathlib import Path
>>> from src.pipeline.action_steps.data_loader import load_action_steps
>>> records = load_action_steps(Path("data/ActionSteps.csv"))  # doctest: +SKIP
>>> records[0].district  # doctest: +SKIP
'Adams 12 Five Star Schools'
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

import pandas as pd

from src.config import (
    COLUMN_DESCRIPTION,
    COLUMN_DISTRICT,
    COLUMN_RESOURCES,
    COLUMN_START,
    COLUMN_STEP,
    COLUMN_STRATEGY,
    COLUMN_TARGET,
    DEFAULT_CSV_DELIMITER,
    RECORD_PREVIEW_COUNT,
    REQUIRED_COLUMNS,
)
from src.exceptions import SourceLoadError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ActionStepRecord:
    """One improvement plan action step as read from the source table."""

    district: str
    step: str
    description: str
    start: str
    target: str
    strategy: str
    resources: str


def read_action_step_csv(
    csv_path: Path, delimiter: str = DEFAULT_CSV_DELIMITER
) -> pd.DataFrame:
    """Read the action step table into a string-typed DataFrame.

    Parameters
    ----------
    csv_path : Path
        Path to the UTF-8 encoded (optionally BOM-prefixed) CSV file.
    delimiter : str, optional
        Field delimiter. Defaults to ``DEFAULT_CSV_DELIMITER``.

    Returns
    -------
    pd.DataFrame
        DataFrame restricted to ``REQUIRED_COLUMNS`` in canonical order. All
        cells are strings; empty cells are empty strings.

    Raises
    ------
    SourceLoadError
        If the file is missing or unreadable, has no header, lacks one of the
        required columns, or contains a row with the wrong number of fields.
    """
    context = {"csv_path": str(csv_path)}
    try:
        dataframe = pd.read_csv(
            csv_path,
            sep=delimiter,
            dtype=str,
            keep_default_na=False,
            encoding="utf-8-sig",
        )
    except FileNotFoundError as exc:
        raise SourceLoadError(
            f"Source file not found: {csv_path}", context=context
        ) from exc
    except pd.errors.EmptyDataError as exc:
        raise SourceLoadError(
            f"Source file has no header row: {csv_path}", context=context
        ) from exc
    except pd.errors.ParserError as exc:
        raise SourceLoadError(
            f"Malformed row in {csv_path}: {exc}", context=context
        ) from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise SourceLoadError(
            f"Could not read source file {csv_path}: {exc}", context=context
        ) from exc

    # pandas turns leading fields into an implicit index when every data row
    # has more fields than the header, shifting all values by position.
    if len(dataframe.index) and not isinstance(dataframe.index, pd.RangeIndex):
        raise SourceLoadError(
            f"Malformed row in {csv_path}: data rows have more fields than the header",
            context={**context, "row": 1},
        )

    missing = [column for column in REQUIRED_COLUMNS if column not in dataframe.columns]
    if missing:
        raise SourceLoadError(
            f"Missing required columns in {csv_path}: {', '.join(missing)}",
            context={**context, "missing_columns": missing},
        )

    # Rows with too few fields come back as NaN even with keep_default_na off.
    # Checked across every column, required or not.
    short_rows = dataframe.isna().any(axis=1)
    if short_rows.any():
        first_bad = int(short_rows.to_numpy().nonzero()[0][0])
        raise SourceLoadError(
            f"Malformed row in {csv_path}: data row {first_bad + 1} has too few fields",
            context={**context, "row": first_bad + 1},
        )
    return dataframe[REQUIRED_COLUMNS]


def load_action_steps(
    csv_path: Path, delimiter: str = DEFAULT_CSV_DELIMITER
) -> list[ActionStepRecord]:
    """Load every action step in the table, in source order.

    Parameters
    ----------
    csv_path : Path
        Path to the action step CSV file.
    delimiter : str, optional
        Field delimiter. Defaults to ``DEFAULT_CSV_DELIMITER``.

    Returns
    -------
    list[ActionStepRecord]
        One record per data row. A header-only file yields an empty list.

    Raises
    ------
    SourceLoadError
        See :func:`read_action_step_csv`.
    """
    dataframe = read_action_step_csv(Path(csv_path), delimiter)
    records = [
        ActionStepRecord(
            district=row[COLUMN_DISTRICT],
            step=row[COLUMN_STEP],
            description=row[COLUMN_DESCRIPTION],
            start=row[COLUMN_START],
            target=row[COLUMN_TARGET],
            strategy=row[COLUMN_STRATEGY],
            resources=row[COLUMN_RESOURCES],
        )
        for row in dataframe.to_dict(orient="records")
    ]
    logger.info("Loaded %d action steps from %s", len(records), csv_path)
    return records


def log_record_preview(
    records: list[ActionStepRecord], count: int = RECORD_PREVIEW_COUNT
) -> None:
    """Log the first ``count`` records so operators can sanity check a load."""
    for index, record in enumerate(records[:count], start=1):
        logger.info("Step %d: %s", index, record)
