"""File handling utilities for district analyses.

This module knows how to persist the intermediate per-district analyses for
later inspection. It performs only file I/O and does not contact external
services.
"""

import re
from pathlib import Path

from src.config import DISTRICT_ANALYSIS_FILENAME_SUFFIX

_UNSAFE_FILENAME_CHARS = re.compile(r"[^\w.-]+")


def district_filename(index: int, district: str) -> str:
    """Build a filesystem-safe filename for a district analysis.

    Parameters
    ----------
    index : int
        1-based processing position; keeps names unique when two districts
        sanitize to the same text.
    district : str
        District name as it appears in the source table.

    Returns
    -------
    str
        Filename such as ``"001_Adams_12_Five_Star_Schools.analysis.md"``.

    Examples
    --------
    >>> district_filename(2, "Mesa County Valley 51")
    '002_Mesa_County_Valley_51.analysis.md'
    """
    slug = _UNSAFE_FILENAME_CHARS.sub("_", district).strip("_") or "district"
    return f"{index:03d}_{slug}{DISTRICT_ANALYSIS_FILENAME_SUFFIX}"


def save_district_analysis(
    index: int, district: str, analysis: str, output_dir: Path
) -> Path:
    """Write one district analysis to ``output_dir``.

    Parameters
    ----------
    index : int
        1-based position of the analysis in processing order.
    district : str
        District the analysis belongs to.
    analysis : str
        Generated analysis text, written verbatim.
    output_dir : Path
        Directory to write into; created if needed.

    Returns
    -------
    Path
        Path of the written file.

    Raises
    ------
    OSError
        If the directory or file cannot be written.
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    path = output_dir / district_filename(index, district)
    path.write_text(analysis, encoding="utf-8")
    return path
