"""Group action step records by district.

Membership is decided by exact equality of ``ActionStepRecord.district``.
Names that differ only by case or surrounding whitespace form separate
districts; no normalization is attempted.
"""

from __future__ import annotations

from collections.abc import Iterable

from src.config import (
    DISTRICT_ORDER_FIRST_SEEN,
    DISTRICT_ORDER_LEXICOGRAPHIC,
    DISTRICT_ORDERS,
)

from .data_loader import ActionStepRecord


def partition_by_district(
    records: Iterable[ActionStepRecord], order: str = DISTRICT_ORDER_FIRST_SEEN
) -> dict[str, list[ActionStepRecord]]:
    """Partition records into per-district groups.

    Parameters
    ----------
    records : Iterable[ActionStepRecord]
        Records in source order.
    order : str, optional
        ``"first-seen"`` (default) keeps districts in the order their first
        record appears; ``"lexicographic"`` sorts district names.

    Returns
    -------
    dict[str, list[ActionStepRecord]]
        Mapping from district name to its records. Within each group the
        records keep their relative source order. Empty input gives an empty
        mapping.

    Raises
    ------
    ValueError
        If ``order`` is not one of ``DISTRICT_ORDERS``.

    Examples
    --------
    >>> from src.pipeline.action_steps.data_loader import ActionStepRecord
    >>> a = ActionStepRecord("B", "1", "", "", "", "", "")
    >>> b = ActionStepRecord("A", "2", "", "", "", "", "")
    >>> list(partition_by_district([a, b]))
    ['B', 'A']
    >>> list(partition_by_district([a, b], order="lexicographic"))
    ['A', 'B']
    """
    if order not in DISTRICT_ORDERS:
        raise ValueError(
            f"Unknown district order {order!r}; expected one of {DISTRICT_ORDERS}"
        )
    groups: dict[str, list[ActionStepRecord]] = {}
    for record in records:
        groups.setdefault(record.district, []).append(record)
    if order == DISTRICT_ORDER_LEXICOGRAPHIC:
        return {district: groups[district] for district in sorted(groups)}
    return groups
