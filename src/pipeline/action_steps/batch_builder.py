"""Build and serialize per-district batch documents.

A batch is the unit handed to the text generation service for one district:
the district name plus the ordered attribute sets of its action steps. The
document form is::

    {
      "district_name": "...",
      "action_steps": [
        {"step": "...", "description": "...", "start": "...",
         "target": "...", "strategy": "...", "resources": "..."},
        ...
      ]
    }

Serialization uses ``json`` with a fixed key order, so the same batch always
produces the same text.
"""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from dataclasses import asdict, dataclass
from typing import Any

from src.exceptions import SerializationError

from .data_loader import ActionStepRecord


@dataclass(frozen=True)
class ActionStepAttributes:
    """Projection of an :class:`ActionStepRecord` without its district."""

    step: str
    description: str
    start: str
    target: str
    strategy: str
    resources: str

    @classmethod
    def from_record(cls, record: ActionStepRecord) -> ActionStepAttributes:
        return cls(
            step=record.step,
            description=record.description,
            start=record.start,
            target=record.target,
            strategy=record.strategy,
            resources=record.resources,
        )


@dataclass(frozen=True)
class DistrictBatch:
    """Serializable batch of action steps for one district."""

    district_name: str
    action_steps: tuple[ActionStepAttributes, ...]

    def to_document(self) -> dict[str, Any]:
        """Return the batch as a plain, JSON-compatible dictionary."""
        return {
            "district_name": self.district_name,
            "action_steps": [asdict(step) for step in self.action_steps],
        }


def build_batch(district: str, records: Sequence[ActionStepRecord]) -> DistrictBatch:
    """Project one district group into a :class:`DistrictBatch`.

    Field values are copied verbatim; order follows ``records``.
    """
    return DistrictBatch(
        district_name=district,
        action_steps=tuple(ActionStepAttributes.from_record(r) for r in records),
    )


def build_batches(
    groups: Mapping[str, Sequence[ActionStepRecord]],
) -> list[DistrictBatch]:
    """Build one batch per district, in the mapping's iteration order."""
    return [build_batch(district, records) for district, records in groups.items()]


def serialize_batch(batch: DistrictBatch) -> str:
    """Render a batch to its JSON document text.

    Parameters
    ----------
    batch : DistrictBatch
        Batch to serialize.

    Returns
    -------
    str
        Indented JSON document. Non-ASCII characters are kept as-is.

    Raises
    ------
    SerializationError
        If any value in the batch cannot be represented in JSON.
    """
    try:
        return json.dumps(batch.to_document(), ensure_ascii=False, indent=2)
    except (TypeError, ValueError) as exc:
        raise SerializationError(
            f"Could not serialize batch for district {batch.district_name!r}: {exc}",
            context={"district": batch.district_name},
        ) from exc


def batch_from_document(document: str | Mapping[str, Any]) -> DistrictBatch:
    """Rebuild a :class:`DistrictBatch` from its document form.

    Parameters
    ----------
    document : str or Mapping[str, Any]
        JSON text produced by :func:`serialize_batch`, or the already decoded
        dictionary.

    Returns
    -------
    DistrictBatch

    Raises
    ------
    SerializationError
        If the text is not valid JSON or does not have the batch shape.
    """
    try:
        data = json.loads(document) if isinstance(document, str) else document
        return DistrictBatch(
            district_name=data["district_name"],
            action_steps=tuple(
                ActionStepAttributes(**step) for step in data["action_steps"]
            ),
        )
    except (json.JSONDecodeError, KeyError, TypeError) as exc:
        raise SerializationError(f"Invalid batch document: {exc}") from exc
