"""Action step ingestion, partitioning and batching.

This package turns the raw action step table into per-district batch
documents ready to be embedded in generation prompts:

- :mod:`.data_loader` reads the CSV into immutable records.
- :mod:`.partitioner` groups records by district.
- :mod:`.batch_builder` projects groups into serializable batches.

No external service is contacted here.
"""

from .batch_builder import (
    ActionStepAttributes,
    DistrictBatch,
    batch_from_document,
    build_batch,
    build_batches,
    serialize_batch,
)
from .data_loader import (
    ActionStepRecord,
    load_action_steps,
    log_record_preview,
    read_action_step_csv,
)
from .partitioner import partition_by_district

__all__ = [
    "ActionStepAttributes",
    "ActionStepRecord",
    "DistrictBatch",
    "batch_from_document",
    "build_batch",
    "build_batches",
    "load_action_steps",
    "log_record_preview",
    "partition_by_district",
    "read_action_step_csv",
    "serialize_batch",
]
