"""Layout error kinds.

Validation errors (bad dates, inverted intervals) are local: ingestion
catches them per item and turns them into warnings. ``EmptyDatasetError``
is domain-level and halts layout construction.
"""

from __future__ import annotations


class LayoutError(ValueError):
    """Base class for layout engine failures."""

    code = "LAYOUT_ERROR"


class InvalidDateInput(LayoutError):
    """A start/end value could not be parsed as a calendar date."""

    code = "INVALID_DATE"

    def __init__(self, field: str, value: object) -> None:
        self.field = field
        self.value = value
        super().__init__(f"Invalid {field} date: {value!r}")


class InvertedInterval(LayoutError):
    """An item's end precedes its start."""

    code = "INVERTED_INTERVAL"


class EmptyDatasetError(LayoutError):
    """No items to derive a display domain from."""

    code = "EMPTY_DATASET"

    def __init__(self, message: str = "Cannot compute domain: dataset has no items") -> None:
        super().__init__(message)


class InvalidDataset(LayoutError):
    """The dataset's overall shape is unusable (not per-item problems)."""

    code = "INVALID_DATASET"
