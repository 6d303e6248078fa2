"""Controller classes for user interface operations."""

from .item_edit import (
    FetchState,
    FetchStatus,
    ItemEditController,
    SubmissionState,
    SubmissionStatus,
    call_immediately,
)

__all__ = [
    "FetchState",
    "FetchStatus",
    "ItemEditController",
    "SubmissionState",
    "SubmissionStatus",
    "call_immediately",
]
