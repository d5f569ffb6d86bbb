"""Data models shared by every pipeline stage."""

from txn_etl.models.record import (
    UNKNOWN_PHONE,
    Annotation,
    AnnotationKind,
    Record,
    render_notes,
)
from txn_etl.models.statistics import RunStatistics

__all__ = [
    "UNKNOWN_PHONE",
    "Annotation",
    "AnnotationKind",
    "Record",
    "RunStatistics",
    "render_notes",
]
