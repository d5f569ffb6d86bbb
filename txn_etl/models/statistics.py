"""
Run statistics for a single pipeline run.

Stages never write here directly; each returns its own result object and the
orchestrator folds it in.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import TYPE_CHECKING, Any, Dict, List

if TYPE_CHECKING:
    from txn_etl.cleaning.stage import CleaningResult
    from txn_etl.transformation.stage import TransformationResult


@dataclass
class RunStatistics:
    """Counters and messages accumulated over one run."""

    total_read: int = 0
    total_cleaned: int = 0
    total_rejected: int = 0
    total_flagged: int = 0
    total_loaded: int = 0

    skipped_rows: int = 0
    duplicates_removed: int = 0
    currency_conversions: int = 0

    rejected_rows: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def pass_rate(self) -> float:
        """Percentage of read records that reached the store."""
        if self.total_read == 0:
            return 0.0
        return self.total_loaded * 100.0 / self.total_read

    def record_cleaning(self, result: "CleaningResult") -> None:
        self.total_cleaned = result.cleaned_count
        self.total_rejected = result.rejected_count
        self.rejected_rows.extend(result.reasons)

    def record_transformation(self, result: "TransformationResult") -> None:
        self.total_flagged = result.flagged_count
        self.duplicates_removed = result.duplicates_removed
        self.currency_conversions = result.conversions_count
        self.warnings.extend(result.warnings)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for logging."""
        data = asdict(self)
        data["pass_rate"] = round(self.pass_rate, 1)
        return data
