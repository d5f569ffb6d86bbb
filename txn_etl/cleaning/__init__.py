"""Record validation, normalization and the cleaning stage."""

from txn_etl.cleaning.normalizer import (
    lower_trim,
    normalize_phone,
    normalize_record,
    title_case_name,
    upper_trim,
)
from txn_etl.cleaning.stage import CleaningResult, CleaningStage
from txn_etl.cleaning.validators import (
    HARD_REJECTION_RULES,
    find_rejection_reason,
    is_blank,
    is_valid_email,
)

__all__ = [
    # Validators
    "HARD_REJECTION_RULES",
    "find_rejection_reason",
    "is_blank",
    "is_valid_email",
    # Normalizer
    "lower_trim",
    "normalize_phone",
    "normalize_record",
    "title_case_name",
    "upper_trim",
    # Stage
    "CleaningResult",
    "CleaningStage",
]
