"""
Input guards.
Rejects data the estimator cannot use before any computation starts,
and turns those rejections into messages a user can act on.
"""
from typing import Iterable, Optional

from nof1_engine.config import MIN_RECORDS


class InsufficientDataError(ValueError):
    """Raised when the study has fewer daily records than the statistical floor."""

    def __init__(self, n_records: int, min_records: int = MIN_RECORDS):
        self.n_records = n_records
        self.min_records = min_records
        super().__init__(
            f"ITE estimation needs at least {min_records} days of data, got {n_records}. "
            f"Collect at least {self.days_needed} more day(s) of data."
        )

    @property
    def days_needed(self) -> int:
        return max(self.min_records - self.n_records, 0)


class UnknownVariableError(ValueError):
    """A nutrient or outcome key outside the fixed catalog."""

    def __init__(self, kind: str, keys: Iterable[str]):
        self.kind = kind
        self.keys = sorted(keys)
        super().__init__(f"Unknown {kind} key(s): {', '.join(self.keys)}")


class RecordValidationError(ValueError):
    """A daily record is malformed (missing keys, bad values, bad date)."""

    def __init__(self, message: str, record_index: Optional[int] = None):
        self.record_index = record_index
        if record_index is not None:
            message = f"record {record_index}: {message}"
        super().__init__(message)


def check_record_count(n_records: int, min_records: int = MIN_RECORDS) -> None:
    """Raise InsufficientDataError if fewer than min_records days were supplied."""
    if n_records < min_records:
        raise InsufficientDataError(n_records, min_records)


def describe_insufficient_data(error: InsufficientDataError) -> str:
    """User-facing text for an InsufficientDataError."""
    if error.n_records == 0:
        return (
            "No daily records were found. "
            f"Log nutrition and sleep data for at least {error.min_records} days to get a personal analysis."
        )
    return (
        f"Only {error.n_records} day(s) of data so far. "
        f"Collect at least {error.days_needed} more day(s) of data "
        f"({error.min_records} minimum) to estimate your personal nutrient effects."
    )
