"""
LiftLedger - workout analytics engine.

Normalizes stored workout and day documents and computes totals, streaks,
personal records, leaderboards and remote progress insights over them.
"""

__version__ = "0.1.0"

from .exceptions import (
    ErrorCode,
    LiftLedgerError,
    ValidationError,
    RecordValidationError,
    AuthorizationError,
    InsightServiceError,
    InsightRequestError,
    InsightTimeoutError,
    InsightNetworkError,
    InsightHTTPError,
    InsightResponseError,
)
from .normalization import (
    normalize_exercise,
    normalize_workout,
    normalize_day,
    normalize_records,
    normalize_date,
    workouts_to_days,
)

__all__ = [
    "__version__",
    # Exceptions
    "ErrorCode",
    "LiftLedgerError",
    "ValidationError",
    "RecordValidationError",
    "AuthorizationError",
    "InsightServiceError",
    "InsightRequestError",
    "InsightTimeoutError",
    "InsightNetworkError",
    "InsightHTTPError",
    "InsightResponseError",
    # Normalization
    "normalize_exercise",
    "normalize_workout",
    "normalize_day",
    "normalize_records",
    "normalize_date",
    "workouts_to_days",
]
