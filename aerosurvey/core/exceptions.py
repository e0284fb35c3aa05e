"""
Error kinds raised by the survey core.
Every failure is raised where it is detected; callers decide whether to retry.
"""
from typing import Any, List, Optional


class SurveyError(Exception):
    """Base exception for coordinate transform and path generation errors."""
    pass


class OutOfRange(SurveyError):
    """Geodetic component outside its valid domain (or not finite)."""
    pass


class InvalidParameter(SurveyError):
    """Non-positive dimension, overlap outside (0, 1), zero line count, non-finite value."""
    pass


class MissingPrecondition(SurveyError):
    """Absent origin or takeoff point, or an empty pattern."""
    pass


class Cancelled(SurveyError):
    """Chunked operation stopped by its cancellation flag. Holds the output produced so far."""

    def __init__(self, message: str = "cancelled", partial: Optional[List[Any]] = None):
        super().__init__(message)
        self.partial = list(partial or [])
