from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from ..core.enums import PostingStatus


@dataclass(frozen=True)
class Posting:
    """Clinical-rotation placement tracked by day count."""

    posting_id: str
    department: str
    start_date: date
    end_date: date
    required_days: int
    attended_days: int = 0


@dataclass(frozen=True)
class PostingEligibility:
    total_duration_days: int
    allowed_absence_days: int
    days_elapsed: int
    implied_missed_days: int
    emergency_leaves_remaining: int
    days_remaining: int
    status: PostingStatus
