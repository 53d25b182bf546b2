from __future__ import annotations

from datetime import date

from ..common.datetime_utils import days_between
from ..core.enums import PostingStatus
from .model import Posting, PostingEligibility


def total_duration_days(posting: Posting) -> int:
    """Inclusive day count of the rotation."""
    return days_between(posting.start_date, posting.end_date) + 1


def evaluate_posting(posting: Posting, today: date) -> PostingEligibility:
    """Day-count margin for a rotation.

    `implied_missed_days` is not floored: attending more days than have
    elapsed (e.g. logging ahead) shows up as a negative value and raises the
    remaining leave figure accordingly.
    """
    duration = total_duration_days(posting)
    allowed = duration - posting.required_days
    elapsed = max(0, days_between(posting.start_date, today))
    missed = elapsed - posting.attended_days
    remaining = days_between(today, posting.end_date)

    if posting.attended_days >= posting.required_days:
        status = PostingStatus.COMPLETE
    elif remaining < 0:
        status = PostingStatus.INCOMPLETE
    else:
        status = PostingStatus.ACTIVE

    return PostingEligibility(
        total_duration_days=duration,
        allowed_absence_days=allowed,
        days_elapsed=elapsed,
        implied_missed_days=missed,
        emergency_leaves_remaining=allowed - missed,
        days_remaining=remaining,
        status=status,
    )
