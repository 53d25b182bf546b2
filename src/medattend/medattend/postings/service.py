from __future__ import annotations

from dataclasses import replace
from datetime import date, timedelta
from typing import Callable, Optional, Sequence

from ..common.datetime_utils import parse_iso_date, today_local
from ..common.validators import clamp_count, require_non_empty
from ..core.constants import DEFAULT_POSTING_REQUIRED_DAYS, DEFAULT_POSTING_SPAN_DAYS
from ..core.exceptions import NotFoundError, ValidationError
from ..state.snapshot import Snapshot
from ..state.store import StateStore
from ..subjects.operations import new_id
from .calculator import evaluate_posting, total_duration_days
from .model import Posting, PostingEligibility


class PostingService:
    """Use case: track clinical rotations by attended day count."""

    def __init__(
        self,
        store: StateStore,
        *,
        id_factory: Optional[Callable[[], str]] = None,
        today: Optional[Callable[[], date]] = None,
    ):
        self._store = store
        self._new_id = id_factory or new_id
        self._today = today or today_local

    def list_postings(self) -> Sequence[Posting]:
        return self._store.snapshot.postings

    def get_posting(self, posting_id: str) -> Posting:
        for p in self._store.snapshot.postings:
            if p.posting_id == posting_id:
                return p
        raise NotFoundError(f"Posting {posting_id} not found")

    def add_posting(
        self,
        *,
        department: str,
        start_date=None,
        end_date=None,
        required_days=DEFAULT_POSTING_REQUIRED_DAYS,
    ) -> Posting:
        department = require_non_empty(department, "Department")
        start = parse_iso_date(start_date) if start_date else self._today()
        end = parse_iso_date(end_date) if end_date else start + timedelta(days=DEFAULT_POSTING_SPAN_DAYS - 1)
        if end < start:
            raise ValidationError("Posting end date is before its start date")

        posting = Posting(
            posting_id=self._new_id(),
            department=department,
            start_date=start,
            end_date=end,
            required_days=0,
            attended_days=0,
        )
        posting = replace(posting, required_days=min(clamp_count(required_days, "Required days"), total_duration_days(posting)))

        self._store.apply(lambda snap: replace(snap, postings=snap.postings + (posting,)))
        return posting

    def update_attended_days(self, posting_id: str, attended_days) -> Posting:
        posting = self.get_posting(posting_id)
        days = min(clamp_count(attended_days, "Attended days"), total_duration_days(posting))
        updated = replace(posting, attended_days=days)

        def _update(snap: Snapshot) -> Snapshot:
            return replace(
                snap,
                postings=tuple(updated if p.posting_id == posting_id else p for p in snap.postings),
            )

        self._store.apply(_update)
        return updated

    def delete_posting(self, posting_id: str) -> None:
        self.get_posting(posting_id)
        self._store.apply(
            lambda snap: replace(snap, postings=tuple(p for p in snap.postings if p.posting_id != posting_id))
        )

    def evaluate(self, posting_id: str) -> PostingEligibility:
        return evaluate_posting(self.get_posting(posting_id), self._today())

    def overview(self) -> list[tuple[Posting, PostingEligibility]]:
        today = self._today()
        return [(p, evaluate_posting(p, today)) for p in self._store.snapshot.postings]
