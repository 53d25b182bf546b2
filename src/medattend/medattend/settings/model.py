from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.constants import DEFAULT_BASELINE_PCT, MBBS_YEARS
from ..core.enums import EntryType, StartMode


@dataclass(frozen=True)
class UserSettings:
    """Single per-user configuration record (not per subject)."""

    name: str = ""
    bio: str = "Future MD/MS"
    college: str = ""
    year: str = MBBS_YEARS[0]
    onboarded: bool = False
    start_mode: StartMode = StartMode.FRESH
    default_baseline_percent: Optional[int] = DEFAULT_BASELINE_PCT
    default_attended_count: Optional[int] = 0
    default_total_count: Optional[int] = 0
    entry_type: EntryType = EntryType.PERCENTAGE
    is_scholarship: bool = False
    reminders_enabled: bool = True
    theme: str = "clinical"
    profile_photo: Optional[str] = None
