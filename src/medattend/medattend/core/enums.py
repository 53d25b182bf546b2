from __future__ import annotations

from enum import Enum


class ComponentType(str, Enum):
    """Trackable attendance category within a subject."""

    THEORY = "Theory"
    PRACTICAL = "Practical"
    TUTORIAL = "Tutorial"
    SEMINAR_VIVA = "Seminar/Viva"


class RiskLevel(str, Enum):
    SAFE = "SAFE"
    BORDERLINE = "BORDERLINE"
    DANGER = "DANGER"


class EntryStatus(str, Enum):
    """Status stored on a history entry."""

    PRESENT = "present"
    ABSENT = "absent"


class CellState(str, Enum):
    """Logical state of one (subject, component, date) calendar cell."""

    NONE = "none"
    PRESENT = "present"
    ABSENT = "absent"


class DayState(str, Enum):
    """Colour bucket for a calendar day."""

    FULL = "FULL"
    MISSED = "MISSED"
    MIXED = "MIXED"
    OFF = "OFF"


class EntryType(str, Enum):
    PERCENTAGE = "percentage"
    COUNTS = "counts"


class StartMode(str, Enum):
    FRESH = "fresh"
    CURRENT = "current"


class PostingStatus(str, Enum):
    COMPLETE = "COMPLETE"
    INCOMPLETE = "INCOMPLETE"
    ACTIVE = "ACTIVE"
