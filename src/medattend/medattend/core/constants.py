"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from .enums import ComponentType

# Margin below this is DANGER; between it and 0 is BORDERLINE.
BORDERLINE_FLOOR = -2

# Eligibility score (presentation heuristic only)
SCORE_MAX = 100
SCORE_DANGER_PENALTY = 15
SCORE_LOW_POOLED_PENALTY = 20
SCORE_LOW_POOLED_THRESHOLD = 75.0

DEFAULT_REQUIRED_PCT = {
    ComponentType.THEORY: 75,
    ComponentType.PRACTICAL: 80,
    ComponentType.TUTORIAL: 75,
    ComponentType.SEMINAR_VIVA: 75,
}

# Scholarship scheme (MYSY) raises theory/practical minimums.
STANDARD_THEORY_PCT = 75
STANDARD_PRACTICAL_PCT = 80
SCHOLARSHIP_THEORY_PCT = 80
SCHOLARSHIP_PRACTICAL_PCT = 85

DEFAULT_BASELINE_PCT = 75
BASELINE_TOTAL = 100

DEFAULT_POSTING_REQUIRED_DAYS = 12
DEFAULT_POSTING_SPAN_DAYS = 14

DEFAULT_SAVE_DEBOUNCE_SECONDS = 1.0
DEFAULT_SAVE_RETRIES = 1

ASSISTANT_FALLBACK_REPLY = (
    "Sorry, Doctor. My brain is a bit foggy from all the night shifts. "
    "Can you try asking again?"
)

MBBS_YEARS = [
    "1st Prof",
    "2nd Prof",
    "3rd Prof (Part 1)",
    "3rd Prof (Part 2) / Final Prof",
]

PROF_SUBJECTS = {
    "1st Prof": ["Anatomy", "Physiology", "Biochemistry"],
    "2nd Prof": ["Pharmacology", "Pathology", "Microbiology", "Forensic Medicine"],
    "3rd Prof (Part 1)": ["Ophthalmology", "ENT", "Community Medicine"],
    "3rd Prof (Part 2) / Final Prof": ["Medicine", "Surgery", "Obstetrics & Gynecology", "Pediatrics"],
}

SUBJECT_ALIASES = {
    "Gross Anatomy": "Anatomy",
    "Histology": "Anatomy",
    "Dissection": "Anatomy",
    "PSM": "Community Medicine",
    "Forensic": "Forensic Medicine & Toxicology",
    "Path": "Pathology",
    "Micro": "Microbiology",
    "Med": "Medicine",
    "Surg": "Surgery",
    "OBG": "Obstetrics & Gynecology",
}
