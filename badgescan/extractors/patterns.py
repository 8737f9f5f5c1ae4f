# badgescan/extractors/patterns.py
from __future__ import annotations
import re

PATTERNS_VERSION = "v1.0.0"

# ---- contact info (pattern-matched, fixed confidence)
EMAIL_RE = re.compile(r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b")
PHONE_RE = re.compile(r"(?:\+?1[-.\s]?)?\(?([0-9]{3})\)?[-.\s]?([0-9]{3})[-.\s]?([0-9]{4})")

# ---- name shape
NAME_RE = re.compile(r"^[A-Z][a-z]+(?:\s+[A-Z][a-z]*\.?)*(?:\s+[A-Z][a-z]+)*$")
FIRST_LAST_RE = re.compile(r"^[A-Z][a-z]+ [A-Z][a-z]+$")
LEGAL_ENTITY_RE = re.compile(r"\b(Inc|LLC|Corp|Ltd|Company|Technologies|Solutions|Systems|Labs)\b", re.IGNORECASE)
SENIORITY_RE = re.compile(r"\b(Manager|Director|Engineer|CEO|CTO|President)\b", re.IGNORECASE)

# ---- job titles (each match adds to the title score)
TITLE_PATTERNS = (
    re.compile(
        r"\b(CEO|CTO|CFO|COO|VP|Vice President|President|Director|Manager|Lead|Senior|Principal|Staff"
        r"|Associate|Specialist|Analyst|Engineer|Developer|Designer|Architect|Consultant|Coordinator)\b",
        re.IGNORECASE,
    ),
    re.compile(
        r"\b(Software|Hardware|Product|Marketing|Sales|Operations|Finance|Human Resources|HR|Engineering"
        r"|Design|Research|Data|Security|DevOps)\s+(Engineer|Manager|Director|Lead|Specialist|Analyst)\b",
        re.IGNORECASE,
    ),
    re.compile(r"\b(Head of|Chief)\s+\w+", re.IGNORECASE),
    re.compile(r"\bDr\.\s+[A-Z]", re.IGNORECASE),
)

# ---- company markers, strongest first; suffix and sector are case-sensitive ("@corpmail" is no company)
COMPANY_SUFFIX_RE = re.compile(r"\b(?:Inc|LLC|Corp|Ltd)")
COMPANY_SECTOR_RE = re.compile(r"\b(?:Technologies|Solutions|Systems|Labs)\b")
COMPANY_KIND_RE = re.compile(r"\b(?:Company|Group|Partners|Enterprises|Industries|Services)\b", re.IGNORECASE)

# ---- noise tables (relevance filter)
MARKETING_PHRASES = frozenset({
    "innovation", "excellence", "success", "leading", "trusted",
    "premier", "professional", "quality", "experience", "expert",
    "committed", "dedicated", "passion", "vision", "mission", "values",
    "future", "tomorrow", "today", "since", "established", "founded",
    "your", "our", "we", "us", "you", "the best", "world class",
    "connecting", "building", "creating", "delivering", "providing",
})
TAGLINE_VERBS = ("making", "building", "creating", "connecting",
                 "delivering", "providing", "enabling", "empowering")
URL_MARKERS = ("www.", ".com", ".org", ".net", "http")
EVENT_WORDS = ("conference", "summit", "expo", "event", "attendee", "speaker", "session")

CONTACT_HINT_RE = re.compile(r"@|\d{3}")
