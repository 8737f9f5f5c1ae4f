# badgescan/extractors/scoring.py
"""
One scorer per field category. Each takes a relevant Line and returns a Cand
or None; confidence is accumulated additively, in the order written here.
"""
from __future__ import annotations
from typing import Optional

from .candidates import Cand, FieldCategory, Line
from .patterns import (
    EMAIL_RE, PHONE_RE, NAME_RE, FIRST_LAST_RE, LEGAL_ENTITY_RE, SENIORITY_RE,
    TITLE_PATTERNS, COMPANY_SUFFIX_RE, COMPANY_SECTOR_RE, COMPANY_KIND_RE,
)

EMAIL_CONF = 0.95
PHONE_CONF = 0.90
MAX_HEURISTIC_CONF = 0.9
COMPANY_MIN_CONF = 0.3


def _clamp(conf: float) -> float:
    return max(0.0, min(MAX_HEURISTIC_CONF, conf))


def _near_top(line: Line) -> bool:
    return 1 <= line.index <= 3


def _is_badge_caps(text: str) -> bool:
    return text == text.upper() and any(ch.isalpha() for ch in text)


def name_form(text: str) -> str:
    # badges print names in capitals; judge the shape on the title-cased form
    return text.title() if _is_badge_caps(text) else text


def looks_like_name(text: str) -> bool:
    return bool(NAME_RE.match(name_form(text)))


def looks_like_title(text: str) -> bool:
    return any(p.search(text) for p in TITLE_PATTERNS)


def score_email(line: Line) -> Optional[Cand]:
    m = EMAIL_RE.search(line.text)
    if not m:
        return None
    return Cand(line, FieldCategory.EMAIL, m.group(0), EMAIL_CONF)


def score_phone(line: Line) -> Optional[Cand]:
    m = PHONE_RE.search(line.text)
    if not m:
        return None
    return Cand(line, FieldCategory.PHONE, m.group(0), PHONE_CONF)


def score_name(line: Line, first_relevant: bool = False) -> Optional[Cand]:
    text = line.text
    form = name_form(text)
    if not NAME_RE.match(form):
        return None
    words = text.split()
    conf = 0.0
    if first_relevant:
        conf += 0.4
    if _is_badge_caps(text) and 4 <= len(text) <= 30:
        conf += 0.3
    if FIRST_LAST_RE.match(form):
        conf += 0.5
    if len(words) == 2:
        conf += 0.2
    if len(words) > 3:
        conf -= 0.3
    if LEGAL_ENTITY_RE.search(text):
        conf -= 0.5
    if SENIORITY_RE.search(text):
        conf -= 0.4
    conf = _clamp(conf)
    if conf <= 0:
        return None
    return Cand(line, FieldCategory.NAME, text, conf)


def score_title(line: Line) -> Optional[Cand]:
    text = line.text
    hits = sum(1 for p in TITLE_PATTERNS if p.search(text))
    if not hits:
        return None
    conf = 0.0
    for _ in range(hits):
        conf += 0.4
    if _near_top(line):
        conf += 0.2
    if len(text) < 50:
        conf += 0.1
    if len(text) > 60:
        conf -= 0.3
    conf = _clamp(conf)
    if conf <= 0:
        return None
    return Cand(line, FieldCategory.TITLE, text, conf)


def score_company(line: Line) -> Optional[Cand]:
    text = line.text
    conf = 0.0
    if looks_like_name(text):
        conf -= 0.5
    if looks_like_title(text):
        conf -= 0.4
    if COMPANY_SUFFIX_RE.search(text):
        conf += 0.5
    if COMPANY_SECTOR_RE.search(text):
        conf += 0.4
    if COMPANY_KIND_RE.search(text):
        conf += 0.3
    if _near_top(line):
        conf += 0.2
    if 8 < len(text) < 40:
        conf += 0.1
    if len(text) > 50:
        conf -= 0.2
    if conf <= COMPANY_MIN_CONF:
        return None
    return Cand(line, FieldCategory.COMPANY, text, _clamp(conf))
