# badgescan/extractors/sanitizers.py
"""Allow-list sanitizers applied to finalized fields. Invalid input yields ""."""
from __future__ import annotations
import re
from typing import Any, Dict, Mapping

_SCRIPT_RE = re.compile(r"<(script|iframe|object|embed)[^>]*>.*?</\1>", re.IGNORECASE | re.DOTALL)
_TAG_RE = re.compile(r"<[^>]*>")
_JS_URL_RE = re.compile(r"javascript:", re.IGNORECASE)
_DATA_URL_RE = re.compile(r"data:(?!image/(?:png|jpeg|jpg|gif|webp))[^;]*;", re.IGNORECASE)
_HANDLER_RE = re.compile(r"on\w+\s*=", re.IGNORECASE)
_SPACES_RE = re.compile(r"\s+")

EMAIL_SHAPE_RE = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")
EMAIL_SUSPICIOUS = (
    re.compile(r"script", re.IGNORECASE),
    re.compile(r"javascript", re.IGNORECASE),
    re.compile(r"vbscript", re.IGNORECASE),
    re.compile(r"[<>]"),
    re.compile(r"\.\."),
)
PHONE_SHAPE_RE = re.compile(r"^\+?[0-9\s\-()]+$")
MIN_PHONE_DIGITS = 7
MAX_PHONE_DIGITS = 15

MAX_EMAIL_LENGTH = 254
MAX_NAME_LENGTH = 100
MAX_COMPANY_LENGTH = 150
MAX_TITLE_LENGTH = 200
MAX_TAG_LENGTH = 50
MAX_NOTE_LENGTH = 5000


def _as_str(value: Any) -> str:
    return value if isinstance(value, str) else ""


def sanitize_text(value: Any, max_length: int = 1000) -> str:
    s = _as_str(value)
    if not s:
        return ""
    s = _SCRIPT_RE.sub("", s)
    s = _TAG_RE.sub("", s)
    s = _JS_URL_RE.sub("", s)
    s = _DATA_URL_RE.sub("", s)
    s = _HANDLER_RE.sub("", s)
    s = s.strip()
    if len(s) > max_length:
        return s[:max_length].strip() + "..."
    return s


def sanitize_email(value: Any) -> str:
    s = _as_str(value).strip().lower()
    if not s or not EMAIL_SHAPE_RE.match(s):
        return ""
    if len(s) > MAX_EMAIL_LENGTH:
        return ""
    if any(p.search(s) for p in EMAIL_SUSPICIOUS):
        return ""
    return s


def sanitize_phone_number(value: Any) -> str:
    s = _as_str(value)
    if not s:
        return ""
    cleaned = re.sub(r"[^\d\s+()-]", "", s).strip()
    if not PHONE_SHAPE_RE.match(cleaned):
        return ""
    digits = sum(1 for ch in cleaned if ch.isdigit())
    if not MIN_PHONE_DIGITS <= digits <= MAX_PHONE_DIGITS:
        return ""
    return cleaned


def sanitize_name(value: Any) -> str:
    s = _as_str(value)
    s = _SPACES_RE.sub(" ", re.sub(r"[^a-zA-Z\s\-'.]", "", s)).strip()
    if not s or len(s) > MAX_NAME_LENGTH:
        return ""
    if re.fullmatch(r"[.\-'\s]+", s):
        return ""
    return s


def sanitize_job_title(value: Any) -> str:
    s = _as_str(value)
    s = _SPACES_RE.sub(" ", re.sub(r"[^a-zA-Z0-9\s\-'.&/,()]", "", s)).strip()
    return s[:MAX_TITLE_LENGTH].strip() if len(s) > MAX_TITLE_LENGTH else s


def sanitize_company_name(value: Any) -> str:
    s = _as_str(value)
    s = _SPACES_RE.sub(" ", re.sub(r"[^a-zA-Z0-9\s\-'.&,()]", "", s)).strip()
    return s[:MAX_COMPANY_LENGTH].strip() if len(s) > MAX_COMPANY_LENGTH else s


def sanitize_tag(value: Any) -> str:
    s = re.sub(r"[^a-zA-Z0-9\-_]", "", _as_str(value)).lower().strip()
    return s[:MAX_TAG_LENGTH]


def sanitize_note(value: Any) -> str:
    return sanitize_text(value, MAX_NOTE_LENGTH)


SANITIZERS = {
    "name":    sanitize_name,
    "company": sanitize_company_name,
    "title":   sanitize_job_title,
    "email":   sanitize_email,
    "phone":   sanitize_phone_number,
}


def sanitize_contact(fields: Mapping[str, Any]) -> Dict[str, str]:
    """
    ExtractedContact from a finalized assignment: `name` is always present
    (possibly ""), optional fields only when they survive sanitization.
    """
    if not isinstance(fields, Mapping):
        return {"name": ""}
    out: Dict[str, str] = {"name": sanitize_name(fields.get("name"))}
    for key in ("company", "title", "email", "phone"):
        v = SANITIZERS[key](fields.get(key))
        if v:
            out[key] = v
    return out
