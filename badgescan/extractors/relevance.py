# badgescan/extractors/relevance.py
from __future__ import annotations
import re
from dataclasses import dataclass, field
from typing import FrozenSet, Iterable, List, Pattern, Tuple

from .candidates import Line
from .patterns import (
    MARKETING_PHRASES, TAGLINE_VERBS, URL_MARKERS, EVENT_WORDS, CONTACT_HINT_RE,
)

MIN_LINE_LENGTH = 2
TAGLINE_MIN_LENGTH = 20


def _words_re(words: Iterable[str]) -> Pattern[str]:
    alts = "|".join(re.escape(w) for w in sorted(words, key=len, reverse=True))
    return re.compile(rf"\b(?:{alts})\b", re.IGNORECASE)


@dataclass(frozen=True)
class NoiseRules:
    """Word tables for the relevance filter, one per rule."""
    marketing: FrozenSet[str] = MARKETING_PHRASES
    tagline_verbs: Tuple[str, ...] = TAGLINE_VERBS
    url_markers: Tuple[str, ...] = URL_MARKERS
    event_words: Tuple[str, ...] = EVENT_WORDS
    _marketing_re: Pattern[str] = field(init=False, repr=False, compare=False)
    _tagline_re: Pattern[str] = field(init=False, repr=False, compare=False)
    _event_re: Pattern[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_marketing_re", _words_re(self.marketing))
        object.__setattr__(self, "_tagline_re", _words_re(self.tagline_verbs))
        object.__setattr__(self, "_event_re", _words_re(self.event_words))


DEFAULT_RULES = NoiseRules()


def noise_reason(text: str, rules: NoiseRules = DEFAULT_RULES) -> str | None:
    """Name of the first rule that rejects `text`, or None for a relevant line."""
    if len(text) < MIN_LINE_LENGTH:
        return "too_short"
    if rules.marketing and rules._marketing_re.search(text) and not CONTACT_HINT_RE.search(text):
        return "marketing"
    if rules.tagline_verbs and rules._tagline_re.search(text) and len(text) > TAGLINE_MIN_LENGTH:
        return "tagline"
    low = text.lower()
    if any(m in low for m in rules.url_markers) and "@" not in text:
        return "url"
    if rules.event_words and rules._event_re.search(text):
        return "event"
    return None


def is_relevant(text: str, rules: NoiseRules = DEFAULT_RULES) -> bool:
    return noise_reason(text, rules) is None


def partition_lines(lines: Iterable[Line], rules: NoiseRules = DEFAULT_RULES) -> Tuple[List[Line], List[Line]]:
    relevant: List[Line] = []
    filtered: List[Line] = []
    for ln in lines:
        (relevant if is_relevant(ln.text, rules) else filtered).append(ln)
    return relevant, filtered
