# badgescan/extractors/candidates.py
from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Tuple


class FieldCategory(str, Enum):
    NAME = "name"
    TITLE = "title"
    COMPANY = "company"
    EMAIL = "email"
    PHONE = "phone"


@dataclass(frozen=True)
class Line:
    text: str                  # trimmed, never empty
    index: int                 # 0-based position among the scan's non-empty lines


@dataclass(frozen=True)
class Cand:
    line: Line
    field: FieldCategory
    value: str                 # whole line, or the matched substring for email/phone
    conf: float                # 0..1


CandidateSet = Mapping[FieldCategory, Tuple[Cand, ...]]


def build_candidate_set(cands: Iterable[Cand]) -> CandidateSet:
    """Groups candidates per category, keeping scan order; every category is present."""
    by_field: Dict[FieldCategory, List[Cand]] = {cat: [] for cat in FieldCategory}
    for c in sorted(cands, key=lambda x: x.line.index):
        by_field[c.field].append(c)
    return MappingProxyType({cat: tuple(lst) for cat, lst in by_field.items()})


def split_lines(text: str) -> List[Line]:
    rows = [l.strip() for l in (text or "").splitlines()]
    return [Line(t, i) for i, t in enumerate(t for t in rows if t)]


@dataclass(frozen=True)
class ScanResult:
    lines: Tuple[Line, ...]
    relevant: Tuple[Line, ...]
    filtered: Tuple[Line, ...]
    candidates: CandidateSet = field(default_factory=lambda: build_candidate_set(()))

    @property
    def unclaimed(self) -> Tuple[Line, ...]:
        """Relevant lines that produced no candidate in any category."""
        claimed = {c.line for lst in self.candidates.values() for c in lst}
        return tuple(l for l in self.relevant if l not in claimed)

    def to_dict(self) -> Dict[str, object]:
        return {
            "lines": [l.text for l in self.lines],
            "relevant": [{"index": l.index, "text": l.text} for l in self.relevant],
            "filtered": [{"index": l.index, "text": l.text} for l in self.filtered],
            "unclaimed": [{"index": l.index, "text": l.text} for l in self.unclaimed],
            "candidates": {
                cat.value: [
                    {"value": c.value, "conf": round(c.conf, 3), "line": c.line.index}
                    for c in lst
                ]
                for cat, lst in self.candidates.items()
            },
        }
