# badgescan/extractors/orchestrator.py
from __future__ import annotations
import logging
from typing import Dict, Iterable, List, Mapping, Optional

from .candidates import Cand, CandidateSet, FieldCategory, ScanResult, build_candidate_set, split_lines
from .relevance import DEFAULT_RULES, NoiseRules, partition_lines
from .scoring import score_company, score_email, score_name, score_phone, score_title

logger = logging.getLogger(__name__)

MIN_CONFIDENCE: Mapping[FieldCategory, float] = {
    FieldCategory.NAME:    0.4,
    FieldCategory.COMPANY: 0.3,
    FieldCategory.TITLE:   0.3,
    FieldCategory.EMAIL:   0.8,
    FieldCategory.PHONE:   0.8,
}


def run_extractors(text: str, rules: NoiseRules = DEFAULT_RULES) -> ScanResult:
    """Line classifier: relevance filter, then every scorer on every relevant line."""
    lines = split_lines(text)
    relevant, filtered = partition_lines(lines, rules)

    cands: List[Cand] = []
    for pos, line in enumerate(relevant):
        for c in (
            score_email(line),
            score_phone(line),
            score_name(line, first_relevant=(pos == 0)),
            score_title(line),
            score_company(line),
        ):
            if c is not None:
                cands.append(c)

    logger.debug("classified %d lines: %d relevant, %d filtered, %d candidates",
                 len(lines), len(relevant), len(filtered), len(cands))
    return ScanResult(tuple(lines), tuple(relevant), tuple(filtered), build_candidate_set(cands))


def best_candidate(cands: Iterable[Cand], min_conf: float) -> Optional[Cand]:
    valid = [c for c in cands if c.conf > min_conf]
    if not valid:
        return None
    valid.sort(key=lambda x: (-x.conf, x.line.index))
    return valid[0]


def resolve_fields(candidates: CandidateSet,
                   thresholds: Mapping[FieldCategory, float] = MIN_CONFIDENCE) -> Dict[FieldCategory, Optional[Cand]]:
    """Field selector: best candidate strictly above threshold per category, earliest line on ties."""
    return {
        cat: best_candidate(candidates.get(cat, ()), thresholds[cat])
        for cat in FieldCategory
    }

