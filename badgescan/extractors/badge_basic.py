# badgescan/extractors/badge_basic.py
from __future__ import annotations
import logging
from pathlib import Path
from typing import Any, Callable, Dict, Mapping, Optional, Tuple

from .patterns import PATTERNS_VERSION
from .io_image import ocr_image_to_text, image_paddle_text, ocr_space_text
from .orchestrator import run_extractors, resolve_fields
from .relevance import DEFAULT_RULES, NoiseRules

logger = logging.getLogger(__name__)

IMAGE_EXTS = (".png", ".jpg", ".jpeg")

ENGINES: Dict[str, Callable[[Path], Tuple[str, Dict]]] = {
    "tesseract": ocr_image_to_text,
    "paddle":    image_paddle_text,
    "ocrspace":  ocr_space_text,
}

# ordre d'essai en mode "auto"
AUTO_ORDER = ("tesseract", "ocrspace", "paddle")


def _score_fields(fields: Mapping[str, Any]) -> int:
    return sum(1 for v in fields.values() if v)


def extract_text(text: str, rules: NoiseRules = DEFAULT_RULES) -> Dict[str, Any]:
    """Classifier + selector over raw scan text: best guesses plus the full candidate report."""
    scan = run_extractors(text or "", rules)
    picked = resolve_fields(scan.candidates)
    fields = {cat.value: (c.value if c else None) for cat, c in picked.items()}
    confs = {
        cat.value: {"value": c.value, "conf": round(c.conf, 3), "line": c.line.index}
        for cat, c in picked.items() if c
    }
    return {"fields": fields, "confs": confs, "scan": scan.to_dict()}


def _run_engine(name: str, p: Path) -> Tuple[str, Dict]:
    try:
        return ENGINES[name](p)
    except Exception as e:
        logger.exception("OCR engine %s crashed", name)
        return "", {"engine": name, "error": f"{type(e).__name__}:{e}"}


def extract_badge(path: str, engine: str = "auto") -> Dict[str, Any]:
    """
    engine: "auto" | "tesseract" | "paddle" | "ocrspace"
    In auto mode engines are tried in AUTO_ORDER until one yields at least two fields.
    """
    p = Path(path)
    ext = p.suffix.lower()
    result: Dict[str, Any] = {"meta": {"version": PATTERNS_VERSION, "source": p.name}, "text": "", "fields": {}}

    if ext not in IMAGE_EXTS:
        result["meta"]["warning"] = f"unsupported_ext:{ext}"
        return result

    if engine != "auto" and engine not in ENGINES:
        result["meta"]["warning"] = f"unknown_engine:{engine}"
        return result

    order = AUTO_ORDER if engine == "auto" else (engine,)
    best: Optional[Dict[str, Any]] = None
    best_text = ""
    tried: Dict[str, Any] = {}
    for name in order:
        txt, info = _run_engine(name, p)
        tried[name] = info
        if not txt.strip():
            continue
        extraction = extract_text(txt)
        if best is None or _score_fields(extraction["fields"]) > _score_fields(best["fields"]):
            best, best_text = extraction, txt
            result["meta"]["engine"] = name
        if _score_fields(best["fields"]) >= 2:
            break
        logger.info("engine %s found %d fields, trying next", name, _score_fields(extraction["fields"]))

    result["meta"]["io_info"] = tried
    if best is None:
        result["meta"]["warning"] = "no_text_detected"
        return result
    result["text"] = best_text
    result.update(best)
    return result
