# badgescan/extractors/io_image.py
from __future__ import annotations
import base64
import logging
import re
from pathlib import Path
from typing import Any, Dict, List, Tuple

import pytesseract
import requests
from PIL import Image, ImageOps
from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception_type, before_sleep_log

from badgescan import config

logger = logging.getLogger(__name__)

# PaddleOCR est optionnel : import paresseux
_PADDLE_OCR = None  # type: ignore

MAX_IMAGE_BYTES = 10 * 1024 * 1024
TRUNCATION_MARKER = "\n[Text truncated]"

_SCRIPT_RE = re.compile(r"<script[^>]*>.*?</script>", re.IGNORECASE | re.DOTALL)
_TAG_RE = re.compile(r"<[^>]*>")
_URL_SCHEME_RE = re.compile(r"(?:javascript|data):", re.IGNORECASE)

_MIME_BY_EXT = {".jpg": "jpg", ".jpeg": "jpg", ".png": "png"}


def _tess_lang() -> str:
    return config.OCR_LANG


def _tess_config() -> str:
    # LSTM, sparse text (badges are a few scattered lines), no dictionary auto-corrections
    return (
        "--oem 1 --psm 11 "
        "-c load_system_dawg=0 -c load_freq_dawg=0 "
        "-c tessedit_char_blacklist=\"|{}[]<>\\~^*_`\""
    )


def sanitize_ocr_text(text: str | None, max_length: int = config.MAX_OCR_TEXT_LENGTH) -> str:
    """Strips markup from OCR output and caps its length."""
    if not text or not isinstance(text, str):
        return ""
    clean = _SCRIPT_RE.sub("", text)
    clean = _TAG_RE.sub("", clean)
    clean = _URL_SCHEME_RE.sub("", clean)
    clean = clean.replace("\u00a0", " ").strip()
    if len(clean) > max_length:
        logger.info("OCR text truncated from %d characters", len(clean))
        return clean[:max_length] + TRUNCATION_MARKER
    return clean


def validate_image_bytes(data: bytes | None) -> bool:
    if not data:
        return False
    if len(data) > MAX_IMAGE_BYTES:
        logger.error("Image data too large for OCR processing: %d bytes", len(data))
        return False
    return True


def ocr_image_to_text(p: Path) -> Tuple[str, Dict]:
    info: Dict = {"engine": "pytesseract", "lang": _tess_lang()}
    try:
        img = Image.open(str(p))
        img = ImageOps.exif_transpose(img)
        img = ImageOps.grayscale(img)
        txt = pytesseract.image_to_string(img, lang=_tess_lang(), config=_tess_config()) or ""
        return sanitize_ocr_text(txt), info
    except Exception as e:
        logger.warning("tesseract failed on %s: %s", p, e)
        info["error"] = f"ocr_error:{e}"
        return "", info


# --------- PaddleOCR ---------

def _get_paddle(lang: str = "en"):
    global _PADDLE_OCR
    if _PADDLE_OCR is None:
        from paddleocr import PaddleOCR  # import tardif
        _PADDLE_OCR = PaddleOCR(
            lang=lang, use_angle_cls=True, det=True, rec=True, show_log=False
        )
    return _PADDLE_OCR


def image_paddle_text(p: Path) -> Tuple[str, Dict]:
    info: Dict = {"engine": "paddleocr", "lang": "en"}
    try:
        import numpy as np
        ocr = _get_paddle(lang="en")
        img = Image.open(str(p)).convert("L")
        arr = np.array(img)
        lines: List[str] = []
        result = ocr.ocr(arr, cls=True)
        # result: list[pages] -> list[[bbox, (text, score)], ...]
        if result and result[0]:
            for det in result[0]:
                text, score = det[1]
                if text and score >= 0.5:
                    lines.append(text)
        return sanitize_ocr_text("\n".join(lines)), info
    except Exception as e:
        logger.warning("paddleocr failed on %s: %s", p, e)
        info["error"] = f"paddle_error:{e}"
        return "", info


# --------- OCR.space (remote) ---------

@retry(
    stop=stop_after_attempt(config.OCR_MAX_RETRIES),
    wait=wait_exponential(multiplier=1, min=1, max=8),
    retry=retry_if_exception_type(requests.RequestException),
    before_sleep=before_sleep_log(logger, logging.WARNING),
    reraise=True,
)
def _post_ocr_space(payload: Dict[str, str]) -> Dict[str, Any]:
    """One OCR.space request; network errors, timeouts and non-2xx are retried."""
    headers = {"apikey": config.OCR_SPACE_API_KEY or "", "User-Agent": config.USER_AGENT}
    resp = requests.post(config.OCR_SPACE_ENDPOINT, data=payload, headers=headers, timeout=config.OCR_TIMEOUT)
    resp.raise_for_status()
    return resp.json()


def ocr_space_text(p: Path) -> Tuple[str, Dict]:
    info: Dict = {"engine": "ocrspace", "lang": _tess_lang()}
    if not config.OCR_SPACE_API_KEY:
        info["error"] = "missing_api_key"
        return "", info
    try:
        data = Path(p).read_bytes()
        if not validate_image_bytes(data):
            info["error"] = "invalid_image_data"
            return "", info
        filetype = _MIME_BY_EXT.get(Path(p).suffix.lower(), "jpg")
        payload = {
            "base64Image": f"data:image/{'png' if filetype == 'png' else 'jpeg'};base64,"
                           + base64.b64encode(data).decode("ascii"),
            "language": _tess_lang(),
            "detectOrientation": "true",
            "scale": "true",
            "OCREngine": "2",
            "filetype": filetype,
            "isTable": "false",
        }
        body = _post_ocr_space(payload)
    except Exception as e:
        logger.error("OCR.space request failed: %s", e)
        info["error"] = f"ocr_error:{type(e).__name__}:{e}"
        return "", info

    if body.get("IsErroredOnProcessing"):
        msg = body.get("ErrorMessage") or "OCR processing failed"
        if isinstance(msg, list):
            msg = "; ".join(str(m) for m in msg)
        info["error"] = f"ocr_error:{msg}"
        return "", info

    results = body.get("ParsedResults") or []
    raw = (results[0] or {}).get("ParsedText") if results else None
    if not raw:
        info["error"] = "no_text_detected"
        return "", info
    overlay = (results[0].get("TextOverlay") or {}).get("HasOverlay")
    info["confidence"] = 0.8 if overlay else 0.6
    return sanitize_ocr_text(raw), info
