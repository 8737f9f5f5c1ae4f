# badgescan/main.py
from __future__ import annotations
import logging
import os
import uuid
from pathlib import Path
from typing import Any, Mapping, Tuple
from flask import Flask, request, jsonify
from flask_cors import CORS
from werkzeug.exceptions import RequestEntityTooLarge
from werkzeug.utils import secure_filename

from badgescan import config
from badgescan.extractors.assignment import AssignmentSession
from badgescan.extractors.badge_basic import IMAGE_EXTS, ENGINES, extract_badge, extract_text
from badgescan.extractors.candidates import FieldCategory
from badgescan.extractors.orchestrator import run_extractors
from badgescan.extractors.sanitizers import sanitize_contact

logger = logging.getLogger(__name__)


def create_app(instance_path: str | None = None) -> Flask:
    logging.basicConfig(
        level=getattr(logging, str(config.LOG_LEVEL).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = Flask(__name__, instance_path=instance_path)
    app.config["MAX_CONTENT_LENGTH"] = config.MAX_UPLOAD_MB * 1024 * 1024
    CORS(app)

    try:
        (Path(app.instance_path) / "uploads").mkdir(parents=True, exist_ok=True)
    except OSError:
        logger.warning("could not create upload dir under %s", app.instance_path)

    @app.get("/")
    def root():
        return jsonify({"ok": True, "service": "badgescan", "path": "/"}), 200

    @app.get("/health")
    def health():
        return jsonify({"ok": True}), 200

    @app.get("/healthz")
    def healthz():
        return jsonify({"ok": True, "service": "badgescan"}), 200

    @app.get("/debug/info")
    def debug_info():
        import shutil, sys
        bins = {
            "tesseract": shutil.which("tesseract") or "",
            "python": sys.executable,
            "port": os.getenv("PORT", ""),
            "ocrspace_key": bool(config.OCR_SPACE_API_KEY),
        }
        return jsonify({"ok": True, "bins": bins}), 200

    @app.errorhandler(RequestEntityTooLarge)
    def too_large(_e):
        return _json_err("too_large", f"Fichier trop volumineux (max {config.MAX_UPLOAD_MB} Mo)", 413)

    @app.post("/scan")
    def api_scan():
        file = request.files.get("file")
        if not file or not getattr(file, "filename", ""):
            return _json_err("bad_request", "Aucun fichier reçu", 400)
        ext = Path(file.filename).suffix.lower()
        if ext not in IMAGE_EXTS:
            return _json_err("unsupported_type", f"Extension non supportée: {ext}", 415)
        engine = (request.args.get("engine") or config.OCR_ENGINE).lower()   # auto | tesseract | paddle | ocrspace
        if engine != "auto" and engine not in ENGINES:
            return _json_err("bad_request", f"Moteur OCR inconnu: {engine}", 400)

        dest = Path(app.instance_path) / "uploads" / f"{uuid.uuid4().hex}_{secure_filename(file.filename)}"
        try:
            dest.parent.mkdir(parents=True, exist_ok=True)
            file.save(dest)
            data = extract_badge(str(dest), engine=engine)
        except Exception as e:
            logger.exception("scan failed")
            return _json_err("internal_error", str(e), 500)
        finally:
            dest.unlink(missing_ok=True)

        if not data.get("text"):
            return jsonify({"ok": False, "error": {"code": "no_text", "message": "Aucun texte extrait de l'image"},
                            "meta": data.get("meta") or {}}), 422
        return jsonify({"ok": True, **data})

    @app.post("/extract")
    def api_extract():
        body = request.get_json(silent=True) or {}
        text = body.get("text")
        if not isinstance(text, str):
            return _json_err("bad_request", "Champ 'text' manquant", 400)
        return jsonify({"ok": True, **extract_text(text)})

    @app.post("/contact")
    def api_contact():
        body = request.get_json(silent=True) or {}
        text = body.get("text")
        overrides = body.get("overrides") or {}
        if not isinstance(text, str) or not isinstance(overrides, Mapping):
            return _json_err("bad_request", "Champs 'text'/'overrides' invalides", 400)

        scan = run_extractors(text)
        session = AssignmentSession.from_scan(scan)
        err = _apply_overrides(session, scan, overrides)
        if err:
            return _json_err("bad_request", err, 400)

        consumed = [l.index for l in scan.relevant if session.is_line_consumed(l)]
        assigned = session.finalize()
        contact = sanitize_contact(assigned)
        if not contact.get("name"):
            return jsonify({"ok": False, "error": {"code": "name_required", "message": "Le nom est obligatoire"},
                            "contact": contact, "assigned": assigned}), 422
        return jsonify({"ok": True, "contact": contact, "assigned": assigned, "consumed": consumed})

    return app


def _apply_overrides(session: AssignmentSession, scan, overrides: Mapping[str, Any]) -> str | None:
    """
    overrides: {category: null | "free text" | {"line": index}}
    Returns an error message, or None when every override was understood.
    """
    by_index = {l.index: l for l in scan.lines}
    for key, val in overrides.items():
        try:
            cat = FieldCategory(key)
        except ValueError:
            return f"Champ inconnu: {key}"
        if val is None:
            session.remove_assignment(cat)
        elif isinstance(val, str):
            session.assign_free_text(cat, val.strip())
        elif isinstance(val, Mapping) and isinstance(val.get("line"), int):
            line = by_index.get(val["line"])
            if line is not None:
                session.assign_line(line, cat)
        else:
            return f"Valeur invalide pour {key}"
    return None


def _json_err(code: str, msg: str, status: int) -> Tuple[Any, int]:
    return jsonify({"ok": False, "error": {"code": code, "message": msg}}), status
