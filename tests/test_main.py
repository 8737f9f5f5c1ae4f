import io

from badgescan.extractors import badge_basic


def _upload(client, name="badge.png", **query):
    return client.post(
        "/scan",
        query_string=query,
        data={"file": (io.BytesIO(b"fake image bytes"), name)},
        content_type="multipart/form-data",
    )


def test_health(client):
    assert client.get("/health").get_json() == {"ok": True}
    assert client.get("/healthz").get_json()["service"] == "badgescan"
    assert client.get("/").status_code == 200


def test_extract(client, demo_text):
    res = client.post("/extract", json={"text": demo_text})
    body = res.get_json()
    assert res.status_code == 200 and body["ok"]
    assert body["fields"]["company"] == "Tech Solutions Inc"
    assert body["fields"]["phone"] == "+1 (555) 123-4567"


def test_extract_requires_text(client):
    res = client.post("/extract", json={})
    assert res.status_code == 400
    assert res.get_json()["error"]["code"] == "bad_request"


def test_contact_uses_auto_selection(client, demo_text):
    res = client.post("/contact", json={"text": demo_text})
    body = res.get_json()
    assert res.status_code == 200
    assert body["contact"] == {
        "name": "John Doe",
        "company": "Tech Solutions Inc",
        "title": "Senior Software Engineer",
        "email": "john.doe@techsolutions.com",
        "phone": "+1 (555) 123-4567",
    }
    assert body["consumed"] == [0, 1, 2, 3, 4]


def test_contact_overrides(client, demo_text):
    res = client.post("/contact", json={
        "text": demo_text,
        "overrides": {"company": None, "title": {"line": 2}, "email": "   "},
    })
    body = res.get_json()
    assert res.status_code == 200
    assert "company" not in body["contact"]
    assert body["contact"]["title"] == "Tech Solutions Inc"
    assert body["contact"]["email"] == "john.doe@techsolutions.com"


def test_contact_requires_a_name(client):
    res = client.post("/contact", json={"text": "???\n###"})
    assert res.status_code == 422
    assert res.get_json()["error"]["code"] == "name_required"
    assert res.get_json()["error"]["message"] == "Le nom est obligatoire"

    res = client.post("/contact", json={"text": "???\n###", "overrides": {"name": "Jane Roe"}})
    assert res.status_code == 200
    assert res.get_json()["contact"] == {"name": "Jane Roe"}


def test_contact_rejects_unknown_fields(client, demo_text):
    res = client.post("/contact", json={"text": demo_text, "overrides": {"fax": "555"}})
    assert res.status_code == 400
    res = client.post("/contact", json={"text": demo_text, "overrides": {"name": 12}})
    assert res.status_code == 400


def test_scan_requires_a_file(client):
    res = client.post("/scan", data={}, content_type="multipart/form-data")
    assert res.status_code == 400


def test_scan_rejects_other_types(client):
    res = _upload(client, name="badge.gif")
    assert res.status_code == 415
    assert res.get_json()["error"]["code"] == "unsupported_type"


def test_scan_rejects_unknown_engine(client):
    assert _upload(client, engine="magic").status_code == 400


def test_scan(client, monkeypatch, demo_text):
    monkeypatch.setitem(badge_basic.ENGINES, "tesseract", lambda p: (demo_text, {"engine": "pytesseract"}))
    res = _upload(client)
    body = res.get_json()
    assert res.status_code == 200 and body["ok"]
    assert body["fields"]["name"] == "John Doe"
    assert body["meta"]["engine"] == "tesseract"


def test_scan_without_text(client, monkeypatch):
    for name in list(badge_basic.ENGINES):
        monkeypatch.setitem(badge_basic.ENGINES, name, lambda p: ("", {"error": "nothing"}))
    res = _upload(client, engine="auto")
    assert res.status_code == 422
    assert res.get_json()["error"]["code"] == "no_text"
    assert res.get_json()["error"]["message"] == "Aucun texte extrait de l'image"
