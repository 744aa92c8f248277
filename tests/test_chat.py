import logging

from clgbooks.config import Settings
from clgbooks.db import get_connection
from clgbooks.replies import NO_RESULTS_MESSAGE


def _add_link(link_id, title, url, description=None):
    with get_connection() as con:
        con.execute(
            "INSERT INTO external_links (id, title, url, description) VALUES (?, ?, ?, ?)",
            (link_id, title, url, description),
        )
        con.commit()


def test_chat_finds_misspelled_title(client):
    response = client.post("/api/chat", json={"message": "enginering physics"})
    assert response.status_code == 200
    body = response.get_json()
    assert body["ok"] is True
    assert body["message"] == "I found the perfect match for you!"
    assert [pdf["title"] for pdf in body["pdfs"]] == ["Engineering Physics"]
    assert body["pdfs"][0]["tags"] == ["physics", "engineering", "mechanics"]
    assert body["externalLinks"] == []


def test_chat_falls_back_to_external_links(client):
    _add_link("qcd", "Quantum Chromodynamics Notes", "https://example.org/qcd")
    _add_link("qft", "Quantum Field Theory", "https://example.org/qft", "Intro to quantum chromodynamics")
    response = client.post("/api/chat", json={"message": "Quantum Chromodynamics"})
    body = response.get_json()
    assert response.status_code == 200
    assert body["pdfs"] == []
    assert [link["id"] for link in body["externalLinks"]] == ["qcd", "qft"]
    assert body["message"].startswith("I couldn't find a PDF in our library")


def test_chat_caps_external_links(client):
    for idx in range(5):
        _add_link(f"l{idx}", f"Astrophysics lecture {idx}", f"https://example.org/astro/{idx}")
    body = client.post("/api/chat", json={"message": "astrophysics lecture"}).get_json()
    assert [link["id"] for link in body["externalLinks"]] == ["l0", "l1", "l2"]


def test_chat_without_results(client):
    body = client.post("/api/chat", json={"message": "zzzz qqqq"}).get_json()
    assert body == {"ok": True, "message": NO_RESULTS_MESSAGE, "pdfs": [], "externalLinks": []}


def test_chat_rejects_blank_message(client):
    response = client.post("/api/chat", json={"message": "   "})
    assert response.status_code == 400
    assert response.get_json()["error"]["code"] == "INVALID"


def test_chat_rejects_missing_body(client):
    response = client.post("/api/chat", data="not json", content_type="text/plain")
    assert response.status_code == 400
    assert response.get_json()["ok"] is False


def test_chat_rejects_long_message(client, monkeypatch):
    monkeypatch.setattr(Settings, "MAX_MESSAGE_LENGTH", 10)
    response = client.post("/api/chat", json={"message": "engineering physics"})
    assert response.status_code == 400
    assert "too long" in response.get_json()["error"]["message"]


def test_chat_logs_outcome(client, caplog):
    with caplog.at_level(logging.INFO):
        client.post("/api/chat", json={"message": "digital electronics"})
    assert any("chat outcome=primary" in record.getMessage() for record in caplog.records)


def test_chat_sees_catalog_changes_without_restart(client):
    assert client.post("/api/chat", json={"message": "thermodynamics"}).get_json()["pdfs"] == []
    with get_connection() as con:
        con.execute(
            """
            INSERT INTO pdfs (id, title, author, category, description, tags, filename)
            VALUES (?, ?, ?, ?, ?, ?, ?)
            """,
            ("thermo", "Thermodynamics", "P.K. Nag", "Thermodynamics", None, '["thermodynamics"]', "thermo.pdf"),
        )
        con.commit()
    body = client.post("/api/chat", json={"message": "thermodynamics"}).get_json()
    assert [pdf["id"] for pdf in body["pdfs"]] == ["thermo"]
