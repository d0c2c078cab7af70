import logging

from tuneheaven.app.models import NewsletterSubscriber


def test_missing_email(client):
    r = client.post("/api/newsletter", data={})
    assert r.status_code == 400
    assert r.json == {"ok": False, "error": "Email is required"}


def test_blank_email(client):
    r = client.post("/api/newsletter", data={"email": "   "})
    assert r.status_code == 400
    assert r.json["error"] == "Email is required"


def test_malformed_email(client):
    r = client.post("/api/newsletter", data={"email": "not-an-email"})
    assert r.status_code == 400
    assert r.json == {"ok": False, "error": "Enter a valid email address"}


def test_signup_logs_and_records(client, app, caplog):
    with caplog.at_level(logging.INFO):
        r = client.post("/api/newsletter", data={"email": "Player@Example.com"})

    assert r.status_code == 200
    assert r.json == {"ok": True}
    assert "Newsletter signup: Player@Example.com" in caplog.text

    with app.app_context():
        rows = NewsletterSubscriber.query.all()
        assert [s.email for s in rows] == ["player@example.com"]


def test_signup_accepts_json(client):
    r = client.post("/api/newsletter", json={"email": "json@example.com"})
    assert r.status_code == 200
    assert r.json["ok"] is True


def test_resubscribe_is_noop(client, app):
    client.post("/api/newsletter", data={"email": "a@example.com"})
    r = client.post("/api/newsletter", data={"email": "A@example.com"})

    assert r.status_code == 200
    with app.app_context():
        assert NewsletterSubscriber.query.count() == 1


def test_other_methods_are_405(client):
    for method in ("get", "put", "patch", "delete"):
        r = getattr(client, method)("/api/newsletter")
        assert r.status_code == 405
        assert r.json == {"ok": False, "error": "Method not allowed"}


def test_footer_has_error_slot_for_endpoint_messages(client):
    html = client.get("/").data.decode()
    assert '<form action="/api/newsletter" method="post" data-newsletter-form data-status="idle">' in html
    assert '<p class="newsletter-error" data-newsletter-error aria-live="polite" hidden>' in html
