import logging


def test_api_requests_are_logged_with_response_body(client, caplog):
    caplog.set_level(logging.INFO, logger="app.main")

    resp = client.get("/api/health")

    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"
    lines = [r.getMessage() for r in caplog.records if r.name == "app.main"]
    assert any(line.startswith("GET /api/health 200 in ") and ' :: {"status":"ok"' in line for line in lines)
    assert all(len(line) <= 80 for line in lines)


def test_error_responses_are_logged_with_body(client, caplog):
    caplog.set_level(logging.INFO, logger="app.main")

    resp = client.post("/api/generate-icebreakers", json={"profileText": "abcdefghi"})

    assert resp.status_code == 400
    assert resp.json()["code"] == "VALIDATION_ERROR"
    lines = [r.getMessage() for r in caplog.records if r.name == "app.main"]
    assert any(line.startswith("POST /api/generate-icebreakers 400 in ") and " :: " in line for line in lines)
