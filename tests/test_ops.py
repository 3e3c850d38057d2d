from fastapi import status


def test_healthz(client):
    response = client.get("/healthz")

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["status"] == "ok"


def test_version(client):
    data = client.get("/version").json()

    assert {"version", "git_sha", "build_time_utc", "env", "debug"} <= set(data)


def test_request_id_is_echoed(client):
    response = client.get("/healthz", headers={"X-Request-ID": "abc-123"})

    assert response.headers["x-request-id"] == "abc-123"


def test_security_headers(client):
    response = client.get("/")

    assert response.headers["x-content-type-options"] == "nosniff"
    assert response.headers["x-frame-options"] == "DENY"
    assert "default-src 'self'" in response.headers["content-security-policy"]


def test_unknown_path_is_json_404(client):
    response = client.get("/nope")

    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json() == {"detail": "Not Found"}


def test_static_assets_are_served(client):
    assert client.get("/static/subscribe.js").status_code == status.HTTP_200_OK
    assert client.get("/static/styles.css").status_code == status.HTTP_200_OK
