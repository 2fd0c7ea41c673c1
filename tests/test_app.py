from fastapi import HTTPException
from fastapi.testclient import TestClient

from thumbhost.api.deps import get_file_server
from thumbhost.core.config import Settings, StorageSettings
from thumbhost.main import create_app


def test_health(client, upload_dir):
    response = client.get("/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "OK"
    assert body["storage"] == {"path": str(upload_dir.resolve()), "writable": True}


def test_api_health_alias(client):
    assert client.get("/api/health").status_code == 200


def test_health_reports_unwritable_storage(tmp_path):
    blocker = tmp_path / "file-not-dir"
    blocker.write_text("x")
    app = create_app(Settings(storage=StorageSettings(upload_dir=blocker)))

    # Lifespan is skipped so the storage directory is never created.
    response = TestClient(app).get("/health")

    assert response.status_code == 503
    assert response.json()["status"] == "ERROR"


def test_lifespan_creates_upload_dir(tmp_path):
    upload_dir = tmp_path / "fresh"
    app = create_app(Settings(storage=StorageSettings(upload_dir=upload_dir)))

    with TestClient(app):
        assert upload_dir.is_dir()


def test_api_index(client):
    response = client.get("/api")

    assert response.status_code == 200
    body = response.json()
    assert body["endpoints"]["upload"] == "/api/upload"
    assert body["endpoints"]["files"] == "/api/files/{filename}"


def test_unknown_route_uses_error_envelope(client):
    response = client.get("/api/nothing-here/at/all")

    assert response.status_code == 404
    body = response.json()
    assert body["error"]["code"] == "ROUTE_NOT_FOUND"
    assert body["error"]["details"] == {"path": "/api/nothing-here/at/all", "method": "GET"}
    assert body["path"] == "/api/nothing-here/at/all"


def test_method_not_allowed_uses_error_envelope(client):
    response = client.delete("/api/upload")

    assert response.status_code == 405
    assert response.json()["error"]["code"] == "METHOD_NOT_ALLOWED"


def test_unexpected_exception_returns_generic_500(app):
    def broken_server():
        raise RuntimeError("boom")

    app.dependency_overrides[get_file_server] = broken_server

    with TestClient(app, raise_server_exceptions=False) as client:
        response = client.get("/api/files/anything.jpg")

    assert response.status_code == 500
    body = response.json()
    assert body["error"]["code"] == "INTERNAL_SERVER_ERROR"
    assert body["error"]["message"] == "サーバー内部エラーが発生しました。"
    assert "details" not in body["error"]


def test_other_http_exceptions_use_http_error_code(app):
    @app.get("/conflict")
    async def conflict():
        raise HTTPException(status_code=409, detail="already exists")

    with TestClient(app) as client:
        response = client.get("/conflict")

    assert response.status_code == 409
    body = response.json()
    assert body["error"] == {"code": "HTTP_ERROR", "message": "already exists"}
