import pytest
from fastapi.testclient import TestClient

from thumbhost.core.config import Settings, StorageSettings
from thumbhost.main import create_app

from .images import make_image_bytes


@pytest.fixture
def upload_dir(tmp_path):
    path = tmp_path / "uploads"
    path.mkdir()
    return path


@pytest.fixture
def settings(upload_dir):
    return Settings(
        environment="test",
        storage=StorageSettings(upload_dir=upload_dir),
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def jpeg_bytes():
    return make_image_bytes()
