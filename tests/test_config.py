from pathlib import Path

from thumbhost.core.config import Settings


def test_defaults_follow_upload_policy():
    settings = Settings(_env_file=None)

    assert settings.storage.upload_field == "image"
    assert settings.storage.max_upload_bytes == 5 * 1024 * 1024
    assert settings.max_upload_megabytes == 5
    assert settings.thumbnails.max_width == 300
    assert settings.thumbnails.max_height == 300
    assert settings.thumbnails.quality == 80
    assert settings.thumbnails.keep_original_on_failure is False
    assert settings.public_files_prefix == "/api/files"


def test_nested_environment_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("STORAGE__UPLOAD_DIR", str(tmp_path))
    monkeypatch.setenv("THUMBNAILS__QUALITY", "60")
    monkeypatch.setenv("THUMBNAILS__KEEP_ORIGINAL_ON_FAILURE", "true")

    settings = Settings(_env_file=None)

    assert settings.upload_dir == Path(tmp_path).resolve()
    assert settings.thumbnails.quality == 60
    assert settings.thumbnails.keep_original_on_failure is True
