"""Unit tests for settings parsing, photo storage and password hashing."""

import pytest
from pydantic import ValidationError

from reviewhub.core.config import Settings
from reviewhub.services.auth import PasswordHasher
from reviewhub.services.storage import LocalPhotoStorage, PhotoStorage, photo_key, read_image


class TestSettings:
    def test_cors_comma_separated(self):
        settings = Settings(CORS_ALLOWED_ORIGINS="https://a.example.com, https://b.example.com")

        assert settings.cors_allowed_origins_list == [
            "https://a.example.com",
            "https://b.example.com",
        ]

    def test_cors_json_array(self):
        settings = Settings(CORS_ALLOWED_ORIGINS='["https://a.example.com"]')

        assert settings.cors_allowed_origins_list == ["https://a.example.com"]

    def test_cors_empty(self):
        assert Settings(CORS_ALLOWED_ORIGINS="  ").cors_allowed_origins_list == []

    def test_hash_rounds_floor(self):
        with pytest.raises(ValidationError):
            Settings(PASSWORD_HASH_ROUNDS=4)

    def test_unused_environment_keys_ignored(self, monkeypatch):
        monkeypatch.setenv("ENVIRONMENT", "production")
        monkeypatch.setenv("ALEMBIC_CONFIG", "other.ini")

        settings = Settings()

        assert "ENVIRONMENT" not in Settings.model_fields
        assert "ALEMBIC_CONFIG" not in Settings.model_fields
        assert not hasattr(settings, "ENVIRONMENT")


class TestPhotoStorage:
    def test_interface_is_abstract(self):
        with pytest.raises(TypeError):
            PhotoStorage()

    def test_photo_key(self):
        assert photo_key(12) == "12.jpg"
        assert photo_key(12, ".PNG") == "12.png"

    def test_read_image_rejects_empty(self):
        with pytest.raises(ValueError, match="File is empty"):
            read_image(b"")

    @pytest.mark.asyncio
    async def test_local_storage_writes_file(self, tmp_path):
        storage = LocalPhotoStorage(tmp_path / "photos")

        location = await storage.save_photo(3, b"image-bytes", "svg")

        assert location == str(tmp_path / "photos" / "3.svg")
        assert (tmp_path / "photos" / "3.svg").read_bytes() == b"image-bytes"


class TestPasswordHasher:
    def test_rejects_low_cost(self):
        with pytest.raises(ValueError):
            PasswordHasher(rounds=4)

    @pytest.mark.asyncio
    async def test_hash_is_salted(self, hasher):
        first = await hasher.hash("password123")
        second = await hasher.hash("password123")

        assert first != second
        assert await hasher.verify("password123", first)
        assert not await hasher.verify("password124", first)
