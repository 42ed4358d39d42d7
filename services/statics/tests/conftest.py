"""Pytest fixtures for Statics tests."""

import io
import time
from typing import Any, AsyncGenerator, Callable

import pytest
import pytest_asyncio
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from jose import jwt
from PIL import Image

from services.statics.app.config import JwtSettings, S3Settings, ServerSettings, Settings
from services.statics.app.main import create_app
from services.statics.app.storage.images import ImageStore

TEST_ORIGIN = "https://shop.example.com"
TEST_BUCKET_URL = "https://test-bucket.s3.us-east-1.amazonaws.com"


class FakeS3Client:
    """In-memory stand-in for shared.utils.s3.S3Client."""

    def __init__(self, public_url: str = TEST_BUCKET_URL):
        self.public_url = public_url
        self.objects: dict[str, dict[str, Any]] = {}
        self.fail_with: Exception | None = None

    async def put_object_bytes(
        self,
        key: str,
        data: bytes,
        content_type: str = "application/octet-stream",
        acl: str | None = None,
        metadata: dict[str, str] | None = None,
    ) -> None:
        if self.fail_with is not None:
            raise self.fail_with
        self.objects[key] = {"data": data, "content_type": content_type, "acl": acl}

    def object_url(self, key: str) -> str:
        return f"{self.public_url}/{key}"

    def get(self, url: str) -> dict[str, Any]:
        """Dereference a returned URL to the stored object."""
        assert url.startswith(self.public_url + "/")
        return self.objects[url[len(self.public_url) + 1:]]


@pytest.fixture(scope="session")
def rsa_private_key() -> rsa.RSAPrivateKey:
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def private_key_pem(rsa_private_key) -> str:
    return rsa_private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    ).decode()


@pytest.fixture(scope="session")
def public_key_pem(rsa_private_key) -> str:
    return rsa_private_key.public_key().public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    ).decode()


@pytest.fixture
def public_key_file(tmp_path, public_key_pem) -> str:
    path = tmp_path / "jwt_public_key.pem"
    path.write_text(public_key_pem)
    return str(path)


@pytest.fixture
def settings(public_key_file) -> Settings:
    """Settings isolated from the environment and any .env file."""
    return Settings(
        _env_file=None,
        log_json=False,
        server=ServerSettings(host="127.0.0.1", acao=TEST_ORIGIN, max_body_size=1024 * 1024),
        jwt=JwtSettings(public_key_path=public_key_file, leeway=60),
        s3=S3Settings(bucket="test-bucket", region="us-east-1"),
    )


@pytest.fixture
def fake_s3() -> FakeS3Client:
    return FakeS3Client()


@pytest.fixture
def image_store(fake_s3) -> ImageStore:
    return ImageStore(fake_s3)


@pytest.fixture
def app(settings, image_store) -> FastAPI:
    return create_app(settings, image_store=image_store)


@pytest_asyncio.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """Create test HTTP client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def make_token(private_key_pem) -> Callable[..., str]:
    """Factory for signed tokens; expires in an hour unless told otherwise."""

    def _make_token(
        user_id: Any = 42,
        expires_in: int = 3600,
        algorithm: str = "RS256",
        key: str | None = None,
        **claims: Any,
    ) -> str:
        payload = {"user_id": user_id, "exp": int(time.time()) + expires_in, **claims}
        if user_id is None:
            payload.pop("user_id")
        return jwt.encode(payload, key or private_key_pem, algorithm=algorithm)

    return _make_token


@pytest.fixture
def auth_headers(make_token) -> dict[str, str]:
    return {"Authorization": f"Bearer {make_token()}"}


@pytest.fixture
def make_image() -> Callable[..., bytes]:
    """Factory for tiny images encoded by Pillow."""

    def _make_image(pil_format: str = "PNG", color: str = "red", size: tuple[int, int] = (16, 16)) -> bytes:
        mode = "RGBA" if pil_format in ("PNG", "ICO", "WEBP") else "RGB"
        buf = io.BytesIO()
        Image.new(mode, size, color).save(buf, format=pil_format)
        return buf.getvalue()

    return _make_image
