"""
Integration tests for the HTTP API
"""

from io import BytesIO
from pathlib import Path

import numpy as np
import pytest
from fastapi.testclient import TestClient
from PIL import Image

import main
from src.services.media_metadata import main as media_main
from src.services.media_metadata.src.service import MediaMetadataService


class FakeTool:
    def run(self, args):
        output = Path(args[-1])
        if "ffmetadata" in args:
            output.write_text(";FFMETADATA1\ntitle=from the tags\n", encoding="utf-8")
        else:
            output.write_bytes(Path(args[1]).read_bytes())


@pytest.fixture
def client():
    return TestClient(main.app)


def png_bytes(width=60, height=40, seed=7) -> bytes:
    rng = np.random.default_rng(seed)
    arr = rng.integers(0, 256, size=(height, width, 4), dtype=np.uint8)
    buf = BytesIO()
    Image.fromarray(arr).save(buf, format="PNG")
    return buf.getvalue()


def test_capacity(client):
    response = client.post("/stego/capacity", files={"file": ("cover.png", png_bytes(10, 10), "image/png")})
    assert response.status_code == 200
    body = response.json()
    assert body["capacity_bits"] == 300
    assert body["max_text_chars"] == 21


def test_hide_then_reveal(client):
    response = client.post(
        "/stego/hide-text",
        files={"file": ("cover.png", png_bytes(), "image/png")},
        data={"text": "meet at noon"},
    )
    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    output_path = Path(body["path"])
    assert output_path.exists()
    assert body["details"]["used_capacity_bits"] == (12 + 16) * 8

    response = client.post("/stego/reveal-text", files={"file": ("stego.png", output_path.read_bytes(), "image/png")})
    assert response.status_code == 200
    details = response.json()["details"]
    assert details["found"] is True
    assert details["text"] == "meet at noon"


def test_saved_file_matches_output_format(client):
    response = client.post(
        "/stego/hide-text",
        files={"file": ("cover.png", png_bytes(), "image/png")},
        data={"text": "bitmap", "output_format": "bmp"},
    )
    body = response.json()
    saved = Path(body["path"])
    assert saved.suffix == ".bmp"
    assert body["details"]["output_format"] == "BMP"
    assert Image.open(saved).format == "BMP"


def test_saved_file_is_served(client):
    response = client.post(
        "/stego/hide-text",
        files={"file": ("cover.png", png_bytes(), "image/png")},
        data={"text": "static"},
    )
    filename = response.json()["details"]["filename"]
    assert client.get(f"/files/{filename}").status_code == 200


def test_reveal_clean_image(client):
    response = client.post("/stego/reveal-text", files={"file": ("clean.png", png_bytes(seed=99), "image/png")})
    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "No hidden message found"
    assert body["details"]["found"] is False
    assert body["details"]["text"] is None


def test_hide_over_capacity(client):
    response = client.post(
        "/stego/hide-text",
        files={"file": ("tiny.png", png_bytes(10, 10), "image/png")},
        data={"text": "x" * 22},
    )
    assert response.status_code == 400
    assert "Not enough capacity" in response.json()["message"]


def test_hide_rejects_lossy_output_format(client):
    response = client.post(
        "/stego/hide-text",
        files={"file": ("cover.png", png_bytes(), "image/png")},
        data={"text": "hello", "output_format": "JPEG"},
    )
    assert response.status_code == 400


def test_hide_rejects_garbage_upload(client):
    response = client.post(
        "/stego/hide-text",
        files={"file": ("cover.png", b"not an image", "image/png")},
        data={"text": "hello"},
    )
    assert response.status_code == 400


def test_media_image_roundtrip(client):
    response = client.post(
        "/media/hide",
        files={"file": ("cover.png", png_bytes(), "image/png")},
        data={"text": "via media"},
    )
    assert response.status_code == 200
    output_path = Path(response.json()["path"])

    response = client.post("/media/reveal", files={"file": (output_path.name, output_path.read_bytes(), "image/png")})
    assert response.json()["details"]["text"] == "via media"


def test_media_audio_uses_metadata(client, monkeypatch):
    monkeypatch.setattr(media_main.media_service, "metadata_service", MediaMetadataService(FakeTool()))
    response = client.post("/media/reveal", files={"file": ("song.mp3", b"ID3-bytes", "audio/mpeg")})
    assert response.status_code == 200
    details = response.json()["details"]
    assert details["kind"] == "audio"
    assert details["text"] == "from the tags"


def test_media_unsupported_extension(client):
    response = client.post("/media/reveal", files={"file": ("notes.txt", b"hello", "text/plain")})
    assert response.status_code == 400
    assert "Unsupported file format" in response.json()["message"]


def test_stats_and_health(client):
    client.post("/stego/reveal-text", files={"file": ("clean.png", png_bytes(seed=3), "image/png")})
    stats = client.get("/stats").json()
    assert stats["decoded_count"] >= 1
    health = client.get("/health").json()
    assert health["status"] == "ok"
    assert health["max_scan_pixels"] == 100_000


def test_reveal_requires_file_or_url(client):
    response = client.post("/stego/reveal-text", data={"encoding": "utf-8"})
    assert response.status_code == 400
    assert response.json()["message"] == "Provide file or url"
