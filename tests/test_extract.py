"""Tests for raster decoding, cropping and encoding."""

import base64
from io import BytesIO

import numpy as np
import pytest
import requests
from PIL import Image

from helpers import png_bytes, transparent_with_block
from logo_balance.errors import DecodeError
from logo_balance.extract import raster
from logo_balance.extract.crop import crop_to_content, encode_png_data_uri
from logo_balance.extract.raster import decode_bytes, decode_source
from logo_balance.io.models import ContentBox


class _FakeResponse:
    def __init__(self, content: bytes, status: int = 200) -> None:
        self.content = content
        self.status_code = status

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")


def test_decode_file_path(make_png) -> None:
    path = make_png(transparent_with_block(12, 8, (1, 1, 5, 5)))

    image = decode_source(str(path))

    assert image.size == (12, 8)
    assert image.has_alpha


def test_decode_bytes_converts_to_rgba() -> None:
    buffer = BytesIO()
    Image.new("RGB", (5, 3), (10, 20, 30)).save(buffer, format="JPEG")

    image = decode_bytes(buffer.getvalue())

    assert image.pixels.shape == (3, 5, 4)
    assert not image.has_alpha


def test_decode_data_uri() -> None:
    payload = base64.b64encode(png_bytes(transparent_with_block(4, 6, (0, 0, 2, 2))))
    uri = "data:image/png;base64," + payload.decode("ascii")

    assert decode_source(uri).size == (4, 6)


def test_decode_url_fetches_once(monkeypatch) -> None:
    calls = []

    def fake_get(url, headers=None, timeout=None):
        calls.append(url)
        return _FakeResponse(png_bytes(transparent_with_block(3, 3, (0, 0, 1, 1))))

    monkeypatch.setattr(raster.requests, "get", fake_get)

    assert decode_source("https://example.com/logo.png").size == (3, 3)
    assert calls == ["https://example.com/logo.png"]


def test_http_failure_is_a_decode_error(monkeypatch) -> None:
    calls = []

    def fake_get(url, headers=None, timeout=None):
        calls.append(url)
        return _FakeResponse(b"", status=503)

    monkeypatch.setattr(raster.requests, "get", fake_get)

    with pytest.raises(DecodeError) as excinfo:
        decode_source("https://example.com/down.png")
    assert excinfo.value.source == "https://example.com/down.png"
    assert len(calls) == 1


def test_missing_file_names_the_source(tmp_path) -> None:
    missing = str(tmp_path / "nope.png")

    with pytest.raises(DecodeError) as excinfo:
        decode_source(missing)
    assert excinfo.value.source == missing
    assert missing in str(excinfo.value)


@pytest.mark.parametrize("payload", [b"", b"not an image at all", "data:image/png;base64,@@@"])
def test_garbage_is_a_decode_error(payload) -> None:
    with pytest.raises(DecodeError):
        decode_source(payload)


def test_svg_without_rasterizer_is_a_decode_error(monkeypatch) -> None:
    monkeypatch.setattr(raster, "cairosvg", None)

    with pytest.raises(DecodeError, match="cairosvg"):
        decode_source(b'<svg xmlns="http://www.w3.org/2000/svg" width="4" height="4"/>')


def test_svg_is_rasterized(monkeypatch) -> None:
    class _FakeCairo:
        @staticmethod
        def svg2png(bytestring):
            return png_bytes(transparent_with_block(7, 2, (0, 0, 1, 1)))

    monkeypatch.setattr(raster, "cairosvg", _FakeCairo)

    image = decode_source("data:image/svg+xml,%3Csvg%3E%3C/svg%3E")

    assert image.size == (7, 2)


def test_crop_is_pixel_exact() -> None:
    image = transparent_with_block(10, 10, (2, 3, 6, 8))
    image.pixels[5, 4] = (255, 0, 0, 255)

    cropped = crop_to_content(image, ContentBox(2, 3, 6, 8))

    assert cropped.size == (4, 5)
    assert np.array_equal(cropped.pixels, image.pixels[3:8, 2:6])
    assert tuple(cropped.pixels[2, 2]) == (255, 0, 0, 255)
    cropped.pixels[0, 0] = (1, 1, 1, 1)
    assert tuple(image.pixels[3, 2]) == (0, 0, 0, 255)


def test_crop_outside_image_is_rejected() -> None:
    with pytest.raises(ValueError):
        crop_to_content(transparent_with_block(4, 4, (0, 0, 1, 1)), ContentBox(0, 0, 5, 4))


def test_png_data_uri_round_trips_pixels() -> None:
    image = transparent_with_block(6, 4, (1, 1, 3, 3))

    uri = encode_png_data_uri(image)

    assert uri.startswith("data:image/png;base64,")
    assert np.array_equal(decode_source(uri).pixels, image.pixels)
