"""Turn logo sources into RGBA pixel buffers."""

from __future__ import annotations

import base64
import binascii
import logging
from io import BytesIO
from pathlib import Path
from typing import Any
from urllib.parse import unquote_to_bytes

import requests
from PIL import Image, UnidentifiedImageError
from PIL.Image import DecompressionBombError

from ..errors import DecodeError
from ..io.models import RasterImage

try:  # pragma: no cover - optional dependency
    import cairosvg  # type: ignore
except Exception:  # pragma: no cover - optional dependency
    cairosvg = None  # type: ignore[assignment]

logger = logging.getLogger(__name__)

_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/120.0.0.0 Safari/537.36"
)
_IMAGE_TIMEOUT = 10.0
_SVG_MIME_TYPES = {"image/svg+xml", "image/svg", "text/svg"}


def decode_source(source: Any) -> RasterImage:
    """Return the decoded RGBA raster for *source*.

    *source* may be raw bytes, a ``data:`` URI, an ``http(s)`` URL or a local
    file path. Any failure is raised as ``DecodeError`` naming the source.
    """
    try:
        image_bytes, mime_hint = load_source_bytes(source)
    except DecodeError as exc:
        if exc.source is source:
            raise
        raise DecodeError(source, exc.reason) from exc
    try:
        return decode_bytes(image_bytes, mime_hint)
    except DecodeError:
        raise
    except ValueError as exc:
        raise DecodeError(source, str(exc)) from exc
    except (UnidentifiedImageError, DecompressionBombError, OSError) as exc:
        raise DecodeError(source, f"unreadable image data ({exc})") from exc


def load_source_bytes(source: Any) -> tuple[bytes, str | None]:
    """Return the raw bytes for *source* and a MIME hint when one is known."""
    if isinstance(source, (bytes, bytearray)):
        return bytes(source), None
    if isinstance(source, Path):
        return _read_file(source), None
    if not isinstance(source, str) or not source.strip():
        raise DecodeError(source, "source must be bytes, a path, a URL or a data URI")

    value = source.strip()
    if value.startswith("data:"):
        return _decode_data_uri(value)
    if value.startswith(("http://", "https://")):
        return fetch_image_bytes(value), None
    return _read_file(Path(value)), None


def fetch_image_bytes(url: str) -> bytes:
    """Download *url* once and return its body."""
    headers = {
        "User-Agent": _USER_AGENT,
        "Accept": "image/*,*/*;q=0.8",
    }
    try:
        response = requests.get(url, headers=headers, timeout=_IMAGE_TIMEOUT)
        response.raise_for_status()
    except requests.RequestException as exc:
        logger.debug("Failed to fetch image bytes from %s", url, exc_info=True)
        raise DecodeError(url, f"download failed ({exc})") from exc
    return response.content


def decode_bytes(image_bytes: bytes, mime_hint: str | None = None) -> RasterImage:
    """Decode *image_bytes* into an RGBA raster, rasterizing SVG input."""
    if not image_bytes:
        raise ValueError("empty image payload")

    data = image_bytes
    mime = (mime_hint or "").lower()
    if mime in _SVG_MIME_TYPES or _looks_like_svg(image_bytes):
        data = rasterize_svg(image_bytes)

    with Image.open(BytesIO(data)) as img:
        img.load()
        return RasterImage.from_pil(img)


def rasterize_svg(svg_bytes: bytes) -> bytes:
    """Return PNG bytes for *svg_bytes* using cairosvg."""
    if cairosvg is None:
        raise ValueError("SVG input requires the cairosvg package")
    try:
        return cairosvg.svg2png(bytestring=svg_bytes)  # type: ignore[attr-defined]
    except Exception as exc:  # noqa: BLE001 - cairosvg raises assorted parser errors
        raise ValueError(f"SVG rasterization failed ({exc})") from exc


def _read_file(path: Path) -> bytes:
    try:
        return path.read_bytes()
    except OSError as exc:
        raise DecodeError(path, f"cannot read file ({exc.strerror or exc})") from exc


def _decode_data_uri(uri: str) -> tuple[bytes, str | None]:
    try:
        header, data = uri.split(",", 1)
    except ValueError:
        raise DecodeError(uri, "malformed data URI") from None
    mime = header[len("data:") :].split(";", 1)[0].strip().lower() or None
    if ";base64" in header.lower():
        try:
            return base64.b64decode(data, validate=True), mime
        except (binascii.Error, ValueError) as exc:
            raise DecodeError(uri, "invalid base64 payload") from exc
    return unquote_to_bytes(data), mime


def _looks_like_svg(image_bytes: bytes) -> bool:
    snippet = image_bytes[:1024].lstrip().lower()
    return snippet.startswith(b"<svg") or (
        snippet.startswith(b"<?xml") and b"<svg" in snippet
    )
