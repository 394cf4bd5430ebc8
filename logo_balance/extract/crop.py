"""Content cropping and the default embeddable encoder."""

from __future__ import annotations

import base64
from io import BytesIO

from ..io.models import ContentBox, RasterImage


def crop_to_content(image: RasterImage, box: ContentBox) -> RasterImage:
    """Return the pixels of *image* inside *box*, without resampling."""
    if box.right > image.width or box.bottom > image.height:
        raise ValueError(
            f"Content box {box.as_tuple()} exceeds image size {image.width}x{image.height}"
        )
    region = image.pixels[box.top : box.bottom, box.left : box.right]
    return RasterImage(region)


def encode_png(image: RasterImage) -> bytes:
    """Return *image* encoded as PNG bytes."""
    buffer = BytesIO()
    pil_image = image.to_pil()
    try:
        pil_image.save(buffer, format="PNG")
    finally:
        pil_image.close()
    return buffer.getvalue()


def encode_png_data_uri(image: RasterImage) -> str:
    """Return *image* as a ``data:image/png;base64`` URI."""
    payload = base64.b64encode(encode_png(image)).decode("ascii")
    return f"data:image/png;base64,{payload}"
