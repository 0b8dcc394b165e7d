"""Serialise rendered identicons to PNG or JPEG bytes."""

from __future__ import annotations

import io
from dataclasses import dataclass

from PIL import Image

from identicon_service.core.errors import EncodingError
from identicon_service.core.options import ImageFormat

# Pillow format names keyed by our output formats.
_PIL_FORMATS = {
    ImageFormat.PNG: "PNG",
    ImageFormat.JPEG: "JPEG",
}


@dataclass(frozen=True)
class EncodedImage:
    """Final response payload: image bytes and their MIME type."""

    data: bytes
    mime_type: str


def encode(image: Image.Image, fmt: ImageFormat, *, jpeg_quality: int = 95) -> EncodedImage:
    """Encode ``image`` in the requested format.

    PNG output is lossless.  JPEG output disables chroma subsampling so that
    the hard edges between flat-coloured cells stay clean.

    Args:
        image: RGB canvas produced by the renderer.
        fmt: Target format.
        jpeg_quality: Pillow quality setting used for JPEG output.

    Returns:
        The encoded bytes together with ``image/png`` or ``image/jpeg``.

    Raises:
        EncodingError: If the image has a zero dimension or Pillow fails.
    """
    width, height = image.size
    if width == 0 or height == 0:
        raise EncodingError(f"Cannot encode a {width}x{height} image")

    options: dict[str, int] = (
        {"quality": jpeg_quality, "subsampling": 0} if fmt is ImageFormat.JPEG else {}
    )

    buffer = io.BytesIO()
    try:
        image.save(buffer, format=_PIL_FORMATS[fmt], **options)
    except (OSError, ValueError) as e:
        raise EncodingError(f"Failed to encode {fmt.value}: {e}") from e

    return EncodedImage(data=buffer.getvalue(), mime_type=fmt.mime_type)
