"""Request-to-image pipeline.

Composes the three pure stages::

    RequestOptions --generate--> PatternGrid --render--> Image --encode--> EncodedImage

Usage
-----
::

    from identicon_service.core.options import resolve
    from identicon_service.core.pipeline import build_identicon

    options = resolve("hash=magic&format=jpeg")
    encoded = build_identicon(options)
    encoded.mime_type  # 'image/jpeg'
"""

from __future__ import annotations

import logging
import time

from identicon_service.core.encoder import EncodedImage, encode
from identicon_service.core.options import RequestOptions
from identicon_service.core.pattern import DEFAULT_BACKGROUND, Color, generate
from identicon_service.core.renderer import blank_canvas, layout, render

logger = logging.getLogger(__name__)


def build_identicon(
    options: RequestOptions,
    *,
    background: Color = DEFAULT_BACKGROUND,
    jpeg_quality: int = 95,
) -> EncodedImage:
    """Run the full pipeline for one request.

    Args:
        options: Validated request options.
        background: Colour for the border and empty cells.
        jpeg_quality: Quality used when ``options.format`` is JPEG.

    Returns:
        The encoded identicon.

    Raises:
        EncodingError: If the canvas cannot be encoded.
    """
    start = time.perf_counter()

    if layout(options.scale, options.border, options.grid_size).cell == 0:
        # Nothing of the pattern would be visible.
        image = blank_canvas(options.scale, background)
    else:
        grid = generate(options.seed, options.grid_size, background)
        image = render(grid, options.scale, options.border, background)
    encoded = encode(image, options.format, jpeg_quality=jpeg_quality)

    elapsed_ms = (time.perf_counter() - start) * 1000
    logger.debug(
        f"Built {options.format.value} identicon: size={options.grid_size}, "
        f"scale={options.scale}, border={options.border}, "
        f"{len(encoded.data)} bytes in {elapsed_ms:.1f} ms"
    )
    return encoded
