"""Core identicon pipeline.

The core is a chain of pure functions, one module per stage:

1. **options.py** - :func:`resolve` parses the query string into
   :class:`RequestOptions`.
2. **pattern.py** - :func:`generate` derives a symmetric
   :class:`PatternGrid` from the seed.
3. **renderer.py** - :func:`render` paints the grid onto a Pillow canvas.
4. **encoder.py** - :func:`encode` produces PNG or JPEG bytes.

**pipeline.py** chains stages 2-4, **errors.py** holds the exception types
and **config.py** the Pydantic Settings configuration.

Usage Example
-------------
    from identicon_service.core import build_identicon, resolve

    encoded = build_identicon(resolve("hash=magic"))
"""

from identicon_service.core.config import IdenticonConfig, config
from identicon_service.core.encoder import EncodedImage, encode
from identicon_service.core.options import ImageFormat, RequestOptions, resolve
from identicon_service.core.pattern import PatternGrid, generate
from identicon_service.core.pipeline import build_identicon
from identicon_service.core.renderer import render

__all__ = [
    "IdenticonConfig",
    "config",
    "EncodedImage",
    "encode",
    "ImageFormat",
    "RequestOptions",
    "resolve",
    "PatternGrid",
    "generate",
    "build_identicon",
    "render",
]
