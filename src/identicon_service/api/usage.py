"""Plain-text usage guide served when ``GET /`` is called without a hash.

An empty ``hash`` is treated as "tell me how to use this" rather than as a
bad request, so the guide is returned with status 200.
"""

from __future__ import annotations

from identicon_service.core.options import RequestOptions

_DEFAULTS = RequestOptions()


def usage_guide(max_scale: int) -> str:
    """Render the usage guide with the live defaults and limits.

    Args:
        max_scale: Largest accepted ``scale`` value, shown in the guide.

    Returns:
        The guide text, ending with a newline.
    """
    return f"""Identicon Service

Generate a deterministic identicon image from any string.

Usage:
    GET /?hash=<string>[&size=<n>][&scale=<px>][&border=<px>][&format=png|jpeg]

Parameters:
    hash    Seed string. The same hash always gives the same image. (required)
    size    Cells per side of the pattern grid.        default: {_DEFAULTS.grid_size}
    scale   Width and height of the image in pixels.   default: {_DEFAULTS.scale}, max: {max_scale}
    border  Margin inside the image edge, in pixels.   default: {_DEFAULTS.border}
    format  Output format, 'png' or 'jpeg'.            default: {_DEFAULTS.format.value}

Rules:
    size must not be greater than scale (422 otherwise).
    Malformed numbers or unknown formats are rejected with 400.

Example:
    GET /?hash=magic&size=5&scale=500&border=50&format=png
"""
