"""Identicon Service - deterministic identicon images over HTTP."""

__version__ = "0.1.0"

from identicon_service.core.config import IdenticonConfig, config
from identicon_service.core.options import ImageFormat, RequestOptions, resolve
from identicon_service.core.pipeline import build_identicon

__all__ = [
    "IdenticonConfig",
    "config",
    "ImageFormat",
    "RequestOptions",
    "resolve",
    "build_identicon",
]
