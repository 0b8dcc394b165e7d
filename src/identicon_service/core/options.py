"""Query-string resolution for identicon requests.

:func:`resolve` turns the raw query string of ``GET /`` into an immutable
:class:`RequestOptions`.  It is a pure function: structural problems raise
:class:`~identicon_service.core.errors.ParseError`, semantic ones raise
:class:`~identicon_service.core.errors.MissingSeedError` or
:class:`~identicon_service.core.errors.UnprocessableOptionsError`.

Query Parameters
----------------
========  ==============  =========  ======================================
Name      Field           Default    Rule
========  ==============  =========  ======================================
hash      ``seed``        ``""``     any string; empty means "show usage"
border    ``border``      ``50``     unsigned 32-bit decimal
size      ``grid_size``   ``5``      unsigned 32-bit decimal, ``<= scale``
scale     ``scale``       ``500``    unsigned 32-bit decimal
format    ``format``      ``png``    exactly ``png`` or ``jpeg``
========  ==============  =========  ======================================

Unknown parameters are ignored.  Supplying a known parameter twice is a
parse failure.
"""

from __future__ import annotations

from enum import Enum
from urllib.parse import parse_qsl

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from identicon_service.core.errors import (
    MissingSeedError,
    ParseError,
    UnprocessableOptionsError,
)

U32_MAX = 2**32 - 1

QUERY_FIELDS = frozenset({"hash", "border", "size", "scale", "format"})


class ImageFormat(str, Enum):
    """Output codecs supported by the encoder."""

    PNG = "png"
    JPEG = "jpeg"

    @property
    def mime_type(self) -> str:
        return f"image/{self.value}"


class RequestOptions(BaseModel):
    """Resolved, immutable options for one identicon request.

    Attributes:
        seed: The identity string the pattern and colour are derived from.
            Read from the ``hash`` query parameter.
        border: Inset margin in pixels between the canvas edge and the
            pattern.
        grid_size: Number of cells per side of the pattern.  Read from the
            ``size`` query parameter.
        scale: Edge length of the square output image in pixels.
        format: Output codec.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    seed: str = Field(
        default="",
        alias="hash",
        description="Seed string the identicon is derived from.",
    )
    border: int = Field(
        default=50,
        ge=0,
        le=U32_MAX,
        description="Border inset in pixels.",
    )
    grid_size: int = Field(
        default=5,
        alias="size",
        ge=0,
        le=U32_MAX,
        description="Cells per side of the pattern grid.",
    )
    scale: int = Field(
        default=500,
        ge=0,
        le=U32_MAX,
        description="Output image edge length in pixels.",
    )
    format: ImageFormat = Field(
        default=ImageFormat.PNG,
        description="Output format: 'png' or 'jpeg'.",
    )

    @field_validator("border", "grid_size", "scale", mode="before")
    @classmethod
    def _digits_only(cls, value):
        # Query values arrive as strings; only plain decimal digits are
        # accepted, so "+5", " 5" and "5.0" are rejected.
        if isinstance(value, str):
            if not (value.isascii() and value.isdigit()):
                raise ValueError(f"expected a non-negative integer, got {value!r}")
            return int(value)
        return value


def _describe(exc: ValidationError) -> str:
    """Summarise the first pydantic error as ``'<param>': <message>``."""
    error = exc.errors()[0]
    location = ".".join(str(part) for part in error["loc"]) or "query"
    return f"Invalid value for '{location}': {error['msg']}"


def parse_query(raw_query: str) -> RequestOptions:
    """Decode a raw query string into :class:`RequestOptions`.

    Only structural checks happen here; see :func:`resolve` for the semantic
    ones.

    Args:
        raw_query: The URL query string without the leading ``?``.

    Returns:
        Options with defaults applied for every missing parameter.

    Raises:
        ParseError: On repeated parameters, malformed integers, or an
            unknown ``format``.
    """
    fields: dict[str, str] = {}
    for name, value in parse_qsl(raw_query, keep_blank_values=True):
        if name not in QUERY_FIELDS:
            continue
        if name in fields:
            raise ParseError(f"Parameter '{name}' given more than once")
        fields[name] = value

    try:
        return RequestOptions.model_validate(fields)
    except ValidationError as e:
        raise ParseError(_describe(e)) from e


def resolve(raw_query: str, *, max_scale: int | None = None) -> RequestOptions:
    """Parse and validate a raw query string.

    Args:
        raw_query: The URL query string without the leading ``?``.
        max_scale: Optional upper bound for ``scale``.  ``None`` disables
            the check.

    Returns:
        Fully validated :class:`RequestOptions`.

    Raises:
        ParseError: The query string is structurally invalid.
        MissingSeedError: ``hash`` is missing or empty.
        UnprocessableOptionsError: ``size`` exceeds ``scale``, or ``scale``
            exceeds ``max_scale``.
    """
    options = parse_query(raw_query)

    if not options.seed:
        raise MissingSeedError("No hash supplied")

    if options.grid_size > options.scale:
        raise UnprocessableOptionsError(
            f"size ({options.grid_size}) must not be greater than scale ({options.scale})"
        )

    if max_scale is not None and options.scale > max_scale:
        raise UnprocessableOptionsError(
            f"scale ({options.scale}) must not be greater than {max_scale}"
        )

    return options
