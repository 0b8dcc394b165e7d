"""Exception types raised by the identicon pipeline.

The core never decides HTTP status codes.  Every stage raises one of the
exceptions below and the API layer (:mod:`identicon_service.api.main`) maps
them onto responses:

========================== ==========================================
Exception                  Response
========================== ==========================================
ParseError                 400 Bad Request
UnprocessableOptionsError  422 Unprocessable Entity
MissingSeedError           200 with the plain-text usage guide
EncodingError              500 Internal Server Error
========================== ==========================================
"""


class IdenticonError(Exception):
    """Base class for all identicon pipeline errors."""

    pass


class ParseError(IdenticonError):
    """The raw query string could not be decoded into request options.

    Raised for malformed integers, unknown ``format`` values and repeated
    parameters.
    """

    pass


class MissingSeedError(IdenticonError):
    """No ``hash`` was supplied.

    Not a failure from the caller's point of view: the API answers with the
    usage guide instead of an image.
    """

    pass


class UnprocessableOptionsError(IdenticonError):
    """Options parsed cleanly but cannot be rendered together."""

    pass


class EncodingError(IdenticonError):
    """The rendered canvas could not be serialised to the requested format."""

    pass
