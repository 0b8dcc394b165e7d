"""Identicon Service — FastAPI HTTP layer.

Modules
-------
main
    FastAPI application with the ``GET /`` route, request logging and
    method guard middleware, and the ``main()`` CLI entry point.
usage
    Plain-text usage guide returned when no hash is supplied.
"""
