"""Format-name helpers: MIME lookup and synthesized routes."""

from __future__ import annotations

import mimetypes

_MIME_TYPES: dict[str, str] = {
    "json": "application/json",
    "xml": "application/xml",
    "jsv": "text/jsv",
    "csv": "text/csv",
    "html": "text/html",
    "protobuf": "application/x-protobuf",
    "msgpack": "application/x-msgpack",
    "soap11": "text/xml; charset=utf-8",
    "soap12": "application/soap+xml; charset=utf-8",
}


def normalise_format(fmt: str) -> str:
    """Strip whitespace and the ``x-`` vendor prefix and lower-case *fmt*."""
    fmt = fmt.strip().lower()
    return fmt[2:] if fmt.startswith("x-") else fmt


def get_mime_type(fmt: str) -> str:
    """Return the MIME type served for format *fmt*.

    Unknown formats fall back to :mod:`mimetypes` and then to
    ``application/<fmt>``.
    """
    fmt = normalise_format(fmt)
    if fmt in _MIME_TYPES:
        return _MIME_TYPES[fmt]
    guessed, _ = mimetypes.guess_type(f"file.{fmt}")
    return guessed or f"application/{fmt}"


def reply_url(type_name: str, fmt: str = "json") -> str:
    """Predefined request/reply route for a DTO without a declared route."""
    return f"/{normalise_format(fmt)}/reply/{type_name}"


def one_way_url(type_name: str, fmt: str = "json") -> str:
    """Predefined one-way route for a DTO without a declared route."""
    return f"/{normalise_format(fmt)}/oneway/{type_name}"
