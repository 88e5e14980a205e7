"""Content sniffing for message bodies.

The declared content type of a body is not trusted: a multipart message often
declares ``multipart/alternative`` on a body that is really HTML, and the API
rejects the request when the declared type and the content disagree.  This
module infers the type from the bytes themselves, the way ``libmagic`` would,
distinguishing ``text/html``, ``text/plain`` and binary data.

Binary signatures are matched with the ``filetype`` library.
"""

from __future__ import annotations

import re
from typing import Union

import filetype

SNIFF_LENGTH = 1445

_BOMS = (b"\xef\xbb\xbf", b"\xfe\xff", b"\xff\xfe")

# Tags that identify HTML when they open the document.
_LEADING_TAGS = (
    b"<!doctype html",
    b"<html",
    b"<head",
    b"<script",
    b"<iframe",
    b"<h1",
    b"<div",
    b"<font",
    b"<table",
    b"<a",
    b"<style",
    b"<title",
    b"<b",
    b"<body",
    b"<br",
    b"<p",
    b"<!--",
)

# Tags that identify HTML anywhere within the sniffed window.
_EMBEDDED_TAGS = re.compile(rb"<(!doctype\s+html|html|head|body)[\s>]", re.IGNORECASE)

_BINARY_BYTES = frozenset(
    list(range(0x00, 0x09)) + [0x0B] + list(range(0x0E, 0x1B)) + list(range(0x1C, 0x20))
)


def _strip_leading(data: bytes) -> bytes:
    for bom in _BOMS:
        if data.startswith(bom):
            data = data[len(bom):]
            break
    return data.lstrip(b" \t\r\n\x0c")


def _looks_like_html(data: bytes) -> bool:
    head = _strip_leading(data).lower()
    for tag in _LEADING_TAGS:
        if head.startswith(tag):
            rest = head[len(tag):len(tag) + 1]
            # "<!--" needs no terminator; the others must end the tag name
            if tag == b"<!--" or rest in (b" ", b">", b""):
                return True
    return _EMBEDDED_TAGS.search(data) is not None


def _has_binary_bytes(data: bytes) -> bool:
    return any(byte in _BINARY_BYTES for byte in data)


def _is_utf8(data: bytes) -> bool:
    try:
        data.decode("utf-8")
    except UnicodeDecodeError as exc:
        # the window may cut a multi-byte sequence in half
        return exc.reason == "unexpected end of data" and exc.start >= len(data) - 3
    return True


def sniff_mime_type(data: Union[bytes, str]) -> str:
    """Return the MIME type of ``data`` inferred from its content.

    Args:
        data: Raw body; text is encoded as UTF-8 before sniffing.

    Returns:
        ``text/html``, ``text/plain``, a binary type recognised by its magic
        bytes, or ``application/octet-stream``.
    """
    if isinstance(data, str):
        data = data.encode("utf-8")
    window = data[:SNIFF_LENGTH]
    if not window.strip():
        return "text/plain"
    if _looks_like_html(window):
        return "text/html"

    binary = _has_binary_bytes(window)
    kind = filetype.guess(data[:8192])
    if kind is not None and (binary or not _is_utf8(window)):
        return kind.mime
    if not binary:
        return "text/plain"
    return "application/octet-stream"


__all__ = ["sniff_mime_type"]
