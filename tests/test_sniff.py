import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from sendgrid_transport.mailer.sniff import sniff_mime_type

PNG = b"\x89PNG\r\n\x1a\n" + b"\x00\x00\x00\rIHDR" + b"\x00" * 32


@pytest.mark.parametrize(
    "body",
    [
        "<html><body><p>Hi</p></body></html>",
        "\n  <!DOCTYPE html>\n<html><head></head></html>",
        "<p>Short note</p>",
        "\ufeff<div>with a byte order mark</div>",
        "Dear all,\n<html>\n<body>late markup</body></html>",
    ],
)
def test_detects_html(body: str) -> None:
    assert sniff_mime_type(body) == "text/html"


@pytest.mark.parametrize(
    "body",
    [
        "Hello world",
        "BMW news, not a bitmap",
        "Price < 10 and > 5",
        "Grüße aus Köln",
        "",
    ],
)
def test_detects_plain_text(body: str) -> None:
    assert sniff_mime_type(body) == "text/plain"


def test_bytes_and_text_agree() -> None:
    assert sniff_mime_type(b"<html></html>") == sniff_mime_type("<html></html>")


def test_detects_binary_signature() -> None:
    assert sniff_mime_type(PNG) == "image/png"


def test_unknown_binary_is_octet_stream() -> None:
    assert sniff_mime_type(b"\x02\x03\x04\x05\x06garbage\x07") == "application/octet-stream"
