"""Inbound message model consumed by the mapper.

The model mirrors the shape of a host mailer's MIME message: address sets are
ordered mappings of email address to display name, the primary body keeps its
declared content type, and child parts are either inline alternate bodies or
binary attachments.  :meth:`Message.from_email` builds one from a standard
library ``email.message`` object.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from email.errors import HeaderParseError
from email.header import decode_header, make_header
from email.message import Message as MimeMessage
from email.utils import getaddresses
from typing import Dict, List, Optional, Union

# email address -> display name
AddressSet = Dict[str, Optional[str]]


@dataclass
class MimePart:
    """Inline alternate body, e.g. the HTML version of a text message."""

    body: str
    content_type: str = "text/plain"


@dataclass
class Attachment:
    """Binary attachment carried by a message."""

    body: bytes
    content_type: str = "application/octet-stream"
    filename: Optional[str] = None
    disposition: str = "attachment"
    content_id: Optional[str] = None


ChildPart = Union[MimePart, Attachment]


@dataclass
class Message:
    """A message ready to be handed to a transport."""

    subject: str = ""
    from_addresses: AddressSet = field(default_factory=dict)
    to: AddressSet = field(default_factory=dict)
    cc: AddressSet = field(default_factory=dict)
    bcc: AddressSet = field(default_factory=dict)
    body: Union[str, bytes] = ""
    content_type: str = "text/plain"
    children: List[ChildPart] = field(default_factory=list)

    def recipient_count(self) -> int:
        """Return the number of to, cc and bcc entries."""
        return len(self.to) + len(self.cc) + len(self.bcc)

    def recipients(self) -> List[str]:
        """Return to, cc and bcc addresses in order, each address once."""
        merged: Dict[str, None] = {}
        for addresses in (self.to, self.cc, self.bcc):
            for email in addresses:
                merged.setdefault(email, None)
        return list(merged)

    def body_text(self) -> str:
        if isinstance(self.body, bytes):
            return self.body.decode("utf-8", errors="replace")
        return self.body

    def body_bytes(self) -> bytes:
        if isinstance(self.body, bytes):
            return self.body
        return self.body.encode("utf-8")

    @classmethod
    def from_email(cls, msg: MimeMessage) -> "Message":
        """Build a :class:`Message` from a standard library email message.

        The first leaf part that is text and not an attachment becomes the
        primary body.  Every other leaf is turned into an :class:`Attachment`
        when it is marked as one, carries a filename or a Content-ID, or is
        not text, and into a :class:`MimePart` otherwise.  Encoded headers
        (RFC 2047) are decoded.

        Args:
            msg: A parsed ``email.message.Message`` or ``EmailMessage``.

        Returns:
            The equivalent :class:`Message`.
        """
        leaves = [part for part in msg.walk() if not part.is_multipart()]

        body: Union[str, bytes] = ""
        content_type = "text/plain"
        children: List[ChildPart] = []
        primary_found = False
        for part in leaves:
            if not primary_found and _is_text_body(part):
                body = _decode_text(part)
                content_type = part.get_content_type()
                primary_found = True
            elif _is_attachment(part):
                content_id = _content_id(part)
                # CID references are rendered inline unless marked otherwise
                default_disposition = "inline" if content_id else "attachment"
                children.append(
                    Attachment(
                        body=part.get_payload(decode=True) or b"",
                        content_type=part.get_content_type(),
                        filename=part.get_filename(),
                        disposition=part.get_content_disposition() or default_disposition,
                        content_id=content_id,
                    )
                )
            else:
                children.append(
                    MimePart(body=_decode_text(part), content_type=part.get_content_type())
                )

        return cls(
            subject=_decode_header(msg.get("Subject", "")),
            from_addresses=_address_set(msg, "From"),
            to=_address_set(msg, "To"),
            cc=_address_set(msg, "Cc"),
            bcc=_address_set(msg, "Bcc"),
            body=body,
            content_type=content_type,
            children=children,
        )


def _address_set(msg: MimeMessage, header: str) -> AddressSet:
    values = [str(value) for value in msg.get_all(header, [])]
    addresses: AddressSet = {}
    for name, email in getaddresses(values):
        if email:
            addresses.setdefault(email, _decode_header(name) or None)
    return addresses


def _decode_header(value: object) -> str:
    raw = str(value)
    try:
        return str(make_header(decode_header(raw)))
    except (HeaderParseError, LookupError, UnicodeDecodeError):
        return raw


def _is_attachment(part: MimeMessage) -> bool:
    return (
        part.get_content_disposition() == "attachment"
        or part.get_filename() is not None
        or part.get("Content-ID") is not None
        or part.get_content_maintype() != "text"
    )


def _is_text_body(part: MimeMessage) -> bool:
    return part.get_content_maintype() == "text" and not _is_attachment(part)


def _decode_text(part: MimeMessage) -> str:
    payload = part.get_payload(decode=True)
    if payload is None:
        return ""
    charset = part.get_content_charset() or "utf-8"
    try:
        return payload.decode(charset, errors="replace")
    except LookupError:
        return payload.decode("utf-8", errors="replace")


def _content_id(part: MimeMessage) -> Optional[str]:
    value = part.get("Content-ID")
    if value is None:
        return None
    return str(value).strip().strip("<>")


__all__ = ["AddressSet", "Attachment", "ChildPart", "Message", "MimePart"]
