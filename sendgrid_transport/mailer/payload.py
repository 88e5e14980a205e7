"""Outbound request model for the SendGrid v3 ``mail/send`` endpoint.

Objects here are plain dataclasses built per send by
:func:`~sendgrid_transport.mailer.mapper.map_message`.  ``to_dict`` renders
the JSON body the API expects; keys with ``None`` or empty-list values are
left out because the API rejects several of them when present but empty.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Set


def _compact(data: Dict[str, Any]) -> Dict[str, Any]:
    return {key: value for key, value in data.items() if value is not None and value != []}


@dataclass
class EmailAddress:
    email: str
    name: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return _compact({"email": self.email, "name": self.name})


@dataclass
class Content:
    """One renderable body variant."""

    type: str
    value: str

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type, "value": self.value}


@dataclass
class MailAttachment:
    """Attachment block; ``content`` is base64 text."""

    content: str
    type: Optional[str] = None
    filename: Optional[str] = None
    disposition: Optional[str] = None
    content_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return _compact(
            {
                "content": self.content,
                "type": self.type,
                "filename": self.filename,
                "disposition": self.disposition,
                "content_id": self.content_id,
            }
        )


@dataclass
class Personalization:
    """Recipients beyond the primary one: extra to, cc and bcc."""

    to: List[EmailAddress] = field(default_factory=list)
    cc: List[EmailAddress] = field(default_factory=list)
    bcc: List[EmailAddress] = field(default_factory=list)

    def add_to(self, address: EmailAddress) -> None:
        self.to.append(address)

    def add_cc(self, address: EmailAddress) -> None:
        self.cc.append(address)

    def add_bcc(self, address: EmailAddress) -> None:
        self.bcc.append(address)

    def is_empty(self) -> bool:
        return not (self.to or self.cc or self.bcc)

    def __len__(self) -> int:
        return len(self.to) + len(self.cc) + len(self.bcc)

    def to_dict(self) -> Optional[Dict[str, Any]]:
        """Return the JSON form, or ``None`` when there is nothing to send."""
        if self.is_empty():
            return None
        return _compact(
            {
                "to": [address.to_dict() for address in self.to],
                "cc": [address.to_dict() for address in self.cc],
                "bcc": [address.to_dict() for address in self.bcc],
            }
        )


@dataclass
class Mail:
    """A complete SendGrid request.

    Args:
        from_email: The single sender.
        subject: Subject line.
        to: The primary recipient.
        content: The primary content block.
    """

    from_email: EmailAddress
    subject: str
    to: EmailAddress
    content: Content
    contents: List[Content] = field(default_factory=list)
    attachments: List[MailAttachment] = field(default_factory=list)
    personalization: Optional[Personalization] = None

    def add_content(self, content: Content) -> None:
        self.contents.append(content)

    def add_attachment(self, attachment: MailAttachment) -> None:
        self.attachments.append(attachment)

    def add_personalization(self, personalization: Personalization) -> None:
        # An empty personalization is a fatal request error on the API side.
        if personalization.is_empty():
            return
        self.personalization = personalization

    def to_dict(self) -> Dict[str, Any]:
        """Render the request body.

        The primary recipient opens the ``to`` list of the first
        personalization, followed by the extra recipients, because the API
        requires every personalization to carry at least one ``to``.  An
        address is rendered once per personalization; the API rejects
        duplicates across ``to``, ``cc`` and ``bcc``.
        """
        extra = self.personalization or Personalization()
        seen: Set[str] = set()
        recipients: Dict[str, Any] = {}
        for key, addresses in (
            ("to", [self.to] + extra.to),
            ("cc", extra.cc),
            ("bcc", extra.bcc),
        ):
            unique = []
            for address in addresses:
                if address.email.lower() in seen:
                    continue
                seen.add(address.email.lower())
                unique.append(address.to_dict())
            if unique:
                recipients[key] = unique

        return _compact(
            {
                "personalizations": [recipients],
                "from": self.from_email.to_dict(),
                "subject": self.subject,
                "content": [self.content.to_dict()]
                + [content.to_dict() for content in self.contents],
                "attachments": [attachment.to_dict() for attachment in self.attachments],
            }
        )


__all__ = [
    "Content",
    "EmailAddress",
    "Mail",
    "MailAttachment",
    "Personalization",
]
