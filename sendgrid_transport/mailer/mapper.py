"""Conversion of a :class:`Message` into a SendGrid :class:`Mail`."""

from __future__ import annotations

import base64
from typing import List

from sendgrid_transport.mailer.errors import MappingError
from sendgrid_transport.mailer.message import AddressSet, Attachment, Message, MimePart
from sendgrid_transport.mailer.payload import (
    Content,
    EmailAddress,
    Mail,
    MailAttachment,
    Personalization,
)
from sendgrid_transport.mailer.sniff import sniff_mime_type

ALTERNATE_BODY_TYPES = ("text/plain", "text/html")


def map_recipients(addresses: AddressSet) -> List[EmailAddress]:
    """Map an address set to payload addresses, preserving order."""
    return [EmailAddress(email=email, name=name) for email, name in addresses.items()]


def map_message(message: Message) -> Mail:
    """Convert ``message`` into the request sent to the API.

    The function performs no I/O and has no side effects, so mapping the same
    message twice yields equal payloads.

    Args:
        message: The message to convert.

    Returns:
        The populated :class:`Mail`.

    Raises:
        MappingError: If the message has no sender or no to-recipient.
    """
    # The API accepts exactly one sender.
    senders = map_recipients(message.from_addresses)
    if not senders:
        raise MappingError("message has no sender address")
    to_list = map_recipients(message.to)
    if not to_list:
        raise MappingError("message has no to-recipient")

    # Sniff the body so a multipart declaration does not clash with the content.
    content = Content(sniff_mime_type(message.body_bytes()), message.body_text())
    mail = Mail(from_email=senders[0], subject=message.subject, to=to_list[0], content=content)

    personalization = Personalization()
    for address in to_list[1:]:
        personalization.add_to(address)
    for address in map_recipients(message.cc):
        personalization.add_cc(address)
    for address in map_recipients(message.bcc):
        personalization.add_bcc(address)

    for part in message.children:
        if isinstance(part, Attachment):
            mail.add_attachment(
                MailAttachment(
                    content=base64.b64encode(part.body).decode("ascii"),
                    type=part.content_type,
                    filename=part.filename,
                    disposition=part.disposition,
                    content_id=part.content_id,
                )
            )
        elif isinstance(part, MimePart) and part.content_type in ALTERNATE_BODY_TYPES:
            mail.add_content(Content(part.content_type, part.body))

    mail.add_personalization(personalization)
    return mail


__all__ = ["map_message", "map_recipients"]
