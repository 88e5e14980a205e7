"""Abstract interface and implementation for sending email messages.

This subpackage defines a common ``Transport`` interface along with the
concrete :class:`~sendgrid_transport.mailer.sendgrid_sender.SendGridTransport`
targeting the SendGrid HTTP API.  Client code hands a
:class:`~sendgrid_transport.mailer.message.Message` to ``send`` and receives a
structured outcome instead of inspecting raw HTTP details.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from sendgrid_transport.mailer.message import Message
from sendgrid_transport.mailer.outcome import SendOutcome


class Transport(ABC):
    """Abstract base class for email transports.

    Implementations must provide a ``send`` method that delivers one message
    in a single synchronous call and reports how many recipients were
    accepted, or which ones failed.
    """

    @abstractmethod
    def send(self, message: Message) -> SendOutcome:
        """Send a single email message.

        Args:
            message: The message to deliver.

        Returns:
            ``Delivered`` with the number of accepted recipients, or
            ``Failed`` listing every recipient of a rejected message.

        Raises:
            MappingError: If the message cannot be converted.
            TransportFault: If the provider cannot be reached.
        """
        raise NotImplementedError


__all__ = ["Transport"]
