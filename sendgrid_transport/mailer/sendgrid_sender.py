"""SendGrid-based email transport implementation.

This module defines ``SendGridTransport``, which converts a :class:`Message`
into a SendGrid request, posts it through :class:`SendGridClient` and turns
the response into a :class:`Delivered` or :class:`Failed` outcome.

Three hook lists let callers observe or alter a send.  Handlers run in
registration order and always receive the transport as their last argument:

* ``on_ready(mail, message, transport)`` – the request is built and about to
  be posted; handlers may still modify ``mail``.
* ``on_send(mail, message, response, transport)`` – the request was posted,
  whatever the response.
* ``on_error(mail, message, response, transport)`` – the API rejected the
  request.

Exceptions raised by a handler propagate to the caller of ``send``.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, List, Optional, Protocol

from sendgrid_transport.config import TransportSettings
from sendgrid_transport.mailer import Transport
from sendgrid_transport.mailer.client import ProviderResponse, SendGridClient
from sendgrid_transport.mailer.mapper import map_message
from sendgrid_transport.mailer.message import Message
from sendgrid_transport.mailer.outcome import Delivered, Failed, SendOutcome
from sendgrid_transport.mailer.payload import Mail

LOGGER = logging.getLogger(__name__)

Hook = Callable[..., Any]


class ErrorLogger(Protocol):
    def error(self, msg: str) -> Any: ...


class SendGridTransport(Transport):
    """SendGrid implementation of the ``Transport`` interface."""

    def __init__(
        self,
        api_key: str,
        logger: Optional[ErrorLogger] = None,
        client: Optional[SendGridClient] = None,
        settings: Optional[TransportSettings] = None,
    ) -> None:
        if not api_key:
            raise ValueError("api_key must not be empty")
        self._api_key = api_key
        self._logger = logger
        if client is None:
            if settings is None:
                client = SendGridClient(api_key)
            else:
                client = SendGridClient(
                    api_key, base_url=settings.base_url, timeout=settings.timeout
                )
        self._client = client

        self.on_ready: List[Hook] = []
        self.on_error: List[Hook] = []
        self.on_send: List[Hook] = []

    @classmethod
    def from_env(cls, logger: Optional[ErrorLogger] = None) -> "SendGridTransport":
        """Build a transport from ``SENDGRID_*`` environment variables."""
        settings = TransportSettings.from_env()
        return cls(settings.api_key, logger=logger, settings=settings)

    @property
    def logger(self) -> Optional[ErrorLogger]:
        return self._logger

    def set_logger(self, logger: Optional[ErrorLogger] = None) -> None:
        self._logger = logger

    def send(
        self, message: Message, failed_recipients: Optional[List[str]] = None
    ) -> SendOutcome:
        """Send ``message`` through the SendGrid API.

        Args:
            message: The message to deliver.
            failed_recipients: Optional list extended with every recipient
                when the API rejects the request, for callers that collect
                failures by reference.

        Returns:
            ``Delivered`` with the to, cc and bcc count when the API accepts
            the request, ``Failed`` with all recipients otherwise.

        Raises:
            MappingError: If the message cannot be converted; raised before
                any network I/O.
            TransportFault: If the API cannot be reached.
        """
        mail = map_message(message)
        self._fire(self.on_ready, mail, message)

        response = self.send_mail(mail)
        self._fire(self.on_send, mail, message, response)

        if response.ok:
            # Acceptance does not guarantee every address gets the message.
            count = message.recipient_count()
            LOGGER.info("SendGrid accepted message for %d recipient(s)", count)
            return Delivered(count)

        self._fire(self.on_error, mail, message, response)
        if self._logger is not None:
            self._logger.error(f"{response.status_code}: {response.body}")
        LOGGER.warning("SendGrid rejected message with status %d", response.status_code)

        addresses = message.recipients()
        if failed_recipients is not None:
            failed_recipients.extend(addresses)
        return Failed(addresses)

    def send_mail(self, mail: Mail) -> ProviderResponse:
        return self._client.send(mail)

    def ping(self) -> bool:
        # Nothing to keep alive for a stateless HTTP API.
        return True

    def _fire(self, handlers: List[Hook], *args: Any) -> None:
        for handler in handlers:
            handler(*args, self)


__all__ = ["ErrorLogger", "Hook", "SendGridTransport"]
