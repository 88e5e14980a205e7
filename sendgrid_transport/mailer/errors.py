"""Exceptions raised by the SendGrid transport.

Provider rejections (HTTP 4xx/5xx) are not exceptions; they are reported as a
:class:`~sendgrid_transport.mailer.outcome.Failed` outcome.  Only messages
that cannot be converted and network calls that cannot complete raise.
"""

from __future__ import annotations


class TransportError(Exception):
    """Base class for all transport errors."""


class MappingError(TransportError, ValueError):
    """The message cannot be converted into a SendGrid request."""


class TransportFault(TransportError):
    """The HTTP call to the provider could not complete."""


__all__ = ["TransportError", "MappingError", "TransportFault"]
