"""Top‑level package for the SendGrid transport.

This package converts generic email messages into requests for the SendGrid
v3 ``mail/send`` API and reports which recipients were accepted or failed.
The :mod:`sendgrid_transport.mailer` subpackage holds the message model, the
payload mapper and the transport itself, while :mod:`sendgrid_transport.config`
reads settings from the environment.

The ``__all__`` variable enumerates the primary public modules for
convenience when using ``from sendgrid_transport import ...``.
"""

from __future__ import annotations

__all__ = [
    "config",
    "mailer",
]

# SemVer version of the package
__version__: str = "0.1.0"
