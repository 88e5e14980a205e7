"""HTTP client for the SendGrid v3 API.

The client posts a :class:`Mail` as JSON and returns the status and body
without raising on HTTP error statuses; the transport decides what a
rejection means.  Network failures are wrapped in :class:`TransportFault`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Optional

import requests

from sendgrid_transport.mailer.errors import TransportFault
from sendgrid_transport.mailer.payload import Mail

DEFAULT_BASE_URL = "https://api.sendgrid.com/v3"

LOGGER = logging.getLogger(__name__)


@dataclass
class ProviderResponse:
    status_code: int
    body: str = ""
    headers: Dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        """2xx responses indicate an accepted request."""
        return 200 <= self.status_code < 300


class SendGridClient:
    """Thin wrapper around ``requests`` for the ``mail/send`` endpoint."""

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._session = session

    @property
    def url(self) -> str:
        return f"{self._base_url}/mail/send"

    def send(self, mail: Mail) -> ProviderResponse:
        """Post ``mail`` to the API.

        Raises:
            TransportFault: If the request could not complete.
        """
        headers = {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
        }
        LOGGER.debug("POST %s", self.url)
        # Without a caller-owned session each request uses its own connection.
        post = self._session.post if self._session is not None else requests.post
        try:
            response = post(
                self.url, json=mail.to_dict(), headers=headers, timeout=self._timeout
            )
        except requests.RequestException as exc:
            raise TransportFault(f"Failed to reach SendGrid at {self.url}: {exc}") from exc
        return ProviderResponse(
            status_code=response.status_code,
            body=response.text,
            headers=dict(response.headers),
        )


__all__ = ["DEFAULT_BASE_URL", "ProviderResponse", "SendGridClient"]
