"""Transport settings read from the environment.

Environment variables used:

* ``SENDGRID_API_KEY`` – API key for SendGrid (required)
* ``SENDGRID_BASE_URL`` – Optional base URL; defaults to the official API
* ``SENDGRID_TIMEOUT`` – Optional request timeout in seconds.  When unset no
  timeout is applied and the HTTP client's own behaviour is kept.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from sendgrid_transport.mailer.client import DEFAULT_BASE_URL


@dataclass(frozen=True)
class TransportSettings:
    api_key: str
    base_url: str = DEFAULT_BASE_URL
    timeout: Optional[float] = None

    @classmethod
    def from_env(cls) -> "TransportSettings":
        api_key = os.environ.get("SENDGRID_API_KEY")
        if not api_key:
            raise ValueError("SENDGRID_API_KEY must be set")
        base_url = os.environ.get("SENDGRID_BASE_URL") or DEFAULT_BASE_URL
        raw_timeout = os.environ.get("SENDGRID_TIMEOUT", "").strip()
        try:
            timeout = float(raw_timeout) if raw_timeout else None
        except ValueError as exc:
            raise ValueError(f"SENDGRID_TIMEOUT must be a number, got {raw_timeout!r}") from exc
        return cls(api_key=api_key, base_url=base_url, timeout=timeout)


__all__ = ["TransportSettings"]
