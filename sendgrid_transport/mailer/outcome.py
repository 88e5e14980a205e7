"""Result types returned by :meth:`Transport.send`.

A send either succeeds for the whole request or fails for the whole request;
the provider returns one status per call, so no per-address outcome exists.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Union


@dataclass(frozen=True)
class Delivered:
    """The provider accepted the request for ``count`` recipients.

    Acceptance is not a delivery guarantee; ``count`` is an upper bound.
    """

    count: int

    @property
    def ok(self) -> bool:
        return True

    @property
    def failed_recipients(self) -> List[str]:
        return []


@dataclass(frozen=True)
class Failed:
    """The provider rejected the request; every recipient is reported."""

    addresses: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return False

    @property
    def count(self) -> int:
        return 0

    @property
    def failed_recipients(self) -> List[str]:
        return list(self.addresses)


SendOutcome = Union[Delivered, Failed]


__all__ = ["Delivered", "Failed", "SendOutcome"]
