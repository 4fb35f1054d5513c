"""
Subscribers module interface.
"""

from typing import Protocol, runtime_checkable

from .models import Subscriber


@runtime_checkable
class ISubscriberService(Protocol):
    """Interface for the email subscriber list."""

    async def subscribe(self, email: str) -> Subscriber:
        """
        Add an address to the list.

        Subscribing an address that is already present returns the
        existing record.

        Raises:
            InvalidEmailError: If the address is malformed
        """
        ...

    async def subscriber_exists(self, email: str) -> bool:
        """Check whether an address is subscribed (case-insensitive)."""
        ...

    async def list_subscribers(self) -> list[Subscriber]:
        """All subscribers, newest first."""
        ...
