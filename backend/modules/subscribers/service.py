"""
Subscriber service implementation.
"""

import logging

from pydantic import EmailStr, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from shared.exceptions import ConflictError
from .exceptions import InvalidEmailError
from .interfaces import ISubscriberService
from .models import Subscriber
from .repository import SubscriberRepository

logger = logging.getLogger(__name__)

_email_adapter = TypeAdapter(EmailStr)


def normalize_email(email: str) -> str:
    """
    Validate an address and return it lowercased.

    Raises:
        InvalidEmailError: If the address is malformed
    """
    candidate = email.strip()
    try:
        _email_adapter.validate_python(candidate)
    except PydanticValidationError as e:
        raise InvalidEmailError(candidate) from e
    return candidate.lower()


class SubscriberService(ISubscriberService):
    """Subscriber list backed by the Supabase `subscribers` table."""

    def __init__(self, repository: SubscriberRepository):
        self._repo = repository

    async def subscribe(self, email: str) -> Subscriber:
        address = normalize_email(email)

        existing = self._repo.get_by_email(address)
        if existing is not None:
            logger.debug("Address already subscribed: %s", address)
            return existing

        try:
            subscriber = self._repo.create(address)
        except ConflictError:
            # Another request inserted the same address first
            existing = self._repo.get_by_email(address)
            if existing is None:
                raise
            return existing

        logger.info("New subscriber %s", subscriber.id)
        return subscriber

    async def subscriber_exists(self, email: str) -> bool:
        return self._repo.get_by_email(email.strip().lower()) is not None

    async def list_subscribers(self) -> list[Subscriber]:
        return self._repo.list_all()
