"""
Subscribers module.

Keeps the list of email addresses that asked for updates. It is
independent of user accounts.
"""

from .interfaces import ISubscriberService
from .models import (
    Subscriber,
    SubscribeRequest,
    SubscribeResponse,
    SubscriberListResponse,
)
from .exceptions import InvalidEmailError

__all__ = [
    "ISubscriberService",
    "Subscriber",
    "SubscribeRequest",
    "SubscribeResponse",
    "SubscriberListResponse",
    "InvalidEmailError",
]
