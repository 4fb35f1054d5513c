"""
Subscribers module data models.
"""

from datetime import datetime
from pydantic import BaseModel, Field


class Subscriber(BaseModel):
    """An email address subscribed to updates."""

    id: str = Field(..., description="Subscriber ID (UUID)")
    email: str = Field(..., description="Lowercased email address")
    created_at: datetime = Field(..., description="Subscription time")


class SubscribeRequest(BaseModel):
    """
    Request to subscribe an email address.

    The address is checked by the service so an invalid one produces the
    same message the signup form shows.
    """

    email: str = Field(..., max_length=320)


class SubscribeResponse(BaseModel):
    """Response after subscribing."""

    message: str = "Thank you for subscribing!"
    subscriber: Subscriber


class SubscriberListResponse(BaseModel):
    """All subscribers, newest first."""

    items: list[Subscriber]
    total: int
