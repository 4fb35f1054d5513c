"""
Subscriber API endpoints.
"""

from fastapi import APIRouter, Depends

from api.middleware.auth import require_admin
from api.dependencies import get_subscriber_service
from shared.models import AuthenticatedUser

from .interfaces import ISubscriberService
from .models import SubscribeRequest, SubscribeResponse, SubscriberListResponse

router = APIRouter()


@router.post("", response_model=SubscribeResponse, status_code=201)
async def subscribe(
    request: SubscribeRequest,
    service: ISubscriberService = Depends(get_subscriber_service),
) -> SubscribeResponse:
    """Subscribe an email address. Subscribing twice is harmless."""
    subscriber = await service.subscribe(request.email)
    return SubscribeResponse(subscriber=subscriber)


@router.get("", response_model=SubscriberListResponse)
async def list_subscribers(
    admin: AuthenticatedUser = Depends(require_admin),
    service: ISubscriberService = Depends(get_subscriber_service),
) -> SubscriberListResponse:
    """List every subscriber (site admin only)."""
    items = await service.list_subscribers()
    return SubscriberListResponse(items=items, total=len(items))
