from fastapi import APIRouter, Depends
from pos_backend.core.dependencies import get_store
from pos_backend.core.store import TenancyStore
from pos_backend.modules.subscriptions.schemas import SubscriptionUpdate, SubscriptionResponse
from pos_backend.modules.subscriptions.service import SubscriptionService
from typing import List, Optional

router = APIRouter(prefix="/subscriptions", tags=["subscriptions"])


def get_subscription_service(store: TenancyStore = Depends(get_store)) -> SubscriptionService:
    return SubscriptionService(store)


@router.get("", response_model=List[SubscriptionResponse])
async def list_subscriptions(
    org_id: Optional[str] = None,
    status: Optional[str] = None,
    service: SubscriptionService = Depends(get_subscription_service)
):
    """List subscriptions visible to the caller"""
    return service.list_subscriptions(org_id=org_id, status=status)


@router.get("/{subscription_id}", response_model=SubscriptionResponse)
async def get_subscription(subscription_id: str, service: SubscriptionService = Depends(get_subscription_service)):
    """Get subscription by ID"""
    return service.get_subscription(subscription_id)


@router.patch("/{subscription_id}", response_model=SubscriptionResponse)
async def update_subscription(
    subscription_id: str,
    data: SubscriptionUpdate,
    service: SubscriptionService = Depends(get_subscription_service)
):
    """Update subscription (owner/admin)"""
    return service.update_subscription(subscription_id, data)
