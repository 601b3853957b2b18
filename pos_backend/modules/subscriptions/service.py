from pos_backend.core.errors import NotFound
from pos_backend.core.store import TenancyStore
from pos_backend.modules.subscriptions.schemas import SubscriptionUpdate, SubscriptionResponse
from typing import List, Optional


class SubscriptionService:
    def __init__(self, store: TenancyStore):
        self.store = store

    def list_subscriptions(self, org_id: Optional[str] = None, status: Optional[str] = None) -> List[SubscriptionResponse]:
        """List subscriptions of organizations the caller belongs to"""
        filters = {}
        if org_id:
            filters["org_id"] = org_id
        if status:
            filters["status"] = status
        return [SubscriptionResponse(**row) for row in self.store.select("subscriptions", filters)]

    def get_subscription(self, subscription_id: str) -> SubscriptionResponse:
        return SubscriptionResponse(**self.store.get("subscriptions", {"id": subscription_id}))

    def update_subscription(self, subscription_id: str, data: SubscriptionUpdate) -> SubscriptionResponse:
        """Change plan, status or period end (owner/admin)"""
        update_data = data.model_dump(exclude_unset=True)
        if not update_data:
            return self.get_subscription(subscription_id)
        with self.store.transaction():
            rows = self.store.update("subscriptions", {"id": subscription_id}, update_data)
        if not rows:
            raise NotFound()
        return SubscriptionResponse(**rows[0])
