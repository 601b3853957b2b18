from sqlalchemy.orm import Session
from pos_backend.config.plans_config import get_plan_catalog
from pos_backend.core.policy import ExecutionContext
from pos_backend.core.store import TenancyStore
from pos_backend.modules.plans.schemas import PlanResponse
from typing import List
import logging

logger = logging.getLogger(__name__)


class PlanService:
    def __init__(self, store: TenancyStore):
        self.store = store

    def list_plans(self) -> List[PlanResponse]:
        """List the public plan catalog"""
        rows = self.store.select("plans", order_by=["monthly_price_cents", "id"])
        return [PlanResponse(**row) for row in rows]

    def get_plan(self, plan_id: str) -> PlanResponse:
        """Get plan by ID"""
        return PlanResponse(**self.store.get("plans", {"id": plan_id}))


def seed_plan_catalog(session: Session) -> int:
    """Insert catalog plans that are missing; existing plans are left untouched."""
    store = TenancyStore(session, ExecutionContext.elevated())
    created_count = 0
    with store.transaction():
        for plan in get_plan_catalog():
            if store.select("plans", {"id": plan["id"]}, limit=1):
                continue
            store.insert("plans", plan)
            created_count += 1
            logger.debug("Created plan: %s", plan["id"])
    logger.info("Plans seeded: %s created", created_count)
    return created_count
