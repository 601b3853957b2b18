from fastapi import APIRouter, Depends
from pos_backend.core.dependencies import get_public_store
from pos_backend.core.store import TenancyStore
from pos_backend.modules.plans.schemas import PlanResponse
from pos_backend.modules.plans.service import PlanService
from typing import List

router = APIRouter(prefix="/plans", tags=["plans"])


def get_plan_service(store: TenancyStore = Depends(get_public_store)) -> PlanService:
    return PlanService(store)


@router.get("", response_model=List[PlanResponse])
async def list_plans(service: PlanService = Depends(get_plan_service)):
    """List available plans (public)"""
    return service.list_plans()


@router.get("/{plan_id}", response_model=PlanResponse)
async def get_plan(plan_id: str, service: PlanService = Depends(get_plan_service)):
    """Get plan by ID (public)"""
    return service.get_plan(plan_id)
