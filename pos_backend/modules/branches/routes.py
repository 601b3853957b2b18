from fastapi import APIRouter, Depends, Query
from pos_backend.config.settings import settings
from pos_backend.core.dependencies import get_store
from pos_backend.core.store import TenancyStore
from pos_backend.modules.branches.schemas import BranchCreate, BranchUpdate, BranchResponse
from pos_backend.modules.branches.service import BranchService
from typing import List, Optional

router = APIRouter(prefix="/branches", tags=["branches"])


def get_branch_service(store: TenancyStore = Depends(get_store)) -> BranchService:
    return BranchService(store)


@router.get("", response_model=List[BranchResponse])
async def list_branches(
    org_id: Optional[str] = None,
    limit: int = Query(100, ge=1, le=settings.max_page_size),
    offset: int = Query(0, ge=0),
    service: BranchService = Depends(get_branch_service)
):
    """List branches of organizations the caller belongs to"""
    return service.list_branches(org_id=org_id, limit=limit, offset=offset)


@router.post("", response_model=BranchResponse, status_code=201)
async def create_branch(branch_data: BranchCreate, service: BranchService = Depends(get_branch_service)):
    """Create a branch (owner/admin/manager)"""
    return service.create_branch(branch_data)


@router.get("/{branch_id}", response_model=BranchResponse)
async def get_branch(branch_id: str, service: BranchService = Depends(get_branch_service)):
    """Get branch by ID"""
    return service.get_branch(branch_id)


@router.patch("/{branch_id}", response_model=BranchResponse)
async def update_branch(
    branch_id: str,
    branch_data: BranchUpdate,
    service: BranchService = Depends(get_branch_service)
):
    """Rename a branch (owner/admin/manager)"""
    return service.update_branch(branch_id, branch_data)


@router.delete("/{branch_id}", status_code=204)
async def delete_branch(branch_id: str, service: BranchService = Depends(get_branch_service)):
    """Delete a branch (owner/admin/manager)"""
    service.delete_branch(branch_id)
