from fastapi import APIRouter, Depends
from pos_backend.core.dependencies import get_store
from pos_backend.core.store import TenancyStore
from pos_backend.modules.organizations.schemas import (
    OrganizationUpdate, OrganizationResponse,
    MemberAdd, MemberRoleUpdate, MemberResponse
)
from pos_backend.modules.organizations.service import OrganizationService
from typing import List

router = APIRouter(prefix="/organizations", tags=["organizations"])


def get_organization_service(store: TenancyStore = Depends(get_store)) -> OrganizationService:
    return OrganizationService(store)


@router.get("", response_model=List[OrganizationResponse])
async def list_organizations(service: OrganizationService = Depends(get_organization_service)):
    """List organizations the caller is a member of"""
    return service.list_organizations()


@router.get("/{org_id}", response_model=OrganizationResponse)
async def get_organization(org_id: str, service: OrganizationService = Depends(get_organization_service)):
    """Get organization by ID (members only)"""
    return service.get_organization(org_id)


@router.patch("/{org_id}", response_model=OrganizationResponse)
async def update_organization(
    org_id: str,
    org_data: OrganizationUpdate,
    service: OrganizationService = Depends(get_organization_service)
):
    """Update organization (owner/admin)"""
    return service.update_organization(org_id, org_data)


@router.delete("/{org_id}", status_code=204)
async def delete_organization(org_id: str, service: OrganizationService = Depends(get_organization_service)):
    """Delete organization and everything it owns (owner/admin)"""
    service.delete_organization(org_id)


@router.get("/{org_id}/members", response_model=List[MemberResponse])
async def list_members(org_id: str, service: OrganizationService = Depends(get_organization_service)):
    """List members of the organization (members only)"""
    return service.list_members(org_id)


@router.post("/{org_id}/members", response_model=MemberResponse, status_code=201)
async def add_member(
    org_id: str,
    member_data: MemberAdd,
    service: OrganizationService = Depends(get_organization_service)
):
    """Add a member to the organization (owner/admin)"""
    return service.add_member(org_id, member_data)


@router.patch("/{org_id}/members/{user_id}", response_model=MemberResponse)
async def update_member_role(
    org_id: str,
    user_id: str,
    role_data: MemberRoleUpdate,
    service: OrganizationService = Depends(get_organization_service)
):
    """Change a member's role (owner/admin)"""
    return service.update_member_role(org_id, user_id, role_data)


@router.delete("/{org_id}/members/{user_id}", status_code=204)
async def remove_member(
    org_id: str,
    user_id: str,
    service: OrganizationService = Depends(get_organization_service)
):
    """Remove a member from the organization (owner/admin)"""
    service.remove_member(org_id, user_id)
