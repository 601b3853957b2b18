from pos_backend.core.errors import NotFound
from pos_backend.core.store import TenancyStore
from pos_backend.modules.organizations.schemas import (
    OrganizationUpdate, OrganizationResponse,
    MemberAdd, MemberRoleUpdate, MemberResponse
)
from typing import List


class OrganizationService:
    def __init__(self, store: TenancyStore):
        self.store = store

    def list_organizations(self) -> List[OrganizationResponse]:
        """Organizations the caller is a member of"""
        return [OrganizationResponse(**row) for row in self.store.select("organizations")]

    def get_organization(self, org_id: str) -> OrganizationResponse:
        """Get organization by ID"""
        return OrganizationResponse(**self.store.get("organizations", {"id": org_id}))

    def update_organization(self, org_id: str, org_data: OrganizationUpdate) -> OrganizationResponse:
        """Update organization (owner/admin)"""
        update_data = org_data.model_dump(exclude_none=True)
        if not update_data:
            return self.get_organization(org_id)
        with self.store.transaction():
            rows = self.store.update("organizations", {"id": org_id}, update_data)
        if not rows:
            raise NotFound()
        return OrganizationResponse(**rows[0])

    def delete_organization(self, org_id: str) -> None:
        """Delete organization; memberships, subscriptions, branches and menu items cascade"""
        with self.store.transaction():
            rows = self.store.delete("organizations", {"id": org_id})
        if not rows:
            raise NotFound()

    def list_members(self, org_id: str) -> List[MemberResponse]:
        """List members of an organization the caller belongs to"""
        rows = self.store.select("org_memberships", {"org_id": org_id})
        return [MemberResponse(**row) for row in rows]

    def add_member(self, org_id: str, member_data: MemberAdd) -> MemberResponse:
        """Bind an identity to the organization (owner/admin)"""
        with self.store.transaction():
            row = self.store.insert("org_memberships", {
                "org_id": org_id,
                "user_id": member_data.user_id,
                "role": member_data.role.value,
            })
        return MemberResponse(**row)

    def update_member_role(self, org_id: str, user_id: str, role_data: MemberRoleUpdate) -> MemberResponse:
        """Change a member's role (owner/admin)"""
        with self.store.transaction():
            rows = self.store.update(
                "org_memberships",
                {"org_id": org_id, "user_id": user_id},
                {"role": role_data.role.value},
            )
        if not rows:
            raise NotFound()
        return MemberResponse(**rows[0])

    def remove_member(self, org_id: str, user_id: str) -> None:
        """Remove a member (owner/admin)"""
        with self.store.transaction():
            rows = self.store.delete("org_memberships", {"org_id": org_id, "user_id": user_id})
        if not rows:
            raise NotFound()
