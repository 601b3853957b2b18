from pos_backend.core.errors import NotFound
from pos_backend.core.store import TenancyStore
from pos_backend.modules.branches.schemas import BranchCreate, BranchUpdate, BranchResponse
from typing import List, Optional


class BranchService:
    def __init__(self, store: TenancyStore):
        self.store = store

    def list_branches(self, org_id: Optional[str] = None, limit: int = 100, offset: int = 0) -> List[BranchResponse]:
        """List branches; other tenants' branches are simply absent"""
        filters = {"org_id": org_id} if org_id else {}
        rows = self.store.select("branches", filters, limit=limit, offset=offset)
        return [BranchResponse(**row) for row in rows]

    def get_branch(self, branch_id: str) -> BranchResponse:
        return BranchResponse(**self.store.get("branches", {"id": branch_id}))

    def create_branch(self, branch_data: BranchCreate) -> BranchResponse:
        """Create a branch (owner/admin/manager)"""
        with self.store.transaction():
            row = self.store.insert("branches", branch_data.model_dump())
        return BranchResponse(**row)

    def update_branch(self, branch_id: str, branch_data: BranchUpdate) -> BranchResponse:
        with self.store.transaction():
            rows = self.store.update("branches", {"id": branch_id}, branch_data.model_dump())
        if not rows:
            raise NotFound()
        return BranchResponse(**rows[0])

    def delete_branch(self, branch_id: str) -> None:
        with self.store.transaction():
            rows = self.store.delete("branches", {"id": branch_id})
        if not rows:
            raise NotFound()
