from pos_backend.core.errors import NotFound
from pos_backend.core.store import TenancyStore
from pos_backend.modules.menu_items.schemas import MenuItemCreate, MenuItemUpdate, MenuItemResponse
from typing import List, Optional


class MenuItemService:
    def __init__(self, store: TenancyStore):
        self.store = store

    def list_menu_items(
        self,
        org_id: Optional[str] = None,
        is_active: Optional[bool] = None,
        limit: int = 100,
        offset: int = 0
    ) -> List[MenuItemResponse]:
        """List menu items of organizations the caller belongs to"""
        filters = {}
        if org_id:
            filters["org_id"] = org_id
        if is_active is not None:
            filters["is_active"] = is_active
        rows = self.store.select("menu_items", filters, limit=limit, offset=offset)
        return [MenuItemResponse(**row) for row in rows]

    def get_menu_item(self, item_id: str) -> MenuItemResponse:
        return MenuItemResponse(**self.store.get("menu_items", {"id": item_id}))

    def create_menu_item(self, item_data: MenuItemCreate) -> MenuItemResponse:
        """Create a menu item (owner/admin/manager)"""
        with self.store.transaction():
            row = self.store.insert("menu_items", item_data.model_dump())
        return MenuItemResponse(**row)

    def update_menu_item(self, item_id: str, item_data: MenuItemUpdate) -> MenuItemResponse:
        update_data = item_data.model_dump(exclude_none=True)
        if not update_data:
            return self.get_menu_item(item_id)
        with self.store.transaction():
            rows = self.store.update("menu_items", {"id": item_id}, update_data)
        if not rows:
            raise NotFound()
        return MenuItemResponse(**rows[0])

    def delete_menu_item(self, item_id: str) -> None:
        with self.store.transaction():
            rows = self.store.delete("menu_items", {"id": item_id})
        if not rows:
            raise NotFound()
