from fastapi import APIRouter, Depends, Query
from pos_backend.config.settings import settings
from pos_backend.core.dependencies import get_store
from pos_backend.core.store import TenancyStore
from pos_backend.modules.menu_items.schemas import MenuItemCreate, MenuItemUpdate, MenuItemResponse
from pos_backend.modules.menu_items.service import MenuItemService
from typing import List, Optional

router = APIRouter(prefix="/menu-items", tags=["menu-items"])


def get_menu_item_service(store: TenancyStore = Depends(get_store)) -> MenuItemService:
    return MenuItemService(store)


@router.get("", response_model=List[MenuItemResponse])
async def list_menu_items(
    org_id: Optional[str] = None,
    is_active: Optional[bool] = None,
    limit: int = Query(100, ge=1, le=settings.max_page_size),
    offset: int = Query(0, ge=0),
    service: MenuItemService = Depends(get_menu_item_service)
):
    """List menu items visible to the caller"""
    return service.list_menu_items(org_id=org_id, is_active=is_active, limit=limit, offset=offset)


@router.post("", response_model=MenuItemResponse, status_code=201)
async def create_menu_item(item_data: MenuItemCreate, service: MenuItemService = Depends(get_menu_item_service)):
    """Create a menu item (owner/admin/manager)"""
    return service.create_menu_item(item_data)


@router.get("/{item_id}", response_model=MenuItemResponse)
async def get_menu_item(item_id: str, service: MenuItemService = Depends(get_menu_item_service)):
    """Get menu item by ID"""
    return service.get_menu_item(item_id)


@router.patch("/{item_id}", response_model=MenuItemResponse)
async def update_menu_item(
    item_id: str,
    item_data: MenuItemUpdate,
    service: MenuItemService = Depends(get_menu_item_service)
):
    """Update a menu item (owner/admin/manager)"""
    return service.update_menu_item(item_id, item_data)


@router.delete("/{item_id}", status_code=204)
async def delete_menu_item(item_id: str, service: MenuItemService = Depends(get_menu_item_service)):
    """Delete a menu item (owner/admin/manager)"""
    service.delete_menu_item(item_id)
