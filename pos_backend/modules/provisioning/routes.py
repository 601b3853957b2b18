from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from pos_backend.core.dependencies import get_current_user_id
from pos_backend.database.session import get_db
from pos_backend.modules.provisioning.schemas import ProvisionRequest, ProvisionResponse
from pos_backend.modules.provisioning.service import ProvisioningService
from typing import Dict, Optional

router = APIRouter(prefix="/provision", tags=["provisioning"])


def get_provisioning_service(db: Session = Depends(get_db)) -> ProvisioningService:
    return ProvisioningService(db)


@router.post("", response_model=ProvisionResponse)
async def provision_first_org(
    payload: Optional[ProvisionRequest] = None,
    user_data: Dict = Depends(get_current_user_id),
    service: ProvisioningService = Depends(get_provisioning_service)
):
    """Idempotently create the caller's first organization, membership, subscription and branch."""
    org_name = payload.org_name if payload else None
    return service.provision_first_org(user_data["id"], org_name)
