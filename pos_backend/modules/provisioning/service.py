"""
First-tenant provisioning.

provision_first_org bootstraps the caller's first organization: the
organization itself, an owner membership, an active subscription on the
default plan and a first branch. It runs under an elevated store context
because the membership it creates is what would otherwise authorize these
writes, and it runs as one transaction so a caller never ends up with an
organization but no membership, or a membership but no subscription.

Safe to call after every sign-in: once the caller has a membership the only
possible write is backfilling a missing branch.
"""

from typing import Optional
import logging

from sqlalchemy.orm import Session

from pos_backend.config.settings import settings
from pos_backend.core.errors import ConstraintViolation, Unauthenticated
from pos_backend.core.policy import ExecutionContext
from pos_backend.core.store import TenancyStore
from pos_backend.modules.organizations.models import OrgRole
from pos_backend.modules.provisioning.schemas import ProvisionResponse
from pos_backend.modules.subscriptions.models import STATUS_ACTIVE

logger = logging.getLogger(__name__)

MAX_ORG_NAME_LENGTH = 256


def resolve_org_name(org_name: Optional[str]) -> str:
    name = (org_name or "").strip()
    if not name:
        return settings.default_org_name
    return name[:MAX_ORG_NAME_LENGTH]


class ProvisioningService:
    def __init__(self, session: Session, max_attempts: Optional[int] = None):
        self.session = session
        self.max_attempts = max(1, max_attempts or settings.provisioning_max_attempts)

    def provision_first_org(self, user_id: Optional[str], org_name: Optional[str] = None) -> ProvisionResponse:
        """Return (org_id, branch_id) for the caller's first tenant, creating it if needed."""
        if not user_id:
            raise Unauthenticated()

        store = TenancyStore(self.session, ExecutionContext.elevated(acting_user_id=user_id))
        attempt = 1
        while True:
            try:
                with store.transaction():
                    return self._provision(store, user_id, org_name)
            except ConstraintViolation:
                # A concurrent call for the same identity won the race; the
                # retry sees its membership and takes the existing-tenant path.
                if attempt >= self.max_attempts:
                    logger.error("Provisioning for user %s failed after %s attempts", user_id, attempt)
                    raise
                logger.warning("Provisioning conflict for user %s, retrying (attempt %s)", user_id, attempt)
                attempt += 1

    def _provision(self, store: TenancyStore, user_id: str, org_name: Optional[str]) -> ProvisionResponse:
        memberships = store.select(
            "org_memberships", {"user_id": user_id}, order_by=["created_at", "org_id"], limit=1
        )
        if memberships:
            org_id = memberships[0]["org_id"]
            logger.debug("User %s already provisioned in org %s", user_id, org_id)
        else:
            org = store.insert("organizations", {"name": resolve_org_name(org_name)})
            org_id = org["id"]
            store.insert("org_memberships", {
                "user_id": user_id,
                "org_id": org_id,
                "role": OrgRole.OWNER.value,
                "is_primary": True,
            })
            store.insert("subscriptions", {
                "org_id": org_id,
                "plan_id": settings.default_plan_id,
                "status": STATUS_ACTIVE,
            })
            logger.info("Provisioned org %s for user %s", org_id, user_id)

        branches = store.select("branches", {"org_id": org_id}, order_by=["created_at", "id"], limit=1)
        if branches:
            branch_id = branches[0]["id"]
        else:
            branch = store.insert("branches", {"org_id": org_id, "name": settings.default_branch_name})
            branch_id = branch["id"]
            logger.info("Created default branch %s for org %s", branch_id, org_id)

        return ProvisionResponse(org_id=org_id, branch_id=branch_id)
