"""
Authorization policy engine.

Evaluates the per-table predicates from config/policies_config.py against the
caller's membership set. The membership set is queried from the database for
every statement and never cached, since roles can change between calls.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, Optional, Set
import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from pos_backend.config.policies_config import ANY_MEMBER, NOBODY, PUBLIC, TABLE_POLICIES
from pos_backend.core.errors import InvalidRequest, PolicyDenied
from pos_backend.modules.organizations.models import Membership

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExecutionContext:
    """Who a store call runs as. `system` bypasses the policy engine entirely."""

    user_id: Optional[str] = None
    system: bool = False

    @classmethod
    def for_user(cls, user_id: Optional[str]) -> "ExecutionContext":
        return cls(user_id=user_id)

    @classmethod
    def anonymous(cls) -> "ExecutionContext":
        return cls()

    @classmethod
    def elevated(cls, acting_user_id: Optional[str] = None) -> "ExecutionContext":
        return cls(user_id=acting_user_id, system=True)

    @property
    def is_authenticated(self) -> bool:
        return bool(self.user_id)


@dataclass(frozen=True)
class TablePolicy:
    table: str
    org_column: Optional[str]
    read: object
    write: object

    @classmethod
    def from_config(cls, table: str, config: dict) -> "TablePolicy":
        return cls(
            table=table,
            org_column=config["org_column"],
            read=config["read"],
            write=config["write"],
        )


@dataclass
class PolicyDecision:
    """
    Outcome of evaluating one table's predicates for one statement.

    `readable` / `writable` hold the org ids the caller may touch; None means
    unrestricted (system context or a public table).
    """

    policy: TablePolicy
    readable: Optional[Set[str]] = field(default_factory=set)
    writable: Optional[Set[str]] = field(default_factory=set)

    def allows_read(self, org_id: Optional[str]) -> bool:
        if self.readable is None:
            return True
        return org_id is not None and org_id in self.readable

    def allows_write(self, org_id: Optional[str]) -> bool:
        if self.writable is None:
            return True
        return org_id is not None and org_id in self.writable

    def row_org(self, row: dict) -> Optional[str]:
        if self.policy.org_column is None:
            return None
        return row.get(self.policy.org_column)

    def check_rows(self, rows: Iterable[dict]) -> None:
        """Raise PolicyDenied unless the write predicate holds for every row."""
        for row in rows:
            if not self.allows_write(self.row_org(row)):
                logger.info("Write denied on %s", self.policy.table)
                raise PolicyDenied()


def _org_ids_for(rule: object, memberships: Dict[str, str]) -> Set[str]:
    if rule == ANY_MEMBER:
        return set(memberships)
    if rule in (NOBODY, PUBLIC):
        return set()
    return {org_id for org_id, role in memberships.items() if role in rule}


class PolicyEngine:
    def __init__(self, session: Session, policies: Optional[Dict[str, dict]] = None):
        self.session = session
        config = policies if policies is not None else TABLE_POLICIES
        self.policies = {table: TablePolicy.from_config(table, c) for table, c in config.items()}

    def policy_for(self, table: str) -> TablePolicy:
        policy = self.policies.get(table)
        if policy is None:
            raise InvalidRequest(f"Unknown table: {table}")
        return policy

    def load_memberships(self, user_id: str) -> Dict[str, str]:
        """Return {org_id: role} for the user, straight from the database."""
        rows = self.session.execute(
            select(Membership.org_id, Membership.role).where(Membership.user_id == user_id)
        ).all()
        return {org_id: role for org_id, role in rows}

    def evaluate(self, context: ExecutionContext, table: str) -> PolicyDecision:
        policy = self.policy_for(table)
        if context.system:
            return PolicyDecision(policy, readable=None, writable=None)

        readable: Optional[Set[str]]
        if policy.read == PUBLIC:
            readable = None
        else:
            readable = set()
        writable: Set[str] = set()

        # Default deny: no identity, or a table nobody may write, needs no lookup
        needs_lookup = context.is_authenticated and (readable is not None or policy.write != NOBODY)
        if needs_lookup:
            memberships = self.load_memberships(context.user_id)
            if readable is not None:
                readable = _org_ids_for(policy.read, memberships)
            writable = _org_ids_for(policy.write, memberships)

        return PolicyDecision(policy, readable=readable, writable=writable)
