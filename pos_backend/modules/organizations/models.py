# Tenancy roots: organizations and org_memberships.
#
# organizations:
# - id: text uuid (primary key)
# - name: text (not null)
# - created_at: timestamptz (default: now())
#
# org_memberships:
# - user_id: text uuid (Supabase auth.users id)
# - org_id: text uuid (foreign key to organizations.id, on delete cascade)
# - role: one of owner | admin | manager | staff | viewer (default: staff)
# - is_primary: bool (default: false) - set on the membership created by provisioning
# - created_at: timestamptz (default: now())
# - primary key (user_id, org_id)
# - at most one primary membership per user (partial unique index)

from enum import Enum

from sqlalchemy import Boolean, CheckConstraint, ForeignKey, Index, String, false, text
from sqlalchemy.orm import Mapped, mapped_column

from pos_backend.database.base import Base, CreatedAtMixin, new_id


class OrgRole(str, Enum):
    OWNER = "owner"
    ADMIN = "admin"
    MANAGER = "manager"
    STAFF = "staff"
    VIEWER = "viewer"


class Organization(CreatedAtMixin, Base):
    __tablename__ = "organizations"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    name: Mapped[str] = mapped_column(String(256), nullable=False)

    def __repr__(self) -> str:
        return f"<Organization id={self.id} name={self.name}>"


class Membership(CreatedAtMixin, Base):
    __tablename__ = "org_memberships"

    user_id: Mapped[str] = mapped_column(String(36), primary_key=True)
    org_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("organizations.id", ondelete="CASCADE"),
        primary_key=True,
        index=True,
    )
    role: Mapped[str] = mapped_column(
        String(16), nullable=False, default=OrgRole.STAFF.value, server_default=OrgRole.STAFF.value
    )
    # Concurrent first provisioning for one user collides on this flag
    is_primary: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, server_default=false())

    __table_args__ = (
        CheckConstraint(
            "role IN ('owner','admin','manager','staff','viewer')",
            name="ck_org_memberships_role_valid",
        ),
        Index(
            "uq_org_memberships_one_primary_per_user",
            "user_id",
            unique=True,
            sqlite_where=text("is_primary"),
            postgresql_where=text("is_primary"),
        ),
    )

    def __repr__(self) -> str:
        return f"<Membership user_id={self.user_id} org_id={self.org_id} role={self.role}>"
