# subscriptions:
# - id: text uuid (primary key)
# - org_id: text uuid (foreign key to organizations.id, on delete cascade)
# - plan_id: text (foreign key to plans.id)
# - status: text (default: "active")
# - period_end: timestamptz (nullable)
# - created_at: timestamptz (default: now())
# - at most one active subscription per org (partial unique index)

from datetime import datetime
from typing import Optional

from sqlalchemy import ForeignKey, Index, String, text
from sqlalchemy.orm import Mapped, mapped_column

from pos_backend.database.base import Base, CreatedAtMixin, UTCDateTime, new_id

STATUS_ACTIVE = "active"


class Subscription(CreatedAtMixin, Base):
    __tablename__ = "subscriptions"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    org_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("organizations.id", ondelete="CASCADE"), nullable=False, index=True
    )
    plan_id: Mapped[str] = mapped_column(String(64), ForeignKey("plans.id"), nullable=False)
    status: Mapped[str] = mapped_column(
        String(32), nullable=False, default=STATUS_ACTIVE, server_default=STATUS_ACTIVE
    )
    period_end: Mapped[Optional[datetime]] = mapped_column(UTCDateTime(), nullable=True)

    __table_args__ = (
        Index(
            "uq_subscriptions_one_active_per_org",
            "org_id",
            unique=True,
            sqlite_where=text("status = 'active'"),
            postgresql_where=text("status = 'active'"),
        ),
    )

    def __repr__(self) -> str:
        return f"<Subscription id={self.id} org_id={self.org_id} status={self.status}>"
