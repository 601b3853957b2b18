# plans: static catalog, publicly readable, never written through scoped calls.
#
# - id: text (primary key), e.g. "free"
# - name: text (not null)
# - monthly_price_cents: int (not null)
# - features: json (not null, default {}) - opaque to the tenancy core
# - created_at: timestamptz (default: now())

from typing import Any, Dict

from sqlalchemy import JSON, Integer, String
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from pos_backend.database.base import Base, CreatedAtMixin


class Plan(CreatedAtMixin, Base):
    __tablename__ = "plans"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(String(128), nullable=False)
    monthly_price_cents: Mapped[int] = mapped_column(Integer, nullable=False)
    features: Mapped[Dict[str, Any]] = mapped_column(
        JSON().with_variant(JSONB(), "postgresql"), nullable=False, default=dict
    )

    def __repr__(self) -> str:
        return f"<Plan id={self.id}>"
