# menu_items:
# - id: text uuid (primary key)
# - org_id: text uuid (foreign key to organizations.id, on delete cascade)
# - name: text (not null)
# - price: numeric(12,2) (not null, default 0)
# - is_active: boolean (not null, default true)
# - created_at: timestamptz (default: now())

from decimal import Decimal

from sqlalchemy import Boolean, ForeignKey, Numeric, String, true
from sqlalchemy.orm import Mapped, mapped_column

from pos_backend.database.base import Base, CreatedAtMixin, new_id


class MenuItem(CreatedAtMixin, Base):
    __tablename__ = "menu_items"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    org_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("organizations.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(256), nullable=False)
    price: Mapped[Decimal] = mapped_column(
        Numeric(12, 2, asdecimal=True), nullable=False, default=Decimal("0"), server_default="0"
    )
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, server_default=true())

    def __repr__(self) -> str:
        return f"<MenuItem id={self.id} org_id={self.org_id} name={self.name}>"
