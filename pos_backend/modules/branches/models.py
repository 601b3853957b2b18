# branches:
# - id: text uuid (primary key)
# - org_id: text uuid (foreign key to organizations.id, on delete cascade)
# - name: text (not null)
# - created_at: timestamptz (default: now())

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from pos_backend.database.base import Base, CreatedAtMixin, new_id


class Branch(CreatedAtMixin, Base):
    __tablename__ = "branches"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    org_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("organizations.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(256), nullable=False)

    def __repr__(self) -> str:
        return f"<Branch id={self.id} org_id={self.org_id}>"
