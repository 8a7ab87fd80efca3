"""
User model.
"""
from sqlalchemy import String, Boolean, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.database.base import Base, TimestampMixin


ADMIN_ROLE = "Admin"


class User(Base, TimestampMixin):
    """
    Platform user belonging to a company and to at most one group.

    ``role`` is a free label (usually the group's name). The literal "Admin"
    role bypasses access-right checks.
    """
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)

    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    first_name: Mapped[str] = mapped_column(String(255), nullable=False)
    last_name: Mapped[str] = mapped_column(String(255), nullable=False)
    phone_number: Mapped[str | None] = mapped_column(String(50), nullable=True)
    position: Mapped[str | None] = mapped_column(String(255), nullable=True)
    department: Mapped[str | None] = mapped_column(String(255), nullable=True)
    collaborator_code: Mapped[str | None] = mapped_column(String(50), nullable=True)

    company_id: Mapped[int | None] = mapped_column(nullable=True, index=True)

    manager_id: Mapped[int | None] = mapped_column(
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    role: Mapped[str | None] = mapped_column(String(100), nullable=True)
    group_id: Mapped[int | None] = mapped_column(
        ForeignKey("groups.id"),
        nullable=True,
        index=True,
    )

    active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    status: Mapped[str | None] = mapped_column(String(50), nullable=True)

    group: Mapped["Group"] = relationship(  # type: ignore
        "Group",
        back_populates="users",
        lazy="selectin",
    )

    @property
    def is_admin(self) -> bool:
        return (self.role or "").lower() == ADMIN_ROLE.lower()

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email!r}, role={self.role!r})>"
