"""
Group model: a company-scoped role that users belong to and access rights hang off.
"""
from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.database.base import Base, TimestampMixin


class Group(Base, TimestampMixin):
    """
    A role within a company (Admin, Manager, Formateur, ...).

    Name uniqueness per company is enforced by the group service, not by a
    constraint. Child rows are never nulled out or cascaded by the ORM: access
    rights are deleted explicitly and a group with users cannot be deleted.
    """
    __tablename__ = "groups"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    company_id: Mapped[int | None] = mapped_column(nullable=True, index=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    users: Mapped[list["User"]] = relationship(  # type: ignore
        "User",
        back_populates="group",
        lazy="raise",
        passive_deletes="all",
    )

    access_rights: Mapped[list["AccessRight"]] = relationship(  # type: ignore
        "AccessRight",
        back_populates="group",
        lazy="raise",
        passive_deletes="all",
    )

    def __repr__(self) -> str:
        return f"<Group(id={self.id}, name={self.name!r}, company_id={self.company_id})>"
