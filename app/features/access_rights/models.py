"""
AccessRight model: one allowed/denied flag per (group, module, action).
"""
from sqlalchemy import String, Boolean, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.database.base import Base, TimestampMixin


class AccessRight(Base, TimestampMixin):
    """
    Permission flag of a group for one action of one module.

    (group_id, module, action) is meant to be unique but no constraint enforces
    it; the service looks rows up before creating them.
    """
    __tablename__ = "access_rights"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    group_id: Mapped[int] = mapped_column(
        ForeignKey("groups.id"),
        nullable=False,
        index=True,
    )
    module: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    action: Mapped[str] = mapped_column(String(100), nullable=False)
    allowed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    group: Mapped["Group"] = relationship(  # type: ignore
        "Group",
        back_populates="access_rights",
        lazy="raise",
    )

    def __repr__(self) -> str:
        return (
            f"<AccessRight(id={self.id}, group_id={self.group_id}, "
            f"module={self.module!r}, action={self.action!r}, allowed={self.allowed})>"
        )
