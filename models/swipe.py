from sqlalchemy import Boolean, CheckConstraint, ForeignKey, Index, Integer, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from core.db import Base


class Swipe(Base):
    """A one-way like or pass from ``user_id`` towards ``swiped_user_id``."""

    __tablename__ = "swipe"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("user.id", ondelete="CASCADE", name="swipe_user_id_fkey"), nullable=False
    )
    swiped_user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("user.id", ondelete="CASCADE", name="swipe_swiped_user_id_fkey"), nullable=False
    )
    preference: Mapped[bool] = mapped_column(Boolean, nullable=False)

    __table_args__ = (
        # A user may swipe any other user at most once
        UniqueConstraint("user_id", "swiped_user_id", name="unique_swiped_user_per_user"),
        CheckConstraint("user_id <> swiped_user_id", name="no_matching_user_ids"),
        # Inbound swipe lookups: reciprocity checks and attractiveness counts
        Index("idx_swipe_swiped_user_id", "swiped_user_id", "preference"),
    )

    def __repr__(self) -> str:
        return (
            f"<Swipe(id={self.id}, user_id={self.user_id}, swiped_user_id={self.swiped_user_id}, "
            f"preference={self.preference})>"
        )
