from sqlalchemy import CheckConstraint, ForeignKey, Integer, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from core.db import Base


class Match(Base):
    """
    Match model.

    A mutual like is stored as two mirrored rows, (a, b) and (b, a), written in
    the same transaction so either both exist or neither does.
    """

    __tablename__ = "match"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(Integer, ForeignKey("user.id", ondelete="CASCADE"), nullable=False)
    matched_user_id: Mapped[int] = mapped_column(Integer, ForeignKey("user.id", ondelete="CASCADE"), nullable=False)

    __table_args__ = (
        UniqueConstraint("user_id", "matched_user_id", name="unique_matched_user_per_user"),
        CheckConstraint("user_id <> matched_user_id", name="no_matching_matched_user_ids"),
    )

    def __repr__(self) -> str:
        return f"<Match(id={self.id}, user_id={self.user_id}, matched_user_id={self.matched_user_id})>"
