import datetime as dt

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    ForeignKey,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ideaboard.database import Base
from ideaboard.models.user import _new_id, _utcnow


class Idea(Base):
    __tablename__ = "ideas"
    __table_args__ = (
        CheckConstraint("votes >= 0", name="ck_idea_votes_non_negative"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    votes: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    creator_id: Mapped[str] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    created_at: Mapped[dt.datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow
    )

    creator: Mapped["User"] = relationship(back_populates="ideas")
    vote_records: Mapped[list["Vote"]] = relationship(
        back_populates="idea",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Vote.created_at",
    )

    def __repr__(self) -> str:
        return f"<Idea {self.id}: {self.title[:50]} ({self.votes})>"


class Vote(Base):
    __tablename__ = "votes"
    __table_args__ = (
        UniqueConstraint("user_id", "idea_id", name="uq_vote_user_idea"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    user_id: Mapped[str] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    idea_id: Mapped[str] = mapped_column(
        ForeignKey("ideas.id", ondelete="CASCADE"), nullable=False, index=True
    )
    created_at: Mapped[dt.datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow
    )

    user: Mapped["User"] = relationship(back_populates="votes")
    idea: Mapped["Idea"] = relationship(back_populates="vote_records")
