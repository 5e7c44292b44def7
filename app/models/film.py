"""
Film model: the owned, comment-bearing resource of the API.

A film always has exactly one owner, set at creation. Comments are stored
as embedded snapshots ``{"comment": str, "owner": {"id", "userName"}}`` and
are never re-resolved against the live user record.
"""

from sqlalchemy import JSON, Column, ForeignKey, Index, String
from sqlalchemy.orm import relationship

from app.models.base import Base, TimestampMixin, UUIDMixin


class Film(Base, UUIDMixin, TimestampMixin):
    __tablename__ = "films"
    __table_args__ = (
        Index("ix_films_genre", "genre"),
        Index("ix_films_owner_id", "owner_id"),
    )

    title = Column(String(255), nullable=False)

    genre = Column(String(100), nullable=False)

    image = Column(
        JSON,
        nullable=True,
        comment="Uploaded image metadata: urlOriginal, url, mimetype, size",
    )

    owner_id = Column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        comment="Creating user; immutable after creation",
    )

    comments = Column(JSON, nullable=False, default=list)

    owner = relationship("User", doc="User who created this film")

    def __repr__(self):
        return f"<Film(id={self.id}, title='{self.title}', genre='{self.genre}')>"
