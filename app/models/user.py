"""
User model for authentication and film ownership.

Architecture:
    User → Film (owner) ← Comment snapshot

The ``films`` column is the user's back-reference list: the ids of the films
the user created, appended and pruned by the film controller rather than
derived by query.
"""

from sqlalchemy import JSON, Column, Index, String

from app.models.base import Base, TimestampMixin, UUIDMixin


class User(Base, UUIDMixin, TimestampMixin):
    """
    Registered account able to own films and write comments.
    """

    __tablename__ = "users"
    __table_args__ = (Index("ix_users_user_name", "user_name", unique=True),)

    user_name = Column(
        String(50),
        nullable=False,
        comment="Unique username for identification and login",
    )

    password = Column(
        String(255),
        nullable=False,
        comment="Bcrypt hashed password",
    )

    films = Column(
        JSON,
        nullable=False,
        default=list,
        comment="Ordered ids of the films owned by this user",
    )

    def __repr__(self):
        return f"<User(id={self.id}, user_name='{self.user_name}')>"
