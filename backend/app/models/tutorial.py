"""
Tutorials API — Tutorial SQLAlchemy Model
===========================================

What:  ORM model representing the `tutorials` table.
Who:   Used by TutorialService for CRUD operations and by Alembic for schema management.

Table Design:
    - Integer primary key: assigned by the database, never written by clients
    - title: required, non-empty (enforced by the request schemas)
    - description: optional free text
    - published: defaults to false; the /published listing filters on it
    - created_at / updated_at: UTC, maintained on insert and update
"""

from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, Integer, String, Text, false, func
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Tutorial(Base):
    """
    A tutorial record.

    Lifecycle:
        Created by POST /tutorials, mutated by PUT /tutorials/{id},
        destroyed by DELETE /tutorials/{id}. No relationships.

    Query Patterns:
        - Paged listing: ORDER BY id LIMIT :limit OFFSET :offset
        - Title filter:  WHERE title LIKE '%' || :title || '%'
        - Published:     WHERE published = true
    """

    __tablename__ = "tutorials"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    title: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    description: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
        default=None,
    )

    published: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default=false(),
        index=True,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        server_default=func.now(),
    )

    # onupdate also fires for Core update() statements issued by the service
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        onupdate=_utcnow,
        server_default=func.now(),
    )

    def __repr__(self) -> str:
        return f"<Tutorial(id={self.id}, title='{self.title}', published={self.published})>"
