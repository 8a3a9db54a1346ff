"""
Tutorials API — Tutorial Service (Business Logic)
===================================================

What:  CRUD operations on Tutorial records plus the two paged listings.
Why:   Keeps query building and error translation out of the route handlers.
How:   Each method performs exactly one persistence call on the session it
       is given and translates failures into application exceptions:
         - nothing matched        → NotFoundError  (404)
         - SQLAlchemy raised      → DatabaseError  (500)
Who:   Called by the route handlers in app.routes.tutorials.

Design Decision:
    TutorialService is stateless; the session arrives with every call
    (injected per request by get_db_session). Commit and rollback belong
    to that dependency, so the service only flushes.
"""

import logging
import re
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import ColumnElement, delete, func, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import DatabaseError, NotFoundError, ValidationError
from app.models.tutorial import Tutorial
from app.schemas.tutorial import (
    CreatedResponse,
    MessageResponse,
    TutorialCreate,
    TutorialPageResponse,
    TutorialResponse,
    TutorialUpdate,
)
from app.services.pagination import get_pagination, get_paging_data

logger = logging.getLogger(__name__)

# Largest value an SQL BIGINT (and SQLite INTEGER) can hold
MAX_ID = 2**63 - 1

# Plain ASCII digits; int() alone would also take "+5", " 5", "1_0" and "٣"
ID_PATTERN = re.compile(r"[0-9]+", re.ASCII)

# Update body keys that may be written as NULL
NULLABLE_FIELDS = {"description"}


def parse_tutorial_id(tutorial_id: str) -> Optional[int]:
    """
    Integer primary key for a path segment, or None when no row could have it.

    "42" → 42;  "abc", "-1", "0", "1_0", "+5", "99999999999999999999" → None
    """
    if not isinstance(tutorial_id, str) or not ID_PATTERN.fullmatch(tutorial_id):
        return None
    value = int(tutorial_id)
    if value < 1 or value > MAX_ID:
        return None
    return value


def _driver_message(exc: SQLAlchemyError) -> str:
    """The DB-API error text when there is one, else SQLAlchemy's own message."""
    orig = getattr(exc, "orig", None)
    return str(orig if orig is not None else exc)


class TutorialService:
    """
    Business logic layer for tutorial operations.

    Responsibilities:
        - find_all() / find_all_published(): paged listings
        - create(): insert from a validated body
        - find_one(): single record by id
        - update() / delete(): by id, 404 when no row matched
    """

    async def find_and_count(
        self,
        db: AsyncSession,
        condition: Optional[ColumnElement[bool]],
        limit: int,
        offset: int,
    ) -> Tuple[int, List[Tutorial]]:
        """Total rows matching `condition`, and the requested window of them ordered by id."""
        count_query = select(func.count()).select_from(Tutorial)
        rows_query = select(Tutorial).order_by(Tutorial.id).limit(limit).offset(offset)
        if condition is not None:
            count_query = count_query.where(condition)
            rows_query = rows_query.where(condition)

        count = (await db.execute(count_query)).scalar() or 0
        rows = list((await db.execute(rows_query)).scalars().all())
        return count, rows

    async def _paged(
        self,
        db: AsyncSession,
        condition: Optional[ColumnElement[bool]],
        page: Optional[str],
        size: Optional[str],
    ) -> TutorialPageResponse:
        limit, offset = get_pagination(page, size)
        if limit > MAX_ID or offset > MAX_ID:
            # Well-formed but past what LIMIT/OFFSET can bind
            logger.error("Pagination out of range: limit=%s offset=%s", limit, offset)
            raise DatabaseError(
                message="Some error occurred while retrieving tutorials.",
                context={"limit": limit, "offset": offset},
            )
        try:
            count, rows = await self.find_and_count(db, condition, limit, offset)
        except SQLAlchemyError as e:
            logger.error("Database error listing tutorials: %s", e, exc_info=True)
            raise DatabaseError(
                message=_driver_message(e) or "Some error occurred while retrieving tutorials.",
                context={"error_type": type(e).__name__},
            )
        return get_paging_data(count, rows, offset, limit)

    async def find_all(
        self,
        db: AsyncSession,
        page: Optional[str] = None,
        size: Optional[str] = None,
        title: Optional[str] = None,
    ) -> TutorialPageResponse:
        """
        List tutorials, optionally filtered by a title substring.

        Args:
            db:    Async database session
            page:  Raw `page` query value (0-based page index)
            size:  Raw `size` query value (rows per page)
            title: Substring matched with SQL LIKE '%title%'

        Raises:
            ValidationError: malformed page or size (→ 400)
            DatabaseError: query failed (→ 500)
        """
        condition = Tutorial.title.like(f"%{title}%") if title else None
        return await self._paged(db, condition, page, size)

    async def find_all_published(
        self,
        db: AsyncSession,
        page: Optional[str] = None,
        size: Optional[str] = None,
    ) -> TutorialPageResponse:
        """List tutorials with published = true."""
        return await self._paged(db, Tutorial.published.is_(True), page, size)

    async def create(self, db: AsyncSession, payload: TutorialCreate) -> CreatedResponse:
        """
        Insert a tutorial and report where it lives.

        Raises:
            DatabaseError: insert failed (→ 500)
        """
        tutorial = Tutorial(**payload.model_dump())
        try:
            db.add(tutorial)
            await db.flush()  # Assigns the primary key without committing
        except SQLAlchemyError as e:
            logger.error("Database error creating tutorial: %s", e, exc_info=True)
            raise DatabaseError(
                message=_driver_message(e) or "Some error occurred while creating the Tutorial.",
                context={"error_type": type(e).__name__},
            )

        logger.info("Tutorial created: id=%s", tutorial.id)
        return CreatedResponse(
            message="New tutorial created.",
            location=f"/tutorials/{tutorial.id}",
        )

    async def find_one(self, db: AsyncSession, tutorial_id: str) -> TutorialResponse:
        """
        Fetch a single tutorial by primary key.

        Raises:
            NotFoundError: no tutorial with that id (→ 404)
            DatabaseError: lookup failed (→ 500)
        """
        pk = parse_tutorial_id(tutorial_id)
        tutorial = None
        if pk is not None:
            try:
                tutorial = await db.get(Tutorial, pk)
            except SQLAlchemyError as e:
                logger.error("Database error fetching tutorial %s: %s", tutorial_id, e)
                raise DatabaseError(
                    message=f"Error retrieving Tutorial with id {tutorial_id}.",
                    context={"tutorial_id": tutorial_id, "error_type": type(e).__name__},
                )

        if tutorial is None:
            raise NotFoundError(
                message=f"Not found Tutorial with id {tutorial_id}.",
                resource="tutorial",
                resource_id=tutorial_id,
            )
        return TutorialResponse.model_validate(tutorial)

    async def update(
        self,
        db: AsyncSession,
        tutorial_id: str,
        payload: Optional[TutorialUpdate],
    ) -> MessageResponse:
        """
        Apply the fields present in `payload` to one tutorial.

        Raises:
            ValidationError: body missing or without a non-empty title (→ 400)
            NotFoundError: no row matched (→ 404)
            DatabaseError: update failed (→ 500)
        """
        if payload is None or not payload.title:
            raise ValidationError(message="Request body can not be empty!", field="title")

        fields: Dict[str, Any] = {
            key: value
            for key, value in payload.model_dump(exclude_unset=True).items()
            if value is not None or key in NULLABLE_FIELDS
        }

        affected = 0
        pk = parse_tutorial_id(tutorial_id)
        if pk is not None:
            try:
                result = await db.execute(
                    update(Tutorial)
                    .where(Tutorial.id == pk)
                    .values(**fields)
                    .execution_options(synchronize_session=False)
                )
                affected = result.rowcount
            except SQLAlchemyError as e:
                logger.error("Database error updating tutorial %s: %s", tutorial_id, e)
                raise DatabaseError(
                    message=f"Error updating Tutorial with id={tutorial_id}.",
                    context={"tutorial_id": tutorial_id, "error_type": type(e).__name__},
                )

        if affected != 1:
            raise NotFoundError(
                message=f"Not found Tutorial with id={tutorial_id}.",
                resource="tutorial",
                resource_id=tutorial_id,
            )
        logger.info("Tutorial updated: id=%s fields=%s", tutorial_id, sorted(fields))
        return MessageResponse(message=f"Tutorial with id={tutorial_id} was updated successfully.")

    async def delete(self, db: AsyncSession, tutorial_id: str) -> MessageResponse:
        """
        Delete one tutorial.

        Raises:
            NotFoundError: no row matched (→ 404)
            DatabaseError: delete failed (→ 500)
        """
        affected = 0
        pk = parse_tutorial_id(tutorial_id)
        if pk is not None:
            try:
                result = await db.execute(
                    delete(Tutorial)
                    .where(Tutorial.id == pk)
                    .execution_options(synchronize_session=False)
                )
                affected = result.rowcount
            except SQLAlchemyError as e:
                logger.error("Database error deleting tutorial %s: %s", tutorial_id, e)
                raise DatabaseError(
                    message=f"Error deleting Tutorial with id={tutorial_id}.",
                    context={"tutorial_id": tutorial_id, "error_type": type(e).__name__},
                )

        if affected != 1:
            raise NotFoundError(
                message=f"Not found Tutorial with id={tutorial_id}.",
                resource="tutorial",
                resource_id=tutorial_id,
            )
        logger.info("Tutorial deleted: id=%s", tutorial_id)
        return MessageResponse(message=f"Tutorial with id {tutorial_id} was successfully deleted!")


tutorial_service = TutorialService()
