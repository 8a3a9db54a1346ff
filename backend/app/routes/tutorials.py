"""
Tutorials API — Tutorial Route Handlers
=========================================

What:  The six tutorial endpoints.
How:   Extracts query/path/body values, delegates to TutorialService, returns JSON.

Route order matters: /tutorials/published is declared before
/tutorials/{tutorial_id}, otherwise "published" would be captured as an id.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Body, Depends, Query, Response
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.schemas.tutorial import (
    CreatedResponse,
    ErrorResponse,
    MessageResponse,
    TutorialCreate,
    TutorialPageResponse,
    TutorialResponse,
    TutorialUpdate,
)
from app.services.tutorial_service import tutorial_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/tutorials", tags=["Tutorials"])

# page and size arrive as raw strings; the pagination resolver validates them
PAGE_QUERY = Query(
    default=None,
    description="0-based page index (0 or a positive integer, default 0)",
)
SIZE_QUERY = Query(
    default=None,
    description="Rows per page (positive integer, default 3)",
)


@router.get(
    "",
    response_model=TutorialPageResponse,
    responses={
        400: {"description": "Malformed page or size", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="List tutorials",
    description="Paged list of tutorials, optionally filtered by a title substring.",
)
async def find_all(
    page: Optional[str] = PAGE_QUERY,
    size: Optional[str] = SIZE_QUERY,
    title: Optional[str] = Query(
        default=None,
        description="Only tutorials whose title contains this text (SQL LIKE)",
    ),
    db: AsyncSession = Depends(get_db_session),
) -> TutorialPageResponse:
    return await tutorial_service.find_all(db=db, page=page, size=size, title=title)


@router.post(
    "",
    status_code=201,
    response_model=CreatedResponse,
    responses={
        400: {"description": "Invalid tutorial body", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Create a tutorial",
)
async def create(
    response: Response,
    payload: TutorialCreate,
    db: AsyncSession = Depends(get_db_session),
) -> CreatedResponse:
    """
    Create a tutorial from the request body.

    The body is mapped onto the new record; unknown keys are dropped. The
    path of the new resource is returned in the body and the Location header.
    """
    result = await tutorial_service.create(db=db, payload=payload)
    response.headers["Location"] = result.location
    return result


@router.get(
    "/published",
    response_model=TutorialPageResponse,
    responses={
        400: {"description": "Malformed page or size", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="List published tutorials",
)
async def find_all_published(
    page: Optional[str] = PAGE_QUERY,
    size: Optional[str] = SIZE_QUERY,
    db: AsyncSession = Depends(get_db_session),
) -> TutorialPageResponse:
    return await tutorial_service.find_all_published(db=db, page=page, size=size)


@router.get(
    "/{tutorial_id}",
    response_model=TutorialResponse,
    responses={
        404: {"description": "Tutorial not found", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Get a single tutorial by id",
)
async def find_one(
    tutorial_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> TutorialResponse:
    return await tutorial_service.find_one(db=db, tutorial_id=tutorial_id)


@router.put(
    "/{tutorial_id}",
    response_model=MessageResponse,
    responses={
        400: {"description": "Empty body or missing title", "model": ErrorResponse},
        404: {"description": "Tutorial not found", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Update a tutorial",
)
async def update(
    tutorial_id: str,
    payload: Optional[TutorialUpdate] = Body(default=None),
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    """
    Apply the fields present in the body to a tutorial.

    The body must carry a non-empty title. Fields left out of the body
    keep their stored values.
    """
    return await tutorial_service.update(db=db, tutorial_id=tutorial_id, payload=payload)


@router.delete(
    "/{tutorial_id}",
    response_model=MessageResponse,
    responses={
        404: {"description": "Tutorial not found", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Delete a tutorial",
)
async def delete(
    tutorial_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    return await tutorial_service.delete(db=db, tutorial_id=tutorial_id)
