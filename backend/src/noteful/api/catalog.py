"""Folder and tag API endpoints.

Both collections expose the same five routes, so the routers are built by
one factory parameterised with the service class and response schema.
"""

from typing import List, Type
from uuid import UUID

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.schemas.catalog import FolderResponse, NameRequest, TagResponse
from ..core.schemas.common import ErrorResponse
from ..core.services import CatalogService, FolderService, TagService
from ..database import get_db_session
from ..middleware.auth import get_current_user_id


def build_catalog_router(
    prefix: str, service_class: Type[CatalogService], response_model: type
) -> APIRouter:
    router = APIRouter(
        prefix=prefix,
        tags=[prefix.strip("/")],
        responses={401: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
    )

    @router.get("", response_model=List[response_model])
    async def list_entries(
        current_user_id: UUID = Depends(get_current_user_id),
        session: AsyncSession = Depends(get_db_session),
    ):
        return await service_class(session).list_entries(current_user_id)

    @router.get("/{entry_id}", response_model=response_model)
    async def get_entry(
        entry_id: str,
        current_user_id: UUID = Depends(get_current_user_id),
        session: AsyncSession = Depends(get_db_session),
    ):
        return await service_class(session).get_entry(entry_id, current_user_id)

    @router.post(
        "",
        response_model=response_model,
        status_code=status.HTTP_201_CREATED,
        responses={400: {"model": ErrorResponse}},
    )
    async def create_entry(
        request: NameRequest,
        response: Response,
        current_user_id: UUID = Depends(get_current_user_id),
        session: AsyncSession = Depends(get_db_session),
    ):
        entry = await service_class(session).create_entry(current_user_id, request)
        response.headers["Location"] = f"/api{prefix}/{entry.id}"
        return entry

    @router.put(
        "/{entry_id}", response_model=response_model, responses={400: {"model": ErrorResponse}}
    )
    async def rename_entry(
        entry_id: str,
        request: NameRequest,
        current_user_id: UUID = Depends(get_current_user_id),
        session: AsyncSession = Depends(get_db_session),
    ):
        return await service_class(session).rename_entry(entry_id, current_user_id, request)

    @router.delete("/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
    async def delete_entry(
        entry_id: str,
        current_user_id: UUID = Depends(get_current_user_id),
        session: AsyncSession = Depends(get_db_session),
    ):
        await service_class(session).delete_entry(entry_id, current_user_id)
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    return router


folders_router = build_catalog_router("/folders", FolderService, FolderResponse)
tags_router = build_catalog_router("/tags", TagService, TagResponse)
