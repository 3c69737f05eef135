"""
shared crud routes

every entity exposes the same five endpoints on top of its record store:

    GET    /<entity>          list
    GET    /<entity>/{id}     one record (404 if absent)
    POST   /<entity>          create, returns the stored record with its new id
    PATCH  /<entity>/{id}     shallow merge
    DELETE /<entity>/{id}     remove, returns the removed record

add_crud_routes is called at the END of each entity module, after the entity
specific routes, so paths like /appointments/range are matched before
/appointments/{record_id}.

no `from __future__ import annotations` in this file: fastapi has to see the
real model classes in the signatures, not strings.
"""

from typing import Callable

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel

from wardview.core.state import StoreRegistry, get_registry
from wardview.services.store import Repository


def store_dependency(attr: str) -> Callable[[StoreRegistry], Repository]:
    def _store(registry: StoreRegistry = Depends(get_registry)) -> Repository:
        return getattr(registry, attr)

    return _store


def add_crud_routes(
    router: APIRouter,
    *,
    store_attr: str,
    record_model: type[BaseModel],
    draft_model: type[BaseModel],
    patch_model: type[BaseModel],
) -> APIRouter:
    get_store = store_dependency(store_attr)

    @router.get("", response_model=list[record_model])
    async def list_records(store: Repository = Depends(get_store)):
        return await store.get_all()

    @router.get("/{record_id}", response_model=record_model)
    async def get_record(record_id: int, store: Repository = Depends(get_store)):
        return await store.get_by_id(record_id)

    @router.post("", response_model=record_model, status_code=status.HTTP_201_CREATED)
    async def create_record(draft: draft_model, store: Repository = Depends(get_store)):
        return await store.create(draft)

    @router.patch("/{record_id}", response_model=record_model)
    async def update_record(record_id: int, patch: patch_model, store: Repository = Depends(get_store)):
        return await store.update(record_id, patch)

    @router.delete("/{record_id}", response_model=record_model)
    async def delete_record(record_id: int, store: Repository = Depends(get_store)):
        return await store.delete(record_id)

    return router
