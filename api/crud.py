"""List/read/create/update/delete routes for single-table records."""

from uuid import UUID

from fastapi import APIRouter, Response
from pydantic import BaseModel

from api.base import success_response
from core.exceptions import NotFoundError
from core.services.record_service import RecordService


def create_crud_router(
    path: str,
    service: RecordService,
    create_model: type[BaseModel],
    update_model: type[BaseModel],
) -> APIRouter:
    """
    Routes for one record type.

    GET    /{path}        list, newest first
    POST   /{path}        create (201)
    GET    /{path}/{id}   read
    PATCH  /{path}/{id}   partial update
    DELETE /{path}/{id}   delete (204)
    """
    router = APIRouter()

    @router.get(f"/{path}")
    def list_records():
        records = service.list_all()
        return success_response(
            [r.model_dump(mode="json") for r in records]
        ).model_dump(mode="json")

    @router.post(f"/{path}", status_code=201)
    def create_record(body: create_model):
        record = service.create(body)
        return success_response(record.model_dump(mode="json")).model_dump(mode="json")

    @router.get(f"/{path}/{{record_id}}")
    def get_record(record_id: UUID):
        record = service.require(record_id)
        return success_response(record.model_dump(mode="json")).model_dump(mode="json")

    @router.patch(f"/{path}/{{record_id}}")
    def update_record(record_id: UUID, body: update_model):
        record = service.update(record_id, body)
        return success_response(record.model_dump(mode="json")).model_dump(mode="json")

    @router.delete(f"/{path}/{{record_id}}", status_code=204)
    def delete_record(record_id: UUID):
        if not service.delete(record_id):
            raise NotFoundError(service.entity_name, record_id)
        return Response(status_code=204)

    return router
