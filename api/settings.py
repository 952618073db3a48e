"""Settings map and activity feed."""

from fastapi import APIRouter, Body

from api.base import success_response


def create_settings_router(services: dict) -> APIRouter:
    router = APIRouter()

    settings_svc = services["settings"]
    activity_svc = services["activities"]

    @router.get("/settings")
    def get_settings():
        return success_response(settings_svc.get_all()).model_dump(mode="json")

    @router.post("/settings")
    def save_settings(body: dict[str, str | None] = Body(...)):
        return success_response(settings_svc.upsert_many(body)).model_dump(mode="json")

    @router.get("/activities")
    def list_activities():
        activities = activity_svc.list_all()
        return success_response(
            [a.model_dump(mode="json") for a in activities]
        ).model_dump(mode="json")

    return router
