"""Lead relay to n8n and inbound n8n lead capture."""

from uuid import UUID

from fastapi import APIRouter, Body
from pydantic import BaseModel

from api.base import success_response
from core.models import InboundLeadPayload


class SendToWebhookRequest(BaseModel):
    url: str | None = None


def create_leads_router(services: dict) -> APIRouter:
    router = APIRouter()

    lead_svc = services["leads"]
    webhook_svc = services["webhooks"]

    @router.post("/leads/{lead_id}/send-to-n8n")
    def send_lead_to_n8n(lead_id: UUID, body: SendToWebhookRequest):
        lead = lead_svc.send_to_webhook(lead_id, body.url)
        return success_response({
            "message": "Lead sent to n8n webhook successfully",
            "lead": lead.model_dump(mode="json"),
        }).model_dump(mode="json")

    @router.post("/webhook/n8n/{webhook_id}", status_code=201)
    def capture_n8n_lead(webhook_id: UUID, body: dict = Body(...)):
        payload = InboundLeadPayload.model_validate(body)
        lead = webhook_svc.capture_lead(webhook_id, payload)
        return success_response({
            "message": "Lead created successfully",
            "lead": lead.model_dump(mode="json"),
        }).model_dump(mode="json")

    return router
