"""Invoice, invoice item and payment routes."""

from uuid import UUID

from fastapi import APIRouter, Response

from api.base import success_response
from core.exceptions import NotFoundError
from core.models import (
    InvoiceCreate,
    InvoiceItemCreate,
    InvoiceUpdate,
    PaymentCreate,
    PaymentUpdate,
)


def create_invoices_router(services: dict) -> APIRouter:
    router = APIRouter()

    invoice_svc = services["invoices"]

    @router.get("/invoices")
    def list_invoices():
        invoices = invoice_svc.list_all()
        return success_response(
            [i.model_dump(mode="json") for i in invoices]
        ).model_dump(mode="json")

    @router.post("/invoices", status_code=201)
    def create_invoice(body: InvoiceCreate):
        invoice = invoice_svc.create(body)
        return success_response(invoice.model_dump(mode="json")).model_dump(mode="json")

    @router.get("/invoices/{invoice_id}")
    def get_invoice(invoice_id: UUID):
        detail = invoice_svc.get_detail(invoice_id)
        return success_response(detail.model_dump(mode="json")).model_dump(mode="json")

    @router.patch("/invoices/{invoice_id}")
    def update_invoice(invoice_id: UUID, body: InvoiceUpdate):
        invoice = invoice_svc.update(invoice_id, body)
        return success_response(invoice.model_dump(mode="json")).model_dump(mode="json")

    @router.delete("/invoices/{invoice_id}", status_code=204)
    def delete_invoice(invoice_id: UUID):
        if not invoice_svc.delete(invoice_id):
            raise NotFoundError("Invoice", invoice_id)
        return Response(status_code=204)

    @router.post("/invoices/{invoice_id}/send-email")
    def send_invoice_email(invoice_id: UUID):
        invoice = invoice_svc.send_email(invoice_id)
        return success_response({
            "message": "Invoice sent successfully",
            "invoice": invoice.model_dump(mode="json"),
        }).model_dump(mode="json")

    @router.post("/invoice-items", status_code=201)
    def create_invoice_item(body: InvoiceItemCreate):
        item = invoice_svc.add_item(body)
        return success_response(item.model_dump(mode="json")).model_dump(mode="json")

    @router.delete("/invoice-items/{item_id}", status_code=204)
    def delete_invoice_item(item_id: UUID):
        if not invoice_svc.delete_item(item_id):
            raise NotFoundError("Invoice item", item_id)
        return Response(status_code=204)

    return router


def create_payments_router(services: dict) -> APIRouter:
    router = APIRouter()

    payment_svc = services["payments"]

    @router.get("/payments")
    def list_payments():
        payments = payment_svc.list_all()
        return success_response(
            [p.model_dump(mode="json") for p in payments]
        ).model_dump(mode="json")

    @router.get("/payments/invoice/{invoice_id}")
    def list_invoice_payments(invoice_id: UUID):
        payments = payment_svc.list_for_invoice(invoice_id)
        return success_response(
            [p.model_dump(mode="json") for p in payments]
        ).model_dump(mode="json")

    @router.post("/payments", status_code=201)
    def create_payment(body: PaymentCreate):
        payment = payment_svc.create(body)
        return success_response(payment.model_dump(mode="json")).model_dump(mode="json")

    @router.patch("/payments/{payment_id}")
    def update_payment(payment_id: UUID, body: PaymentUpdate):
        payment = payment_svc.update(payment_id, body)
        return success_response(payment.model_dump(mode="json")).model_dump(mode="json")

    @router.delete("/payments/{payment_id}", status_code=204)
    def delete_payment(payment_id: UUID):
        if not payment_svc.delete(payment_id):
            raise NotFoundError("Payment", payment_id)
        return Response(status_code=204)

    return router
