"""Contact service. Creating a contact adds it to the activity feed."""

from core.events import ContactCreated
from core.models import Contact
from core.services.record_service import RecordService


class ContactService(RecordService[Contact]):
    """Service for contact operations."""

    table = "contacts"
    entity_name = "Contact"
    model = Contact
    updatable_columns = frozenset({"name", "email", "phone", "company", "title", "notes"})

    def _created_event(self, record: Contact) -> ContactCreated:
        return ContactCreated.create(contact=record)
