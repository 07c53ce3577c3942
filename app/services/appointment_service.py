"""
Appointment Service - veterinary appointment booking for injured or sick
street animals.

The veterinarian list is a static catalog; bookings are stored in the
"appointments" collection and identified to citizens by a confirmation id.
"""

from datetime import datetime, timezone
from typing import List, Optional
import logging
import secrets

from app.core.exceptions import NotFoundError, ValidationError
from app.models.appointment import Appointment, AppointmentCreate, Veterinarian
from app.services.document_store import DocumentStore

logger = logging.getLogger(__name__)

APPOINTMENTS_COLLECTION = "appointments"

VETERINARIANS: List[Veterinarian] = [
    Veterinarian(
        id="1",
        name="Dr. Sarah Johnson",
        specialization="Emergency Animal Care",
        clinic="City Veterinary Hospital",
        hours="9:00 AM - 6:00 PM",
        rating=4.9,
        experience="15+ years",
    ),
    Veterinarian(
        id="2",
        name="Dr. Michael Chen",
        specialization="Animal Behavior & Training",
        clinic="Pet Care Clinic",
        hours="10:00 AM - 8:00 PM",
        rating=4.8,
        experience="12+ years",
    ),
    Veterinarian(
        id="3",
        name="Dr. Emily Rodriguez",
        specialization="Wildlife & Street Animal Care",
        clinic="Animal Welfare Center",
        hours="8:00 AM - 4:00 PM",
        rating=5.0,
        experience="20+ years",
    ),
]


class AppointmentService:

    def __init__(self, documents: DocumentStore, veterinarians: Optional[List[Veterinarian]] = None):
        self.documents = documents
        self.veterinarians = {v.id: v for v in (veterinarians or VETERINARIANS)}

    def list_veterinarians(self) -> List[Veterinarian]:
        return list(self.veterinarians.values())

    def book(self, request: AppointmentCreate) -> Appointment:
        """
        Book an appointment with a catalog veterinarian.

        Raises:
            NotFoundError: unknown veterinarian id
            ValidationError: preferred date in the past
        """
        if request.veterinarian_id not in self.veterinarians:
            raise NotFoundError("Veterinarian", request.veterinarian_id)

        now = datetime.now(timezone.utc)
        if request.preferred_date < now.date():
            raise ValidationError.for_field("preferredDate", "must be today or later")

        document = request.model_dump(by_alias=True, mode="json")
        document["confirmationId"] = f"APT-{now.year}-{secrets.token_hex(3).upper()}"
        document["createdAt"] = now

        stored = self.documents.create(APPOINTMENTS_COLLECTION, document)
        logger.info(f"Appointment booked: {stored['confirmationId']} with vet {request.veterinarian_id}")
        return Appointment.model_validate(stored)

    def get(self, appointment_id: str) -> Appointment:
        document = self.documents.get(APPOINTMENTS_COLLECTION, appointment_id)
        if document is None:
            raise NotFoundError("Appointment", appointment_id)
        return Appointment.model_validate(document)


_appointment_service: Optional[AppointmentService] = None


def get_appointment_service() -> AppointmentService:
    global _appointment_service
    if _appointment_service is None:
        from app.services.document_store import get_document_store

        _appointment_service = AppointmentService(get_document_store())
    return _appointment_service
