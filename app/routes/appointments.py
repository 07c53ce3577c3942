"""
Appointment endpoints - book a veterinarian for an injured or sick animal.
"""

from typing import List
import logging

from fastapi import APIRouter, Depends, status

from app.models.appointment import Appointment, AppointmentCreate, Veterinarian
from app.services.appointment_service import AppointmentService, get_appointment_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/appointments", tags=["Appointments"])


@router.get("/veterinarians", response_model=List[Veterinarian])
def list_veterinarians(service: AppointmentService = Depends(get_appointment_service)):
    return service.list_veterinarians()


@router.post("", response_model=Appointment, status_code=status.HTTP_201_CREATED)
def book_appointment(request: AppointmentCreate, service: AppointmentService = Depends(get_appointment_service)):
    """
    Book an appointment.

    Raises:
        404: Unknown veterinarian
        422: Invalid fields or a preferred date in the past
    """
    appointment = service.book(request)
    logger.info(f"✅ Appointment booked: {appointment.confirmation_id}")
    return appointment


@router.get("/{appointment_id}", response_model=Appointment)
def get_appointment(appointment_id: str, service: AppointmentService = Depends(get_appointment_service)):
    return service.get(appointment_id)
