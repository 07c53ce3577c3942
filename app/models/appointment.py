"""
Models for veterinary appointment booking.
"""

from pydantic import BaseModel, Field
from datetime import date, datetime
from typing import Optional
from enum import Enum


class Urgency(str, Enum):
    ROUTINE = "routine"
    URGENT = "urgent"
    EMERGENCY = "emergency"


class Veterinarian(BaseModel):
    id: str
    name: str
    specialization: str
    clinic: str
    hours: str
    rating: float = Field(..., ge=0, le=5)
    experience: str


class AppointmentCreate(BaseModel):
    """Booking request from the doctor-booking screen."""
    veterinarian_id: str = Field(..., min_length=1, alias="veterinarianId")
    patient_name: str = Field(..., min_length=1, max_length=100, alias="patientName")
    contact_number: str = Field(..., min_length=1, max_length=30, alias="contactNumber")
    animal_type: str = Field(..., min_length=1, max_length=50, alias="animalType")
    urgency: Urgency = Urgency.ROUTINE
    symptoms: str = Field(..., min_length=1, max_length=2000)
    preferred_date: date = Field(..., alias="preferredDate")
    preferred_time: Optional[str] = Field(None, max_length=20, alias="preferredTime")

    class Config:
        populate_by_name = True
        str_strip_whitespace = True
        extra = "forbid"


class Appointment(BaseModel):
    id: str
    confirmation_id: str = Field(..., alias="confirmationId")
    veterinarian_id: str = Field(..., alias="veterinarianId")
    patient_name: str = Field(..., alias="patientName")
    contact_number: str = Field(..., alias="contactNumber")
    animal_type: str = Field(..., alias="animalType")
    urgency: Urgency
    symptoms: str
    preferred_date: date = Field(..., alias="preferredDate")
    preferred_time: Optional[str] = Field(None, alias="preferredTime")
    created_at: datetime = Field(..., alias="createdAt")

    class Config:
        populate_by_name = True
