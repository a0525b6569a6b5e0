from datetime import date
from pydantic import BaseModel, Field
from typing import List, Optional

from app.models.enums import BookingStatus, Currency, RelationshipType

class CompanionIn(BaseModel):
    firstName: str = Field(min_length=1, max_length=100)
    lastName: str = Field(min_length=1, max_length=100)
    relationship: RelationshipType
    email: str
    phoneNumber: str = ""

class BookingCreate(BaseModel):
    userId: str
    destinationId: str
    travelDate: date
    returnDate: date
    totalAmount: float = Field(ge=0)
    bookingAmount: float = Field(ge=0)
    currency: Currency = Currency.NAIRA
    description: str = ""
    companions: List[CompanionIn] = []

class BookingUpdate(BaseModel):
    destinationId: Optional[str] = None
    travelDate: Optional[date] = None
    returnDate: Optional[date] = None
    totalAmount: Optional[float] = Field(default=None, ge=0)
    bookingAmount: Optional[float] = Field(default=None, ge=0)
    currency: Optional[Currency] = None
    description: Optional[str] = None
    status: Optional[BookingStatus] = None
    companions: Optional[List[CompanionIn]] = None

class BookingStatusIn(BaseModel):
    status: BookingStatus

class AddCompanionsIn(BaseModel):
    companions: List[CompanionIn] = Field(min_length=1)
